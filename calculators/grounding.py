from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from core.errors import InvalidInputError
from core.models import ConductorMaterial, InsulationRating
from standards.nec_grounding import ground_wire_for_breaker, proportional_ground_wire, upsize_ratio
from standards.nec_tables import available_gauges, format_awg, get_ampacity

class GroundingMethod(Enum):
    BREAKER_SIZE = "breaker-size"
    CONDUCTOR_SIZE = "conductor-size"

class InstallationType(Enum):
    STANDARD = "standard"
    FLEXIBLE = "flexible"
    CORD = "cord"

@dataclass(frozen=True)
class GroundingResult:
    required_size: str
    method: str
    is_upsized: bool
    upsize_reason: Optional[str]
    notes: Tuple[str, ...]
    nec_reference: str

@dataclass
class GroundWireCalculator:
    """Equipment grounding conductor per NEC 250.122.

    ``minimum_conductor_size`` is the phase conductor ampacity alone would
    need; when the installed ``conductor_size`` is larger (voltage drop), the
    ground grows by the same circular-mil ratio (250.122(B)).
    """
    method: GroundingMethod = GroundingMethod.BREAKER_SIZE
    breaker_rating: int = 20
    conductor_size: str = "12"
    minimum_conductor_size: Optional[str] = None
    material: ConductorMaterial = ConductorMaterial.COPPER
    installation: InstallationType = InstallationType.STANDARD

    def _check_size(self, field_name: str, size: str) -> None:
        if size not in available_gauges(ConductorMaterial.COPPER):
            raise InvalidInputError(field_name, f"unsupported conductor size {size!r}")

    def calculate(self) -> GroundingResult:
        notes = []
        reference = "NEC 250.122"

        if self.method is GroundingMethod.BREAKER_SIZE:
            if self.breaker_rating <= 0:
                raise InvalidInputError("breaker_rating", "must be greater than 0")
            base = ground_wire_for_breaker(self.breaker_rating, self.material)
            method = f"Based on {self.breaker_rating}A overcurrent device"
        else:
            self._check_size("conductor_size", self.conductor_size)
            sized_from = self.minimum_conductor_size or self.conductor_size
            conductor_amps = get_ampacity(sized_from, ConductorMaterial.COPPER, InsulationRating.TEMP_75)
            base = ground_wire_for_breaker(conductor_amps, self.material)
            method = f"Based on {format_awg(sized_from)} conductor ({conductor_amps}A)"
            notes.append("Size based on 75°C copper ampacity (NEC 310.16)")

        required = base
        upsize_reason = None
        if self.minimum_conductor_size is not None:
            self._check_size("minimum_conductor_size", self.minimum_conductor_size)
            self._check_size("conductor_size", self.conductor_size)
            ratio = upsize_ratio(self.minimum_conductor_size, self.conductor_size)
            if ratio is not None and ratio > 1:
                required = proportional_ground_wire(base, self.minimum_conductor_size, self.conductor_size)
                upsize_reason = (f"Phase conductors upsized {ratio:.2f}x in area "
                                 f"({format_awg(self.minimum_conductor_size)} to {format_awg(self.conductor_size)})")
                reference += ", 250.122(B)"
                notes.append(f"Original ground size: {format_awg(base)}")
                notes.append("Upsize required due to phase conductor upsizing")

        if self.installation is InstallationType.FLEXIBLE:
            notes.append("For flexible cord: use stranded conductor")
            notes.append("Maximum length per manufacturer specs")
        elif self.installation is InstallationType.CORD:
            notes.append("Equipment grounding conductor must be same gauge as circuit conductors if in same cable")
            reference += ", 400.23"
        else:
            notes.append("Standard installation requirements apply")

        if self.method is GroundingMethod.BREAKER_SIZE and self.breaker_rating > 1200:
            notes.append("Over 1200A requires engineering supervision")
        if self.material is ConductorMaterial.ALUMINUM:
            notes.append("Aluminum grounding conductor - use AL-rated terminations")
        else:
            notes.append("Copper conductor assumed (aluminum requires larger size)")

        return GroundingResult(
            required_size=required,
            method=method,
            is_upsized=required != base,
            upsize_reason=upsize_reason,
            notes=tuple(notes),
            nec_reference=reference,
        )
