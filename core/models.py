from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

class ConductorMaterial(Enum):
    COPPER = "copper"
    ALUMINUM = "aluminum"

    @property
    def label(self) -> str:
        return self.value.capitalize()

class Phase(Enum):
    SINGLE = "single"
    THREE = "three"

class InsulationRating(Enum):
    TEMP_60 = 60
    TEMP_75 = 75
    TEMP_90 = 90

class SizingStatus(Enum):
    COMPLIANT = "compliant"
    VOLTAGE_DROP_EXCEEDED = "voltage_drop_exceeded"  # largest gauge still over the limit
    AMPACITY_EXCEEDED = "ampacity_exceeded"          # no single conductor carries the load

@dataclass(frozen=True)
class ConductorGaugeEntry:
    gauge: str
    material: ConductorMaterial
    temperature_rating: InsulationRating
    base_ampacity: int

@dataclass(frozen=True)
class CircuitSpecification:
    current: float
    distance_ft: float  # one-way
    voltage: float
    phase: Phase = Phase.SINGLE
    material: ConductorMaterial = ConductorMaterial.COPPER
    temperature_rating: Optional[InsulationRating] = None  # None -> settings default (75C terminals)
    ambient_temp_c: float = 30.0
    current_carrying_conductors: int = 3
    overcurrent_device_rating: Optional[int] = None
    max_voltage_drop_percent: Optional[float] = None

@dataclass(frozen=True)
class VoltageDropResult:
    voltage_drop: float
    voltage_drop_percent: float
    voltage_at_load: float
    is_acceptable: bool
    recommendation: str

@dataclass(frozen=True)
class WireSizeResult:
    awg: str
    material: ConductorMaterial
    ampacity: int
    adjusted_ampacity: float
    voltage_drop: float
    voltage_drop_percent: float
    voltage_at_load: float
    ground_wire: str
    overcurrent_device_rating: int
    status: SizingStatus
    warnings: Tuple[str, ...] = ()
    nec_reference: str = ""
    recommendation: str = ""

    @property
    def is_compliant(self) -> bool:
        return self.status is SizingStatus.COMPLIANT

@dataclass(frozen=True)
class CircuitCalculation:
    """Output of a domain calculator: one engine result per material plus
    the calculator's own advisory notes, kept apart from the engine warnings."""
    name: str
    design_current: float
    copper: WireSizeResult
    aluminum: WireSizeResult
    advisories: Tuple[str, ...] = field(default_factory=tuple)

    def result_for(self, material: ConductorMaterial) -> WireSizeResult:
        return self.copper if material is ConductorMaterial.COPPER else self.aluminum

    def warnings_for(self, material: ConductorMaterial) -> Tuple[str, ...]:
        return self.result_for(material).warnings + self.advisories
