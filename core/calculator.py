from abc import ABC, abstractmethod
from typing import List, Optional

from core.config import SizingSettings
from core.converters import round_up_hundredth
from core.models import CircuitCalculation, CircuitSpecification, ConductorMaterial, Phase
from standards.nec_logic import NECLogic

class CircuitCalculator(ABC):
    """Front end that turns an equipment selection into a circuit specification.

    Subclasses are dataclasses holding the form inputs; they must provide a
    ``distance_ft`` field. The engine is called once per conductor material.
    """

    name = "Circuit"

    @abstractmethod
    def design_current(self) -> float:
        """Required conductor ampacity after the domain multipliers (125%, demand factor...)."""
        pass

    @abstractmethod
    def circuit_voltage(self) -> float:
        """Nominal voltage used for the voltage-drop check."""
        pass

    def circuit_phase(self) -> Phase:
        return Phase.SINGLE

    def overcurrent_device_rating(self) -> Optional[int]:
        """Upstream breaker/fuse rating if the calculator fixes one; None lets the engine pick."""
        return None

    def advisories(self) -> List[str]:
        """Domain notes appended after the engine's own warnings."""
        return []

    def circuit_specification(self, material: ConductorMaterial) -> CircuitSpecification:
        return CircuitSpecification(
            current=round_up_hundredth(self.design_current()),
            distance_ft=self.distance_ft,
            voltage=self.circuit_voltage(),
            phase=self.circuit_phase(),
            material=material,
            overcurrent_device_rating=self.overcurrent_device_rating(),
        )

    def calculate(self, settings: Optional[SizingSettings] = None) -> CircuitCalculation:
        """Performs the full calculation for both conductor materials."""
        copper = NECLogic.calculate_wire_size(self.circuit_specification(ConductorMaterial.COPPER), settings)
        aluminum = NECLogic.calculate_wire_size(self.circuit_specification(ConductorMaterial.ALUMINUM), settings)
        return CircuitCalculation(
            name=self.name,
            design_current=round_up_hundredth(self.design_current()),
            copper=copper,
            aluminum=aluminum,
            advisories=tuple(self.advisories()),
        )
