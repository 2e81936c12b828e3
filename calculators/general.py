from dataclasses import dataclass
from typing import Dict, List, Optional

from core.calculator import CircuitCalculator
from core.config import DEFAULT_SETTINGS, SizingSettings
from core.converters import parse_phase, round_up_hundredth
from core.errors import InvalidInputError
from core.models import ConductorMaterial, Phase, VoltageDropResult
from standards.nec_logic import NECLogic
from standards.nec_tables import BREAKER_RATINGS, next_standard_breaker

@dataclass
class WireSizeCalculator(CircuitCalculator):
    """Generic tool: amps, distance, voltage and phase straight from the form."""
    amps: float
    distance_ft: float
    voltage: float = 240
    phase: Phase = Phase.SINGLE

    name = "Wire Size"

    def design_current(self) -> float:
        return self.amps

    def circuit_voltage(self) -> float:
        return self.voltage

    def circuit_phase(self) -> Phase:
        return parse_phase(self.phase)

@dataclass
class VoltageDropCalculator:
    awg: str
    distance_ft: float
    amps: float
    voltage: float = 240
    phase: Phase = Phase.SINGLE

    def calculate(self, settings: Optional[SizingSettings] = None) -> Dict[ConductorMaterial, VoltageDropResult]:
        settings = settings or DEFAULT_SETTINGS
        if self.amps <= 0:
            raise InvalidInputError("amps", "must be greater than 0")
        if self.distance_ft < 0:
            raise InvalidInputError("distance_ft", "must not be negative")
        if self.voltage <= 0:
            raise InvalidInputError("voltage", "must be greater than 0")
        return {
            material: NECLogic.calculate_voltage_drop(
                self.awg, self.distance_ft, self.amps, self.voltage, material, parse_phase(self.phase),
                max_percent=settings.max_voltage_drop_percent,
                reference_length_ft=settings.reference_length_ft,
                parallel_warning_percent=settings.parallel_warning_percent,
            )
            for material in ConductorMaterial
        }

@dataclass(frozen=True)
class LoadType:
    name: str
    factor: float
    continuous: bool
    description: str = ""

LOAD_TYPES = [
    LoadType("Resistive Load", 1.0, True, "Heating elements, incandescent lighting"),
    LoadType("Inductive Load (Motor)", 1.25, False, "Motors, transformers, inductors"),
    LoadType("Capacitive Load", 1.1, False, "Power factor correction, electronic loads"),
    LoadType("Electronic Load", 1.15, True, "Switching power supplies, VFDs"),
    LoadType("Mixed Commercial Load", 1.2, False, "Typical commercial building mix"),
]

@dataclass
class CircuitBreakerCalculator(CircuitCalculator):
    load_current: float
    load_type: LoadType = LOAD_TYPES[0]
    voltage: float = 240
    phase: Phase = Phase.SINGLE
    distance_ft: float = 100
    motor_fla: Optional[float] = None

    name = "Circuit Breaker"

    def breaker_size(self) -> int:
        required = self.load_current * self.load_type.factor
        if self.motor_fla:
            # NEC 430.52: inverse time breaker up to 250% of FLA
            required = max(required, self.motor_fla * 2.5)
        return next_standard_breaker(round_up_hundredth(required))

    def design_current(self) -> float:
        if self.load_current <= 0:
            raise InvalidInputError("load_current", "must be greater than 0")
        conductor_amps = self.load_current
        # NEC 210.19(A)(1): 125% of continuous load
        if self.load_type.continuous:
            conductor_amps *= 1.25
        if self.motor_fla:
            # NEC 430.22: 125% of motor FLA
            conductor_amps = max(conductor_amps, self.motor_fla * 1.25)
        else:
            # NEC 240.4: conductor protected by the breaker
            conductor_amps = max(conductor_amps, self.breaker_size())
        return round_up_hundredth(conductor_amps)

    def circuit_voltage(self) -> float:
        return self.voltage

    def circuit_phase(self) -> Phase:
        return parse_phase(self.phase)

    def overcurrent_device_rating(self) -> Optional[int]:
        return self.breaker_size()

    def advisories(self) -> List[str]:
        notes = ["Conductor must be rated for breaker size minimum (NEC 240.4)"]
        if self.motor_fla:
            notes.append("Motor loads require 125% conductor sizing per NEC 430.22")
        if self.load_type.continuous:
            notes.append("125% safety factor applied for continuous loads (NEC 210.19(A)(1))")
        if self.breaker_size() == BREAKER_RATINGS[-1] and self.load_current * self.load_type.factor > BREAKER_RATINGS[-1]:
            notes.append("Load exceeds the largest standard breaker rating - engineering review required")
        return notes
