import math
from dataclasses import dataclass
from typing import List, Optional

from core.calculator import CircuitCalculator
from core.models import Phase
from standards.motor_tables import (MotorType, ProtectionType, motor_full_load_current,
                                    protection_percent)
from standards.nec_tables import next_standard_breaker

CONTROL_CIRCUIT_SIZE = "14"
CONTROL_CIRCUIT_PROTECTION = 15

@dataclass
class MotorCircuitCalculator(CircuitCalculator):
    """Motor branch circuit per NEC Article 430.

    Conductors are sized at 125% of the table full-load current (430.22), not
    the nameplate. The short-circuit and ground-fault device comes from the
    Table 430.52 percentage, rounded to the next standard rating (430.52(C)(1)
    Exception No. 1), and also keys the 250.122 grounding conductor.
    """
    motor_type: MotorType = MotorType.THREE_PHASE
    voltage: int = 460
    horsepower: float = 10
    protection: ProtectionType = ProtectionType.TIME_DELAY_FUSE
    distance_ft: float = 100

    name = "Motor Circuit"

    def full_load_current(self) -> float:
        return motor_full_load_current(self.motor_type, self.voltage, self.horsepower)

    def design_current(self) -> float:
        return self.full_load_current() * 1.25

    def circuit_voltage(self) -> float:
        return self.voltage

    def circuit_phase(self) -> Phase:
        if self.motor_type in (MotorType.SINGLE_PHASE, MotorType.DC):
            return Phase.SINGLE
        return Phase.THREE

    def overload_protection(self) -> int:
        """NEC 430.32: overload trip at 115% of motor current, rounded half up."""
        return math.floor(self.full_load_current() * 1.15 + 0.5)

    def short_circuit_protection(self) -> int:
        """Maximum device rating from Table 430.52."""
        pct = protection_percent(self.motor_type, self.protection)
        return math.ceil(round(self.full_load_current() * pct / 100, 6))

    def protective_device_rating(self) -> int:
        return next_standard_breaker(self.short_circuit_protection())

    def overcurrent_device_rating(self) -> Optional[int]:
        return self.protective_device_rating()

    def disconnect_rating(self) -> int:
        """NEC 430.110: disconnecting means rated at least 115% of full-load current."""
        return math.ceil(round(self.full_load_current() * 1.15, 6))

    def advisories(self) -> List[str]:
        notes = [
            f"Full-load current {self.full_load_current():g}A taken from NEC tables, not the nameplate (NEC 430.6(A))",
            f"Overload protection: {self.overload_protection()}A (NEC 430.32)",
            f"Short-circuit protection: {self.short_circuit_protection()}A maximum, "
            f"{self.protective_device_rating()}A standard device (NEC 430.52)",
            f"Disconnect rated at least {self.disconnect_rating()}A (NEC 430.110)",
            f"Control circuit: #{CONTROL_CIRCUIT_SIZE} AWG protected at {CONTROL_CIRCUIT_PROTECTION}A (NEC 430.72)",
        ]
        if self.protection is ProtectionType.INSTANT_TRIP_CB:
            notes.append("Instantaneous trip breakers only permitted as part of a listed combination controller")
        return notes

# --- Submersible and jet well pumps ---

@dataclass(frozen=True)
class WellPumpType:
    name: str
    horsepower: float
    voltage: int
    description: str = ""

WELL_PUMP_TYPES = [
    WellPumpType("Shallow Well - 1/3 HP", 0.33, 115, "Wells up to 25 feet deep"),
    WellPumpType("Shallow Well - 1/2 HP", 0.5, 115, "Wells up to 25 feet deep"),
    WellPumpType("Shallow Well - 3/4 HP", 0.75, 230, "High capacity shallow wells"),
    WellPumpType("Deep Well - 1/2 HP", 0.5, 230, "Wells 25-150 feet deep"),
    WellPumpType("Deep Well - 3/4 HP", 0.75, 230, "Wells 25-200 feet deep"),
    WellPumpType("Deep Well - 1 HP", 1, 230, "Wells 100-250 feet deep"),
    WellPumpType("Deep Well - 1.5 HP", 1.5, 230, "Wells 200-350 feet deep"),
    WellPumpType("Deep Well - 2 HP", 2, 230, "Wells 300+ feet deep"),
]

@dataclass(frozen=True)
class ControlBox:
    name: str
    multiplier: float
    description: str = ""

CONTROL_BOXES = [
    ControlBox("2-Wire Control Box", 1.0, "Standard submersible pump control"),
    ControlBox("3-Wire Control Box", 1.15, "With start relay and capacitor"),
    ControlBox("VFD (Variable Frequency Drive)", 1.25, "Soft start and speed control"),
]

@dataclass
class WellPumpCalculator(CircuitCalculator):
    pump: WellPumpType = WELL_PUMP_TYPES[5]
    control_box: ControlBox = CONTROL_BOXES[1]
    distance_ft: float = 100
    underground: bool = True
    well_depth_ft: float = 150

    name = "Well Pump"

    def motor_current(self) -> float:
        return motor_full_load_current(MotorType.SINGLE_PHASE, self.pump.voltage, self.pump.horsepower)

    def design_current(self) -> float:
        return self.motor_current() * self.control_box.multiplier * 1.25

    def circuit_voltage(self) -> float:
        return 240 if self.pump.voltage == 230 else 120

    def advisories(self) -> List[str]:
        notes = []
        if self.underground and self.distance_ft > 100:
            notes.append("Consider direct burial rated THWN-2 or USE-2 conductors")
        if self.well_depth_ft > 200 and self.pump.horsepower < 1.0:
            notes.append("Verify pump capacity is adequate for well depth")
        if self.pump.voltage == 115 and self.distance_ft > 50:
            notes.append("Consider 230V motor for improved efficiency on long runs")
        if "VFD" in self.control_box.name:
            notes.append("VFD may require additional input filtering for EMI compliance")
        notes.extend([
            "Install disconnect switch within sight of control box",
            "Bond well casing to electrical grounding system",
            "Verify local code requirements for well pump installations",
        ])
        return notes
