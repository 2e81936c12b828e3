import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from core.calculator import CircuitCalculator
from core.converters import parse_phase
from core.errors import InvalidInputError
from core.models import Phase
from standards.nec_tables import next_standard_breaker

# --- Air conditioners (NEC Article 440) ---

@dataclass(frozen=True)
class ACUnit:
    name: str
    btu: int
    tonnage: float
    voltage: int
    amps: float
    description: str = ""

AC_UNIT_TYPES = [
    ACUnit("Window Unit - 5,000 BTU", 5000, 0.42, 115, 5.0, "Small room cooling"),
    ACUnit("Window Unit - 8,000 BTU", 8000, 0.67, 115, 7.5, "Medium room cooling"),
    ACUnit("Window Unit - 12,000 BTU", 12000, 1.0, 115, 11.0, "Large room cooling"),
    ACUnit("Split System - 1.5 Ton", 18000, 1.5, 240, 8.5, "Small home central air"),
    ACUnit("Split System - 2 Ton", 24000, 2.0, 240, 11.2, "Medium home central air"),
    ACUnit("Split System - 2.5 Ton", 30000, 2.5, 240, 14.0, "Large home central air"),
    ACUnit("Split System - 3 Ton", 36000, 3.0, 240, 16.8, "Large home central air"),
    ACUnit("Split System - 3.5 Ton", 42000, 3.5, 240, 19.6, "Very large home central air"),
    ACUnit("Split System - 4 Ton", 48000, 4.0, 240, 22.4, "Large home central air"),
    ACUnit("Split System - 5 Ton", 60000, 5.0, 240, 28.0, "Commercial/large residential"),
]

@dataclass(frozen=True)
class EfficiencyRating:
    name: str
    multiplier: float
    description: str = ""

EFFICIENCY_RATINGS = [
    EfficiencyRating("Standard Efficiency (10-12 SEER)", 1.15, "Older or basic units"),
    EfficiencyRating("High Efficiency (13-16 SEER)", 1.0, "Modern standard units"),
    EfficiencyRating("Very High Efficiency (17+ SEER)", 0.9, "Premium efficient units"),
    EfficiencyRating("Heat Pump Mode", 1.25, "Additional heating elements"),
]

def _line_voltage(nameplate_voltage: int) -> int:
    # 115/230 V nameplates run on 120/240 V branch circuits
    return 240 if nameplate_voltage >= 208 else 120

@dataclass
class AirConditionerCalculator(CircuitCalculator):
    unit: ACUnit = AC_UNIT_TYPES[4]
    efficiency: EfficiencyRating = EFFICIENCY_RATINGS[1]
    distance_ft: float = 75
    shared_circuit: bool = False
    include_disconnect: bool = True
    heat_strip_amps: Optional[float] = None

    name = "Air Conditioner"

    def compressor_current(self) -> float:
        return self.unit.amps * self.efficiency.multiplier

    def design_current(self) -> float:
        compressor = self.compressor_current()
        if self.heat_strip_amps:
            if self.heat_strip_amps < 0:
                raise InvalidInputError("heat_strip_amps", "must not be negative")
            # NEC 440.32/440.33: 125% of the largest load plus 100% of the rest
            larger = max(compressor, self.heat_strip_amps)
            smaller = min(compressor, self.heat_strip_amps)
            return larger * 1.25 + smaller
        return compressor * 1.25

    def circuit_voltage(self) -> float:
        return _line_voltage(self.unit.voltage)

    def advisories(self) -> List[str]:
        notes = []
        if self.unit.voltage == 115 and self.unit.amps > 10:
            notes.append("Consider 240V unit for improved efficiency on high-amperage loads")
        if not self.include_disconnect:
            notes.append("Disconnect required within sight of outdoor unit per NEC 440.14")
        if self.shared_circuit:
            notes.append("Verify circuit capacity for additional loads - dedicated circuit recommended")
        if self.distance_ft > 100 and self.unit.voltage == 115:
            notes.append("Long run on 115V may cause voltage drop issues - verify voltage at unit")
        if self.heat_strip_amps and self.heat_strip_amps > self.unit.amps:
            notes.append("Heat strip amperage exceeds AC compressor - verify nameplate ratings")
        if self.unit.tonnage >= 3.0:
            notes.append("Large AC units may require time delay fuses or HACR breakers")
        notes.extend([
            "Install disconnect within sight of outdoor condensing unit",
            "Verify minimum circuit ampacity (MCA) and maximum fuse size (MFS) on nameplate",
            "HACR-rated breaker required for motor protection",
        ])
        return notes

# --- Clothes dryers (NEC 220.54) ---

@dataclass(frozen=True)
class DryerType:
    name: str
    amperage: float
    voltage: int
    description: str = ""

DRYER_TYPES = [
    DryerType("Gas Dryer (Standard)", 15.0, 120, "Gas heating with electric motor and controls"),
    DryerType("Electric Dryer (Compact)", 24.0, 240, "Apartment/condo sized electric dryer"),
    DryerType("Electric Dryer (Standard)", 30.0, 240, "Standard home electric dryer"),
    DryerType("Electric Dryer (Large Capacity)", 30.0, 240, "Large capacity home dryer"),
    DryerType("Commercial Electric Dryer", 50.0, 240, "Commercial/multi-family applications"),
    DryerType("Heat Pump Dryer", 15.0, 240, "Energy efficient heat pump technology"),
]

@dataclass(frozen=True)
class OutletType:
    name: str
    description: str
    wires: str
    allowed_for_new_work: bool

OUTLET_TYPES = [
    OutletType("NEMA 14-30R (4-wire)", "Current standard for 30A electric dryers", "2 hot, 1 neutral, 1 ground", True),
    OutletType("NEMA 10-30R (3-wire)", "Older 3-wire outlet (not for new installations)", "2 hot, 1 neutral", False),
    OutletType("NEMA 14-50R (4-wire)", "For commercial 50A dryers", "2 hot, 1 neutral, 1 ground", True),
    OutletType("NEMA 5-20R (120V)", "For gas dryers", "1 hot, 1 neutral, 1 ground", True),
]

@dataclass(frozen=True)
class InstallationEnvironment:
    name: str
    temp_factor: float
    description: str = ""

INSTALLATION_ENVIRONMENTS = [
    InstallationEnvironment("Indoor Laundry Room", 1.0, "Standard indoor installation"),
    InstallationEnvironment("Garage/Unheated Space", 1.0, "Unheated but enclosed space"),
    InstallationEnvironment("Basement", 0.95, "Cooler basement installation"),
    InstallationEnvironment("Hot Utility Room", 1.15, "Near water heater or HVAC equipment"),
]

@dataclass
class DryerCalculator(CircuitCalculator):
    dryer: DryerType = DRYER_TYPES[2]
    environment: InstallationEnvironment = INSTALLATION_ENVIRONMENTS[0]
    distance_ft: float = 50
    existing_outlet: Optional[OutletType] = None

    name = "Dryer"

    def design_current(self) -> float:
        return self.dryer.amperage * self.environment.temp_factor

    def circuit_voltage(self) -> float:
        return _line_voltage(self.dryer.voltage)

    def recommended_outlet(self) -> OutletType:
        if self.dryer.voltage == 120:
            return OUTLET_TYPES[3]
        if self.dryer.amperage >= 50:
            return OUTLET_TYPES[2]
        return OUTLET_TYPES[0]

    def advisories(self) -> List[str]:
        notes = []
        if self.dryer.voltage == 240 and self.dryer.amperage == 30:
            notes.append("Use NEMA 14-30R outlet for new installations (4-wire with ground)")
        if self.existing_outlet is not None and not self.existing_outlet.allowed_for_new_work:
            notes.append("Existing 3-wire outlet should be upgraded to 4-wire per current code")
        if self.environment.temp_factor > 1.0:
            notes.append("High temperature environment may require ampacity derating")
        if self.distance_ft > 100:
            notes.append("Long runs may cause voltage drop - verify dryer performance")
        if "Gas" in self.dryer.name:
            notes.append("Gas dryer also requires proper gas line installation")
            notes.append("Ensure adequate combustion air supply")
        if "Commercial" in self.dryer.name:
            notes.append("Commercial dryers may require hardwired connection")
        notes.extend([
            "Install dedicated circuit - no other loads permitted",
            "Use proper dryer cord rated for amperage",
            "Ensure proper grounding and GFCI if required by local code",
        ])
        return notes

# --- Ranges and cooktops (NEC 220.55) ---

@dataclass(frozen=True)
class RangeType:
    name: str
    nameplate: float
    voltage: int
    kw: float
    description: str = ""

RANGE_TYPES = [
    RangeType("Small Electric Range", 20.0, 240, 4.8, "Compact apartment-size range"),
    RangeType("Standard Electric Range", 40.0, 240, 9.6, "Most common residential range"),
    RangeType("Large Electric Range", 50.0, 240, 12.0, "Large residential range"),
    RangeType("Commercial-Style Range", 60.0, 240, 14.4, "High-end residential range"),
    RangeType("Electric Cooktop (4-burner)", 30.0, 240, 7.2, "Separate cooktop installation"),
    RangeType("Induction Cooktop", 35.0, 240, 8.4, "Energy efficient induction"),
    RangeType("Gas Range", 15.0, 120, 1.8, "Gas cooking with electric ignition"),
    RangeType("Dual Fuel Range", 45.0, 240, 10.8, "Gas cooktop, electric oven"),
]

@dataclass(frozen=True)
class DemandFactor:
    name: str
    factor: float
    description: str = ""

DEMAND_FACTORS = [
    DemandFactor("Single Range (Standard)", 0.8, "NEC Table 220.55 - 80% demand for most ranges"),
    DemandFactor("High-End Range", 1.0, "No demand factor for premium units"),
    DemandFactor("Cooktop Only", 0.8, "80% demand factor for cooktops"),
]

RANGE_CONNECTIONS = ["Hardwired", "Outlet (NEMA 14-50)", "Outlet (NEMA 14-40)", "Outlet (NEMA 10-50)"]

@dataclass
class RangeCalculator(CircuitCalculator):
    range_type: RangeType = RANGE_TYPES[1]
    demand: DemandFactor = DEMAND_FACTORS[0]
    distance_ft: float = 50
    connection: str = RANGE_CONNECTIONS[0]
    existing_breaker: Optional[int] = None

    name = "Range"

    def design_current(self) -> float:
        return self.range_type.nameplate * self.demand.factor

    def circuit_voltage(self) -> float:
        return _line_voltage(self.range_type.voltage)

    def recommended_breaker(self) -> int:
        demand_load = math.ceil(round(self.design_current() * 100, 6)) / 100
        if demand_load <= 30:
            return 40
        if demand_load <= 40:
            return 50
        if demand_load <= 50:
            return 60
        return math.ceil(demand_load / 10) * 10 + 10

    def overcurrent_device_rating(self) -> Optional[int]:
        return self.recommended_breaker()

    def recommended_outlet(self) -> str:
        breaker = self.recommended_breaker()
        if self.range_type.voltage == 120:
            return "NEMA 5-20R (120V, 20A)"
        if breaker >= 60:
            return "NEMA 14-50R (240V, 50A) - Hardwired preferred"
        if breaker >= 50:
            return "NEMA 14-50R (240V, 50A)"
        return "NEMA 14-40R (240V, 40A) or hardwired"

    def advisories(self) -> List[str]:
        breaker = self.recommended_breaker()
        notes = []
        if self.existing_breaker is not None and self.existing_breaker < breaker:
            notes.append(f"Existing {self.existing_breaker}A breaker insufficient - need {breaker}A minimum")
        if "NEMA 10-50" in self.connection or "NEMA 14-40" in self.connection:
            notes.append("Consider upgrading to NEMA 14-50 outlet for better compatibility")
        if self.range_type.voltage == 240 and self.design_current() > 40:
            notes.append("High-amperage ranges often require hardwired connection")
        if self.distance_ft > 75:
            notes.append("Long runs may affect range performance - verify voltage at appliance")
        if "Gas" in self.range_type.name or "Dual Fuel" in self.range_type.name:
            notes.append("Gas ranges require proper gas line installation")
            notes.append("Ensure adequate combustion air supply")
        if "Induction" in self.range_type.name:
            notes.append("Induction cooktops may require dedicated EMI filtering")
        notes.extend([
            "Install dedicated circuit - no other loads permitted",
            "Ensure proper grounding per NEC requirements",
            f"Use {breaker}A breaker minimum for this range",
        ])
        return notes

# --- Hot tubs and spas (NEC Article 680) ---

@dataclass(frozen=True)
class HotTubSize:
    name: str
    amps: int
    gallons: int

HOT_TUB_SIZES = [
    HotTubSize("Small (2-3 person)", 30, 300),
    HotTubSize("Medium (4-5 person)", 40, 400),
    HotTubSize("Large (6+ person)", 50, 500),
    HotTubSize("Extra Large (8+ person)", 60, 600),
]

@dataclass
class HotTubCalculator(CircuitCalculator):
    size: HotTubSize = HOT_TUB_SIZES[2]
    distance_ft: float = 50

    name = "Hot Tub"

    def design_current(self) -> float:
        return self.size.amps

    def circuit_voltage(self) -> float:
        return 240

    def overcurrent_device_rating(self) -> Optional[int]:
        return next_standard_breaker(self.size.amps)

    def advisories(self) -> List[str]:
        return [
            "GFCI protection required (NEC 680.44)",
            "Disconnect required within sight, at least 5 ft from the water (NEC 680.12)",
            "Bonding wire required - #8 AWG solid copper for metal parts within 5 ft (NEC 680.26)",
        ]

# --- EV supply equipment (NEC Article 625) ---

@dataclass(frozen=True)
class EVChargerPreset:
    name: str
    amps: int
    voltage: int

EV_CHARGER_PRESETS = [
    EVChargerPreset("Level 1 (Standard Outlet)", 12, 120),
    EVChargerPreset("Level 2 - 16A", 16, 240),
    EVChargerPreset("Level 2 - 24A", 24, 240),
    EVChargerPreset("Level 2 - 32A", 32, 240),
    EVChargerPreset("Level 2 - 40A (Tesla Gen 2)", 40, 240),
    EVChargerPreset("Level 2 - 48A (Tesla Wall Connector)", 48, 240),
    EVChargerPreset("Level 2 - 50A", 50, 240),
    EVChargerPreset("Level 2 - 60A", 60, 240),
    EVChargerPreset("Level 2 - 80A (Commercial)", 80, 240),
]

EV_BREAKER_SIZES = [15, 20, 30, 40, 50, 60, 70, 80, 90, 100]

@dataclass
class EVChargerCalculator(CircuitCalculator):
    charger: EVChargerPreset = EV_CHARGER_PRESETS[4]
    distance_ft: float = 50

    name = "EV Charger"

    def design_current(self) -> float:
        # NEC 625.41: EVSE is a continuous load, 125% of the charger rating
        return math.ceil(self.charger.amps * 1.25)

    def circuit_voltage(self) -> float:
        return self.charger.voltage

    def breaker_size(self) -> int:
        circuit_amps = self.design_current()
        for size in EV_BREAKER_SIZES:
            if circuit_amps <= size:
                return size
        return EV_BREAKER_SIZES[-1]

    def overcurrent_device_rating(self) -> Optional[int]:
        return self.breaker_size()

    def charging_power_kw(self) -> float:
        return round(self.charger.voltage * self.charger.amps / 1000, 1)

    def advisories(self) -> List[str]:
        notes = [f"A {self.charger.amps}A charger requires a {self.design_current()}A circuit "
                 f"with a {self.breaker_size()}A breaker (NEC 625.41)"]
        if self.distance_ft > 100:
            notes.append("Consider installing a subpanel closer to the charger for long runs")
        if self.charger.amps >= 48:
            notes.append("High-power chargers may require electrical service upgrade")
        return notes

# --- Electric welders (NEC Article 630) ---

class WelderType(Enum):
    ARC_TRANSFORMER = "Transformer Arc Welder"
    ARC_RECTIFIER = "Rectifier Arc Welder"
    MOTOR_GENERATOR = "Motor-Generator Arc Welder"
    RESISTANCE = "Resistance Welder"
    TIG = "TIG Welder"
    MIG = "MIG/MAG Welder"
    STICK = "Stick/SMAW Welder"
    PLASMA = "Plasma Cutter"

# Transformer, rectifier and inverter arc welders share Table 630.11(A)
ARC_WELDERS = (WelderType.ARC_TRANSFORMER, WelderType.ARC_RECTIFIER,
               WelderType.TIG, WelderType.MIG, WelderType.STICK)

# NEC Table 630.11(A) - duty cycle multipliers for arc welders
# Format: (Duty cycle upper bound %, Multiplier)
ARC_WELDER_MULTIPLIERS = [
    (20, 0.45),
    (30, 0.55),
    (40, 0.63),
    (50, 0.71),
    (60, 0.78),
    (70, 0.84),
    (80, 0.89),
    (90, 0.95),
    (100, 1.0),
]

@dataclass(frozen=True)
class WelderPreset:
    name: str
    welder_type: WelderType
    kva: float
    voltage: int
    phase: Phase
    duty_cycle: int

WELDER_PRESETS = [
    WelderPreset("Lincoln Ranger 225", WelderType.MOTOR_GENERATOR, 11.5, 240, Phase.SINGLE, 60),
    WelderPreset("Miller Syncrowave 200", WelderType.TIG, 7.8, 208, Phase.SINGLE, 60),
    WelderPreset("Miller XMT 350", WelderType.ARC_RECTIFIER, 18.2, 480, Phase.THREE, 100),
    WelderPreset("Lincoln PowerWave 455M", WelderType.MIG, 23.5, 480, Phase.THREE, 60),
    WelderPreset("ESAB Rebel EMP 215ic", WelderType.MIG, 5.9, 240, Phase.SINGLE, 30),
    WelderPreset("Hypertherm Powermax85", WelderType.PLASMA, 12.0, 208, Phase.SINGLE, 100),
    WelderPreset("Resistance Spot Welder", WelderType.RESISTANCE, 75, 480, Phase.THREE, 50),
]

@dataclass
class WelderCalculator(CircuitCalculator):
    """Welder supply conductors sized on the nameplate input current times the
    NEC 630 duty-cycle multiplier."""
    welder_type: WelderType = WelderType.ARC_TRANSFORMER
    kva: float = 15
    voltage: int = 240
    phase: Phase = Phase.SINGLE
    duty_cycle: int = 60
    distance_ft: float = 50

    name = "Welder"

    @classmethod
    def from_preset(cls, preset: WelderPreset, distance_ft: float = 50) -> "WelderCalculator":
        return cls(welder_type=preset.welder_type, kva=preset.kva, voltage=preset.voltage,
                   phase=preset.phase, duty_cycle=preset.duty_cycle, distance_ft=distance_ft)

    def input_current(self) -> float:
        if self.kva <= 0:
            raise InvalidInputError("kva", "must be greater than 0")
        if self.voltage <= 0:
            raise InvalidInputError("voltage", "must be greater than 0")
        if parse_phase(self.phase) is Phase.THREE:
            return self.kva * 1000 / (self.voltage * math.sqrt(3))
        return self.kva * 1000 / self.voltage

    def duty_cycle_multiplier(self) -> float:
        if not 0 < self.duty_cycle <= 100:
            raise InvalidInputError("duty_cycle", "must be between 0 and 100 percent")
        if self.welder_type in ARC_WELDERS:
            for upper, factor in ARC_WELDER_MULTIPLIERS:
                if self.duty_cycle <= upper:
                    return factor
        if self.welder_type is WelderType.RESISTANCE:
            # NEC 630.31
            return 0.7 if self.duty_cycle <= 50 else 1.0
        # Motor-generator sets and plasma cutters use the full nameplate current
        return 1.0

    def nec_reference(self) -> str:
        if self.welder_type is WelderType.MOTOR_GENERATOR:
            return "NEC 630.12"
        if self.welder_type is WelderType.RESISTANCE:
            return "NEC 630.31"
        return "NEC 630.11(A)"

    def design_current(self) -> float:
        return self.input_current() * self.duty_cycle_multiplier()

    def circuit_voltage(self) -> float:
        return self.voltage

    def circuit_phase(self) -> Phase:
        return parse_phase(self.phase)

    def advisories(self) -> List[str]:
        notes = [f"Input current {round(self.input_current(), 2)}A x {self.duty_cycle_multiplier()} "
                 f"for {self.duty_cycle}% duty cycle ({self.nec_reference()})"]
        if self.welder_type is WelderType.MOTOR_GENERATOR:
            notes.append("Motor-generator welders are sized on full nameplate current")
        if self.welder_type is WelderType.PLASMA:
            notes.append("Plasma cutters are typically rated at 100% duty cycle")
        if self.distance_ft > 100:
            notes.append("Consider voltage drop for long runs")
        notes.extend([
            "GFCI protection may be required (NEC 630.12)",
            "Disconnect required within sight of welder",
            "Equipment grounding conductor required",
            "Consider arc flash protection requirements",
        ])
        return notes
