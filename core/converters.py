import math
from typing import Union

from core.errors import InvalidInputError
from core.models import ConductorMaterial, Phase

WATTS_PER_HP = 746.0

def round_up_hundredth(amps: float) -> float:
    """Ceiling to the next 0.01 A. The inner round() drops float noise such as
    14.000000000000002 so exact values are not bumped a full step."""
    return math.ceil(round(amps * 100, 6)) / 100

def parse_phase(value: Union[str, int, Phase]) -> Phase:
    if isinstance(value, Phase):
        return value
    text = str(value).strip().lower()
    if text in ("1", "single", "single-phase", "1ph"):
        return Phase.SINGLE
    if text in ("3", "three", "three-phase", "3ph"):
        return Phase.THREE
    raise InvalidInputError("phase", f"unsupported phase {value!r}")

def parse_material(value: Union[str, ConductorMaterial]) -> ConductorMaterial:
    if isinstance(value, ConductorMaterial):
        return value
    text = str(value).strip().lower()
    if text in ("cu", "copper"):
        return ConductorMaterial.COPPER
    if text in ("al", "aluminum", "aluminium"):
        return ConductorMaterial.ALUMINUM
    raise InvalidInputError("material", f"unsupported material {value!r}")

def current_from_power(val: float, unit: str, voltage: float, phase: Phase, pf: float = 1.0) -> float:
    """
    Converts a load rating to line current in amps.
    Accepts A, W, kW, MW, HP, VA, kVA and MVA.
    """
    if voltage <= 0:
        raise InvalidInputError("voltage", "must be greater than 0")
    if not 0 < pf <= 1:
        raise InvalidInputError("power_factor", "must be in (0, 1]")

    unit = unit.strip().upper()
    factor = math.sqrt(3) if phase is Phase.THREE else 1.0

    # 1. Current
    if unit == "A":
        return val

    # 2. Real power
    if unit == "W": watts = val
    elif unit == "KW": watts = val * 1000.0
    elif unit == "MW": watts = val * 1000000.0
    elif unit == "HP": watts = val * WATTS_PER_HP
    # 3. Apparent power, no power factor
    elif unit == "VA": return val / (voltage * factor)
    elif unit == "KVA": return val * 1000.0 / (voltage * factor)
    elif unit == "MVA": return val * 1000000.0 / (voltage * factor)
    else:
        raise InvalidInputError("unit", f"unsupported power unit {unit!r}")

    return watts / (voltage * factor * pf)

def convert_length_unit(val: float, unit: str) -> float:
    """Returns length in feet."""
    unit = unit.strip().lower()
    if unit in ["ft", "feet", "foot"]: return val
    if unit in ["m", "meter", "meters", "metre", "metres"]: return val / 0.3048
    if unit in ["yd", "yard", "yards"]: return val * 3.0
    raise InvalidInputError("length_unit", f"unsupported length unit {unit!r}")
