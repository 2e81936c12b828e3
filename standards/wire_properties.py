from core.errors import TableLookupError
from core.models import ConductorMaterial

# Conductor DC resistance at 20°C, ohms per 1000 ft, with area in circular mils
# Format: {SizeAWG: (area_cmil, R_copper, R_aluminum)}
WIRE_PROPERTIES = {
    "14":  (4110, 2.525, 4.148),
    "12":  (6530, 1.588, 2.609),
    "10":  (10380, 0.999, 1.641),
    "8":   (16510, 0.628, 1.032),
    "6":   (26240, 0.395, 0.649),
    "4":   (41740, 0.249, 0.409),
    "3":   (52620, 0.197, 0.324),
    "2":   (66360, 0.156, 0.257),
    "1":   (83690, 0.124, 0.204),
    "1/0": (105600, 0.0983, 0.162),
    "2/0": (133100, 0.0779, 0.128),
    "3/0": (167800, 0.0618, 0.102),
    "4/0": (211600, 0.0490, 0.0806),
    "250": (250000, 0.0431, 0.0708),
    "300": (300000, 0.0360, 0.0590),
    "350": (350000, 0.0308, 0.0505),
    "400": (400000, 0.0270, 0.0442),
    "500": (500000, 0.0216, 0.0354),
    "600": (600000, 0.0180, 0.0295),
    "750": (750000, 0.0144, 0.0236),
}

def get_wire_resistance(gauge: str, material: ConductorMaterial) -> float:
    """Ohms per 1000 ft of a single conductor."""
    try:
        _, r_cu, r_al = WIRE_PROPERTIES[gauge]
    except KeyError:
        raise TableLookupError(f"No resistance data for size {gauge!r}") from None
    return r_cu if material is ConductorMaterial.COPPER else r_al

def get_wire_area(gauge: str) -> int:
    try:
        return WIRE_PROPERTIES[gauge][0]
    except KeyError:
        raise TableLookupError(f"No area data for size {gauge!r}") from None
