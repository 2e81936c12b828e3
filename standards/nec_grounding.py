import math
from typing import List, Optional

from core.errors import InvalidInputError, TableLookupError
from core.models import ConductorMaterial
from standards.wire_properties import WIRE_PROPERTIES

# NEC Table 250.122 - Minimum Size Equipment Grounding Conductors
# Format: (Rating or setting of overcurrent device not exceeding (A), Copper, Aluminum)
NEC_250_122 = [
    (15, "14", "12"),
    (20, "12", "10"),
    (30, "10", "8"),
    (40, "10", "8"),
    (60, "10", "8"),
    (100, "8", "6"),
    (200, "6", "4"),
    (300, "4", "2"),
    (400, "3", "1"),
    (500, "2", "1/0"),
    (600, "1", "2/0"),
    (800, "1/0", "3/0"),
    (1000, "2/0", "4/0"),
    (1200, "3/0", "250"),
    (1600, "4/0", "350"),
    (2000, "250", "400"),
    (2500, "350", "600"),
    (3000, "400", "600"),
    (4000, "500", "750"),
    (5000, "700", "1200"),
    (6000, "800", "1200"),
]

# Sizes that can appear as grounding conductors, ascending, with area in circular mils
GROUND_CONDUCTOR_AREAS = {size: props[0] for size, props in WIRE_PROPERTIES.items()}
GROUND_CONDUCTOR_AREAS.update({"700": 700000, "800": 800000, "1000": 1000000, "1200": 1200000})
GROUND_SIZE_ORDER: List[str] = sorted(GROUND_CONDUCTOR_AREAS, key=GROUND_CONDUCTOR_AREAS.get)

def ground_wire_for_breaker(rating: float, material: ConductorMaterial = ConductorMaterial.COPPER) -> str:
    """Table 250.122 lookup keyed by the upstream overcurrent device rating."""
    if rating <= 0:
        raise InvalidInputError("overcurrent_device_rating", "must be greater than 0")
    column = 1 if material is ConductorMaterial.COPPER else 2
    for row in NEC_250_122:
        if rating <= row[0]:
            return row[column]
    # Largest row; above 6000 A the table has no entry
    return NEC_250_122[-1][column]

def proportional_ground_wire(ground: str, minimum_phase: str, actual_phase: str) -> str:
    """NEC 250.122(B): when ungrounded conductors are increased in size, the
    grounding conductor grows by the same ratio of circular mil area. It never
    needs to exceed the ungrounded conductor itself."""
    try:
        ground_area = GROUND_CONDUCTOR_AREAS[ground]
        min_area = GROUND_CONDUCTOR_AREAS[minimum_phase]
        actual_area = GROUND_CONDUCTOR_AREAS[actual_phase]
    except KeyError as exc:
        raise TableLookupError(f"No area data for size {exc.args[0]!r}") from None

    if actual_area <= min_area:
        return ground

    required_area = math.ceil(ground_area * actual_area / min_area)
    for size in GROUND_SIZE_ORDER:
        area = GROUND_CONDUCTOR_AREAS[size]
        if area >= required_area:
            return size if area <= actual_area else actual_phase
    return actual_phase

def upsize_ratio(minimum_phase: str, actual_phase: str) -> Optional[float]:
    if minimum_phase == actual_phase:
        return None
    return GROUND_CONDUCTOR_AREAS[actual_phase] / GROUND_CONDUCTOR_AREAS[minimum_phase]
