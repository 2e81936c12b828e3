from typing import Dict, List, Optional

from core.errors import InvalidInputError, TableLookupError
from core.models import ConductorGaugeEntry, ConductorMaterial, InsulationRating

# Conductor sizes in ascending order (AWG, then kcmil)
GAUGE_ORDER = ["14", "12", "10", "8", "6", "4", "3", "2", "1",
               "1/0", "2/0", "3/0", "4/0",
               "250", "300", "350", "400", "500", "600", "750"]

# NEC Table 310.16 - Allowable Ampacities of Insulated Conductors
# Not more than 3 current-carrying conductors, 30°C ambient
# Format: {SizeAWG: {TempRating: Amps}}
NEC_310_16_COPPER = {
    "14": {60: 15, 75: 20, 90: 25},
    "12": {60: 20, 75: 25, 90: 30},
    "10": {60: 30, 75: 35, 90: 40},
    "8":  {60: 40, 75: 50, 90: 55},
    "6":  {60: 55, 75: 65, 90: 75},
    "4":  {60: 70, 75: 85, 90: 95},
    "3":  {60: 85, 75: 100, 90: 115},
    "2":  {60: 95, 75: 115, 90: 130},
    "1":  {60: 110, 75: 130, 90: 145},
    "1/0": {60: 125, 75: 150, 90: 170},
    "2/0": {60: 145, 75: 175, 90: 195},
    "3/0": {60: 165, 75: 200, 90: 225},
    "4/0": {60: 195, 75: 230, 90: 260},
    "250": {60: 215, 75: 255, 90: 290},
    "300": {60: 240, 75: 285, 90: 320},
    "350": {60: 260, 75: 310, 90: 350},
    "400": {60: 280, 75: 335, 90: 380},
    "500": {60: 320, 75: 380, 90: 430},
    "600": {60: 350, 75: 420, 90: 475},
    "750": {60: 400, 75: 475, 90: 535},
}

# Aluminum / copper-clad aluminum columns; no 14 AWG aluminum conductor is listed
NEC_310_16_ALUMINUM = {
    "12": {60: 15, 75: 20, 90: 25},
    "10": {60: 25, 75: 30, 90: 35},
    "8":  {60: 35, 75: 40, 90: 45},
    "6":  {60: 40, 75: 50, 90: 55},
    "4":  {60: 55, 75: 65, 90: 75},
    "3":  {60: 65, 75: 75, 90: 85},
    "2":  {60: 75, 75: 90, 90: 100},
    "1":  {60: 85, 75: 100, 90: 115},
    "1/0": {60: 100, 75: 120, 90: 135},
    "2/0": {60: 115, 75: 135, 90: 150},
    "3/0": {60: 130, 75: 155, 90: 175},
    "4/0": {60: 150, 75: 180, 90: 205},
    "250": {60: 170, 75: 205, 90: 230},
    "300": {60: 190, 75: 230, 90: 260},
    "350": {60: 210, 75: 250, 90: 280},
    "400": {60: 225, 75: 270, 90: 305},
    "500": {60: 260, 75: 310, 90: 350},
    "600": {60: 285, 75: 340, 90: 385},
    "750": {60: 320, 75: 385, 90: 435},
}

AMPACITY_TABLES = {
    ConductorMaterial.COPPER: NEC_310_16_COPPER,
    ConductorMaterial.ALUMINUM: NEC_310_16_ALUMINUM,
}

# NEC Table 310.15(B)(1) - Ambient Temperature Correction Factors (30°C base)
# Format: (Upper bound °C, {Insulation_Rating: Factor}); 0.0 means not permitted
TEMP_CORRECTION_FACTORS = [
    (10, {60: 1.29, 75: 1.20, 90: 1.15}),
    (15, {60: 1.22, 75: 1.15, 90: 1.12}),
    (20, {60: 1.15, 75: 1.11, 90: 1.08}),
    (25, {60: 1.08, 75: 1.05, 90: 1.04}),
    (30, {60: 1.00, 75: 1.00, 90: 1.00}),
    (35, {60: 0.91, 75: 0.94, 90: 0.96}),
    (40, {60: 0.82, 75: 0.88, 90: 0.91}),
    (45, {60: 0.71, 75: 0.82, 90: 0.87}),
    (50, {60: 0.58, 75: 0.75, 90: 0.82}),
    (55, {60: 0.41, 75: 0.67, 90: 0.76}),
    (60, {60: 0.00, 75: 0.58, 90: 0.71}),
    (65, {60: 0.00, 75: 0.47, 90: 0.65}),
    (70, {60: 0.00, 75: 0.33, 90: 0.58}),
    (75, {60: 0.00, 75: 0.00, 90: 0.50}),
    (80, {60: 0.00, 75: 0.00, 90: 0.41}),
    (85, {60: 0.00, 75: 0.00, 90: 0.29}),
]

# NEC Table 310.15(C)(1) - Adjustment Factors for More Than Three Current-Carrying Conductors
# Format: (Max_Conductors, Factor)
GROUPING_FACTORS = [
    (3, 1.0),
    (6, 0.80),   # 4-6 conductors
    (9, 0.70),   # 7-9
    (20, 0.50),  # 10-20
    (30, 0.45),  # 21-30
    (40, 0.40),  # 31-40
]
GROUPING_FACTOR_41_PLUS = 0.35

# NEC 240.4(D) - Small Conductors, maximum overcurrent protection (Amps)
SMALL_CONDUCTOR_LIMITS = {
    ConductorMaterial.COPPER: {"14": 15, "12": 20, "10": 30},
    ConductorMaterial.ALUMINUM: {"12": 15, "10": 25},
}

# Standard ampere ratings for fuses and inverse time breakers - NEC 240.6(A)
BREAKER_RATINGS = [15, 20, 25, 30, 35, 40, 45, 50, 60, 70, 80, 90, 100, 110, 125, 150, 175, 200,
                   225, 250, 300, 350, 400, 450, 500, 600, 700, 800, 1000, 1200, 1600, 2000,
                   2500, 3000, 4000, 5000, 6000]

def gauge_index(gauge: str) -> int:
    try:
        return GAUGE_ORDER.index(gauge)
    except ValueError:
        raise TableLookupError(f"Unknown conductor size {gauge!r}") from None

def format_awg(gauge: str) -> str:
    """'12' -> '#12 AWG', '1/0' -> '#1/0 AWG', '250' -> '250 kcmil'."""
    if "/" not in gauge and int(gauge) >= 250:
        return f"{gauge} kcmil"
    return f"#{gauge} AWG"

def available_gauges(material: ConductorMaterial) -> List[str]:
    table = AMPACITY_TABLES[material]
    return [g for g in GAUGE_ORDER if g in table]

def get_ampacity(gauge: str, material: ConductorMaterial, rating: InsulationRating) -> int:
    try:
        return AMPACITY_TABLES[material][gauge][rating.value]
    except KeyError:
        raise TableLookupError(
            f"NEC 310.16 has no entry for {gauge} {material.value} at {rating.value}°C"
        ) from None

def ampacity_entries(material: ConductorMaterial, rating: InsulationRating) -> List[ConductorGaugeEntry]:
    return [ConductorGaugeEntry(gauge=g, material=material, temperature_rating=rating,
                                base_ampacity=get_ampacity(g, material, rating))
            for g in available_gauges(material)]

def min_gauge_for_current(amps: float, material: ConductorMaterial, rating: InsulationRating) -> Optional[str]:
    for gauge in available_gauges(material):
        if get_ampacity(gauge, material, rating) >= amps:
            return gauge
    return None

def next_larger_gauge(gauge: str, material: ConductorMaterial) -> Optional[str]:
    sizes = available_gauges(material)
    if gauge not in sizes:
        raise TableLookupError(f"{gauge} is not a {material.value} size")
    idx = sizes.index(gauge)
    return sizes[idx + 1] if idx + 1 < len(sizes) else None

def get_temp_correction(temp_c: float, insulation_rating: InsulationRating) -> float:
    if temp_c > TEMP_CORRECTION_FACTORS[-1][0]:
        return 0.0
    for upper, factors in TEMP_CORRECTION_FACTORS:
        if temp_c <= upper:
            return factors[insulation_rating.value]
    return 0.0

def get_grouping_factor(count: int) -> float:
    if count < 1:
        raise InvalidInputError("current_carrying_conductors", "must be at least 1")
    for limit, factor in GROUPING_FACTORS:
        if count <= limit:
            return factor
    return GROUPING_FACTOR_41_PLUS

def small_conductor_limit(gauge: str, material: ConductorMaterial) -> Optional[int]:
    return SMALL_CONDUCTOR_LIMITS[material].get(gauge)

def next_standard_breaker(amps: float) -> int:
    for rating in BREAKER_RATINGS:
        if rating >= amps:
            return rating
    return BREAKER_RATINGS[-1]

def ampacity_table_rows() -> List[Dict[str, object]]:
    """Flat rows of Table 310.16, one per size, for spreadsheet export."""
    rows = []
    for gauge in GAUGE_ORDER:
        row: Dict[str, object] = {"Size": gauge}
        for material, table in AMPACITY_TABLES.items():
            for temp in (60, 75, 90):
                row[f"{material.label} {temp}C"] = table.get(gauge, {}).get(temp)
        rows.append(row)
    return rows
