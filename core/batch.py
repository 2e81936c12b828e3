"""Spreadsheet batch mode: read a circuit list, size every row, write a workbook."""
import logging
import os
from typing import Any, Dict, List, Optional

import pandas as pd
from openpyxl.styles import Font, PatternFill

from core.config import SizingSettings
from core.converters import (convert_length_unit, current_from_power, parse_material, parse_phase,
                             round_up_hundredth)
from core.errors import InvalidInputError
from core.models import CircuitSpecification, ConductorMaterial, InsulationRating, Phase
from standards.nec_grounding import NEC_250_122
from standards.nec_logic import NECLogic
from standards.nec_tables import ampacity_table_rows

logger = logging.getLogger(__name__)

TEMPLATE_COLUMNS = ["Name", "Power", "PowerUnit", "Voltage", "Phase", "Length", "LengthUnit", "Material"]
OPTIONAL_COLUMNS = ["PF", "AmbientC", "Rating", "Conductors"]
REQUIRED_COLUMNS = ["Name", "Power", "Voltage"]
RESULT_COLUMNS = ["Name", "Material", "Current (A)", "Voltage", "Phase", "Length (ft)", "AWG",
                  "Ampacity (A)", "Adjusted Ampacity (A)", "Breaker (A)", "Ground", "VD (V)", "% VD",
                  "Status", "Notes"]

def template_frame() -> pd.DataFrame:
    data = {
        "Name": ["Pump Motor", "Workshop Feeder"],
        "Power": [10, 40],
        "PowerUnit": ["HP", "A"],
        "Voltage": [460, 240],
        "Phase": [3, 1],
        "Length": [30, 150],
        "LengthUnit": ["m", "ft"],
        "Material": ["Copper", "Both"],
        "PF": [0.85, 1.0],
        "AmbientC": [30, 40],
        "Rating": [75, 90],
        "Conductors": [3, 2],
    }
    return pd.DataFrame(data)

def read_circuits(path: str) -> pd.DataFrame:
    ext = os.path.splitext(path)[1].lower()
    if ext in (".xlsx", ".xlsm", ".xls"):
        df = pd.read_excel(path)
    elif ext == ".csv":
        df = pd.read_csv(path)
    else:
        raise InvalidInputError("path", f"unsupported spreadsheet type {ext!r}")

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise InvalidInputError("columns", f"missing required column(s): {', '.join(missing)}")
    logger.info("Loaded %d circuit(s) from %s", len(df), path)
    return df

def _cell(row: pd.Series, key: str, default: Any) -> Any:
    value = row.get(key, default)
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return default
    if isinstance(value, str) and not value.strip():
        return default
    return value

def _materials(value: Any) -> List[ConductorMaterial]:
    if str(value).strip().lower() in ("both", "all", "*"):
        return list(ConductorMaterial)
    return [parse_material(value)]

def _rating(value: Any) -> InsulationRating:
    text = str(value).upper().replace("C", "").replace("°", "").strip()
    try:
        return InsulationRating(int(float(text)))
    except ValueError:
        raise InvalidInputError("temperature_rating", f"unsupported rating {value!r}") from None

def _row_specs(row: pd.Series) -> List[CircuitSpecification]:
    voltage = float(_cell(row, "Voltage", 0))
    phase = parse_phase(str(_cell(row, "Phase", 1)).replace(".0", ""))
    amps = current_from_power(float(_cell(row, "Power", 0)), str(_cell(row, "PowerUnit", "A")),
                              voltage, phase, float(_cell(row, "PF", 1.0)))
    length_ft = convert_length_unit(float(_cell(row, "Length", 0)), str(_cell(row, "LengthUnit", "ft")))
    rating = _cell(row, "Rating", None)
    return [CircuitSpecification(current=amps, distance_ft=length_ft, voltage=voltage,
                                 phase=phase, material=material,
                                 temperature_rating=None if rating is None else _rating(rating),
                                 ambient_temp_c=float(_cell(row, "AmbientC", 30.0)),
                                 current_carrying_conductors=int(float(_cell(row, "Conductors", 3))))
            for material in _materials(_cell(row, "Material", "both"))]

def size_circuits(df: pd.DataFrame, settings: Optional[SizingSettings] = None) -> pd.DataFrame:
    """Size every row for each requested material. A bad row becomes an error
    line in the output instead of stopping the batch."""
    rows: List[Dict[str, Any]] = []
    for idx, row in df.iterrows():
        name = str(_cell(row, "Name", f"Circuit {idx + 1}"))
        try:
            specs = _row_specs(row)
            for spec in specs:
                res = NECLogic.calculate_wire_size(spec, settings)
                rows.append({
                    "Name": name,
                    "Material": res.material.label,
                    "Current (A)": round_up_hundredth(spec.current),
                    "Voltage": spec.voltage,
                    "Phase": "3" if spec.phase is Phase.THREE else "1",
                    "Length (ft)": round(spec.distance_ft, 1),
                    "AWG": res.awg,
                    "Ampacity (A)": res.ampacity,
                    "Adjusted Ampacity (A)": res.adjusted_ampacity,
                    "Breaker (A)": res.overcurrent_device_rating,
                    "Ground": res.ground_wire,
                    "VD (V)": res.voltage_drop,
                    "% VD": res.voltage_drop_percent,
                    "Status": res.status.value,
                    "Notes": "; ".join(res.warnings),
                })
        except ValueError as e:
            # spreadsheet rows are numbered from 2 (row 1 is the header)
            logger.warning("Skipping row %d (%s): %s", idx + 2, name, e)
            rows.append({"Name": name, "Notes": f"Error: {e}"})
    # error rows leave gaps in the rating columns
    return pd.DataFrame(rows, columns=RESULT_COLUMNS).astype({"Ampacity (A)": "Int64", "Breaker (A)": "Int64"})

def _style_header(ws) -> None:
    header_fill = PatternFill(start_color="DDDDDD", end_color="DDDDDD", fill_type="solid")
    header_font = Font(bold=True)
    for cell in ws[1]:
        cell.font = header_font
        cell.fill = header_fill
    for col in ws.columns:
        ws.column_dimensions[col[0].column_letter].width = 15

def write_workbook(results: pd.DataFrame, path: str) -> str:
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        results.to_excel(writer, index=False, sheet_name="Circuits")
        pd.DataFrame(ampacity_table_rows()).to_excel(writer, index=False, sheet_name="NEC 310.16")
        ground = pd.DataFrame(NEC_250_122, columns=["Device (A)", "Copper", "Aluminum"])
        ground.to_excel(writer, index=False, sheet_name="NEC 250.122")
        for ws in writer.sheets.values():
            _style_header(ws)
    logger.info("Wrote %d result row(s) to %s", len(results), path)
    return path

def write_template(path: str) -> str:
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        template_frame().to_excel(writer, index=False, sheet_name="Template")
        _style_header(writer.sheets["Template"])
    return path
