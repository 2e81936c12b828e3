import argparse
import datetime
import logging
import re
import sys

import pandas as pd

from core.batch import OPTIONAL_COLUMNS, TEMPLATE_COLUMNS, read_circuits, size_circuits, write_template, write_workbook
from core.config import load_settings
from core.errors import WireSizingError

logger = logging.getLogger(__name__)

def split_value_unit(text, default_unit):
    # "10 HP" -> (10.0, "HP"), "50" -> (50.0, default_unit)
    match = re.match(r"([0-9\.]+)\s*([a-zA-Z]+)", text)
    if match:
        return float(match.group(1)), match.group(2)
    return float(text), default_unit

def get_installation_params():
    print("\n--- Installation Conditions ---")

    try:
        temp = float(input("Ambient temperature (°C) [Default 30]: ") or 30.0)
    except ValueError:
        temp = 30.0

    print("Conductor insulation rating:")
    print("1. 75°C (THWN, RHW) - Standard")
    print("2. 90°C (THHN, THWN-2, XHHW-2)")
    print("3. 60°C (TW, UF)")
    t_choice = input("Option [1]: ").strip()
    rating = {"2": 90, "3": 60}.get(t_choice, 75)

    return temp, rating

def get_circuits_input(temp, rating):
    rows = []
    print("\n--- Circuits ---")

    while True:
        print(f"\n[Circuit #{len(rows)+1}]")
        name = input("Circuit name: ").strip()
        if not name: break

        try:
            power, unit = split_value_unit(input("Load (e.g. 20 A, 1500 W, 10 KW, 5 HP, 50 KVA): ").strip(), "A")
            voltage = float(input("Voltage (V): "))
            phases = int(input("Phases (1 or 3): "))
            pf = float(input("Power factor [1.0]: ") or 1.0)

            # NEC 310.15(C)(1) adjustment for bundled conductors
            try:
                count = int(input(f"Current-carrying conductors in raceway [{3 if phases == 3 else 2}]: ")
                            or (3 if phases == 3 else 2))
            except ValueError:
                count = 3

            length, l_unit = split_value_unit(input("One-way length (e.g. 50 m, 100 ft): ").strip(), "ft")
            material = input("Material (cu / al / both) [both]: ").strip() or "both"

            rows.append({
                "Name": name, "Power": power, "PowerUnit": unit, "Voltage": voltage, "Phase": phases,
                "Length": length, "LengthUnit": l_unit, "Material": material, "PF": pf,
                "AmbientC": temp, "Rating": rating, "Conductors": count,
            })

        except ValueError as e:
            print(f"Invalid input: {e}. Try again.")

        more = input("Add another circuit? (y/n): ").lower()
        if more != 'y':
            break

    return pd.DataFrame(rows, columns=TEMPLATE_COLUMNS + OPTIONAL_COLUMNS)

def print_results(results):
    print("-" * 110)
    print(f"{'Circuit':<15} | {'Material':<8} | {'Amps':<8} | {'Size':<6} | {'Breaker':<7} | {'Ground':<6} | {'% VD':<6} | {'Status'}")
    print("-" * 110)
    for _, r in results.iterrows():
        if pd.isna(r["AWG"]):
            print(f"{str(r['Name'])[:15]:<15} | {r['Notes']}")
            continue
        warn = " (!)" if r["Status"] != "compliant" else ""
        print(f"{str(r['Name'])[:15]:<15} | {r['Material']:<8} | {r['Current (A)']:<8.2f} | {r['AWG']:<6} | "
              f"{int(r['Breaker (A)']):<7} | {r['Ground']:<6} | {r['% VD']:<6.2f} | {r['Status']}{warn}")
    print("-" * 110)

def build_parser():
    parser = argparse.ArgumentParser(description="NEC conductor sizing for branch circuits and feeders.")
    parser.add_argument("input", nargs="?", help="Circuit list (.xlsx or .csv). Omit for interactive mode.")
    parser.add_argument("-o", "--output", help="Results workbook path (.xlsx)")
    parser.add_argument("--template", metavar="PATH", help="Write an empty input template and exit")
    parser.add_argument("--max-vd", type=float, help="Voltage drop limit in percent (default 3)")
    parser.add_argument("--terminal-rating", type=int, choices=[60, 75, 90],
                        help="Terminal temperature rating that governs the ampacity column (default 75)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log selection steps")
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.template:
        write_template(args.template)
        print(f"[INFO] Template written: {args.template}")
        return 0

    overrides = {}
    if args.max_vd is not None:
        overrides["max_voltage_drop_percent"] = args.max_vd
    if args.terminal_rating is not None:
        overrides["temperature_rating"] = args.terminal_rating

    try:
        settings = load_settings().with_overrides(overrides)
        if args.input:
            circuits = read_circuits(args.input)
        else:
            print("==========================================================")
            print(" NEC WIRE SIZING CALCULATOR")
            print("==========================================================")
            temp, rating = get_installation_params()
            circuits = get_circuits_input(temp, rating)
            if circuits.empty:
                print("No circuits entered.")
                return 0

        results = size_circuits(circuits, settings)
    except WireSizingError as e:
        logger.error("%s", e)
        return 1

    print_results(results)

    output = args.output
    if not output and not args.input:
        if input("\nExport results to Excel? (y/n): ").lower() == 'y':
            output = f"Wire_Sizing_{datetime.datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    if output:
        write_workbook(results, output)
        print(f"\n[INFO] Excel written: {output}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
