import os
import tempfile
import unittest

import pandas as pd

from core.batch import (RESULT_COLUMNS, read_circuits, size_circuits, template_frame, write_template,
                        write_workbook)
from core.config import SizingSettings
from core.errors import InvalidInputError

class TestBatch(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def path(self, name):
        return os.path.join(self.tmp.name, name)

    def test_size_rows(self):
        df = pd.DataFrame([
            {"Name": "Subpanel", "Power": 100, "PowerUnit": "A", "Voltage": 240, "Phase": 1,
             "Length": 50, "LengthUnit": "ft", "Material": "Copper"},
            {"Name": "Shop", "Power": 100, "PowerUnit": "A", "Voltage": 240, "Phase": 1,
             "Length": 50, "LengthUnit": "ft", "Material": "Both"},
        ])
        out = size_circuits(df)
        self.assertEqual(list(out.columns), RESULT_COLUMNS)
        self.assertEqual(len(out), 3)
        self.assertEqual(out.iloc[0]["AWG"], "3")
        self.assertEqual(list(out[out["Name"] == "Shop"]["Material"]), ["Copper", "Aluminum"])
        self.assertEqual(list(out[out["Name"] == "Shop"]["AWG"]), ["3", "1"])
        self.assertEqual(out.iloc[0]["Status"], "compliant")

    def test_units_and_defaults(self):
        df = pd.DataFrame([{"Name": "Heater", "Power": 4.8, "PowerUnit": "kW", "Voltage": 240,
                            "Length": 10, "LengthUnit": "m", "Material": "cu"}])
        out = size_circuits(df)
        # 4800W / 240V = 20A single phase; 10 m = 32.8 ft
        self.assertEqual(out.iloc[0]["Current (A)"], 20.0)
        self.assertEqual(out.iloc[0]["Length (ft)"], 32.8)
        self.assertEqual(out.iloc[0]["AWG"], "12")

    def test_bad_row_does_not_stop_batch(self):
        df = pd.DataFrame([
            {"Name": "Broken", "Power": 10, "PowerUnit": "BTU", "Voltage": 240},
            {"Name": "Good", "Power": 30, "PowerUnit": "A", "Voltage": 240},
        ])
        with self.assertLogs("core.batch", level="WARNING") as logs:
            out = size_circuits(df)
        self.assertIn("Broken", logs.output[0])
        broken = out[out["Name"] == "Broken"].iloc[0]
        self.assertTrue(broken["Notes"].startswith("Error:"))
        self.assertTrue(pd.isna(broken["AWG"]))
        self.assertEqual(list(out[out["Name"] == "Good"]["AWG"]), ["10", "8"])
        # the gap left by the bad row must not turn ratings into floats
        self.assertEqual(str(out["Breaker (A)"].dtype), "Int64")
        self.assertEqual(str(out["Ampacity (A)"].dtype), "Int64")
        self.assertEqual(list(out[out["Name"] == "Good"]["Breaker (A)"]), [30, 30])

    def test_settings_apply(self):
        df = pd.DataFrame([{"Name": "Long", "Power": 20, "Voltage": 120, "Length": 300, "Material": "cu"}])
        self.assertEqual(size_circuits(df).iloc[0]["AWG"], "4")
        relaxed = SizingSettings(max_voltage_drop_percent=5.0)
        self.assertEqual(size_circuits(df, relaxed).iloc[0]["AWG"], "6")

    def test_template_rows_all_size(self):
        out = size_circuits(template_frame())
        self.assertEqual(len(out), 3)
        self.assertFalse(out["Notes"].str.startswith("Error").any())

    def test_workbook_round_trip(self):
        src = self.path("circuits.xlsx")
        write_template(src)
        circuits = read_circuits(src)
        self.assertEqual(len(circuits), 2)

        dest = write_workbook(size_circuits(circuits), self.path("results.xlsx"))
        sheets = pd.read_excel(dest, sheet_name=None)
        self.assertEqual(set(sheets), {"Circuits", "NEC 310.16", "NEC 250.122"})
        self.assertEqual(len(sheets["Circuits"]), 3)
        self.assertEqual(len(sheets["NEC 250.122"]), 21)

    def test_read_csv(self):
        src = self.path("circuits.csv")
        template_frame().to_csv(src, index=False)
        self.assertEqual(len(read_circuits(src)), 2)

    def test_read_errors(self):
        src = self.path("circuits.csv")
        pd.DataFrame([{"Name": "x", "Power": 1}]).to_csv(src, index=False)
        with self.assertRaises(InvalidInputError) as ctx:
            read_circuits(src)
        self.assertIn("Voltage", str(ctx.exception))
        with self.assertRaises(InvalidInputError):
            read_circuits(self.path("circuits.json"))

if __name__ == '__main__':
    unittest.main()
