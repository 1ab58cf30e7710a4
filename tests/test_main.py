import io
import json
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

import pandas as pd

import main


class TestMainIntegration(unittest.TestCase):
    def setUp(self):
        # Create a temporary directory
        self.test_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.test_dir, 'house.json')
        self.csv_path = os.path.join(self.test_dir, 'series.csv')
        self.debug_path = os.path.join(self.test_dir, 'debug.json')

        with open(self.config_path, 'w') as f:
            f.write(
                '{\n'
                '    "outside_base_temp_f": 30,\n'
                '    "desired_temp_f": 68,\n'
                '    "insulation_factor": 5,     // UA = 200\n'
                '    "heater_output": 60000,\n'
                '    "house_heat_capacity": 4000,\n'
                '    "diurnal_amplitude": 0,\n'
                '    "hysteresis_band": 2\n'
                '}\n'
            )

        # Conditional Plot Suppression
        # If SHOW_PLOTS env var is NOT set, suppress plots.
        if not os.environ.get('SHOW_PLOTS'):
            self.plot_patcher = patch('matplotlib.pyplot.show')
            self.mock_show = self.plot_patcher.start()
        else:
            self.plot_patcher = None

    def tearDown(self):
        if self.plot_patcher:
            self.plot_patcher.stop()
        import matplotlib.pyplot as plt
        plt.close('all')
        shutil.rmtree(self.test_dir)

    def run_cli(self, args):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main.run_main(args)
        return code, out.getvalue()

    def test_reference_scenario_report(self):
        code, output = self.run_cli([self.config_path])
        self.assertEqual(code, 0)
        self.assertIn("HEATING COMPARISON RESULTS", output)
        self.assertIn("Night setback saves", output)

    def test_defaults_without_config(self):
        code, output = self.run_cli(["--hours", "2", "--time-step", "60"])
        self.assertEqual(code, 0)
        self.assertIn("Constant Energy:", output)

    def test_csv_and_debug_exports(self):
        code, _ = self.run_cli([self.config_path, "--hours", "6", "--time-step", "60",
                                "--csv", self.csv_path, "--debug-output", self.debug_path])
        self.assertEqual(code, 0)

        df = pd.read_csv(self.csv_path)
        self.assertEqual(len(df), 2 * 360)
        self.assertEqual(sorted(df['mode'].unique()), ["constant", "night_setback"])

        with open(self.debug_path) as f:
            debug = json.load(f)
        self.assertEqual(debug["config"]["total_hours"], 6)
        self.assertIn("night_setback", debug["timeseries"])

    def test_overrides_and_night_window(self):
        code, _ = self.run_cli([self.config_path, "--hours", "3", "--night-start", "1", "--night-end", "2",
                                "--setback-policy", "setback_target", "--setback-temp", "60",
                                "--debug-output", self.debug_path])
        self.assertEqual(code, 0)
        with open(self.debug_path) as f:
            config = json.load(f)["config"]
        self.assertEqual(config["night_window"], [1, 2])
        self.assertEqual(config["setback_policy"], "setback_target")
        self.assertEqual(config["setback_temp_f"], 60)

    def test_plot_flag(self):
        code, _ = self.run_cli([self.config_path, "--hours", "2", "--time-step", "60", "--plot"])
        self.assertEqual(code, 0)
        if self.plot_patcher:
            self.mock_show.assert_called_once()

    def test_invalid_config_returns_error(self):
        code, output = self.run_cli([self.config_path, "--insulation", "0"])
        self.assertEqual(code, 1)
        self.assertIn("Error: insulation_factor must be > 0", output)

    def test_missing_config_file(self):
        code, output = self.run_cli([os.path.join(self.test_dir, "nope.json")])
        self.assertEqual(code, 1)
        self.assertIn("not found", output)


if __name__ == '__main__':
    unittest.main()
