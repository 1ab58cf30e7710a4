"""Pytest configuration."""
import pytest
import sys
import os

import matplotlib
matplotlib.use("Agg")  # Headless test runs

# Add the repo root to sys.path so `main` and `heatsim` import without installing.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from heatsim.config import SimulationConfig


@pytest.fixture
def scenario_config():
    """Reference scenario: steady 30F outside, 68F setpoint, 2F band."""
    return SimulationConfig(
        outside_base_temp_f=30,
        desired_temp_f=68,
        insulation_factor=5,
        heater_output=60000,
        house_heat_capacity=4000,
        diurnal_amplitude=0,
        hysteresis_band=2,
        time_step_seconds=10,
        total_hours=24,
        mode="constant",
    )
