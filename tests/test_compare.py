import dataclasses
import warnings

import numpy as np
import pytest

from heatsim import simulate
from heatsim.compare import ComparisonSummary, compare, savings_percent
from heatsim.config import HeatingMode, SimulationConfig
from heatsim.errors import ComputationWarning


def test_setback_saves_energy(scenario_config):
    summary = compare(scenario_config)
    assert summary.energy_constant_btu > 0
    assert summary.energy_setback_btu < summary.energy_constant_btu
    assert summary.savings_pct > 0
    assert summary.savings_defined
    assert summary.setback_saves


def test_savings_formula(scenario_config):
    summary = compare(scenario_config)
    expected = (summary.energy_constant_btu - summary.energy_setback_btu) / summary.energy_constant_btu * 100
    assert summary.savings_pct == pytest.approx(expected)


def test_simulate_is_deterministic():
    config = SimulationConfig(diurnal_amplitude=15, insulation_factor=3)
    assert simulate(config) == simulate(config)


@pytest.mark.parametrize("overrides", [
    {},
    {"insulation_factor": 1, "outside_base_temp_f": -20},
    {"insulation_factor": 10, "outside_base_temp_f": 60},
    {"heater_output": 5000},  # Undersized heater runs flat out
])
def test_duty_cycle_bounds(overrides):
    summary = simulate(SimulationConfig(**overrides))
    for duty in (summary.duty_cycle_constant_pct, summary.duty_cycle_setback_pct):
        assert 0 <= duty <= 100


def test_undersized_heater_saturates():
    config = SimulationConfig(heater_output=5000, outside_base_temp_f=0, diurnal_amplitude=0)
    summary = simulate(config)
    # Off only until the house first leaves the dead zone, then on for good
    assert summary.duty_cycle_constant_pct > 99.0
    assert summary.duty_cycle_setback_pct < summary.duty_cycle_constant_pct


def test_duty_cycle_matches_series(scenario_config):
    summary, series = simulate(scenario_config, return_series=True)
    constant = series[HeatingMode.CONSTANT]
    setback = series[HeatingMode.NIGHT_SETBACK]
    assert summary.duty_cycle_constant_pct == pytest.approx(constant.on_step_count / 8640 * 100)
    assert summary.duty_cycle_setback_pct == pytest.approx(setback.on_step_count / 8640 * 100)
    assert summary.energy_constant_btu == constant.total_energy_btu
    assert summary.energy_setback_btu == setback.total_energy_btu


def test_return_series_shares_outdoor_trace():
    config = SimulationConfig(diurnal_amplitude=25)
    summary, series = simulate(config, return_series=True)
    assert isinstance(summary, ComparisonSummary)
    assert set(series) == {HeatingMode.CONSTANT, HeatingMode.NIGHT_SETBACK}
    assert np.array_equal(series[HeatingMode.CONSTANT].outside_temps,
                          series[HeatingMode.NIGHT_SETBACK].outside_temps)


def test_selected_mode_does_not_change_comparison(scenario_config):
    setback_selected = dataclasses.replace(scenario_config, mode=HeatingMode.NIGHT_SETBACK)
    assert compare(scenario_config) == compare(setback_selected)


def test_zero_constant_energy_falls_back():
    config = SimulationConfig(heater_output=0)
    with pytest.warns(ComputationWarning):
        summary = simulate(config)
    assert summary.energy_constant_btu == 0
    assert summary.savings_pct == 0.0
    assert not summary.savings_defined


def test_warm_weather_needs_no_heat():
    config = SimulationConfig(outside_base_temp_f=85, diurnal_amplitude=0)
    with pytest.warns(ComputationWarning):
        summary = simulate(config)
    assert summary.energy_setback_btu == 0
    assert summary.duty_cycle_constant_pct == 0


def test_savings_percent():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert savings_percent(200.0, 150.0) == (25.0, True)
        assert savings_percent(100.0, 120.0) == (pytest.approx(-20.0), True)
    with pytest.warns(ComputationWarning):
        assert savings_percent(0.0, 0.0) == (0.0, False)
