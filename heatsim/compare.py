import logging
import warnings
from dataclasses import dataclass

from .config import HeatingMode, SimulationConfig
from .errors import ComputationWarning
from .run_model import run

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonSummary:
    energy_constant_btu: float
    energy_setback_btu: float
    duty_cycle_constant_pct: float
    duty_cycle_setback_pct: float
    savings_pct: float
    savings_defined: bool = True  # False when constant mode used no energy

    @property
    def setback_saves(self):
        return self.savings_pct > 0


def savings_percent(energy_constant: float, energy_setback: float):
    """
    Returns (savings_pct, defined). With zero constant-mode energy there is no
    baseline to compare against; report 0% and flag it.
    """
    if energy_constant == 0:
        message = "Constant-mode energy is zero; reporting 0% savings."
        _LOGGER.warning(message)
        warnings.warn(message, ComputationWarning, stacklevel=2)
        return 0.0, False
    return (energy_constant - energy_setback) / energy_constant * 100, True


def compare_modes(config: SimulationConfig):
    """Runs both modes from the same config. Returns (summary, {mode: ModeResult})."""
    # Each run builds its own ThermalState; the outdoor trace is recomputed
    # from the same config, so both see identical weather.
    results = {mode: run(config, mode) for mode in (HeatingMode.CONSTANT, HeatingMode.NIGHT_SETBACK)}
    constant = results[HeatingMode.CONSTANT]
    setback = results[HeatingMode.NIGHT_SETBACK]

    savings, defined = savings_percent(constant.total_energy_btu, setback.total_energy_btu)

    summary = ComparisonSummary(
        energy_constant_btu=constant.total_energy_btu,
        energy_setback_btu=setback.total_energy_btu,
        duty_cycle_constant_pct=constant.duty_cycle_pct,
        duty_cycle_setback_pct=setback.duty_cycle_pct,
        savings_pct=savings,
        savings_defined=defined,
    )
    _LOGGER.info(
        f"Constant: {summary.energy_constant_btu:.0f} BTU ({summary.duty_cycle_constant_pct:.1f}% duty), "
        f"Setback: {summary.energy_setback_btu:.0f} BTU ({summary.duty_cycle_setback_pct:.1f}% duty), "
        f"savings {summary.savings_pct:.2f}%")
    return summary, results


def compare(config: SimulationConfig) -> ComparisonSummary:
    summary, _ = compare_modes(config)
    return summary


def simulate(config: SimulationConfig, return_series: bool = False):
    """
    Entry point for callers (CLI, notebooks, UI layers).
    With return_series=True also returns both time series keyed by HeatingMode.
    """
    summary, results = compare_modes(config)
    if return_series:
        return summary, results
    return summary
