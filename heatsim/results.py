import datetime
import json
import logging

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .config import HeatingMode
from .constants import BTU_TO_KWH, HOURS_PER_DAY
from .weather import outside_temp_trace

_LOGGER = logging.getLogger(__name__)

MODE_LABELS = {
    HeatingMode.CONSTANT: "Constant (24h)",
    HeatingMode.NIGHT_SETBACK: "Night Setback",
}
MODE_COLORS = {
    HeatingMode.CONSTANT: "#8884d8",
    HeatingMode.NIGHT_SETBACK: "#82ca9d",
}


def verdict(summary) -> str:
    if not summary.savings_defined:
        return "Savings undefined (constant heating used no energy)"
    if summary.setback_saves:
        return f"Night setback saves {summary.savings_pct:.2f}%"
    return f"Constant heating is more efficient by {abs(summary.savings_pct):.2f}%"


def format_report(summary, config=None) -> str:
    lines = ["=" * 40, "HEATING COMPARISON RESULTS", "=" * 40]
    if config is not None:
        lines += [
            f"Outside Base Temp:     {config.outside_base_temp_f:.1f} F (+/-{config.diurnal_amplitude / 2:.1f} F)",
            f"Desired Temp:          {config.desired_temp_f:.1f} F (band {config.hysteresis_band:.1f} F)",
            f"Heat Loss (UA):        {config.heat_loss_coefficient:.0f} BTU/hr/F",
            f"Thermal Mass (C):      {config.house_heat_capacity:.0f} BTU/F",
            f"Time Constant:         {config.time_constant_hours:.1f} hr",
            f"Night Window:          {config.night_window.start:g}:00 - {config.night_window.end:g}:00"
            f" ({config.setback_policy.value})",
            "-" * 40,
        ]
    lines += [
        f"Constant Energy:       {summary.energy_constant_btu:.0f} BTU ({summary.energy_constant_btu * BTU_TO_KWH:.2f} kWh)",
        f"Setback Energy:        {summary.energy_setback_btu:.0f} BTU ({summary.energy_setback_btu * BTU_TO_KWH:.2f} kWh)",
        f"Constant Duty Cycle:   {summary.duty_cycle_constant_pct:.1f}%",
        f"Setback Duty Cycle:    {summary.duty_cycle_setback_pct:.1f}%",
        "-" * 40,
        verdict(summary),
        "=" * 40,
    ]
    return "\n".join(lines)


def series_dataframe(results) -> pd.DataFrame:
    """Both modes stacked into one long DataFrame with a 'mode' column."""
    frames = []
    for mode, result in results.items():
        df = result.to_dataframe()
        df.insert(0, 'mode', mode.value)
        frames.append(df)
    return pd.concat(frames, ignore_index=True)


def export_csv(results, filename):
    series_dataframe(results).to_csv(filename, index=False)
    print(f"Time series saved to: {filename}")


def sample_for_chart(df: pd.DataFrame, points_per_hour: int = 2, total_hours: float = 24) -> pd.DataFrame:
    """Keeps every Nth row so a day plots at roughly one point per 30 minutes."""
    interval = max(1, int(len(df) // (total_hours * points_per_hour)))
    return df.iloc[::interval].reset_index(drop=True)


def plot_results(summary, results, config, show=True):
    fig = plt.figure(figsize=(14, 10))

    # Subplot 1: Temperature
    ax1 = plt.subplot(3, 1, 1)
    for mode, result in results.items():
        df = sample_for_chart(result.to_dataframe(), total_hours=config.total_hours)
        ax1.plot(df['elapsed_hours'], df['inside_temp'], label=f"Inside - {MODE_LABELS[mode]}",
                 color=MODE_COLORS[mode], linewidth=2)
    # Outdoor curve on the same 30-minute grid as the inside lines
    hours = np.arange(0, config.total_hours, 1 / 2)
    ax1.plot(hours, outside_temp_trace(config, hours % HOURS_PER_DAY), label='Outside', color='blue', alpha=0.3)
    ax1.axhline(config.desired_temp_f, color='green', linestyle=':', linewidth=1.5, alpha=0.7, label='Setpoint')
    ax1.set_ylabel("Temperature (F)")
    ax1.set_title("Temperature Over Time")
    ax1.legend(loc='upper right')
    ax1.grid(True)

    # Subplot 2: Heater activity (full resolution so short cycles are visible)
    ax2 = plt.subplot(3, 1, 2, sharex=ax1)
    for offset, (mode, result) in enumerate(results.items()):
        df = result.to_dataframe()
        ax2.step(df['elapsed_hours'], df['heater_on'].astype(int) + offset * 1.5,
                 where='post', color=MODE_COLORS[mode], label=MODE_LABELS[mode])
    ax2.set_yticks([])
    ax2.set_ylabel("Heater ON")
    ax2.set_xlabel("Hours")
    ax2.legend(loc='upper right')
    ax2.grid(True)

    # Subplot 3: Energy totals
    ax3 = plt.subplot(3, 1, 3)
    modes = list(results.keys())
    energies = [results[m].total_energy_btu for m in modes]
    ax3.bar([MODE_LABELS[m] for m in modes], energies, color=[MODE_COLORS[m] for m in modes])
    ax3.set_ylabel("Energy (BTU)")
    ax3.set_title(verdict(summary))

    plt.tight_layout()
    if show:
        plt.show()
    return fig


def export_debug_output(filename, config, summary, results):
    """Export results to JSON for agent/automation use."""
    def to_list(arr):
        return [float(x) for x in np.asarray(arr, dtype=float)]

    debug_data = {
        "generated_at": datetime.datetime.now().isoformat(),
        "config": config.to_dict(),
        "summary": {
            "energy_constant_btu": float(summary.energy_constant_btu),
            "energy_setback_btu": float(summary.energy_setback_btu),
            "duty_cycle_constant_pct": float(summary.duty_cycle_constant_pct),
            "duty_cycle_setback_pct": float(summary.duty_cycle_setback_pct),
            "savings_pct": float(summary.savings_pct),
            "savings_defined": bool(summary.savings_defined),
            "setback_saves": bool(summary.setback_saves),
        },
        "timeseries": {},
    }
    for mode, result in results.items():
        debug_data["timeseries"][mode.value] = {
            "steps": result.total_steps,
            "time": [r.time_label for r in result.records],
            "inside_temp": to_list(result.inside_temps),
            "outside_temp": to_list(result.outside_temps),
            "heater_on": [bool(x) for x in result.heater_states],
            "energy_btu": to_list(result.cumulative_energy),
        }

    with open(filename, 'w') as f:
        json.dump(debug_data, f, indent=2)
    _LOGGER.debug(f"Wrote {len(results)} series to {filename}")
    print(f"Debug output saved to: {filename}")
