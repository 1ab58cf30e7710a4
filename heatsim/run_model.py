import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd

from .config import HeatingMode, SimulationConfig
from .constants import HOURS_PER_DAY, SECONDS_PER_HOUR
from .integrate import advance, make_derivative
from .thermostat import decide_heater, heating_target
from .weather import outside_temp

_LOGGER = logging.getLogger(__name__)


@dataclass
class ThermalState:
    """Mutable per-run state. Owned by exactly one run() call."""
    current_temp_f: float
    heater_on: bool = False


@dataclass(frozen=True)
class StepRecord:
    time_label: str          # HH:MM of simulated clock
    hour_of_day: float       # [0, 24)
    elapsed_hours: float     # step * dt since start of run
    inside_temp_f: float     # At the END of the step
    outside_temp_f: float
    heater_on: bool
    cumulative_energy_btu: float


@dataclass(frozen=True)
class ModeResult:
    mode: HeatingMode
    records: Tuple[StepRecord, ...]
    total_energy_btu: float
    on_step_count: int

    def __len__(self):
        return len(self.records)

    @property
    def total_steps(self):
        return len(self.records)

    @property
    def duty_cycle_pct(self):
        if not self.total_steps:
            return 0.0
        return self.on_step_count / self.total_steps * 100

    @property
    def inside_temps(self):
        return np.array([r.inside_temp_f for r in self.records])

    @property
    def outside_temps(self):
        return np.array([r.outside_temp_f for r in self.records])

    @property
    def heater_states(self):
        return np.array([r.heater_on for r in self.records], dtype=bool)

    @property
    def cumulative_energy(self):
        return np.array([r.cumulative_energy_btu for r in self.records])

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame({
            'time': [r.time_label for r in self.records],
            'hour_of_day': [r.hour_of_day for r in self.records],
            'elapsed_hours': [r.elapsed_hours for r in self.records],
            'inside_temp': self.inside_temps,
            'outside_temp': self.outside_temps,
            'heater_on': self.heater_states,
            'energy_btu': self.cumulative_energy,
        })


def format_time_label(elapsed_seconds: float) -> str:
    total_minutes = int(elapsed_seconds // 60)
    hour = (total_minutes // 60) % int(HOURS_PER_DAY)
    minute = total_minutes % 60
    return f"{hour:02d}:{minute:02d}"


def step_state(config: SimulationConfig, mode: HeatingMode, state: ThermalState, hour_of_day: float) -> float:
    """
    Advances state by one time step in place and returns the outdoor
    temperature that drove it.
    """
    # A. Boundary conditions, sampled once per step
    t_out = outside_temp(config, hour_of_day)
    target, suppressed = heating_target(config, mode, hour_of_day)

    # B. Thermostat
    state.heater_on = decide_heater(
        state.current_temp_f, state.heater_on, target, config.hysteresis_band, suppressed)

    # C. Integration (forcing held constant across solver stages)
    q_heater = config.heater_output if state.heater_on else 0.0
    f = make_derivative(q_heater, t_out, config.heat_loss_coefficient, config.house_heat_capacity)
    state.current_temp_f = advance(f, state.current_temp_f, config.dt_hours, config.solver)

    return t_out


def run(config: SimulationConfig, mode: HeatingMode = None) -> ModeResult:
    """Simulates config.total_steps steps for one heating mode."""
    mode = config.mode if mode is None else HeatingMode.parse(mode)

    total_steps = config.total_steps
    energy_per_step = config.heater_output / config.steps_per_hour

    state = ThermalState(current_temp_f=float(config.start_temp_f), heater_on=False)
    cumulative_energy = 0.0
    on_steps = 0
    records = []

    for step in range(total_steps):
        elapsed_seconds = step * config.time_step_seconds
        elapsed_hours = elapsed_seconds / SECONDS_PER_HOUR
        hour_of_day = elapsed_hours % HOURS_PER_DAY

        t_out = step_state(config, mode, state, hour_of_day)

        if state.heater_on:
            cumulative_energy += energy_per_step
            on_steps += 1

        records.append(StepRecord(
            time_label=format_time_label(elapsed_seconds),
            hour_of_day=hour_of_day,
            elapsed_hours=elapsed_hours,
            inside_temp_f=state.current_temp_f,
            outside_temp_f=t_out,
            heater_on=state.heater_on,
            cumulative_energy_btu=cumulative_energy,
        ))

    _LOGGER.debug(
        f"{mode.value}: {total_steps} steps, {cumulative_energy:.0f} BTU, "
        f"heater on {on_steps} steps, final temp {state.current_temp_f:.2f}F")

    return ModeResult(
        mode=mode,
        records=tuple(records),
        total_energy_btu=cumulative_energy,
        on_step_count=on_steps,
    )
