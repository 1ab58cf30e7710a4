import json
import logging
import math
import numbers
import re
from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from typing import Optional

from .constants import (
    DEFAULT_OUTSIDE_BASE_TEMP,
    DEFAULT_DESIRED_TEMP,
    DEFAULT_INSULATION,
    DEFAULT_HEAT_CAPACITY,
    DEFAULT_HEATER_OUTPUT,
    DEFAULT_DIURNAL_AMPLITUDE,
    DEFAULT_HYSTERESIS,
    DEFAULT_TIME_STEP_SECONDS,
    DEFAULT_TOTAL_HOURS,
    DEFAULT_NIGHT_START,
    DEFAULT_NIGHT_END,
    DEFAULT_SETBACK_TEMP,
    HEAT_LOSS_SCALE,
    HOURS_PER_DAY,
    SECONDS_PER_HOUR,
)
from .errors import ConfigurationError
from .integrate import Solver

_LOGGER = logging.getLogger(__name__)


def _parse_enum(enum_cls, value, aliases=None):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid {enum_cls.__name__} {value!r}")
    if aliases and isinstance(value, (str, int)) and value in aliases:
        return aliases[value]
    if isinstance(value, str):
        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        for member in enum_cls:
            if member.value == key:
                return member
        if aliases and key in aliases:
            return aliases[key]
    choices = ", ".join(m.value for m in enum_cls)
    raise ConfigurationError(f"Invalid {enum_cls.__name__} '{value}'. Expected one of: {choices}")


class HeatingMode(Enum):
    CONSTANT = "constant"
    NIGHT_SETBACK = "night_setback"

    @classmethod
    def parse(cls, value):
        # Mode 1 / Mode 2 numbering from the interactive simulator
        return _parse_enum(cls, value, aliases={
            1: cls.CONSTANT, 2: cls.NIGHT_SETBACK,
            "1": cls.CONSTANT, "2": cls.NIGHT_SETBACK,
            "setback": cls.NIGHT_SETBACK,
        })


class SetbackPolicy(Enum):
    DISABLED = "disabled"              # Heating forced OFF inside the night window
    SETBACK_TARGET = "setback_target"  # Thermostat keeps running against setback_temp_f

    @classmethod
    def parse(cls, value):
        return _parse_enum(cls, value, aliases={"off": cls.DISABLED, "setback": cls.SETBACK_TARGET})


@dataclass(frozen=True)
class NightWindow:
    """Hours of day [start, end); wraps past midnight when start > end."""
    start: float = DEFAULT_NIGHT_START
    end: float = DEFAULT_NIGHT_END

    @classmethod
    def parse(cls, value):
        if value is None:
            return cls()
        if isinstance(value, NightWindow):
            return value
        if isinstance(value, dict):
            unknown = set(value) - {"start", "end"}
            if unknown:
                raise ConfigurationError(f"Unknown night_window keys: {sorted(unknown)}")
            return cls(start=value.get("start", DEFAULT_NIGHT_START), end=value.get("end", DEFAULT_NIGHT_END))
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return cls(start=value[0], end=value[1])
        raise ConfigurationError(f"night_window must be [start, end] or {{'start': h, 'end': h}}, got {value!r}")


@dataclass(frozen=True)
class SimulationConfig:
    """
    Everything a simulation run needs. Immutable; validated on construction.
    Temperatures in F, energy in BTU, heat capacity in BTU/F.
    """
    outside_base_temp_f: float = DEFAULT_OUTSIDE_BASE_TEMP
    desired_temp_f: float = DEFAULT_DESIRED_TEMP
    insulation_factor: float = DEFAULT_INSULATION
    house_heat_capacity: float = DEFAULT_HEAT_CAPACITY
    heater_output: float = DEFAULT_HEATER_OUTPUT
    diurnal_amplitude: float = DEFAULT_DIURNAL_AMPLITUDE
    hysteresis_band: float = DEFAULT_HYSTERESIS
    mode: HeatingMode = HeatingMode.CONSTANT
    time_step_seconds: float = DEFAULT_TIME_STEP_SECONDS
    total_hours: float = DEFAULT_TOTAL_HOURS
    night_window: NightWindow = field(default_factory=NightWindow)
    setback_policy: SetbackPolicy = SetbackPolicy.DISABLED
    setback_temp_f: float = DEFAULT_SETBACK_TEMP
    initial_temp_f: Optional[float] = None  # None -> start at desired_temp_f
    solver: Solver = Solver.RK4

    def __post_init__(self):
        # Accept plain strings/lists for the structured fields
        object.__setattr__(self, "mode", HeatingMode.parse(self.mode))
        object.__setattr__(self, "setback_policy", SetbackPolicy.parse(self.setback_policy))
        object.__setattr__(self, "night_window", NightWindow.parse(self.night_window))
        object.__setattr__(self, "solver", _parse_enum(Solver, self.solver))
        self.validate()
        self._normalize_numbers()

    def validate(self):
        numeric = {
            "outside_base_temp_f": self.outside_base_temp_f,
            "desired_temp_f": self.desired_temp_f,
            "insulation_factor": self.insulation_factor,
            "house_heat_capacity": self.house_heat_capacity,
            "heater_output": self.heater_output,
            "diurnal_amplitude": self.diurnal_amplitude,
            "hysteresis_band": self.hysteresis_band,
            "time_step_seconds": self.time_step_seconds,
            "total_hours": self.total_hours,
            "setback_temp_f": self.setback_temp_f,
            "night_window.start": self.night_window.start,
            "night_window.end": self.night_window.end,
        }
        if self.initial_temp_f is not None:
            numeric["initial_temp_f"] = self.initial_temp_f

        for name, value in numeric.items():
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}")

        # These make the derivative undefined or the loop bound non-positive
        if self.insulation_factor <= 0:
            raise ConfigurationError(f"insulation_factor must be > 0, got {self.insulation_factor}")
        if self.house_heat_capacity <= 0:
            raise ConfigurationError(f"house_heat_capacity must be > 0, got {self.house_heat_capacity}")
        if self.time_step_seconds <= 0:
            raise ConfigurationError(f"time_step_seconds must be > 0, got {self.time_step_seconds}")
        if self.total_hours <= 0:
            raise ConfigurationError(f"total_hours must be > 0, got {self.total_hours}")

        if self.hysteresis_band <= 0:
            raise ConfigurationError(f"hysteresis_band must be > 0, got {self.hysteresis_band}")
        if self.diurnal_amplitude < 0:
            raise ConfigurationError(f"diurnal_amplitude must be >= 0, got {self.diurnal_amplitude}")
        if self.heater_output < 0:
            raise ConfigurationError(f"heater_output must be >= 0, got {self.heater_output}")
        for label, hour in (("start", self.night_window.start), ("end", self.night_window.end)):
            if not 0 <= hour < HOURS_PER_DAY:
                raise ConfigurationError(f"night_window {label} must be within [0, 24), got {hour}")
        if self.total_steps < 1:
            raise ConfigurationError(
                f"total_hours={self.total_hours} is shorter than one time step of {self.time_step_seconds}s")

    def _normalize_numbers(self):
        # numpy scalars and ints become plain floats so exports stay JSON-serializable
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, numbers.Real) and not isinstance(value, bool):
                object.__setattr__(self, f.name, float(value))
        window = self.night_window
        object.__setattr__(self, "night_window", NightWindow(float(window.start), float(window.end)))

    # --- Derived Quantities ---
    @property
    def heat_loss_coefficient(self):
        """BTU/hr per F of indoor/outdoor difference."""
        return HEAT_LOSS_SCALE / self.insulation_factor

    @property
    def dt_hours(self):
        return self.time_step_seconds / SECONDS_PER_HOUR

    @property
    def steps_per_hour(self):
        return SECONDS_PER_HOUR / self.time_step_seconds

    @property
    def total_steps(self):
        # Fractional remainders are truncated
        return int(self.total_hours * SECONDS_PER_HOUR / self.time_step_seconds)

    @property
    def start_temp_f(self):
        return self.desired_temp_f if self.initial_temp_f is None else self.initial_temp_f

    @property
    def time_constant_hours(self):
        return self.house_heat_capacity / self.heat_loss_coefficient

    def to_dict(self):
        data = asdict(self)
        data["mode"] = self.mode.value
        data["setback_policy"] = self.setback_policy.value
        data["solver"] = self.solver.value
        data["night_window"] = [self.night_window.start, self.night_window.end]
        return data


def config_from_dict(data: dict, **overrides) -> SimulationConfig:
    """Builds a config from plain JSON-style values. None-valued overrides are ignored."""
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config must be a JSON object, got {type(data).__name__}")

    merged = dict(data)
    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(SimulationConfig)}
    unknown = set(merged) - known - {"description"}
    if unknown:
        raise ConfigurationError(f"Unknown config keys: {sorted(unknown)}")
    merged.pop("description", None)

    return SimulationConfig(**merged)


def load_config(filename, **overrides) -> SimulationConfig:
    with open(filename, 'r') as f:
        # Support C-style // comments to allow user annotations
        content = f.read()
        content = re.sub(r'//.*', '', content)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Could not parse {filename}: {e}") from e

    config = config_from_dict(data, **overrides)
    _LOGGER.debug(f"Loaded config from {filename}: {config}")
    return config
