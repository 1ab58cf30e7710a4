import math
import numpy as np

from .constants import DIURNAL_PHASE_HOURS, HOURS_PER_DAY


def outside_temp(config, hour_of_day: float) -> float:
    """
    Instantaneous outdoor temperature (F) from the diurnal sinusoid.
    Minimum at 03:00, maximum at 15:00. hour_of_day is continuous.
    """
    swing = config.diurnal_amplitude / 2
    return config.outside_base_temp_f + swing * math.sin(
        2 * math.pi * (hour_of_day - DIURNAL_PHASE_HOURS) / HOURS_PER_DAY)


def outside_temp_trace(config, hours):
    """Vectorized outside_temp over an array of hours (chart outdoor curve)."""
    hours = np.asarray(hours, dtype=float)
    swing = config.diurnal_amplitude / 2
    return config.outside_base_temp_f + swing * np.sin(
        2 * np.pi * (hours - DIURNAL_PHASE_HOURS) / HOURS_PER_DAY)
