"""
Bang-bang thermostat with a hysteresis dead zone.

The heater starts OFF. Each step the controller sees the current indoor
temperature, its previous state and the active target:

    1. heating suppressed (night window)  -> OFF
    2. T < target - band/2                -> ON
    3. T > target + band/2                -> OFF
    4. otherwise                          -> hold previous state
"""
from .config import HeatingMode, SetbackPolicy
from .constants import HOURS_PER_DAY


def decide_heater(current_temp: float, heater_on: bool, target: float, band: float, suppressed: bool = False) -> bool:
    if suppressed:
        return False

    half_band = band / 2
    if current_temp < target - half_band:
        return True
    if current_temp > target + half_band:
        return False
    # Dead zone
    return heater_on


def in_night_window(hour_of_day: float, window) -> bool:
    hour = hour_of_day % HOURS_PER_DAY
    if window.start > window.end:
        # Wraps midnight, e.g. 22:00 - 08:00
        return hour >= window.start or hour < window.end
    return window.start <= hour < window.end


def heating_target(config, mode: HeatingMode, hour_of_day: float):
    """
    Returns (target_temp, suppressed) for a mode at a given hour.

    Under SetbackPolicy.DISABLED the night window forces the heater OFF and the
    daytime target is kept (it is never compared against). Under
    SetbackPolicy.SETBACK_TARGET the thermostat stays active against
    config.setback_temp_f.
    """
    if mode is HeatingMode.NIGHT_SETBACK and in_night_window(hour_of_day, config.night_window):
        if config.setback_policy is SetbackPolicy.SETBACK_TARGET:
            return config.setback_temp_f, False
        return config.desired_temp_f, True
    return config.desired_temp_f, False
