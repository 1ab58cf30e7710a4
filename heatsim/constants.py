"""
Core Physics and Simulation Constants.
Defaults describe the reference house used by the comparison.
"""

# Physics Defaults (reference house)
DEFAULT_OUTSIDE_BASE_TEMP = 30.0   # Mean outdoor temperature (F)
DEFAULT_DESIRED_TEMP = 68.0        # Heating setpoint (F)
DEFAULT_INSULATION = 5.0           # 1-10, higher = better insulated
DEFAULT_HEAT_CAPACITY = 4000.0     # Thermal Mass (BTU/F)
DEFAULT_HEATER_OUTPUT = 60000.0    # Heater Output while ON (BTU/hr)
DEFAULT_DIURNAL_AMPLITUDE = 15.0   # Peak-to-trough outdoor swing (F)

# Heat loss coefficient (BTU/hr/F) = HEAT_LOSS_SCALE / insulation
HEAT_LOSS_SCALE = 1000.0

# Outdoor Sinusoid: minimum at 03:00, maximum at 15:00
DIURNAL_PHASE_HOURS = 9.0
HOURS_PER_DAY = 24.0

# Simulation / Control Defaults
DEFAULT_HYSTERESIS = 1.0           # Full dead-zone width (F), i.e. +/-0.5F around setpoint
DEFAULT_TIME_STEP_SECONDS = 10.0
DEFAULT_TOTAL_HOURS = 24.0
DEFAULT_NIGHT_START = 22.0         # 10 PM
DEFAULT_NIGHT_END = 8.0            # 8 AM
DEFAULT_SETBACK_TEMP = 55.0        # Night target for the setback-target policy (F)

SECONDS_PER_HOUR = 3600.0

# Unit Conversions (display only)
BTU_TO_KWH = 0.000293071
