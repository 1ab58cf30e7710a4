"""Lumped-mass house heating simulator: constant heating vs night setback."""
from .config import HeatingMode, NightWindow, SetbackPolicy, SimulationConfig, load_config
from .errors import ComputationWarning, ConfigurationError
from .integrate import Solver
from .run_model import ModeResult, StepRecord, ThermalState, run
from .compare import ComparisonSummary, compare, simulate

__version__ = "0.1.0"
