from enum import Enum
from typing import Callable

from scipy.integrate import odeint


class Solver(Enum):
    RK4 = "rk4"
    EULER = "euler"
    ODEINT = "odeint"


def make_derivative(heater_btu_hr: float, t_out: float, ua: float, c_thermal: float) -> Callable[[float], float]:
    """
    dT/dt (F/hr) for the lumped house:
        (Q_heater - (T - T_out) * UA) / C
    Heater output and outdoor temperature are frozen for the whole step.
    """
    def dTdt(T):
        return (heater_btu_hr - (T - t_out) * ua) / c_thermal
    return dTdt


def rk4_step(f: Callable[[float], float], T: float, dt: float) -> float:
    """Classical 4-stage Runge-Kutta step of size dt (hours)."""
    k1 = f(T)
    k2 = f(T + k1 * dt / 2)
    k3 = f(T + k2 * dt / 2)
    k4 = f(T + k3 * dt)
    return T + (dt / 6) * (k1 + 2 * k2 + 2 * k3 + k4)


def euler_step(f: Callable[[float], float], T: float, dt: float) -> float:
    return T + dt * f(T)


def odeint_step(f: Callable[[float], float], T: float, dt: float) -> float:
    # Reference solution: LSODA over [0, dt] with the same frozen forcing
    solution = odeint(lambda y, t: f(y[0]), [T], [0.0, dt])
    return float(solution[-1][0])


_STEPPERS = {
    Solver.RK4: rk4_step,
    Solver.EULER: euler_step,
    Solver.ODEINT: odeint_step,
}


def advance(f: Callable[[float], float], T: float, dt: float, solver: Solver = Solver.RK4) -> float:
    try:
        stepper = _STEPPERS[solver]
    except KeyError:
        raise ValueError(f"Solver not found: {solver}")
    return stepper(f, T, dt)
