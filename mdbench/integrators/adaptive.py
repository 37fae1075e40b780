"""Adaptive integrators backed by scipy.integrate.solve_ivp."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from scipy.integrate import solve_ivp

from ..solution import Solution
from .base import Integrator, Tolerance

if TYPE_CHECKING:
    from ..problem import NBodyProblem


class ScipyIntegrator(Integrator):
    """
    Explicit Runge-Kutta method with embedded error control.

    The second-order problem is solved in first-order form y = [q, v].
    Every accepted step is returned by solve_ivp, so the accepted-step
    count is len(t) - 1 and the force evaluation count is scipy's nfev.

    Attributes:
        method: solve_ivp method name.
    """

    adaptive = True
    method: str = "RK45"
    order: int = 5

    def __init__(self, first_step: float | None = None, max_step: float = np.inf) -> None:
        """
        Initialize adaptive integrator.

        Args:
            first_step: Initial step size. Chosen by scipy if None.
            max_step: Maximum allowed step size.
        """
        self.first_step = first_step
        self.max_step = max_step

    def solve(
        self, problem: NBodyProblem, control: Tolerance, save_every: int = 1
    ) -> Solution:
        """
        Integrate with step-size control.

        Raises:
            RuntimeError: If the solver does not reach tspan[1].
        """
        self.check_step_control(control)
        if save_every < 1:
            raise ValueError(f"save_every must be >= 1, got {save_every}")

        problem.reset_counters()
        result = solve_ivp(
            problem.rhs,
            problem.tspan,
            problem.initial_vector(),
            method=self.method,
            atol=control.abstol,
            rtol=control.reltol,
            first_step=self.first_step,
            max_step=self.max_step,
        )
        if not result.success:
            raise RuntimeError(f"{self.name} failed: {result.message}")

        n_accepted = len(result.t) - 1
        keep = np.arange(0, len(result.t), save_every)
        if keep[-1] != len(result.t) - 1:
            keep = np.append(keep, len(result.t) - 1)
        positions, velocities = problem.split(result.y[:, keep])

        return Solution(
            t=result.t[keep],
            positions=positions,
            velocities=velocities,
            n_accepted=n_accepted,
            n_feval=int(result.nfev),
            algorithm=self.name,
            problem=problem,
            success=bool(result.success),
            message=str(result.message),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(first_step={self.first_step}, max_step={self.max_step})"


class RK23(ScipyIntegrator):
    """Bogacki-Shampine 3(2) pair."""

    name = "RK23"
    method = "RK23"
    order = 3


class RK45(ScipyIntegrator):
    """Dormand-Prince 5(4) pair."""

    name = "RK45"
    method = "RK45"
    order = 5


class DOP853(ScipyIntegrator):
    """Dormand-Prince 8(5,3) pair."""

    name = "DOP853"
    method = "DOP853"
    order = 8
