"""
Fixed-step symplectic integrators.

Every scheme here is a symmetric composition of a second-order Verlet
kernel with sub-step weights w_1, ..., w_s summing to one:

    Φ_h = S(w_s h) ∘ ... ∘ S(w_1 h)

Kick-drift-kick kernels (velocity Verlet):
    v += 0.5 * h * a(q)
    q += h * v
    v += 0.5 * h * a(q)

The acceleration at the end of one sub-step is the acceleration at the
start of the next, so a composition with s stages costs s force
evaluations per step (plus one for the initial state).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ..solution import Solution
from .base import FixedStep, Integrator

if TYPE_CHECKING:
    from ..problem import NBodyProblem


def triple_jump(order: int) -> tuple[float, float, float]:
    """
    Weights of the triple-jump composition raising an order-p method to p + 2.

    Args:
        order: Order p of the method being composed (must be even).

    Returns:
        (w1, w0, w1) with 2*w1 + w0 = 1.
    """
    if order < 2 or order % 2:
        raise ValueError(f"order must be even and >= 2, got {order}")
    cbrt = 2.0 ** (1.0 / (order + 1))
    w1 = 1.0 / (2.0 - cbrt)
    w0 = -cbrt * w1
    return (w1, w0, w1)


def symmetric_weights(outer: tuple[float, ...]) -> tuple[float, ...]:
    """
    Expand Yoshida's (w_1, ..., w_m) into the full symmetric sequence.

    Returns (w_m, ..., w_1, w_0, w_1, ..., w_m) with w_0 = 1 - 2 * sum(w_i).
    """
    w0 = 1.0 - 2.0 * sum(outer)
    return tuple(reversed(outer)) + (w0,) + tuple(outer)


class SymplecticIntegrator(Integrator):
    """
    Symmetric composition of Verlet sub-steps.

    Subclasses set ``name``, ``order``, ``weights`` and ``kernel``
    ("kdk" for velocity Verlet, "dkd" for position Verlet / leapfrog).
    """

    adaptive = False
    order: int = 2
    weights: tuple[float, ...] = (1.0,)
    kernel: str = "kdk"

    @property
    def stages(self) -> int:
        """Number of Verlet sub-steps per step."""
        return len(self.weights)

    def n_steps(self, tspan: tuple[float, float], dt: float) -> int:
        """Number of steps used to cover tspan with a step close to dt."""
        return max(1, int(round((tspan[1] - tspan[0]) / dt)))

    def solve(
        self, problem: NBodyProblem, control: FixedStep, save_every: int = 1
    ) -> Solution:
        """
        Integrate with a fixed step.

        The step is adjusted to span / round(span / dt) so the final step
        lands exactly on tspan[1].
        """
        self.check_step_control(control)
        if save_every < 1:
            raise ValueError(f"save_every must be >= 1, got {save_every}")

        problem.reset_counters()
        t0, t_end = problem.tspan
        n_steps = self.n_steps(problem.tspan, control.dt)
        dt = (t_end - t0) / n_steps

        q = problem.state.positions.copy()
        v = problem.state.velocities.copy()
        substeps = [w * dt for w in self.weights]

        times = [t0]
        positions = [q.copy()]
        velocities = [v.copy()]

        if self.kernel == "kdk":
            accel = problem.acceleration(q)
            for step in range(1, n_steps + 1):
                for h in substeps:
                    v += 0.5 * h * accel
                    q += h * v
                    accel = problem.acceleration(q)
                    v += 0.5 * h * accel
                if step % save_every == 0 or step == n_steps:
                    times.append(t0 + step * dt)
                    positions.append(q.copy())
                    velocities.append(v.copy())
        elif self.kernel == "dkd":
            for step in range(1, n_steps + 1):
                for h in substeps:
                    q += 0.5 * h * v
                    v += h * problem.acceleration(q)
                    q += 0.5 * h * v
                if step % save_every == 0 or step == n_steps:
                    times.append(t0 + step * dt)
                    positions.append(q.copy())
                    velocities.append(v.copy())
        else:
            raise ValueError(f"Unknown kernel {self.kernel!r}")

        times[-1] = t_end
        return Solution(
            t=np.array(times),
            positions=np.array(positions),
            velocities=np.array(velocities),
            n_accepted=n_steps,
            n_feval=problem.force_evaluations,
            algorithm=self.name,
            problem=problem,
        )


class VelocityVerlet(SymplecticIntegrator):
    """
    Velocity Verlet (kick-drift-kick), second order.

    The standard MD integrator: one force evaluation per step.
    """

    name = "VelocityVerlet"
    order = 2


class VerletLeapfrog(SymplecticIntegrator):
    """Position Verlet / leapfrog (drift-kick-drift), second order."""

    name = "VerletLeapfrog"
    order = 2
    kernel = "dkd"


class ForestRuth4(SymplecticIntegrator):
    """Forest-Ruth fourth-order method (triple jump of velocity Verlet)."""

    name = "ForestRuth4"
    order = 4
    weights = triple_jump(2)


class Suzuki4(SymplecticIntegrator):
    """Suzuki's five-stage fourth-order fractal composition."""

    name = "Suzuki4"
    order = 4
    weights = (
        1.0 / (4.0 - 4.0 ** (1.0 / 3.0)),
        1.0 / (4.0 - 4.0 ** (1.0 / 3.0)),
        1.0 - 4.0 / (4.0 - 4.0 ** (1.0 / 3.0)),
        1.0 / (4.0 - 4.0 ** (1.0 / 3.0)),
        1.0 / (4.0 - 4.0 ** (1.0 / 3.0)),
    )


class Yoshida6(SymplecticIntegrator):
    """Yoshida sixth-order method, solution A (7 stages)."""

    name = "Yoshida6"
    order = 6
    weights = symmetric_weights(
        (
            -1.17767998417887,
            0.235573213359357,
            0.784513610477560,
        )
    )


class Yoshida8(SymplecticIntegrator):
    """Yoshida eighth-order method, solution D (15 stages)."""

    name = "Yoshida8"
    order = 8
    weights = symmetric_weights(
        (
            0.102799849391985,
            -1.96061023297549,
            1.93813913762276,
            -0.158240635368243,
            -1.44485223686048,
            0.253693336566229,
            0.914844246229740,
        )
    )
