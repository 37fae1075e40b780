"""Base interface for integrators and their step-control parameters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from ..problem import NBodyProblem
    from ..solution import Solution


@dataclass(frozen=True)
class FixedStep:
    """Fixed time step for symplectic integrators."""

    dt: float

    def __post_init__(self) -> None:
        if not self.dt > 0:
            raise ValueError(f"dt must be positive, got {self.dt}")


@dataclass(frozen=True)
class Tolerance:
    """Absolute and relative error tolerances for adaptive integrators."""

    abstol: float
    reltol: float

    def __post_init__(self) -> None:
        if not (self.abstol > 0 and self.reltol > 0):
            raise ValueError(
                f"tolerances must be positive, got abstol={self.abstol}, reltol={self.reltol}"
            )


StepControl = Union[FixedStep, Tolerance]


class Integrator(ABC):
    """
    Abstract base class for time integration algorithms.

    An integrator solves an :class:`~mdbench.problem.NBodyProblem` over its
    whole time span and reports the trajectory together with step and force
    evaluation counts.
    """

    #: Human-readable identifier used in result tables.
    name: str = ""

    #: Whether the integrator takes a Tolerance (True) or a FixedStep (False).
    adaptive: bool = False

    @property
    def step_control_type(self) -> type:
        """Return the step-control class this integrator accepts."""
        return Tolerance if self.adaptive else FixedStep

    def check_step_control(self, control: StepControl) -> None:
        """Raise ValueError if the step control does not fit this integrator."""
        expected = self.step_control_type
        if not isinstance(control, expected):
            raise ValueError(
                f"{self.name} requires {expected.__name__}, got {type(control).__name__}"
            )

    @abstractmethod
    def solve(
        self, problem: NBodyProblem, control: StepControl, save_every: int = 1
    ) -> Solution:
        """
        Integrate the problem from tspan[0] to tspan[1].

        Args:
            problem: Problem to integrate. Its force counter is reset.
            control: FixedStep or Tolerance, matching the integrator kind.
            save_every: Keep every n-th accepted step in the trajectory.
                The initial and final states are always kept.

        Returns:
            Solution with trajectory and counters.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
