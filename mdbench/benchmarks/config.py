"""Benchmark configurations."""

from __future__ import annotations

from dataclasses import dataclass

from ..integrators import FixedStep, Integrator, StepControl, Tolerance, get_integrator


@dataclass(frozen=True)
class IntegratorConfig:
    """
    One (integrator, step-control) pair to benchmark.

    Attributes:
        integrator: Registered integrator name.
        control: FixedStep for symplectic integrators, Tolerance for adaptive ones.
    """

    integrator: str
    control: StepControl

    def __post_init__(self) -> None:
        """Check that the step control matches the integrator kind."""
        self.build().check_step_control(self.control)

    @classmethod
    def fixed(cls, integrator: str, dt: float) -> IntegratorConfig:
        """Create a fixed-step configuration."""
        return cls(integrator, FixedStep(dt))

    @classmethod
    def tolerance(cls, integrator: str, abstol: float, reltol: float) -> IntegratorConfig:
        """Create an adaptive configuration."""
        return cls(integrator, Tolerance(abstol, reltol))

    @property
    def dt(self) -> float | None:
        """Step size, or None for adaptive configurations."""
        return self.control.dt if isinstance(self.control, FixedStep) else None

    @property
    def abstol(self) -> float | None:
        """Absolute tolerance, or None for fixed-step configurations."""
        return self.control.abstol if isinstance(self.control, Tolerance) else None

    @property
    def reltol(self) -> float | None:
        """Relative tolerance, or None for fixed-step configurations."""
        return self.control.reltol if isinstance(self.control, Tolerance) else None

    @property
    def label(self) -> str:
        """Integrator name with its step control, e.g. "VelocityVerlet dt=0.001"."""
        if isinstance(self.control, FixedStep):
            return f"{self.integrator} dt={self.control.dt:g}"
        return f"{self.integrator} tol={self.control.abstol:g}/{self.control.reltol:g}"

    def build(self) -> Integrator:
        """Instantiate the integrator."""
        return get_integrator(self.integrator)
