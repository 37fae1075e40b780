"""Integrator implementations and name registry."""

from __future__ import annotations

from .adaptive import DOP853, RK23, RK45, ScipyIntegrator
from .base import FixedStep, Integrator, StepControl, Tolerance
from .symplectic import (
    ForestRuth4,
    Suzuki4,
    SymplecticIntegrator,
    VelocityVerlet,
    VerletLeapfrog,
    Yoshida6,
    Yoshida8,
)

SYMPLECTIC_INTEGRATORS = [
    "VelocityVerlet",
    "VerletLeapfrog",
    "ForestRuth4",
    "Suzuki4",
    "Yoshida6",
    "Yoshida8",
]

ADAPTIVE_INTEGRATORS = ["RK23", "RK45", "DOP853"]

_REGISTRY: dict[str, type[Integrator]] = {
    cls.name: cls
    for cls in (
        VelocityVerlet,
        VerletLeapfrog,
        ForestRuth4,
        Suzuki4,
        Yoshida6,
        Yoshida8,
        RK23,
        RK45,
        DOP853,
    )
}


def get_integrator(name: str | Integrator) -> Integrator:
    """
    Look up an integrator by name.

    Args:
        name: Registered integrator name, or an Integrator instance (returned as is).

    Returns:
        New integrator instance.
    """
    if isinstance(name, Integrator):
        return name
    try:
        return _REGISTRY[name]()
    except KeyError:
        raise ValueError(
            f"Unknown integrator {name!r}. Available: {', '.join(sorted(_REGISTRY))}"
        ) from None


def available_integrators() -> list[str]:
    """Return all registered integrator names."""
    return list(_REGISTRY)


__all__ = [
    # Base classes
    "Integrator",
    "FixedStep",
    "Tolerance",
    "StepControl",
    # Symplectic
    "SymplecticIntegrator",
    "VelocityVerlet",
    "VerletLeapfrog",
    "ForestRuth4",
    "Suzuki4",
    "Yoshida6",
    "Yoshida8",
    # Adaptive
    "ScipyIntegrator",
    "RK23",
    "RK45",
    "DOP853",
    # Registry
    "SYMPLECTIC_INTEGRATORS",
    "ADAPTIVE_INTEGRATORS",
    "get_integrator",
    "available_integrators",
]
