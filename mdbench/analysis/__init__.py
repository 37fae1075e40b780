"""Analysis of integrated trajectories."""

from .energy import (
    energy_error,
    energy_error_history,
    energy_history,
    temperature_history,
    total_energy,
)

__all__ = [
    "total_energy",
    "energy_error",
    "energy_history",
    "energy_error_history",
    "temperature_history",
]
