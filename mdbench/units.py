"""
Physical parameters of liquid argon and their reduced-unit form.

Reduced LJ units:
- Length: σ (LJ size parameter)
- Energy: ε (LJ well depth)
- Mass: m (particle mass)
- Time: τ = σ√(m/ε)
- Temperature: T* = kT/ε (so kB = 1)
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

ATOMIC_MASS_UNIT = 1.6747e-27  # kg
BOLTZMANN = 1.38e-23  # J/K


@dataclass(frozen=True)
class ReducedUnits:
    """
    Dimensionless parameters handed to the simulation.

    Attributes:
        box_length: L* = L / σ.
        cutoff: R* = R / σ.
        velocity_scale: v* = v_dev / sqrt(ε / m).
        temperature: T* = kB T / ε.
        n_particles: Number of particles.
        sigma: Always 1.
        epsilon: Always 1.
        mass: Always 1.
        k_B: Always 1.
        time_unit: τ in seconds, used to convert physical times.
    """

    box_length: float
    cutoff: float
    velocity_scale: float
    temperature: float
    n_particles: int
    time_unit: float
    sigma: float = 1.0
    epsilon: float = 1.0
    mass: float = 1.0
    k_B: float = 1.0

    @property
    def density(self) -> float:
        """Reduced number density ρ* = N σ³ / L³."""
        return self.n_particles / self.box_length**3

    def to_reduced_time(self, seconds: float) -> float:
        """Convert a physical time in seconds to reduced time."""
        return seconds / self.time_unit

    def to_seconds(self, reduced_time: float) -> float:
        """Convert a reduced time to seconds."""
        return reduced_time * self.time_unit


@dataclass(frozen=True)
class ArgonParameters:
    """
    Liquid argon state point in SI units.

    Defaults describe argon near its triple point: T = 120 K and
    ρ = 1374 kg/m³ with ε = kB T.

    Attributes:
        temperature: Temperature in K.
        k_B: Boltzmann constant in J/K.
        epsilon: LJ energy scale in J. Defaults to kB * T.
        sigma: LJ length scale in m.
        density: Mass density in kg/m³.
        mass: Particle mass in kg.
        n_particles: Number of particles.
        cutoff_ratio: Potential cutoff in units of σ.
    """

    temperature: float = 120.0
    k_B: float = BOLTZMANN
    epsilon: float | None = None
    sigma: float = 3.4e-10
    density: float = 1374.0
    mass: float = 39.95 * ATOMIC_MASS_UNIT
    n_particles: int = 350
    cutoff_ratio: float = 3.5

    def __post_init__(self) -> None:
        """Fill the energy scale and validate."""
        if self.epsilon is None:
            object.__setattr__(self, "epsilon", self.temperature * self.k_B)
        for name in ("temperature", "k_B", "epsilon", "sigma", "density", "mass", "cutoff_ratio"):
            value = getattr(self, name)
            if not value > 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.n_particles < 1:
            raise ValueError(f"n_particles must be positive, got {self.n_particles}")

    @property
    def box_length(self) -> float:
        """Side of the cubic cell holding N particles at the given density, in m."""
        return float((self.mass * self.n_particles / self.density) ** (1 / 3))

    @property
    def box_volume(self) -> float:
        """Cell volume in m³."""
        return self.mass * self.n_particles / self.density

    @property
    def cutoff(self) -> float:
        """Potential cutoff radius in m."""
        return self.cutoff_ratio * self.sigma

    @property
    def thermal_velocity(self) -> float:
        """Velocity scale sqrt(kB T / m) in m/s."""
        return float(np.sqrt(self.k_B * self.temperature / self.mass))

    @property
    def time_unit(self) -> float:
        """Characteristic time τ = σ sqrt(m / ε) in s."""
        return float(self.sigma * np.sqrt(self.mass / self.epsilon))

    def to_reduced(self) -> ReducedUnits:
        """Convert to dimensionless units."""
        return ReducedUnits(
            box_length=self.box_length / self.sigma,
            cutoff=self.cutoff / self.sigma,
            velocity_scale=self.thermal_velocity / float(np.sqrt(self.epsilon / self.mass)),
            temperature=self.k_B * self.temperature / self.epsilon,
            n_particles=self.n_particles,
            time_unit=self.time_unit,
        )
