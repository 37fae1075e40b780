"""Initial particle configurations."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def cell_node_positions(n_particles: int, box_length: float) -> NDArray[np.floating]:
    """
    Place particles on the nodes of a simple cubic lattice filling the box.

    The lattice has the smallest n with n^3 >= N nodes per side; nodes sit at the centres of
    the lattice cells and are filled in x, y, z order until N particles are
    placed. No random displacement is applied.

    Args:
        n_particles: Number of particles.
        box_length: Side length of the cubic box.

    Returns:
        Positions array of shape (N, 3).
    """
    if n_particles < 1:
        raise ValueError(f"n_particles must be positive, got {n_particles}")

    # Cube roots are inexact, e.g. 64 ** (1/3) = 3.9999...
    n_side = int(round(n_particles ** (1 / 3)))
    while n_side**3 < n_particles:
        n_side += 1
    spacing = box_length / n_side

    idx = np.arange(n_side)
    ix, iy, iz = np.meshgrid(idx, idx, idx, indexing="ij")
    nodes = np.stack([ix.ravel(), iy.ravel(), iz.ravel()], axis=1)[:n_particles]
    return (nodes + 0.5) * spacing


def thermal_velocities(
    n_particles: int,
    velocity_scale: float,
    seed: int = 42,
    remove_drift: bool = True,
) -> NDArray[np.floating]:
    """
    Draw Maxwell-Boltzmann velocities.

    Args:
        n_particles: Number of particles.
        velocity_scale: Standard deviation of each velocity component.
        seed: Random seed for reproducibility.
        remove_drift: Subtract the mean velocity so the system has zero momentum.

    Returns:
        Velocities array of shape (N, 3).
    """
    rng = np.random.default_rng(seed)
    velocities = rng.normal(0.0, velocity_scale, (n_particles, 3))
    if remove_drift and n_particles > 1:
        velocities -= velocities.mean(axis=0)
    return velocities
