"""Particle state, periodic box and initial configurations."""

from .box import Box
from .lattice import cell_node_positions, thermal_velocities
from .state import ParticleState

__all__ = ["Box", "ParticleState", "cell_node_positions", "thermal_velocities"]
