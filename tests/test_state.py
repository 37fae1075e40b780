"""Tests for ParticleState and initial configurations."""

import numpy as np
import pytest

from mdbench.system import Box, ParticleState, cell_node_positions, thermal_velocities


class TestParticleState:
    """Test ParticleState container."""

    def test_create_defaults_velocities(self):
        """Test that velocities default to zero."""
        state = ParticleState.create(
            positions=np.zeros((3, 3)), masses=np.ones(3), box=Box.cubic(5.0)
        )
        assert state.n_particles == 3
        assert np.all(state.velocities == 0)

    def test_shape_validation(self):
        """Test that mismatched shapes raise errors."""
        with pytest.raises(ValueError):
            ParticleState(
                positions=np.zeros((2, 3)),
                velocities=np.zeros((3, 3)),
                masses=np.ones(3),
                box=Box.cubic(5.0),
            )

    def test_copy_is_independent(self):
        """Test that copy() does not share arrays."""
        state = ParticleState.create(
            positions=np.zeros((2, 3)), masses=np.ones(2), box=Box.cubic(5.0)
        )
        clone = state.copy()
        clone.positions[0, 0] = 1.0
        assert state.positions[0, 0] == 0.0

    def test_kinetic_energy_and_temperature(self):
        """Test KE = sum(m v^2 / 2) and T = 2 KE / (3N - 3)."""
        state = ParticleState.create(
            positions=np.zeros((2, 3)),
            masses=np.array([1.0, 2.0]),
            box=Box.cubic(5.0),
            velocities=np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]),
        )
        assert state.kinetic_energy == pytest.approx(1.5)
        assert state.temperature() == pytest.approx(2.0 * 1.5 / 3.0)
        assert state.temperature(k_B=2.0) == pytest.approx(0.5)

    def test_single_particle_temperature(self):
        """Test that a single particle has zero temperature."""
        state = ParticleState.create(
            positions=np.zeros((1, 3)),
            masses=np.ones(1),
            box=Box.cubic(5.0),
            velocities=np.ones((1, 3)),
        )
        assert state.temperature() == 0.0


class TestLattice:
    """Test lattice placement."""

    def test_full_lattice(self):
        """Test a perfect cube fills every node once."""
        positions = cell_node_positions(27, 3.0)
        assert positions.shape == (27, 3)
        assert np.allclose(np.unique(positions[:, 0]), [0.5, 1.5, 2.5])

    def test_perfect_cube_side(self):
        """Test 64 particles use a 4x4x4 lattice despite rounding in the cube root."""
        positions = cell_node_positions(64, 4.0)
        assert len(np.unique(positions[:, 0])) == 4

    def test_partial_lattice_inside_box(self):
        """Test a partially filled lattice stays inside the box."""
        positions = cell_node_positions(350, 7.5)
        assert positions.shape == (350, 3)
        assert np.all(positions > 0)
        assert np.all(positions < 7.5)
        # No two particles share a node
        assert len(np.unique(positions, axis=0)) == 350

    def test_deterministic(self):
        """Test lattice placement is deterministic."""
        np.testing.assert_array_equal(
            cell_node_positions(100, 5.0), cell_node_positions(100, 5.0)
        )

    def test_invalid_count(self):
        """Test that zero particles raise errors."""
        with pytest.raises(ValueError):
            cell_node_positions(0, 1.0)


class TestThermalVelocities:
    """Test velocity generation."""

    def test_zero_momentum(self):
        """Test centre-of-mass drift is removed."""
        v = thermal_velocities(100, 1.0, seed=1)
        assert np.allclose(v.mean(axis=0), 0.0, atol=1e-12)

    def test_seeded(self):
        """Test same seed gives identical velocities."""
        np.testing.assert_array_equal(
            thermal_velocities(10, 1.0, seed=3), thermal_velocities(10, 1.0, seed=3)
        )

    def test_scale(self):
        """Test the spread follows the velocity scale."""
        v = thermal_velocities(20000, 2.0, seed=0)
        assert np.std(v) == pytest.approx(2.0, rel=0.05)
