"""Tests for the Lennard-Jones force provider."""

import numpy as np
import pytest

from mdbench.forcefields import ForceProvider, LennardJonesForce
from mdbench.system import Box, cell_node_positions


class TestForceProviderInterface:
    """Test ForceProvider interface."""

    def test_abstract_class(self):
        """Test that ForceProvider cannot be instantiated."""
        with pytest.raises(TypeError):
            ForceProvider()


class TestLennardJonesForce:
    """Test Lennard-Jones force."""

    @pytest.fixture
    def box(self):
        return Box.cubic(10.0)

    def test_zero_force_at_minimum(self, box):
        """Test force vanishes at r = 2^(1/6) sigma."""
        r_min = 2.0 ** (1.0 / 6.0)
        positions = np.array([[1.0, 1.0, 1.0], [1.0 + r_min, 1.0, 1.0]])
        lj = LennardJonesForce(cutoff=3.0)
        assert np.allclose(lj.compute(positions, box), 0.0, atol=1e-10)

    def test_repulsive_at_short_range(self, box):
        """Test particles closer than the minimum are pushed apart."""
        positions = np.array([[1.0, 1.0, 1.0], [1.9, 1.0, 1.0]])
        forces = LennardJonesForce(cutoff=3.0).compute(positions, box)
        assert forces[0, 0] < 0
        assert forces[1, 0] > 0

    def test_force_magnitude(self, box):
        """Test F = 24 eps [2 (s/r)^12 - (s/r)^6] / r."""
        r = 1.5
        positions = np.array([[0.0, 0.0, 0.0], [r, 0.0, 0.0]])
        forces = LennardJonesForce(cutoff=3.0).compute(positions, box)
        expected = 24.0 * (2.0 / r**12 - 1.0 / r**6) / r
        assert forces[1, 0] == pytest.approx(expected)

    def test_newtons_third_law(self, box):
        """Test net force is zero for a perturbed lattice."""
        box = Box.cubic(6.0)
        rng = np.random.default_rng(0)
        positions = cell_node_positions(27, 6.0) + rng.uniform(-0.2, 0.2, (27, 3))
        forces = LennardJonesForce(cutoff=3.0).compute(positions, box)
        assert np.allclose(forces.sum(axis=0), 0.0, atol=1e-8)

    def test_cutoff(self, box):
        """Test pairs beyond the cutoff do not interact."""
        positions = np.array([[0.0, 0.0, 0.0], [2.6, 0.0, 0.0]])
        forces, energy = LennardJonesForce(cutoff=2.5).compute_with_energy(positions, box)
        assert np.all(forces == 0.0)
        assert energy == 0.0

    def test_periodic_interaction(self, box):
        """Test particles interact across the boundary through the nearest image."""
        lj = LennardJonesForce(cutoff=3.0)
        across = np.array([[0.5, 5.0, 5.0], [9.0, 5.0, 5.0]])
        direct = np.array([[5.0, 5.0, 5.0], [3.5, 5.0, 5.0]])
        assert lj.potential_energy(across, box) == pytest.approx(
            lj.potential_energy(direct, box)
        )

    def test_energy_unshifted(self, box):
        """Test V = 4 eps [(s/r)^12 - (s/r)^6] without shift."""
        r = 1.2
        positions = np.array([[0.0, 0.0, 0.0], [r, 0.0, 0.0]])
        lj = LennardJonesForce(cutoff=3.0, shift=False)
        assert lj.potential_energy(positions, box) == pytest.approx(
            4.0 * (1.0 / r**12 - 1.0 / r**6)
        )

    def test_energy_shifted_continuous(self, box):
        """Test shifted energy goes to zero at the cutoff."""
        lj = LennardJonesForce(cutoff=2.5, shift=True)
        positions = np.array([[0.0, 0.0, 0.0], [2.5 - 1e-9, 0.0, 0.0]])
        assert lj.potential_energy(positions, box) == pytest.approx(0.0, abs=1e-8)

    def test_forces_match_energy_gradient(self, box):
        """Test F = -dV/dx by central finite differences."""
        rng = np.random.default_rng(1)
        positions = np.array(
            [[2.0, 2.0, 2.0], [3.2, 2.1, 2.0], [2.4, 3.1, 2.3], [8.0, 2.5, 9.5]]
        )
        positions += rng.uniform(-0.05, 0.05, positions.shape)
        lj = LennardJonesForce(cutoff=3.0)
        forces, _ = lj.compute_with_energy(positions, box)

        h = 1e-6
        numerical = np.zeros_like(positions)
        for i in range(len(positions)):
            for k in range(3):
                plus = positions.copy()
                minus = positions.copy()
                plus[i, k] += h
                minus[i, k] -= h
                numerical[i, k] = -(
                    lj.potential_energy(plus, box) - lj.potential_energy(minus, box)
                ) / (2 * h)

        assert np.allclose(forces, numerical, atol=1e-5)

    def test_compute_with_energy_consistent(self, box):
        """Test compute_with_energy agrees with compute and potential_energy."""
        box = Box.cubic(6.0)
        rng = np.random.default_rng(2)
        positions = cell_node_positions(27, 6.0) + rng.uniform(-0.2, 0.2, (27, 3))
        lj = LennardJonesForce(cutoff=3.0)
        forces, energy = lj.compute_with_energy(positions, box)
        assert np.allclose(forces, lj.compute(positions, box))
        assert energy == pytest.approx(lj.potential_energy(positions, box))

    def test_cutoff_larger_than_half_box(self):
        """Test the minimum image check."""
        lj = LennardJonesForce(cutoff=3.0)
        with pytest.raises(ValueError):
            lj.check_box(Box.cubic(5.0))
        lj.check_box(Box.cubic(6.0))

    def test_invalid_parameters(self):
        """Test non-positive parameters raise errors."""
        with pytest.raises(ValueError):
            LennardJonesForce(epsilon=0.0)
