"""Tests for energy extraction from solutions."""

import numpy as np
import pytest

from mdbench import simulate
from mdbench.analysis import (
    energy_error,
    energy_error_history,
    energy_history,
    temperature_history,
    total_energy,
)


@pytest.fixture
def solution(small_problem):
    """Velocity Verlet trajectory of the small argon system."""
    return simulate.solve(small_problem, "VelocityVerlet", dt=0.005)


class TestEnergy:
    """Test energy helpers."""

    def test_total_energy_at_start(self, solution):
        """Test the energy at t0 matches the initial state."""
        problem = solution.problem
        expected = problem.total_energy(problem.state.positions, problem.state.velocities)
        assert total_energy(solution, 0.0) == pytest.approx(expected)

    def test_energy_error(self, solution):
        """Test the error is |E(t_end) - E(t0)|."""
        history = energy_history(solution)
        assert energy_error(solution) == pytest.approx(abs(history[-1] - history[0]))
        assert energy_error(solution) >= 0.0

    def test_energy_error_small(self, solution):
        """Test Velocity Verlet conserves energy closely at a small step."""
        problem = solution.problem
        kinetic = problem.kinetic_energy(problem.state.velocities)
        assert energy_error(solution) < 1e-2 * kinetic

    def test_error_history(self, solution):
        """Test the error history starts at zero and covers every saved point."""
        times, errors = energy_error_history(solution)
        assert len(times) == len(errors) == solution.n_saved
        assert errors[0] == 0.0
        assert np.all(errors >= 0.0)

    def test_temperature_history(self, solution, small_params):
        """Test the initial temperature is close to the target."""
        temperatures = temperature_history(solution)
        assert temperatures.shape == (solution.n_saved,)
        target = small_params.to_reduced().temperature
        assert temperatures[0] == pytest.approx(target, rel=0.4)
