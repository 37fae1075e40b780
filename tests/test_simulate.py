"""Tests for the liquid argon problem builder and the solve entry point."""

import numpy as np
import pytest

from mdbench import simulate
from mdbench.integrators import FixedStep, Tolerance, VelocityVerlet
from mdbench.units import ArgonParameters


class TestLiquidArgon:
    """Test building the argon problem."""

    def test_particles_and_box(self, small_params):
        """Test particle count and box size follow the parameters."""
        problem = simulate.liquid_argon(0.1, params=small_params)
        reduced = small_params.to_reduced()

        assert problem.n_particles == 64
        np.testing.assert_allclose(problem.box.lengths, reduced.box_length)
        assert problem.tspan == (0.0, 0.1)
        assert problem.force_provider.cutoff == pytest.approx(2.0)

    def test_inside_box(self, small_problem):
        """Test lattice positions lie inside the box."""
        positions = small_problem.state.positions
        assert np.all(positions > 0)
        assert np.all(positions < small_problem.box.lengths)

    def test_zero_momentum(self, small_problem):
        """Test the centre-of-mass drift is removed."""
        np.testing.assert_allclose(
            small_problem.state.center_of_mass_velocity, 0.0, atol=1e-12
        )

    def test_deterministic(self, small_factory):
        """Test two builds with the same seed are identical."""
        a = small_factory(0.1)
        b = small_factory(0.1)
        np.testing.assert_array_equal(a.state.positions, b.state.positions)
        np.testing.assert_array_equal(a.state.velocities, b.state.velocities)

    def test_seed_changes_velocities(self, small_params):
        """Test a different seed draws different velocities."""
        a = simulate.liquid_argon(0.1, params=small_params, seed=1)
        b = simulate.liquid_argon(0.1, params=small_params, seed=2)
        assert not np.allclose(a.state.velocities, b.state.velocities)

    def test_cutoff_too_large(self):
        """Test a cutoff beyond half the box is rejected."""
        params = ArgonParameters(n_particles=64, cutoff_ratio=3.5)
        with pytest.raises(ValueError):
            simulate.liquid_argon(0.1, params=params)

    def test_bad_tspan(self, small_params):
        """Test t_end must lie after t_start."""
        with pytest.raises(ValueError):
            simulate.liquid_argon(0.0, params=small_params)


class TestStepControl:
    """Test dt / tolerance selection."""

    def test_fixed(self):
        """Test dt gives a fixed step."""
        assert simulate.step_control(dt=0.01) == FixedStep(0.01)

    def test_tolerance(self):
        """Test abstol and reltol give a tolerance."""
        assert simulate.step_control(abstol=1e-6, reltol=1e-8) == Tolerance(1e-6, 1e-8)

    def test_both(self):
        """Test giving both is an error."""
        with pytest.raises(ValueError):
            simulate.step_control(dt=0.01, abstol=1e-6, reltol=1e-6)

    def test_missing(self):
        """Test giving neither, or only one tolerance, is an error."""
        with pytest.raises(ValueError):
            simulate.step_control()
        with pytest.raises(ValueError):
            simulate.step_control(abstol=1e-6)


class TestSolve:
    """Test solving by integrator name."""

    def test_by_name(self, small_problem):
        """Test a named symplectic integrator."""
        solution = simulate.solve(small_problem, "VelocityVerlet", dt=0.01)
        assert solution.algorithm == "VelocityVerlet"
        assert solution.n_accepted == 10
        assert solution.t[-1] == pytest.approx(0.1)

    def test_by_instance(self, small_problem):
        """Test an integrator instance."""
        solution = simulate.solve(small_problem, VelocityVerlet(), dt=0.02)
        assert solution.n_accepted == 5

    def test_adaptive(self, small_problem):
        """Test an adaptive integrator reaches t_end."""
        solution = simulate.solve(small_problem, "DOP853", abstol=1e-8, reltol=1e-8)
        assert solution.success
        assert solution.t[-1] == pytest.approx(0.1)
        assert solution.n_feval > solution.n_accepted

    def test_wrong_control(self, small_problem):
        """Test a tolerance is rejected for a fixed-step integrator."""
        with pytest.raises(ValueError):
            simulate.solve(small_problem, "Yoshida8", abstol=1e-6, reltol=1e-6)

    def test_problem_not_modified(self, small_problem):
        """Test solving leaves the initial state untouched."""
        before = small_problem.state.positions.copy()
        simulate.solve(small_problem, "ForestRuth4", dt=0.01)
        np.testing.assert_array_equal(small_problem.state.positions, before)
