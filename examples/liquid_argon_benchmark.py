#!/usr/bin/env python
"""
Example: benchmarking integrators on liquid argon.

This script demonstrates how to:
1. Build the liquid argon system in reduced units
2. Measure per-step cost of the symplectic integrators (warm-up run)
3. Sweep step sizes at matched computational budget
4. Sweep tolerances for the adaptive integrators
5. Follow the energy error over time for fixed parameters
6. Plot the results

Reduced LJ units:
- Length: σ (LJ size parameter)
- Energy: ε (LJ well depth)
- Mass: m (particle mass)
- Time: τ = σ√(m/ε)
- Temperature: T* = kT/ε (so kB = 1)

Usage:
    python examples/liquid_argon_benchmark.py
"""

from pathlib import Path

import matplotlib
import numpy as np

matplotlib.use("Agg")

from mdbench import plotting, simulate  # noqa: E402
from mdbench.analysis import temperature_history  # noqa: E402
from mdbench.benchmarks import (  # noqa: E402
    IntegratorConfig,
    ResultTable,
    cost_multipliers,
    energy_history_run,
    run_benchmark,
)
from mdbench.integrators import ADAPTIVE_INTEGRATORS, SYMPLECTIC_INTEGRATORS  # noqa: E402
from mdbench.units import ArgonParameters  # noqa: E402

OUTPUT_DIR = Path("benchmark_output")


def main():
    print("=" * 60)
    print("Liquid Argon Integrator Benchmark")
    print("=" * 60)

    params = ArgonParameters()
    reduced = params.to_reduced()
    print(f"N = {params.n_particles}, T = {params.temperature} K, ρ = {params.density} kg/m³")
    print(f"L* = {reduced.box_length:.3f}, R* = {reduced.cutoff:.2f}, ρ* = {reduced.density:.3f}")
    print(f"τ = {reduced.time_unit:.3e} s, v* = {reduced.velocity_scale:.3f}")

    t_end = 0.5
    print(f"t_end = {t_end} τ = {reduced.to_seconds(t_end):.3e} s")

    initial = simulate.liquid_argon(t_end).state
    print(f"Initial T* = {initial.temperature():.3f} (target {reduced.temperature:.3f})")
    print(f"Centre-of-mass drift = {np.linalg.norm(initial.center_of_mass_velocity):.1e}")

    # 1. Warm-up and per-step cost
    print("\n1. Per-step cost (warm-up):")
    print("-" * 40)
    cost = cost_multipliers(t_end, SYMPLECTIC_INTEGRATORS, dt=0.01, verbose=True)
    for name, c in zip(SYMPLECTIC_INTEGRATORS, cost):
        print(f"   {name:<16} x{c:.2f}")

    # 2. Symplectic sweep at matched cost
    print("\n2. Symplectic integrators:")
    print("-" * 40)
    symplectic = ResultTable("symplectic")
    run_benchmark(symplectic, t_end, SYMPLECTIC_INTEGRATORS, [0.004, 0.002, 0.001], cost=cost)
    symplectic.print_summary()

    # 3. Adaptive sweep
    print("\n3. Adaptive integrators:")
    print("-" * 40)
    adaptive = ResultTable("adaptive")
    tols = [1e-4, 1e-6, 1e-8]
    run_benchmark(adaptive, t_end, ADAPTIVE_INTEGRATORS, tols, tols)
    adaptive.print_summary()

    # 4. Energy error history
    print("\n4. Energy error history:")
    print("-" * 40)
    solutions = energy_history_run(
        t_end,
        [
            IntegratorConfig.fixed("VelocityVerlet", 0.002),
            IntegratorConfig.fixed("Yoshida6", 0.01),
            IntegratorConfig.tolerance("DOP853", 1e-8, 1e-8),
        ],
        verbose=True,
    )
    for label, solution in solutions.items():
        temperatures = temperature_history(solution)
        print(f"   {label:<28} T* {temperatures[0]:.3f} -> {temperatures[-1]:.3f}")

    # 5. Plots and tables
    OUTPUT_DIR.mkdir(exist_ok=True)
    combined = ResultTable("liquid_argon")
    combined.extend(symplectic)
    combined.extend(adaptive)
    combined.save(OUTPUT_DIR / "results.json")
    combined.to_csv(OUTPUT_DIR / "results.csv")

    fig = plotting.energy_error_vs_runtime(combined, show=False)
    plotting.save(OUTPUT_DIR / "energy_error_vs_runtime.png", fig=fig)
    fig = plotting.runtime_vs_steps(symplectic, show=False)
    plotting.save(OUTPUT_DIR / "runtime_vs_steps.png", fig=fig)
    fig = plotting.energy_error_vs_steps(combined, show=False)
    plotting.save(OUTPUT_DIR / "energy_error_vs_steps.png", fig=fig)
    fig = plotting.energy_error_history(solutions, show=False)
    plotting.save(OUTPUT_DIR / "energy_error_history.png", fig=fig)

    # Small problems can be run directly too
    problem = simulate.liquid_argon(t_end=0.1)
    solution = simulate.solve(problem, "VelocityVerlet", dt=0.001)
    print(f"\nVelocity Verlet: {solution.n_accepted} steps, {solution.n_feval} force evaluations")


if __name__ == "__main__":
    main()
