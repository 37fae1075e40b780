"""
Benchmark runner, parameter sweeps and cost normalisation.

Typical flow:
    >>> t_end = 1.0
    >>> cost = cost_multipliers(t_end, SYMPLECTIC_INTEGRATORS, dt=1e-2)
    >>> results = ResultTable("symplectic")
    >>> run_benchmark(results, t_end, SYMPLECTIC_INTEGRATORS, [4e-3, 2e-3, 1e-3], cost=cost)
    >>> run_benchmark(results, t_end, ["RK45", "DOP853"], [1e-6, 1e-8], [1e-6, 1e-8])
"""

from __future__ import annotations

import gc
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..analysis import energy_error
from ..integrators import Integrator
from ..problem import NBodyProblem
from ..simulate import liquid_argon
from ..solution import Solution
from .config import IntegratorConfig
from .reporter import BenchmarkResult, BenchmarkTimer, MemoryTracer, ResultTable

ProblemFactory = Callable[[float], NBodyProblem]


@dataclass
class RunMeasurement:
    """
    Measurements of a single solve.

    Attributes:
        config: Configuration that was run.
        runtime: Wall-clock time of the solve in seconds.
        bytes: Peak bytes allocated by a traced repeat of the solve (None if not tracked).
        energy_error: |E(t_end) - E(t0)|.
        timesteps: Accepted steps.
        f_evals: Force evaluations.
        solution: The solution, if kept.
    """

    config: IntegratorConfig
    runtime: float
    bytes: int | None
    energy_error: float
    timesteps: int
    f_evals: int
    solution: Solution | None = None

    @property
    def cost_per_step(self) -> float:
        """Wall-clock time per accepted step."""
        if self.timesteps <= 0:
            raise ValueError(f"{self.config.integrator} took no steps")
        return self.runtime / self.timesteps


def _peak_bytes(
    integrator: Integrator,
    config: IntegratorConfig,
    problem: NBodyProblem,
    save_every: int,
) -> int:
    """Peak bytes allocated by an untimed solve."""
    with MemoryTracer() as tracer:
        integrator.solve(problem, config.control, save_every=save_every)
    return tracer.peak_bytes


def benchmark(
    outputs: dict[str, list[RunMeasurement]],
    configs: Sequence[IntegratorConfig],
    t_end: float,
    problem_factory: ProblemFactory = liquid_argon,
    track_memory: bool = True,
    keep_solution: bool = False,
    save_every: int = 1,
    verbose: bool = False,
) -> dict[str, list[RunMeasurement]]:
    """
    Run each configuration once on a freshly built problem.

    Garbage is collected before every timed solve so that earlier runs do
    not disturb the measurement. Memory is measured in a second, untimed
    solve of the same configuration because tracemalloc slows the solve
    down. Solver errors propagate.

    Args:
        outputs: Tables keyed by integrator name; measurements are appended.
        configs: Configurations to run, in order.
        t_end: End of the simulated time span.
        problem_factory: Builds the problem for a given t_end.
        track_memory: Record peak allocated bytes from an extra traced run.
        keep_solution: Keep the Solution in each measurement.
        save_every: Trajectory thinning passed to the integrator.
        verbose: Print one line per run.

    Returns:
        The outputs mapping.
    """
    for config in configs:
        integrator = config.build()
        problem = problem_factory(t_end)

        gc.collect()
        with BenchmarkTimer() as timer:
            solution = integrator.solve(problem, config.control, save_every=save_every)

        peak_bytes = None
        if track_memory:
            peak_bytes = _peak_bytes(integrator, config, problem_factory(t_end), save_every)

        measurement = RunMeasurement(
            config=config,
            runtime=timer.elapsed,
            bytes=peak_bytes,
            energy_error=energy_error(solution),
            timesteps=solution.n_accepted,
            f_evals=solution.n_feval,
            solution=solution if keep_solution else None,
        )
        outputs.setdefault(config.integrator, []).append(measurement)

        if verbose:
            print(
                f"  {config.integrator:<16} runtime={measurement.runtime:.4f}s "
                f"steps={measurement.timesteps} f_evals={measurement.f_evals} "
                f"energy_error={measurement.energy_error:.3e}"
            )

    return outputs


def _configs_for(
    integrators: Sequence[str],
    params: tuple[float, ...],
    cost: NDArray[np.floating],
) -> list[IntegratorConfig]:
    """Build one configuration per integrator for a parameter tuple."""
    if len(params) == 1:
        return [
            IntegratorConfig.fixed(name, params[0] * c)
            for name, c in zip(integrators, cost)
        ]
    abstol, reltol = params
    return [IntegratorConfig.tolerance(name, abstol, reltol) for name in integrators]


def run_benchmark(
    results: ResultTable,
    t_end: float,
    integrators: Sequence[str],
    *params: Sequence[float],
    cost: Sequence[float] | None = None,
    problem_factory: ProblemFactory = liquid_argon,
    track_memory: bool = True,
    verbose: bool = True,
) -> ResultTable:
    """
    Sweep step sizes or tolerances and append one row per integrator and tuple.

    With one parameter sequence every entry is a step size dt; with two,
    entries are paired as (abstol, reltol). Rows are appended in the order
    of the parameter sequences, then the order of ``integrators``.

    Args:
        results: Table the rows are appended to.
        t_end: End of the simulated time span.
        integrators: Integrator names.
        *params: One sequence of step sizes, or two parallel sequences of
            absolute and relative tolerances.
        cost: Per-integrator multipliers applied to the step size, e.g. from
            :func:`cost_multipliers`. Defaults to ones.
        problem_factory: Builds the problem for a given t_end.
        track_memory: Record peak allocated bytes from an extra traced run.
        verbose: Print progress.

    Returns:
        The results table.
    """
    if len(params) not in (1, 2):
        raise ValueError(
            f"Expected one sequence of dt or two of (abstol, reltol), got {len(params)}"
        )
    lengths = {len(p) for p in params}
    if len(lengths) != 1:
        raise ValueError(f"Parameter sequences must have equal length, got {sorted(lengths)}")

    if cost is None:
        cost = np.ones(len(integrators))
    cost = np.asarray(cost, dtype=np.float64)
    if len(cost) != len(integrators):
        raise ValueError(
            f"cost has {len(cost)} entries for {len(integrators)} integrators"
        )
    if len(params) == 2 and not np.allclose(cost, 1.0):
        raise ValueError("cost multipliers only apply to fixed-step sweeps")

    for values in zip(*params):
        if verbose:
            label = f"dt={values[0]:.3g}" if len(values) == 1 else (
                f"abstol={values[0]:.1e}, reltol={values[1]:.1e}"
            )
            print(f"Benchmarking {label}")

        configs = _configs_for(integrators, values, cost)
        outputs: dict[str, list[RunMeasurement]] = {}
        benchmark(
            outputs,
            configs,
            t_end,
            problem_factory=problem_factory,
            track_memory=track_memory,
            verbose=verbose,
        )

        for config, c in zip(configs, cost):
            m = outputs[config.integrator].pop(0)
            results.add_result(
                BenchmarkResult(
                    integrator=config.integrator,
                    runtime=m.runtime,
                    dt=config.dt,
                    abstol=config.abstol,
                    reltol=config.reltol,
                    energy_error=m.energy_error,
                    timesteps=m.timesteps,
                    f_evals=m.f_evals,
                    bytes=m.bytes,
                    cost_multiplier=float(c),
                )
            )

    return results


def normalize_costs(costs: Sequence[float]) -> NDArray[np.floating]:
    """
    Normalise per-step costs by the first (baseline) entry.

    The baseline's multiplier is exactly 1.0.
    """
    costs = np.asarray(costs, dtype=np.float64)
    if len(costs) == 0:
        raise ValueError("No costs to normalise")
    if not costs[0] > 0:
        raise ValueError(f"Baseline cost must be positive, got {costs[0]}")
    return costs / costs[0]


def cost_multipliers(
    t_end: float,
    integrators: Sequence[str],
    dt: float,
    problem_factory: ProblemFactory = liquid_argon,
    verbose: bool = False,
) -> NDArray[np.floating]:
    """
    Per-step cost of each fixed-step integrator relative to the first one.

    Each integrator is run once at ``dt`` as a warm-up; its cost is
    runtime / accepted steps. Passing the result as ``cost`` to
    :func:`run_benchmark` scales every step size so integrators are compared
    at matched computational budget rather than matched step size.

    Args:
        t_end: End of the warm-up time span.
        integrators: Fixed-step integrator names; the first is the baseline.
        dt: Warm-up step size.
        problem_factory: Builds the problem for a given t_end.
        verbose: Print per-run measurements.

    Returns:
        Multipliers, shape (len(integrators),), with the baseline equal to 1.0.
    """
    outputs: dict[str, list[RunMeasurement]] = {}
    configs = [IntegratorConfig.fixed(name, dt) for name in integrators]
    benchmark(
        outputs,
        configs,
        t_end,
        problem_factory=problem_factory,
        track_memory=False,
        verbose=verbose,
    )
    costs = [outputs[config.integrator].pop(0).cost_per_step for config in configs]
    return normalize_costs(costs)


def energy_history_run(
    t_end: float,
    configs: Sequence[IntegratorConfig],
    problem_factory: ProblemFactory = liquid_argon,
    save_every: int = 1,
    verbose: bool = False,
) -> dict[str, Solution]:
    """
    Solve once per configuration and keep the solutions for energy-history plots.

    Returns:
        Solutions keyed by configuration label (see :attr:`IntegratorConfig.label`),
        in the order of ``configs``.
    """
    labels = [config.label for config in configs]
    if len(set(labels)) != len(labels):
        raise ValueError(f"Duplicate configurations in {labels}")

    outputs: dict[str, list[RunMeasurement]] = {}
    benchmark(
        outputs,
        configs,
        t_end,
        problem_factory=problem_factory,
        track_memory=False,
        keep_solution=True,
        save_every=save_every,
        verbose=verbose,
    )
    return {
        label: outputs[config.integrator].pop(0).solution
        for label, config in zip(labels, configs)
    }
