"""Integrator benchmarking: configurations, runner, sweeps and result tables."""

from .config import IntegratorConfig
from .reporter import BenchmarkResult, BenchmarkTimer, MemoryTracer, ResultTable
from .runner import (
    RunMeasurement,
    benchmark,
    cost_multipliers,
    energy_history_run,
    normalize_costs,
    run_benchmark,
)

__all__ = [
    "IntegratorConfig",
    "BenchmarkResult",
    "BenchmarkTimer",
    "MemoryTracer",
    "ResultTable",
    "RunMeasurement",
    "benchmark",
    "run_benchmark",
    "cost_multipliers",
    "normalize_costs",
    "energy_history_run",
]
