"""Benchmark result rows, the result table, and timing and memory context managers."""

from __future__ import annotations

import json
import time
import tracemalloc
from collections.abc import Iterator
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

COLUMNS = [
    "integrator",
    "runtime",
    "dt",
    "abstol",
    "reltol",
    "energy_error",
    "timesteps",
    "f_evals",
    "bytes",
    "cost_per_step",
    "cost_multiplier",
]


@dataclass
class BenchmarkResult:
    """
    One row of the result table: a single integrator run.

    Example output:
        {
            "integrator": "Yoshida6",
            "runtime": 1.84,
            "dt": 0.004,
            "energy_error": 3.1e-7,
            "timesteps": 250,
            "f_evals": 1751,
            "cost_per_step": 0.0074
        }
    """

    integrator: str
    runtime: float

    # Step control: dt for symplectic runs, (abstol, reltol) for adaptive runs
    dt: float | None = None
    abstol: float | None = None
    reltol: float | None = None

    # Accuracy
    energy_error: float = 0.0

    # Work
    timesteps: int = 0
    f_evals: int = 0
    bytes: int | None = None

    # Per-step wall-clock cost and the multiplier applied to the step size
    cost_per_step: float | None = None
    cost_multiplier: float = 1.0

    def __post_init__(self) -> None:
        """Fill the per-step cost."""
        if self.cost_per_step is None and self.timesteps > 0:
            self.cost_per_step = self.runtime / self.timesteps

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, keeping None values so rows align."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


class ResultTable:
    """
    Ordered collection of benchmark rows.

    Rows keep insertion order, which is the order integrators and
    parameters were iterated; plots group by integrator in that order.

    Example:
        table = ResultTable("symplectic")
        table.create_result("VelocityVerlet", runtime=0.8, dt=1e-3, timesteps=500)
        df = table.to_dataframe()
        table.save("symplectic.json")
        table.print_summary()
    """

    def __init__(self, name: str = "benchmark_run") -> None:
        """
        Initialize result table.

        Args:
            name: Name for this benchmark run.
        """
        self.name = name
        self.results: list[BenchmarkResult] = []
        self.start_time = datetime.now()

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[BenchmarkResult]:
        return iter(self.results)

    def add_result(self, result: BenchmarkResult) -> None:
        """Append a row."""
        self.results.append(result)

    def create_result(self, integrator: str, **kwargs: Any) -> BenchmarkResult:
        """
        Create and append a row.

        Args:
            integrator: Integrator name.
            **kwargs: Additional result fields.

        Returns:
            The created BenchmarkResult.
        """
        result = BenchmarkResult(integrator=integrator, **kwargs)
        self.add_result(result)
        return result

    def extend(self, other: ResultTable) -> None:
        """Append all rows of another table."""
        self.results.extend(other.results)

    @property
    def integrators(self) -> list[str]:
        """Integrator names in first-appearance order."""
        return list(dict.fromkeys(r.integrator for r in self.results))

    def rows_for(self, integrator: str) -> list[BenchmarkResult]:
        """Rows of one integrator, in insertion order."""
        return [r for r in self.results if r.integrator == integrator]

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a DataFrame with one row per result."""
        return pd.DataFrame([r.to_dict() for r in self.results], columns=COLUMNS)

    def to_dict(self) -> dict[str, Any]:
        """Convert all results to dictionary."""
        return {
            "name": self.name,
            "timestamp": self.start_time.isoformat(),
            "n_results": len(self.results),
            "results": [r.to_dict() for r in self.results],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def save(self, filepath: str | Path) -> None:
        """
        Save results to JSON file.

        Args:
            filepath: Output file path.
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(self.to_json())

    def to_csv(self, filepath: str | Path) -> None:
        """Save results as CSV."""
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        self.to_dataframe().to_csv(filepath, index=False)

    @classmethod
    def load(cls, filepath: str | Path) -> ResultTable:
        """Load a table written by save()."""
        data = json.loads(Path(filepath).read_text())
        table = cls(data.get("name", "benchmark_run"))
        for row in data.get("results", []):
            table.add_result(BenchmarkResult(**row))
        return table

    def print_summary(self) -> None:
        """Print summary table to stdout."""
        print(f"\n{'=' * 84}")
        print(f"Benchmark Report: {self.name}")
        print(f"{'=' * 84}")
        print(f"Total: {len(self.results)} runs, {len(self.integrators)} integrators")
        print(f"{'-' * 84}")

        print(
            f"{'Integrator':<16} {'Step control':<22} {'Runtime (s)':>12} "
            f"{'Energy error':>13} {'Steps':>8} {'f evals':>9}"
        )
        print(f"{'-' * 84}")

        for result in self.results:
            if result.dt is not None:
                control = f"dt={result.dt:.3g}"
            else:
                control = f"tol={result.abstol:.1e}/{result.reltol:.1e}"
            print(
                f"{result.integrator:<16} {control:<22} {result.runtime:>12.4f} "
                f"{result.energy_error:>13.3e} {result.timesteps:>8d} {result.f_evals:>9d}"
            )

        print(f"{'=' * 84}\n")


class BenchmarkTimer:
    """Context manager for timing benchmarks."""

    def __init__(self) -> None:
        """Initialize timer."""
        self.start_time: float = 0
        self.end_time: float = 0
        self.elapsed: float = 0

    def __enter__(self) -> BenchmarkTimer:
        """Start timing."""
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Stop timing."""
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time


class MemoryTracer:
    """
    Context manager recording peak allocated bytes with tracemalloc.

    Tracing slows Python code down considerably, so never time a block
    that runs under it. The peak is measured relative to the allocations
    live when the block starts.
    """

    def __init__(self) -> None:
        """Initialize tracer."""
        self.peak_bytes: int = 0
        self._started_tracing = False
        self._baseline = 0

    def __enter__(self) -> MemoryTracer:
        """Start tracing."""
        if not tracemalloc.is_tracing():
            tracemalloc.start()
            self._started_tracing = True
        tracemalloc.reset_peak()
        self._baseline = tracemalloc.get_traced_memory()[0]
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Stop tracing."""
        peak = tracemalloc.get_traced_memory()[1]
        self.peak_bytes = max(peak - self._baseline, 0)
        if self._started_tracing:
            tracemalloc.stop()
            self._started_tracing = False
