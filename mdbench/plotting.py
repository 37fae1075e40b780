"""
Plots for integrator benchmarks.

Example:
    >>> from mdbench import plotting
    >>> plotting.energy_error_vs_runtime(results)
    >>> plotting.save("work_precision.png")
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .analysis import energy_error_history as _energy_error_history

if TYPE_CHECKING:
    from matplotlib.figure import Figure

    from .benchmarks import ResultTable
    from .solution import Solution


def _as_frame(results: ResultTable | pd.DataFrame) -> pd.DataFrame:
    """Accept a ResultTable or a DataFrame."""
    if isinstance(results, pd.DataFrame):
        return results
    return results.to_dataframe()


def _grouped_loglog(
    df: pd.DataFrame,
    x: str,
    y: str,
    xlabel: str,
    ylabel: str,
    title: str,
    show: bool,
    figsize: tuple[float, float],
) -> Figure:
    """Scatter-and-line plot of y vs x on log axes, one series per integrator."""
    fig, ax = plt.subplots(figsize=figsize)

    for name, group in df.groupby("integrator", sort=False):
        # Zero values cannot be drawn on log axes
        group = group[(group[x] > 0) & (group[y] > 0)]
        if group.empty:
            continue
        ax.plot(group[x], group[y], "o-", lw=1.2, ms=4, label=name)

    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.legend(fontsize="small")
    ax.grid(True, which="both", alpha=0.3)

    fig.tight_layout()
    if show:
        plt.show()
    return fig


def energy_error_vs_runtime(
    results: ResultTable | pd.DataFrame,
    show: bool = True,
    figsize: tuple[float, float] = (8, 6),
) -> Figure:
    """
    Work-precision plot: energy error against runtime.

    Args:
        results: Benchmark rows.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.
    """
    return _grouped_loglog(
        _as_frame(results),
        x="runtime",
        y="energy_error",
        xlabel="Runtime (s)",
        ylabel="|E(t) - E(0)| (ε)",
        title="Energy error vs runtime",
        show=show,
        figsize=figsize,
    )


def runtime_vs_steps(
    results: ResultTable | pd.DataFrame,
    show: bool = True,
    figsize: tuple[float, float] = (8, 6),
) -> Figure:
    """Runtime against the number of accepted steps."""
    return _grouped_loglog(
        _as_frame(results),
        x="timesteps",
        y="runtime",
        xlabel="Accepted steps",
        ylabel="Runtime (s)",
        title="Runtime vs steps",
        show=show,
        figsize=figsize,
    )


def energy_error_vs_steps(
    results: ResultTable | pd.DataFrame,
    show: bool = True,
    figsize: tuple[float, float] = (8, 6),
) -> Figure:
    """Energy error against the number of accepted steps."""
    return _grouped_loglog(
        _as_frame(results),
        x="timesteps",
        y="energy_error",
        xlabel="Accepted steps",
        ylabel="|E(t) - E(0)| (ε)",
        title="Energy error vs steps",
        show=show,
        figsize=figsize,
    )


def energy_error_history(
    solutions: Mapping[str, Solution],
    show: bool = True,
    figsize: tuple[float, float] = (8, 6),
) -> Figure:
    """
    Energy error magnitude over time for fixed-parameter runs.

    Args:
        solutions: Solutions keyed by label (usually the integrator name).
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.
    """
    fig, ax = plt.subplots(figsize=figsize)

    for label, solution in solutions.items():
        times, errors = _energy_error_history(solution)
        # Skip t0, where the error is zero by definition
        mask = errors > 0
        if not np.any(mask):
            continue
        ax.plot(times[mask], errors[mask], "-", lw=0.8, label=label)

    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("Time (τ)")
    ax.set_ylabel("|E(t) - E(0)| (ε)")
    ax.set_title("Energy error history")
    ax.legend(fontsize="small")
    ax.grid(True, which="both", alpha=0.3)

    fig.tight_layout()
    if show:
        plt.show()
    return fig


def save(filename: str | Path, dpi: int = 150, fig: Figure | None = None) -> None:
    """
    Save a figure (default: the current one) to a file.

    Args:
        filename: Output filename (e.g., "plot.png", "plot.pdf").
        dpi: Resolution in dots per inch.
        fig: Figure to save.
    """
    target = fig if fig is not None else plt.gcf()
    target.savefig(filename, dpi=dpi, bbox_inches="tight")
    print(f"Saved plot to {filename}")


def show() -> None:
    """Display all pending plots."""
    plt.show()
