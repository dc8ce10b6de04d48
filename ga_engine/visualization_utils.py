"""
Visualization utilities for the GA engine.

Plots the best fitness per generation of single-objective runs and the
Pareto front of multi-objective runs.
"""

from pathlib import Path
from typing import Sequence, Tuple

import matplotlib.pyplot as plt

from .data_models import Individual


def plot_fitness_history(
    history: Sequence[tuple],
    output_path: Path,
    title: str = "Best fitness per generation",
    figsize: Tuple[int, int] = (10, 6)
) -> None:
    """
    Plot the run-best fitness against the generation index.

    Args:
        history: (generation, best_fitness, phenotype) rows
        output_path: Path to save PNG file
        title: Plot title
        figsize: Figure size (width, height) in inches
    """
    generations = [row[0] for row in history]
    fitness = [row[1] for row in history]

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(generations, fitness, color="tab:blue", linewidth=1.5)
    ax.set_xlabel("Generation")
    ax.set_ylabel("Best fitness")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(str(output_path), dpi=150, bbox_inches='tight')
    plt.close(fig)

    print(f"  Saved visualization: {output_path}")


def plot_pareto_front(
    pareto_set: Sequence[Individual],
    output_path: Path,
    axis_labels: Tuple[str, str] = ("Time [minutes]", "Cost"),
    title: str = "Pareto front",
    figsize: Tuple[int, int] = (10, 6)
) -> None:
    """
    Scatter the first two objectives of a Pareto set.

    Args:
        pareto_set: Archived individuals with vector fitness
        output_path: Path to save PNG file
        axis_labels: Labels for the first and second objective
        title: Plot title
        figsize: Figure size (width, height) in inches
    """
    points = sorted((member.fitness[0], member.fitness[1]) for member in pareto_set)

    fig, ax = plt.subplots(figsize=figsize)
    if points:
        xs, ys = zip(*points)
        ax.plot(xs, ys, color="lightgray", linewidth=1, zorder=1)
        ax.scatter(xs, ys, color="tab:red", s=20, zorder=2)
    ax.set_xlabel(axis_labels[0])
    ax.set_ylabel(axis_labels[1])
    ax.set_title(f"{title} ({len(points)} solutions)")
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(str(output_path), dpi=150, bbox_inches='tight')
    plt.close(fig)

    print(f"  Saved visualization: {output_path}")
