"""
Exercise progression visualization.

Provides functions for charting per-exercise progression with
matplotlib, highlighting personal-record sessions.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import matplotlib.pyplot as plt
import numpy as np

from .models import Exercise
from .analyzer import ChartViewMode, calculate_exercise_progression


logger = logging.getLogger(__name__)

# plot styling
plt.style.use("seaborn-v0_8-whitegrid")
COLORS = {
    "primary": "#2563eb",
    "secondary": "#64748b",
    "accent": "#f59e0b",
    "success": "#10b981",
}

MODE_LABELS = {
    ChartViewMode.VOLUME: "Best set volume",
    ChartViewMode.TOTAL_VOLUME: "Total volume",
    ChartViewMode.WEIGHT: "Weight",
    ChartViewMode.REPS: "Reps",
}


def _finish(output_path: Optional[Path], show: bool) -> None:
    """Lay out, save and show or close the current figure."""
    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150, bbox_inches="tight")

    if show:
        plt.show()
    else:
        plt.close()


def _axis_label(exercise: Exercise, mode: ChartViewMode) -> str:
    """Build the y-axis label for an exercise and chart mode."""
    if mode == ChartViewMode.REPS:
        return "Reps"
    unit = "sec" if exercise.is_time_based else "kg"
    if mode == ChartViewMode.WEIGHT:
        return f"{'Time' if exercise.is_time_based else 'Weight'} ({unit})"
    return f"{MODE_LABELS[mode]} ({unit} × reps)"


def plot_exercise_progression(
    exercise: Exercise,
    mode: ChartViewMode = ChartViewMode.VOLUME,
    output_path: Optional[Path] = None,
    show: bool = True,
) -> None:
    """
    Plot an exercise's progression across sessions.

    Parameters:
        exercise: Exercise with aggregated sessions.
        mode: Which series to plot. BOTH draws weight and reps on twin axes.
        output_path: Optional path to save the figure.
        show: Whether to display the plot.
    """
    data = calculate_exercise_progression(exercise, mode)

    if not data:
        logger.warning(f"No sessions to plot for {exercise.name}")
        return

    fig, ax = plt.subplots(figsize=(12, 6))

    x = np.arange(len(data))
    pr_mask = np.array([d["isPR"] for d in data])

    if mode == ChartViewMode.BOTH:
        weights = np.array([d["weight"] for d in data])
        reps = np.array([d["reps"] for d in data])

        ax.plot(x, weights, marker="o", color=COLORS["primary"], label="Weight")
        ax.set_ylabel(_axis_label(exercise, ChartViewMode.WEIGHT), fontsize=11)

        ax2 = ax.twinx()
        ax2.plot(x, reps, marker="s", color=COLORS["success"], label="Reps")
        ax2.set_ylabel("Reps", fontsize=11)

        if pr_mask.any():
            ax.scatter(x[pr_mask], weights[pr_mask], s=120, color=COLORS["accent"],
                       zorder=5, label="PR")

        lines, labels = ax.get_legend_handles_labels()
        lines2, labels2 = ax2.get_legend_handles_labels()
        ax.legend(lines + lines2, labels + labels2, loc="upper left")
    else:
        values = np.array([d["value"] for d in data])

        ax.plot(x, values, marker="o", color=COLORS["primary"], linewidth=2,
                label=MODE_LABELS[mode])

        if pr_mask.any():
            ax.scatter(x[pr_mask], values[pr_mask], s=120, color=COLORS["accent"],
                       zorder=5, label="PR")

        if len(values) > 1:
            z = np.polyfit(x, values, 1)
            p = np.poly1d(z)
            ax.plot(x, p(x), "--", color=COLORS["secondary"], alpha=0.8, label="Trend")

        ax.set_ylabel(_axis_label(exercise, mode), fontsize=11)
        ax.legend(loc="upper left")

    ax.set_xlabel("Session", fontsize=11)
    ax.set_title(exercise.name, fontsize=14, fontweight="bold")
    ax.set_xticks(x)
    ax.set_xticklabels([str(d["sessionNumber"]) for d in data])
    ax.grid(True, alpha=0.3)

    _finish(output_path, show)


def plot_personal_records(
    exercises: Dict[str, Exercise],
    output_path: Optional[Path] = None,
    show: bool = True,
) -> None:
    """
    Horizontal bar chart of each exercise's personal-record volume.

    Time-based exercises are left out since their volume is in seconds.

    Parameters:
        exercises: Exercise map.
        output_path: Optional path to save the figure.
        show: Whether to display the plot.
    """
    records = [
        (name, max(s.volume for s in ex.sessions))
        for name, ex in exercises.items()
        if ex.sessions and not ex.is_time_based
    ]

    if not records:
        logger.warning("No personal records to plot")
        return

    records.sort(key=lambda r: r[1])
    names = [r[0] for r in records]
    volumes = [r[1] for r in records]

    fig, ax = plt.subplots(figsize=(10, max(4, 0.4 * len(records))))

    colors = plt.cm.viridis(np.linspace(0.2, 0.9, len(records)))
    ax.barh(names, volumes, color=colors)

    ax.set_xlabel("Best set volume (kg × reps)", fontsize=11)
    ax.set_title("Personal Records", fontsize=14, fontweight="bold")
    ax.grid(True, alpha=0.3, axis="x")

    _finish(output_path, show)
