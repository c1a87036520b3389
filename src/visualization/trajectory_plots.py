"""
Plotting utilities for acceleration model output.
Distance and speed time histories of a TrajectoryPlot, boost budget sweeps.
"""

import os

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for saving
import matplotlib.pyplot as plt

from core.config import DEFAULT_CONFIG
from simulation.budget_sweep import SWEEP_COLUMNS
from simulation.trajectory_sim import flip_step_indices


# ---------------------------------------------------------------------------
# PlotStyle -- shared styling helpers
# ---------------------------------------------------------------------------

class PlotStyle:
    """Centralised styling and figure management for all project plots."""

    COLORS = {
        'primary': '#2E86AB',      # Steel blue
        'secondary': '#A23B72',    # Magenta
        'accent': '#F18F01',       # Orange
        'limit': '#C73E1D',        # Red
        'neutral': '#546E7A',      # Blue grey
    }

    @staticmethod
    def setup_style():
        """Set matplotlib rcParams shared by every figure."""
        plt.rcParams.update({
            'font.size': 11,
            'axes.labelsize': 12,
            'axes.titlesize': 14,
            'axes.titleweight': 'bold',
            'legend.fontsize': 10,
            'figure.figsize': (10, 6),
            'figure.facecolor': 'white',
            'savefig.dpi': 150,
            'axes.grid': True,
            'axes.spines.top': False,
            'axes.spines.right': False,
            'grid.color': '#E0E0E0',
            'grid.alpha': 0.7,
            'lines.linewidth': 2.0,
        })

    @staticmethod
    def create_figure(nrows=1, ncols=1, figsize=None, sharex=False):
        """Return (fig, axes) using the tight layout engine."""
        fig, axes = plt.subplots(nrows, ncols, figsize=figsize, sharex=sharex, layout='tight')
        return fig, axes

    @staticmethod
    def save_figure(fig, filepath, dpi=150):
        """Save *fig* to *filepath*, creating directories as needed."""
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(filepath, dpi=dpi, bbox_inches='tight',
                    facecolor='white', edgecolor='none')
        plt.close(fig)


# ---------------------------------------------------------------------------
# Standalone plotting functions
# ---------------------------------------------------------------------------

def plot_trajectory(plot, filepath, title='Acceleration profile', config=DEFAULT_CONFIG):
    """Plot distance and speed of a TrajectoryPlot against elapsed time.

    Flip steps are drawn as dashed segments; the supersonic ceiling and the
    medium-speed threshold are marked on the speed panel.

    Parameters
    ----------
    plot : TrajectoryPlot
    filepath : str
    title : str
    config : AccelerationModelConfig
    """
    PlotStyle.setup_style()
    elapsed = plot.times - plot.times[0]
    distances = plot.distances
    speeds = plot.speeds

    fig, (ax_dist, ax_speed) = PlotStyle.create_figure(nrows=2, figsize=(10, 8), sharex=True)

    ax_dist.plot(elapsed, distances, color=PlotStyle.COLORS['primary'], marker='.')
    ax_speed.plot(elapsed, speeds, color=PlotStyle.COLORS['secondary'], marker='.')

    flip_steps = flip_step_indices(plot, config)
    for k, idx in enumerate(flip_steps):
        label = 'front flip' if k == 0 else None
        ax_dist.plot(elapsed[idx:idx + 2], distances[idx:idx + 2],
                     color=PlotStyle.COLORS['accent'], linestyle='--', label=label)
        ax_speed.plot(elapsed[idx:idx + 2], speeds[idx:idx + 2],
                      color=PlotStyle.COLORS['accent'], linestyle='--')

    ax_speed.axhline(config.supersonic_speed, color=PlotStyle.COLORS['limit'],
                     linestyle=':', label='supersonic')
    ax_speed.axhline(config.medium_speed, color=PlotStyle.COLORS['neutral'],
                     linestyle=':', label='medium')

    ax_dist.set_ylabel('Distance [uu]')
    ax_speed.set_ylabel('Speed [uu/s]')
    ax_speed.set_xlabel('Elapsed time [s]')
    ax_dist.set_title(title)
    if len(flip_steps):
        ax_dist.legend()
    ax_speed.legend()

    PlotStyle.save_figure(fig, filepath)


def plot_budget_sweep(frame, filepath, title='Boost budget sweep'):
    """Plot final distance and travel time against boost budget.

    Parameters
    ----------
    frame : pandas.DataFrame
        Output of BudgetSweep.run.
    filepath : str
    title : str
    """
    missing = [c for c in SWEEP_COLUMNS if c not in frame.columns]
    if missing:
        raise ValueError(f"Sweep frame is missing columns: {', '.join(missing)}")

    PlotStyle.setup_style()
    fig, ax_dist = PlotStyle.create_figure(figsize=(10, 6))

    ax_dist.plot(frame['boost_budget'], frame['final_distance'],
                 color=PlotStyle.COLORS['primary'], marker='o', label='final distance')
    ax_dist.set_xlabel('Boost budget')
    ax_dist.set_ylabel('Final distance [uu]')
    ax_dist.set_title(title)

    if frame['travel_seconds'].notna().any():
        ax_time = ax_dist.twinx()
        ax_time.plot(frame['boost_budget'], frame['travel_seconds'],
                     color=PlotStyle.COLORS['accent'], marker='s', label='travel time')
        ax_time.set_ylabel('Travel time [s]')
        ax_time.grid(False)

    ax_dist.legend(loc='upper left')
    PlotStyle.save_figure(fig, filepath)
