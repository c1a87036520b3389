"""
===============================================================================
ACCELERATION MODEL - Simulation Package
===============================================================================
Forward simulation of straight-line travel and comparisons across budgets.

Modules:
    trajectory_sim -- Fixed-step simulator producing a TrajectoryPlot
    budget_sweep   -- Parallel sweep over boost budgets into a DataFrame
===============================================================================
"""
