"""
===============================================================================
ACCELERATION MODEL - Guidance Package
===============================================================================
Travel-time estimates for planners: steering penalty, reachability checks
and target ranking on top of a simulated TrajectoryPlot.

Modules:
    travel_planner : Travel seconds to a target and soonest-target selection
===============================================================================
"""
