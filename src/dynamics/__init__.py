"""
===============================================================================
ACCELERATION MODEL - Dynamics Package
===============================================================================
Piecewise acceleration curve of the ground vehicle and the front flip tactic.

Submodules:
    acceleration_model -- acceleration(), front_flip(), per-step tactic choice
===============================================================================
"""
