"""
===============================================================================
ACCELERATION MODEL - Vehicle and Simulation Constants
===============================================================================
Central repository for the empirically tuned numbers that drive the ground
vehicle acceleration model. Units are arena units (uu), seconds and radians.
They are the defaults of AccelerationModelConfig.
===============================================================================
"""

# =============================================================================
# SIMULATION
# =============================================================================
TIME_STEP = 0.1                         # s, fixed integration step

# =============================================================================
# SPEED REGIMES
# =============================================================================
SUPERSONIC_SPEED = 46.0                 # uu/s, hard speed ceiling
MEDIUM_SPEED = 28.0                     # uu/s, throttle-only acceleration ends here

# =============================================================================
# ACCELERATION
# =============================================================================
SUB_MEDIUM_ACCELERATION = 15.0          # uu/s^2, zero to medium in about 2 s
INCREMENTAL_BOOST_ACCELERATION = 8.0    # uu/s^2, added while boosting
BOOST_CONSUMED_PER_SECOND = 25.0        # boost units per second of boosting

# =============================================================================
# FRONT FLIP
# =============================================================================
FRONT_FLIP_SECONDS = 1.5                # s, time cost of one flip
FRONT_FLIP_SPEED_BOOST = 10.0           # uu/s, speed gained by one flip

# =============================================================================
# STEERING
# =============================================================================
STEER_PENALTY_COEFFICIENT = 0.02        # s per (rad * uu/s)
