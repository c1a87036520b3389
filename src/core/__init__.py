"""
===============================================================================
ACCELERATION MODEL - Core Package
===============================================================================
Constants, configuration and value types shared by every other package.

Modules:
    constants        -- Tuned numeric constants of the model
    config           -- Frozen AccelerationModelConfig and YAML loader
    data_structures  -- DistanceTimeSpeed, TrajectoryPlot, TravelTime,
                        VehicleState
===============================================================================
"""
