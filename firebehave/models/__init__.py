"""Fire behavior models.

Modules:
    - fuel_models: Standard fuel model catalog, custom models and special fuel beds.
    - moisture: Moisture input modes, scenarios and resolution to size classes.
    - wind_slope: Wind adjustment factor, midflame wind and the wind-slope vector.
    - rothermel: Rothermel (1972) surface fire spread kernel.
    - fire_size: Elliptical fire shape, backing/flanking rates and fire size.
    - two_fuel_models: Spread through two interspersed fuel models.
    - crown_model: Crown fire initiation and spread (Van Wagner / Rothermel).
"""
