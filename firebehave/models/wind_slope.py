"""Wind and slope handling for the surface fire spread model.

Covers the reduction of a measured wind to midflame height, the bookkeeping
of wind and spread directions relative to upslope or to north, and the
vector combination of the wind and slope contributions to spread.

References:
    - Albini, F. A., & Baughman, R. G. (1979). Estimating Windspeeds for
      Predicting Wildland Fire Behavior. USDA Forest Service Research Paper INT-221.
    - Andrews, P. L. (2012). Modeling wind adjustment factor and midflame wind
      speed for Rothermel's surface fire spread model. USDA Forest Service
      General Technical Report RMRS-GTR-266.
"""
from enum import Enum
from typing import Optional, Tuple

import numpy as np


class WindHeightInputMode(Enum):
    DIRECT_MIDFLAME = "direct_midflame"
    TWENTY_FOOT = "twenty_foot"
    TEN_METER = "ten_meter"


class WindAndSpreadOrientationMode(Enum):
    RELATIVE_TO_UPSLOPE = "relative_to_upslope"
    RELATIVE_TO_NORTH = "relative_to_north"


class WindAdjustmentFactorMethod(Enum):
    USER_INPUT = "user_input"
    USE_CROWN_RATIO = "use_crown_ratio"
    DONT_USE_CROWN_RATIO = "dont_use_crown_ratio"


class WindAdjustmentFactorShelterMethod(Enum):
    UNSHELTERED = "unsheltered"
    SHELTERED = "sheltered"


# Ratio of the 10-m open wind to the 20-ft open wind
TEN_METER_TO_TWENTY_FOOT = 1.15


def normalize_direction(direction: float) -> float:
    """Wraps a direction in degrees into [0, 360)."""
    direction = direction % 360.0
    if direction >= 360.0:
        # -1e-15 % 360 rounds to 360.0
        direction = 0.0
    return direction


def calc_wind_adjustment_factor(canopy_cover: float, canopy_height: float, crown_ratio: float,
                                fuel_bed_depth: float) -> Tuple[float, WindAdjustmentFactorShelterMethod]:
    """Computes the wind adjustment factor from canopy and fuel bed structure.

    Args:
        canopy_cover (float): canopy cover (fraction)
        canopy_height (float): canopy height (ft)
        crown_ratio (float): crown ratio (fraction)
        fuel_bed_depth (float): fuel bed depth (ft)

    Returns:
        Tuple[float, WindAdjustmentFactorShelterMethod]: wind adjustment
        factor and whether the fuel was treated as sheltered
    """
    # Fraction of the canopy layer volume filled with crowns
    crown_fill = canopy_cover * crown_ratio / 3.0

    if canopy_cover < 1.0e-7 or crown_fill < 0.05 or canopy_height < 6.0:
        if fuel_bed_depth > 1.0e-7:
            waf = 1.83 / np.log((20.0 + 0.36 * fuel_bed_depth) / (0.13 * fuel_bed_depth))
        else:
            waf = 1.0
        return float(waf), WindAdjustmentFactorShelterMethod.UNSHELTERED

    waf = 0.555 / (np.sqrt(crown_fill * canopy_height)
                   * np.log((20.0 + 0.36 * canopy_height) / (0.13 * canopy_height)))
    return float(waf), WindAdjustmentFactorShelterMethod.SHELTERED


def calc_midflame_wind_speed(wind_speed: float, height_mode: WindHeightInputMode, waf: float) -> float:
    """Reduces a wind measured at ``height_mode`` to midflame height.

    Args:
        wind_speed (float): input wind speed (ft/min)
        height_mode (WindHeightInputMode): height the wind was measured at
        waf (float): wind adjustment factor

    Returns:
        float: midflame wind speed (ft/min)
    """
    if height_mode == WindHeightInputMode.DIRECT_MIDFLAME:
        return wind_speed
    if height_mode == WindHeightInputMode.TWENTY_FOOT:
        return wind_speed * waf
    return (wind_speed / TEN_METER_TO_TWENTY_FOOT) * waf


def wind_speed_at_twenty_feet(wind_speed: float, height_mode: WindHeightInputMode) -> Optional[float]:
    """20-ft wind speed equivalent of an input wind, ``None`` for a direct midflame input."""
    if height_mode == WindHeightInputMode.TWENTY_FOOT:
        return wind_speed
    if height_mode == WindHeightInputMode.TEN_METER:
        return wind_speed / TEN_METER_TO_TWENTY_FOOT
    return None


def upslope_direction(aspect: float) -> float:
    """Direction (from north) that points upslope on a slope facing ``aspect``."""
    return normalize_direction(aspect + 180.0)


def wind_direction_from_upslope(wind_direction: float, aspect: float,
                                orientation: WindAndSpreadOrientationMode) -> float:
    """Expresses an input wind direction in degrees clockwise from upslope."""
    if orientation == WindAndSpreadOrientationMode.RELATIVE_TO_NORTH:
        return normalize_direction(wind_direction - upslope_direction(aspect))
    return normalize_direction(wind_direction)


def direction_to_output_frame(direction_from_upslope: float, aspect: float,
                              orientation: WindAndSpreadOrientationMode) -> float:
    """Converts a direction measured from upslope back into the caller's frame."""
    if orientation == WindAndSpreadOrientationMode.RELATIVE_TO_NORTH:
        return normalize_direction(direction_from_upslope + upslope_direction(aspect))
    return normalize_direction(direction_from_upslope)


def calc_wind_slope_vec(r_0: float, phi_w: float, phi_s: float, wind_dir_from_upslope: float) -> Tuple[float, float]:
    """Adds the wind and slope spread rate contributions as vectors.

    The slope contribution points upslope (0 degrees); the wind contribution
    points along ``wind_dir_from_upslope``.

    Args:
        r_0 (float): no-wind no-slope spread rate (ft/min)
        phi_w (float): wind factor
        phi_s (float): slope factor
        wind_dir_from_upslope (float): wind direction, degrees clockwise from upslope

    Returns:
        Tuple[float, float]: magnitude of the combined vector (ft/min) and its
        direction in degrees clockwise from upslope, in [0, 360)
    """
    d_w = r_0 * phi_w
    d_s = r_0 * phi_s

    angle = np.deg2rad(wind_dir_from_upslope)
    x = d_s + d_w * np.cos(angle)
    y = d_w * np.sin(angle)
    vec_mag = float(np.sqrt(x**2 + y**2))

    if vec_mag < 1.0e-7:
        vec_dir = 0.0

    else:
        vec_dir = normalize_direction(float(np.rad2deg(np.arctan2(y, x))))

    return vec_mag, vec_dir
