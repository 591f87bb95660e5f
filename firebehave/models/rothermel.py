"""Rothermel (1972) surface fire spread model.

The kernel works in two stages. ``calc_no_wind_no_slope`` reduces a fuel bed
and its moistures to the fuel bed intermediates (reaction intensity,
propagating flux ratio, heat sink and the resulting no-wind no-slope spread
rate). ``calc_forward_spread_rate`` then applies the wind and slope factors,
combines them as vectors and derives the elliptical fire shape, intensity and
flame length of the head fire.

All quantities are in base units: ft, min, lb, Btu, fractions for moisture.

References:
    - Rothermel, R. C. (1972). A mathematical model for predicting fire spread
      in wildland fuels. USDA Forest Service Research Paper INT-115.
    - Albini, F. A. (1976). Estimating wildfire behavior and effects. USDA
      Forest Service General Technical Report INT-30.
    - Andrews, P. L. (2018). The Rothermel surface fire spread model and
      associated developments: A comprehensive explanation. RMRS-GTR-371.
"""
from dataclasses import dataclass
from typing import Optional
import logging

import numpy as np

from firebehave.models.fire_size import (
    FireEllipse,
    SpreadDirectionMode,
    calc_length_to_width_ratio,
)
from firebehave.models.fuel_models import FuelParticles
from firebehave.models.wind_slope import calc_wind_slope_vec, normalize_direction
from firebehave.utilities.data_classes import SpreadRateResult
from firebehave.utilities.unit_conversions import ft_min_to_mph

logger = logging.getLogger(__name__)

PARTICLE_DENSITY = 32.0 # lb/ft^3
TOTAL_SILICA = 0.0555
EFFECTIVE_SILICA = 0.010

# Lower SAVR bounds (1/ft) of the size classes used to weight net fuel loads
SIZE_SORT_BOUNDS = (1200.0, 192.0, 96.0, 48.0, 16.0)


@dataclass
class FuelbedIntermediates:
    """No-wind no-slope properties of a fuel bed."""
    bulk_density: float
    packing_ratio: float
    optimum_packing_ratio: float
    relative_packing_ratio: float
    sigma: float
    fraction_dead: float
    fraction_live: float
    moisture_dead: float
    moisture_live: float
    mx_dead: float
    mx_live: float
    reaction_intensity_dead: float
    reaction_intensity_live: float
    reaction_intensity: float
    flux_ratio: float
    heat_sink: float
    residence_time: float
    heat_per_unit_area: float
    r_0: float

    @property
    def wind_C(self) -> float:
        return 7.47 * np.exp(-0.133 * self.sigma**0.55)

    @property
    def wind_B(self) -> float:
        return 0.02526 * self.sigma**0.54

    @property
    def wind_E(self) -> float:
        return 0.715 * np.exp(-3.59e-4 * self.sigma)


def _safe_exp(coefficient: float, savr: np.ndarray) -> np.ndarray:
    """exp(coefficient / savr) with zero where the SAVR is zero."""
    out = np.zeros_like(savr, dtype=float)
    mask = savr > 0
    out[mask] = np.exp(coefficient / savr[mask])
    return out


def calc_weights(area: np.ndarray) -> np.ndarray:
    total = np.sum(area)
    if total < 1.0e-7:
        return np.zeros_like(area)
    return area / total


def calc_size_sorted_weights(savr: np.ndarray, f_ij: np.ndarray) -> np.ndarray:
    """Net load weights: each particle gets the summed surface area weight of its size class."""
    size_class = np.full(savr.shape, len(SIZE_SORT_BOUNDS))
    for k, bound in reversed(list(enumerate(SIZE_SORT_BOUNDS))):
        size_class[savr >= bound] = k

    g_ij = np.zeros_like(f_ij)
    for k in np.unique(size_class):
        mask = size_class == k
        g_ij[mask] = np.sum(f_ij[mask])

    return g_ij


def calc_live_mx(particles: FuelParticles) -> float:
    """Live fuel moisture of extinction.

    Args:
        particles (FuelParticles): fuel bed particles

    Returns:
        float: live moisture of extinction (fraction), never below the dead value
    """
    dead_mx = particles.moisture_of_extinction_dead

    fine_dead = particles.dead_load * _safe_exp(-138.0, particles.dead_savr)
    fine_live = particles.live_load * _safe_exp(-500.0, particles.live_savr)

    fine_dead_load = np.sum(fine_dead)
    fine_live_load = np.sum(fine_live)

    if fine_live_load < 1.0e-7:
        # Live moisture does not apply here
        return dead_mx

    if fine_dead_load > 1.0e-7:
        mf_dead = np.sum(fine_dead * particles.dead_moisture) / fine_dead_load
    else:
        mf_dead = 0.0

    dead_ratio = mf_dead / dead_mx if dead_mx > 1.0e-7 else 0.0

    W = fine_dead_load / fine_live_load
    mx = 2.9 * W * (1 - dead_ratio) - 0.226

    return float(max(mx, dead_mx))


def calc_moisture_damping(m_f: float, m_x: float) -> float:
    """Moisture damping coefficient.

    Args:
        m_f (float): characteristic moisture (fraction)
        m_x (float): moisture of extinction (fraction)

    Returns:
        float: damping coefficient between 0 and 1
    """
    if m_x < 1.0e-7:
        return 0.0

    r_m = min(m_f / m_x, 1.0)

    moist_damping = 1 - 2.59 * r_m + 5.11 * (r_m)**2 - 3.52 * (r_m)**3

    return max(0.0, moist_damping)


def calc_mineral_damping(s_e: float = EFFECTIVE_SILICA) -> float:
    mineral_damping = 0.174 * s_e ** (-0.19)

    return min(mineral_damping, 1.0)


def calc_flux_ratio(sigma: float, packing_ratio: float) -> float:
    """Propagating flux ratio, the fraction of reaction intensity that heats adjacent fuel."""
    return float(np.exp((0.792 + 0.681 * np.sqrt(sigma)) * (packing_ratio + 0.1)) / (192 + 0.2595 * sigma))


def calc_heat_sink(particles: FuelParticles, f_dead: np.ndarray, f_live: np.ndarray,
                   fraction_dead: float, fraction_live: float, bulk_density: float) -> float:
    """Heat required to bring the fuel ahead of the fire to ignition (Btu/ft^3)."""
    q_ig_dead = 250 + 1116 * particles.dead_moisture
    q_ig_live = 250 + 1116 * particles.live_moisture

    dead_sum = np.sum(f_dead * _safe_exp(-138.0, particles.dead_savr) * q_ig_dead)
    live_sum = np.sum(f_live * _safe_exp(-138.0, particles.live_savr) * q_ig_live)

    return float(bulk_density * (fraction_dead * dead_sum + fraction_live * live_sum))


def calc_no_wind_no_slope(particles: FuelParticles) -> FuelbedIntermediates:
    """Computes the fuel bed intermediates and no-wind no-slope spread rate.

    Args:
        particles (FuelParticles): fuel bed particles with moistures

    Returns:
        FuelbedIntermediates: fuel bed properties and baseline spread rate
    """
    dead_area = np.where(particles.dead_savr > 0,
                         particles.dead_load * particles.dead_savr / PARTICLE_DENSITY, 0.0)
    live_area = np.where(particles.live_savr > 0,
                         particles.live_load * particles.live_savr / PARTICLE_DENSITY, 0.0)

    total_dead_area = np.sum(dead_area)
    total_live_area = np.sum(live_area)
    total_area = total_dead_area + total_live_area

    f_dead = calc_weights(dead_area)
    f_live = calc_weights(live_area)

    if total_area > 1.0e-7:
        fraction_dead = total_dead_area / total_area
        fraction_live = total_live_area / total_area
    else:
        fraction_dead = 0.0
        fraction_live = 0.0

    g_dead = calc_size_sorted_weights(particles.dead_savr, f_dead)
    g_live = calc_size_sorted_weights(particles.live_savr, f_live)

    net_load_dead = np.sum(g_dead * particles.dead_load * (1 - TOTAL_SILICA))
    net_load_live = np.sum(g_live * particles.live_load * (1 - TOTAL_SILICA))

    total_load = np.sum(particles.dead_load) + np.sum(particles.live_load)
    depth = particles.depth
    bulk_density = total_load / depth if depth > 1.0e-7 else 0.0
    packing_ratio = bulk_density / PARTICLE_DENSITY

    sigma_dead = np.sum(f_dead * particles.dead_savr)
    sigma_live = np.sum(f_live * particles.live_savr)
    sigma = float(fraction_dead * sigma_dead + fraction_live * sigma_live)

    moisture_dead = float(np.sum(f_dead * particles.dead_moisture))
    moisture_live = float(np.sum(f_live * particles.live_moisture))

    mx_dead = particles.moisture_of_extinction_dead
    mx_live = calc_live_mx(particles)

    if sigma < 1.0e-7 or packing_ratio < 1.0e-7:
        logger.debug("Fuel bed has no effective surface area, no-wind spread rate is zero")
        return FuelbedIntermediates(
            bulk_density=bulk_density, packing_ratio=packing_ratio, optimum_packing_ratio=0.0,
            relative_packing_ratio=0.0, sigma=sigma, fraction_dead=fraction_dead,
            fraction_live=fraction_live, moisture_dead=moisture_dead, moisture_live=moisture_live,
            mx_dead=mx_dead, mx_live=mx_live, reaction_intensity_dead=0.0,
            reaction_intensity_live=0.0, reaction_intensity=0.0, flux_ratio=0.0, heat_sink=0.0,
            residence_time=0.0, heat_per_unit_area=0.0, r_0=0.0)

    optimum_packing_ratio = 3.348 * sigma**(-0.8189)
    relative_packing_ratio = packing_ratio / optimum_packing_ratio

    gamma_max = sigma**1.5 / (495 + 0.0594 * sigma**1.5)
    A = 133 * sigma**(-0.7913)
    gamma = gamma_max * relative_packing_ratio**A * np.exp(A * (1 - relative_packing_ratio))

    mineral_damping = calc_mineral_damping()
    dead_damping = calc_moisture_damping(moisture_dead, mx_dead)
    live_damping = calc_moisture_damping(moisture_live, mx_live)

    I_r_dead = float(gamma * net_load_dead * particles.heat_of_combustion_dead * dead_damping * mineral_damping)
    I_r_live = float(gamma * net_load_live * particles.heat_of_combustion_live * live_damping * mineral_damping)
    I_r = I_r_dead + I_r_live

    flux_ratio = calc_flux_ratio(sigma, packing_ratio)
    heat_sink = calc_heat_sink(particles, f_dead, f_live, fraction_dead, fraction_live, bulk_density)

    r_0 = I_r * flux_ratio / heat_sink if heat_sink > 1.0e-7 else 0.0

    residence_time = 384.0 / sigma

    return FuelbedIntermediates(
        bulk_density=float(bulk_density),
        packing_ratio=float(packing_ratio),
        optimum_packing_ratio=float(optimum_packing_ratio),
        relative_packing_ratio=float(relative_packing_ratio),
        sigma=sigma,
        fraction_dead=float(fraction_dead),
        fraction_live=float(fraction_live),
        moisture_dead=moisture_dead,
        moisture_live=moisture_live,
        mx_dead=mx_dead,
        mx_live=mx_live,
        reaction_intensity_dead=I_r_dead,
        reaction_intensity_live=I_r_live,
        reaction_intensity=I_r,
        flux_ratio=flux_ratio,
        heat_sink=heat_sink,
        residence_time=residence_time,
        heat_per_unit_area=I_r * residence_time,
        r_0=float(r_0),
    )


def calc_wind_factor(fuelbed: FuelbedIntermediates, wind_speed: float) -> float:
    """Wind factor phi_w for a midflame wind speed in ft/min."""
    if wind_speed < 1.0e-7 or fuelbed.relative_packing_ratio < 1.0e-7:
        return 0.0

    phi_w = fuelbed.wind_C * (wind_speed ** fuelbed.wind_B) * fuelbed.relative_packing_ratio ** (-fuelbed.wind_E)

    return float(phi_w)


def calc_slope_factor(fuelbed: FuelbedIntermediates, slope: float) -> float:
    """Slope factor phi_s for a slope in degrees."""
    if fuelbed.packing_ratio < 1.0e-7:
        return 0.0

    phi_s = 5.275 * (fuelbed.packing_ratio ** (-0.3)) * (np.tan(np.deg2rad(slope))) ** 2

    return float(phi_s)


def calc_effective_wind_speed(fuelbed: FuelbedIntermediates, phi_e: float) -> float:
    """Wind speed (ft/min) that alone would produce the effective wind factor ``phi_e``."""
    if phi_e < 1.0e-7 or fuelbed.relative_packing_ratio < 1.0e-7:
        return 0.0

    u_e = ((phi_e * (fuelbed.relative_packing_ratio**fuelbed.wind_E)) / fuelbed.wind_C) ** (1 / fuelbed.wind_B)

    return float(u_e)


def calc_flame_length(fireline_intensity: float) -> float:
    """Byram's flame length (ft) from fireline intensity (Btu/ft/s)."""
    if fireline_intensity < 1.0e-7:
        return 0.0

    # Brown and Davis 1973 pg. 175
    return float(0.45 * fireline_intensity ** 0.46)


def calc_scorch_height(fireline_intensity: float, midflame_wind_speed: float, air_temperature: float) -> float:
    """Van Wagner (1973) crown scorch height.

    Args:
        fireline_intensity (float): fireline intensity (Btu/ft/s)
        midflame_wind_speed (float): midflame wind speed (ft/min)
        air_temperature (float): air temperature (F)

    Returns:
        float: scorch height (ft)
    """
    if fireline_intensity < 1.0e-7:
        return 0.0

    wind_mph = ft_min_to_mph(midflame_wind_speed)
    scorch = ((63.0 / (140.0 - air_temperature)) * fireline_intensity ** 1.166667
              / np.sqrt(fireline_intensity + wind_mph**3))

    return float(scorch)


def calc_forward_spread_rate(particles: FuelParticles, midflame_wind_speed: float,
                             wind_dir_from_upslope: float, slope: float,
                             is_wind_limit_enabled: bool = True) -> SpreadRateResult:
    """Computes the head fire spread rate and the fire shape it implies.

    Args:
        particles (FuelParticles): fuel bed particles with moistures
        midflame_wind_speed (float): midflame wind speed (ft/min)
        wind_dir_from_upslope (float): direction the wind blows toward, degrees clockwise from upslope
        slope (float): slope steepness (degrees)
        is_wind_limit_enabled (bool): cap the effective wind speed at 0.9 times reaction intensity

    Returns:
        SpreadRateResult: spread result with directions measured from upslope
    """
    fuelbed = calc_no_wind_no_slope(particles)
    r_0 = fuelbed.r_0

    phi_w = calc_wind_factor(fuelbed, midflame_wind_speed)
    phi_s = calc_slope_factor(fuelbed, slope)

    vec_speed, direction = calc_wind_slope_vec(r_0, phi_w, phi_s, normalize_direction(wind_dir_from_upslope))

    R_h = r_0 + vec_speed
    phi_e = vec_speed / r_0 if r_0 > 1.0e-7 else 0.0
    u_e = calc_effective_wind_speed(fuelbed, phi_e)

    # Enforce maximum wind speed
    u_max = 0.9 * fuelbed.reaction_intensity
    is_limit_exceeded = u_e > u_max
    if is_wind_limit_enabled and is_limit_exceeded:
        logger.warning("Effective wind speed %.1f ft/min exceeds the wind limit %.1f ft/min; limiting",
                       u_e, u_max)
        u_e = u_max
        phi_e = calc_wind_factor(fuelbed, u_max)
        R_h = r_0 * (1 + phi_e)

    lwr = calc_length_to_width_ratio(ft_min_to_mph(u_e))
    ellipse = FireEllipse(R_h, lwr)

    hpua = fuelbed.heat_per_unit_area
    fli = hpua * R_h / 60.0
    backing_fli = hpua * ellipse.backing_spread_rate / 60.0
    flanking_fli = hpua * ellipse.flanking_spread_rate / 60.0

    return SpreadRateResult(
        spread_rate=float(R_h),
        direction_of_max_spread=direction,
        no_wind_no_slope_spread_rate=r_0,
        backing_spread_rate=ellipse.backing_spread_rate,
        flanking_spread_rate=ellipse.flanking_spread_rate,
        length_to_width_ratio=ellipse.length_to_width_ratio,
        eccentricity=ellipse.eccentricity,
        reaction_intensity=fuelbed.reaction_intensity,
        reaction_intensity_dead=fuelbed.reaction_intensity_dead,
        reaction_intensity_live=fuelbed.reaction_intensity_live,
        heat_per_unit_area=hpua,
        residence_time=fuelbed.residence_time,
        fireline_intensity=fli,
        flame_length=calc_flame_length(fli),
        backing_fireline_intensity=backing_fli,
        backing_flame_length=calc_flame_length(backing_fli),
        flanking_fireline_intensity=flanking_fli,
        flanking_flame_length=calc_flame_length(flanking_fli),
        midflame_wind_speed=midflame_wind_speed,
        effective_wind_speed=u_e,
        wind_factor=phi_w,
        slope_factor=phi_s,
        is_wind_limit_exceeded=bool(is_limit_exceeded),
        wind_speed_limit=u_max,
        heat_source=fuelbed.reaction_intensity * fuelbed.flux_ratio * (1 + phi_w + phi_s),
        heat_sink=fuelbed.heat_sink,
        propagating_flux_ratio=fuelbed.flux_ratio,
        bulk_density=fuelbed.bulk_density,
        packing_ratio=fuelbed.packing_ratio,
        relative_packing_ratio=fuelbed.relative_packing_ratio,
        characteristic_savr=fuelbed.sigma,
        characteristic_moisture_dead=fuelbed.moisture_dead,
        characteristic_moisture_live=fuelbed.moisture_live,
        live_moisture_of_extinction=fuelbed.mx_live,
        moisture_of_extinction_dead=fuelbed.mx_dead,
    )


def angle_from_heading(direction_of_max_spread: float, direction: float) -> float:
    """Smallest angle (degrees, 0 to 180) between a direction and the heading."""
    beta = abs(normalize_direction(direction) - normalize_direction(direction_of_max_spread))
    return min(beta, 360.0 - beta)


def calc_spread_rate_at_direction(result: SpreadRateResult, direction: float,
                                  mode: SpreadDirectionMode = SpreadDirectionMode.FROM_IGNITION_POINT,
                                  ellipse: Optional[FireEllipse] = None) -> float:
    """Spread rate (ft/min) along ``direction``, measured in the same frame as the result."""
    if ellipse is None:
        ellipse = FireEllipse(result.spread_rate, result.length_to_width_ratio)

    beta = angle_from_heading(result.direction_of_max_spread, direction)
    if beta == 0.0:
        return result.spread_rate

    return ellipse.rate_at(beta, mode)


def apply_direction_of_interest(result: SpreadRateResult, direction: float,
                                mode: SpreadDirectionMode = SpreadDirectionMode.FROM_IGNITION_POINT) -> SpreadRateResult:
    """Fills in the direction of interest outputs of ``result`` in place and returns it."""
    rate = calc_spread_rate_at_direction(result, direction, mode)
    fli = result.heat_per_unit_area * rate / 60.0

    result.direction_of_interest = normalize_direction(direction)
    result.spread_rate_in_direction_of_interest = rate
    result.fireline_intensity_in_direction_of_interest = fli
    result.flame_length_in_direction_of_interest = calc_flame_length(fli)

    return result
