"""Crown fire transition and active crowning.

Crown fire spread follows Rothermel (1991): the crown fire rate is 3.34 times
the spread rate of fuel model 10 burning on flat ground under a wind of 0.4
times the 20-ft wind. Transition from a surface fire is judged against Van
Wagner's (1977) critical surface fireline intensity, and active crowning
against the critical crown spread rate of 3.0 / canopy bulk density (kg/m^3)
in m/min.

All functions take and return base units (ft, min, lb, Btu, fractions).

References:
    - Van Wagner, C. E. (1977). Conditions for the start and spread of crown fire.
      Canadian Journal of Forest Research 7: 23-34.
    - Rothermel, R. C. (1991). Predicting behavior and size of crown fires in the
      Northern Rocky Mountains. USDA Forest Service Research Paper INT-438.
"""
import logging

from firebehave.models.rothermel import calc_flame_length
from firebehave.utilities.data_classes import CrownFireResult, CrownInputs, FireType
from firebehave.utilities.unit_conversions import ft_min_to_mph, ft_to_m

logger = logging.getLogger(__name__)

CROWN_SPREAD_MULTIPLIER = 3.34
CROWN_WIND_ADJUSTMENT_FACTOR = 0.4
CROWN_FUEL_MODEL = 10
CANOPY_HEAT_OF_COMBUSTION = 8000.0 # Btu/lb

KW_M_TO_BTU_FT_S = 0.288672
LB_FT3_TO_KG_M3 = 16.0185
M_MIN_TO_FT_MIN = 3.28084


def calc_crown_fuel_load(canopy_bulk_density: float, canopy_height: float, canopy_base_height: float) -> float:
    """Canopy fuel available to a crown fire (lb/ft^2).

    Not clamped; a canopy base above the canopy top gives a negative load.
    """
    load = canopy_bulk_density * (canopy_height - canopy_base_height)
    if load < 0.0:
        logger.warning("Canopy base height %.1f ft is above canopy height %.1f ft; crown fuel load is negative",
                       canopy_base_height, canopy_height)
    return load


def calc_crown_flame_length(crown_fireline_intensity: float) -> float:
    """Thomas (1963) flame length (ft) of a crown fire from its fireline intensity (Btu/ft/s)."""
    if crown_fireline_intensity < 1.0e-7:
        return 0.0
    return 0.2 * crown_fireline_intensity ** (2.0 / 3.0)


def calc_critical_surface_fireline_intensity(canopy_base_height: float, foliar_moisture: float) -> float:
    """Van Wagner's surface fireline intensity (Btu/ft/s) needed to ignite the canopy.

    Args:
        canopy_base_height (float): canopy base height (ft)
        foliar_moisture (float): foliar moisture content (fraction)

    Returns:
        float: critical surface fireline intensity (Btu/ft/s)
    """
    foliar_moisture_percent = max(foliar_moisture * 100.0, 30.0)
    cbh_m = max(ft_to_m(canopy_base_height), 0.1)

    critical_kw_m = (0.010 * cbh_m * (450.0 + 25.9 * foliar_moisture_percent)) ** 1.5
    return critical_kw_m * KW_M_TO_BTU_FT_S


def calc_critical_crown_spread_rate(canopy_bulk_density: float) -> float:
    """Crown fire spread rate (ft/min) needed to sustain active crowning."""
    cbd_kg_m3 = canopy_bulk_density * LB_FT3_TO_KG_M3
    if cbd_kg_m3 < 1.0e-7:
        return 0.0
    return (3.0 / cbd_kg_m3) * M_MIN_TO_FT_MIN


def calc_power_of_wind(wind_speed_at_twenty_feet: float, crown_spread_rate: float) -> float:
    """Rothermel (1991) power of the wind (ft-lb/s/ft^2), both speeds in ft/min."""
    relative_speed = (wind_speed_at_twenty_feet - crown_spread_rate) / 60.0
    if relative_speed < 1.0e-7:
        relative_speed = 0.0
    return 0.00106 * relative_speed**3


def calc_fire_type(transition_ratio: float, active_ratio: float) -> FireType:
    if transition_ratio < 1.0:
        return FireType.CONDITIONAL_CROWN if active_ratio >= 1.0 else FireType.SURFACE
    return FireType.CROWNING if active_ratio >= 1.0 else FireType.TORCHING


def calc_crown_fire(crown_inputs: CrownInputs, canopy_height: float, surface_heat_per_unit_area: float,
                    surface_fireline_intensity: float, fuel_model_10_spread_rate: float,
                    wind_speed_at_twenty_feet: float) -> CrownFireResult:
    """Crown fire behavior given the surface fire and the forced fuel model 10 run.

    Args:
        crown_inputs (CrownInputs): canopy base height, bulk density and foliar moisture
        canopy_height (float): canopy height (ft)
        surface_heat_per_unit_area (float): surface fire heat per unit area (Btu/ft^2)
        surface_fireline_intensity (float): surface fire fireline intensity (Btu/ft/s)
        fuel_model_10_spread_rate (float): fuel model 10 spread rate under crown conditions (ft/min)
        wind_speed_at_twenty_feet (float): 20-ft wind speed (ft/min)

    Returns:
        CrownFireResult: crown fire outputs
    """
    crown_spread_rate = CROWN_SPREAD_MULTIPLIER * fuel_model_10_spread_rate

    crown_fuel_load = calc_crown_fuel_load(crown_inputs.canopy_bulk_density, canopy_height,
                                           crown_inputs.canopy_base_height)
    canopy_hpua = crown_fuel_load * CANOPY_HEAT_OF_COMBUSTION
    crown_hpua = surface_heat_per_unit_area + canopy_hpua

    crown_fli = (crown_spread_rate / 60.0) * crown_hpua
    crown_flame_length = calc_crown_flame_length(crown_fli)

    critical_fli = calc_critical_surface_fireline_intensity(crown_inputs.canopy_base_height,
                                                            crown_inputs.foliar_moisture)
    transition_ratio = surface_fireline_intensity / critical_fli if critical_fli >= 1.0e-7 else 0.0

    critical_rate = calc_critical_crown_spread_rate(crown_inputs.canopy_bulk_density)
    active_ratio = crown_spread_rate / critical_rate if critical_rate >= 1.0e-7 else 0.0

    power_of_fire = crown_fli / 129.0
    power_of_wind = calc_power_of_wind(wind_speed_at_twenty_feet, crown_spread_rate)
    power_ratio = power_of_fire / power_of_wind if power_of_wind > 1.0e-7 else 0.0

    fire_type = calc_fire_type(transition_ratio, active_ratio)

    logger.debug("Crown fire: rate %.2f ft/min, transition ratio %.3f, active ratio %.3f, %s",
                 crown_spread_rate, transition_ratio, active_ratio, fire_type.value)

    return CrownFireResult(
        crown_fire_spread_rate=crown_spread_rate,
        crown_fuel_load=crown_fuel_load,
        canopy_heat_per_unit_area=canopy_hpua,
        crown_fire_heat_per_unit_area=crown_hpua,
        crown_fireline_intensity=crown_fli,
        crown_flame_length=crown_flame_length,
        critical_surface_fireline_intensity=critical_fli,
        critical_surface_flame_length=calc_flame_length(critical_fli),
        critical_crown_spread_rate=critical_rate,
        transition_ratio=transition_ratio,
        active_ratio=active_ratio,
        power_of_fire=power_of_fire,
        power_of_wind=power_of_wind,
        power_ratio=power_ratio,
        fire_type=fire_type,
        crown_length_to_width_ratio=1.0 + 0.125 * ft_min_to_mph(wind_speed_at_twenty_feet),
        wind_speed_at_twenty_feet=wind_speed_at_twenty_feet,
        surface_heat_per_unit_area=surface_heat_per_unit_area,
        surface_fireline_intensity=surface_fireline_intensity,
    )
