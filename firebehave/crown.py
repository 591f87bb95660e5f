"""Crown fire runs.

``Crown`` runs the surface fire of a ``Surface`` and then the crown fire
what-if: a copy of the surface inputs forced to fuel model 10 on flat ground
with the wind reduced from 20 ft by a fixed factor of 0.4. The surface inputs
themselves are never modified.
"""
from copy import deepcopy
from typing import Optional
import logging

from firebehave.exceptions import ConfigurationError
from firebehave.models.crown_model import (
    CROWN_FUEL_MODEL,
    CROWN_WIND_ADJUSTMENT_FACTOR,
    calc_crown_fire,
)
from firebehave.models.fire_size import FireEllipse
from firebehave.models.fuel_models import FuelModels, StandardFuel
from firebehave.models.wind_slope import (
    WindAndSpreadOrientationMode,
    WindHeightInputMode,
    wind_speed_at_twenty_feet,
)
from firebehave.surface import Surface
from firebehave.utilities.data_classes import CrownFireResult, CrownInputs, FireType, SurfaceInputs
from firebehave.utilities.unit_conversions import (
    AreaUnits,
    FirelineIntensityUnits,
    HeatPerUnitAreaUnits,
    LengthUnits,
    LoadingUnits,
    SpeedUnits,
    TimeUnits,
    from_base,
    to_base,
)

logger = logging.getLogger(__name__)


class Crown:
    """Crown fire behavior on top of a surface fire.

    Args:
        fuel_models (FuelModels): fuel model catalog, must define fuel model 10
        surface (Surface): surface fire whose inputs describe the stand
        crown_inputs (CrownInputs, optional): canopy inputs, defaults if omitted
    """

    def __init__(self, fuel_models: FuelModels, surface: Surface, crown_inputs: Optional[CrownInputs] = None):
        self.fuel_models = fuel_models
        self.surface = surface
        self.crown_inputs = crown_inputs if crown_inputs is not None else CrownInputs()
        self.result = CrownFireResult()

    def run_crown_fire(self) -> CrownFireResult:
        """Runs the surface fire, then the crown fire, and stores the result.

        Raises:
            ConfigurationError: if the surface wind is a direct midflame input,
                which has no 20-ft equivalent
        """
        inputs = self.surface.inputs
        wind_speed_20ft = wind_speed_at_twenty_feet(inputs.wind_speed, inputs.wind_height_mode)
        if wind_speed_20ft is None:
            raise ConfigurationError("Crown fire runs need a 20-ft or 10-m wind speed, not a midflame wind",
                                     parameter="wind_height_mode")

        surface_result = self.surface.run_in_direction_of_max_spread()

        crown_surface = Surface(self.fuel_models, self._crown_fuel_inputs(inputs, wind_speed_20ft))
        fuel_model_10 = crown_surface.run_in_direction_of_max_spread()
        logger.debug("Fuel model 10 under crown wind %.1f ft/min: %.3f ft/min",
                     CROWN_WIND_ADJUSTMENT_FACTOR * wind_speed_20ft, fuel_model_10.spread_rate)

        self.result = calc_crown_fire(self.crown_inputs, inputs.canopy_height,
                                      surface_result.heat_per_unit_area, surface_result.fireline_intensity,
                                      fuel_model_10.spread_rate, wind_speed_20ft)
        return self.result

    @staticmethod
    def _crown_fuel_inputs(inputs: SurfaceInputs, wind_speed_20ft: float) -> SurfaceInputs:
        """Copy of ``inputs`` set up for the fuel model 10 crown spread run."""
        crown_fuel = deepcopy(inputs)
        crown_fuel.set_fuel_model_number(CROWN_FUEL_MODEL)
        crown_fuel.set_special_fuel(StandardFuel())
        crown_fuel.clear_two_fuel_models()
        crown_fuel.set_slope(0.0)
        crown_fuel.set_wind_direction(0.0)
        crown_fuel.set_orientation_mode(WindAndSpreadOrientationMode.RELATIVE_TO_UPSLOPE)
        crown_fuel.set_wind_speed(CROWN_WIND_ADJUSTMENT_FACTOR * wind_speed_20ft,
                                  height_mode=WindHeightInputMode.DIRECT_MIDFLAME)
        crown_fuel.set_user_provided_wind_adjustment_factor(CROWN_WIND_ADJUSTMENT_FACTOR)
        return crown_fuel

    def _elapsed(self, elapsed_time: Optional[float], time_units: TimeUnits) -> float:
        if elapsed_time is None:
            return self.surface.inputs.elapsed_time
        return to_base(elapsed_time, time_units)

    def _ellipse(self) -> FireEllipse:
        return FireEllipse(self.result.crown_fire_spread_rate, self.result.crown_length_to_width_ratio)

    def get_crown_fire_spread_rate(self, units: SpeedUnits = SpeedUnits.FEET_PER_MINUTE) -> float:
        return from_base(self.result.crown_fire_spread_rate, units)

    def get_crown_fire_spread_distance(self, units: LengthUnits = LengthUnits.FEET,
                                       elapsed_time: Optional[float] = None,
                                       time_units: TimeUnits = TimeUnits.MINUTES) -> float:
        distance = self.result.crown_fire_spread_rate * self._elapsed(elapsed_time, time_units)
        return from_base(distance, units)

    def get_crown_fire_area(self, units: AreaUnits = AreaUnits.SQUARE_FEET, elapsed_time: Optional[float] = None,
                            time_units: TimeUnits = TimeUnits.MINUTES) -> float:
        return from_base(self._ellipse().area(self._elapsed(elapsed_time, time_units)), units)

    def get_crown_fire_perimeter(self, units: LengthUnits = LengthUnits.FEET, elapsed_time: Optional[float] = None,
                                 time_units: TimeUnits = TimeUnits.MINUTES) -> float:
        return from_base(self._ellipse().perimeter(self._elapsed(elapsed_time, time_units)), units)

    def get_crown_length_to_width_ratio(self) -> float:
        return self.result.crown_length_to_width_ratio

    def get_crown_fuel_load(self, units: LoadingUnits = LoadingUnits.POUNDS_PER_SQUARE_FOOT) -> float:
        return from_base(self.result.crown_fuel_load, units)

    def get_crown_fire_heat_per_unit_area(self,
                                          units: HeatPerUnitAreaUnits = HeatPerUnitAreaUnits.BTUS_PER_SQUARE_FOOT) -> float:
        return from_base(self.result.crown_fire_heat_per_unit_area, units)

    def get_crown_fireline_intensity(self, units: FirelineIntensityUnits =
                                     FirelineIntensityUnits.BTUS_PER_FOOT_PER_SECOND) -> float:
        return from_base(self.result.crown_fireline_intensity, units)

    def get_crown_flame_length(self, units: LengthUnits = LengthUnits.FEET) -> float:
        return from_base(self.result.crown_flame_length, units)

    def get_critical_surface_fireline_intensity(self, units: FirelineIntensityUnits =
                                                FirelineIntensityUnits.BTUS_PER_FOOT_PER_SECOND) -> float:
        return from_base(self.result.critical_surface_fireline_intensity, units)

    def get_critical_surface_flame_length(self, units: LengthUnits = LengthUnits.FEET) -> float:
        return from_base(self.result.critical_surface_flame_length, units)

    def get_critical_crown_spread_rate(self, units: SpeedUnits = SpeedUnits.FEET_PER_MINUTE) -> float:
        return from_base(self.result.critical_crown_spread_rate, units)

    def get_transition_ratio(self) -> float:
        return self.result.transition_ratio

    def get_active_ratio(self) -> float:
        return self.result.active_ratio

    def get_power_of_fire(self) -> float:
        return self.result.power_of_fire

    def get_power_of_wind(self) -> float:
        return self.result.power_of_wind

    def get_power_ratio(self) -> float:
        return self.result.power_ratio

    def get_fire_type(self) -> FireType:
        return self.result.fire_type

    def get_wind_speed_at_twenty_feet(self, units: SpeedUnits = SpeedUnits.FEET_PER_MINUTE) -> float:
        return from_base(self.result.wind_speed_at_twenty_feet, units)
