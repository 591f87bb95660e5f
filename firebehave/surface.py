"""Surface fire runs.

``Surface`` ties the fuel catalog, the current ``SurfaceInputs`` and the last
computed ``SpreadRateResult`` together. A run resolves moistures, reduces the
wind to midflame height, runs the spread kernel (once, or once per fuel model
when two fuel models share the stand) and converts directions to the
caller's orientation. Accessors read the last result in caller-chosen units.

Example:
    >>> from firebehave import FuelModels, Surface
    >>> from firebehave.utilities.unit_conversions import SpeedUnits
    >>> surface = Surface(FuelModels())
    >>> surface.inputs.set_fuel_model_number(1)
    >>> surface.inputs.moisture.set_moisture_one_hour(0.06)
    >>> surface.run_in_direction_of_max_spread()
    >>> surface.get_spread_rate(SpeedUnits.CHAINS_PER_HOUR)
"""
from typing import Optional, Tuple
import logging

from firebehave.exceptions import ConfigurationError
from firebehave.models.fire_size import FireEllipse, SpreadDirectionMode
from firebehave.models.fuel_models import (
    FuelBed,
    FuelClass,
    FuelLifeState,
    FuelModels,
    StandardFuel,
    build_particles,
)
from firebehave.models.moisture import MoistureClass
from firebehave.models.rothermel import (
    apply_direction_of_interest,
    calc_flame_length,
    calc_forward_spread_rate,
    calc_scorch_height,
)
from firebehave.models.two_fuel_models import calc_weighted_spread_rate
from firebehave.models.wind_slope import (
    TEN_METER_TO_TWENTY_FOOT,
    WindAdjustmentFactorMethod,
    WindAdjustmentFactorShelterMethod,
    WindHeightInputMode,
    calc_midflame_wind_speed,
    calc_wind_adjustment_factor,
    direction_to_output_frame,
    normalize_direction,
    wind_direction_from_upslope,
)
from firebehave.utilities.data_classes import SpreadRateResult, SurfaceInputs
from firebehave.utilities.unit_conversions import (
    AreaUnits,
    DensityUnits,
    FirelineIntensityUnits,
    HeatPerUnitAreaUnits,
    HeatSinkUnits,
    HeatSourceAndReactionIntensityUnits,
    LengthUnits,
    MoistureUnits,
    SpeedUnits,
    SurfaceAreaToVolumeUnits,
    TemperatureUnits,
    TimeUnits,
    from_base,
    to_base,
)

logger = logging.getLogger(__name__)


class Surface:
    """Surface fire behavior for one set of inputs.

    Args:
        fuel_models (FuelModels): fuel model catalog
        inputs (SurfaceInputs, optional): run inputs, a fresh default set if omitted
    """

    def __init__(self, fuel_models: FuelModels, inputs: Optional[SurfaceInputs] = None):
        self.fuel_models = fuel_models
        self.inputs = inputs if inputs is not None else SurfaceInputs()
        self.result = SpreadRateResult.zero()

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def run_in_direction_of_max_spread(self) -> SpreadRateResult:
        """Computes the head fire and stores the result."""
        return self._run(None, SpreadDirectionMode.FROM_IGNITION_POINT)

    def run_in_direction_of_interest(self, direction: float,
                                     mode: SpreadDirectionMode = SpreadDirectionMode.FROM_IGNITION_POINT
                                     ) -> SpreadRateResult:
        """Computes the head fire plus the spread rate along ``direction``.

        ``direction`` is in degrees, relative to upslope or to north as set by
        the orientation mode of the inputs.
        """
        return self._run(direction, mode)

    def _run(self, direction: Optional[float], mode: SpreadDirectionMode) -> SpreadRateResult:
        inputs = self.inputs
        direction_from_upslope = None
        if direction is not None:
            direction_from_upslope = wind_direction_from_upslope(direction, inputs.aspect, inputs.orientation_mode)

        if inputs.is_using_two_fuel_models:
            result = calc_weighted_spread_rate(inputs.two_fuel_models, self._run_fuel_model,
                                               direction_from_upslope, mode)
        else:
            result = self._run_fuel_model(inputs.fuel_model_number, allow_special_fuel=True)
            if direction_from_upslope is not None:
                apply_direction_of_interest(result, direction_from_upslope, mode)

        result.direction_of_max_spread = direction_to_output_frame(result.direction_of_max_spread,
                                                                   inputs.aspect, inputs.orientation_mode)
        if direction is not None:
            result.direction_of_interest = normalize_direction(direction)

        self.result = result
        logger.debug("Surface run, fuel model %d: %.3f ft/min toward %.1f deg",
                     inputs.fuel_model_number, result.spread_rate, result.direction_of_max_spread)

        return result

    def _fuel_bed_for(self, number: int, allow_special_fuel: bool = False) -> Optional[FuelBed]:
        """Fuel bed to burn, or ``None`` when the zero-spread short circuit applies."""
        special_fuel = self.inputs.special_fuel
        if allow_special_fuel and not isinstance(special_fuel, StandardFuel):
            return special_fuel.fuel_bed

        if not self.fuel_models.is_defined(number):
            logger.warning("Fuel model %d is not defined; spread rate is zero", number)
            return None

        fuel_bed = self.fuel_models.get_fuel_bed(number)
        if fuel_bed.is_all_loads_zero:
            logger.warning("Fuel model %d has no fuel; spread rate is zero", number)
            return None

        return fuel_bed

    def _run_fuel_model(self, number: int, allow_special_fuel: bool = False) -> SpreadRateResult:
        """Runs the spread kernel for one fuel model; directions are relative to upslope."""
        inputs = self.inputs
        fuel_bed = self._fuel_bed_for(number, allow_special_fuel)

        if fuel_bed is None:
            depth = 0.0
            if self.fuel_models.is_defined(number):
                depth = self.fuel_models.get_fuel_bed(number).depth
            waf, shelter = self.calc_wind_adjustment_factor(depth)
            result = SpreadRateResult.zero()
            result.wind_adjustment_factor = waf
            result.wind_adjustment_factor_shelter_method = shelter
            result.midflame_wind_speed = calc_midflame_wind_speed(inputs.wind_speed, inputs.wind_height_mode, waf)
            return result

        waf, shelter = self.calc_wind_adjustment_factor(fuel_bed.depth)
        midflame = calc_midflame_wind_speed(inputs.wind_speed, inputs.wind_height_mode, waf)
        wind_dir = wind_direction_from_upslope(inputs.wind_direction, inputs.aspect, inputs.orientation_mode)

        particles = build_particles(fuel_bed, inputs.moisture.moisture_vector)
        result = calc_forward_spread_rate(particles, midflame, wind_dir, inputs.slope,
                                          inputs.is_wind_limit_enabled)
        result.wind_adjustment_factor = waf
        result.wind_adjustment_factor_shelter_method = shelter

        return result

    def calc_wind_adjustment_factor(self, fuel_bed_depth: float) -> Tuple[float, Optional[WindAdjustmentFactorShelterMethod]]:
        """Wind adjustment factor under the inputs' calculation method."""
        inputs = self.inputs

        if inputs.waf_method == WindAdjustmentFactorMethod.USER_INPUT:
            if inputs.user_waf is None:
                raise ConfigurationError("No user wind adjustment factor was provided", parameter="user_waf")
            return inputs.user_waf, None

        crown_ratio = inputs.crown_ratio
        if inputs.waf_method == WindAdjustmentFactorMethod.DONT_USE_CROWN_RATIO:
            crown_ratio = 1.0

        return calc_wind_adjustment_factor(inputs.canopy_cover, inputs.canopy_height, crown_ratio, fuel_bed_depth)

    def is_moisture_class_input_needed_for_current_fuel_model(self, moisture_class: MoistureClass) -> bool:
        """Reports whether ``moisture_class`` is read by the input mode and loaded in the current fuel model.

        The dead aggregate is needed whenever the mode reads it. An undefined
        fuel model carries no load in any class.
        """
        if not self.inputs.moisture.is_moisture_class_input_needed(moisture_class):
            return False
        if moisture_class == MoistureClass.DEAD_AGGREGATE:
            return True

        number = self.inputs.fuel_model_number
        if not self.fuel_models.is_defined(number):
            return False

        if moisture_class == MoistureClass.LIVE_AGGREGATE:
            return (self.fuel_models.get_fuel_load(number, FuelClass.LIVE_HERBACEOUS) > 0.0
                    or self.fuel_models.get_fuel_load(number, FuelClass.LIVE_WOODY) > 0.0)
        return self.fuel_models.get_fuel_load(number, FuelClass(moisture_class.value)) > 0.0

    # ------------------------------------------------------------------
    # Stateless helpers
    # ------------------------------------------------------------------

    @staticmethod
    def calculate_flame_length(fireline_intensity: float,
                               fireline_intensity_units: FirelineIntensityUnits = FirelineIntensityUnits.BTUS_PER_FOOT_PER_SECOND,
                               length_units: LengthUnits = LengthUnits.FEET) -> float:
        fli = to_base(fireline_intensity, fireline_intensity_units)
        return from_base(calc_flame_length(fli), length_units)

    @staticmethod
    def calculate_scorch_height(fireline_intensity: float, fireline_intensity_units: FirelineIntensityUnits,
                                midflame_wind_speed: float, wind_speed_units: SpeedUnits,
                                air_temperature: float, temperature_units: TemperatureUnits,
                                scorch_height_units: LengthUnits = LengthUnits.FEET) -> float:
        """Van Wagner scorch height from an intensity, a midflame wind and an air temperature."""
        fli = to_base(fireline_intensity, fireline_intensity_units)
        wind = to_base(midflame_wind_speed, wind_speed_units)
        temperature = to_base(air_temperature, temperature_units)
        return from_base(calc_scorch_height(fli, wind, temperature), scorch_height_units)

    # ------------------------------------------------------------------
    # Accessors on the last result
    # ------------------------------------------------------------------

    def _elapsed(self, elapsed_time: Optional[float], time_units: TimeUnits) -> float:
        if elapsed_time is None:
            return self.inputs.elapsed_time
        return to_base(elapsed_time, time_units)

    def _ellipse(self) -> FireEllipse:
        return FireEllipse(self.result.spread_rate, self.result.length_to_width_ratio)

    def get_spread_rate(self, units: SpeedUnits = SpeedUnits.FEET_PER_MINUTE) -> float:
        return from_base(self.result.spread_rate, units)

    def get_spread_rate_in_direction_of_interest(self, units: SpeedUnits = SpeedUnits.FEET_PER_MINUTE) -> float:
        return from_base(self.result.spread_rate_in_direction_of_interest, units)

    def get_backing_spread_rate(self, units: SpeedUnits = SpeedUnits.FEET_PER_MINUTE) -> float:
        return from_base(self.result.backing_spread_rate, units)

    def get_flanking_spread_rate(self, units: SpeedUnits = SpeedUnits.FEET_PER_MINUTE) -> float:
        return from_base(self.result.flanking_spread_rate, units)

    def get_no_wind_no_slope_spread_rate(self, units: SpeedUnits = SpeedUnits.FEET_PER_MINUTE) -> float:
        return from_base(self.result.no_wind_no_slope_spread_rate, units)

    def get_spread_distance(self, units: LengthUnits = LengthUnits.FEET, elapsed_time: Optional[float] = None,
                            time_units: TimeUnits = TimeUnits.MINUTES) -> float:
        """Head fire spread distance: spread rate times elapsed time."""
        return from_base(self.result.spread_rate * self._elapsed(elapsed_time, time_units), units)

    def get_spread_distance_in_direction_of_interest(self, units: LengthUnits = LengthUnits.FEET,
                                                     elapsed_time: Optional[float] = None,
                                                     time_units: TimeUnits = TimeUnits.MINUTES) -> float:
        distance = self.result.spread_rate_in_direction_of_interest * self._elapsed(elapsed_time, time_units)
        return from_base(distance, units)

    def get_backing_spread_distance(self, units: LengthUnits = LengthUnits.FEET, elapsed_time: Optional[float] = None,
                                    time_units: TimeUnits = TimeUnits.MINUTES) -> float:
        return from_base(self.result.backing_spread_rate * self._elapsed(elapsed_time, time_units), units)

    def get_flanking_spread_distance(self, units: LengthUnits = LengthUnits.FEET, elapsed_time: Optional[float] = None,
                                     time_units: TimeUnits = TimeUnits.MINUTES) -> float:
        return from_base(self.result.flanking_spread_rate * self._elapsed(elapsed_time, time_units), units)

    def get_direction_of_max_spread(self) -> float:
        return self.result.direction_of_max_spread

    def get_flame_length(self, units: LengthUnits = LengthUnits.FEET) -> float:
        return from_base(self.result.flame_length, units)

    def get_backing_flame_length(self, units: LengthUnits = LengthUnits.FEET) -> float:
        return from_base(self.result.backing_flame_length, units)

    def get_flanking_flame_length(self, units: LengthUnits = LengthUnits.FEET) -> float:
        return from_base(self.result.flanking_flame_length, units)

    def get_flame_length_in_direction_of_interest(self, units: LengthUnits = LengthUnits.FEET) -> float:
        return from_base(self.result.flame_length_in_direction_of_interest, units)

    def get_fireline_intensity(self, units: FirelineIntensityUnits = FirelineIntensityUnits.BTUS_PER_FOOT_PER_SECOND) -> float:
        return from_base(self.result.fireline_intensity, units)

    def get_backing_fireline_intensity(self, units: FirelineIntensityUnits = FirelineIntensityUnits.BTUS_PER_FOOT_PER_SECOND) -> float:
        return from_base(self.result.backing_fireline_intensity, units)

    def get_flanking_fireline_intensity(self, units: FirelineIntensityUnits = FirelineIntensityUnits.BTUS_PER_FOOT_PER_SECOND) -> float:
        return from_base(self.result.flanking_fireline_intensity, units)

    def get_fireline_intensity_in_direction_of_interest(self,
                                                        units: FirelineIntensityUnits = FirelineIntensityUnits.BTUS_PER_FOOT_PER_SECOND) -> float:
        return from_base(self.result.fireline_intensity_in_direction_of_interest, units)

    def get_heat_per_unit_area(self, units: HeatPerUnitAreaUnits = HeatPerUnitAreaUnits.BTUS_PER_SQUARE_FOOT) -> float:
        return from_base(self.result.heat_per_unit_area, units)

    def get_reaction_intensity(self, units: HeatSourceAndReactionIntensityUnits =
                               HeatSourceAndReactionIntensityUnits.BTUS_PER_SQUARE_FOOT_PER_MINUTE) -> float:
        return from_base(self.result.reaction_intensity, units)

    def get_reaction_intensity_for_life_state(self, life_state: FuelLifeState,
                                              units: HeatSourceAndReactionIntensityUnits =
                                              HeatSourceAndReactionIntensityUnits.BTUS_PER_SQUARE_FOOT_PER_MINUTE) -> float:
        if life_state == FuelLifeState.DEAD:
            return from_base(self.result.reaction_intensity_dead, units)
        return from_base(self.result.reaction_intensity_live, units)

    def get_heat_source(self, units: HeatSourceAndReactionIntensityUnits =
                        HeatSourceAndReactionIntensityUnits.BTUS_PER_SQUARE_FOOT_PER_MINUTE) -> float:
        return from_base(self.result.heat_source, units)

    def get_heat_sink(self, units: HeatSinkUnits = HeatSinkUnits.BTUS_PER_CUBIC_FOOT) -> float:
        return from_base(self.result.heat_sink, units)

    def get_residence_time(self, units: TimeUnits = TimeUnits.MINUTES) -> float:
        return from_base(self.result.residence_time, units)

    def get_bulk_density(self, units: DensityUnits = DensityUnits.POUNDS_PER_CUBIC_FOOT) -> float:
        return from_base(self.result.bulk_density, units)

    def get_characteristic_savr(self, units: SurfaceAreaToVolumeUnits =
                                SurfaceAreaToVolumeUnits.SQUARE_FEET_OVER_CUBIC_FEET) -> float:
        return from_base(self.result.characteristic_savr, units)

    def get_characteristic_moisture_dead(self, units: MoistureUnits = MoistureUnits.FRACTION) -> float:
        return from_base(self.result.characteristic_moisture_dead, units)

    def get_characteristic_moisture_live(self, units: MoistureUnits = MoistureUnits.FRACTION) -> float:
        return from_base(self.result.characteristic_moisture_live, units)

    def get_live_fuel_moisture_of_extinction(self, units: MoistureUnits = MoistureUnits.FRACTION) -> float:
        return from_base(self.result.live_moisture_of_extinction, units)

    def get_midflame_wind_speed(self, units: SpeedUnits = SpeedUnits.FEET_PER_MINUTE) -> float:
        return from_base(self.result.midflame_wind_speed, units)

    def get_effective_wind_speed(self, units: SpeedUnits = SpeedUnits.FEET_PER_MINUTE) -> float:
        return from_base(self.result.effective_wind_speed, units)

    def get_wind_adjustment_factor(self) -> float:
        return self.result.wind_adjustment_factor

    def get_wind_speed(self, units: SpeedUnits = SpeedUnits.FEET_PER_MINUTE,
                       height_mode: WindHeightInputMode = WindHeightInputMode.DIRECT_MIDFLAME) -> float:
        """Wind speed at the requested height, back-calculated from the midflame wind."""
        midflame = self.result.midflame_wind_speed
        waf = self.result.wind_adjustment_factor
        wind_speed = midflame

        if height_mode == WindHeightInputMode.TWENTY_FOOT and waf > 0.0:
            wind_speed = midflame / waf
        elif height_mode == WindHeightInputMode.TEN_METER and waf > 0.0:
            wind_speed = (midflame / waf) * TEN_METER_TO_TWENTY_FOOT

        return from_base(wind_speed, units)

    def get_wind_factor(self) -> float:
        return self.result.wind_factor

    def get_slope_factor(self) -> float:
        return self.result.slope_factor

    def get_fire_length_to_width_ratio(self) -> float:
        return self.result.length_to_width_ratio

    def get_fire_eccentricity(self) -> float:
        return self.result.eccentricity

    def get_heading_to_backing_ratio(self) -> float:
        return self._ellipse().heading_to_backing_ratio

    def get_elliptical_a(self, units: LengthUnits = LengthUnits.FEET, elapsed_time: Optional[float] = None,
                         time_units: TimeUnits = TimeUnits.MINUTES) -> float:
        return from_base(self._ellipse().elliptical_a(self._elapsed(elapsed_time, time_units)), units)

    def get_elliptical_b(self, units: LengthUnits = LengthUnits.FEET, elapsed_time: Optional[float] = None,
                         time_units: TimeUnits = TimeUnits.MINUTES) -> float:
        return from_base(self._ellipse().elliptical_b(self._elapsed(elapsed_time, time_units)), units)

    def get_elliptical_c(self, units: LengthUnits = LengthUnits.FEET, elapsed_time: Optional[float] = None,
                         time_units: TimeUnits = TimeUnits.MINUTES) -> float:
        return from_base(self._ellipse().elliptical_c(self._elapsed(elapsed_time, time_units)), units)

    def get_fire_area(self, units: AreaUnits = AreaUnits.SQUARE_FEET, elapsed_time: Optional[float] = None,
                      time_units: TimeUnits = TimeUnits.MINUTES) -> float:
        return from_base(self._ellipse().area(self._elapsed(elapsed_time, time_units)), units)

    def get_fire_perimeter(self, units: LengthUnits = LengthUnits.FEET, elapsed_time: Optional[float] = None,
                           time_units: TimeUnits = TimeUnits.MINUTES) -> float:
        return from_base(self._ellipse().perimeter(self._elapsed(elapsed_time, time_units)), units)

    def get_scorch_height(self, units: LengthUnits = LengthUnits.FEET) -> float:
        """Scorch height of the last head fire at the inputs' air temperature."""
        scorch = calc_scorch_height(self.result.fireline_intensity, self.result.midflame_wind_speed,
                                    self.inputs.air_temperature)
        return from_base(scorch, units)
