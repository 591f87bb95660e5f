from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import logging

from firebehave.exceptions import ValidationError
from firebehave.models.fuel_models import SpecialFuel, StandardFuel
from firebehave.models.moisture import MoistureInputs
from firebehave.models.wind_slope import (
    WindAdjustmentFactorMethod,
    WindAdjustmentFactorShelterMethod,
    WindAndSpreadOrientationMode,
    WindHeightInputMode,
    normalize_direction,
)
from firebehave.utilities.unit_conversions import (
    CoverUnits,
    DensityUnits,
    LengthUnits,
    MoistureUnits,
    SlopeUnits,
    SpeedUnits,
    TemperatureUnits,
    TimeUnits,
    to_base,
)

logger = logging.getLogger(__name__)


class TwoFuelModelsMethod(Enum):
    ARITHMETIC = "arithmetic"
    HARMONIC = "harmonic"
    TWO_DIMENSIONAL = "two_dimensional"


class FireType(Enum):
    SURFACE = "surface"
    TORCHING = "torching"
    CONDITIONAL_CROWN = "conditional_crown"
    CROWNING = "crowning"


@dataclass
class TwoFuelModelConfig:
    first_fuel_model_number: int
    second_fuel_model_number: int
    first_fuel_model_coverage: float
    method: TwoFuelModelsMethod = TwoFuelModelsMethod.ARITHMETIC

    def __post_init__(self):
        if not 0.0 <= self.first_fuel_model_coverage <= 1.0:
            raise ValidationError("Coverage must be between 0 and 1",
                                  field="first_fuel_model_coverage",
                                  value=self.first_fuel_model_coverage)


@dataclass
class SurfaceInputs:
    """Inputs of a surface fire run, stored in base units.

    Setters accept caller units and normalize directions into [0, 360).
    """
    fuel_model_number: int = 0
    special_fuel: SpecialFuel = field(default_factory=StandardFuel)
    moisture: MoistureInputs = field(default_factory=MoistureInputs)
    wind_speed: float = 0.0 # ft/min
    wind_height_mode: WindHeightInputMode = WindHeightInputMode.DIRECT_MIDFLAME
    wind_direction: float = 0.0 # deg
    orientation_mode: WindAndSpreadOrientationMode = WindAndSpreadOrientationMode.RELATIVE_TO_UPSLOPE
    slope: float = 0.0 # deg
    aspect: float = 0.0 # deg, direction the slope faces
    canopy_cover: float = 0.0
    canopy_height: float = 0.0 # ft
    crown_ratio: float = 0.0
    waf_method: WindAdjustmentFactorMethod = WindAdjustmentFactorMethod.USE_CROWN_RATIO
    user_waf: Optional[float] = None
    two_fuel_models: Optional[TwoFuelModelConfig] = None
    air_temperature: float = 77.0 # F
    elapsed_time: float = 60.0 # min
    is_wind_limit_enabled: bool = True

    def __post_init__(self):
        self.wind_direction = normalize_direction(self.wind_direction)
        self.aspect = normalize_direction(self.aspect)

    def set_fuel_model_number(self, number: int):
        self.fuel_model_number = int(number)

    def set_special_fuel(self, special_fuel: SpecialFuel):
        self.special_fuel = special_fuel

    def set_wind_speed(self, wind_speed: float, units: SpeedUnits = SpeedUnits.FEET_PER_MINUTE,
                       height_mode: Optional[WindHeightInputMode] = None):
        self.wind_speed = to_base(wind_speed, units)
        if height_mode is not None:
            self.wind_height_mode = height_mode

    def set_wind_height_mode(self, height_mode: WindHeightInputMode):
        self.wind_height_mode = height_mode

    def set_wind_direction(self, direction: float):
        self.wind_direction = normalize_direction(direction)

    def set_orientation_mode(self, orientation_mode: WindAndSpreadOrientationMode):
        self.orientation_mode = orientation_mode

    def set_slope(self, slope: float, units: SlopeUnits = SlopeUnits.DEGREES):
        self.slope = to_base(slope, units)

    def set_aspect(self, aspect: float):
        self.aspect = normalize_direction(aspect)

    def set_canopy_cover(self, canopy_cover: float, units: CoverUnits = CoverUnits.FRACTION):
        self.canopy_cover = to_base(canopy_cover, units)

    def set_canopy_height(self, canopy_height: float, units: LengthUnits = LengthUnits.FEET):
        self.canopy_height = to_base(canopy_height, units)

    def set_crown_ratio(self, crown_ratio: float, units: CoverUnits = CoverUnits.FRACTION):
        self.crown_ratio = to_base(crown_ratio, units)

    def set_wind_adjustment_factor_method(self, method: WindAdjustmentFactorMethod):
        self.waf_method = method

    def set_user_provided_wind_adjustment_factor(self, waf: float):
        self.user_waf = waf
        self.waf_method = WindAdjustmentFactorMethod.USER_INPUT

    def set_two_fuel_models(self, first: int, second: int, first_coverage: float,
                            method: TwoFuelModelsMethod = TwoFuelModelsMethod.ARITHMETIC,
                            units: CoverUnits = CoverUnits.FRACTION):
        self.two_fuel_models = TwoFuelModelConfig(int(first), int(second),
                                                  to_base(first_coverage, units), method)
        self.fuel_model_number = int(first)

    def clear_two_fuel_models(self):
        self.two_fuel_models = None

    @property
    def is_using_two_fuel_models(self) -> bool:
        return self.two_fuel_models is not None

    def set_air_temperature(self, temperature: float, units: TemperatureUnits = TemperatureUnits.FAHRENHEIT):
        self.air_temperature = to_base(temperature, units)

    def set_elapsed_time(self, elapsed_time: float, units: TimeUnits = TimeUnits.MINUTES):
        self.elapsed_time = to_base(elapsed_time, units)

    def set_wind_limit_enabled(self, enabled: bool):
        self.is_wind_limit_enabled = enabled


@dataclass
class CrownInputs:
    canopy_base_height: float = 0.0 # ft
    canopy_bulk_density: float = 0.0 # lb/ft^3
    foliar_moisture: float = 1.0 # fraction

    def set_canopy_base_height(self, height: float, units: LengthUnits = LengthUnits.FEET):
        self.canopy_base_height = to_base(height, units)

    def set_canopy_bulk_density(self, density: float,
                                units: DensityUnits = DensityUnits.POUNDS_PER_CUBIC_FOOT):
        self.canopy_bulk_density = to_base(density, units)

    def set_foliar_moisture(self, moisture: float, units: MoistureUnits = MoistureUnits.FRACTION):
        self.foliar_moisture = to_base(moisture, units)


@dataclass
class SpreadRateResult:
    """Outputs of one surface spread run, in base units.

    Directions are degrees clockwise from upslope as produced by the spread
    kernel; the surface run converts them to the caller's orientation.
    """
    spread_rate: float = 0.0 # ft/min
    direction_of_max_spread: float = 0.0 # deg
    no_wind_no_slope_spread_rate: float = 0.0 # ft/min
    backing_spread_rate: float = 0.0 # ft/min
    flanking_spread_rate: float = 0.0 # ft/min
    direction_of_interest: Optional[float] = None # deg
    spread_rate_in_direction_of_interest: float = 0.0 # ft/min
    length_to_width_ratio: float = 1.0
    eccentricity: float = 0.0
    reaction_intensity: float = 0.0 # Btu/ft^2/min
    reaction_intensity_dead: float = 0.0 # Btu/ft^2/min
    reaction_intensity_live: float = 0.0 # Btu/ft^2/min
    heat_per_unit_area: float = 0.0 # Btu/ft^2
    residence_time: float = 0.0 # min
    fireline_intensity: float = 0.0 # Btu/ft/s
    flame_length: float = 0.0 # ft
    backing_fireline_intensity: float = 0.0
    backing_flame_length: float = 0.0
    flanking_fireline_intensity: float = 0.0
    flanking_flame_length: float = 0.0
    fireline_intensity_in_direction_of_interest: float = 0.0
    flame_length_in_direction_of_interest: float = 0.0
    midflame_wind_speed: float = 0.0 # ft/min
    wind_adjustment_factor: float = 1.0
    wind_adjustment_factor_shelter_method: Optional[WindAdjustmentFactorShelterMethod] = None
    effective_wind_speed: float = 0.0 # ft/min
    wind_factor: float = 0.0
    slope_factor: float = 0.0
    is_wind_limit_exceeded: bool = False
    wind_speed_limit: float = 0.0 # ft/min
    heat_source: float = 0.0 # Btu/ft^2/min
    heat_sink: float = 0.0 # Btu/ft^3
    propagating_flux_ratio: float = 0.0
    bulk_density: float = 0.0 # lb/ft^3
    packing_ratio: float = 0.0
    relative_packing_ratio: float = 0.0
    characteristic_savr: float = 0.0 # 1/ft
    characteristic_moisture_dead: float = 0.0
    characteristic_moisture_live: float = 0.0
    live_moisture_of_extinction: float = 0.0
    moisture_of_extinction_dead: float = 0.0

    @classmethod
    def zero(cls) -> "SpreadRateResult":
        return cls()


@dataclass
class CrownFireResult:
    crown_fire_spread_rate: float = 0.0 # ft/min
    crown_fuel_load: float = 0.0 # lb/ft^2
    canopy_heat_per_unit_area: float = 0.0 # Btu/ft^2
    crown_fire_heat_per_unit_area: float = 0.0 # Btu/ft^2
    crown_fireline_intensity: float = 0.0 # Btu/ft/s
    crown_flame_length: float = 0.0 # ft
    critical_surface_fireline_intensity: float = 0.0 # Btu/ft/s
    critical_surface_flame_length: float = 0.0 # ft
    critical_crown_spread_rate: float = 0.0 # ft/min
    transition_ratio: float = 0.0
    active_ratio: float = 0.0
    power_of_fire: float = 0.0
    power_of_wind: float = 0.0
    power_ratio: float = 0.0
    fire_type: FireType = FireType.SURFACE
    crown_length_to_width_ratio: float = 1.0
    wind_speed_at_twenty_feet: float = 0.0 # ft/min
    surface_heat_per_unit_area: float = 0.0 # Btu/ft^2
    surface_fireline_intensity: float = 0.0 # Btu/ft/s
