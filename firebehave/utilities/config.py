"""Loading run inputs from ``.cfg`` files.

Files are read with ``configparser``. A surface run uses the sections below;
every value is in base units unless a ``<key>_units`` entry names other units.

.. code-block:: ini

    [Fuel]
    fuel_model = 1

    [Moisture]
    mode = by_size_class
    one_hour = 6
    one_hour_units = percent
    ten_hour = 0.07
    scenario = D1L1

    [Wind]
    speed = 5
    speed_units = mph
    height_mode = twenty_foot
    direction = 0
    orientation_mode = relative_to_upslope
    waf_method = use_crown_ratio

    [Terrain]
    slope = 30
    slope_units = percent
    aspect = 180

    [Canopy]
    cover = 50
    cover_units = percent
    height = 30
    crown_ratio = 0.5

    [TwoFuelModels]
    first = 1
    second = 10
    first_coverage = 0.6
    method = harmonic

    [Run]
    elapsed_time = 1
    elapsed_time_units = h
    air_temperature = 77

A crown run additionally reads:

.. code-block:: ini

    [Crown]
    canopy_base_height = 6
    canopy_bulk_density = 0.01
    foliar_moisture = 100
    foliar_moisture_units = percent

Only ``[Fuel]`` and ``[Moisture]`` are required for a surface run and
``[Crown]`` for a crown run; other sections fall back to the defaults of
``SurfaceInputs``.
"""
from configparser import ConfigParser, SectionProxy
from enum import Enum
from typing import Optional, Type
import logging
import os

from firebehave.exceptions import ConfigurationError
from firebehave.models.fuel_models import FuelModels
from firebehave.models.moisture import MoistureClass, MoistureInputMode, MoistureInputs, MoistureScenarios
from firebehave.models.wind_slope import (
    WindAdjustmentFactorMethod,
    WindAndSpreadOrientationMode,
    WindHeightInputMode,
)
from firebehave.utilities.data_classes import CrownInputs, SurfaceInputs, TwoFuelModelsMethod
from firebehave.utilities.unit_conversions import (
    CoverUnits,
    DensityUnits,
    LengthUnits,
    MoistureUnits,
    SlopeUnits,
    SpeedUnits,
    TemperatureUnits,
    TimeUnits,
    parse_units,
    to_base,
)

logger = logging.getLogger(__name__)


def _read_config(cfg_path: str) -> ConfigParser:
    if not os.path.exists(cfg_path):
        raise ConfigurationError(f"Config file '{cfg_path}' not found", config_path=cfg_path)

    config = ConfigParser()
    config.read(cfg_path)
    logger.info("Read fire behavior inputs from %s", cfg_path)
    return config


def _section(config: ConfigParser, name: str, cfg_path: str) -> SectionProxy:
    if name not in config:
        raise ConfigurationError(f"Missing [{name}] section", config_path=cfg_path, parameter=name)
    return config[name]


def _get_float(section: SectionProxy, key: str, cfg_path: str, default: Optional[float] = None,
               units_cls: Optional[Type[Enum]] = None) -> Optional[float]:
    """Reads ``key`` as a float, converted to base units when ``<key>_units`` is set."""
    parameter = f"{section.name}.{key}"
    if key not in section:
        if default is None:
            raise ConfigurationError(f"Missing required value '{key}'", config_path=cfg_path,
                                     parameter=parameter)
        return default

    try:
        value = section.getfloat(key)
    except ValueError:
        raise ConfigurationError(f"'{section[key]}' is not a number", config_path=cfg_path,
                                 parameter=parameter)

    units_key = f"{key}_units"
    if units_cls is not None and units_key in section:
        try:
            units = parse_units(units_cls, section[units_key])
        except ValueError as e:
            raise ConfigurationError(str(e), config_path=cfg_path, parameter=f"{section.name}.{units_key}")
        return to_base(value, units)

    return value


def _get_int(section: SectionProxy, key: str, cfg_path: str) -> int:
    parameter = f"{section.name}.{key}"
    if key not in section:
        raise ConfigurationError(f"Missing required value '{key}'", config_path=cfg_path, parameter=parameter)
    try:
        return section.getint(key)
    except ValueError:
        raise ConfigurationError(f"'{section[key]}' is not an integer", config_path=cfg_path,
                                 parameter=parameter)


def _get_enum(section: SectionProxy, key: str, enum_cls: Type[Enum], cfg_path: str, default: Enum) -> Enum:
    if key not in section:
        return default

    text = section[key].strip()
    for member in enum_cls:
        if text == member.value or text.upper() == member.name:
            return member

    raise ConfigurationError(f"'{text}' is not a valid {enum_cls.__name__}", config_path=cfg_path,
                             parameter=f"{section.name}.{key}")


def _load_moisture(section: SectionProxy, cfg_path: str, scenarios: Optional[MoistureScenarios]) -> MoistureInputs:
    moisture = MoistureInputs(scenarios)
    mode = _get_enum(section, "mode", MoistureInputMode, cfg_path, MoistureInputMode.BY_SIZE_CLASS)
    moisture.set_moisture_input_mode(mode)

    for moisture_class in MoistureClass:
        if moisture_class.value in section:
            value = _get_float(section, moisture_class.value, cfg_path, units_cls=MoistureUnits)
            moisture.set_moisture(moisture_class, value)

    if mode == MoistureInputMode.MOISTURE_SCENARIO:
        if "scenario" not in section:
            raise ConfigurationError("Moisture scenario mode needs a 'scenario' name", config_path=cfg_path,
                                     parameter="Moisture.scenario")
        if not moisture.set_moisture_scenario_by_name(section["scenario"].strip()):
            raise ConfigurationError(f"Unknown moisture scenario '{section['scenario']}'",
                                     config_path=cfg_path, parameter="Moisture.scenario")

    return moisture


def load_surface_inputs(cfg_path: str, fuel_models: Optional[FuelModels] = None,
                        scenarios: Optional[MoistureScenarios] = None) -> SurfaceInputs:
    """Builds ``SurfaceInputs`` from a ``.cfg`` file.

    Args:
        cfg_path (str): path to the config file
        fuel_models (FuelModels, optional): catalog used to check the fuel model numbers
        scenarios (MoistureScenarios, optional): scenarios a named scenario is looked up in

    Raises:
        ConfigurationError: for a missing file, section or required value, or
            a value that cannot be parsed

    Returns:
        SurfaceInputs: the run inputs
    """
    config = _read_config(cfg_path)
    inputs = SurfaceInputs()

    fuel = _section(config, "Fuel", cfg_path)
    inputs.set_fuel_model_number(_get_int(fuel, "fuel_model", cfg_path))

    moisture = _section(config, "Moisture", cfg_path)
    inputs.moisture = _load_moisture(moisture, cfg_path, scenarios)

    if "Wind" in config:
        wind = config["Wind"]
        inputs.set_wind_speed(_get_float(wind, "speed", cfg_path, 0.0, SpeedUnits))
        inputs.set_wind_height_mode(_get_enum(wind, "height_mode", WindHeightInputMode, cfg_path,
                                              inputs.wind_height_mode))
        inputs.set_wind_direction(_get_float(wind, "direction", cfg_path, 0.0))
        inputs.set_orientation_mode(_get_enum(wind, "orientation_mode", WindAndSpreadOrientationMode,
                                              cfg_path, inputs.orientation_mode))
        inputs.set_wind_adjustment_factor_method(_get_enum(wind, "waf_method", WindAdjustmentFactorMethod,
                                                           cfg_path, inputs.waf_method))
        if "waf" in wind:
            inputs.set_user_provided_wind_adjustment_factor(_get_float(wind, "waf", cfg_path))

    if "Terrain" in config:
        terrain = config["Terrain"]
        inputs.set_slope(_get_float(terrain, "slope", cfg_path, 0.0, SlopeUnits))
        inputs.set_aspect(_get_float(terrain, "aspect", cfg_path, 0.0))

    if "Canopy" in config:
        canopy = config["Canopy"]
        inputs.set_canopy_cover(_get_float(canopy, "cover", cfg_path, 0.0, CoverUnits))
        inputs.set_canopy_height(_get_float(canopy, "height", cfg_path, 0.0, LengthUnits))
        inputs.set_crown_ratio(_get_float(canopy, "crown_ratio", cfg_path, 0.0, CoverUnits))

    if "TwoFuelModels" in config:
        two_fuel = config["TwoFuelModels"]
        method = _get_enum(two_fuel, "method", TwoFuelModelsMethod, cfg_path, TwoFuelModelsMethod.ARITHMETIC)
        inputs.set_two_fuel_models(_get_int(two_fuel, "first", cfg_path),
                                   _get_int(two_fuel, "second", cfg_path),
                                   _get_float(two_fuel, "first_coverage", cfg_path, units_cls=CoverUnits),
                                   method)

    if "Run" in config:
        run = config["Run"]
        inputs.set_elapsed_time(_get_float(run, "elapsed_time", cfg_path, inputs.elapsed_time, TimeUnits))
        inputs.set_air_temperature(_get_float(run, "air_temperature", cfg_path, inputs.air_temperature,
                                              TemperatureUnits))
        if "wind_limit" in run:
            inputs.set_wind_limit_enabled(run.getboolean("wind_limit"))

    if fuel_models is not None:
        numbers = [inputs.fuel_model_number]
        if inputs.is_using_two_fuel_models:
            numbers.append(inputs.two_fuel_models.second_fuel_model_number)
        for number in numbers:
            if not fuel_models.is_defined(number):
                raise ConfigurationError(f"Fuel model {number} is not defined", config_path=cfg_path,
                                         parameter="Fuel.fuel_model")

    return inputs


def load_crown_inputs(cfg_path: str) -> CrownInputs:
    """Builds ``CrownInputs`` from the ``[Crown]`` section of a ``.cfg`` file."""
    config = _read_config(cfg_path)
    crown = _section(config, "Crown", cfg_path)

    crown_inputs = CrownInputs()
    crown_inputs.set_canopy_base_height(_get_float(crown, "canopy_base_height", cfg_path, units_cls=LengthUnits))
    crown_inputs.set_canopy_bulk_density(_get_float(crown, "canopy_bulk_density", cfg_path,
                                                    units_cls=DensityUnits))
    crown_inputs.set_foliar_moisture(_get_float(crown, "foliar_moisture", cfg_path, crown_inputs.foliar_moisture,
                                                MoistureUnits))

    return crown_inputs
