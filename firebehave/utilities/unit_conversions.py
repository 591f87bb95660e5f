"""Unit conversions for fire behavior quantities.

Every physical quantity has an ``Enum`` of supported units and one fixed base
unit used for internal storage. ``to_base`` and ``from_base`` convert a value
between a caller-chosen unit and the base unit of its quantity, dispatching on
the enum type of ``units``.

Base units:
    - length: feet
    - speed: feet per minute
    - time: minutes
    - temperature: degrees Fahrenheit
    - slope: degrees
    - cover, moisture, curing level: fraction
    - loading: lb/ft^2
    - density: lb/ft^3
    - heat of combustion: Btu/lb
    - heat source and reaction intensity: Btu/ft^2/min
    - fireline intensity: Btu/ft/s
    - heat sink: Btu/ft^3
    - heat per unit area: Btu/ft^2
    - surface area to volume ratio: ft^2/ft^3
    - basal area: ft^2/acre
    - area: ft^2
"""

from enum import Enum
import numpy as np

FEET_PER_METER = 1 / 0.3048
BTU_TO_KJ = 1.05505585
LB_TO_KG = 0.45359237
SQ_FT_PER_ACRE = 43560.0


def m_to_ft(f_m: float) -> float:
    """Converts from meters to feet

    Args:
        f_m (float): meters

    Returns:
        float: feet
    """
    return f_m * FEET_PER_METER


def ft_to_m(f_ft: float) -> float:
    """Converts from feet to meters

    Args:
        f_ft (float): feet

    Returns:
        float: meters
    """
    return f_ft / FEET_PER_METER


def mph_to_ft_min(f_mph: float) -> float:
    """Converts from miles per hour to ft/min

    Args:
        f_mph (float): miles per hour

    Returns:
        float: ft/min
    """
    return f_mph * 88.0


def ft_min_to_mph(f_ft_min: float) -> float:
    """Converts from ft/min to miles per hour

    Args:
        f_ft_min (float): ft/min

    Returns:
        float: miles per hour
    """
    return f_ft_min / 88.0


def F_to_C(f_f: float) -> float:
    """Converts from Fahrenheit to Celsius"""
    return (5 / 9) * (f_f - 32)


def C_to_F(f_c: float) -> float:
    """Converts from Celsius to Fahrenheit"""
    return f_c * 9 / 5 + 32


class LengthUnits(Enum):
    FEET = "ft"
    INCHES = "in"
    MILLIMETERS = "mm"
    CENTIMETERS = "cm"
    METERS = "m"
    CHAINS = "ch"
    MILES = "mi"
    KILOMETERS = "km"


class SpeedUnits(Enum):
    FEET_PER_MINUTE = "ft/min"
    CHAINS_PER_HOUR = "ch/h"
    METERS_PER_SECOND = "m/s"
    METERS_PER_MINUTE = "m/min"
    MILES_PER_HOUR = "mph"
    KILOMETERS_PER_HOUR = "km/h"


class TimeUnits(Enum):
    MINUTES = "min"
    SECONDS = "s"
    HOURS = "h"
    DAYS = "days"


class TemperatureUnits(Enum):
    FAHRENHEIT = "F"
    CELSIUS = "C"
    KELVIN = "K"


class SlopeUnits(Enum):
    DEGREES = "deg"
    PERCENT = "percent"


class CoverUnits(Enum):
    FRACTION = "fraction"
    PERCENT = "percent"


class MoistureUnits(Enum):
    FRACTION = "fraction"
    PERCENT = "percent"


class CuringLevelUnits(Enum):
    FRACTION = "fraction"
    PERCENT = "percent"


class LoadingUnits(Enum):
    POUNDS_PER_SQUARE_FOOT = "lb/ft2"
    TONS_PER_ACRE = "t/ac"
    TONNES_PER_HECTARE = "tonne/ha"
    KILOGRAMS_PER_SQUARE_METER = "kg/m2"


class DensityUnits(Enum):
    POUNDS_PER_CUBIC_FOOT = "lb/ft3"
    KILOGRAMS_PER_CUBIC_METER = "kg/m3"


class HeatOfCombustionUnits(Enum):
    BTUS_PER_POUND = "Btu/lb"
    KILOJOULES_PER_KILOGRAM = "kJ/kg"


class HeatSourceAndReactionIntensityUnits(Enum):
    BTUS_PER_SQUARE_FOOT_PER_MINUTE = "Btu/ft2/min"
    BTUS_PER_SQUARE_FOOT_PER_SECOND = "Btu/ft2/s"
    KILOJOULES_PER_SQUARE_METER_PER_MINUTE = "kJ/m2/min"
    KILOWATTS_PER_SQUARE_METER = "kW/m2"


class FirelineIntensityUnits(Enum):
    BTUS_PER_FOOT_PER_SECOND = "Btu/ft/s"
    BTUS_PER_FOOT_PER_MINUTE = "Btu/ft/min"
    KILOJOULES_PER_METER_PER_SECOND = "kJ/m/s"
    KILOJOULES_PER_METER_PER_MINUTE = "kJ/m/min"
    KILOWATTS_PER_METER = "kW/m"


class HeatSinkUnits(Enum):
    BTUS_PER_CUBIC_FOOT = "Btu/ft3"
    KILOJOULES_PER_CUBIC_METER = "kJ/m3"


class HeatPerUnitAreaUnits(Enum):
    BTUS_PER_SQUARE_FOOT = "Btu/ft2"
    KILOJOULES_PER_SQUARE_METER = "kJ/m2"


class SurfaceAreaToVolumeUnits(Enum):
    SQUARE_FEET_OVER_CUBIC_FEET = "ft2/ft3"
    SQUARE_METERS_OVER_CUBIC_METERS = "m2/m3"
    SQUARE_INCHES_OVER_CUBIC_INCHES = "in2/in3"
    SQUARE_CENTIMETERS_OVER_CUBIC_CENTIMETERS = "cm2/cm3"


class BasalAreaUnits(Enum):
    SQUARE_FEET_PER_ACRE = "ft2/ac"
    SQUARE_METERS_PER_HECTARE = "m2/ha"


class AreaUnits(Enum):
    SQUARE_FEET = "ft2"
    ACRES = "ac"
    HECTARES = "ha"
    SQUARE_METERS = "m2"
    SQUARE_KILOMETERS = "km2"
    SQUARE_MILES = "mi2"


# Multiplier taking a value in the given unit to the base unit of its quantity
_TO_BASE_FACTORS = {
    LengthUnits: {
        LengthUnits.FEET: 1.0,
        LengthUnits.INCHES: 1.0 / 12.0,
        LengthUnits.MILLIMETERS: FEET_PER_METER / 1000.0,
        LengthUnits.CENTIMETERS: FEET_PER_METER / 100.0,
        LengthUnits.METERS: FEET_PER_METER,
        LengthUnits.CHAINS: 66.0,
        LengthUnits.MILES: 5280.0,
        LengthUnits.KILOMETERS: FEET_PER_METER * 1000.0,
    },
    SpeedUnits: {
        SpeedUnits.FEET_PER_MINUTE: 1.0,
        SpeedUnits.CHAINS_PER_HOUR: 66.0 / 60.0,
        SpeedUnits.METERS_PER_SECOND: FEET_PER_METER * 60.0,
        SpeedUnits.METERS_PER_MINUTE: FEET_PER_METER,
        SpeedUnits.MILES_PER_HOUR: 88.0,
        SpeedUnits.KILOMETERS_PER_HOUR: FEET_PER_METER * 1000.0 / 60.0,
    },
    TimeUnits: {
        TimeUnits.MINUTES: 1.0,
        TimeUnits.SECONDS: 1.0 / 60.0,
        TimeUnits.HOURS: 60.0,
        TimeUnits.DAYS: 1440.0,
    },
    CoverUnits: {
        CoverUnits.FRACTION: 1.0,
        CoverUnits.PERCENT: 0.01,
    },
    MoistureUnits: {
        MoistureUnits.FRACTION: 1.0,
        MoistureUnits.PERCENT: 0.01,
    },
    CuringLevelUnits: {
        CuringLevelUnits.FRACTION: 1.0,
        CuringLevelUnits.PERCENT: 0.01,
    },
    LoadingUnits: {
        LoadingUnits.POUNDS_PER_SQUARE_FOOT: 1.0,
        LoadingUnits.TONS_PER_ACRE: 2000.0 / SQ_FT_PER_ACRE,
        LoadingUnits.TONNES_PER_HECTARE: (1000.0 / LB_TO_KG) / (10000.0 * FEET_PER_METER ** 2),
        LoadingUnits.KILOGRAMS_PER_SQUARE_METER: (1.0 / LB_TO_KG) / FEET_PER_METER ** 2,
    },
    DensityUnits: {
        DensityUnits.POUNDS_PER_CUBIC_FOOT: 1.0,
        DensityUnits.KILOGRAMS_PER_CUBIC_METER: (1.0 / LB_TO_KG) / FEET_PER_METER ** 3,
    },
    HeatOfCombustionUnits: {
        HeatOfCombustionUnits.BTUS_PER_POUND: 1.0,
        HeatOfCombustionUnits.KILOJOULES_PER_KILOGRAM: LB_TO_KG / BTU_TO_KJ,
    },
    HeatSourceAndReactionIntensityUnits: {
        HeatSourceAndReactionIntensityUnits.BTUS_PER_SQUARE_FOOT_PER_MINUTE: 1.0,
        HeatSourceAndReactionIntensityUnits.BTUS_PER_SQUARE_FOOT_PER_SECOND: 60.0,
        HeatSourceAndReactionIntensityUnits.KILOJOULES_PER_SQUARE_METER_PER_MINUTE:
            1.0 / (BTU_TO_KJ * FEET_PER_METER ** 2),
        HeatSourceAndReactionIntensityUnits.KILOWATTS_PER_SQUARE_METER:
            60.0 / (BTU_TO_KJ * FEET_PER_METER ** 2),
    },
    FirelineIntensityUnits: {
        FirelineIntensityUnits.BTUS_PER_FOOT_PER_SECOND: 1.0,
        FirelineIntensityUnits.BTUS_PER_FOOT_PER_MINUTE: 1.0 / 60.0,
        FirelineIntensityUnits.KILOJOULES_PER_METER_PER_SECOND: 1.0 / (BTU_TO_KJ * FEET_PER_METER),
        FirelineIntensityUnits.KILOJOULES_PER_METER_PER_MINUTE: 1.0 / (60.0 * BTU_TO_KJ * FEET_PER_METER),
        FirelineIntensityUnits.KILOWATTS_PER_METER: 1.0 / (BTU_TO_KJ * FEET_PER_METER),
    },
    HeatSinkUnits: {
        HeatSinkUnits.BTUS_PER_CUBIC_FOOT: 1.0,
        HeatSinkUnits.KILOJOULES_PER_CUBIC_METER: 1.0 / (BTU_TO_KJ * FEET_PER_METER ** 3),
    },
    HeatPerUnitAreaUnits: {
        HeatPerUnitAreaUnits.BTUS_PER_SQUARE_FOOT: 1.0,
        HeatPerUnitAreaUnits.KILOJOULES_PER_SQUARE_METER: 1.0 / (BTU_TO_KJ * FEET_PER_METER ** 2),
    },
    SurfaceAreaToVolumeUnits: {
        SurfaceAreaToVolumeUnits.SQUARE_FEET_OVER_CUBIC_FEET: 1.0,
        SurfaceAreaToVolumeUnits.SQUARE_METERS_OVER_CUBIC_METERS: 1.0 / FEET_PER_METER,
        SurfaceAreaToVolumeUnits.SQUARE_INCHES_OVER_CUBIC_INCHES: 12.0,
        SurfaceAreaToVolumeUnits.SQUARE_CENTIMETERS_OVER_CUBIC_CENTIMETERS: 100.0 / FEET_PER_METER,
    },
    BasalAreaUnits: {
        BasalAreaUnits.SQUARE_FEET_PER_ACRE: 1.0,
        BasalAreaUnits.SQUARE_METERS_PER_HECTARE: SQ_FT_PER_ACRE / 10000.0,
    },
    AreaUnits: {
        AreaUnits.SQUARE_FEET: 1.0,
        AreaUnits.ACRES: SQ_FT_PER_ACRE,
        AreaUnits.HECTARES: 10000.0 * FEET_PER_METER ** 2,
        AreaUnits.SQUARE_METERS: FEET_PER_METER ** 2,
        AreaUnits.SQUARE_KILOMETERS: 1.0e6 * FEET_PER_METER ** 2,
        AreaUnits.SQUARE_MILES: 5280.0 ** 2,
    },
}


def _factor(units: Enum) -> float:
    try:
        return _TO_BASE_FACTORS[type(units)][units]
    except KeyError:
        raise TypeError(f"{units!r} is not a supported unit") from None


def to_base(value: float, units: Enum) -> float:
    """Converts a value expressed in ``units`` to the base unit of its quantity.

    Args:
        value (float): value in ``units``
        units (Enum): member of one of the unit enums in this module

    Returns:
        float: value in the quantity's base unit
    """
    if isinstance(units, TemperatureUnits):
        if units == TemperatureUnits.CELSIUS:
            return C_to_F(value)
        if units == TemperatureUnits.KELVIN:
            return C_to_F(value - 273.15)
        return value

    if isinstance(units, SlopeUnits):
        if units == SlopeUnits.PERCENT:
            return float(np.rad2deg(np.arctan(value / 100.0)))
        return value

    return value * _factor(units)


def from_base(value: float, units: Enum) -> float:
    """Converts a value in the base unit of its quantity to ``units``.

    Args:
        value (float): value in the quantity's base unit
        units (Enum): member of one of the unit enums in this module

    Returns:
        float: value in ``units``
    """
    if isinstance(units, TemperatureUnits):
        if units == TemperatureUnits.CELSIUS:
            return F_to_C(value)
        if units == TemperatureUnits.KELVIN:
            return F_to_C(value) + 273.15
        return value

    if isinstance(units, SlopeUnits):
        if units == SlopeUnits.PERCENT:
            return float(np.tan(np.deg2rad(value)) * 100.0)
        return value

    return value / _factor(units)


def parse_units(units_cls, name: str) -> Enum:
    """Looks up a unit by its symbol (``"mph"``) or member name (``"MILES_PER_HOUR"``)."""
    key = name.strip()
    for member in units_cls:
        if key == member.value or key.upper() == member.name:
            return member
    raise ValueError(f"'{name}' is not a valid {units_cls.__name__} member")
