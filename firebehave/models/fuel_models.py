"""Fuel model catalog and fuel bed particle preparation.

This module holds the standard fire behavior fuel models (the Anderson 13
models, all 40 Scott and Burgan models, and the non-burnable
models) together with any custom models a caller defines. It also turns a
fuel bed and a set of moistures into the per size class particle arrays the
Rothermel spread kernel works on.

Classes:
    - FuelBed: Immutable parameters of one fuel model, in base units.
    - FuelModels: Catalog of fuel models, queried by model number.
    - StandardFuel, PalmettoGallberry, WesternAspen, Chaparral: Special fuel
      variants. The non-standard variants carry a fuel bed synthesized by an
      external fuel model and take the place of the catalog entry.
    - FuelParticles: Dead and live particle arrays for one spread run.

References:
    - Anderson, H. E. (1982). Aids to Determining Fuel Models for Estimating Fire Behavior.
      USDA Forest Service General Technical Report INT-122.
    - Scott, J. H., & Burgan, R. E. (2005). Standard Fire Behavior Fuel Models: A
      Comprehensive Set for Use with Rothermel's Surface Fire Spread Model.
      USDA Forest Service General Technical Report RMRS-GTR-153.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Union
import json
import logging
import os

import numpy as np

from firebehave.exceptions import FuelModelError
from firebehave.utilities.unit_conversions import (
    HeatOfCombustionUnits,
    LengthUnits,
    LoadingUnits,
    MoistureUnits,
    SurfaceAreaToVolumeUnits,
    from_base,
    to_base,
)

logger = logging.getLogger(__name__)

# Fixed surface-area-to-volume ratios of the 10-h and 100-h classes (1/ft)
TEN_HOUR_SAVR = 109.0
HUNDRED_HOUR_SAVR = 30.0

MAX_FUEL_MODEL_NUMBER = 256

# Number ranges set aside for the standard and non-burnable models
RESERVED_RANGES = ((1, 13), (90, 99), (101, 204))


class FuelClass(Enum):
    ONE_HOUR = "one_hour"
    TEN_HOUR = "ten_hour"
    HUNDRED_HOUR = "hundred_hour"
    LIVE_HERBACEOUS = "live_herbaceous"
    LIVE_WOODY = "live_woody"


class FuelLifeState(Enum):
    DEAD = "dead"
    LIVE = "live"


@dataclass(frozen=True)
class FuelBed:
    """Parameters of a single fuel model.

    All values are stored in base units: loads in lb/ft^2, surface area to
    volume ratios in 1/ft, depth in ft, moisture of extinction as a fraction
    and heat of combustion in Btu/lb.
    """
    number: int
    code: str
    name: str
    depth: float
    moisture_of_extinction_dead: float
    heat_of_combustion_dead: float
    heat_of_combustion_live: float
    load_one_hour: float
    load_ten_hour: float
    load_hundred_hour: float
    load_live_herbaceous: float
    load_live_woody: float
    savr_one_hour: float
    savr_live_herbaceous: float
    savr_live_woody: float
    is_dynamic: bool = False

    @property
    def total_load(self) -> float:
        return (self.load_one_hour + self.load_ten_hour + self.load_hundred_hour
                + self.load_live_herbaceous + self.load_live_woody)

    @property
    def is_all_loads_zero(self) -> bool:
        return self.total_load < 1.0e-7

    def get_load(self, fuel_class: FuelClass) -> float:
        return getattr(self, f"load_{fuel_class.value}")

    def get_savr(self, fuel_class: FuelClass) -> float:
        if fuel_class == FuelClass.TEN_HOUR:
            return TEN_HOUR_SAVR
        if fuel_class == FuelClass.HUNDRED_HOUR:
            return HUNDRED_HOUR_SAVR
        return getattr(self, f"savr_{fuel_class.value}")


@dataclass(frozen=True)
class StandardFuel:
    """The catalog fuel model is used as is."""

    @property
    def fuel_bed(self):
        return None


@dataclass(frozen=True)
class PalmettoGallberry:
    """Fuel bed synthesized by the palmetto-gallberry fuel model."""
    fuel_bed: FuelBed


@dataclass(frozen=True)
class WesternAspen:
    """Fuel bed synthesized by the western aspen fuel model."""
    fuel_bed: FuelBed


@dataclass(frozen=True)
class Chaparral:
    """Fuel bed synthesized by the chaparral fuel model."""
    fuel_bed: FuelBed


SpecialFuel = Union[StandardFuel, PalmettoGallberry, WesternAspen, Chaparral]


@dataclass
class FuelParticles:
    """Per size class particle data for one spread computation.

    Dead classes are ordered [1-h, 10-h, 100-h, dead herbaceous] and live
    classes [live herbaceous, live woody]. Loads are oven-dry loads in
    lb/ft^2, moistures are fractions.
    """
    dead_load: np.ndarray
    dead_savr: np.ndarray
    dead_moisture: np.ndarray
    live_load: np.ndarray
    live_savr: np.ndarray
    live_moisture: np.ndarray
    depth: float
    moisture_of_extinction_dead: float
    heat_of_combustion_dead: float
    heat_of_combustion_live: float
    cured_fraction: float = field(default=0.0)


def calc_curing_level(live_herbaceous_moisture: float) -> float:
    """Fraction of the herbaceous load transferred to the dead class.

    Args:
        live_herbaceous_moisture (float): live herbaceous moisture (fraction)

    Returns:
        float: cured fraction between 0 and 1
    """
    cured = 1.333 - 1.11 * live_herbaceous_moisture
    return float(np.clip(cured, 0.0, 1.0))


def build_particles(fuel_bed: FuelBed, moisture_vector) -> FuelParticles:
    """Combines a fuel bed with resolved moistures into particle arrays.

    For dynamic fuel models the cured portion of the herbaceous load moves to
    a dead herbaceous class that keeps the herbaceous SAVR and takes the 1-h
    moisture.

    Args:
        fuel_bed (FuelBed): fuel model parameters
        moisture_vector (MoistureVector): resolved size class moistures

    Returns:
        FuelParticles: particle arrays ready for the spread kernel
    """
    m_1h, m_10h, m_100h, m_herb, m_woody = moisture_vector.size_class_array()

    herb_load = fuel_bed.load_live_herbaceous
    cured = 0.0
    if fuel_bed.is_dynamic and herb_load > 0:
        cured = calc_curing_level(m_herb)

    dead_herb_load = herb_load * cured
    live_herb_load = herb_load - dead_herb_load

    dead_load = np.array([fuel_bed.load_one_hour, fuel_bed.load_ten_hour,
                          fuel_bed.load_hundred_hour, dead_herb_load])
    dead_savr = np.array([fuel_bed.savr_one_hour, TEN_HOUR_SAVR,
                          HUNDRED_HOUR_SAVR, fuel_bed.savr_live_herbaceous])
    dead_moisture = np.array([m_1h, m_10h, m_100h, m_1h])

    live_load = np.array([live_herb_load, fuel_bed.load_live_woody])
    live_savr = np.array([fuel_bed.savr_live_herbaceous, fuel_bed.savr_live_woody])
    live_moisture = np.array([m_herb, m_woody])

    return FuelParticles(
        dead_load=dead_load,
        dead_savr=dead_savr,
        dead_moisture=dead_moisture,
        live_load=live_load,
        live_savr=live_savr,
        live_moisture=live_moisture,
        depth=fuel_bed.depth,
        moisture_of_extinction_dead=fuel_bed.moisture_of_extinction_dead,
        heat_of_combustion_dead=fuel_bed.heat_of_combustion_dead,
        heat_of_combustion_live=fuel_bed.heat_of_combustion_live,
        cured_fraction=cured,
    )


class FuelModels:
    """Catalog of fuel models keyed by model number.

    The standard models are read once from ``FuelModels.json`` into a
    class-level cache; every instance starts from that table and may add
    custom models on top of it.
    """
    _standard_models = None # class-level cache

    @classmethod
    def load_standard_models(cls):
        if cls._standard_models is None:
            json_path = os.path.join(os.path.dirname(__file__), "FuelModels.json")
            with open(json_path, "r") as f:
                table = json.load(f)

            models = {}
            for model_id, entry in table["models"].items():
                number = int(model_id)
                loads = [to_base(w, LoadingUnits.TONS_PER_ACRE) for w in entry["load"]]
                savr_1h, savr_herb, savr_woody = entry["savr"]
                heat_dead, heat_live = entry["heat"]
                models[number] = FuelBed(
                    number=number,
                    code=entry["code"],
                    name=entry["name"],
                    depth=float(entry["depth"]),
                    moisture_of_extinction_dead=entry["mx_dead"] / 100.0,
                    heat_of_combustion_dead=float(heat_dead),
                    heat_of_combustion_live=float(heat_live),
                    load_one_hour=loads[0],
                    load_ten_hour=loads[1],
                    load_hundred_hour=loads[2],
                    load_live_herbaceous=loads[3],
                    load_live_woody=loads[4],
                    savr_one_hour=float(savr_1h),
                    savr_live_herbaceous=float(savr_herb),
                    savr_live_woody=float(savr_woody),
                    is_dynamic=bool(entry["dynamic"]),
                )

            cls._standard_models = models
            logger.debug("Loaded %d standard fuel models from %s", len(models), json_path)

    def __init__(self):
        self.load_standard_models()
        self._fuel_beds = dict(self._standard_models)

    def is_defined(self, number: int) -> bool:
        return number in self._fuel_beds

    def is_reserved(self, number: int) -> bool:
        if number in self._standard_models:
            return True
        return any(low <= number <= high for low, high in RESERVED_RANGES)

    def get_fuel_bed(self, number: int) -> FuelBed:
        """Returns the fuel bed of a defined model.

        Raises:
            FuelModelError: if ``number`` is not a defined fuel model
        """
        try:
            return self._fuel_beds[number]
        except KeyError:
            raise FuelModelError("Fuel model is not defined", fuel_model_id=number) from None

    def is_all_loads_zero(self, number: int) -> bool:
        return self.get_fuel_bed(number).is_all_loads_zero

    def is_dynamic(self, number: int) -> bool:
        return self.get_fuel_bed(number).is_dynamic

    def get_code(self, number: int) -> str:
        return self.get_fuel_bed(number).code

    def get_name(self, number: int) -> str:
        return self.get_fuel_bed(number).name

    def get_fuel_bed_depth(self, number: int, units: LengthUnits = LengthUnits.FEET) -> float:
        return from_base(self.get_fuel_bed(number).depth, units)

    def get_moisture_of_extinction_dead(self, number: int,
                                        units: MoistureUnits = MoistureUnits.FRACTION) -> float:
        return from_base(self.get_fuel_bed(number).moisture_of_extinction_dead, units)

    def get_heat_of_combustion_dead(self, number: int,
                                    units: HeatOfCombustionUnits = HeatOfCombustionUnits.BTUS_PER_POUND) -> float:
        return from_base(self.get_fuel_bed(number).heat_of_combustion_dead, units)

    def get_heat_of_combustion_live(self, number: int,
                                    units: HeatOfCombustionUnits = HeatOfCombustionUnits.BTUS_PER_POUND) -> float:
        return from_base(self.get_fuel_bed(number).heat_of_combustion_live, units)

    def get_fuel_load(self, number: int, fuel_class: FuelClass,
                      units: LoadingUnits = LoadingUnits.POUNDS_PER_SQUARE_FOOT) -> float:
        return from_base(self.get_fuel_bed(number).get_load(fuel_class), units)

    def get_savr(self, number: int, fuel_class: FuelClass,
                 units: SurfaceAreaToVolumeUnits = SurfaceAreaToVolumeUnits.SQUARE_FEET_OVER_CUBIC_FEET) -> float:
        return from_base(self.get_fuel_bed(number).get_savr(fuel_class), units)

    def define_custom_fuel_model(self, number: int, code: str, name: str,
                                 depth: float, moisture_of_extinction_dead: float,
                                 heat_of_combustion_dead: float, heat_of_combustion_live: float,
                                 load_one_hour: float, load_ten_hour: float, load_hundred_hour: float,
                                 load_live_herbaceous: float, load_live_woody: float,
                                 savr_one_hour: float, savr_live_herbaceous: float, savr_live_woody: float,
                                 is_dynamic: bool = False,
                                 length_units: LengthUnits = LengthUnits.FEET,
                                 moisture_units: MoistureUnits = MoistureUnits.FRACTION,
                                 heat_units: HeatOfCombustionUnits = HeatOfCombustionUnits.BTUS_PER_POUND,
                                 loading_units: LoadingUnits = LoadingUnits.POUNDS_PER_SQUARE_FOOT,
                                 savr_units: SurfaceAreaToVolumeUnits = SurfaceAreaToVolumeUnits.SQUARE_FEET_OVER_CUBIC_FEET
                                 ) -> FuelBed:
        """Adds a custom fuel model to this catalog.

        Custom models may use any number from 1 to 256 that is not reserved
        for a standard model. Redefining an earlier custom model replaces it.

        Raises:
            FuelModelError: if the number is reserved or out of range, or the dead
                moisture of extinction is not positive
        """
        if not 1 <= number <= MAX_FUEL_MODEL_NUMBER:
            raise FuelModelError("Fuel model number out of range", fuel_model_id=number)
        if self.is_reserved(number):
            raise FuelModelError("Fuel model number is reserved for a standard model",
                                 fuel_model_id=number)
        if moisture_of_extinction_dead <= 0.0:
            raise FuelModelError("Dead fuel moisture of extinction must be positive", fuel_model_id=number)

        fuel_bed = FuelBed(
            number=number,
            code=code,
            name=name,
            depth=to_base(depth, length_units),
            moisture_of_extinction_dead=to_base(moisture_of_extinction_dead, moisture_units),
            heat_of_combustion_dead=to_base(heat_of_combustion_dead, heat_units),
            heat_of_combustion_live=to_base(heat_of_combustion_live, heat_units),
            load_one_hour=to_base(load_one_hour, loading_units),
            load_ten_hour=to_base(load_ten_hour, loading_units),
            load_hundred_hour=to_base(load_hundred_hour, loading_units),
            load_live_herbaceous=to_base(load_live_herbaceous, loading_units),
            load_live_woody=to_base(load_live_woody, loading_units),
            savr_one_hour=to_base(savr_one_hour, savr_units),
            savr_live_herbaceous=to_base(savr_live_herbaceous, savr_units),
            savr_live_woody=to_base(savr_live_woody, savr_units),
            is_dynamic=is_dynamic,
        )
        self._fuel_beds[number] = fuel_bed
        logger.debug("Defined custom fuel model %d (%s)", number, code)

        return fuel_bed
