"""Fuel moisture inputs and their resolution into size class moistures.

Moistures can be supplied per size class, as dead and live aggregates, as a
mix of the two, or by naming a predefined moisture scenario. Whatever the
input mode, the spread kernel sees one moisture per size class; this module
performs that mapping.

Classes:
    - MoistureInputMode: The supported ways of supplying moistures.
    - MoistureClass: Size classes and aggregates a moisture may be set for.
    - MoistureVector: Resolved moistures, ``None`` where a slot does not apply.
    - MoistureScenarios: Catalog of named moisture scenarios.
    - MoistureInputs: Raw moisture inputs plus the current mode and scenario.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import json
import logging
import os

import numpy as np

from firebehave.exceptions import MoistureScenarioError
from firebehave.utilities.unit_conversions import MoistureUnits, from_base, to_base

logger = logging.getLogger(__name__)


class MoistureInputMode(Enum):
    BY_SIZE_CLASS = "by_size_class"
    ALL_AGGREGATE = "all_aggregate"
    DEAD_AGGREGATE_AND_LIVE_SIZE_CLASS = "dead_aggregate_and_live_size_class"
    LIVE_AGGREGATE_AND_DEAD_SIZE_CLASS = "live_aggregate_and_dead_size_class"
    MOISTURE_SCENARIO = "moisture_scenario"


class MoistureClass(Enum):
    ONE_HOUR = "one_hour"
    TEN_HOUR = "ten_hour"
    HUNDRED_HOUR = "hundred_hour"
    LIVE_HERBACEOUS = "live_herbaceous"
    LIVE_WOODY = "live_woody"
    DEAD_AGGREGATE = "dead_aggregate"
    LIVE_AGGREGATE = "live_aggregate"


@dataclass(frozen=True)
class MoistureVector:
    """Moistures (fraction) for every size class and aggregate.

    The five size class slots are always populated once resolved. The two
    aggregate slots are ``None`` in modes that do not read them.
    """
    one_hour: Optional[float] = None
    ten_hour: Optional[float] = None
    hundred_hour: Optional[float] = None
    live_herbaceous: Optional[float] = None
    live_woody: Optional[float] = None
    dead_aggregate: Optional[float] = None
    live_aggregate: Optional[float] = None

    def get(self, moisture_class: MoistureClass) -> Optional[float]:
        return getattr(self, moisture_class.value)

    def size_class_array(self) -> np.ndarray:
        """Returns [1-h, 10-h, 100-h, live herbaceous, live woody]; unset slots read as 0."""
        values = [self.one_hour, self.ten_hour, self.hundred_hour,
                  self.live_herbaceous, self.live_woody]
        return np.array([0.0 if v is None else v for v in values])


@dataclass(frozen=True)
class MoistureScenario:
    name: str
    description: str
    one_hour: float
    ten_hour: float
    hundred_hour: float
    live_herbaceous: float
    live_woody: float


class MoistureScenarios:
    """Ordered catalog of named moisture scenarios.

    The default scenarios (D1L1 to D4L4) are read once from
    ``MoistureScenarios.json`` into a class-level cache. Scenario moistures
    are stored as fractions.
    """
    _default_scenarios = None # class-level cache

    @classmethod
    def load_default_scenarios(cls):
        if cls._default_scenarios is None:
            json_path = os.path.join(os.path.dirname(__file__), "MoistureScenarios.json")
            with open(json_path, "r") as f:
                table = json.load(f)

            scenarios = []
            for entry in table["scenarios"]:
                scenarios.append(MoistureScenario(
                    name=entry["name"],
                    description=entry["description"],
                    one_hour=entry["one_hour"] / 100.0,
                    ten_hour=entry["ten_hour"] / 100.0,
                    hundred_hour=entry["hundred_hour"] / 100.0,
                    live_herbaceous=entry["live_herbaceous"] / 100.0,
                    live_woody=entry["live_woody"] / 100.0,
                ))
            cls._default_scenarios = tuple(scenarios)

    def __init__(self):
        self.load_default_scenarios()
        self._scenarios = list(self._default_scenarios)

    @property
    def number_of_scenarios(self) -> int:
        return len(self._scenarios)

    def add_scenario(self, name: str, description: str, one_hour: float, ten_hour: float,
                     hundred_hour: float, live_herbaceous: float, live_woody: float,
                     units: MoistureUnits = MoistureUnits.FRACTION) -> int:
        """Appends a scenario, or replaces an existing one of the same name.

        Returns:
            int: index of the scenario
        """
        scenario = MoistureScenario(
            name=name,
            description=description,
            one_hour=to_base(one_hour, units),
            ten_hour=to_base(ten_hour, units),
            hundred_hour=to_base(hundred_hour, units),
            live_herbaceous=to_base(live_herbaceous, units),
            live_woody=to_base(live_woody, units),
        )

        if self.is_defined_by_name(name):
            index = self.index_by_name(name)
            self._scenarios[index] = scenario
        else:
            self._scenarios.append(scenario)
            index = len(self._scenarios) - 1

        return index

    def is_defined_by_index(self, index: int) -> bool:
        return 0 <= index < len(self._scenarios)

    def is_defined_by_name(self, name: str) -> bool:
        return any(s.name == name for s in self._scenarios)

    def index_by_name(self, name: str) -> int:
        for i, scenario in enumerate(self._scenarios):
            if scenario.name == name:
                return i
        raise MoistureScenarioError("Moisture scenario is not defined", scenario=name)

    def name_by_index(self, index: int) -> str:
        return self.get_by_index(index).name

    def description_by_index(self, index: int) -> str:
        return self.get_by_index(index).description

    def get_by_index(self, index: int) -> MoistureScenario:
        if not self.is_defined_by_index(index):
            raise MoistureScenarioError("Moisture scenario is not defined", scenario=index)
        return self._scenarios[index]

    def get_by_name(self, name: str) -> MoistureScenario:
        return self._scenarios[self.index_by_name(name)]

    def get_moisture(self, index: int, moisture_class: MoistureClass,
                     units: MoistureUnits = MoistureUnits.FRACTION) -> float:
        """Moisture of one size class in the scenario at ``index``.

        Raises:
            MoistureScenarioError: for an undefined index or an aggregate class
        """
        if moisture_class in (MoistureClass.DEAD_AGGREGATE, MoistureClass.LIVE_AGGREGATE):
            raise MoistureScenarioError(f"Scenarios do not define {moisture_class.value} moisture",
                                        scenario=index)
        return from_base(getattr(self.get_by_index(index), moisture_class.value), units)


def resolve_moisture(mode: MoistureInputMode, raw: dict,
                     scenarios: Optional[MoistureScenarios] = None,
                     scenario_index: int = -1) -> MoistureVector:
    """Maps raw moisture inputs onto size class moistures for one input mode.

    Args:
        mode (MoistureInputMode): active input mode
        raw (dict): raw inputs keyed by ``MoistureClass``, fractions
        scenarios (MoistureScenarios, optional): catalog used in scenario mode
        scenario_index (int): selected scenario, -1 when none

    Returns:
        MoistureVector: resolved moistures

    Raises:
        MoistureScenarioError: in scenario mode when no defined scenario is selected
    """
    one_hour = raw.get(MoistureClass.ONE_HOUR, 0.0)
    ten_hour = raw.get(MoistureClass.TEN_HOUR, 0.0)
    hundred_hour = raw.get(MoistureClass.HUNDRED_HOUR, 0.0)
    live_herb = raw.get(MoistureClass.LIVE_HERBACEOUS, 0.0)
    live_woody = raw.get(MoistureClass.LIVE_WOODY, 0.0)
    dead_agg = raw.get(MoistureClass.DEAD_AGGREGATE, 0.0)
    live_agg = raw.get(MoistureClass.LIVE_AGGREGATE, 0.0)

    if mode == MoistureInputMode.BY_SIZE_CLASS:
        return MoistureVector(one_hour, ten_hour, hundred_hour, live_herb, live_woody)

    if mode == MoistureInputMode.ALL_AGGREGATE:
        return MoistureVector(dead_agg, dead_agg, dead_agg, live_agg, live_agg,
                              dead_aggregate=dead_agg, live_aggregate=live_agg)

    if mode == MoistureInputMode.DEAD_AGGREGATE_AND_LIVE_SIZE_CLASS:
        return MoistureVector(dead_agg, dead_agg, dead_agg, live_herb, live_woody,
                              dead_aggregate=dead_agg)

    if mode == MoistureInputMode.LIVE_AGGREGATE_AND_DEAD_SIZE_CLASS:
        return MoistureVector(one_hour, ten_hour, hundred_hour, live_agg, live_agg,
                              live_aggregate=live_agg)

    if mode == MoistureInputMode.MOISTURE_SCENARIO:
        if scenarios is None:
            raise MoistureScenarioError("No moisture scenario catalog available", scenario=scenario_index)
        scenario = scenarios.get_by_index(scenario_index)
        return MoistureVector(scenario.one_hour, scenario.ten_hour, scenario.hundred_hour,
                              scenario.live_herbaceous, scenario.live_woody)

    raise ValueError(f"Unknown moisture input mode: {mode!r}")


class MoistureInputs:
    """Raw moisture inputs, the active input mode and the scenario selection.

    Raw values are kept for every class regardless of mode, so switching
    modes back and forth never loses an input. ``moisture_vector`` is
    resolved from the current state on each read.
    """

    def __init__(self, scenarios: Optional[MoistureScenarios] = None):
        self.mode = MoistureInputMode.BY_SIZE_CLASS
        self.scenarios = scenarios if scenarios is not None else MoistureScenarios()
        self.scenario_index = -1
        self.scenario_name = ""
        self._raw = {moisture_class: 0.0 for moisture_class in MoistureClass}

    def set_moisture_input_mode(self, mode: MoistureInputMode):
        self.mode = mode

    def set_moisture(self, moisture_class: MoistureClass, value: float,
                     units: MoistureUnits = MoistureUnits.FRACTION):
        self._raw[moisture_class] = to_base(value, units)

    def get_raw_moisture(self, moisture_class: MoistureClass,
                         units: MoistureUnits = MoistureUnits.FRACTION) -> float:
        return from_base(self._raw[moisture_class], units)

    def set_moisture_one_hour(self, value: float, units: MoistureUnits = MoistureUnits.FRACTION):
        self.set_moisture(MoistureClass.ONE_HOUR, value, units)

    def set_moisture_ten_hour(self, value: float, units: MoistureUnits = MoistureUnits.FRACTION):
        self.set_moisture(MoistureClass.TEN_HOUR, value, units)

    def set_moisture_hundred_hour(self, value: float, units: MoistureUnits = MoistureUnits.FRACTION):
        self.set_moisture(MoistureClass.HUNDRED_HOUR, value, units)

    def set_moisture_live_herbaceous(self, value: float, units: MoistureUnits = MoistureUnits.FRACTION):
        self.set_moisture(MoistureClass.LIVE_HERBACEOUS, value, units)

    def set_moisture_live_woody(self, value: float, units: MoistureUnits = MoistureUnits.FRACTION):
        self.set_moisture(MoistureClass.LIVE_WOODY, value, units)

    def set_moisture_dead_aggregate(self, value: float, units: MoistureUnits = MoistureUnits.FRACTION):
        self.set_moisture(MoistureClass.DEAD_AGGREGATE, value, units)

    def set_moisture_live_aggregate(self, value: float, units: MoistureUnits = MoistureUnits.FRACTION):
        self.set_moisture(MoistureClass.LIVE_AGGREGATE, value, units)

    def set_moisture_scenario_by_index(self, index: int) -> bool:
        """Selects a scenario by index; on failure the selection is cleared."""
        if not self.scenarios.is_defined_by_index(index):
            logger.debug("Moisture scenario index %d is not defined", index)
            self.scenario_index = -1
            self.scenario_name = ""
            return False

        self.scenario_index = index
        self.scenario_name = self.scenarios.name_by_index(index)
        return True

    def set_moisture_scenario_by_name(self, name: str) -> bool:
        """Selects a scenario by name; on failure the selection is cleared."""
        if not self.scenarios.is_defined_by_name(name):
            logger.debug("Moisture scenario %r is not defined", name)
            self.scenario_index = -1
            self.scenario_name = ""
            return False

        self.scenario_index = self.scenarios.index_by_name(name)
        self.scenario_name = name
        return True

    @property
    def moisture_vector(self) -> MoistureVector:
        return resolve_moisture(self.mode, self._raw, self.scenarios, self.scenario_index)

    def get_moisture(self, moisture_class: MoistureClass,
                     units: MoistureUnits = MoistureUnits.FRACTION) -> Optional[float]:
        """Resolved moisture of a class, ``None`` where the class does not apply."""
        value = self.moisture_vector.get(moisture_class)
        if value is None:
            return None
        return from_base(value, units)

    def is_moisture_class_input_needed(self, moisture_class: MoistureClass) -> bool:
        """Reports whether the active mode reads a raw input for ``moisture_class``."""
        dead_classes = (MoistureClass.ONE_HOUR, MoistureClass.TEN_HOUR, MoistureClass.HUNDRED_HOUR)
        live_classes = (MoistureClass.LIVE_HERBACEOUS, MoistureClass.LIVE_WOODY)

        if moisture_class in dead_classes:
            return self.mode in (MoistureInputMode.BY_SIZE_CLASS,
                                 MoistureInputMode.LIVE_AGGREGATE_AND_DEAD_SIZE_CLASS)
        if moisture_class == MoistureClass.DEAD_AGGREGATE:
            return self.mode in (MoistureInputMode.ALL_AGGREGATE,
                                 MoistureInputMode.DEAD_AGGREGATE_AND_LIVE_SIZE_CLASS)
        if moisture_class in live_classes:
            return self.mode in (MoistureInputMode.BY_SIZE_CLASS,
                                 MoistureInputMode.DEAD_AGGREGATE_AND_LIVE_SIZE_CLASS)
        if moisture_class == MoistureClass.LIVE_AGGREGATE:
            return self.mode in (MoistureInputMode.ALL_AGGREGATE,
                                 MoistureInputMode.LIVE_AGGREGATE_AND_DEAD_SIZE_CLASS)
        return False
