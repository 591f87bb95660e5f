"""Tests for moisture input modes, scenarios and resolution."""

import pytest

from firebehave.exceptions import MoistureScenarioError
from firebehave.models.moisture import (
    MoistureClass,
    MoistureInputMode,
    MoistureInputs,
    MoistureScenarios,
    resolve_moisture,
)
from firebehave.utilities.unit_conversions import MoistureUnits


@pytest.fixture
def raw():
    return {
        MoistureClass.ONE_HOUR: 0.06,
        MoistureClass.TEN_HOUR: 0.07,
        MoistureClass.HUNDRED_HOUR: 0.08,
        MoistureClass.LIVE_HERBACEOUS: 0.60,
        MoistureClass.LIVE_WOODY: 0.90,
        MoistureClass.DEAD_AGGREGATE: 0.10,
        MoistureClass.LIVE_AGGREGATE: 1.20,
    }


class TestResolveMoisture:
    """Tests for mapping raw inputs onto size classes."""

    def test_by_size_class(self, raw):
        vector = resolve_moisture(MoistureInputMode.BY_SIZE_CLASS, raw)
        assert vector.size_class_array() == pytest.approx([0.06, 0.07, 0.08, 0.60, 0.90])
        assert vector.dead_aggregate is None
        assert vector.live_aggregate is None

    def test_all_aggregate(self, raw):
        vector = resolve_moisture(MoistureInputMode.ALL_AGGREGATE, raw)
        assert vector.size_class_array() == pytest.approx([0.10, 0.10, 0.10, 1.20, 1.20])
        assert vector.dead_aggregate == 0.10
        assert vector.live_aggregate == 1.20

    def test_dead_aggregate_live_size_class(self, raw):
        vector = resolve_moisture(MoistureInputMode.DEAD_AGGREGATE_AND_LIVE_SIZE_CLASS, raw)
        assert vector.size_class_array() == pytest.approx([0.10, 0.10, 0.10, 0.60, 0.90])
        assert vector.live_aggregate is None

    def test_live_aggregate_dead_size_class(self, raw):
        vector = resolve_moisture(MoistureInputMode.LIVE_AGGREGATE_AND_DEAD_SIZE_CLASS, raw)
        assert vector.size_class_array() == pytest.approx([0.06, 0.07, 0.08, 1.20, 1.20])
        assert vector.dead_aggregate is None

    def test_scenario(self, raw):
        scenarios = MoistureScenarios()
        index = scenarios.index_by_name("D2L2")
        vector = resolve_moisture(MoistureInputMode.MOISTURE_SCENARIO, raw, scenarios, index)
        assert vector.size_class_array() == pytest.approx([0.06, 0.07, 0.08, 0.60, 0.90])

    def test_scenario_without_selection(self, raw):
        with pytest.raises(MoistureScenarioError):
            resolve_moisture(MoistureInputMode.MOISTURE_SCENARIO, raw, MoistureScenarios(), -1)


class TestMoistureScenarios:
    """Tests for the scenario catalog."""

    def test_default_count(self, moisture_scenarios):
        assert moisture_scenarios.number_of_scenarios == 16

    def test_lookup(self, moisture_scenarios):
        index = moisture_scenarios.index_by_name("D4L1")
        assert moisture_scenarios.name_by_index(index) == "D4L1"
        assert moisture_scenarios.get_moisture(index, MoistureClass.ONE_HOUR, MoistureUnits.PERCENT) == \
            pytest.approx(12.0)

    def test_unknown_name(self, moisture_scenarios):
        assert not moisture_scenarios.is_defined_by_name("D9L9")
        with pytest.raises(MoistureScenarioError):
            moisture_scenarios.index_by_name("D9L9")

    def test_aggregate_not_defined(self, moisture_scenarios):
        with pytest.raises(MoistureScenarioError):
            moisture_scenarios.get_moisture(0, MoistureClass.DEAD_AGGREGATE)

    def test_add_scenario(self, moisture_scenarios):
        index = moisture_scenarios.add_scenario("wet", "Wet spring", 20, 22, 25, 200, 180, MoistureUnits.PERCENT)
        assert index == 16
        assert moisture_scenarios.get_by_name("wet").hundred_hour == pytest.approx(0.25)

    def test_add_replaces_same_name(self, moisture_scenarios):
        moisture_scenarios.add_scenario("wet", "first", 0.2, 0.2, 0.2, 2.0, 2.0)
        index = moisture_scenarios.add_scenario("wet", "second", 0.3, 0.3, 0.3, 2.0, 2.0)
        assert moisture_scenarios.number_of_scenarios == 17
        assert moisture_scenarios.description_by_index(index) == "second"

    def test_additions_are_per_instance(self, moisture_scenarios):
        moisture_scenarios.add_scenario("wet", "Wet spring", 0.2, 0.2, 0.2, 2.0, 2.0)
        assert MoistureScenarios().number_of_scenarios == 16


class TestMoistureInputs:
    """Tests for the stateful moisture inputs."""

    def test_units_round_trip(self):
        moisture = MoistureInputs()
        moisture.set_moisture_one_hour(6.0, MoistureUnits.PERCENT)
        assert moisture.get_raw_moisture(MoistureClass.ONE_HOUR) == pytest.approx(0.06)
        assert moisture.get_moisture(MoistureClass.ONE_HOUR, MoistureUnits.PERCENT) == pytest.approx(6.0)

    def test_mode_switch_keeps_inputs(self):
        """Switching modes and back restores the original size class moistures."""
        moisture = MoistureInputs()
        moisture.set_moisture_one_hour(0.05)
        moisture.set_moisture_ten_hour(0.06)
        moisture.set_moisture_hundred_hour(0.07)
        moisture.set_moisture_live_herbaceous(0.8)
        moisture.set_moisture_live_woody(1.0)
        moisture.set_moisture_dead_aggregate(0.12)
        before = moisture.moisture_vector

        moisture.set_moisture_input_mode(MoistureInputMode.ALL_AGGREGATE)
        assert moisture.get_moisture(MoistureClass.TEN_HOUR) == pytest.approx(0.12)

        moisture.set_moisture_input_mode(MoistureInputMode.BY_SIZE_CLASS)
        assert moisture.moisture_vector == before

    def test_unused_aggregate_is_none(self):
        moisture = MoistureInputs()
        assert moisture.get_moisture(MoistureClass.DEAD_AGGREGATE) is None

    def test_select_scenario_by_name(self):
        moisture = MoistureInputs()
        assert moisture.set_moisture_scenario_by_name("D1L4")
        moisture.set_moisture_input_mode(MoistureInputMode.MOISTURE_SCENARIO)
        assert moisture.get_moisture(MoistureClass.LIVE_WOODY) == pytest.approx(1.5)

    def test_failed_selection_clears(self):
        moisture = MoistureInputs()
        assert moisture.set_moisture_scenario_by_index(3)
        assert not moisture.set_moisture_scenario_by_name("missing")
        assert moisture.scenario_index == -1
        assert moisture.scenario_name == ""

    def test_failed_index_selection_clears(self):
        moisture = MoistureInputs()
        moisture.set_moisture_scenario_by_name("D2L2")
        assert not moisture.set_moisture_scenario_by_index(99)
        assert moisture.scenario_index == -1
        assert moisture.scenario_name == ""

    @pytest.mark.parametrize("mode, needed, not_needed", [
        (MoistureInputMode.BY_SIZE_CLASS, MoistureClass.ONE_HOUR, MoistureClass.DEAD_AGGREGATE),
        (MoistureInputMode.ALL_AGGREGATE, MoistureClass.LIVE_AGGREGATE, MoistureClass.LIVE_WOODY),
        (MoistureInputMode.DEAD_AGGREGATE_AND_LIVE_SIZE_CLASS, MoistureClass.LIVE_HERBACEOUS,
         MoistureClass.TEN_HOUR),
        (MoistureInputMode.LIVE_AGGREGATE_AND_DEAD_SIZE_CLASS, MoistureClass.HUNDRED_HOUR,
         MoistureClass.LIVE_WOODY),
        (MoistureInputMode.MOISTURE_SCENARIO, None, MoistureClass.ONE_HOUR),
    ])
    def test_input_needed(self, mode, needed, not_needed):
        moisture = MoistureInputs()
        moisture.set_moisture_input_mode(mode)
        if needed is not None:
            assert moisture.is_moisture_class_input_needed(needed)
        assert not moisture.is_moisture_class_input_needed(not_needed)
