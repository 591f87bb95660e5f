"""Tests for loading run inputs from .cfg files."""

import textwrap

import pytest

from firebehave.exceptions import ConfigurationError
from firebehave.models.fuel_models import FuelModels
from firebehave.models.moisture import MoistureClass, MoistureInputMode
from firebehave.models.wind_slope import WindAdjustmentFactorMethod, WindHeightInputMode
from firebehave.utilities.config import load_crown_inputs, load_surface_inputs
from firebehave.utilities.data_classes import TwoFuelModelsMethod


FULL_CONFIG = """
    [Fuel]
    fuel_model = 10

    [Moisture]
    mode = by_size_class
    one_hour = 6
    one_hour_units = percent
    ten_hour = 0.07
    hundred_hour = 0.08
    live_herbaceous = 60
    live_herbaceous_units = percent
    live_woody = 0.9

    [Wind]
    speed = 10
    speed_units = mph
    height_mode = twenty_foot
    direction = 45
    waf_method = use_crown_ratio

    [Terrain]
    slope = 100
    slope_units = percent
    aspect = -90

    [Canopy]
    cover = 50
    cover_units = percent
    height = 20
    height_units = m
    crown_ratio = 0.4

    [Run]
    elapsed_time = 2
    elapsed_time_units = h
    air_temperature = 25
    air_temperature_units = C

    [Crown]
    canopy_base_height = 2
    canopy_base_height_units = m
    canopy_bulk_density = 0.15
    canopy_bulk_density_units = kg/m3
    foliar_moisture = 120
    foliar_moisture_units = percent
"""


def write_config(tmp_path, text, name="run.cfg"):
    path = tmp_path / name
    path.write_text(textwrap.dedent(text))
    return str(path)


class TestLoadSurfaceInputs:
    """Tests for the surface input loader."""

    def test_round_trip(self, tmp_path):
        inputs = load_surface_inputs(write_config(tmp_path, FULL_CONFIG))

        assert inputs.fuel_model_number == 10
        assert inputs.moisture.get_moisture(MoistureClass.ONE_HOUR) == pytest.approx(0.06)
        assert inputs.moisture.get_moisture(MoistureClass.LIVE_HERBACEOUS) == pytest.approx(0.60)
        assert inputs.moisture.get_moisture(MoistureClass.LIVE_WOODY) == pytest.approx(0.90)
        assert inputs.wind_speed == pytest.approx(880.0)
        assert inputs.wind_height_mode == WindHeightInputMode.TWENTY_FOOT
        assert inputs.wind_direction == pytest.approx(45.0)
        assert inputs.slope == pytest.approx(45.0)
        assert inputs.aspect == pytest.approx(270.0)
        assert inputs.canopy_cover == pytest.approx(0.5)
        assert inputs.canopy_height == pytest.approx(65.6168, rel=1e-5)
        assert inputs.crown_ratio == pytest.approx(0.4)
        assert inputs.elapsed_time == pytest.approx(120.0)
        assert inputs.air_temperature == pytest.approx(77.0)
        assert not inputs.is_using_two_fuel_models

    def test_defaults_for_optional_sections(self, tmp_path):
        path = write_config(tmp_path, """
            [Fuel]
            fuel_model = 1

            [Moisture]
            one_hour = 0.05
        """)
        inputs = load_surface_inputs(path)
        assert inputs.wind_speed == 0.0
        assert inputs.slope == 0.0
        assert inputs.elapsed_time == 60.0
        assert inputs.moisture.mode == MoistureInputMode.BY_SIZE_CLASS

    def test_two_fuel_models(self, tmp_path):
        path = write_config(tmp_path, FULL_CONFIG + """
    [TwoFuelModels]
    first = 1
    second = 10
    first_coverage = 60
    first_coverage_units = percent
    method = two_dimensional
""")
        inputs = load_surface_inputs(path)
        config = inputs.two_fuel_models
        assert config.first_fuel_model_number == 1
        assert config.second_fuel_model_number == 10
        assert config.first_fuel_model_coverage == pytest.approx(0.6)
        assert config.method == TwoFuelModelsMethod.TWO_DIMENSIONAL

    def test_moisture_scenario(self, tmp_path):
        path = write_config(tmp_path, """
            [Fuel]
            fuel_model = 2

            [Moisture]
            mode = moisture_scenario
            scenario = D3L2
        """)
        inputs = load_surface_inputs(path)
        assert inputs.moisture.scenario_name == "D3L2"
        assert inputs.moisture.get_moisture(MoistureClass.HUNDRED_HOUR) == pytest.approx(0.11)

    def test_user_waf(self, tmp_path):
        path = write_config(tmp_path, """
            [Fuel]
            fuel_model = 1

            [Moisture]
            one_hour = 0.05

            [Wind]
            speed = 5
            speed_units = mph
            height_mode = twenty_foot
            waf = 0.3
        """)
        inputs = load_surface_inputs(path)
        assert inputs.waf_method == WindAdjustmentFactorMethod.USER_INPUT
        assert inputs.user_waf == pytest.approx(0.3)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_surface_inputs(str(tmp_path / "missing.cfg"))
        assert exc_info.value.config_path.endswith("missing.cfg")

    def test_missing_section(self, tmp_path):
        path = write_config(tmp_path, """
            [Fuel]
            fuel_model = 1
        """)
        with pytest.raises(ConfigurationError) as exc_info:
            load_surface_inputs(path)
        assert exc_info.value.parameter == "Moisture"

    def test_missing_fuel_model(self, tmp_path):
        path = write_config(tmp_path, """
            [Fuel]
            code = FM1

            [Moisture]
            one_hour = 0.05
        """)
        with pytest.raises(ConfigurationError) as exc_info:
            load_surface_inputs(path)
        assert exc_info.value.parameter == "Fuel.fuel_model"

    def test_bad_number(self, tmp_path):
        path = write_config(tmp_path, """
            [Fuel]
            fuel_model = 1

            [Moisture]
            one_hour = dry
        """)
        with pytest.raises(ConfigurationError):
            load_surface_inputs(path)

    def test_bad_units(self, tmp_path):
        path = write_config(tmp_path, """
            [Fuel]
            fuel_model = 1

            [Moisture]
            one_hour = 5

            [Wind]
            speed = 5
            speed_units = knots
        """)
        with pytest.raises(ConfigurationError) as exc_info:
            load_surface_inputs(path)
        assert exc_info.value.parameter == "Wind.speed_units"

    def test_bad_enum(self, tmp_path):
        path = write_config(tmp_path, """
            [Fuel]
            fuel_model = 1

            [Moisture]
            one_hour = 0.05

            [Wind]
            height_mode = rooftop
        """)
        with pytest.raises(ConfigurationError):
            load_surface_inputs(path)

    def test_unknown_scenario(self, tmp_path):
        path = write_config(tmp_path, """
            [Fuel]
            fuel_model = 1

            [Moisture]
            mode = moisture_scenario
            scenario = D9L9
        """)
        with pytest.raises(ConfigurationError):
            load_surface_inputs(path)

    def test_undefined_fuel_model_with_catalog(self, tmp_path):
        path = write_config(tmp_path, """
            [Fuel]
            fuel_model = 57

            [Moisture]
            one_hour = 0.05
        """)
        with pytest.raises(ConfigurationError):
            load_surface_inputs(path, fuel_models=FuelModels())


class TestLoadCrownInputs:
    """Tests for the crown input loader."""

    def test_round_trip(self, tmp_path):
        crown = load_crown_inputs(write_config(tmp_path, FULL_CONFIG))
        assert crown.canopy_base_height == pytest.approx(6.56168, rel=1e-5)
        assert crown.canopy_bulk_density == pytest.approx(0.15 / 16.0185, rel=1e-4)
        assert crown.foliar_moisture == pytest.approx(1.2)

    def test_missing_crown_section(self, tmp_path):
        path = write_config(tmp_path, """
            [Fuel]
            fuel_model = 1
        """)
        with pytest.raises(ConfigurationError):
            load_crown_inputs(path)

    def test_missing_bulk_density(self, tmp_path):
        path = write_config(tmp_path, """
            [Crown]
            canopy_base_height = 6
        """)
        with pytest.raises(ConfigurationError) as exc_info:
            load_crown_inputs(path)
        assert exc_info.value.parameter == "Crown.canopy_bulk_density"
