"""Tests for two fuel model weighting."""

import numpy as np
import pytest

from firebehave.exceptions import ValidationError
from firebehave.models.fuel_models import FuelModels, build_particles
from firebehave.models.moisture import MoistureVector
from firebehave.models.rothermel import calc_forward_spread_rate
from firebehave.models.two_fuel_models import (
    blend_spread_rates,
    calc_finney_spread_rate,
    calc_weighted_spread_rate,
)
from firebehave.utilities.data_classes import TwoFuelModelConfig, TwoFuelModelsMethod
from firebehave.utilities.unit_conversions import mph_to_ft_min


@pytest.fixture(scope="module")
def run_model():
    """Runs a fuel model at 6% dead moisture under a 5 mph upslope wind."""
    catalog = FuelModels()
    moisture = MoistureVector(0.06, 0.07, 0.08, 0.60, 0.90)

    def run(number):
        particles = build_particles(catalog.get_fuel_bed(number), moisture)
        return calc_forward_spread_rate(particles, mph_to_ft_min(5.0), 0.0, 10.0)

    return run


class TestBlendSpreadRates:
    """Tests for the blending methods."""

    def test_arithmetic(self):
        assert blend_spread_rates(TwoFuelModelsMethod.ARITHMETIC, 0.25, 10.0, 2.0) == pytest.approx(4.0)

    def test_harmonic(self):
        expected = 1.0 / (0.25 / 10.0 + 0.75 / 2.0)
        assert blend_spread_rates(TwoFuelModelsMethod.HARMONIC, 0.25, 10.0, 2.0) == pytest.approx(expected)

    def test_harmonic_with_non_burning_fuel(self):
        assert blend_spread_rates(TwoFuelModelsMethod.HARMONIC, 0.5, 10.0, 0.0) == 0.0

    def test_arithmetic_at_least_harmonic(self):
        arithmetic = blend_spread_rates(TwoFuelModelsMethod.ARITHMETIC, 0.4, 12.0, 3.0)
        harmonic = blend_spread_rates(TwoFuelModelsMethod.HARMONIC, 0.4, 12.0, 3.0)
        assert arithmetic >= harmonic


class TestFinneySpreadRate:
    """Tests for the two-dimensional expected spread rate."""

    def test_uniform_fuel(self):
        """Identical fuels spread at their common rate."""
        assert calc_finney_spread_rate(0.3, (5.0, 5.0), 2.0) == pytest.approx(5.0)

    def test_single_fuel_coverage(self):
        assert calc_finney_spread_rate(1.0, (8.0, 1.0), 3.0) == pytest.approx(8.0)

    def test_single_column_is_harmonic(self):
        """Without room to detour, the fire must burn through each fuel in turn."""
        rate = calc_finney_spread_rate(0.4, (12.0, 3.0), 2.0, samples=1, depth=1, laterals=0)
        assert rate == pytest.approx(1.0 / (0.4 / 12.0 + 0.6 / 3.0))

    def test_two_by_two_block_circular_fire(self):
        """Hand-enumerated 2 x 2 block: fast cells cross in 0.1 min, slow in 0.5 min.

        Summed over the 8 equally likely arrangements feeding one column, the
        fastest arrival times add up to 3.4 + 0.6 * sqrt(2) minutes.
        """
        expected = 2.0 / ((3.4 + 0.6 * np.sqrt(2.0)) / 8.0)
        assert calc_finney_spread_rate(0.5, (10.0, 2.0), 1.0) == pytest.approx(expected)

    def test_elongated_fire_detours_less(self):
        """A narrower fire spreads slower sideways, so detours through fast fuel pay off less."""
        circle = calc_finney_spread_rate(0.5, (10.0, 2.0), 1.0)
        elongated = calc_finney_spread_rate(0.5, (10.0, 2.0), 4.0)
        harmonic = blend_spread_rates(TwoFuelModelsMethod.HARMONIC, 0.5, 10.0, 2.0)
        assert harmonic <= elongated < circle

    def test_laterals_never_slow_the_fire(self):
        narrow = calc_finney_spread_rate(0.5, (10.0, 2.0), 1.5)
        wide = calc_finney_spread_rate(0.5, (10.0, 2.0), 1.5, laterals=1)
        assert wide >= narrow

    @pytest.mark.parametrize("coverage", [0.2, 0.5, 0.8])
    def test_at_least_harmonic(self, coverage):
        finney = calc_finney_spread_rate(coverage, (10.0, 2.0), 2.5)
        harmonic = blend_spread_rates(TwoFuelModelsMethod.HARMONIC, coverage, 10.0, 2.0)
        assert finney >= harmonic

    def test_between_component_rates(self):
        rate = calc_finney_spread_rate(0.5, (10.0, 2.0), 2.5)
        assert 2.0 <= rate <= 10.0

    def test_non_burning_fuel_blocks_some_arrangements(self):
        """A row of non-burning cells stops the fire, so the expected time is unbounded."""
        assert calc_finney_spread_rate(0.5, (10.0, 0.0), 2.5) == 0.0

    def test_blend_uses_length_to_width_ratio(self):
        rate = blend_spread_rates(TwoFuelModelsMethod.TWO_DIMENSIONAL, 0.5, 10.0, 2.0, 4.0)
        assert rate == pytest.approx(calc_finney_spread_rate(0.5, (10.0, 2.0), 4.0))


class TestWeightedSpreadRate:
    """Tests for the composite two fuel model result."""

    def test_full_coverage_matches_first_model(self, run_model):
        config = TwoFuelModelConfig(1, 10, 1.0, TwoFuelModelsMethod.HARMONIC)
        result = calc_weighted_spread_rate(config, run_model)
        assert result.spread_rate == pytest.approx(run_model(1).spread_rate, abs=1e-9)

    def test_zero_coverage_matches_second_model(self, run_model):
        config = TwoFuelModelConfig(1, 10, 0.0, TwoFuelModelsMethod.HARMONIC)
        result = calc_weighted_spread_rate(config, run_model)
        assert result.spread_rate == pytest.approx(run_model(10).spread_rate, abs=1e-9)

    def test_arithmetic_composite(self, run_model):
        config = TwoFuelModelConfig(1, 10, 0.6, TwoFuelModelsMethod.ARITHMETIC)
        result = calc_weighted_spread_rate(config, run_model)
        expected = 0.6 * run_model(1).spread_rate + 0.4 * run_model(10).spread_rate
        assert result.spread_rate == pytest.approx(expected)

    def test_shape_from_faster_fuel(self, run_model):
        first, second = run_model(1), run_model(10)
        faster = first if first.spread_rate >= second.spread_rate else second
        config = TwoFuelModelConfig(1, 10, 0.5, TwoFuelModelsMethod.HARMONIC)
        result = calc_weighted_spread_rate(config, run_model)
        assert result.length_to_width_ratio == pytest.approx(faster.length_to_width_ratio)

    def test_weighted_heat_per_unit_area(self, run_model):
        config = TwoFuelModelConfig(1, 10, 0.3, TwoFuelModelsMethod.ARITHMETIC)
        result = calc_weighted_spread_rate(config, run_model)
        expected = 0.3 * run_model(1).heat_per_unit_area + 0.7 * run_model(10).heat_per_unit_area
        assert result.heat_per_unit_area == pytest.approx(expected)
        assert result.fireline_intensity == pytest.approx(expected * result.spread_rate / 60.0)

    def test_two_dimensional_at_least_harmonic(self, run_model):
        harmonic = calc_weighted_spread_rate(TwoFuelModelConfig(1, 10, 0.5, TwoFuelModelsMethod.HARMONIC),
                                             run_model)
        finney = calc_weighted_spread_rate(TwoFuelModelConfig(1, 10, 0.5, TwoFuelModelsMethod.TWO_DIMENSIONAL),
                                           run_model)
        assert finney.spread_rate >= harmonic.spread_rate

    def test_direction_of_interest(self, run_model):
        config = TwoFuelModelConfig(1, 10, 0.5, TwoFuelModelsMethod.ARITHMETIC)
        result = calc_weighted_spread_rate(config, run_model, direction_of_interest=180.0)
        assert result.direction_of_interest == 180.0
        assert 0.0 < result.spread_rate_in_direction_of_interest < result.spread_rate

    def test_coverage_out_of_range(self):
        with pytest.raises(ValidationError):
            TwoFuelModelConfig(1, 10, 1.5)
