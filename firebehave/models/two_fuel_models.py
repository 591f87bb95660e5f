"""Spread rate of a stand made of two interspersed fuel models.

Each fuel model is run through the spread kernel under identical moisture,
wind and slope conditions and the two head fire rates are blended by one of
three methods:

    - ARITHMETIC: coverage-weighted mean of the two rates.
    - HARMONIC: coverage-weighted harmonic mean, i.e. the rate of a fire that
      must burn through each fuel in proportion to its coverage.
    - TWO_DIMENSIONAL: Finney's expected spread rate for a random patch
      arrangement. A block of unit cells, ``samples`` columns wide plus
      ``laterals`` extra columns on each side and ``depth`` rows deep, is
      filled with every arrangement of the two fuels. In each arrangement a
      line fire at the bottom edge climbs row by row, straight ahead at the
      head fire rate of the cell or diagonally into a neighbouring column at
      the 45 degree rate of an elliptical fire with the stand's
      length-to-width ratio. The expected rate is the block depth over the
      probability-weighted mean arrival time at the top of the sample
      columns. Runs use 2 samples, depth 2 and no laterals.

References:
    - Finney, M. A. (2003). Calculation of fire spread rates across random
      landscapes. International Journal of Wildland Fire 12: 167-174.
"""
from dataclasses import replace
from itertools import product
from typing import Callable, Optional, Sequence, Tuple
import logging

import numpy as np

from firebehave.models.fire_size import FireEllipse, SpreadDirectionMode
from firebehave.models.rothermel import (
    apply_direction_of_interest,
    calc_flame_length,
    calc_spread_rate_at_direction,
)
from firebehave.utilities.data_classes import SpreadRateResult, TwoFuelModelConfig, TwoFuelModelsMethod

logger = logging.getLogger(__name__)

FINNEY_SAMPLES = 2
FINNEY_DEPTH = 2
FINNEY_LATERALS = 0

# Heading of a move into the neighbouring column of the next row
DIAGONAL_ANGLE = 45.0
DIAGONAL_LENGTH = np.sqrt(2.0)


def _cell_times(rate: float, length_to_width_ratio: float) -> Tuple[float, float]:
    """Straight and diagonal crossing times (min per unit cell) of one fuel."""
    if rate <= 1.0e-7:
        return np.inf, np.inf
    diagonal_rate = FireEllipse(rate, length_to_width_ratio).rate_at(DIAGONAL_ANGLE)
    return 1.0 / rate, DIAGONAL_LENGTH / diagonal_rate


def _arrival_times(cells: Sequence[int], straight: Sequence[float], diagonal: Sequence[float],
                   columns: int, depth: int) -> np.ndarray:
    """Arrival time at the top of every column for one arrangement of fuels.

    ``cells`` lists the fuel index of every cell row by row, bottom row
    first; the fire starts along the whole bottom edge at time zero.
    """
    arrival = np.zeros(columns)

    for row in range(depth):
        fuels = cells[row * columns:(row + 1) * columns]
        below = arrival
        arrival = np.empty(columns)
        for col, fuel in enumerate(fuels):
            best = below[col] + straight[fuel]
            if col > 0:
                best = min(best, below[col - 1] + diagonal[fuel])
            if col < columns - 1:
                best = min(best, below[col + 1] + diagonal[fuel])
            arrival[col] = best

    return arrival


def calc_finney_spread_rate(first_coverage: float, rates: Sequence[float], length_to_width_ratio: float,
                            samples: int = FINNEY_SAMPLES, depth: int = FINNEY_DEPTH,
                            laterals: int = FINNEY_LATERALS) -> float:
    """Finney expected spread rate of two fuels randomly mixed on a block of cells.

    Args:
        first_coverage (float): fraction of cells holding the first fuel
        rates (Sequence[float]): head fire rate of each fuel (ft/min)
        length_to_width_ratio (float): fire shape shared by both fuels
        samples (int): number of columns whose arrival times are averaged
        depth (int): number of rows the fire crosses
        laterals (int): extra columns on each side the fire may detour through

    Returns:
        float: expected spread rate (ft/min), zero if the expected arrival
        time is unbounded
    """
    columns = samples + 2 * laterals
    n_cells = columns * depth
    times = [_cell_times(rate, length_to_width_ratio) for rate in rates]
    straight = [t[0] for t in times]
    diagonal = [t[1] for t in times]

    expected_time = 0.0
    for cells in product((0, 1), repeat=n_cells):
        n_second = sum(cells)
        probability = first_coverage**(n_cells - n_second) * (1.0 - first_coverage)**n_second
        if probability <= 0.0:
            # Skipped so 0 * inf never enters the sum
            continue
        arrival = _arrival_times(cells, straight, diagonal, columns, depth)
        expected_time += probability * float(np.mean(arrival[laterals:laterals + samples]))

    if not np.isfinite(expected_time) or expected_time < 1.0e-7:
        return 0.0

    return depth / expected_time


def blend_spread_rates(method: TwoFuelModelsMethod, first_coverage: float,
                       first_rate: float, second_rate: float,
                       length_to_width_ratio: float = 1.0) -> float:
    """Blends two spread rates with the given method.

    ``length_to_width_ratio`` is only read by the two-dimensional method.
    """
    second_coverage = 1.0 - first_coverage

    if method == TwoFuelModelsMethod.ARITHMETIC:
        return first_coverage * first_rate + second_coverage * second_rate

    if method == TwoFuelModelsMethod.HARMONIC:
        if (first_coverage > 0.0 and first_rate <= 1.0e-7) or (second_coverage > 0.0 and second_rate <= 1.0e-7):
            return 0.0
        denominator = 0.0
        if first_coverage > 0.0:
            denominator += first_coverage / first_rate
        if second_coverage > 0.0:
            denominator += second_coverage / second_rate
        return 1.0 / denominator if denominator > 1.0e-7 else 0.0

    if method == TwoFuelModelsMethod.TWO_DIMENSIONAL:
        return calc_finney_spread_rate(first_coverage, (first_rate, second_rate), length_to_width_ratio)

    raise ValueError(f"Unknown two fuel models method: {method!r}")


def calc_weighted_spread_rate(config: TwoFuelModelConfig, run_model: Callable[[int], SpreadRateResult],
                              direction_of_interest: Optional[float] = None,
                              direction_mode: SpreadDirectionMode = SpreadDirectionMode.FROM_IGNITION_POINT
                              ) -> SpreadRateResult:
    """Composite spread result of two fuel models sharing one stand.

    Args:
        config (TwoFuelModelConfig): fuel model pair, first model coverage and blending method
        run_model (Callable[[int], SpreadRateResult]): runs the spread kernel for a
            fuel model number under the shared conditions
        direction_of_interest (float, optional): direction to also report a rate for,
            in the same frame as the results of ``run_model``
        direction_mode (SpreadDirectionMode): how the rate in that direction is measured

    Returns:
        SpreadRateResult: composite result
    """
    c1 = config.first_fuel_model_coverage
    c2 = 1.0 - c1

    if c1 >= 1.0:
        return _with_direction(run_model(config.first_fuel_model_number), direction_of_interest, direction_mode)
    if c1 <= 0.0:
        return _with_direction(run_model(config.second_fuel_model_number), direction_of_interest, direction_mode)

    first = run_model(config.first_fuel_model_number)
    second = run_model(config.second_fuel_model_number)

    # Fastest fuel sets the fire shape
    dominant = first if first.spread_rate >= second.spread_rate else second

    rate = blend_spread_rates(config.method, c1, first.spread_rate, second.spread_rate,
                              dominant.length_to_width_ratio)

    hpua = c1 * first.heat_per_unit_area + c2 * second.heat_per_unit_area
    residence_time = c1 * first.residence_time + c2 * second.residence_time
    ellipse = FireEllipse(rate, dominant.length_to_width_ratio)
    fli = hpua * rate / 60.0
    backing_fli = hpua * ellipse.backing_spread_rate / 60.0
    flanking_fli = hpua * ellipse.flanking_spread_rate / 60.0

    composite = replace(
        dominant,
        spread_rate=rate,
        backing_spread_rate=ellipse.backing_spread_rate,
        flanking_spread_rate=ellipse.flanking_spread_rate,
        reaction_intensity=max(first.reaction_intensity, second.reaction_intensity),
        heat_per_unit_area=hpua,
        residence_time=residence_time,
        fireline_intensity=fli,
        flame_length=calc_flame_length(fli),
        backing_fireline_intensity=backing_fli,
        backing_flame_length=calc_flame_length(backing_fli),
        flanking_fireline_intensity=flanking_fli,
        flanking_flame_length=calc_flame_length(flanking_fli),
    )

    logger.debug("Two fuel models %d/%d (%s, coverage %.2f): %.3f ft/min",
                 config.first_fuel_model_number, config.second_fuel_model_number,
                 config.method.value, c1, rate)

    if direction_of_interest is not None:
        first_rate = calc_spread_rate_at_direction(first, direction_of_interest, direction_mode)
        second_rate = calc_spread_rate_at_direction(second, direction_of_interest, direction_mode)
        rate_at_direction = blend_spread_rates(config.method, c1, first_rate, second_rate,
                                               dominant.length_to_width_ratio)
        fli_at_direction = hpua * rate_at_direction / 60.0

        composite.direction_of_interest = direction_of_interest
        composite.spread_rate_in_direction_of_interest = rate_at_direction
        composite.fireline_intensity_in_direction_of_interest = fli_at_direction
        composite.flame_length_in_direction_of_interest = calc_flame_length(fli_at_direction)

    return composite


def _with_direction(result: SpreadRateResult, direction: Optional[float],
                    mode: SpreadDirectionMode) -> SpreadRateResult:
    if direction is None:
        return result
    return apply_direction_of_interest(result, direction, mode)
