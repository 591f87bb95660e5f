"""Shared pytest fixtures for the firebehave test suite.

This module provides reusable fixtures for testing firebehave components,
including the fuel model catalog, typical surface inputs and canopy inputs.
"""

import pytest

from firebehave.models.fuel_models import FuelModels
from firebehave.models.moisture import MoistureScenarios
from firebehave.models.wind_slope import WindHeightInputMode
from firebehave.surface import Surface
from firebehave.utilities.data_classes import CrownInputs, SurfaceInputs
from firebehave.utilities.unit_conversions import (
    CoverUnits,
    DensityUnits,
    LengthUnits,
    MoistureUnits,
    SpeedUnits,
)


# ============================================================================
# Catalog Fixtures
# ============================================================================

@pytest.fixture
def fuel_models():
    """Provide a fresh fuel model catalog.

    Returns:
        FuelModels: Standard fuel models with no custom additions.
    """
    return FuelModels()


@pytest.fixture
def moisture_scenarios():
    """Provide the default moisture scenarios.

    Returns:
        MoistureScenarios: D1L1 through D4L4.
    """
    return MoistureScenarios()


# ============================================================================
# Surface Input Fixtures
# ============================================================================

def _set_moistures(inputs, one_hour, ten_hour, hundred_hour, live_herb, live_woody):
    moisture = inputs.moisture
    moisture.set_moisture_one_hour(one_hour, MoistureUnits.PERCENT)
    moisture.set_moisture_ten_hour(ten_hour, MoistureUnits.PERCENT)
    moisture.set_moisture_hundred_hour(hundred_hour, MoistureUnits.PERCENT)
    moisture.set_moisture_live_herbaceous(live_herb, MoistureUnits.PERCENT)
    moisture.set_moisture_live_woody(live_woody, MoistureUnits.PERCENT)


@pytest.fixture
def grass_inputs():
    """Provide inputs for Anderson Fuel Model 1 (short grass) on flat ground.

    Returns:
        SurfaceInputs: Dry grass, 5 mph midflame wind, no slope.
    """
    inputs = SurfaceInputs()
    inputs.set_fuel_model_number(1)
    _set_moistures(inputs, 6, 7, 8, 60, 90)
    inputs.set_wind_speed(5.0, SpeedUnits.MILES_PER_HOUR, WindHeightInputMode.DIRECT_MIDFLAME)
    return inputs


@pytest.fixture
def timber_inputs():
    """Provide inputs for Anderson Fuel Model 10 (timber litter and understory).

    Returns:
        SurfaceInputs: Moderate moistures, 10 mph 20-ft wind, 20 degree slope
        under a partial canopy.
    """
    inputs = SurfaceInputs()
    inputs.set_fuel_model_number(10)
    _set_moistures(inputs, 6, 7, 8, 60, 90)
    inputs.set_wind_speed(10.0, SpeedUnits.MILES_PER_HOUR, WindHeightInputMode.TWENTY_FOOT)
    inputs.set_slope(20.0)
    inputs.set_canopy_cover(50.0, CoverUnits.PERCENT)
    inputs.set_canopy_height(60.0, LengthUnits.FEET)
    inputs.set_crown_ratio(0.5)
    return inputs


@pytest.fixture
def brush_inputs():
    """Provide inputs for Scott and Burgan SH2 (moderate load dry climate shrub).

    Returns:
        SurfaceInputs: Dry dead fuel, green shrubs, 4 mph midflame wind.
    """
    inputs = SurfaceInputs()
    inputs.set_fuel_model_number(142)
    _set_moistures(inputs, 6, 7, 8, 60, 90)
    inputs.set_wind_speed(4.0, SpeedUnits.MILES_PER_HOUR, WindHeightInputMode.DIRECT_MIDFLAME)
    return inputs


@pytest.fixture
def grass_surface(fuel_models, grass_inputs):
    """Provide a Surface for the short grass inputs.

    Returns:
        Surface: Not yet run.
    """
    return Surface(fuel_models, grass_inputs)


@pytest.fixture
def timber_surface(fuel_models, timber_inputs):
    """Provide a Surface for the timber inputs.

    Returns:
        Surface: Not yet run.
    """
    return Surface(fuel_models, timber_inputs)


# ============================================================================
# Crown Fixtures
# ============================================================================

@pytest.fixture
def crown_inputs():
    """Provide canopy inputs for a moderately dense conifer stand.

    Returns:
        CrownInputs: 6 ft canopy base, 0.15 kg/m^3 bulk density, 100% foliar moisture.
    """
    inputs = CrownInputs()
    inputs.set_canopy_base_height(6.0, LengthUnits.FEET)
    inputs.set_canopy_bulk_density(0.15, DensityUnits.KILOGRAMS_PER_CUBIC_METER)
    inputs.set_foliar_moisture(100.0, MoistureUnits.PERCENT)
    return inputs
