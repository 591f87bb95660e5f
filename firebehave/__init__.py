"""firebehave - Rothermel surface fire spread and crown fire transition."""

from firebehave.surface import Surface
from firebehave.crown import Crown
from firebehave.models.fuel_models import FuelLifeState, FuelModels
from firebehave.models.moisture import MoistureClass, MoistureInputMode, MoistureScenarios
from firebehave.models.fire_size import SpreadDirectionMode
from firebehave.models.wind_slope import (
    WindAdjustmentFactorMethod,
    WindAndSpreadOrientationMode,
    WindHeightInputMode,
)
from firebehave.utilities.data_classes import (
    CrownInputs,
    FireType,
    SurfaceInputs,
    TwoFuelModelsMethod,
)
from firebehave.exceptions import (
    FireBehaviorError,
    ConfigurationError,
    ValidationError,
    FuelModelError,
    MoistureScenarioError,
)

__version__ = "0.1.0"

__all__ = [
    "Surface",
    "Crown",
    "FuelModels",
    "FuelLifeState",
    "MoistureClass",
    "MoistureScenarios",
    "MoistureInputMode",
    "SpreadDirectionMode",
    "WindAdjustmentFactorMethod",
    "WindAndSpreadOrientationMode",
    "WindHeightInputMode",
    "SurfaceInputs",
    "CrownInputs",
    "FireType",
    "TwoFuelModelsMethod",
    "FireBehaviorError",
    "ConfigurationError",
    "ValidationError",
    "FuelModelError",
    "MoistureScenarioError",
]
