"""Custom exceptions for the firebehave fire behavior package.

Expected fire behavior conditions (zero fuel load, near-zero denominators,
out-of-range directions, failed moisture scenario selection) never raise;
they resolve to explicit sentinel results. The exceptions defined here are
reserved for programming and configuration faults.

Exception Hierarchy:
    FireBehaviorError (base)
    ├── ConfigurationError - bad run configuration files or input combinations
    ├── ValidationError - out-of-range input values
    ├── FuelModelError - fuel model catalog failures
    └── MoistureScenarioError - moisture scenario lookup failures

Each subclass keeps its context as attributes and appends it to the message,
e.g. ``Missing [Moisture] section (in run.cfg, parameter 'Moisture')``.
"""

from typing import Optional


class FireBehaviorError(Exception):
    """Base exception for all firebehave errors.

    Example:
        >>> try:
        ...     crown.run_crown_fire()
        ... except FireBehaviorError as e:
        ...     logger.error("crown run failed: %s", e)
    """

    @staticmethod
    def _with_context(message: str, *context: str) -> str:
        """Appends the non-empty context fragments to ``message`` in parentheses."""
        fragments = [c for c in context if c]
        if not fragments:
            return message
        return "{} ({})".format(message, ", ".join(fragments))


class ConfigurationError(FireBehaviorError):
    """Raised when a configuration file or input combination is unusable.

    Covers missing ``.cfg`` files, sections or keys, values and unit names
    that do not parse, and crown runs whose wind has no 20-ft equivalent.

    Attributes:
        config_path (str): config file being read, if any
        parameter (str): ``Section.key`` or input name at fault, if known
    """

    def __init__(self, message: str, config_path: Optional[str] = None, parameter: Optional[str] = None):
        self.config_path = config_path
        self.parameter = parameter
        super().__init__(self._with_context(
            message,
            f"in {config_path}" if config_path else "",
            f"parameter '{parameter}'" if parameter else "",
        ))


class ValidationError(FireBehaviorError):
    """Raised when an input value is outside its valid range.

    Attributes:
        field (str): name of the offending field, if known
        value: the rejected value, if known
    """

    def __init__(self, message: str, field: Optional[str] = None, value=None):
        self.field = field
        self.value = value
        super().__init__(self._with_context(
            message,
            f"field '{field}'" if field else "",
            f"value={value!r}" if value is not None else "",
        ))


class FuelModelError(FireBehaviorError):
    """Raised for an undefined fuel model or a custom model on a protected number."""

    def __init__(self, message: str, fuel_model_id: Optional[int] = None):
        self.fuel_model_id = fuel_model_id
        super().__init__(self._with_context(
            message,
            f"fuel model {fuel_model_id}" if fuel_model_id is not None else "",
        ))


class MoistureScenarioError(FireBehaviorError):
    """Raised when a moisture scenario lookup fails.

    Resolving moistures in scenario mode with nothing selected ends up here,
    raised by the scenario catalog for index -1.
    """

    def __init__(self, message: str, scenario=None):
        self.scenario = scenario
        super().__init__(self._with_context(
            message,
            f"scenario {scenario!r}" if scenario is not None else "",
        ))
