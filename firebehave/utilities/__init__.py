"""Shared utilities for firebehave.

Modules:
    - unit_conversions: Unit enums and conversion to and from base units.
    - data_classes: Run inputs and result dataclasses.
    - config: Loading run inputs from .cfg files.
"""
