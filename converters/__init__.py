"""Figma -> Unify component converters."""

from converters.base import (
    ConversionError,
    InstanceNotFoundError,
    NoNodesError,
    RandomNameGenerator,
)
from converters.radio_converter import ConversionOverrides, convert_radio_button

__all__ = [
    "ConversionError",
    "ConversionOverrides",
    "InstanceNotFoundError",
    "NoNodesError",
    "RandomNameGenerator",
    "convert_radio_button",
]
