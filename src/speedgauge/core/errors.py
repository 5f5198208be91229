"""Exceptions raised by the gauge core."""

from __future__ import annotations


class GaugeError(ValueError):
    """Base class for value-domain violations of the gauge API."""


class InvalidConfiguration(GaugeError):
    """Raised for a non-positive max value/major step or a negative value."""


class InvalidRange(GaugeError):
    """Raised when a colored range does not satisfy begin < end."""
