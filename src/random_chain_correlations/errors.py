"""Exception types raised by the correlation pipeline."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid run parameters, detected before any sample is drawn."""


class NumericalFailure(ArithmeticError):
    """The eigensolver failed or returned an unusable decomposition."""
