"""Exceptions raised by the indicator engine."""


class InvalidInputError(ValueError):
    """Raised when a candle series violates a structural invariant.

    The message names the violated invariant and, where it applies,
    the index of the offending candle.
    """


class InsufficientDataError(ValueError):
    """Raised by strict primitives when the series is shorter than the period."""


class ConfigError(ValueError):
    """Raised when an engine parameter file cannot be read or validated."""
