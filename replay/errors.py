# replay/errors.py


class ReplayError(Exception):
    """Base class for all route replay errors."""


class ValidationError(ReplayError):
    """Route input is missing, empty or has a track with too few points."""


class InterpolationError(ReplayError):
    """A target time matched no segment despite passing the boundary checks."""

    def __init__(self, absolute_time_ms: float):
        super().__init__(f"Could not find segment for absolute time {absolute_time_ms}ms")
        self.absolute_time_ms = absolute_time_ms


class ConfigurationError(ReplayError):
    """A configuration value is malformed or out of range."""
