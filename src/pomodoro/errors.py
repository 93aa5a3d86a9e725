class PomodoroError(Exception):
    """Base exception for the phase timer core."""


class InvalidConfigurationError(PomodoroError):
    """Raised when a phase is requested that the current settings do not generate."""
