"""Exceptions raised by the auto-kick core."""


class AutoKickError(Exception):
    """Base class for auto-kick errors."""


class InvalidConfigurationError(AutoKickError, ValueError):
    """Raised when tracking is set up with unusable timing parameters."""


class RosterUnavailableError(AutoKickError):
    """Raised when the server roster could not be fetched in time."""
