"""Exceptions raised inside the roster package."""


class RosterError(Exception):
    """Base class for all roster errors."""


class ValidationError(RosterError):
    """User input rejected by the form; the message is shown as-is."""


class StorageError(RosterError):
    """Reading or writing the record file failed."""
