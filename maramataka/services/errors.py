"""Exceptions raised by the Maramataka engine and its collaborators."""


class MaramatakaError(Exception):
    """Base class for engine errors."""


class OutOfRangeError(MaramatakaError, ValueError):
    """The requested date precedes the first tabulated new moon."""


class ProviderUnavailable(MaramatakaError, RuntimeError):
    """The moon event provider could not produce a value."""


class TripNotFound(MaramatakaError, LookupError):
    pass


class RecordNotFound(MaramatakaError, LookupError):
    """No catch or weather log with that id belongs to the trip."""


__all__ = ["MaramatakaError", "OutOfRangeError", "ProviderUnavailable", "RecordNotFound", "TripNotFound"]
