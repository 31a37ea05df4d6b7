class TrackingError(Exception):
    """Base class for every error raised by the tracking SDK."""


class ConfigurationError(TrackingError, ValueError):
    """Raised when the client cannot be constructed from the given options."""


class InvalidEventError(TrackingError, ValueError):
    """Raised when an event carries an unserializable payload or has no name.

    A name that is empty or only whitespace counts as missing.
    """


class DeliveryError(TrackingError, RuntimeError):
    """Raised inside a transmission job when the collector rejects an envelope."""
