"""Exceptions raised by callthrottle."""


class ThrottleConfigError(ValueError):
    """Raised when a throttle is constructed with invalid parameters.

    Subclasses ValueError so callers validating input generically still
    catch it.
    """
