"""Exceptions raised by the galaxy generator."""


class GalaxyError(Exception):
    """Base class for galaxy generation errors."""


class InvalidParameter(GalaxyError, ValueError):
    """A parameter value the generator cannot work with."""

    def __init__(self, name: str, value, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {name}={value!r}: {reason}")


class GalaxyDisposedError(GalaxyError):
    """Buffers were accessed after the galaxy was disposed."""
