"""Exceptions raised while setting up proxy logging."""


class ProxyLogError(Exception):
    """Base exception for logging setup errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(ProxyLogError):
    """Raised when the logging configuration cannot be used."""
    pass
