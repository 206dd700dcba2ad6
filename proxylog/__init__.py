"""Leveled logging facility for the proxy."""

from .exceptions import ConfigurationError, ProxyLogError

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ProxyLogError",
    "__version__",
]
