# alloydb_check/errors.py
from __future__ import annotations

from typing import Callable, Optional


class AlloyDBCheckError(Exception):
    """Base class for every failure of the connectivity check."""


class ConfigurationError(AlloyDBCheckError):
    def __init__(self, variable: str, message: Optional[str] = None):
        self.variable = variable
        super().__init__(message or f"Required environment variable {variable} is not set")


class DialerInitError(AlloyDBCheckError):
    pass


class ConnectSetupError(AlloyDBCheckError):
    """
    A setup step failed after the connector was created.

    `cleanup` releases the connector. Whoever catches this must call it.
    """

    def __init__(self, message: str, cleanup: Optional[Callable[[], None]] = None):
        super().__init__(message)
        self.cleanup = cleanup


class ConfigParseError(ConnectSetupError):
    pass


class PoolConstructionError(ConnectSetupError):
    pass


class QueryError(AlloyDBCheckError):
    pass
