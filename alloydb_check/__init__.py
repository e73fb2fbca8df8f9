# alloydb_check/__init__.py
"""
AlloyDB connectivity check.

Connects to an AlloyDB instance through the AlloyDB Python Connector using
IAM database authentication and prints the server time.
"""

from .config import Settings, build_instance_uri
from .errors import (
    AlloyDBCheckError,
    ConfigParseError,
    ConnectSetupError,
    ConfigurationError,
    DialerInitError,
    PoolConstructionError,
    QueryError,
)

__all__ = [
    "Settings",
    "build_instance_uri",
    "AlloyDBCheckError",
    "ConfigurationError",
    "DialerInitError",
    "ConfigParseError",
    "ConnectSetupError",
    "PoolConstructionError",
    "QueryError",
]
