# alloydb_check/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .errors import ConfigurationError

# Checked in this order; the first missing one is reported.
REQUIRED_VARS: Tuple[str, ...] = (
    "PROJECT_ID",
    "DB_REGION",
    "DB_CLUSTER_NAME",
    "DB_INSTANCE_NAME",
    "DB_USER",
    "DB_NAME",
)

IP_TYPES = ("PRIVATE", "PUBLIC", "PSC")

DEFAULT_IP_TYPE = "PRIVATE"
DEFAULT_POOL_SIZE = 1
DEFAULT_POOL_TIMEOUT = 30  # seconds


def build_instance_uri(project: str, region: str, cluster: str, instance: str) -> str:
    """Instance URI understood by the AlloyDB connector. Not escaped."""
    return f"projects/{project}/locations/{region}/clusters/{cluster}/instances/{instance}"


def _required_env(env: Mapping[str, str], name: str) -> str:
    val = env.get(name)
    if not val or not val.strip():
        raise ConfigurationError(name)
    return val.strip()


def _optional_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(name, f"Environment variable {name} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ConfigurationError(name, f"Environment variable {name} must be positive, got {value}")
    return value


def _ip_type(env: Mapping[str, str]) -> str:
    raw = (env.get("DB_IP_TYPE") or "").strip().upper()
    if not raw:
        return DEFAULT_IP_TYPE
    if raw not in IP_TYPES:
        raise ConfigurationError(
            "DB_IP_TYPE",
            f"Environment variable DB_IP_TYPE must be one of {', '.join(IP_TYPES)}, got {raw!r}",
        )
    return raw


@dataclass(frozen=True)
class Settings:
    project_id: str
    region: str
    cluster_name: str
    instance_name: str
    db_user: str
    db_name: str
    ip_type: str = DEFAULT_IP_TYPE
    pool_size: int = DEFAULT_POOL_SIZE
    pool_timeout: int = DEFAULT_POOL_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Load and validate settings from the environment.

        Every required variable is checked before anything else happens, so a
        partial configuration never reaches the connector.
        Raises ConfigurationError naming the first missing or invalid variable.
        """
        env = os.environ if environ is None else environ
        project_id, region, cluster_name, instance_name, db_user, db_name = (
            _required_env(env, name) for name in REQUIRED_VARS
        )
        return cls(
            project_id=project_id,
            region=region,
            cluster_name=cluster_name,
            instance_name=instance_name,
            db_user=db_user,
            db_name=db_name,
            ip_type=_ip_type(env),
            pool_size=_optional_int(env, "DB_POOL_SIZE", DEFAULT_POOL_SIZE),
            pool_timeout=_optional_int(env, "DB_POOL_TIMEOUT", DEFAULT_POOL_TIMEOUT),
        )

    @property
    def instance_uri(self) -> str:
        return build_instance_uri(self.project_id, self.region, self.cluster_name, self.instance_name)
