# alloydb_check/db.py
"""
AlloyDB connection handling.

The AlloyDB Python Connector opens the mTLS tunnel and injects the IAM token;
SQLAlchemy only pools the pg8000 connections the connector hands back.
Use:
    with open_pool(settings) as engine:
        now = fetch_server_time(engine)
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Tuple

from google.cloud.alloydbconnector import Connector
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import ArgumentError

from .config import DEFAULT_IP_TYPE, DEFAULT_POOL_SIZE, DEFAULT_POOL_TIMEOUT, Settings
from .errors import (
    ConfigParseError,
    ConnectSetupError,
    DialerInitError,
    PoolConstructionError,
    QueryError,
)

logger = logging.getLogger(__name__)

DRIVER = "pg8000"
SERVER_TIME_QUERY = "SELECT NOW()"


def build_url(user: str, db_name: str) -> URL:
    """
    Outer connection URL: user and database only.

    No host, password or TLS options. Encryption and authentication happen
    inside the connector's tunnel, so pg8000 talks plaintext over it.
    """
    try:
        return URL.create(f"postgresql+{DRIVER}", username=user, database=db_name)
    except (ArgumentError, TypeError) as e:
        raise ConfigParseError(f"failed to build connection URL: {e}") from e


def connect_pool(
    instance_uri: str,
    user: str,
    db_name: str,
    *,
    enable_iam_auth: bool = True,
    ip_type: str = DEFAULT_IP_TYPE,
    pool_size: int = DEFAULT_POOL_SIZE,
    pool_timeout: int = DEFAULT_POOL_TIMEOUT,
) -> Tuple[Engine, Callable[[], None]]:
    """
    Build a SQLAlchemy engine whose every physical connection is dialed
    through the AlloyDB connector to `instance_uri`.

    Returns (engine, cleanup). `cleanup` closes the connector and must be
    called exactly once after the engine is disposed.

    Raises DialerInitError if the connector cannot be created. Failures after
    that raise a ConnectSetupError subclass whose `cleanup` attribute holds
    the connector's close function.
    """
    try:
        connector = Connector(enable_iam_auth=enable_iam_auth, ip_type=ip_type)
    except Exception as e:
        raise DialerInitError(f"failed to init Connector: {e}") from e

    cleanup = connector.close

    try:
        url = build_url(user, db_name)
    except ConfigParseError as e:
        e.cleanup = cleanup
        raise

    def getconn() -> Any:
        return connector.connect(instance_uri, DRIVER, user=user, db=db_name)

    try:
        engine = create_engine(
            url,
            creator=getconn,
            pool_size=pool_size,
            max_overflow=0,
            pool_timeout=pool_timeout,
            pool_pre_ping=True,
        )
    except Exception as e:
        raise PoolConstructionError(f"failed to create pool: {e}", cleanup) from e

    # Open one connection now so auth and network failures surface here.
    try:
        with engine.connect():
            pass
    except Exception as e:
        engine.dispose()
        raise PoolConstructionError(f"failed to connect: {e}", cleanup) from e

    return engine, cleanup


@contextmanager
def open_pool(settings: Settings) -> Iterator[Engine]:
    """Scoped pool: the engine is disposed and the connector closed on every exit path."""
    logger.info("Connecting to %s as %s (ip_type=%s)", settings.instance_uri, settings.db_user, settings.ip_type)
    try:
        engine, cleanup = connect_pool(
            settings.instance_uri,
            settings.db_user,
            settings.db_name,
            enable_iam_auth=True,
            ip_type=settings.ip_type,
            pool_size=settings.pool_size,
            pool_timeout=settings.pool_timeout,
        )
    except ConnectSetupError as e:
        if e.cleanup is not None:
            e.cleanup()
        raise

    try:
        yield engine
    finally:
        try:
            engine.dispose()
        finally:
            cleanup()
            logger.debug("Connector closed")


def fetch_server_time(engine: Engine) -> Any:
    try:
        with engine.connect() as conn:
            return conn.execute(text(SERVER_TIME_QUERY)).scalar_one()
    except Exception as e:
        raise QueryError(f"failed to execute query: {e}") from e
