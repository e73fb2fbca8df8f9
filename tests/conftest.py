from datetime import datetime, timezone

import pytest

from alloydb_check.config import REQUIRED_VARS, Settings

SERVER_TIME = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def env():
    return {
        "PROJECT_ID": "proj1",
        "DB_REGION": "us-central1",
        "DB_CLUSTER_NAME": "mycluster",
        "DB_INSTANCE_NAME": "myinstance",
        "DB_USER": "check-sa@proj1.iam",
        "DB_NAME": "postgres",
    }


@pytest.fixture
def settings(env):
    return Settings.from_env(env)


@pytest.fixture
def clean_environ(monkeypatch):
    for name in REQUIRED_VARS + ("DB_IP_TYPE", "DB_POOL_SIZE", "DB_POOL_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def mock_connector(mocker):
    connector_cls = mocker.patch("alloydb_check.db.Connector")
    return connector_cls.return_value


@pytest.fixture
def mock_engine(mocker):
    engine = mocker.MagicMock()
    conn = engine.connect.return_value.__enter__.return_value
    conn.execute.return_value.scalar_one.return_value = SERVER_TIME
    return engine


@pytest.fixture
def mock_create_engine(mocker, mock_engine):
    return mocker.patch("alloydb_check.db.create_engine", return_value=mock_engine)
