"""Unit tests for Environment and environment-driven connection config."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from row_record.core.connection import ConnectionConfig, _load_adapter
from row_record.core.environment import Environment
from row_record.core.exceptions import AdapterError


@pytest.fixture(autouse=True)
def fresh_environment() -> Iterator[None]:
    Environment.reset()
    yield
    Environment.reset()


class TestEnvironment:
    def test_explicit_values(self) -> None:
        env = Environment(values={"DEFAULT_NAMESPACE": "shop"})
        assert env.find_var("DEFAULT_NAMESPACE") == "shop"
        assert "DEFAULT_NAMESPACE" in env

    def test_default_for_missing_name(self) -> None:
        env = Environment(values={})
        assert env.find_var("MISSING") is None
        assert env.find_var("MISSING", "fallback") == "fallback"
        assert "MISSING" not in env

    def test_reads_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ROW_RECORD_TEST_VAR", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("ROW_RECORD_TEST_VAR=from-file\n")

        env = Environment(env_file=env_file)

        assert env.find_var("ROW_RECORD_TEST_VAR") == "from-file"

    def test_process_environment_wins(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("ROW_RECORD_TEST_VAR=from-file\n")
        monkeypatch.setenv("ROW_RECORD_TEST_VAR", "from-process")

        env = Environment(env_file=env_file)

        assert env.find_var("ROW_RECORD_TEST_VAR") == "from-process"

    def test_discovers_env_file_from_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("ROW_RECORD_TEST_VAR", raising=False)
        (tmp_path / ".env").write_text("ROW_RECORD_TEST_VAR=discovered\n")
        monkeypatch.chdir(tmp_path)

        assert Environment().find_var("ROW_RECORD_TEST_VAR") == "discovered"

    def test_shared_instance(self) -> None:
        assert Environment.get() is Environment.get()

    def test_reset_reloads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROW_RECORD_TEST_VAR", "one")
        first = Environment.get()
        monkeypatch.setenv("ROW_RECORD_TEST_VAR", "two")
        assert first.find_var("ROW_RECORD_TEST_VAR") == "one"

        Environment.reset()

        assert Environment.get().find_var("ROW_RECORD_TEST_VAR") == "two"


class TestConnectionConfig:
    def test_from_environment(self) -> None:
        env = Environment(
            values={
                "DB_DRIVER": "mysql",
                "DB_HOST": "db.local",
                "DB_PORT": "3306",
                "DB_USER": "app",
                "DB_PASSWORD": "secret",
                "DB_NAME": "shop",
            }
        )

        config = ConnectionConfig.from_environment(env)

        assert config.driver == "mysql"
        assert config.host == "db.local"
        assert config.port == 3306
        assert config.user == "app"
        assert config.password == "secret"
        assert config.database == "shop"

    def test_from_environment_defaults(self) -> None:
        config = ConnectionConfig.from_environment(Environment(values={}))
        assert config.driver == "sqlite"
        assert config.database == ":memory:"
        assert config.port is None

    def test_unknown_driver(self) -> None:
        with pytest.raises(AdapterError, match="Unsupported"):
            _load_adapter("oracle")

    def test_driver_name_is_case_insensitive(self) -> None:
        assert type(_load_adapter("SQLite")).__name__ == "SqliteAdapter"
