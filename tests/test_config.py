"""
Тесты загрузчика конфигурации.

Проверяет порядок: defaults → YAML → переменные окружения.
"""

import logging

import pytest

from miner_collector.config import (
    backend_options,
    configure_logging,
    load_config,
    web_client_options,
)
from miner_collector.core.exceptions import ConfigError


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "connection:\n"
        "  timeout: 3\n"
        "  retries: 2\n"
        "collector:\n"
        "  parallel_commands: true\n"
        "logging:\n"
        "  level: DEBUG\n",
        encoding="utf-8",
    )
    return path


class TestLoadConfig:
    """Тесты load_config."""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        """Без файла и окружения — значения по умолчанию."""
        monkeypatch.chdir(tmp_path)
        config = load_config(environ={})

        assert config.connection.timeout == 5.0
        assert config.collector.parallel_commands is False

    def test_yaml_overrides_defaults(self, config_file):
        config = load_config(str(config_file), environ={})

        assert config.connection.timeout == 3.0
        assert config.connection.retries == 2
        assert config.connection.port == 80
        assert config.collector.parallel_commands is True
        assert config.logging.level == "DEBUG"

    def test_env_overrides_yaml(self, config_file):
        environ = {
            "MINER_COLLECTOR_TIMEOUT": "10",
            "MINER_COLLECTOR_LOG_LEVEL": "WARNING",
        }
        config = load_config(str(config_file), environ=environ)

        assert config.connection.timeout == 10.0
        assert config.connection.retries == 2
        assert config.logging.level == "WARNING"

    def test_empty_env_ignored(self, config_file):
        config = load_config(str(config_file), environ={"MINER_COLLECTOR_RETRIES": ""})
        assert config.connection.retries == 2

    def test_found_in_cwd(self, config_file, monkeypatch):
        monkeypatch.chdir(config_file.parent)
        config = load_config(environ={})
        assert config.connection.timeout == 3.0

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "nope.yaml"), environ={})

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("connection: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_config(str(path), environ={})
        assert exc_info.value.config_file == str(path)

    def test_root_not_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(str(path), environ={})

    def test_invalid_env_value(self, config_file):
        with pytest.raises(ConfigError) as exc_info:
            load_config(str(config_file), environ={"MINER_COLLECTOR_RETRIES": "many"})
        assert exc_info.value.key == "connection.retries"


class TestHelpers:
    """Тесты преобразования конфигурации в аргументы."""

    def test_web_client_options(self, config_file):
        options = web_client_options(load_config(str(config_file), environ={}))
        assert options == {"port": 80, "timeout": 3.0, "retries": 2, "retry_delay": 0.5}

    def test_backend_options(self, config_file):
        options = backend_options(load_config(str(config_file), environ={}))
        assert options == {"parallel": True, "max_workers": 4}

    def test_configure_logging(self, config_file):
        root = logging.getLogger()
        handlers = root.handlers[:]
        level = root.level
        try:
            configure_logging(load_config(str(config_file), environ={}))
            assert root.level == logging.DEBUG
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
            for handler in handlers:
                root.addHandler(handler)
            root.setLevel(level)
