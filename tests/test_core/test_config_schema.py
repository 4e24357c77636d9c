"""
Тесты pydantic схемы конфигурации.
"""

import pytest

from miner_collector.core.config_schema import (
    AppConfig,
    get_default_config,
    validate_config,
)
from miner_collector.core.exceptions import ConfigError


class TestValidateConfig:
    """Тесты validate_config."""

    def test_empty_dict_gives_defaults(self):
        config = validate_config({})

        assert config == get_default_config()
        assert config.connection.port == 80
        assert config.connection.timeout == 5.0
        assert config.collector.parallel_commands is False
        assert config.logging.level == "INFO"

    def test_partial_section(self):
        config = validate_config({"collector": {"parallel_commands": True, "fleet_workers": 50}})

        assert config.collector.parallel_commands is True
        assert config.collector.fleet_workers == 50
        assert config.collector.max_workers == 4

    def test_string_numbers_coerced(self):
        """Значения из окружения приходят строками."""
        config = validate_config({"connection": {"timeout": "2.5", "retries": "3"}})

        assert config.connection.timeout == 2.5
        assert config.connection.retries == 3

    @pytest.mark.parametrize("config_dict, key", [
        ({"connection": {"timeout": 0}}, "connection.timeout"),
        ({"connection": {"port": 70000}}, "connection.port"),
        ({"logging": {"level": "VERBOSE"}}, "logging.level"),
        ({"collector": {"max_workers": 0}}, "collector.max_workers"),
    ])
    def test_invalid_values(self, config_dict, key):
        with pytest.raises(ConfigError) as exc_info:
            validate_config(config_dict, config_file="config.yaml")

        assert exc_info.value.key == key
        assert exc_info.value.config_file == "config.yaml"
        assert key in exc_info.value.message

    def test_model_defaults(self):
        assert isinstance(AppConfig().output.indent, int)
