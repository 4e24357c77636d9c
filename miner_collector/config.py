"""
Загрузчик конфигурации.

Порядок применения (каждый следующий перекрывает предыдущий):
1. Значения по умолчанию (AppConfig)
2. YAML файл (config.yaml / config.yml / .miner_collector.yaml)
3. Переменные окружения MINER_COLLECTOR_*

Результат валидируется pydantic-схемой (core/config_schema.py).

Пример:
    config = load_config("config.yaml")
    configure_logging(config)

    client = WebAPIClient(ip, **web_client_options(config))
    backend = create_backend("BitAxe", ip, api_client=client, **backend_options(config))
"""

import os
from typing import Any, Dict, Optional

import yaml

from .core.config_schema import AppConfig, validate_config
from .core.exceptions import ConfigError
from .core.logging import LogConfig, get_logger, setup_logging_from_config

logger = get_logger(__name__)

SEARCH_PATHS = (
    "config.yaml",
    "config.yml",
    ".miner_collector.yaml",
)

# Переменная окружения → путь в конфигурации
ENV_OVERRIDES = {
    "MINER_COLLECTOR_TIMEOUT": ("connection", "timeout"),
    "MINER_COLLECTOR_RETRIES": ("connection", "retries"),
    "MINER_COLLECTOR_LOG_LEVEL": ("logging", "level"),
}


def _merge_dict(base: dict, override: dict) -> None:
    """Рекурсивно мержит словари."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_dict(base[key], value)
        else:
            base[key] = value


def _find_config_file() -> Optional[str]:
    for path in SEARCH_PATHS:
        if os.path.exists(path):
            return path
    return None


def _read_yaml(config_file: str) -> Dict[str, Any]:
    """
    Читает YAML файл конфигурации.

    Raises:
        ConfigError: Файл не читается или содержит не словарь
    """
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Не удалось прочитать файл: {e}", config_file=config_file) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Ошибка разбора YAML: {e}", config_file=config_file) from e

    if not isinstance(data, dict):
        raise ConfigError(
            "Корень конфигурации должен быть словарём",
            config_file=config_file,
        )
    return data


def _apply_env(data: Dict[str, Any], environ: Dict[str, str]) -> None:
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None or value == "":
            continue
        data.setdefault(section, {})[key] = value
        logger.debug(f"Переопределено из окружения: {env_name}")


def load_config(
    config_file: Optional[str] = None,
    environ: Optional[Dict[str, str]] = None,
) -> AppConfig:
    """
    Загружает и валидирует конфигурацию.

    Args:
        config_file: Путь к YAML. Если None — ищется в SEARCH_PATHS,
            при отсутствии файла используются значения по умолчанию
        environ: Переменные окружения (по умолчанию os.environ)

    Returns:
        AppConfig

    Raises:
        ConfigError: Файл не найден, не разобран или не прошёл валидацию
    """
    data = AppConfig().model_dump()

    if config_file is not None and not os.path.exists(config_file):
        raise ConfigError("Файл конфигурации не найден", config_file=config_file)

    path = config_file or _find_config_file()
    if path:
        _merge_dict(data, _read_yaml(path))
        logger.debug(f"Конфигурация загружена из {path}")

    _apply_env(data, dict(os.environ) if environ is None else environ)
    return validate_config(data, config_file=path)


def configure_logging(config: AppConfig) -> None:
    """Настраивает логирование по секции logging."""
    setup_logging_from_config(LogConfig.from_dict(config.logging.model_dump()))


def web_client_options(config: AppConfig) -> Dict[str, Any]:
    """Аргументы WebAPIClient из секции connection."""
    return config.connection.model_dump()


def backend_options(config: AppConfig) -> Dict[str, Any]:
    """Аргументы конструктора backend из секции collector."""
    return {
        "parallel": config.collector.parallel_commands,
        "max_workers": config.collector.max_workers,
    }
