"""
Pydantic схемы для валидации config.yaml.

Ошибки валидации выбрасывают ConfigError.

Пример использования:
    from miner_collector.core.config_schema import validate_config

    config_dict = yaml.safe_load(open("config.yaml"))
    validated = validate_config(config_dict)  # raises ConfigError on failure
"""

from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .constants import DEFAULT_RETRIES, DEFAULT_TIMEOUT, DEFAULT_WEB_PORT
from .exceptions import ConfigError


class ConnectionConfig(BaseModel):
    """Настройки HTTP API устройств."""
    port: int = Field(default=DEFAULT_WEB_PORT, ge=1, le=65535)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, le=300)
    retries: int = Field(default=DEFAULT_RETRIES, ge=0, le=10)
    retry_delay: float = Field(default=0.5, ge=0, le=60)


class CollectorConfig(BaseModel):
    """Настройки сбора."""
    parallel_commands: bool = False
    max_workers: int = Field(default=4, ge=1, le=32)
    fleet_workers: int = Field(default=10, ge=1, le=256)


class OutputConfig(BaseModel):
    """Настройки вывода."""
    output_folder: str = "reports"
    indent: Optional[int] = Field(default=2, ge=0, le=8)
    include_metadata: bool = True


class LoggingConfig(BaseModel):
    """Настройки логирования."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    json_format: bool = False
    console: bool = True
    file_path: Optional[str] = None
    rotation: str = Field(default="size", pattern="^(size|time|none)$")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)  # min 1KB
    backup_count: int = Field(default=5, ge=1, le=100)
    when: str = "midnight"
    interval: int = Field(default=1, ge=1)


class AppConfig(BaseModel):
    """Полная конфигурация приложения."""
    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    collector: CollectorConfig = Field(default_factory=CollectorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def validate_config(config_dict: dict, config_file: Optional[str] = None) -> AppConfig:
    """
    Валидирует словарь конфигурации.

    Args:
        config_dict: Словарь из YAML
        config_file: Путь к файлу (для сообщения об ошибке)

    Returns:
        AppConfig: Валидированная конфигурация

    Raises:
        ConfigError: При ошибке валидации
    """
    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        key = None
        error_msg = str(e)
        errors = e.errors()
        if errors:
            first_error = errors[0]
            key = ".".join(str(x) for x in first_error.get("loc", []))
            msg = first_error.get("msg", "Unknown error")
            error_msg = f"{key}: {msg}"

        raise ConfigError(
            message=f"Ошибка валидации конфигурации: {error_msg}",
            config_file=config_file,
            key=key,
        ) from e


def get_default_config() -> AppConfig:
    """Возвращает конфигурацию по умолчанию."""
    return AppConfig()
