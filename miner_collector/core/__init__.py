"""
Core модули Miner Collector.

- models: DataField, MinerData и вложенные записи
- units: величины с единицами (HashRate, Power, Temperature, ...)
- normalize: сырые значения → типизированные
- exceptions: иерархия ошибок
- logging: структурированное логирование
- config_schema: pydantic схема конфигурации
"""

from .logging import (
    get_logger,
    setup_logging,
    setup_logging_from_config,
    StructuredLogger,
    JSONFormatter,
    HumanFormatter,
    OperationLog,
    LogConfig,
    RotationType,
)
from .exceptions import (
    MinerCollectorError,
    CollectorError,
    ConnectionError,
    TimeoutError,
    APIError,
    ParseError,
    BackendError,
    ConfigError,
    format_error_for_log,
    is_retryable,
)
from .models import (
    DataField,
    ALL_FIELDS,
    MessageSeverity,
    DeviceInfo,
    ChipData,
    BoardData,
    FanData,
    MinerMessage,
    PoolData,
    MinerData,
)
from .units import (
    HashRateUnit,
    HashRate,
    Power,
    Temperature,
    Frequency,
    Voltage,
    AngularVelocity,
    efficiency,
)
from .constants import SCHEMA_VERSION, normalize_mac, normalize_mac_raw

__all__ = [
    # Structured Logging
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
    "StructuredLogger",
    "JSONFormatter",
    "HumanFormatter",
    "OperationLog",
    "LogConfig",
    "RotationType",
    # Exceptions
    "MinerCollectorError",
    "CollectorError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "ParseError",
    "BackendError",
    "ConfigError",
    "format_error_for_log",
    "is_retryable",
    # Data Models
    "DataField",
    "ALL_FIELDS",
    "MessageSeverity",
    "DeviceInfo",
    "ChipData",
    "BoardData",
    "FanData",
    "MinerMessage",
    "PoolData",
    "MinerData",
    # Units
    "HashRateUnit",
    "HashRate",
    "Power",
    "Temperature",
    "Frequency",
    "Voltage",
    "AngularVelocity",
    "efficiency",
    # Constants
    "SCHEMA_VERSION",
    "normalize_mac",
    "normalize_mac_raw",
]
