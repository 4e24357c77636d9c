"""
Типизированные исключения для Miner Collector.

Иерархия:
    MinerCollectorError (базовый)
    ├── CollectorError (опрос устройства)
    │   ├── ConnectionError (подключение к API)
    │   ├── TimeoutError (таймаут)
    │   ├── APIError (неуспешный ответ API)
    │   └── ParseError (ответ не декодируется)
    ├── BackendError (нет backend для устройства)
    └── ConfigError (конфигурация)

Внутри DataCollector все ошибки CollectorError означают одно:
команда не дала данных. Наружу из collect()/get_data() они не выходят.

Пример использования:
    from miner_collector.core.exceptions import APIError, ParseError

    try:
        response = client.send_command("system/info")
    except APIError as e:
        logger.error(f"HTTP {e.status_code}: {e.command}")
    except ParseError as e:
        logger.error(f"Невалидный JSON: {e.command} - {e.message}")
"""

from typing import Optional


class MinerCollectorError(Exception):
    """
    Базовое исключение для всех ошибок Miner Collector.

    Attributes:
        message: Описание ошибки
        details: Дополнительные детали (dict)
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict:
        """Сериализация для логов/отчётов."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# === Collector Errors ===

class CollectorError(MinerCollectorError):
    """
    Ошибка при опросе устройства.

    Attributes:
        device: IP или hostname устройства
    """

    def __init__(
        self,
        message: str,
        device: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.device = device
        details = details or {}
        if device:
            details["device"] = device
        super().__init__(message, details)


class ConnectionError(CollectorError):
    """
    Устройство недоступно (connection refused, DNS, сброс соединения).

    Пример:
        raise ConnectionError("Connection refused", device="10.0.0.5", port=80)
    """

    def __init__(
        self,
        message: str,
        device: Optional[str] = None,
        port: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        self.port = port
        details = details or {}
        if port:
            details["port"] = port
        super().__init__(message, device, details)


class TimeoutError(CollectorError):
    """
    Таймаут запроса к API устройства.

    Attributes:
        timeout_seconds: Значение таймаута
    """

    def __init__(
        self,
        message: str,
        device: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        details: Optional[dict] = None,
    ):
        self.timeout_seconds = timeout_seconds
        details = details or {}
        if timeout_seconds:
            details["timeout_seconds"] = timeout_seconds
        super().__init__(message, device, details)


class APIError(CollectorError):
    """
    API ответило неуспешным статусом.

    Attributes:
        command: Команда (endpoint) которая вызвала ошибку
        status_code: HTTP код или код статуса API

    Пример:
        raise APIError("Not found", device="10.0.0.5", command="system/asic", status_code=404)
    """

    def __init__(
        self,
        message: str,
        device: Optional[str] = None,
        command: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        self.command = command
        self.status_code = status_code
        details = details or {}
        if command:
            details["command"] = command
        if status_code:
            details["status_code"] = status_code
        super().__init__(message, device, details)


class ParseError(CollectorError):
    """
    Ответ устройства не удалось декодировать.

    Attributes:
        command: Команда чей ответ не распарсился
    """

    def __init__(
        self,
        message: str,
        device: Optional[str] = None,
        command: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.command = command
        details = details or {}
        if command:
            details["command"] = command
        super().__init__(message, device, details)


# === Backend Errors ===

class BackendError(MinerCollectorError):
    """
    Нет backend для указанного производителя.

    Attributes:
        make: Производитель/семейство прошивки
    """

    def __init__(
        self,
        message: str,
        make: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.make = make
        details = details or {}
        if make:
            details["make"] = make
        super().__init__(message, details)


# === Config Errors ===

class ConfigError(MinerCollectorError):
    """
    Ошибка конфигурации.

    Attributes:
        config_file: Путь к файлу конфигурации
        key: Ключ конфигурации с ошибкой

    Пример:
        raise ConfigError("Invalid value", config_file="config.yaml", key="connection.timeout")
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.config_file = config_file
        self.key = key
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        if key:
            details["key"] = key
        super().__init__(message, details)


# === Utility Functions ===

def format_error_for_log(error: Exception) -> str:
    """
    Форматирует ошибку для вывода в лог.

    Args:
        error: Исключение

    Returns:
        str: Отформатированная строка ошибки
    """
    if isinstance(error, MinerCollectorError):
        return str(error)
    return f"{error.__class__.__name__}: {error}"


def is_retryable(error: Exception) -> bool:
    """
    Проверяет, можно ли повторить запрос после ошибки.

    Неуспешный статус и невалидный JSON не повторяем:
    устройство ответит так же.

    Args:
        error: Исключение

    Returns:
        bool: True если можно retry
    """
    return isinstance(error, (ConnectionError, TimeoutError))
