"""
Контракт API-клиента устройства.

Клиент выполняет одну именованную команду на одном устройстве и
возвращает декодированный ответ, либо выбрасывает CollectorError
(ConnectionError, TimeoutError, APIError, ParseError).

Таймауты, retry, транспорт и авторизация — ответственность клиента.
Если DataCollector работает с parallel=True, send_command вызывается
из нескольких потоков одновременно.
"""

from typing import Any, Protocol


class ApiClient(Protocol):
    """
    Минимальный интерфейс API-клиента.

    Реализации: WebAPIClient (HTTP JSON), внешние клиенты для
    бинарных/socket протоколов, MagicMock в тестах.
    """

    def send_command(self, command: str) -> Any:
        """Выполняет команду и возвращает декодированный ответ."""
