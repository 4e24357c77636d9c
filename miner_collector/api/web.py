"""
HTTP JSON API клиент (AxeOS / ESP-Miner и аналогичные прошивки).

Только чтение: GET http://{ip}:{port}/api/{command}.

Ошибки requests переводятся в типизированные исключения:
- requests.Timeout → TimeoutError
- requests.ConnectionError → ConnectionError
- статус не 2xx → APIError
- невалидный JSON → ParseError

Retry выполняется только для retryable ошибок (см. is_retryable).

Пример использования:
    client = WebAPIClient("10.0.0.5", timeout=5, retries=2)
    info = client.send_command("system/info")
"""

import time
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_WEB_PORT, DEFAULT_TIMEOUT, DEFAULT_RETRIES
from ..core.exceptions import (
    APIError,
    CollectorError,
    ConnectionError as CollectorConnectionError,
    ParseError,
    TimeoutError as CollectorTimeoutError,
    format_error_for_log,
    is_retryable,
)
from ..core.logging import get_logger

logger = get_logger(__name__)


class WebAPIClient:
    """
    Клиент REST API устройства.

    Потокобезопасен для GET-запросов: requests.Session можно
    использовать из нескольких потоков DataCollector.

    Attributes:
        ip: Адрес устройства
        port: HTTP порт
        timeout: Таймаут одного запроса (секунды)
        retries: Количество повторов после первой попытки
        retry_delay: Пауза между попытками (секунды)
    """

    def __init__(
        self,
        ip: str,
        port: int = DEFAULT_WEB_PORT,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
        retry_delay: float = 0.5,
        session: Optional[requests.Session] = None,
    ):
        self.ip = ip
        self.port = port
        self.timeout = timeout
        self.retries = retries
        self.retry_delay = retry_delay

        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def _url(self, command: str) -> str:
        """Формирует URL для команды."""
        return f"http://{self.ip}:{self.port}/api/{command.lstrip('/')}"

    def send_command(self, command: str) -> Any:
        """
        Выполняет GET запрос с retry.

        Args:
            command: Путь API без префикса /api/ (например "system/info")

        Returns:
            Декодированный JSON

        Raises:
            CollectorError: После исчерпания попыток или при не-retryable ошибке
        """
        last_error: Optional[CollectorError] = None

        for attempt in range(self.retries + 1):
            try:
                return self._request(command)
            except CollectorError as e:
                last_error = e
                if not is_retryable(e) or attempt == self.retries:
                    break
                logger.debug(
                    f"Попытка {attempt + 1} не удалась, повтор",
                    device=self.ip,
                    command=command,
                )
                if self.retry_delay:
                    time.sleep(self.retry_delay)

        logger.debug(
            f"Команда не выполнена: {format_error_for_log(last_error)}",
            device=self.ip,
            command=command,
        )
        raise last_error

    def _request(self, command: str) -> Any:
        """Один HTTP запрос без retry."""
        url = self._url(command)

        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.Timeout as e:
            raise CollectorTimeoutError(
                f"Таймаут запроса: {e}",
                device=self.ip,
                timeout_seconds=self.timeout,
            ) from e
        except requests.ConnectionError as e:
            raise CollectorConnectionError(
                f"Ошибка подключения: {e}",
                device=self.ip,
                port=self.port,
            ) from e
        except requests.RequestException as e:
            raise CollectorConnectionError(
                f"Ошибка запроса: {e}",
                device=self.ip,
                port=self.port,
            ) from e

        if not response.ok:
            raise APIError(
                f"HTTP {response.status_code}",
                device=self.ip,
                command=command,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ParseError(
                f"Невалидный JSON: {e}",
                device=self.ip,
                command=command,
            ) from e
