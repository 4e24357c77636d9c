"""
DataCollector — сбор сырых значений полей с одного устройства.

Алгоритм collect(fields):
1. Объединяет команды из всех DataLocation запрошенных полей
   (минимальный набор команд, считается один раз).
2. Выполняет каждую команду ровно один раз. Успешный ответ кладётся
   в кэш по имени команды, ошибка только логируется.
3. Когда все команды отработали, для каждого поля перебирает
   DataLocation в объявленном backend порядке и берёт первое
   найденное значение. Поле без значения в результат не попадает.

Кэш создаётся заново на каждый вызов collect(), поэтому два вызова
подряд против одинаковых ответов дают одинаковый результат.

Пример использования:
    collector = DataCollector(backend, client, parallel=True)
    raw = collector.collect([DataField.HASHRATE, DataField.WATTAGE])
    raw[DataField.HASHRATE]  # 512.4
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

from ..api.base import ApiClient
from ..core.exceptions import format_error_for_log
from ..core.logging import get_logger
from ..core.models import ALL_FIELDS, DataField
from .locations import DataLocation, extract

logger = get_logger(__name__)


class LocationProvider(Protocol):
    """Часть контракта backend, нужная коллектору."""

    def get_locations(self, field: DataField) -> Sequence[DataLocation]:
        """Упорядоченные места расположения поля."""


class DataCollector:
    """
    Коллектор сырых данных одного устройства.

    Attributes:
        backend: Источник таблиц DataLocation
        api_client: Клиент для выполнения команд
        parallel: Выполнять команды параллельно
        max_workers: Максимум параллельных команд
        device: Имя/IP устройства для логов
    """

    def __init__(
        self,
        backend: LocationProvider,
        api_client: ApiClient,
        parallel: bool = False,
        max_workers: int = 4,
        device: str = "",
    ):
        self.backend = backend
        self.api_client = api_client
        self.parallel = parallel
        self.max_workers = max_workers
        self.device = device

    def collect_all(self) -> Dict[DataField, Any]:
        """Собирает все поля DataField."""
        return self.collect(ALL_FIELDS)

    def collect(self, fields: Iterable[DataField]) -> Dict[DataField, Any]:
        """
        Собирает только указанные поля.

        Никогда не выбрасывает исключения из-за ошибок устройства.

        Args:
            fields: Запрошенные поля

        Returns:
            Dict[DataField, Any]: Сырые значения найденных полей
        """
        fields = list(dict.fromkeys(fields))
        commands = self.get_required_commands(fields)

        if self.parallel and len(commands) > 1:
            cache = self._execute_parallel(commands)
        else:
            cache = self._execute_sequential(commands)

        # Извлечение начинается только после выполнения всех команд
        results: Dict[DataField, Any] = {}
        for field in fields:
            value = self.extract_field(field, cache)
            if value is not None:
                results[field] = value

        logger.debug(
            f"Собрано полей: {len(results)} из {len(fields)}, "
            f"команд: {len(cache)}/{len(commands)}",
            device=self.device,
        )
        return results

    def get_required_commands(self, fields: Iterable[DataField]) -> List[str]:
        """
        Минимальный набор команд для полей.

        Порядок — порядок первого упоминания, без дублей.

        Args:
            fields: Запрошенные поля

        Returns:
            List[str]: Уникальные команды
        """
        commands: Dict[str, None] = {}
        for field in fields:
            for location in self.backend.get_locations(field):
                commands.setdefault(location.command, None)
        return list(commands)

    def extract_field(
        self,
        field: DataField,
        cache: Dict[str, Any],
    ) -> Optional[Any]:
        """
        Извлекает значение поля из закэшированных ответов.

        Args:
            field: Поле
            cache: Ответы команд текущего вызова collect()

        Returns:
            Первое найденное значение или None
        """
        for location in self.backend.get_locations(field):
            if location.command not in cache:
                continue
            value = extract(cache[location.command], location.extractor)
            if value is not None:
                return value
        return None

    def _run_command(self, command: str) -> Optional[Any]:
        """
        Выполняет одну команду.

        Любая ошибка клиента означает "команда не дала данных".
        """
        try:
            return self.api_client.send_command(command)
        except Exception as e:
            logger.warning(
                f"Команда не выполнена: {format_error_for_log(e)}",
                device=self.device,
                command=command,
            )
            return None

    def _execute_sequential(self, commands: List[str]) -> Dict[str, Any]:
        """Последовательное выполнение команд."""
        cache: Dict[str, Any] = {}
        for command in commands:
            response = self._run_command(command)
            if response is not None:
                cache[command] = response
        return cache

    def _execute_parallel(self, commands: List[str]) -> Dict[str, Any]:
        """
        Параллельное выполнение команд.

        Каждая команда пишет в свой ключ; выход из with
        дожидается завершения всех потоков.
        """
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            responses = list(executor.map(self._run_command, commands))

        return {
            command: response
            for command, response in zip(commands, responses)
            if response is not None
        }
