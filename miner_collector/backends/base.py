"""
Базовый класс backend устройства.

Backend — адаптер одного семейства устройств/прошивок. Он объявляет:
- таблицу DataLocation для каждого поля (get_locations)
- нормализацию сырых значений в MinerData (get_data)

Общая часть нормализации (скалярные поля, единицы, efficiency) живёт
здесь. Наследник переопределяет только то, что у его прошивки
устроено иначе: платы, вентиляторы, пулы, сообщения, is_mining.

Пример создания backend:
    class MyMiner(MinerBackend):
        make = "MyMake"
        hashrate_unit = HashRateUnit.GIGA

        def get_locations(self, field):
            return LOCATIONS.get(field, ())
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..api.base import ApiClient
from ..collectors.collector import DataCollector
from ..collectors.locations import DataLocation
from ..core.exceptions import format_error_for_log
from ..core.logging import OperationLog, get_logger
from ..core.models import (
    BoardData,
    DataField,
    DeviceInfo,
    FanData,
    MinerData,
    MinerMessage,
    PoolData,
)
from ..core.normalize import (
    as_bool,
    as_hashrate,
    as_int,
    as_mac,
    as_power,
    as_str,
    as_temperature,
    as_uptime,
)
from ..core.units import HashRateUnit, efficiency, to_float

logger = get_logger(__name__)


class MinerBackend(ABC):
    """
    Абстрактный backend устройства.

    Attributes:
        ip: Адрес устройства
        device_info: Производитель, модель, прошивка, алгоритм
        api_client: Клиент для выполнения команд
        parallel: Выполнять команды параллельно
        max_workers: Максимум параллельных команд
    """

    # Производитель (ключ в реестре BACKENDS)
    make: str = ""

    # В каких единицах прошивка отдаёт хешрейт
    hashrate_unit: HashRateUnit = HashRateUnit.TERA

    # Вычисляемые поля и поля, из которых они считаются
    derived_inputs: Dict[DataField, Tuple[DataField, ...]] = {
        DataField.EFFICIENCY: (DataField.WATTAGE, DataField.HASHRATE),
        DataField.IS_MINING: (DataField.HASHRATE,),
    }

    def __init__(
        self,
        ip: str,
        model: str,
        api_client: ApiClient,
        firmware: str = "Stock",
        algo: str = "SHA256",
        parallel: bool = False,
        max_workers: int = 4,
    ):
        self.ip = ip
        self.device_info = DeviceInfo(
            make=self.make,
            model=model,
            firmware=firmware,
            algo=algo,
        )
        self.api_client = api_client
        self.parallel = parallel
        self.max_workers = max_workers
        self._logger = logger.bind(device=ip, backend=self.make)

    @abstractmethod
    def get_locations(self, field: DataField) -> Sequence[DataLocation]:
        """
        Места расположения поля в порядке приоритета.

        Чистая тотальная функция: для неподдерживаемого поля — пустой tuple.
        """

    def get_data(self, fields: Optional[Iterable[DataField]] = None) -> MinerData:
        """
        Опрашивает устройство и строит снапшот.

        Не выбрасывает исключения: при полной недоступности устройства
        возвращает снапшот только с intrinsic полями.

        Args:
            fields: Поля для сбора (None — все)

        Returns:
            MinerData
        """
        op = OperationLog(operation="get_data", device=self.ip).start()
        collector = DataCollector(
            self,
            self.api_client,
            parallel=self.parallel,
            max_workers=self.max_workers,
            device=self.ip,
        )

        try:
            if fields is None:
                raw = collector.collect_all()
            else:
                raw = collector.collect(self._with_inputs(fields))
            data = self._normalize(raw)
        except Exception as e:
            op.failure(format_error_for_log(e)).log(self._logger)
            return self._empty_data()

        op.success(fields=len(raw)).log(self._logger)
        return data

    def _with_inputs(self, fields: Iterable[DataField]) -> List[DataField]:
        """Добавляет к запрошенным полям входы вычисляемых полей."""
        expanded: List[DataField] = []
        for field in fields:
            for item in (field, *self.derived_inputs.get(field, ())):
                if item not in expanded:
                    expanded.append(item)
        return expanded

    def _empty_data(self) -> MinerData:
        """Снапшот только с intrinsic полями."""
        return MinerData(
            ip=self.ip,
            device_info=self.device_info,
            timestamp=int(time.time()),
        )

    def _normalize(self, raw: Dict[DataField, Any]) -> MinerData:
        """
        Преобразует сырые значения в MinerData.

        Ошибка преобразования одного поля оставляет пустым только
        это поле, остальные заполняются.

        Args:
            raw: Результат DataCollector.collect()

        Returns:
            MinerData
        """
        data = self._empty_data()
        unit = self.hashrate_unit
        algo = self.device_info.algo

        data.mac = self._convert(raw, DataField.MAC, as_mac)
        data.serial_number = self._convert(raw, DataField.SERIAL_NUMBER, as_str)
        data.hostname = self._convert(raw, DataField.HOSTNAME, as_str)
        data.api_version = self._convert(raw, DataField.API_VERSION, as_str)
        data.firmware_version = self._convert(raw, DataField.FIRMWARE_VERSION, as_str)
        data.control_board_version = self._convert(raw, DataField.CONTROL_BOARD_VERSION, as_str)
        data.expected_hashboards = self._convert(raw, DataField.EXPECTED_HASHBOARDS, as_int)
        data.expected_chips = self._convert(raw, DataField.EXPECTED_CHIPS, as_int)
        data.total_chips = self._convert(raw, DataField.TOTAL_CHIPS, as_int)
        data.expected_fans = self._convert(raw, DataField.EXPECTED_FANS, as_int)
        data.hashrate = self._convert(raw, DataField.HASHRATE, as_hashrate, unit, algo)
        data.average_temperature = self._convert(raw, DataField.AVERAGE_TEMPERATURE, as_temperature)
        data.fluid_temperature = self._convert(raw, DataField.FLUID_TEMPERATURE, as_temperature)
        data.wattage = self._convert(raw, DataField.WATTAGE, as_power)
        data.wattage_limit = self._convert(raw, DataField.WATTAGE_LIMIT, as_power)
        data.light_flashing = self._convert(raw, DataField.LIGHT_FLASHING, as_bool)
        data.uptime = self._convert(raw, DataField.UPTIME, as_uptime)

        data.hashboards = self._convert(raw, DataField.HASHBOARDS, self._parse_hashboards) or []
        data.fans = self._convert(raw, DataField.FANS, self._parse_fans) or []
        data.psu_fans = self._convert(raw, DataField.PSU_FANS, self._parse_fans) or []
        data.messages = self._convert(raw, DataField.MESSAGES, self._parse_messages) or []
        data.pools = self._convert(raw, DataField.POOLS, self._parse_pools) or []

        # Значение от устройства приоритетнее вычисленного
        reported = self._convert(raw, DataField.EFFICIENCY, to_float)
        data.efficiency = (
            reported if reported is not None else efficiency(data.wattage, data.hashrate)
        )
        try:
            data.is_mining = self._derive_is_mining(raw, data)
        except Exception as e:
            self._log_field_error(DataField.IS_MINING, e)
        return data

    def _convert(
        self,
        raw: Dict[DataField, Any],
        field: DataField,
        converter: Callable[..., Any],
        *args: Any,
    ) -> Any:
        """
        Преобразует одно поле. None если значения нет или оно не разобралось.
        """
        value = raw.get(field)
        if value is None:
            return None
        try:
            return converter(value, *args)
        except Exception as e:
            self._log_field_error(field, e)
            return None

    def _log_field_error(self, field: DataField, error: Exception) -> None:
        self._logger.warning(
            f"Поле не нормализовано: {format_error_for_log(error)}",
            field=field.value,
        )

    # ------------------------------------------------------------------
    # Переопределяются в наследниках
    # ------------------------------------------------------------------

    def _parse_hashboards(self, value: Any) -> List[BoardData]:
        return []

    def _parse_fans(self, value: Any) -> List[FanData]:
        return []

    def _parse_messages(self, value: Any) -> List[MinerMessage]:
        return []

    def _parse_pools(self, value: Any) -> List[PoolData]:
        return []

    def _derive_is_mining(
        self,
        raw: Dict[DataField, Any],
        data: MinerData,
    ) -> Optional[bool]:
        """
        Правило "устройство майнит".

        По умолчанию: явное значение IS_MINING, иначе хешрейт > 0.
        None если ни того, ни другого нет.
        """
        reported = as_bool(raw.get(DataField.IS_MINING))
        if reported is not None:
            return reported
        if data.hashrate is None:
            return None
        return data.hashrate.value > 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(ip={self.ip!r}, model={self.device_info.model!r})"
