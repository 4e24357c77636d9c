"""
Data Models для Miner Collector.

Нормализованный, независимый от вендора снапшот устройства (MinerData)
и его вложенные записи: платы, чипы, вентиляторы, сообщения, пулы.

Правило для всех моделей: телеметрия, которую не удалось получить,
остаётся None (или пустым списком), а не нулём.

Использование:
    from miner_collector.core.models import MinerData, DataField

    data = backend.get_data()
    print(data.hashrate, data.wattage, data.efficiency)

    # Версионированный документ для дашбордов/пайплайнов
    doc = data.to_dict()
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Optional, List, Any, Dict

from .constants import SCHEMA_VERSION
from .units import (
    HashRate,
    Power,
    Temperature,
    Frequency,
    Voltage,
    AngularVelocity,
)


class DataField(Enum):
    """Логические поля телеметрии. Используются только как ключ."""
    SCHEMA_VERSION = "schema_version"
    TIMESTAMP = "timestamp"
    IP = "ip"
    MAC = "mac"
    DEVICE_INFO = "device_info"
    SERIAL_NUMBER = "serial_number"
    HOSTNAME = "hostname"
    API_VERSION = "api_version"
    FIRMWARE_VERSION = "firmware_version"
    CONTROL_BOARD_VERSION = "control_board_version"
    EXPECTED_HASHBOARDS = "expected_hashboards"
    HASHBOARDS = "hashboards"
    HASHRATE = "hashrate"
    EXPECTED_CHIPS = "expected_chips"
    TOTAL_CHIPS = "total_chips"
    EXPECTED_FANS = "expected_fans"
    FANS = "fans"
    PSU_FANS = "psu_fans"
    AVERAGE_TEMPERATURE = "average_temperature"
    FLUID_TEMPERATURE = "fluid_temperature"
    WATTAGE = "wattage"
    WATTAGE_LIMIT = "wattage_limit"
    EFFICIENCY = "efficiency"
    LIGHT_FLASHING = "light_flashing"
    MESSAGES = "messages"
    UPTIME = "uptime"
    IS_MINING = "is_mining"
    POOLS = "pools"


# Явный список всех полей для collect_all().
# При добавлении значения в DataField его нужно добавить и сюда
# (tests/test_core/test_models.py проверяет полноту).
ALL_FIELDS = (
    DataField.SCHEMA_VERSION,
    DataField.TIMESTAMP,
    DataField.IP,
    DataField.MAC,
    DataField.DEVICE_INFO,
    DataField.SERIAL_NUMBER,
    DataField.HOSTNAME,
    DataField.API_VERSION,
    DataField.FIRMWARE_VERSION,
    DataField.CONTROL_BOARD_VERSION,
    DataField.EXPECTED_HASHBOARDS,
    DataField.HASHBOARDS,
    DataField.HASHRATE,
    DataField.EXPECTED_CHIPS,
    DataField.TOTAL_CHIPS,
    DataField.EXPECTED_FANS,
    DataField.FANS,
    DataField.PSU_FANS,
    DataField.AVERAGE_TEMPERATURE,
    DataField.FLUID_TEMPERATURE,
    DataField.WATTAGE,
    DataField.WATTAGE_LIMIT,
    DataField.EFFICIENCY,
    DataField.LIGHT_FLASHING,
    DataField.MESSAGES,
    DataField.UPTIME,
    DataField.IS_MINING,
    DataField.POOLS,
)


class MessageSeverity(str, Enum):
    """Важность сообщения устройства."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


def _quantity(value: Any) -> Any:
    """Раскладывает величину с единицами в JSON-совместимое значение."""
    if value is None:
        return None
    if isinstance(value, HashRate):
        return value.to_dict()
    if isinstance(value, Power):
        return value.watts
    if isinstance(value, Temperature):
        return value.celsius
    if isinstance(value, Frequency):
        return value.megahertz
    if isinstance(value, Voltage):
        return value.volts
    if isinstance(value, AngularVelocity):
        return value.rpm
    if isinstance(value, timedelta):
        return value.total_seconds()
    return value


@dataclass
class DeviceInfo:
    """
    Аппаратная информация об устройстве.

    Attributes:
        make: Производитель (BitAxe, Antminer, ...)
        model: Модель (Gamma, S19, ...)
        firmware: Семейство прошивки (Stock, ...)
        algo: Алгоритм хеширования
    """
    make: str
    model: str
    firmware: str = "Stock"
    algo: str = "SHA256"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "make": self.make,
            "model": self.model,
            "firmware": self.firmware,
            "algo": self.algo,
        }


@dataclass
class ChipData:
    """
    Данные одного чипа на плате.

    Attributes:
        position: Позиция чипа на плате (с 0)
        hashrate: Текущий хешрейт чипа
        temperature: Температура чипа
        voltage: Заданное напряжение
        frequency: Заданная частота
        tuned: Тюнинг завершён
        working: Чип работает и майнит
    """
    position: int
    hashrate: Optional[HashRate] = None
    temperature: Optional[Temperature] = None
    voltage: Optional[Voltage] = None
    frequency: Optional[Frequency] = None
    tuned: Optional[bool] = None
    working: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "hashrate": _quantity(self.hashrate),
            "temperature": _quantity(self.temperature),
            "voltage": _quantity(self.voltage),
            "frequency": _quantity(self.frequency),
            "tuned": self.tuned,
            "working": self.working,
        }


@dataclass
class BoardData:
    """
    Данные хешплаты.

    Attributes:
        position: Позиция платы в устройстве (с 0)
        hashrate: Текущий хешрейт платы
        expected_hashrate: Заводской/ожидаемый хешрейт
        board_temperature: Температура PCB
        intake_temperature: Температура чипов на входе (первый датчик)
        outlet_temperature: Температура чипов на выходе (последний датчик)
        expected_chips: Ожидаемое количество чипов
        working_chips: Количество рабочих чипов
        serial_number: Серийный номер платы
        chips: Данные по чипам (большинство устройств не отдают)
        voltage: Напряжение платы
        frequency: Частота платы
        tuned: Тюнинг платы завершён
        active: Плата включена и майнит
    """
    position: int
    hashrate: Optional[HashRate] = None
    expected_hashrate: Optional[HashRate] = None
    board_temperature: Optional[Temperature] = None
    intake_temperature: Optional[Temperature] = None
    outlet_temperature: Optional[Temperature] = None
    expected_chips: Optional[int] = None
    working_chips: Optional[int] = None
    serial_number: Optional[str] = None
    chips: List[ChipData] = field(default_factory=list)
    voltage: Optional[Voltage] = None
    frequency: Optional[Frequency] = None
    tuned: Optional[bool] = None
    active: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "hashrate": _quantity(self.hashrate),
            "expected_hashrate": _quantity(self.expected_hashrate),
            "board_temperature": _quantity(self.board_temperature),
            "intake_temperature": _quantity(self.intake_temperature),
            "outlet_temperature": _quantity(self.outlet_temperature),
            "expected_chips": self.expected_chips,
            "working_chips": self.working_chips,
            "serial_number": self.serial_number,
            "chips": [chip.to_dict() for chip in self.chips],
            "voltage": _quantity(self.voltage),
            "frequency": _quantity(self.frequency),
            "tuned": self.tuned,
            "active": self.active,
        }


@dataclass
class FanData:
    """
    Вентилятор.

    Attributes:
        position: Позиция/индекс вентилятора на контрольной плате
        rpm: Скорость вращения
    """
    position: int
    rpm: AngularVelocity

    def to_dict(self) -> Dict[str, Any]:
        return {"position": self.position, "rpm": _quantity(self.rpm)}


@dataclass
class MinerMessage:
    """
    Сообщение устройства (ошибка, предупреждение).

    Attributes:
        timestamp: Время возникновения (unix)
        code: Код сообщения (0 если устройство код не даёт)
        message: Текст
        severity: Важность
    """
    timestamp: int
    code: int
    message: str
    severity: MessageSeverity = MessageSeverity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
        }


@dataclass
class PoolData:
    """
    Настроенный пул.

    Attributes:
        position: Приоритет пула (0 — основной)
        url: Stratum URL (с портом)
        user: Worker/пользователь
        alive: Пул доступен
        active: Устройство сейчас майнит на этот пул
        accepted_shares: Принятые шары
        rejected_shares: Отклонённые шары
    """
    position: int
    url: Optional[str] = None
    user: Optional[str] = None
    alive: Optional[bool] = None
    active: Optional[bool] = None
    accepted_shares: Optional[int] = None
    rejected_shares: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "url": self.url,
            "user": self.user,
            "alive": self.alive,
            "active": self.active,
            "accepted_shares": self.accepted_shares,
            "rejected_shares": self.rejected_shares,
        }


@dataclass
class MinerData:
    """
    Нормализованный снапшот устройства на момент опроса.

    Intrinsic поля (schema_version, timestamp, ip, device_info) заполнены
    всегда, даже если устройство не ответило. Остальное — только то,
    что было реально извлечено из ответов API.

    Единицы в to_dict(): ватты, °C, МГц, вольты, RPM, секунды;
    efficiency — W/TH.
    """
    ip: str
    device_info: DeviceInfo
    timestamp: int
    schema_version: str = SCHEMA_VERSION
    mac: Optional[str] = None
    serial_number: Optional[str] = None
    hostname: Optional[str] = None
    api_version: Optional[str] = None
    firmware_version: Optional[str] = None
    control_board_version: Optional[str] = None
    expected_hashboards: Optional[int] = None
    hashboards: List[BoardData] = field(default_factory=list)
    hashrate: Optional[HashRate] = None
    expected_chips: Optional[int] = None
    total_chips: Optional[int] = None
    expected_fans: Optional[int] = None
    fans: List[FanData] = field(default_factory=list)
    psu_fans: List[FanData] = field(default_factory=list)
    average_temperature: Optional[Temperature] = None
    fluid_temperature: Optional[Temperature] = None
    wattage: Optional[Power] = None
    wattage_limit: Optional[Power] = None
    efficiency: Optional[float] = None
    light_flashing: Optional[bool] = None
    messages: List[MinerMessage] = field(default_factory=list)
    uptime: Optional[timedelta] = None
    is_mining: Optional[bool] = None
    pools: List[PoolData] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в версионированный документ (None → null)."""
        return {
            "schema_version": self.schema_version,
            "timestamp": self.timestamp,
            "ip": self.ip,
            "mac": self.mac,
            "device_info": self.device_info.to_dict(),
            "serial_number": self.serial_number,
            "hostname": self.hostname,
            "api_version": self.api_version,
            "firmware_version": self.firmware_version,
            "control_board_version": self.control_board_version,
            "expected_hashboards": self.expected_hashboards,
            "hashboards": [board.to_dict() for board in self.hashboards],
            "hashrate": _quantity(self.hashrate),
            "expected_chips": self.expected_chips,
            "total_chips": self.total_chips,
            "expected_fans": self.expected_fans,
            "fans": [fan.to_dict() for fan in self.fans],
            "psu_fans": [fan.to_dict() for fan in self.psu_fans],
            "average_temperature": _quantity(self.average_temperature),
            "fluid_temperature": _quantity(self.fluid_temperature),
            "wattage": _quantity(self.wattage),
            "wattage_limit": _quantity(self.wattage_limit),
            "efficiency": self.efficiency,
            "light_flashing": self.light_flashing,
            "messages": [msg.to_dict() for msg in self.messages],
            "uptime": _quantity(self.uptime),
            "is_mining": self.is_mining,
            "pools": [pool.to_dict() for pool in self.pools],
        }
