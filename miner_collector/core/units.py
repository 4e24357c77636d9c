"""
Физические величины телеметрии.

Сырые числа из API получают единицы измерения при нормализации.
Каждая величина хранится в канонической единице:
- Power: ватты
- Temperature: градусы Цельсия
- Frequency: мегагерцы
- Voltage: вольты
- AngularVelocity: обороты в минуту
- HashRate: значение + HashRateUnit (TH/s — каноническая для efficiency)

Длительности (uptime) — datetime.timedelta.

Пример:
    rate = HashRate(value=500.0, unit=HashRateUnit.GIGA)
    rate.as_unit(HashRateUnit.TERA).value  # 0.5
    efficiency(Power(10.0), rate)          # 20.0 W/TH
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class HashRateUnit(int, Enum):
    """Единицы хешрейта; значение — степень 1000."""
    HASH = 0
    KILO = 1
    MEGA = 2
    GIGA = 3
    TERA = 4
    PETA = 5
    EXA = 6
    ZETTA = 7
    YOTTA = 8

    @property
    def suffix(self) -> str:
        """Суффикс для вывода: H/s, TH/s, ..."""
        prefix = ["", "K", "M", "G", "T", "P", "E", "Z", "Y"][self.value]
        return f"{prefix}H/s"


@dataclass(frozen=True)
class HashRate:
    """
    Хешрейт.

    Attributes:
        value: Количество хешей в секунду в единицах unit
        unit: Единица измерения
        algo: Алгоритм хеширования
    """
    value: float
    unit: HashRateUnit = HashRateUnit.TERA
    algo: str = "SHA256"

    def as_unit(self, unit: HashRateUnit) -> "HashRate":
        """Пересчитывает хешрейт в другую единицу."""
        factor = 1000.0 ** (self.unit.value - unit.value)
        return HashRate(value=self.value * factor, unit=unit, algo=self.algo)

    def to_dict(self) -> dict:
        return {"value": self.value, "unit": self.unit.suffix, "algo": self.algo}

    def __str__(self) -> str:
        return f"{self.value:g} {self.unit.suffix}"


@dataclass(frozen=True)
class Power:
    """Мощность в ваттах."""
    watts: float

    def __str__(self) -> str:
        return f"{self.watts:g} W"


@dataclass(frozen=True)
class Temperature:
    """Температура в градусах Цельсия."""
    celsius: float

    @property
    def fahrenheit(self) -> float:
        return self.celsius * 9 / 5 + 32

    def __str__(self) -> str:
        return f"{self.celsius:g} °C"


@dataclass(frozen=True)
class Frequency:
    """Частота в мегагерцах."""
    megahertz: float

    def __str__(self) -> str:
        return f"{self.megahertz:g} MHz"


@dataclass(frozen=True)
class Voltage:
    """Напряжение в вольтах."""
    volts: float

    @classmethod
    def from_millivolts(cls, millivolts: float) -> "Voltage":
        return cls(volts=millivolts / 1000.0)

    def __str__(self) -> str:
        return f"{self.volts:g} V"


@dataclass(frozen=True)
class AngularVelocity:
    """Скорость вращения вентилятора в RPM."""
    rpm: float

    def __str__(self) -> str:
        return f"{self.rpm:g} RPM"


def to_float(value: Any) -> Optional[float]:
    """
    Приводит сырое значение из API к float.

    Прошивки отдают числа и как числа, и как строки ("650.5").
    bool не считается числом. NaN и бесконечность отбрасываются.

    Returns:
        float или None если значение не числовое
    """
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def to_int(value: Any) -> Optional[int]:
    """Приводит сырое значение к int (через to_float)."""
    number = to_float(value)
    if number is None:
        return None
    return int(number)


def efficiency(power: Optional[Power], hashrate: Optional[HashRate]) -> Optional[float]:
    """
    Считает эффективность в W/TH (J/TH).

    Результат есть только если известны оба входа и хешрейт не нулевой.
    Ноль вместо неизвестного значения не подставляется.

    Args:
        power: Потребляемая мощность
        hashrate: Текущий хешрейт

    Returns:
        float или None
    """
    if power is None or hashrate is None:
        return None
    terahash = hashrate.as_unit(HashRateUnit.TERA).value
    if terahash == 0:
        return None
    return power.watts / terahash
