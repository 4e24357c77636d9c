"""
Преобразование сырых значений полей в типизированные.

Каждая функция принимает сырое значение из DataCollector (или None)
и возвращает величину с единицами, либо None если значение
отсутствует или не распознано. Ноль вместо неизвестного не подставляется.
"""

from datetime import timedelta
from typing import Any, Optional

from .constants import normalize_mac
from .units import (
    AngularVelocity,
    Frequency,
    HashRate,
    HashRateUnit,
    Power,
    Temperature,
    Voltage,
    to_float,
    to_int,
)


def as_str(value: Any) -> Optional[str]:
    """Непустая строка или None."""
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def as_int(value: Any) -> Optional[int]:
    return to_int(value)


def as_bool(value: Any) -> Optional[bool]:
    """bool из true/false, 0/1, "true"/"false"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0"):
            return False
    return None


def as_mac(value: Any) -> Optional[str]:
    """MAC в формате aa:bb:cc:dd:ee:ff."""
    if not isinstance(value, str):
        return None
    return normalize_mac(value) or None


def as_power(value: Any) -> Optional[Power]:
    watts = to_float(value)
    return Power(watts) if watts is not None else None


def as_temperature(value: Any) -> Optional[Temperature]:
    celsius = to_float(value)
    return Temperature(celsius) if celsius is not None else None


def as_frequency(value: Any) -> Optional[Frequency]:
    megahertz = to_float(value)
    return Frequency(megahertz) if megahertz is not None else None


def as_voltage(value: Any, millivolts: bool = False) -> Optional[Voltage]:
    number = to_float(value)
    if number is None:
        return None
    return Voltage.from_millivolts(number) if millivolts else Voltage(number)


def as_rpm(value: Any) -> Optional[AngularVelocity]:
    rpm = to_float(value)
    return AngularVelocity(rpm) if rpm is not None else None


def as_hashrate(
    value: Any,
    unit: HashRateUnit,
    algo: str = "SHA256",
) -> Optional[HashRate]:
    """
    Хешрейт в TH/s.

    Args:
        value: Сырое значение
        unit: В каких единицах его отдаёт устройство
        algo: Алгоритм

    Returns:
        HashRate в TH/s или None
    """
    number = to_float(value)
    if number is None:
        return None
    return HashRate(value=number, unit=unit, algo=algo).as_unit(HashRateUnit.TERA)


def as_uptime(value: Any) -> Optional[timedelta]:
    """Uptime из секунд."""
    seconds = to_float(value)
    if seconds is None or seconds < 0:
        return None
    return timedelta(seconds=seconds)
