"""
Сбор сырых данных.

- locations: где лежит поле (DataLocation, KeyLookup, PointerLookup)
- collector: DataCollector, опрос одного устройства
- fleet: collect_fleet, опрос парка
"""

from .locations import (
    DataLocation,
    KeyLookup,
    PointerLookup,
    by_key,
    by_pointer,
    extract,
)
from .collector import DataCollector
from .fleet import collect_fleet

__all__ = [
    "DataLocation",
    "KeyLookup",
    "PointerLookup",
    "by_key",
    "by_pointer",
    "extract",
    "DataCollector",
    "collect_fleet",
]
