"""
Miner Collector — сбор и нормализация телеметрии ASIC майнеров.

Пример использования:
    from miner_collector import create_backend, collect_fleet

    backend = create_backend("BitAxe", "10.0.0.5", model="Gamma")
    data = backend.get_data()
    print(data.hashrate, data.efficiency)
"""

__version__ = "0.1.0"

from .core.models import ALL_FIELDS, DataField, MinerData
from .collectors.collector import DataCollector
from .collectors.fleet import collect_fleet
from .backends import BACKENDS, MinerBackend, create_backend
from .config import load_config

__all__ = [
    "__version__",
    "ALL_FIELDS",
    "DataField",
    "MinerData",
    "DataCollector",
    "collect_fleet",
    "BACKENDS",
    "MinerBackend",
    "create_backend",
    "load_config",
]
