"""
Backends устройств.

Backend выбирается по производителю (make), который определяет
внешний detector. Реестр BACKENDS связывает make с классом.

Пример использования:
    from miner_collector.backends import create_backend

    backend = create_backend("BitAxe", "10.0.0.5", model="Gamma")
    data = backend.get_data()
"""

from typing import Any, Dict, Type

from ..core.exceptions import BackendError
from .base import MinerBackend
from .cgminer import CGMinerBackend
from .espminer import ESPMinerBackend

BACKENDS: Dict[str, Type[MinerBackend]] = {
    "bitaxe": ESPMinerBackend,
    "espminer": ESPMinerBackend,
    "antminer": CGMinerBackend,
    "cgminer": CGMinerBackend,
}


def get_backend_class(make: str) -> Type[MinerBackend]:
    """
    Класс backend по производителю (регистр не важен).

    Raises:
        BackendError: Производитель не поддерживается
    """
    backend_class = BACKENDS.get(make.strip().lower())
    if backend_class is None:
        raise BackendError(
            f"Неизвестный производитель: {make}",
            make=make,
            details={"supported": sorted(BACKENDS)},
        )
    return backend_class


def create_backend(make: str, ip: str, **kwargs: Any) -> MinerBackend:
    """
    Создаёт backend для устройства.

    Args:
        make: Производитель (BitAxe, Antminer, ...)
        ip: Адрес устройства
        **kwargs: Аргументы конструктора backend (model, api_client, ...)

    Returns:
        MinerBackend

    Raises:
        BackendError: Производитель не поддерживается
    """
    return get_backend_class(make)(ip, **kwargs)


__all__ = [
    "BACKENDS",
    "MinerBackend",
    "ESPMinerBackend",
    "CGMinerBackend",
    "get_backend_class",
    "create_backend",
]
