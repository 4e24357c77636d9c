"""
Опрос парка устройств.

Каждое устройство опрашивается своим backend в отдельном потоке.
Ошибка одного устройства не влияет на остальные: для него
возвращается снапшот только с intrinsic полями.

Пример использования:
    backends = [create_backend("BitAxe", ip) for ip in ips]
    snapshots = collect_fleet(backends, max_workers=20)
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from ..core.exceptions import format_error_for_log
from ..core.logging import get_logger
from ..core.models import DataField, MinerData

if TYPE_CHECKING:
    from ..backends.base import MinerBackend

logger = get_logger(__name__)


def collect_fleet(
    backends: Sequence["MinerBackend"],
    max_workers: int = 10,
    fields: Optional[Iterable[DataField]] = None,
) -> List[MinerData]:
    """
    Опрашивает список устройств параллельно.

    Args:
        backends: Backend каждого устройства
        max_workers: Максимум одновременно опрашиваемых устройств
        fields: Поля для сбора (None — все)

    Returns:
        List[MinerData]: Снапшоты в порядке backends
    """
    if not backends:
        return []

    if fields is not None:
        fields = list(fields)

    results: List[Optional[MinerData]] = [None] * len(backends)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(backend.get_data, fields): index
            for index, backend in enumerate(backends)
        }

        for future in as_completed(futures):
            index = futures[future]
            backend = backends[index]
            try:
                results[index] = future.result()
            except Exception as e:
                logger.error(
                    f"Ошибка опроса: {format_error_for_log(e)}",
                    device=backend.ip,
                    backend=backend.make,
                )
                results[index] = backend._empty_data()

    mining = sum(1 for data in results if data is not None and data.is_mining)
    logger.info(f"Опрошено устройств: {len(results)}, майнят: {mining}")
    return [data for data in results if data is not None]
