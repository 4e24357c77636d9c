"""
Backend для устройств на ESP-Miner / AxeOS (BitAxe Supra, Gamma, Max, Ultra).

API: HTTP JSON, только GET.
- system/info: почти вся телеметрия одним документом
- system/asic: параметры ASIC (количество чипов, модель)

Хешрейт прошивка отдаёт в GH/s, напряжение ядра — в мВ.

Правило is_mining: хешрейт > 0 (share-счётчики не используются,
они не сбрасываются при остановке майнинга).

Пример:
    backend = ESPMinerBackend("10.0.0.5", model="Gamma")
    data = backend.get_data()
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..api.base import ApiClient
from ..api.web import WebAPIClient
from ..collectors.locations import DataLocation, by_key, by_pointer
from ..core.models import BoardData, DataField, FanData, PoolData
from ..core.normalize import (
    as_bool,
    as_frequency,
    as_hashrate,
    as_int,
    as_rpm,
    as_str,
    as_temperature,
    as_voltage,
)
from ..core.units import HashRateUnit
from .base import MinerBackend

SYSTEM_INFO = "system/info"
SYSTEM_ASIC = "system/asic"

LOCATIONS: Dict[DataField, Tuple[DataLocation, ...]] = {
    DataField.MAC: (by_key(SYSTEM_INFO, "macAddr"),),
    DataField.HOSTNAME: (by_key(SYSTEM_INFO, "hostname"),),
    DataField.API_VERSION: (by_key(SYSTEM_INFO, "version"),),
    DataField.FIRMWARE_VERSION: (
        by_key(SYSTEM_INFO, "axeOSVersion"),
        by_key(SYSTEM_INFO, "version"),
    ),
    DataField.CONTROL_BOARD_VERSION: (by_key(SYSTEM_INFO, "boardVersion"),),
    DataField.HASHBOARDS: (by_pointer(SYSTEM_INFO),),
    DataField.HASHRATE: (by_key(SYSTEM_INFO, "hashRate"),),
    DataField.EXPECTED_CHIPS: (
        by_key(SYSTEM_ASIC, "asicCount"),
        by_key(SYSTEM_INFO, "asicCount"),
    ),
    DataField.FANS: (by_key(SYSTEM_INFO, "fanrpm"),),
    DataField.AVERAGE_TEMPERATURE: (by_key(SYSTEM_INFO, "temp"),),
    DataField.WATTAGE: (by_key(SYSTEM_INFO, "power"),),
    DataField.WATTAGE_LIMIT: (by_key(SYSTEM_INFO, "maxPower"),),
    DataField.UPTIME: (by_key(SYSTEM_INFO, "uptimeSeconds"),),
    DataField.POOLS: (by_pointer(SYSTEM_INFO),),
}


class ESPMinerBackend(MinerBackend):
    """
    Backend ESP-Miner (AxeOS).

    Если api_client не передан, создаётся WebAPIClient на порт 80.
    """

    make = "BitAxe"
    hashrate_unit = HashRateUnit.GIGA

    def __init__(
        self,
        ip: str,
        model: str = "Gamma",
        api_client: Optional[ApiClient] = None,
        port: int = 80,
        timeout: float = 5.0,
        retries: int = 1,
        **kwargs: Any,
    ):
        if api_client is None:
            api_client = WebAPIClient(ip, port=port, timeout=timeout, retries=retries)
        super().__init__(ip, model, api_client, **kwargs)

    def get_locations(self, field: DataField) -> Sequence[DataLocation]:
        return LOCATIONS.get(field, ())

    def _parse_hashboards(self, value: Any) -> List[BoardData]:
        """Одна плата, собранная из system/info."""
        if not isinstance(value, dict):
            return []

        algo = self.device_info.algo
        hashrate = as_hashrate(value.get("hashRate"), self.hashrate_unit, algo)
        board = BoardData(
            position=0,
            hashrate=hashrate,
            expected_hashrate=as_hashrate(
                value.get("expectedHashrate"), self.hashrate_unit, algo
            ),
            board_temperature=as_temperature(value.get("vrTemp")),
            intake_temperature=as_temperature(value.get("temp")),
            expected_chips=as_int(value.get("asicCount")),
            voltage=as_voltage(
                value.get("coreVoltageActual", value.get("coreVoltage")),
                millivolts=True,
            ),
            frequency=as_frequency(value.get("frequency")),
            active=hashrate.value > 0 if hashrate is not None else None,
        )
        return [board]

    def _parse_fans(self, value: Any) -> List[FanData]:
        rpm = as_rpm(value)
        if rpm is None:
            return []
        return [FanData(position=0, rpm=rpm)]

    def _parse_pools(self, value: Any) -> List[PoolData]:
        """Основной и fallback stratum из system/info."""
        if not isinstance(value, dict):
            return []

        using_fallback = as_bool(value.get("isUsingFallbackStratum"))
        accepted = as_int(value.get("sharesAccepted"))
        rejected = as_int(value.get("sharesRejected"))

        pools = []
        for position, prefix in enumerate(("stratum", "fallbackStratum")):
            host = as_str(value.get(f"{prefix}URL"))
            if host is None:
                continue

            port = as_int(value.get(f"{prefix}Port"))
            url = f"stratum+tcp://{host}:{port}" if port else f"stratum+tcp://{host}"

            active = None
            if using_fallback is not None:
                active = using_fallback if position == 1 else not using_fallback

            pools.append(
                PoolData(
                    position=position,
                    url=url,
                    user=as_str(value.get(f"{prefix}User")),
                    active=active,
                    accepted_shares=accepted if active else None,
                    rejected_shares=rejected if active else None,
                )
            )
        return pools
