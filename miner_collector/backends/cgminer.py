"""
Backend для прошивок с cgminer/bmminer JSON API (стоковые Antminer и совместимые).

Команды: summary, stats, pools, version. Ответы имеют вид
{"STATUS": [...], "SUMMARY": [{...}]}, поэтому значения достаются
через PointerLookup ("SUMMARY/0/GHS 5s").

Транспорт (TCP 4028) здесь не реализуется: клиент передаётся снаружи
и должен возвращать уже декодированный JSON каждой команды.

Хешрейт в GH/s. Ключи платы в stats нумеруются по цепочке:
chain_acn{N}, chain_rate{N}, temp{N}, temp_chip{N}, ...

Правило is_mining: хешрейт > 0, если хешрейт известен; иначе
принятые шары активного пула > 0.

Пример:
    backend = CGMinerBackend("10.0.0.7", model="S19", api_client=rpc_client)
    data = backend.get_data()
"""

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..api.base import ApiClient
from ..collectors.locations import DataLocation, by_pointer
from ..core.models import BoardData, DataField, FanData, MinerData, PoolData
from ..core.normalize import (
    as_bool,
    as_frequency,
    as_hashrate,
    as_int,
    as_rpm,
    as_str,
    as_temperature,
)
from ..core.units import HashRateUnit, Temperature, to_float
from .base import MinerBackend

SUMMARY = "summary"
STATS = "stats"
POOLS = "pools"
VERSION = "version"

LOCATIONS: Dict[DataField, Tuple[DataLocation, ...]] = {
    DataField.API_VERSION: (by_pointer(VERSION, "VERSION/0/API"),),
    DataField.FIRMWARE_VERSION: (
        by_pointer(VERSION, "VERSION/0/CompileTime"),
        by_pointer(STATS, "STATS/0/CompileTime"),
    ),
    DataField.EXPECTED_HASHBOARDS: (by_pointer(STATS, "STATS/1/miner_count"),),
    DataField.HASHBOARDS: (by_pointer(STATS, "STATS/1"),),
    DataField.HASHRATE: (
        by_pointer(SUMMARY, "SUMMARY/0/GHS 5s"),
        by_pointer(STATS, "STATS/1/GHS 5s"),
    ),
    DataField.EXPECTED_FANS: (by_pointer(STATS, "STATS/1/fan_num"),),
    DataField.FANS: (by_pointer(STATS, "STATS/1"),),
    DataField.AVERAGE_TEMPERATURE: (by_pointer(SUMMARY, "SUMMARY/0/Temperature"),),
    DataField.WATTAGE: (by_pointer(SUMMARY, "SUMMARY/0/Power"),),
    DataField.UPTIME: (
        by_pointer(SUMMARY, "SUMMARY/0/Elapsed"),
        by_pointer(STATS, "STATS/1/Elapsed"),
    ),
    DataField.POOLS: (by_pointer(POOLS, "POOLS"),),
}

CHAIN_KEY = re.compile(r"^chain_acn(\d+)$")
FAN_KEY = re.compile(r"^fan(\d+)$")


def _split_temperatures(value: Any) -> List[float]:
    """Разбирает "40-42-55-57" или число в список температур."""
    if value is None:
        return []
    if isinstance(value, str):
        parts = [to_float(part) for part in value.split("-")]
        return [part for part in parts if part is not None]
    number = to_float(value)
    return [number] if number is not None else []


class CGMinerBackend(MinerBackend):
    """Backend cgminer/bmminer API. api_client обязателен."""

    make = "Antminer"
    hashrate_unit = HashRateUnit.GIGA

    derived_inputs = {
        **MinerBackend.derived_inputs,
        DataField.IS_MINING: (DataField.HASHRATE, DataField.POOLS),
    }

    def __init__(
        self,
        ip: str,
        model: str,
        api_client: ApiClient,
        **kwargs: Any,
    ):
        super().__init__(ip, model, api_client, **kwargs)

    def get_locations(self, field: DataField) -> Sequence[DataLocation]:
        return LOCATIONS.get(field, ())

    def _parse_hashboards(self, value: Any) -> List[BoardData]:
        """Платы по ключам chain_acn{N} из STATS/1."""
        if not isinstance(value, dict):
            return []

        chains = sorted(
            int(match.group(1))
            for match in (CHAIN_KEY.match(key) for key in value)
            if match
        )

        boards = []
        for position, chain in enumerate(chains):
            working_chips = as_int(value.get(f"chain_acn{chain}"))
            chip_temps = _split_temperatures(value.get(f"temp_chip{chain}"))
            pcb_temps = _split_temperatures(value.get(f"temp_pcb{chain}"))
            outlet = chip_temps[-1] if chip_temps else to_float(value.get(f"temp2_{chain}"))

            board_temperature = as_temperature(value.get(f"temp{chain}"))
            if board_temperature is None and pcb_temps:
                board_temperature = Temperature(max(pcb_temps))

            # chain_acs: "oooo oooo xooo", o рабочий чип, x сбойный
            expected_chips = None
            acs = value.get(f"chain_acs{chain}")
            if isinstance(acs, str):
                expected_chips = sum(1 for char in acs if char in "ox") or None

            boards.append(
                BoardData(
                    position=position,
                    hashrate=as_hashrate(
                        value.get(f"chain_rate{chain}"),
                        self.hashrate_unit,
                        self.device_info.algo,
                    ),
                    board_temperature=board_temperature,
                    intake_temperature=Temperature(chip_temps[0]) if chip_temps else None,
                    outlet_temperature=as_temperature(outlet),
                    expected_chips=expected_chips,
                    working_chips=working_chips,
                    frequency=as_frequency(value.get(f"freq_avg{chain}")),
                    active=working_chips > 0 if working_chips is not None else None,
                )
            )
        return boards

    def _parse_fans(self, value: Any) -> List[FanData]:
        """
        Вентиляторы по ключам fan{N}.

        Пустые слоты прошивка отдаёт как 0, такие пропускаются.
        """
        if not isinstance(value, dict):
            return []

        fans = []
        for key in value:
            match = FAN_KEY.match(key)
            if not match:
                continue
            rpm = as_rpm(value[key])
            if rpm is None or rpm.rpm <= 0:
                continue
            fans.append(FanData(position=int(match.group(1)) - 1, rpm=rpm))
        return sorted(fans, key=lambda fan: fan.position)

    def _parse_pools(self, value: Any) -> List[PoolData]:
        if not isinstance(value, list):
            return []

        pools = []
        for index, pool in enumerate(value):
            if not isinstance(pool, dict):
                continue
            status = as_str(pool.get("Status"))
            position = as_int(pool.get("POOL"))
            pools.append(
                PoolData(
                    position=position if position is not None else index,
                    url=as_str(pool.get("URL")),
                    user=as_str(pool.get("User")),
                    alive=status.lower() == "alive" if status else None,
                    active=as_bool(pool.get("Stratum Active")),
                    accepted_shares=as_int(pool.get("Accepted")),
                    rejected_shares=as_int(pool.get("Rejected")),
                )
            )
        return pools

    def _derive_is_mining(
        self,
        raw: Dict[DataField, Any],
        data: MinerData,
    ) -> Optional[bool]:
        if data.hashrate is not None:
            return data.hashrate.value > 0

        active_pools = [pool for pool in data.pools if pool.active]
        shares = [pool.accepted_shares for pool in active_pools if pool.accepted_shares is not None]
        if not shares:
            return None
        return sum(shares) > 0
