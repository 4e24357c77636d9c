"""
Константы и нормализация идентификаторов устройства.

SCHEMA_VERSION — версия формата MinerData.to_dict(). Увеличивается
при любом несовместимом изменении структуры снапшота.
"""

import re

SCHEMA_VERSION = "1.0.0"

DEFAULT_WEB_PORT = 80
DEFAULT_TIMEOUT = 5.0
DEFAULT_RETRIES = 1


def normalize_mac_raw(mac: str) -> str:
    """
    Нормализует MAC-адрес в сырой формат (12 символов, нижний регистр).

    Args:
        mac: MAC-адрес в любом формате

    Returns:
        str: 12 hex-символов (aabbccddeeff) или ""
    """
    if not mac or not isinstance(mac, str):
        return ""
    mac_clean = mac.strip().lower()
    for char in [":", "-", ".", " "]:
        mac_clean = mac_clean.replace(char, "")
    if not re.fullmatch(r"[0-9a-f]{12}", mac_clean):
        return ""
    return mac_clean


def normalize_mac(mac: str) -> str:
    """
    Нормализует MAC-адрес в IEEE формат (aa:bb:cc:dd:ee:ff).

    Args:
        mac: MAC-адрес в любом формате (AA:BB..., aabb.ccdd.eeff, aa-bb-...)

    Returns:
        str: MAC в формате aa:bb:cc:dd:ee:ff (или пустая строка)
    """
    clean = normalize_mac_raw(mac)
    if not clean:
        return ""
    return ":".join(clean[i : i + 2] for i in range(0, 12, 2))
