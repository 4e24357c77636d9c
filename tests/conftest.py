"""
Pytest configuration и общие fixtures для тестов.

Предоставляет переиспользуемые fixtures:
- load_fixture: Загрузка ответов API из tests/fixtures
- make_client: Mock API клиента с заданными ответами команд
- espminer_responses / cgminer_responses: Полные наборы ответов устройств
"""

import json
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

from miner_collector.core.exceptions import ConnectionError


@pytest.fixture
def fixtures_dir() -> Path:
    """Возвращает путь к директории fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture(fixtures_dir):
    """
    Fixture для загрузки ответа API из файла.

    Usage:
        info = load_fixture("espminer", "system_info.json")
    """
    def _load(family: str, filename: str) -> Any:
        fixture_path = fixtures_dir / family / filename
        if not fixture_path.exists():
            pytest.skip(f"Fixture не найден: {fixture_path}")
        return json.loads(fixture_path.read_text(encoding="utf-8"))
    return _load


@pytest.fixture
def make_client():
    """
    Фабрика mock API клиентов.

    Команда из responses возвращает значение (или выбрасывает его,
    если это исключение). Неизвестная команда — ConnectionError.

    Usage:
        client = make_client({"system/info": {"hashRate": 50}})
    """
    def _make(responses: Dict[str, Any]) -> MagicMock:
        def send_command(command: str) -> Any:
            if command not in responses:
                raise ConnectionError("Нет ответа", device="test")
            response = responses[command]
            if isinstance(response, Exception):
                raise response
            return response

        client = MagicMock()
        client.send_command.side_effect = send_command
        return client
    return _make


@pytest.fixture
def espminer_responses(load_fixture) -> Dict[str, Any]:
    """Ответы BitAxe Gamma (AxeOS)."""
    return {
        "system/info": load_fixture("espminer", "system_info.json"),
        "system/asic": load_fixture("espminer", "system_asic.json"),
    }


@pytest.fixture
def cgminer_responses(load_fixture) -> Dict[str, Any]:
    """Ответы Antminer S19 (bmminer API)."""
    return {
        "summary": load_fixture("cgminer", "summary.json"),
        "stats": load_fixture("cgminer", "stats.json"),
        "pools": load_fixture("cgminer", "pools.json"),
        "version": load_fixture("cgminer", "version.json"),
    }
