"""
Тесты DataCollector.

Проверяет:
- Минимальный набор команд и однократное выполнение
- Fallback по DataLocation в объявленном порядке
- Изоляцию ошибок команд
- Параллельный режим и идемпотентность
"""

import threading
from collections import Counter

import pytest

from miner_collector.collectors.collector import DataCollector
from miner_collector.collectors.locations import by_key, by_pointer
from miner_collector.core.exceptions import APIError, ParseError
from miner_collector.core.models import ALL_FIELDS, DataField


class FakeBackend:
    """Backend с таблицей мест расположения из словаря."""

    def __init__(self, locations):
        self.locations = locations

    def get_locations(self, field):
        return self.locations.get(field, ())


@pytest.fixture
def backend():
    return FakeBackend({
        DataField.HASHRATE: (by_key("cmdA", "x"), by_key("cmdB", "y")),
        DataField.WATTAGE: (by_key("cmdB", "power"),),
        DataField.UPTIME: (by_pointer("cmdC", "SUMMARY/0/Elapsed"),),
    })


class TestRequiredCommands:
    """Тесты get_required_commands."""

    def test_union_without_duplicates(self, backend, make_client):
        collector = DataCollector(backend, make_client({}))
        commands = collector.get_required_commands(
            [DataField.HASHRATE, DataField.WATTAGE, DataField.UPTIME]
        )
        assert commands == ["cmdA", "cmdB", "cmdC"]

    def test_subset(self, backend, make_client):
        collector = DataCollector(backend, make_client({}))
        assert collector.get_required_commands([DataField.WATTAGE]) == ["cmdB"]

    def test_unsupported_fields_need_no_commands(self, backend, make_client):
        """Поля без DataLocation не порождают команд."""
        client = make_client({})
        collector = DataCollector(backend, client)

        result = collector.collect([DataField.MAC, DataField.HOSTNAME])

        assert result == {}
        client.send_command.assert_not_called()


class TestCollect:
    """Тесты collect()."""

    def test_each_command_once(self, backend, make_client):
        """Команда, нужная нескольким полям, выполняется один раз."""
        client = make_client({
            "cmdA": {"x": 10},
            "cmdB": {"y": 20, "power": 100},
            "cmdC": {"SUMMARY": [{"Elapsed": 60}]},
        })
        DataCollector(backend, client).collect_all()

        calls = Counter(call.args[0] for call in client.send_command.call_args_list)
        assert calls == {"cmdA": 1, "cmdB": 1, "cmdC": 1}

    def test_first_location_wins(self, backend, make_client):
        client = make_client({"cmdA": {"x": 10}, "cmdB": {"y": 20}})
        result = DataCollector(backend, client).collect([DataField.HASHRATE])
        assert result == {DataField.HASHRATE: 10}

    def test_fallback_when_command_fails(self, backend, make_client):
        """cmdA упал, cmdB вернул {"y": 42} → значение 42."""
        client = make_client({
            "cmdA": APIError("HTTP 500", status_code=500),
            "cmdB": {"y": 42},
        })
        result = DataCollector(backend, client).collect([DataField.HASHRATE])
        assert result == {DataField.HASHRATE: 42}

    def test_fallback_when_key_missing(self, backend, make_client):
        """Ответ есть, но ключа нет — берётся следующая DataLocation."""
        client = make_client({"cmdA": {"other": 1}, "cmdB": {"y": 42}})
        result = DataCollector(backend, client).collect([DataField.HASHRATE])
        assert result[DataField.HASHRATE] == 42

    def test_fallback_on_null(self, backend, make_client):
        client = make_client({"cmdA": {"x": None}, "cmdB": {"y": 7}})
        result = DataCollector(backend, client).collect([DataField.HASHRATE])
        assert result[DataField.HASHRATE] == 7

    def test_all_commands_fail(self, backend, make_client):
        """Все команды упали — пустой результат, без исключения."""
        client = make_client({
            "cmdA": ParseError("bad json"),
            "cmdB": RuntimeError("driver bug"),
        })
        assert DataCollector(backend, client).collect_all() == {}

    def test_only_requested_fields(self, backend, make_client):
        client = make_client({"cmdA": {"x": 1}, "cmdB": {"y": 2, "power": 3}})
        result = DataCollector(backend, client).collect([DataField.WATTAGE])
        assert set(result) == {DataField.WATTAGE}

    def test_zero_is_a_value(self, backend, make_client):
        client = make_client({"cmdA": {"x": 0}, "cmdB": {"y": 5}})
        result = DataCollector(backend, client).collect([DataField.HASHRATE])
        assert result[DataField.HASHRATE] == 0

    def test_idempotent(self, backend, make_client):
        """Два вызова против одинаковых ответов дают одинаковый результат."""
        client = make_client({"cmdA": {"x": 10}, "cmdB": {"power": 100}})
        collector = DataCollector(backend, client)

        first = collector.collect_all()
        second = collector.collect_all()

        assert first == second
        assert client.send_command.call_count == 6

    def test_duplicate_fields(self, backend, make_client):
        client = make_client({"cmdB": {"power": 100}})
        result = DataCollector(backend, client).collect([DataField.WATTAGE, DataField.WATTAGE])
        assert result == {DataField.WATTAGE: 100}


class TestParallel:
    """Тесты параллельного режима."""

    def test_same_result_as_sequential(self, backend, make_client):
        responses = {
            "cmdA": {"x": 10},
            "cmdB": {"power": 100},
            "cmdC": {"SUMMARY": [{"Elapsed": 60}]},
        }
        sequential = DataCollector(backend, make_client(responses)).collect_all()
        parallel = DataCollector(backend, make_client(responses), parallel=True).collect_all()

        assert parallel == sequential
        assert parallel[DataField.UPTIME] == 60

    def test_extraction_waits_for_all_commands(self, backend):
        """Извлечение начинается после завершения последней команды."""
        release = threading.Event()
        finished = []

        class SlowClient:
            def send_command(self, command):
                if command == "cmdC":
                    release.wait(timeout=5)
                else:
                    release.set()
                finished.append(command)
                return {"x": 1, "power": 2, "SUMMARY": [{"Elapsed": 3}]}

        collector = DataCollector(backend, SlowClient(), parallel=True, max_workers=3)
        result = collector.collect(ALL_FIELDS)

        assert sorted(finished) == ["cmdA", "cmdB", "cmdC"]
        assert result[DataField.UPTIME] == 3

    def test_parallel_isolates_failures(self, backend, make_client):
        client = make_client({"cmdA": RuntimeError("boom"), "cmdB": {"y": 42}})
        result = DataCollector(backend, client, parallel=True).collect([DataField.HASHRATE])
        assert result == {DataField.HASHRATE: 42}
