"""
Тесты извлечения значений (KeyLookup / PointerLookup).
"""

import copy

import pytest

from miner_collector.collectors.locations import (
    DataLocation,
    KeyLookup,
    PointerLookup,
    by_key,
    by_pointer,
    extract,
)


CGMINER_SUMMARY = {
    "STATUS": [{"STATUS": "S"}],
    "SUMMARY": [{"GHS 5s": 95123.45, "Elapsed": 7200, "Accepted": 0}],
}


class TestKeyLookup:
    """Тесты поиска по ключу."""

    def test_present(self):
        assert extract({"hashRate": 50}, KeyLookup("hashRate")) == 50

    def test_missing(self):
        assert extract({"hashRate": 50}, KeyLookup("power")) is None

    def test_null_is_absent(self):
        """JSON null — то же, что отсутствие ключа."""
        assert extract({"power": None}, KeyLookup("power")) is None

    def test_falsy_values_are_present(self):
        """0, "" и [] — значения, а не отсутствие."""
        assert extract({"a": 0}, KeyLookup("a")) == 0
        assert extract({"a": ""}, KeyLookup("a")) == ""
        assert extract({"a": []}, KeyLookup("a")) == []
        assert extract({"a": False}, KeyLookup("a")) is False

    @pytest.mark.parametrize("response", [[1, 2], "text", 42, None])
    def test_non_mapping(self, response):
        assert extract(response, KeyLookup("a")) is None

    def test_not_nested(self):
        """KeyLookup смотрит только на верхний уровень."""
        assert extract({"a": {"b": 1}}, KeyLookup("b")) is None


class TestPointerLookup:
    """Тесты поиска по пути."""

    def test_nested_with_index(self):
        assert extract(CGMINER_SUMMARY, PointerLookup("SUMMARY/0/GHS 5s")) == 95123.45

    def test_leading_slash_optional(self):
        assert extract(CGMINER_SUMMARY, PointerLookup("/SUMMARY/0/Elapsed")) == 7200

    def test_empty_path_returns_document(self):
        assert extract(CGMINER_SUMMARY, PointerLookup("")) is CGMINER_SUMMARY

    def test_zero_value_present(self):
        assert extract(CGMINER_SUMMARY, PointerLookup("SUMMARY/0/Accepted")) == 0

    @pytest.mark.parametrize("path", [
        "SUMMARY/1/GHS 5s",     # индекс вне диапазона
        "SUMMARY/-1/GHS 5s",    # отрицательный индекс
        "SUMMARY/first",        # нечисловой индекс
        "SUMMARY/²",            # не ASCII цифра
        "SUMMARY/0/GHS 5s/x",   # спуск в скаляр
        "MISSING/0",
    ])
    def test_unresolvable(self, path):
        assert extract(CGMINER_SUMMARY, PointerLookup(path)) is None

    def test_escapes(self):
        doc = {"a/b": {"c~d": 1}}
        assert PointerLookup("a~1b/c~0d").segments == ["a/b", "c~d"]
        assert extract(doc, PointerLookup("a~1b/c~0d")) == 1

    def test_response_not_mutated(self):
        original = copy.deepcopy(CGMINER_SUMMARY)
        extract(CGMINER_SUMMARY, PointerLookup("SUMMARY/0/GHS 5s"))
        assert CGMINER_SUMMARY == original


class TestDataLocation:
    """Тесты DataLocation и фабрик."""

    def test_factories(self):
        assert by_key("system/info", "power") == DataLocation("system/info", KeyLookup("power"))
        assert by_pointer("stats", "STATS/1") == DataLocation("stats", PointerLookup("STATS/1"))
        assert by_pointer("stats").extractor == PointerLookup("")

    def test_hashable(self):
        """DataLocation неизменяем и может быть ключом."""
        assert len({by_key("a", "x"), by_key("a", "x")}) == 1

    def test_unknown_extractor(self):
        with pytest.raises(TypeError):
            extract({}, "hashRate")
