"""
Места расположения полей в ответах API.

DataLocation = (команда, extractor) — одно место, где может лежать
сырое значение поля. Extractor — закрытый набор стратегий:

- KeyLookup("hashRate"): поле верхнего уровня ответа-словаря
- PointerLookup("SUMMARY/0/GHS 5s"): путь по вложенным словарям и спискам

Оба вычисляются одной чистой функцией extract().

Пример:
    location = by_pointer("stats", "STATS/1/fan1")
    value = extract(response, location.extractor)
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Union


@dataclass(frozen=True)
class KeyLookup:
    """Поиск по ключу верхнего уровня."""
    key: str


@dataclass(frozen=True)
class PointerLookup:
    """
    Поиск по пути через "/".

    Ведущий "/" не обязателен, пустой путь — весь документ.
    Экранирование как в JSON Pointer: "~1" → "/", "~0" → "~".
    """
    path: str

    @property
    def segments(self) -> List[str]:
        """Сегменты пути с раскрытым экранированием."""
        path = self.path[1:] if self.path.startswith("/") else self.path
        if not path:
            return []
        return [
            segment.replace("~1", "/").replace("~0", "~")
            for segment in path.split("/")
        ]


Extractor = Union[KeyLookup, PointerLookup]


@dataclass(frozen=True)
class DataLocation:
    """
    Одно место, где может лежать значение поля.

    Attributes:
        command: Команда API (endpoint/RPC команда)
        extractor: Как достать значение из ответа команды
    """
    command: str
    extractor: Extractor


def by_key(command: str, key: str) -> DataLocation:
    """DataLocation с поиском по ключу."""
    return DataLocation(command, KeyLookup(key))


def by_pointer(command: str, path: str = "") -> DataLocation:
    """DataLocation с поиском по пути (пустой путь — весь ответ)."""
    return DataLocation(command, PointerLookup(path))


def _resolve_segment(node: Any, segment: str) -> Any:
    """Один шаг по пути. None если сегмент не разрешается."""
    if isinstance(node, dict):
        return node.get(segment)
    if isinstance(node, (list, tuple)):
        # Только неотрицательные индексы без знака: "0", "12"
        if not (segment.isascii() and segment.isdigit()):
            return None
        index = int(segment)
        if index >= len(node):
            return None
        return node[index]
    return None


def extract(response: Any, extractor: Extractor) -> Optional[Any]:
    """
    Извлекает значение из ответа команды.

    Чистая функция: ответ не изменяется, исключения не выбрасываются.
    JSON null считается отсутствием значения.

    Args:
        response: Декодированный ответ (dict/list/скаляр)
        extractor: KeyLookup или PointerLookup

    Returns:
        Значение или None если его нет
    """
    if isinstance(extractor, KeyLookup):
        if not isinstance(response, dict):
            return None
        return response.get(extractor.key)

    if isinstance(extractor, PointerLookup):
        node = response
        for segment in extractor.segments:
            node = _resolve_segment(node, segment)
            if node is None:
                return None
        return node

    raise TypeError(f"Неизвестный extractor: {extractor!r}")
