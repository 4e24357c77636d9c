"""
JSON экспортер снапшотов.

Формат файла:
    {
        "metadata": {"generated_at": ..., "total_records": 2, "schema_version": "1.0.0"},
        "data": [{...MinerData.to_dict()...}, ...]
    }

Пример использования:
    exporter = JSONExporter(output_folder="reports", indent=2)
    exporter.export(collect_fleet(backends), "fleet.json")
"""

import json
from datetime import date, datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.constants import SCHEMA_VERSION
from ..core.logging import get_logger
from .base import BaseExporter

logger = get_logger(__name__)


class JSONExporter(BaseExporter):
    """
    Экспортер снапшотов в JSON.

    Attributes:
        indent: Отступ для форматирования (None = компактный)
        ensure_ascii: Экранировать не-ASCII символы
        include_metadata: Обернуть данные в {"metadata", "data"}
        sort_keys: Сортировать ключи
    """

    file_extension = ".json"

    def __init__(
        self,
        output_folder: str = "reports",
        encoding: str = "utf-8",
        indent: Optional[int] = 2,
        ensure_ascii: bool = False,
        include_metadata: bool = True,
        sort_keys: bool = False,
    ):
        super().__init__(output_folder, encoding)
        self.indent = indent
        self.ensure_ascii = ensure_ascii
        self.include_metadata = include_metadata
        self.sort_keys = sort_keys

    def build_document(self, records: List[Dict[str, Any]]) -> Any:
        """Структура файла: список документов или обёртка с metadata."""
        if not self.include_metadata:
            return records
        return {
            "metadata": {
                "generated_at": datetime.now().isoformat(),
                "total_records": len(records),
                "schema_version": SCHEMA_VERSION,
            },
            "data": records,
        }

    def _write(self, records: List[Dict[str, Any]], file_path: Path) -> None:
        with open(file_path, "w", encoding=self.encoding) as f:
            json.dump(
                self.build_document(records),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
                sort_keys=self.sort_keys,
                default=self._json_serializer,
            )

        logger.debug(f"JSON записан: {len(records)} записей")

    @staticmethod
    def _json_serializer(obj: Any) -> Any:
        """Сериализатор для datetime, timedelta и Enum."""
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, timedelta):
            return obj.total_seconds()
        if isinstance(obj, Enum):
            return obj.value

        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
