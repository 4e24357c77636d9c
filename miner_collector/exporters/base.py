"""
Базовый класс экспортера снапшотов.

Экспортер получает список MinerData, переводит их в документы
(MinerData.to_dict()) и записывает в файл своего формата.

Пример создания кастомного экспортера:
    class NDJSONExporter(BaseExporter):
        file_extension = ".ndjson"

        def _write(self, records, file_path):
            ...
"""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..core.logging import get_logger
from ..core.models import MinerData

logger = get_logger(__name__)


class BaseExporter(ABC):
    """
    Абстрактный экспортер.

    Attributes:
        output_folder: Папка для сохранения файлов
        encoding: Кодировка файлов
    """

    # Расширение файла (переопределяется в наследниках)
    file_extension: str = ".txt"

    def __init__(
        self,
        output_folder: str = "reports",
        encoding: str = "utf-8",
    ):
        self.output_folder = Path(output_folder)
        self.encoding = encoding

    def export(
        self,
        snapshots: Sequence[MinerData],
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """
        Экспортирует снапшоты в файл.

        Args:
            snapshots: Результат get_data() / collect_fleet()
            filename: Имя файла (без пути). Если None — генерируется по дате

        Returns:
            Path: Путь к созданному файлу или None при ошибке
        """
        if not snapshots:
            logger.warning("Нет данных для экспорта")
            return None

        self._ensure_output_folder()

        if not filename:
            filename = self._generate_filename()
        if not filename.endswith(self.file_extension):
            filename += self.file_extension

        file_path = self.output_folder / filename
        records = [snapshot.to_dict() for snapshot in snapshots]

        try:
            self._write(records, file_path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Ошибка экспорта в {file_path}: {e}")
            return None

        logger.info(f"Данные экспортированы: {file_path}", operation="export")
        return file_path

    @abstractmethod
    def _write(self, records: List[Dict[str, Any]], file_path: Path) -> None:
        """
        Записывает документы в файл.

        Args:
            records: Документы MinerData.to_dict()
            file_path: Путь к файлу
        """

    def _ensure_output_folder(self) -> None:
        """Создаёт папку для отчётов если не существует."""
        if not self.output_folder.exists():
            self.output_folder.mkdir(parents=True, exist_ok=True)
            logger.info(f"Создана папка: {self.output_folder}")

    def _generate_filename(self) -> str:
        """Имя файла с текущей датой."""
        date_str = datetime.now().strftime("%Y-%m-%d_%H%M%S")
        return f"miners_{date_str}"
