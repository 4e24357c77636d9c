"""
Модули экспорта снапшотов.

Пример использования:
    from miner_collector.exporters import JSONExporter

    exporter = JSONExporter(indent=2)
    exporter.export(snapshots, "fleet.json")
"""

from .base import BaseExporter
from .json_exporter import JSONExporter

__all__ = ["BaseExporter", "JSONExporter"]
