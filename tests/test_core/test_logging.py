"""
Тесты структурированного логирования.

Проверяет форматтеры, StructuredLogger.bind, OperationLog
и настройку handlers из LogConfig.
"""

import json
import logging
from io import StringIO

import pytest

from miner_collector.core.logging import (
    HumanFormatter,
    JSONFormatter,
    LogConfig,
    OperationLog,
    RotationType,
    StructuredLogger,
    get_logger,
    setup_logging,
    setup_logging_from_config,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Возвращает root логгер в исходное состояние после теста."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def make_record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="miner_collector.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Тесты форматтеров."""

    def test_json_formatter_includes_extra(self):
        record = make_record("Команда не выполнена", device="10.0.0.5", command="summary")
        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "WARNING"
        assert data["message"] == "Команда не выполнена"
        assert data["logger"] == "miner_collector.test"
        assert data["device"] == "10.0.0.5"
        assert data["command"] == "summary"
        assert "lineno" not in data

    def test_human_formatter_extras(self):
        record = make_record("Ответ получен", device="10.0.0.5", backend="BitAxe")
        text = HumanFormatter().format(record)

        assert "WARNING" in text
        assert text.endswith("Ответ получен (device=10.0.0.5, backend=BitAxe)")

    def test_human_formatter_without_extras(self):
        text = HumanFormatter().format(make_record("Готово"))
        assert text.endswith("Готово")


class TestStructuredLogger:
    """Тесты StructuredLogger."""

    def test_get_logger_cached(self):
        assert get_logger("miner_collector.x") is get_logger("miner_collector.x")

    def test_bind_adds_defaults(self):
        stream = StringIO()
        setup_logging(json_format=True, level=logging.DEBUG, stream=stream)

        logger = StructuredLogger("miner_collector.bind").bind(device="10.0.0.5")
        logger.info("Опрос завершён", command="system/info")

        data = json.loads(stream.getvalue().strip())
        assert data["device"] == "10.0.0.5"
        assert data["command"] == "system/info"

    def test_bind_does_not_mutate_parent(self):
        parent = StructuredLogger("miner_collector.parent")
        child = parent.bind(device="10.0.0.5")

        assert parent._default_extra == {}
        assert child._default_extra == {"device": "10.0.0.5"}

    def test_level_filtering(self):
        stream = StringIO()
        setup_logging(level=logging.WARNING, stream=stream)

        logger = get_logger("miner_collector.level")
        logger.info("не попадёт")
        logger.warning("попадёт")

        output = stream.getvalue()
        assert "не попадёт" not in output
        assert "попадёт" in output


class TestOperationLog:
    """Тесты OperationLog."""

    def test_success(self):
        op = OperationLog(operation="get_data", device="10.0.0.5").start()
        op.success(fields=12)
        data = op.to_dict()

        assert data["status"] == "success"
        assert data["device"] == "10.0.0.5"
        assert data["result"] == {"fields": 12}
        assert data["duration_ms"] >= 0

    def test_failure(self):
        op = OperationLog(operation="get_data").start().failure("boom")
        assert op.to_dict()["error"] == "boom"
        assert op.status == "failure"

    def test_pending_has_no_duration(self):
        assert OperationLog(operation="x").duration_ms is None

    def test_log_writes_extras(self):
        stream = StringIO()
        setup_logging(json_format=True, stream=stream)

        OperationLog(operation="get_data", device="10.0.0.5").start().success(fields=3).log()

        data = json.loads(stream.getvalue().strip())
        assert data["operation"] == "get_data"
        assert data["status"] == "success"
        assert data["fields"] == 3


class TestLogConfig:
    """Тесты LogConfig и setup_logging_from_config."""

    def test_from_dict(self):
        config = LogConfig.from_dict({"level": "debug", "rotation": "time", "json_format": True})

        assert config.level == logging.DEBUG
        assert config.rotation == RotationType.TIME
        assert config.json_format is True
        assert config.file_path is None

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "poll.log"
        config = LogConfig(json_format=True, console=False, file_path=str(log_file))
        setup_logging_from_config(config)

        get_logger("miner_collector.file").info("В файл", device="10.0.0.5")
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = log_file.read_text(encoding="utf-8").strip()
        assert json.loads(line)["device"] == "10.0.0.5"

    def test_no_rotation(self, tmp_path):
        config = LogConfig(console=False, file_path=str(tmp_path / "a.log"), rotation=RotationType.NONE)
        setup_logging_from_config(config)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert type(handlers[0]) is logging.FileHandler
