"""Tests for the JSON logger."""

import json
import logging
from pathlib import Path

import pytest

from dispose_python import get_logger


@pytest.fixture(autouse=True)
def _reset_loggers():
    yield
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("dispose_python.test"):
            logging.getLogger(name).handlers.clear()


class TestJsonOutput:
    def test_record_is_single_json_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("dispose_python.test.json", log_level="INFO")
        logger.info("hello")

        parsed = json.loads(capsys.readouterr().err.strip())

        assert parsed["level"] == "INFO"
        assert parsed["module"] == "dispose_python.test.json"
        assert parsed["msg"] == "hello"
        assert "ts" in parsed

    def test_extra_fields_are_merged(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("dispose_python.test.extra", log_level="DEBUG")
        logger.debug("freed", extra={"instance": "d1", "address": "0x10"})

        parsed = json.loads(capsys.readouterr().err.strip())

        assert parsed["instance"] == "d1"
        assert parsed["address"] == "0x10"

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("dispose_python.test.filter", log_level="WARNING")
        logger.info("hidden")
        assert capsys.readouterr().err == ""

    def test_repeated_calls_do_not_stack_handlers(self) -> None:
        first = get_logger("dispose_python.test.stack")
        second = get_logger("dispose_python.test.stack", log_level="DEBUG")

        assert first is second
        assert len(second.handlers) == 1
        assert second.level == logging.DEBUG

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError):
            get_logger("dispose_python.test.bad", log_level="LOUD")

    def test_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "run.log"
        logger = get_logger("dispose_python.test.file", log_level="INFO", log_file=log_file)
        logger.info("to file")
        for handler in logger.handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert json.loads(lines[0])["msg"] == "to file"
        for handler in logger.handlers:
            handler.close()

    def test_later_call_adds_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "late.log"
        get_logger("dispose_python.test.late", log_level="INFO")
        logger = get_logger("dispose_python.test.late", log_level="INFO", log_file=log_file)
        logger.info("late file")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])["msg"] == "late file"
        for handler in logger.handlers:
            handler.close()
