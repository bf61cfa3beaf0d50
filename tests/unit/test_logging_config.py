"""Unit tests for schedvis logging configuration."""

from __future__ import annotations

import json
import logging
from unittest import mock

import schedvis
from schedvis.logging_config import LOGGER_NAME, JsonFormatter, _get_level


class TestSilentByDefault:
    def test_logger_has_null_handler(self):
        logger = logging.getLogger(LOGGER_NAME)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_run_produces_no_output(self, capfd):
        scheduler = schedvis.Scheduler(seed=1)
        scheduler.generate_jobs(3)
        scheduler.run_to_completion("fcfs", budget=50)
        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestHandlers:
    def test_console_logging(self):
        handler = schedvis.enable_console_logging(level="DEBUG")
        logger = logging.getLogger(LOGGER_NAME)
        assert handler in logger.handlers
        assert logger.level == logging.DEBUG

    def test_engine_logs_run(self, caplog):
        schedvis.enable_console_logging(level="INFO")
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            scheduler = schedvis.Scheduler(seed=1)
            scheduler.generate_jobs(2)
            scheduler.run_to_completion("fcfs", budget=50)
        messages = [r.getMessage() for r in caplog.records]
        assert any("Run started" in m for m in messages)
        assert any("Run completed: reason=pool_empty" in m for m in messages)

    def test_file_logging_creates_parents(self, tmp_path):
        path = tmp_path / "nested" / "sched.log"
        handler = schedvis.enable_file_logging(path, level="INFO")
        logging.getLogger(f"{LOGGER_NAME}.test").info("hello")
        handler.flush()
        assert "hello" in path.read_text()

    def test_json_file_logging(self, tmp_path):
        path = tmp_path / "sched.json"
        handler = schedvis.enable_file_logging(path, json_format=True)
        logging.getLogger(f"{LOGGER_NAME}.test").warning("careful")
        handler.flush()
        record = json.loads(path.read_text().strip())
        assert record["message"] == "careful"
        assert record["level"] == "WARNING"

    def test_disable_logging(self):
        schedvis.enable_console_logging()
        schedvis.disable_logging()
        logger = logging.getLogger(LOGGER_NAME)
        assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)
        assert logger.level > logging.CRITICAL

    def test_set_module_level(self):
        schedvis.set_module_level("engine", "WARNING")
        assert logging.getLogger(f"{LOGGER_NAME}.engine").level == logging.WARNING
        logging.getLogger(f"{LOGGER_NAME}.engine").setLevel(logging.NOTSET)

    def test_set_level(self):
        schedvis.set_level("ERROR")
        assert logging.getLogger(LOGGER_NAME).level == logging.ERROR


class TestJsonFormatter:
    def test_format(self):
        record = logging.LogRecord("schedvis.x", logging.INFO, __file__, 1, "n=%d", (3,), None)
        data = json.loads(JsonFormatter().format(record))
        assert data["message"] == "n=3"
        assert data["logger"] == "schedvis.x"
        assert "timestamp" in data


class TestConfigureFromEnv:
    def test_noop_without_env(self):
        with mock.patch.dict("os.environ", {}, clear=True):
            schedvis.configure_from_env()
        handlers = logging.getLogger(LOGGER_NAME).handlers
        assert all(isinstance(h, logging.NullHandler) for h in handlers)

    def test_level_from_env(self):
        with mock.patch.dict("os.environ", {"SV_LOGGING": "debug"}, clear=True):
            schedvis.configure_from_env()
        logger = logging.getLogger(LOGGER_NAME)
        assert logger.level == logging.DEBUG
        assert any(isinstance(h, logging.StreamHandler) for h in logger.handlers)

    def test_file_from_env(self, tmp_path):
        path = tmp_path / "env.log"
        env = {"SV_LOG_FILE": str(path), "SV_LOG_JSON": "1"}
        with mock.patch.dict("os.environ", env, clear=True):
            schedvis.configure_from_env()
        logger = logging.getLogger(LOGGER_NAME)
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert isinstance(file_handlers[0].formatter, JsonFormatter)

    def test_get_level(self):
        assert _get_level("warning") == logging.WARNING
        assert _get_level(15) == 15
        assert _get_level("bogus") == logging.INFO
