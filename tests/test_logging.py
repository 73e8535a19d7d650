import json
import logging

import pytest
from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from optbind.utils import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler, (RichHandler, logging.FileHandler)) or isinstance(
            handler.formatter, JsonFormatter
        ):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_cli_mode_uses_rich():
    setup_logging(mode="cli", console_log_level=logging.INFO)
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], RichHandler)
    assert handlers[0].level == logging.INFO


def test_json_mode_uses_json_formatter():
    setup_logging(mode="json")
    handler = logging.getLogger().handlers[0]
    record = logging.LogRecord("optbind", logging.WARNING, __file__, 1, "hello %s", ("x",), None)
    payload = json.loads(handler.format(record))
    assert payload["message"] == "hello x"
    assert payload["levelname"] == "WARNING"


def test_mode_from_environment(monkeypatch):
    monkeypatch.setenv("OPTBIND_LOG_MODE", "json")
    setup_logging()
    assert not isinstance(logging.getLogger().handlers[0], RichHandler)


def test_invalid_mode():
    with pytest.raises(ValueError):
        setup_logging(mode="xml")


def test_file_handler(tmp_path):
    log_file = tmp_path / "optbind.log"
    setup_logging(mode="cli", log_filename=str(log_file), json_log_to_file=True)
    logging.getLogger("optbind").debug("parsed %d tokens", 3)
    for handler in logging.getLogger().handlers:
        handler.flush()
    line = log_file.read_text().splitlines()[-1]
    assert json.loads(line)["message"] == "parsed 3 tokens"


def test_no_file_handler_by_default():
    setup_logging(mode="cli")
    assert not any(
        isinstance(handler, logging.FileHandler) for handler in logging.getLogger().handlers
    )
