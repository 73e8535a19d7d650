# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py
Shared helpers: program name lookup, case-folded mappings and logging setup."""
from __future__ import annotations

import logging
import os
import sys
from collections import UserDict
from pathlib import Path
from typing import Any

import pythonjsonlogger.json
from rich.logging import RichHandler

LOG_MODES = ("cli", "json")
JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
TEXT_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONTAINER_MARKERS = ("docker", "kubepods", "containerd", "podman")


def get_program_invocation() -> str:
    """Return the program name shown in usage lines (`python tool.py` for scripts)."""
    if not sys.argv or not sys.argv[0]:
        return "program"
    script = Path(sys.argv[0])
    if script.suffix == ".py":
        return f"python {script.name}"
    return script.name


class CaseInsensitiveDict(UserDict):
    """Mapping whose string keys are stored case-folded, so `"ADD"` finds `"add"`."""

    @staticmethod
    def fold(key: Any) -> Any:
        return key.casefold() if isinstance(key, str) else key

    def __setitem__(self, key: Any, item: Any) -> None:
        self.data[self.fold(key)] = item

    def __getitem__(self, key: Any) -> Any:
        return self.data[self.fold(key)]

    def __delitem__(self, key: Any) -> None:
        del self.data[self.fold(key)]

    def __contains__(self, key: object) -> bool:
        return self.fold(key) in self.data


def running_in_container() -> bool:
    cgroup = Path("/proc/1/cgroup")
    try:
        content = cgroup.read_text(encoding="UTF-8")
    except OSError:
        return False
    return any(marker in content for marker in CONTAINER_MARKERS)


def _console_handler(mode: str) -> logging.Handler:
    if mode == "cli":
        return RichHandler(
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format=f"[{LOG_DATE_FORMAT}]",
        )
    handler = logging.StreamHandler()
    handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
    return handler


def _file_handler(log_filename: str, as_json: bool) -> logging.Handler:
    handler = logging.FileHandler(log_filename, mode="a", encoding="UTF-8")
    if as_json:
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Install root handlers for an application built on Optbind.

    Optbind never configures logging on import. Call this from an entry point to
    see the parser's DEBUG records: models built, tokens classified, unknown
    options skipped and conversion failures.

    Args:
        mode (str | None): "cli" for Rich console records or "json" for one JSON
            object per line. Defaults to `OPTBIND_LOG_MODE`, then to "json" inside
            a container and "cli" elsewhere.
        log_filename (str | None): Also append records to this file.
        json_log_to_file (bool): Write the file records as JSON.
        file_log_level (int): Threshold of the file handler.
        console_log_level (int): Threshold of the console handler.

    Raises:
        ValueError: If `mode` is not "cli" or "json".
    """
    mode = mode or os.getenv("OPTBIND_LOG_MODE") or (
        "json" if running_in_container() else "cli"
    )
    if mode not in LOG_MODES:
        raise ValueError(f"Invalid log mode: {mode}")

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)

    console_handler = _console_handler(mode)
    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = _file_handler(log_filename, json_log_to_file)
        file_handler.setLevel(file_log_level)
        root.addHandler(file_handler)

    logging.getLogger("babel").setLevel(logging.WARNING)
    logging.getLogger("optbind").debug("Logging set up in '%s' mode", mode)
