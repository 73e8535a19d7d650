"""
Optbind CLI Parsing

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.

Checks an argument vector against a specification file:

    python -m optbind tool.yaml -- --int-seq 1 2 3 -v
"""

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from rich.table import Table

from optbind.config import loader
from optbind.console import console
from optbind.errors import only_meaningful
from optbind.help_text import render_result
from optbind.parser import CommandLineParser, SpecificationModel, option, value
from optbind.settings import ParserSettings, load_settings
from optbind.utils import setup_logging


@dataclass(frozen=True)
class CheckOptions:
    """Bind arguments against a YAML or TOML specification file and print the result."""

    spec_file: Path = value(0, required=True, help="Specification file (YAML or TOML).")
    args: list[str] = value(1, default_factory=list, help="Arguments to bind, after `--`.")
    settings: Path | None = option(
        "-s", "--settings", default=None, help="Parser settings file."
    )
    as_json: bool = option(
        "-j", "--json", default=False, help="Print the bound values as JSON."
    )
    debug: bool = option(
        "-d", "--debug", default=False, help="Log parser activity to the console."
    )


def print_values(values: Any, as_json: bool) -> None:
    data = values if isinstance(values, dict) else vars(values)
    if as_json:
        console.print_json(json.dumps(data, default=str))
        return
    table = Table("dest", "value", box=None)
    for dest, bound in data.items():
        table.add_row(dest, repr(bound))
    console.print(table)


def exit_code(errors: Sequence[Any]) -> int:
    return 1 if only_meaningful(errors) else 0


def main(argv: Sequence[str] | None = None) -> int:
    model = SpecificationModel.from_dataclass(CheckOptions, program="optbind")
    result = CommandLineParser().parse_arguments(
        model, list(sys.argv[1:] if argv is None else argv)
    )
    if result.failed:
        render_result(result, model)
        return exit_code(result.errors)

    options: CheckOptions = result.value
    if options.debug:
        setup_logging(mode="cli", console_log_level=logging.DEBUG)
    settings = load_settings(options.settings) if options.settings else ParserSettings()
    spec_model = loader(options.spec_file)
    bound = CommandLineParser(settings).parse_arguments(spec_model, options.args)
    if bound.failed:
        render_result(bound, spec_model)
        return exit_code(bound.errors)
    print_values(bound.value, options.as_json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
