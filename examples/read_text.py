"""read_text.py

Print the head or tail of text files, declared with a dataclass.

    python examples/read_text.py --lines 3 README.md
    python examples/read_text.py -t -n 2 setup.py README.md
"""

import sys
from dataclasses import dataclass
from pathlib import Path

from optbind import CommandLineParser, option, value
from optbind.help_text import render_result
from optbind.utils import setup_logging

setup_logging()


@dataclass(frozen=True)
class Options:
    """Print the first or last lines of files."""

    files: list[Path] = value(0, min_items=1, required=True, help="Files to read.")
    lines: int = option("-n", "--lines", default=5, mutually_exclusive_set="amount")
    chars: int | None = option("-c", "--chars", default=None, mutually_exclusive_set="amount")
    tail: bool = option("-t", "--tail", default=False, help="Read from the end.")
    verbose: bool = option("-v", "--verbose", default=False)


def run(options: Options) -> None:
    for path in options.files:
        if options.verbose:
            print(f"==> {path} <==")
        text = path.read_text(encoding="UTF-8")
        if options.chars is not None:
            print(text[-options.chars :] if options.tail else text[: options.chars])
            continue
        rows = text.splitlines()
        print("\n".join(rows[-options.lines :] if options.tail else rows[: options.lines]))


def main() -> int:
    result = CommandLineParser().parse_arguments(Options)
    if result.failed:
        render_result(result, CommandLineParser().build_model(Options))
        return 1 if result.meaningful_errors else 0
    run(result.value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
