"""verbs_demo.py

Git-style verbs, each declared with a dataclass.

    python examples/verbs_demo.py add -p src/
    python examples/verbs_demo.py commit -m "first"
    python examples/verbs_demo.py help commit
"""

import sys
from dataclasses import dataclass

from optbind import CommandLineParser, option, value
from optbind.help_text import render_result


@dataclass
class Add:
    """Add file contents to the index."""

    patch: bool = option("-p", "--patch", default=False, help="Pick hunks interactively.")
    paths: list[str] = value(default_factory=list, help="Files to add.")


@dataclass
class Commit:
    """Record changes to the repository."""

    message: str = option("-m", "--message", required=True, default="")
    amend: bool = option("--amend", default=False)


def main() -> int:
    parser = CommandLineParser()
    result = parser.parse_verbs(sys.argv[1:], Add, Commit)
    if result.failed:
        models = list(parser.verb_models([Add, Commit]).values())
        render_result(result, models, heading="verbs_demo")
        return 1 if result.meaningful_errors else 0
    print(f"{result.verb}: {result.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
