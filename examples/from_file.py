"""from_file.py

Load a specification from `tool.yaml` and bind arguments against it.

    python examples/from_file.py -i 1 2 3 --weburl http://example.com report.txt
"""

import sys
from pathlib import Path

from optbind import CommandLineParser
from optbind.config import loader
from optbind.help_text import render_result

model = loader(Path(__file__).with_name("tool.yaml"))

if __name__ == "__main__":
    result = CommandLineParser(case_sensitive=False).parse_arguments(model)
    if result.failed:
        render_result(result, model)
        sys.exit(1 if result.meaningful_errors else 0)
    print(result.value)
