from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from optbind.config import import_object, loader, resolve_type
from optbind.exceptions import SpecificationError
from optbind.parser import CommandLineParser, TargetKind

YAML_SPEC = """\
program: copy-tool
help: Copy files around.
options:
  - flags: ['-i', '--int-seq']
    type: int
    kind: sequence
    min_items: 1
  - flags: ['--mode']
    default: fast
    mutually_exclusive_set: speed
  - flags: ['--slow']
    type: bool
    mutually_exclusive_set: speed
  - positional: true
    dest: source
    type: path
    required: true
"""

TOML_SPEC = """\
program = "price-tool"

[[options]]
flags = ["--price"]
type = "decimal"

[[options]]
flags = ["--tags"]
kind = "sequence"
separator = ","
"""


def write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text)
    return path


def test_yaml_specification(tmp_path):
    model = loader(write(tmp_path, "spec.yaml", YAML_SPEC))
    assert model.program == "copy-tool"
    assert model.help_text == "Copy files around."
    assert model.get("int_seq").kind is TargetKind.SEQUENCE
    assert model.get("source").positional

    result = CommandLineParser().parse_arguments(model, ["-i", "1", "2", "--", "src.txt"])
    assert result.succeeded, result.errors
    assert result.value == {
        "int_seq": [1, 2],
        "mode": "fast",
        "slow": False,
        "source": Path("src.txt"),
    }


def test_yaml_specification_keeps_exclusive_sets(tmp_path):
    model = loader(write(tmp_path, "spec.yml", YAML_SPEC))
    result = CommandLineParser().parse_arguments(
        model, ["--mode", "turbo", "--slow", "src.txt"]
    )
    assert [error.set_name for error in result.errors] == ["speed", "speed"]


def test_toml_specification(tmp_path):
    model = loader(str(write(tmp_path, "spec.toml", TOML_SPEC)))
    result = CommandLineParser().parse_arguments(
        model, ["--price", "9.99", "--tags", "a,b"]
    )
    assert result.value == {"price": Decimal("9.99"), "tags": ["a", "b"]}


def test_loader_requires_options(tmp_path):
    with pytest.raises(ValueError, match="list of options"):
        loader(write(tmp_path, "spec.yaml", "program: nothing\n"))


def test_loader_rejects_unknown_keys(tmp_path):
    path = write(tmp_path, "spec.yaml", "options:\n  - flags: ['-x']\n    colour: red\n")
    with pytest.raises(ValidationError):
        loader(path)


def test_positional_entry_needs_a_dest(tmp_path):
    path = write(tmp_path, "spec.yaml", "options:\n  - positional: true\n")
    with pytest.raises(ValidationError):
        loader(path)


def test_option_entry_needs_flags(tmp_path):
    path = write(tmp_path, "spec.yaml", "options:\n  - dest: orphan\n")
    with pytest.raises(ValidationError):
        loader(path)


def test_invalid_model_raises_specification_error(tmp_path):
    path = write(
        tmp_path, "spec.yaml", "options:\n  - flags: ['--name']\n    max_items: 2\n"
    )
    with pytest.raises(SpecificationError):
        loader(path)


def test_loader_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        loader(tmp_path / "missing.yaml")


def test_loader_rejects_bad_path_type():
    with pytest.raises(TypeError):
        loader(42)


def test_resolve_builtin_and_dotted_types():
    assert resolve_type("INT") is int
    assert resolve_type("decimal") is Decimal
    assert resolve_type("pathlib.PurePosixPath").__name__ == "PurePosixPath"


@pytest.mark.parametrize(
    "dotted", ["nodots", "optbind.no_such_module.Thing", "optbind.errors.NoSuchThing"]
)
def test_import_object_failures(dotted):
    with pytest.raises(SpecificationError):
        import_object(dotted)
