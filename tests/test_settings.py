import pytest
from pydantic import ValidationError

from optbind.settings import ParserSettings, load_settings


def test_defaults():
    settings = ParserSettings()
    assert settings.case_sensitive is True
    assert settings.culture is None
    assert settings.ignore_unknown_arguments is False
    assert settings.enable_dash_dash is True
    assert settings.auto_help is True
    assert settings.auto_version is True
    assert settings.mutually_exclusive is True


def test_settings_are_immutable():
    settings = ParserSettings()
    with pytest.raises(ValidationError):
        settings.case_sensitive = False


@pytest.mark.parametrize("culture", ["invariant", "", "  "])
def test_invariant_culture_normalises_to_none(culture):
    assert ParserSettings(culture=culture).culture is None


@pytest.mark.parametrize("culture", ["en_US", "de-DE", "it"])
def test_known_cultures_are_accepted(culture):
    assert ParserSettings(culture=culture).culture == culture


def test_unknown_culture_is_rejected():
    with pytest.raises(ValidationError):
        ParserSettings(culture="xx_NOPE")


def test_unknown_setting_is_rejected():
    with pytest.raises(ValidationError):
        ParserSettings(colour=True)


def test_load_yaml_settings(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("parser:\n  case_sensitive: false\n  culture: de_DE\n")
    settings = load_settings(path)
    assert settings.case_sensitive is False
    assert settings.culture == "de_DE"


def test_load_toml_settings(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text("ignore_unknown_arguments = true\nenable_dash_dash = false\n")
    settings = load_settings(str(path))
    assert settings.ignore_unknown_arguments is True
    assert settings.enable_dash_dash is False


def test_load_settings_rejects_bad_values(tmp_path):
    path = tmp_path / "settings.yml"
    path.write_text("case_sensitive: [1, 2]\n")
    with pytest.raises(ValidationError):
        load_settings(path)


def test_load_settings_rejects_unsupported_format(tmp_path):
    path = tmp_path / "settings.ini"
    path.write_text("[parser]\n")
    with pytest.raises(ValueError):
        load_settings(path)


def test_load_settings_requires_a_mapping(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        load_settings(path)


def test_load_settings_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "absent.yaml")
