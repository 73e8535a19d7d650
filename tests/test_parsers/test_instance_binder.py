from enum import Enum

import pytest

from optbind.errors import (
    BadFormatConversionError,
    BadFormatTokenError,
    ErrorType,
    MissingRequiredOptionError,
    MissingValueOptionError,
    MutuallyExclusiveSetError,
    NameInfo,
    UnknownOptionError,
)
from optbind.parser import BinderState, InstanceBinder, SpecificationModel
from optbind.settings import ParserSettings


class Colors(Enum):
    Red = 0
    Green = 1
    Blue = 2


@pytest.fixture
def model():
    model = SpecificationModel()
    model.add_option("-s", "--string-value")
    model.add_option("-i", "--int-value", type=int)
    model.add_option("-x", "--bool-value", type=bool)
    model.add_option("-n", "--nullable-int", type=int | None)
    model.add_option("--colors", type=Colors)
    model.add_option("--ratio", type=float)
    return model


def bind(model, args, **settings):
    return InstanceBinder(model, ParserSettings(**settings)).bind(args)


def test_negative_number_is_a_value_for_a_short_option():
    model = SpecificationModel()
    model.add_option("-i", type=int)
    result = bind(model, ["-i", "-4096"])
    assert result.succeeded
    assert result.value == {"i": -4096}


def test_long_option_forms(model):
    result = bind(model, ["--string-value=hello", "--int-value", "10"])
    assert result.succeeded
    assert result.value["string_value"] == "hello"
    assert result.value["int_value"] == 10


def test_short_option_adjacent_value(model):
    result = bind(model, ["-sVALUE", "-i15"])
    assert result.value["string_value"] == "VALUE"
    assert result.value["int_value"] == 15


def test_short_group_with_switch_and_value(model):
    result = bind(model, ["-xsVALUE"])
    assert result.succeeded
    assert result.value["bool_value"] is True
    assert result.value["string_value"] == "VALUE"


def test_short_group_value_from_next_argument(model):
    result = bind(model, ["-xs", "next"])
    assert result.value["string_value"] == "next"


def test_missing_values_get_kind_defaults(model):
    result = bind(model, [])
    assert result.succeeded
    assert result.value == {
        "string_value": None,
        "int_value": None,
        "bool_value": False,
        "nullable_int": None,
        "colors": None,
        "ratio": None,
    }


def test_declared_default_is_used_when_absent():
    model = SpecificationModel()
    model.add_option("--level", type=int, default=3)
    assert bind(model, []).value == {"level": 3}
    assert bind(model, ["--level", "5"]).value == {"level": 5}


def test_repeated_scalar_last_value_wins(model):
    result = bind(model, ["-i", "1", "--int-value", "2"])
    assert result.value["int_value"] == 2


def test_switch_with_explicit_value_is_bad_format(model):
    result = bind(model, ["--bool-value=true"])
    assert result.errors == (BadFormatConversionError(NameInfo("x", "bool-value")),)


def test_option_without_value_at_end_is_missing_value(model):
    result = bind(model, ["--string-value"])
    assert result.errors == (MissingValueOptionError(NameInfo("s", "string-value")),)


def test_option_followed_by_option_is_missing_value(model):
    result = bind(model, ["-s", "-x"])
    assert result.errors == (MissingValueOptionError(NameInfo("s", "string-value")),)
    assert result.value["bool_value"] is True


def test_enum_by_name_and_ordinal(model):
    assert bind(model, ["--colors", "green"]).value["colors"] is Colors.Green
    assert bind(model, ["--colors", "2"]).value["colors"] is Colors.Blue


def test_enum_ordinal_out_of_range_is_bad_format(model):
    result = bind(model, ["--colors", "3"])
    assert result.failed
    assert result.errors == (BadFormatConversionError(NameInfo("", "colors")),)


def test_non_ascii_digit_enum_is_bad_format(model):
    result = bind(model, ["--colors", "²"])
    assert result.errors == (BadFormatConversionError(NameInfo("", "colors")),)


def test_culture_rejects_misplaced_group_symbols(model):
    result = bind(model, ["--int-value", "1.5.0"], culture="de_DE")
    assert result.errors == (BadFormatConversionError(NameInfo("i", "int-value")),)
    assert bind(model, ["-i", "1.500"], culture="de_DE").value["int_value"] == 1500


def test_nullable_value(model):
    assert bind(model, ["-n", "7"]).value["nullable_int"] == 7
    result = bind(model, ["-n", "seven"])
    assert result.error_types == [ErrorType.BAD_FORMAT_CONVERSION]


def test_culture_is_used_for_numbers(model):
    assert bind(model, ["--ratio", "1,5"], culture="de_DE").value["ratio"] == 1.5
    result = bind(model, ["--ratio", "1,5"])
    assert result.error_types == [ErrorType.BAD_FORMAT_CONVERSION]


def test_unknown_options_are_all_reported(model):
    result = bind(model, ["--foo", "-q", "--int-value", "3", "--bar=1"])
    assert result.errors == (
        UnknownOptionError("foo"),
        UnknownOptionError("q"),
        UnknownOptionError("bar"),
    )
    assert result.value["int_value"] == 3


def test_unknown_short_in_group_ends_the_group(model):
    result = bind(model, ["-xqfoo"])
    assert result.errors == (UnknownOptionError("q"),)
    assert result.value["bool_value"] is True
    assert result.value["string_value"] is None


def test_unknown_short_at_group_start_skips_the_rest(model):
    result = bind(model, ["-qx", "-i", "3"])
    assert result.errors == (UnknownOptionError("q"),)
    assert result.value["bool_value"] is False
    assert result.value["int_value"] == 3


def test_ignore_unknown_arguments(model):
    result = bind(model, ["--foo", "--int-value", "3"], ignore_unknown_arguments=True)
    assert result.succeeded
    assert result.value["int_value"] == 3


@pytest.mark.parametrize("bogus", [[], ["--xyz"], ["--xyz", "--abc", "--q=1"], ["-q"]])
def test_ignoring_unknown_options_never_changes_bound_values(model, bogus):
    valid = ["-s", "text", "--int-value", "42", "-x"]
    baseline = bind(model, valid, ignore_unknown_arguments=True)
    result = bind(model, bogus + valid, ignore_unknown_arguments=True)
    assert result.succeeded
    assert result.value == baseline.value


def test_bad_format_token(model):
    result = bind(model, ["--=value"])
    assert result.errors == (BadFormatTokenError("--=value"),)


def test_case_insensitive_names(model):
    result = bind(model, ["--INT-VALUE", "4", "-S", "a"], case_sensitive=False)
    assert result.succeeded
    assert result.value["int_value"] == 4
    assert result.value["string_value"] == "a"


def test_case_sensitive_names_by_default(model):
    result = bind(model, ["--INT-VALUE", "4"])
    assert result.errors == (UnknownOptionError("INT-VALUE"),)


def test_missing_required_option():
    model = SpecificationModel()
    model.add_option("-r", "--required-value", required=True)
    result = bind(model, [])
    assert result.errors == (MissingRequiredOptionError(NameInfo("r", "required-value")),)


def test_required_option_with_bad_value_also_violates_required_rule():
    model = SpecificationModel()
    model.add_option("--count", type=int, required=True)
    result = bind(model, ["--count", "many"])
    assert result.error_types == [
        ErrorType.BAD_FORMAT_CONVERSION,
        ErrorType.MISSING_REQUIRED_OPTION,
    ]


def test_mutually_exclusive_options_each_get_an_error():
    model = SpecificationModel()
    model.add_option("--weburl", mutually_exclusive_set="theweb")
    model.add_option("--ftpurl", mutually_exclusive_set="theweb")
    model.add_option("--fileurl", mutually_exclusive_set="theweb")
    result = bind(model, ["--weburl", "http://x/", "--ftpurl", "ftp://y/"])
    assert result.errors == (
        MutuallyExclusiveSetError(NameInfo("", "weburl"), "theweb"),
        MutuallyExclusiveSetError(NameInfo("", "ftpurl"), "theweb"),
    )


def test_mutually_exclusive_single_option_succeeds():
    model = SpecificationModel()
    model.add_option("--weburl", mutually_exclusive_set="theweb")
    model.add_option("--ftpurl", mutually_exclusive_set="theweb")
    assert bind(model, ["--weburl", "http://x/"]).succeeded
    assert bind(model, ["--weburl", "a", "--weburl", "b"]).succeeded


def test_mutually_exclusive_sets_are_independent():
    model = SpecificationModel()
    model.add_option("--weburl", mutually_exclusive_set="web")
    model.add_option("--ftpurl", mutually_exclusive_set="web")
    model.add_option("--red", type=bool, mutually_exclusive_set="colors")
    model.add_option("--blue", type=bool, mutually_exclusive_set="colors")
    result = bind(model, ["--weburl", "a", "--red"])
    assert result.succeeded
    result = bind(model, ["--weburl", "a", "--red", "--blue"])
    assert [error.set_name for error in result.errors] == ["colors", "colors"]


def test_mutually_exclusive_enforcement_can_be_disabled():
    model = SpecificationModel()
    model.add_option("--weburl", mutually_exclusive_set="theweb")
    model.add_option("--ftpurl", mutually_exclusive_set="theweb")
    result = bind(model, ["--weburl", "a", "--ftpurl", "b"], mutually_exclusive=False)
    assert result.succeeded


def test_errors_are_ordered_by_phase():
    model = SpecificationModel()
    model.add_option("--weburl", mutually_exclusive_set="theweb")
    model.add_option("--ftpurl", mutually_exclusive_set="theweb")
    model.add_option("--needed", required=True)
    model.add_option("--count", type=int)
    result = bind(model, ["--weburl", "a", "--bogus", "--ftpurl", "b", "--count", "x"])
    assert result.error_types == [
        ErrorType.UNKNOWN_OPTION,
        ErrorType.BAD_FORMAT_CONVERSION,
        ErrorType.MISSING_REQUIRED_OPTION,
        ErrorType.MUTUALLY_EXCLUSIVE_SET,
        ErrorType.MUTUALLY_EXCLUSIVE_SET,
    ]


def test_failure_keeps_partial_values(model):
    result = bind(model, ["-i", "5", "--colors", "purple"])
    assert result.failed
    assert result.value["int_value"] == 5
    assert result.value["colors"] is None


@pytest.mark.parametrize(
    "value, type_",
    [("hello", str), ("-17", int), ("0", int), ("2.5", float), ("-0.125", float)],
)
def test_scalar_round_trip(value, type_):
    model = SpecificationModel()
    model.add_option("--name", type=type_)
    expected = type_(value)
    result = bind(model, ["--name", str(expected)])
    assert result.value["name"] == expected


def test_binder_is_reusable_across_calls(model):
    binder = InstanceBinder(model)
    first = binder.bind(["-i", "1", "--weird"])
    second = binder.bind(["-i", "2"])
    assert first.failed
    assert second.succeeded
    assert second.value["int_value"] == 2
    assert binder.state is BinderState.DONE
