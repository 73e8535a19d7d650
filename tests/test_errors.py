import pytest

from optbind.errors import (
    EMPTY_NAME,
    BadFormatConversionError,
    BadFormatTokenError,
    BadVerbSelectedError,
    ErrorType,
    HelpRequestedError,
    HelpVerbRequestedError,
    MissingRequiredOptionError,
    MissingValueOptionError,
    MutuallyExclusiveSetError,
    NameInfo,
    NoVerbSelectedError,
    SequenceOutOfRangeError,
    UnknownOptionError,
    VersionRequestedError,
    only_meaningful,
)
from optbind.help_text import format_error
from optbind.parser import SpecificationModel


@pytest.mark.parametrize(
    "name_info, expected",
    [
        (NameInfo("s", "string-value"), "-s/--string-value"),
        (NameInfo("s", ""), "-s"),
        (NameInfo("", "weburl"), "--weburl"),
        (EMPTY_NAME, ""),
    ],
)
def test_name_text(name_info, expected):
    assert name_info.name_text == expected
    assert str(name_info) == expected


def test_name_info_from_specification():
    model = SpecificationModel()
    option = model.add_option("-i", "--int-seq", type=list[int])
    value = model.add_value("source")
    assert NameInfo.from_specification(option) == NameInfo("i", "int-seq")
    assert NameInfo.from_specification(value) == NameInfo("", "source")


def test_errors_compare_by_value():
    assert UnknownOptionError("foo") == UnknownOptionError("foo")
    assert UnknownOptionError("foo") != BadFormatTokenError("foo")
    assert MutuallyExclusiveSetError(EMPTY_NAME, "a") != MutuallyExclusiveSetError(
        EMPTY_NAME, "b"
    )


def test_every_error_has_a_distinct_tag():
    errors = [
        BadFormatTokenError("--="),
        UnknownOptionError("x"),
        MissingValueOptionError(EMPTY_NAME),
        BadFormatConversionError(EMPTY_NAME),
        MissingRequiredOptionError(EMPTY_NAME),
        SequenceOutOfRangeError(EMPTY_NAME),
        MutuallyExclusiveSetError(EMPTY_NAME, "set"),
        NoVerbSelectedError(),
        BadVerbSelectedError("push"),
        HelpRequestedError(),
        HelpVerbRequestedError(),
        VersionRequestedError(),
    ]
    assert {error.tag for error in errors} == set(ErrorType)


def test_only_meaningful_drops_requests():
    errors = [HelpRequestedError(), UnknownOptionError("x"), NoVerbSelectedError()]
    assert only_meaningful(errors) == [UnknownOptionError("x")]


@pytest.mark.parametrize(
    "error, message",
    [
        (BadFormatTokenError("--=x"), "Token '--=x' is not recognized."),
        (UnknownOptionError("foo"), "Option 'foo' is unknown."),
        (MissingValueOptionError(NameInfo("s", "")), "Option '-s' has no value."),
        (
            BadFormatConversionError(NameInfo("", "count")),
            "Option '--count' is defined with a bad format.",
        ),
        (
            MissingRequiredOptionError(NameInfo("r", "required")),
            "Required option '-r/--required' is missing.",
        ),
        (
            MutuallyExclusiveSetError(NameInfo("", "weburl"), "theweb"),
            "Option '--weburl' is not compatible with the other options of set 'theweb'.",
        ),
        (NoVerbSelectedError(), "No verb selected."),
        (BadVerbSelectedError("push"), "Verb 'push' is not recognized."),
        (HelpVerbRequestedError("push", False), "Help requested for unknown verb 'push'."),
        (HelpVerbRequestedError("add", True), "Help requested."),
        (VersionRequestedError(), "Version requested."),
    ],
)
def test_format_error(error, message):
    assert format_error(error) == message


def test_format_sequence_error_names_the_option():
    message = format_error(SequenceOutOfRangeError(NameInfo("i", "int-seq")))
    assert "-i/--int-seq" in message
