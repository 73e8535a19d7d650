import pytest

from optbind.errors import ErrorType, HelpRequestedError, UnknownOptionError
from optbind.parser import ParseResult, ParseResultType


def test_success():
    result = ParseResult.success({"a": 1}, verb="run")
    assert result.tag is ParseResultType.PARSED
    assert result.succeeded and not result.failed
    assert bool(result)
    assert result.verb == "run"
    assert result.errors == ()


def test_failure():
    result = ParseResult.failure({"a": None}, [UnknownOptionError("x")])
    assert result.tag is ParseResultType.NOT_PARSED
    assert result.failed
    assert not result
    assert result.error_types == [ErrorType.UNKNOWN_OPTION]


def test_failure_requires_errors():
    with pytest.raises(ValueError):
        ParseResult.failure(None, [])


def test_callbacks_run_for_the_matching_outcome():
    seen = []
    ParseResult.success(5).with_parsed(seen.append).with_not_parsed(seen.append)
    errors = (UnknownOptionError("x"),)
    ParseResult.failure(None, errors).with_parsed(seen.append).with_not_parsed(seen.append)
    assert seen == [5, errors]


def test_map_result():
    assert ParseResult.success(2).map_result(lambda value: value * 2, len) == 4
    failure = ParseResult.failure(None, [UnknownOptionError("x"), UnknownOptionError("y")])
    assert failure.map_result(lambda value: value, len) == 2


def test_meaningful_errors_skip_requests():
    result = ParseResult.failure(None, [HelpRequestedError()])
    assert result.failed
    assert result.meaningful_errors == []
