import pytest

from optbind.exceptions import InvalidStateError
from optbind.parser.token_stream import ArgumentStream, CharacterStream


def test_argument_stream_walks_forward():
    stream = ArgumentStream(["--name", "value", "-x"])
    seen = []
    while stream.advance():
        seen.append((stream.current(), stream.next_lookahead(), stream.is_last()))
    assert seen == [
        ("--name", "value", False),
        ("value", "-x", False),
        ("-x", None, True),
    ]


def test_current_before_advance_is_invalid():
    stream = ArgumentStream(["a"])
    with pytest.raises(InvalidStateError):
        stream.current()


def test_current_after_exhaustion_is_invalid():
    stream = ArgumentStream(["a"])
    assert stream.advance() is True
    assert stream.advance() is False
    with pytest.raises(InvalidStateError):
        stream.current()


def test_advance_stays_false_once_exhausted():
    stream = ArgumentStream([])
    assert stream.advance() is False
    assert stream.advance() is False
    assert stream.exhausted


def test_retreat_rewinds_one_position():
    stream = ArgumentStream(["a", "b"])
    stream.advance()
    stream.advance()
    assert stream.retreat() is True
    assert stream.current() == "a"


def test_retreat_at_start_is_invalid():
    stream = ArgumentStream(["a", "b"])
    stream.advance()
    with pytest.raises(InvalidStateError):
        stream.retreat()


def test_position_can_be_saved_and_restored():
    stream = ArgumentStream(["a", "b", "c"])
    stream.advance()
    saved = stream.position
    stream.advance()
    stream.advance()
    stream.restore(saved)
    assert stream.current() == "a"
    assert stream.remaining() == ["b", "c"]


def test_restore_out_of_range_is_invalid():
    stream = ArgumentStream(["a"])
    with pytest.raises(InvalidStateError):
        stream.restore(5)


def test_character_stream_suffix():
    chars = CharacterStream("xVALUE")
    chars.advance()
    assert chars.current() == "x"
    assert chars.next_lookahead() == "V"
    assert chars.remaining_suffix_from_next() == "VALUE"


def test_character_stream_suffix_on_last_character_is_empty():
    chars = CharacterStream("ab")
    chars.advance()
    chars.advance()
    assert chars.is_last()
    assert chars.remaining_suffix_from_next() == ""


def test_character_stream_suffix_before_advance_is_invalid():
    with pytest.raises(InvalidStateError):
        CharacterStream("abc").remaining_suffix_from_next()
