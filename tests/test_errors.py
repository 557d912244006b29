import pytest

from streamstats.errors import MultiError, StreamError


def test_multi_error_with_message_lists_every_error():
    err = MultiError(
        "error retrieving values from metrics",
        [StreamError("error retrieving value"), StreamError("error retrieving value")],
    )
    assert str(err) == (
        "error retrieving values from metrics: 2 errors occurred:\n"
        "\t* error retrieving value\n\t* error retrieving value\n\n"
    )


def test_multi_error_without_message():
    err = MultiError("", [StreamError("[0 0]"), StreamError("[1 0]")])
    assert str(err) == "2 errors occurred:\n\t* [0 0]\n\t* [1 0]\n\n"


def test_multi_error_single_error_uses_singular():
    err = MultiError("ctx", [StreamError("boom")])
    assert str(err) == "ctx: 1 error occurred:\n\t* boom\n\n"


def test_multi_error_keeps_errors_and_is_catchable_as_stream_error():
    inner = [StreamError("a"), ValueError("b")]
    with pytest.raises(StreamError) as excinfo:
        raise MultiError("wrapped", inner)
    assert excinfo.value.errors == inner
    assert excinfo.value.message == "wrapped"


def test_multi_error_copies_error_list():
    inner = [StreamError("a")]
    err = MultiError("ctx", inner)
    inner.append(StreamError("b"))
    assert len(err.errors) == 1