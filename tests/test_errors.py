"""Tests for the stream error taxonomy."""

from filestream.errors import (
    ERR_STREAM_CLOSED,
    StreamClosedError,
    StreamError,
    StreamOpenError,
)


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(StreamOpenError, StreamError)
        assert issubclass(StreamClosedError, StreamError)

    def test_closed_sentinel(self):
        assert isinstance(ERR_STREAM_CLOSED, StreamClosedError)
        assert str(ERR_STREAM_CLOSED) == "FS Error: Stream is Closed."

    def test_open_error_message(self):
        err = StreamOpenError("/nonexistent_dir/out.txt", "No such file or directory")
        assert err.path == "/nonexistent_dir/out.txt"
        assert "/nonexistent_dir/out.txt" in str(err)
        assert "No such file or directory" in str(err)

    def test_open_error_without_reason(self):
        err = StreamOpenError("out.txt")
        assert str(err) == "FS Error: cannot open out.txt"
