"""filestream: asynchronous single-file text writer."""

from __future__ import annotations

__version__ = "1.0.0"

from filestream.config import StreamSettings, setup_logging
from filestream.errors import (
    ERR_STREAM_CLOSED,
    StreamClosedError,
    StreamError,
    StreamOpenError,
)
from filestream.session import open_stream
from filestream.stream import FileStream, StreamState, new_file_stream, start_stream

__all__ = [
    "ERR_STREAM_CLOSED",
    "FileStream",
    "StreamClosedError",
    "StreamError",
    "StreamOpenError",
    "StreamSettings",
    "StreamState",
    "new_file_stream",
    "open_stream",
    "setup_logging",
    "start_stream",
]
