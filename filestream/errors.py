"""Error taxonomy for file streams."""

from __future__ import annotations


class StreamError(Exception):
    """Base class for all file stream errors."""


class StreamOpenError(StreamError):
    """The output file could not be created or truncated for writing."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        msg = f"FS Error: cannot open {path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class StreamClosedError(StreamError):
    """The stream was shut down through its quit signal."""

    def __init__(self, msg: str = "FS Error: Stream is Closed.") -> None:
        super().__init__(msg)


# Status value sent exactly once on the status channel when a stream shuts
# down. Not meant to be raised; submit raises a fresh StreamClosedError.
ERR_STREAM_CLOSED = StreamClosedError()
