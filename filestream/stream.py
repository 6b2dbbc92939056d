"""FileStream: a single-file asynchronous text sink.

A caller builds a handle with :func:`new_file_stream`, launches
:func:`start_stream` as a task, waits for the ready status and then submits
payloads from any number of tasks. The run loop is the only code that ever
touches the file; every payload goes through the handle's write queue.

Usage::

    stream = new_file_stream()
    task = asyncio.create_task(start_stream("out.txt", stream))
    if (err := await stream.status()) is not None:
        raise err
    await stream.submit("hello ")
    await stream.submit("world")
    stream.request_quit()
    await stream.status()  # ERR_STREAM_CLOSED
    await task
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from filestream.config import StreamSettings
from filestream.errors import ERR_STREAM_CLOSED, StreamClosedError
from filestream.writer import RawWriter

logger = logging.getLogger(__name__)


class StreamState(StrEnum):
    UNOPENED = "unopened"
    OPENING = "opening"
    READY = "ready"
    DRAINING = "draining"
    CLOSED = "closed"
    FAILED = "failed"


TERMINAL_STATES = frozenset({StreamState.CLOSED, StreamState.FAILED})


@dataclass
class _Submission:
    """A queued payload and the future its producer is waiting on."""

    text: str
    done: asyncio.Future[None]


class FileStream:
    """Handle bundling the write queue, quit signal and status channel.

    Shared by reference between producers and the run loop. The run loop
    updates :attr:`state`; nothing else does.
    """

    def __init__(self) -> None:
        self._writes: asyncio.Queue[_Submission] = asyncio.Queue()
        self._quit = asyncio.Event()
        self._status: asyncio.Queue[BaseException | None] = asyncio.Queue()
        self.state = StreamState.UNOPENED

    @property
    def pending(self) -> int:
        """Payloads submitted but not yet taken by the run loop."""
        return self._writes.qsize()

    @property
    def quit_requested(self) -> bool:
        return self._quit.is_set()

    async def submit(self, text: str) -> None:
        """Queue *text* and wait until the run loop has written it.

        Raises :class:`StreamClosedError` if the stream is dead or shuts
        down before taking the payload.
        """
        if not isinstance(text, str):
            raise TypeError(f"payload must be str, not {type(text).__name__}")
        if self.state in TERMINAL_STATES:
            raise StreamClosedError()
        done: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._writes.put_nowait(_Submission(text, done))
        await done

    def request_quit(self) -> None:
        """Ask the run loop to shut down. Safe to call more than once."""
        self._quit.set()

    async def status(self) -> BaseException | None:
        """Receive the next status report.

        ``None`` once the file is open, the open error if opening failed,
        then :data:`ERR_STREAM_CLOSED` when the stream shuts down.
        """
        return await self._status.get()

    # -- Run-loop side -------------------------------------------------------

    def _report(self, err: BaseException | None) -> None:
        self._status.put_nowait(err)

    def _reject_pending(self) -> int:
        """Fail every queued submission with StreamClosedError."""
        rejected = 0
        while not self._writes.empty():
            _reject(self._writes.get_nowait())
            rejected += 1
        return rejected


def new_file_stream() -> FileStream:
    """Return a blank handle ready to be given to :func:`start_stream`."""
    return FileStream()


def _reject(sub: _Submission) -> None:
    if not sub.done.done():
        sub.done.set_exception(StreamClosedError())


async def start_stream(
    path: Path | str,
    stream: FileStream,
    settings: StreamSettings | None = None,
) -> None:
    """Open *path* and serve *stream* until quit is requested.

    Blocks for the whole lifetime of the stream, so run it as its own task.
    Without *settings*, the default YAML config is loaded.
    Exactly one status is reported when opening finishes and, after a
    successful open, exactly one :data:`ERR_STREAM_CLOSED` on shutdown.
    """
    if settings is None:
        settings = StreamSettings.load()

    stream.state = StreamState.OPENING
    writer = RawWriter(
        path,
        encoding=settings.encoding,
        flush_each_write=settings.flush_each_write,
    )
    try:
        await writer.open()
    except asyncio.CancelledError:
        stream.state = StreamState.FAILED
        stream._reject_pending()
        raise
    except (OSError, ValueError, LookupError) as e:
        logger.debug("Stream open failed for %s: %s", path, e)
        stream.state = StreamState.FAILED
        stream._reject_pending()
        stream._report(e)
        return

    logger.debug("Stream ready: %s", writer.path)
    stream.state = StreamState.READY
    stream._report(None)
    try:
        await _drain(stream, writer)
    finally:
        stream.state = StreamState.CLOSED
        dropped = stream._reject_pending()
        if dropped:
            logger.debug("Dropped %d pending payloads for %s", dropped, writer.path)
        try:
            await writer.close()
        except OSError as e:
            logger.warning("Error closing %s: %s", writer.path, e)
        logger.debug("Stream closed: %s (%d bytes)", writer.path, writer.bytes_written)
        stream._report(ERR_STREAM_CLOSED)


async def _drain(stream: FileStream, writer: RawWriter) -> None:
    """Serve payloads until the quit signal fires.

    A quit that is ready together with a payload wins; that payload is
    rejected, not written.
    """
    stream.state = StreamState.DRAINING
    quit_wait = asyncio.ensure_future(stream._quit.wait())
    get: asyncio.Future[_Submission] | None = None
    try:
        while True:
            get = asyncio.ensure_future(stream._writes.get())
            done, _ = await asyncio.wait(
                {get, quit_wait}, return_when=asyncio.FIRST_COMPLETED,
            )
            if quit_wait in done:
                return
            sub = get.result()
            get = None
            await _apply(writer, sub)
    finally:
        quit_wait.cancel()
        if get is not None:
            if get.done() and not get.cancelled():
                _reject(get.result())
            else:
                get.cancel()


async def _apply(writer: RawWriter, sub: _Submission) -> None:
    """Write one payload. Write errors are logged and swallowed."""
    if sub.done.done():
        # Producer gave up while queued.
        return
    try:
        await writer.write(sub.text)
        logger.debug("Wrote %d chars to %s", len(sub.text), writer.path)
    except asyncio.CancelledError:
        # Write may not have happened.
        _reject(sub)
        raise
    except (OSError, UnicodeError) as e:
        logger.warning("Write to %s failed, payload dropped: %s", writer.path, e)
    finally:
        if not sub.done.done():
            sub.done.set_result(None)
