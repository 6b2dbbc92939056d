"""open_stream: context manager around the start/ready/quit/closed handshake."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from filestream.config import StreamSettings
from filestream.errors import StreamOpenError
from filestream.stream import FileStream, new_file_stream, start_stream

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_stream(
    path: Path | str,
    settings: StreamSettings | None = None,
) -> AsyncIterator[FileStream]:
    """Run a stream for the duration of the ``async with`` block.

    Usage::

        async with open_stream("out.txt") as stream:
            await stream.submit("hello ")
            await stream.submit("world")
    """
    stream = new_file_stream()
    task = asyncio.create_task(start_stream(path, stream, settings))

    err = await stream.status()
    if err is not None:
        await task
        raise StreamOpenError(str(path), str(err)) from err

    try:
        yield stream
    finally:
        stream.request_quit()
        closed = await stream.status()
        logger.debug("Stream %s finished: %s", path, closed)
        await task
