"""Raw text file writer: the file resource owned by a stream's run loop."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import aiofiles

logger = logging.getLogger(__name__)


class RawWriter:
    """Truncating text writer with optional per-write flush.

    Payloads are written verbatim; no delimiter is appended.
    """

    def __init__(
        self,
        path: Path | str,
        *,
        encoding: str = "utf-8",
        flush_each_write: bool = True,
    ) -> None:
        self._path = Path(path)
        self._encoding = encoding
        self._flush_each_write = flush_each_write
        self._file: Any = None
        self.bytes_written = 0

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_open(self) -> bool:
        return self._file is not None

    async def open(self) -> None:
        """Create or truncate the file. Raises ``OSError`` on failure."""
        self._file = await aiofiles.open(self._path, mode="w", encoding=self._encoding)
        self.bytes_written = 0

    async def write(self, text: str) -> None:
        if self._file is None:
            return
        await self._file.write(text)
        if self._flush_each_write:
            await self._file.flush()
        self.bytes_written += len(text.encode(self._encoding))

    async def close(self) -> None:
        if self._file is not None:
            try:
                await self._file.flush()
            finally:
                await self._file.close()
                self._file = None
