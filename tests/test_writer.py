"""Tests for the raw text file writer."""

from __future__ import annotations

import pytest

from filestream.writer import RawWriter


class TestRawWriter:
    async def test_writes_payloads_verbatim(self, tmp_path):
        path = tmp_path / "out.txt"
        writer = RawWriter(path)
        await writer.open()

        await writer.write("alpha")
        await writer.write(" beta\n")
        await writer.write("gamma")
        await writer.close()

        assert path.read_text(encoding="utf-8") == "alpha beta\ngamma"

    async def test_truncates_existing_file(self, tmp_path):
        path = tmp_path / "out.txt"
        path.write_text("stale contents", encoding="utf-8")
        writer = RawWriter(path)
        await writer.open()
        await writer.close()

        assert path.read_text(encoding="utf-8") == ""

    async def test_flushes_each_write(self, tmp_path):
        path = tmp_path / "out.txt"
        writer = RawWriter(path)
        await writer.open()
        await writer.write("visible")

        assert path.read_text(encoding="utf-8") == "visible"
        await writer.close()

    async def test_flush_on_close(self, tmp_path):
        path = tmp_path / "out.txt"
        writer = RawWriter(path, flush_each_write=False)
        await writer.open()
        await writer.write("buffered")
        await writer.close()

        assert path.read_text(encoding="utf-8") == "buffered"

    async def test_counts_encoded_bytes(self, tmp_path):
        writer = RawWriter(tmp_path / "out.txt")
        await writer.open()
        await writer.write("abc")
        await writer.write("é")
        await writer.close()

        assert writer.bytes_written == 5

    async def test_custom_encoding(self, tmp_path):
        path = tmp_path / "out.txt"
        writer = RawWriter(path, encoding="latin-1")
        await writer.open()
        await writer.write("café")
        await writer.close()

        assert path.read_bytes() == b"caf\xe9"

    async def test_open_missing_directory_raises(self, tmp_path):
        path = tmp_path / "missing" / "out.txt"
        writer = RawWriter(path)
        with pytest.raises(OSError):
            await writer.open()
        assert not writer.is_open
        assert not path.exists()

    async def test_noop_when_not_opened(self, tmp_path):
        path = tmp_path / "out.txt"
        writer = RawWriter(path)
        # write without open should not raise
        await writer.write("ignored")
        await writer.close()
        assert not path.exists()

    async def test_close_twice(self, tmp_path):
        writer = RawWriter(tmp_path / "out.txt")
        await writer.open()
        await writer.close()
        await writer.close()
        assert not writer.is_open
