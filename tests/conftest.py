"""Shared test fixtures."""

import asyncio

import pytest

from filestream.config import StreamSettings
from filestream.stream import new_file_stream, start_stream


@pytest.fixture
def settings():
    return StreamSettings()


@pytest.fixture
def out_path(tmp_path):
    return tmp_path / "test_out.txt"


@pytest.fixture
async def running_stream(out_path, settings):
    """A stream that has already reported ready; shut down after the test."""
    stream = new_file_stream()
    task = asyncio.create_task(start_stream(out_path, stream, settings))
    assert await stream.status() is None

    yield stream, task

    if not task.done():
        stream.request_quit()
        await stream.status()
        await task
