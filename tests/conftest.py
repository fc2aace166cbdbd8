"""Pytest configuration and fixtures.

This module provides common fixtures used across all tests.
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.core.logging import setup_logging

# Setup logging for tests
setup_logging()


@pytest.fixture
def video_file(tmp_path: Path) -> Path:
    """Create a small fake video file on disk.

    Returns:
        Path to the file
    """
    path = tmp_path / "v.mp4"
    path.write_bytes(b"fake video content")
    return path


@pytest.fixture
def upload_client_stub() -> MagicMock:
    """Create a stub upload capability that records calls.

    Returns:
        Mock with an async insert_video returning {"id": "vid123"}
    """
    stub = MagicMock()
    stub.insert_video = AsyncMock(return_value={"id": "vid123"})
    return stub


@pytest.fixture
def anyio_backend() -> str:
    """Specify backend for anyio.

    Returns:
        Backend name
    """
    return "asyncio"
