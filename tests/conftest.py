"""Shared fixtures for the hls_concat test-suite."""

import pytest

BASE_URL = "https://cdn.example.com/a/index.m3u8"

SAMPLE_PLAYLIST = """#EXTM3U
#EXTINF:10,
seg0.ts
#EXTINF:10,
seg1.ts
"""


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def sample_playlist() -> str:
    return SAMPLE_PLAYLIST


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep HLS_* variables from the developer's shell out of the tests."""
    for name in ("HLS_URL", "HLS_OUTPUT", "HLS_WORKERS", "HLS_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
