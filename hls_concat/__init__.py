"""Download an HLS media playlist and concatenate its segments into one file."""

from .downloader import M3U8Parser, MediaAssembler, parse_playlist
from .errors import (
    ConfigurationError,
    EmptyPlaylist,
    FetchError,
    FetchTimeout,
    HLSError,
    PersistenceError,
    TransportError,
    UnsupportedFeature,
)
from .main import download_playlist

__all__ = [
    "ConfigurationError",
    "EmptyPlaylist",
    "FetchError",
    "FetchTimeout",
    "HLSError",
    "M3U8Parser",
    "MediaAssembler",
    "PersistenceError",
    "TransportError",
    "UnsupportedFeature",
    "download_playlist",
    "parse_playlist",
]

__version__ = "0.1.0"
