"""Playlist parsing and segment assembly."""

from .m3u8_parser import M3U8Parser, parse_playlist
from .media_assembler import MediaAssembler

__all__ = ["M3U8Parser", "MediaAssembler", "parse_playlist"]
