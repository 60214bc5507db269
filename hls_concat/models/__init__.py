"""Data models for playlists, segment jobs, and assembled media."""

from .playlist_models import AssembledMedia, OutputDescriptor, ParsedPlaylist, SegmentJob

__all__ = [
    "ParsedPlaylist",
    "SegmentJob",
    "AssembledMedia",
    "OutputDescriptor",
]
