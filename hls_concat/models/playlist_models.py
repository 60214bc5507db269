"""Pydantic models describing a parsed playlist and the assembled output."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ParsedPlaylist(BaseModel):
    """Segment references of a media playlist, in playlist order.

    ``init_segment_uri`` is reserved for ``EXT-X-MAP`` support. The parser
    currently rejects that tag, so the field is always ``None``.
    """

    model_config = ConfigDict(frozen=True)

    segment_uris: List[str]
    init_segment_uri: Optional[str] = None


class SegmentJob(BaseModel):
    """A single absolute URL to fetch and its slot in the output."""

    model_config = ConfigDict(frozen=True)

    index: int
    url: str


class AssembledMedia(BaseModel):
    """Concatenated segment bytes plus the extension inferred from them."""

    data: bytes
    extension_hint: str
    segment_count: int


class OutputDescriptor(BaseModel):
    """Where the assembled media ends up on disk."""

    path: str
