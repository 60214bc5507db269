"""Tools for parsing media playlists into ordered segment references."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..errors import UnsupportedFeature
from ..models import ParsedPlaylist
from ..utils.http_client import HttpClient

LINE_BREAK = re.compile(r"\r\n|\r|\n")

# Tag prefix -> feature name, checked in order.
REJECTED_TAG_PREFIXES = (
    ("#EXT-X-STREAM-INF", "multivariant playlist"),
    ("#EXT-X-KEY", "encryption"),
    ("#EXT-X-BYTERANGE", "byte-range addressing"),
)
DISCONTINUITY_TAG = "#EXT-X-DISCONTINUITY"
MAP_TAG = "#EXT-X-MAP"


def _check_tag(line: str) -> None:
    for prefix, feature in REJECTED_TAG_PREFIXES:
        if line.startswith(prefix):
            raise UnsupportedFeature(feature)
    if line.strip() == DISCONTINUITY_TAG:
        raise UnsupportedFeature("discontinuity")
    if line.startswith(MAP_TAG):
        raise UnsupportedFeature("init segment map")


def parse_playlist(text: str) -> ParsedPlaylist:
    """Parses a media playlist, failing fast on unsupported tags.

    Tags outside the reject list are ignored. Other lines are trimmed and,
    unless blank, kept as segment URIs in playlist order.
    """

    segment_uris: List[str] = []
    for line in LINE_BREAK.split(text):
        if line.startswith("#"):
            _check_tag(line)
            continue
        uri = line.strip()
        if uri:
            segment_uris.append(uri)
    return ParsedPlaylist(segment_uris=segment_uris)


class M3U8Parser:
    """Fetches media playlists and extracts their segment references."""

    def __init__(self, http_client: Optional[HttpClient] = None) -> None:
        self._http_client = http_client

    def parse(self, text: str) -> ParsedPlaylist:
        playlist = parse_playlist(text)
        logging.debug("Playlist lists %s segment(s)", len(playlist.segment_uris))
        if not playlist.segment_uris:
            logging.warning("Playlist did not contain any segment URIs")
        return playlist

    def fetch(self, m3u8_url: str) -> ParsedPlaylist:
        if self._http_client is None:
            raise RuntimeError("M3U8Parser.fetch requires an HttpClient")
        logging.info("Fetching playlist %s", m3u8_url)
        text = self._http_client.fetch_text(m3u8_url)
        return self.parse(text)
