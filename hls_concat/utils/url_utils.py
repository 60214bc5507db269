"""URL helpers: relative reference resolution and file extension inference."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin, urlparse


def resolve_url(base_url: str, reference: str) -> str:
    """Resolves ``reference`` against ``base_url`` (RFC 3986 semantics)."""

    return urljoin(base_url, reference)


def infer_extension(url: str) -> Optional[str]:
    """Returns the extension of the last path component of ``url``, if any.

    ``clip.mp4`` and ``.backup.mp4`` give ``mp4``; ``clip``, ``clip.`` and
    ``.hidden`` give ``None``.
    """

    last_component = urlparse(url).path.split("/")[-1]
    pieces = last_component.split(".")
    if len(pieces) < 2 or (len(pieces) == 2 and not pieces[0]):
        return None
    return pieces[-1] or None
