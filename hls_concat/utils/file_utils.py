"""Filesystem helpers for naming and writing the assembled media file."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import PersistenceError
from ..models import OutputDescriptor
from .url_utils import infer_extension, resolve_url

DEFAULT_OUTPUT_NAME = "output"


def ensure_directory(path: str) -> str:
    """Creates a directory (and its parents) if needed."""

    Path(path).mkdir(parents=True, exist_ok=True)
    return path


def build_output_path(output_name: str, playlist_url: str, extension_hint: str) -> OutputDescriptor:
    """Decides the final output path for ``output_name``.

    A name that already carries an extension (judged on the name resolved
    against ``playlist_url``) is used verbatim; otherwise ``extension_hint``
    is appended.
    """

    if infer_extension(resolve_url(playlist_url, output_name)):
        return OutputDescriptor(path=output_name)
    return OutputDescriptor(path=f"{output_name}.{extension_hint}")


def write_media(path: str, data: bytes) -> None:
    """Writes ``data`` to ``path``, creating parent folders as needed."""

    try:
        parent = os.path.dirname(os.path.abspath(path))
        ensure_directory(parent)
        with open(path, "wb") as file_obj:
            file_obj.write(data)
    except OSError as exc:
        logging.error("Failed to write %s: %s", path, exc)
        raise PersistenceError(path, exc.strerror or str(exc)) from exc
    logging.info("Saved %s bytes to %s", len(data), path)
