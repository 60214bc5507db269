"""Utility helpers for HTTP, URL and filesystem operations."""

from .http_client import HttpClient
from .file_utils import build_output_path, ensure_directory, write_media
from .url_utils import infer_extension, resolve_url

__all__ = ["HttpClient", "build_output_path", "ensure_directory", "infer_extension", "resolve_url", "write_media"]
