from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from .downloader.m3u8_parser import M3U8Parser
from .downloader.media_assembler import DEFAULT_WORKERS, MediaAssembler
from .errors import ConfigurationError, HLSError
from .models import OutputDescriptor
from .utils.file_utils import DEFAULT_OUTPUT_NAME, build_output_path, write_media
from .utils.http_client import DEFAULT_TIMEOUT, HttpClient

load_dotenv()

DESCRIPTION = """Download media from an HLS media playlist and concatenate it into a single file.

The playlist cannot be a multivariant playlist, and playlists that use
encryption, byte ranges, discontinuities or EXT-X-MAP are rejected."""


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hls-concat",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--url", default=_env_str("HLS_URL"), help="Remote URL of an HLS media playlist")
    parser.add_argument(
        "--output",
        default=_env_str("HLS_OUTPUT") or DEFAULT_OUTPUT_NAME,
        help="Output file name; the extension is taken from the segments when omitted",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        # String defaults go through ``type``, so bad environment values are rejected too.
        default=_env_str("HLS_WORKERS") or DEFAULT_WORKERS,
        help="Maximum number of concurrent segment downloads",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=_env_str("HLS_TIMEOUT") or DEFAULT_TIMEOUT,
        help="Per-request timeout in seconds",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def download_playlist(
    playlist_url: str | None,
    output_name: str = DEFAULT_OUTPUT_NAME,
    *,
    workers: int = DEFAULT_WORKERS,
    timeout: float = DEFAULT_TIMEOUT,
    http_client: HttpClient | None = None,
) -> OutputDescriptor:
    """Fetches ``playlist_url``, assembles its segments and writes one file.

    Nothing is written unless every segment was fetched successfully.
    """

    if not playlist_url:
        raise ConfigurationError("Must pass URL via --url option")

    client = http_client or HttpClient(timeout=timeout)
    try:
        parsed = M3U8Parser(client).fetch(playlist_url)
        media = MediaAssembler(client, workers=workers).assemble(playlist_url, parsed)
    finally:
        if http_client is None:
            client.close()

    output = build_output_path(output_name, playlist_url, media.extension_hint)
    write_media(output.path, media.data)
    return output


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        output = download_playlist(args.url, args.output, workers=args.workers, timeout=args.timeout)
    except HLSError as exc:
        logging.error("%s", exc)
        sys.exit(1)

    logging.info("Done %s", os.path.basename(output.path))


if __name__ == "__main__":
    main()
