"""End-to-end tests for the orchestrator and the command line entry point."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from hls_concat import main as cli
from hls_concat.errors import ConfigurationError, EmptyPlaylist, FetchError, UnsupportedFeature
from tests.fakes import FakeHttpClient

if TYPE_CHECKING:
    from pytest_mock import MockerFixture
else:
    MockerFixture = object

SEGMENT_ROOT = "https://cdn.example.com/a/"


@pytest.fixture
def fake_client(base_url: str, sample_playlist: str) -> FakeHttpClient:
    return FakeHttpClient(
        {
            base_url: sample_playlist,
            f"{SEGMENT_ROOT}seg0.ts": b"AA",
            f"{SEGMENT_ROOT}seg1.ts": b"BB",
        },
        delays={f"{SEGMENT_ROOT}seg0.ts": 0.01},
    )


@pytest.fixture
def in_tmp_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_download_playlist_default_output(in_tmp_path: Path, base_url: str, fake_client: FakeHttpClient) -> None:
    output = cli.download_playlist(base_url, http_client=fake_client)

    assert output.path == "output.ts"
    assert (in_tmp_path / "output.ts").read_bytes() == b"AABB"
    assert fake_client.requested[0] == base_url


def test_download_playlist_explicit_extension(in_tmp_path: Path, base_url: str, fake_client: FakeHttpClient) -> None:
    output = cli.download_playlist(base_url, "movie.mp4", http_client=fake_client)

    assert output.path == "movie.mp4"
    assert (in_tmp_path / "movie.mp4").read_bytes() == b"AABB"


def test_download_playlist_requires_url(mocker: MockerFixture) -> None:
    http_client = mocker.patch.object(cli, "HttpClient")

    with pytest.raises(ConfigurationError):
        cli.download_playlist(None)

    http_client.assert_not_called()


def test_fetch_failure_writes_nothing(in_tmp_path: Path, base_url: str, fake_client: FakeHttpClient) -> None:
    fake_client.responses[f"{SEGMENT_ROOT}seg1.ts"] = 404

    with pytest.raises(FetchError) as exc_info:
        cli.download_playlist(base_url, http_client=fake_client)

    assert exc_info.value.status == 404
    assert list(in_tmp_path.iterdir()) == []


def test_playlist_fetch_failure(in_tmp_path: Path, base_url: str) -> None:
    client = FakeHttpClient({base_url: 500})

    with pytest.raises(FetchError):
        cli.download_playlist(base_url, http_client=client)

    assert list(in_tmp_path.iterdir()) == []


def test_unsupported_playlist(in_tmp_path: Path, base_url: str) -> None:
    client = FakeHttpClient({base_url: "#EXTM3U\n#EXT-X-STREAM-INF:BANDWIDTH=1\nlow/index.m3u8\n"})

    with pytest.raises(UnsupportedFeature):
        cli.download_playlist(base_url, http_client=client)

    assert client.requested == [base_url]


def test_empty_playlist(in_tmp_path: Path, base_url: str) -> None:
    client = FakeHttpClient({base_url: "#EXTM3U\n#EXT-X-ENDLIST\n"})

    with pytest.raises(EmptyPlaylist):
        cli.download_playlist(base_url, http_client=client)

    assert list(in_tmp_path.iterdir()) == []


def test_owned_client_is_closed(mocker: MockerFixture, in_tmp_path: Path, base_url: str, fake_client: FakeHttpClient) -> None:
    factory = mocker.patch.object(cli, "HttpClient", return_value=fake_client)

    cli.download_playlist(base_url, workers=4, timeout=12.5)

    factory.assert_called_once_with(timeout=12.5)
    assert fake_client.closed


def test_main_end_to_end(mocker: MockerFixture, in_tmp_path: Path, base_url: str, fake_client: FakeHttpClient) -> None:
    mocker.patch.object(cli, "HttpClient", return_value=fake_client)

    cli.main(["--url", base_url, "--output", "clip"])

    assert (in_tmp_path / "clip.ts").read_bytes() == b"AABB"


def test_main_reads_url_from_environment(
    mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch, in_tmp_path: Path, base_url: str, fake_client: FakeHttpClient
) -> None:
    monkeypatch.setenv("HLS_URL", base_url)
    monkeypatch.setenv("HLS_WORKERS", "2")
    mocker.patch.object(cli, "HttpClient", return_value=fake_client)

    cli.main([])

    assert (in_tmp_path / "output.ts").read_bytes() == b"AABB"
    assert fake_client.max_in_flight <= 2


def test_main_missing_url_exits(
    mocker: MockerFixture, in_tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    http_client = mocker.patch.object(cli, "HttpClient")

    with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc_info:
        cli.main([])

    assert exc_info.value.code == 1
    assert "--url" in caplog.text
    http_client.assert_not_called()


def test_main_fetch_failure_exits(
    mocker: MockerFixture, in_tmp_path: Path, base_url: str, fake_client: FakeHttpClient
) -> None:
    fake_client.responses[f"{SEGMENT_ROOT}seg1.ts"] = 404
    mocker.patch.object(cli, "HttpClient", return_value=fake_client)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--url", base_url])

    assert exc_info.value.code == 1
    assert not (in_tmp_path / "output.ts").exists()


def test_help_exits_without_running(mocker: MockerFixture, capsys: pytest.CaptureFixture) -> None:
    download = mocker.patch.object(cli, "download_playlist")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--help"])

    assert exc_info.value.code == 0
    assert "--url" in capsys.readouterr().out
    download.assert_not_called()


@pytest.mark.parametrize("argv", [["--workers", "0"], ["--timeout", "-1"], ["--workers", "many"]])
def test_invalid_numeric_options(argv: list) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.parse_args(argv)

    assert exc_info.value.code == 2


@pytest.mark.parametrize(
    ("name", "value"),
    [("HLS_TIMEOUT", "-1"), ("HLS_TIMEOUT", "soon"), ("HLS_WORKERS", "0"), ("HLS_WORKERS", "many")],
)
def test_invalid_environment_options_rejected(
    mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch, in_tmp_path: Path, base_url: str, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)
    http_client = mocker.patch.object(cli, "HttpClient")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--url", base_url])

    assert exc_info.value.code == 2
    http_client.assert_not_called()


def test_environment_options_are_converted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HLS_WORKERS", "3")
    monkeypatch.setenv("HLS_TIMEOUT", "2.5")

    args = cli.parse_args([])

    assert args.workers == 3
    assert args.timeout == 2.5
