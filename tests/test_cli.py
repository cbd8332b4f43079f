"""Tests for the radio-player command line."""

from unittest.mock import MagicMock, patch

import pytest

from radio_player.cli import _station_source, build_parser, run_stations
from radio_player.core.config import ClientConfig, Config
from radio_player.domain.stations import StationApiClient, StationCatalog, StorageError


def test_parser_subcommands():
    parser = build_parser()

    args = parser.parse_args(["serve", "--port", "9000"])
    assert args.subcommand == "serve"
    assert args.port == 9000

    args = parser.parse_args(["stations", "add", "Jazz", "https://jazz.example/", "--bitrate", "128 kbps"])
    assert (args.action, args.name, args.bitrate) == ("add", "Jazz", "128 kbps")


def test_station_source_local_by_default():
    assert isinstance(_station_source(Config(), None), StationCatalog)


def test_station_source_remote_when_configured():
    config = Config(client=ClientConfig(api_url="http://radio.local:8642"))
    source = _station_source(config, None)

    assert isinstance(source, StationApiClient)
    assert source.base_url == "http://radio.local:8642"


@pytest.fixture
def no_logging():
    with patch("radio_player.cli.setup_from_config"):
        yield


def test_stations_list(no_logging, capsys):
    args = build_parser().parse_args(["stations", "list"])

    assert run_stations(Config(), args) == 0
    assert "Classic Rock 101.5" in capsys.readouterr().out


def test_stations_add_invalid(no_logging, capsys):
    args = build_parser().parse_args(["stations", "add", "", "not-a-url"])

    assert run_stations(Config(), args) == 1
    err = capsys.readouterr().err
    assert "Invalid station data" in err
    assert "url:" in err


def test_stations_delete_missing(no_logging, capsys):
    args = build_parser().parse_args(["stations", "delete", "missing"])

    assert run_stations(Config(), args) == 1
    assert "Station not found" in capsys.readouterr().err


def test_stations_remote_failure(no_logging, capsys):
    args = build_parser().parse_args(["stations", "--api-url", "http://radio.local", "list"])
    client = MagicMock()
    client.list_stations.side_effect = StorageError("Failed to fetch stations")

    with patch("radio_player.cli._station_source", return_value=client):
        assert run_stations(Config(), args) == 1
    assert "Failed to fetch stations" in capsys.readouterr().err


def test_stations_add_reports_on_stdout(no_logging, capsys):
    args = build_parser().parse_args(["stations", "add", "KEXP", "https://kexp.example/stream"])

    assert run_stations(Config(), args) == 0
    captured = capsys.readouterr()
    assert "Added KEXP" in captured.out
    assert "Added KEXP" not in captured.err
