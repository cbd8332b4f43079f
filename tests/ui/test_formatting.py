"""Tests for player view rendering helpers."""

import pytest

from radio_player.domain.playback.coordinator import PlaybackSnapshot, PlaybackState
from radio_player.domain.stations.models import Station
from radio_player.ui.formatting import (
    render_controls,
    render_now_playing,
    render_station_line,
    station_subtitle,
    status_label,
    volume_bar,
)

JAZZ = Station(id="1", name="Jazz FM", url="https://jazz.example/", bitrate="128 kbps")


def test_subtitle_falls_back():
    assert station_subtitle(JAZZ) == "Radio Station"


@pytest.mark.parametrize(
    "state,label",
    [
        (PlaybackState.IDLE, "Stopped"),
        (PlaybackState.LOADING, "Connecting..."),
        (PlaybackState.PLAYING, "Playing"),
        (PlaybackState.PAUSED, "Paused"),
        (PlaybackState.ERRORED, "Error"),
    ],
)
def test_status_label(state, label):
    assert status_label(PlaybackSnapshot(state=state))[0] == label


def test_volume_bar():
    assert volume_bar(50, width=10) == "█████░░░░░ 50%"
    assert volume_bar(0, width=4) == "░░░░ 0%"


def test_station_line_marks_playing_station():
    line = render_station_line(JAZZ, is_selected=True, is_playing=True).plain
    assert line.startswith("▶ Jazz FM")
    assert "[128 kbps]" in line


def test_station_line_unselected():
    assert render_station_line(JAZZ, is_selected=False, is_playing=True).plain.startswith("  Jazz FM")


def test_now_playing_without_station():
    text = render_now_playing(None, PlaybackSnapshot()).plain
    assert "No station selected" in text


def test_now_playing_shows_error():
    snapshot = PlaybackSnapshot(state=PlaybackState.ERRORED, error="Failed to play audio stream")
    text = render_now_playing(JAZZ, snapshot).plain

    assert "Jazz FM" in text
    assert "Failed to play audio stream" in text


def test_controls_show_volume():
    assert "70%" in render_controls(PlaybackSnapshot(), can_navigate=False).plain
