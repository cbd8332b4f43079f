"""Tests for the mpv-backed audio resource."""

import asyncio
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from radio_player.core.config import PlayerConfig
from radio_player.domain.playback.mpv import (
    MpvAudioResource,
    MpvStatus,
    check_mpv_available,
    mpv_resource_factory,
    translate_status,
)
from radio_player.domain.playback.resource import (
    AudioEvent,
    PlaybackStartError,
    ResourceCreationError,
)

MPV = "radio_player.domain.playback.mpv"


@pytest.fixture
def config(tmp_path) -> PlayerConfig:
    return PlayerConfig(socket_dir=str(tmp_path), poll_interval=0.01, ready_timeout=0.05)


class TestTranslateStatus:
    """Tests for mapping polled mpv state onto events."""

    def test_file_opened(self):
        events = translate_status(MpvStatus(), MpvStatus(loaded=True))
        assert events == [AudioEvent.CAN_PLAY]

    def test_starts_playing(self):
        before = MpvStatus(loaded=True)
        after = MpvStatus(loaded=True, paused=False, core_idle=False)
        assert translate_status(before, after) == [AudioEvent.PLAYING]

    def test_buffering(self):
        playing = MpvStatus(loaded=True, paused=False, core_idle=False)
        buffering = playing._replace(buffering=True, core_idle=True)
        assert translate_status(playing, buffering) == [AudioEvent.WAITING]

    def test_buffering_recovers(self):
        buffering = MpvStatus(loaded=True, paused=False, core_idle=True, buffering=True)
        playing = MpvStatus(loaded=True, paused=False, core_idle=False)
        assert translate_status(buffering, playing) == [AudioEvent.PLAYING]

    def test_paused(self):
        playing = MpvStatus(loaded=True, paused=False, core_idle=False)
        paused = playing._replace(paused=True, core_idle=True)
        assert translate_status(playing, paused) == [AudioEvent.PAUSE]

    def test_stream_ended(self):
        playing = MpvStatus(loaded=True, paused=False, core_idle=False)
        assert translate_status(playing, MpvStatus(paused=False)) == [AudioEvent.ENDED]

    def test_no_change(self):
        status = MpvStatus(loaded=True)
        assert translate_status(status, status) == []


class TestMpvAudioResource:
    def test_load_outside_event_loop(self, config):
        resource = MpvAudioResource("https://a.example/", config)
        with pytest.raises(ResourceCreationError):
            resource.load()

    def test_missing_binary(self, config):
        resource = MpvAudioResource("https://a.example/", config)

        async def scenario():
            with patch(f"{MPV}.subprocess.Popen", side_effect=FileNotFoundError("mpv")):
                resource.load()

        with pytest.raises(ResourceCreationError):
            asyncio.run(scenario())

    def test_load_spawns_paused_mpv(self, config):
        resource = MpvAudioResource("https://a.example/", config)
        process = MagicMock()
        process.poll.return_value = None

        async def scenario():
            with patch(f"{MPV}.subprocess.Popen", return_value=process) as popen:
                resource.load()
                resource.release()
            return popen.call_args[0][0]

        cmd = asyncio.run(scenario())

        assert "--pause=yes" in cmd
        assert "--idle=yes" in cmd
        assert "--volume=70" in cmd
        assert any(arg.startswith("--input-ipc-server=") for arg in cmd)
        process.kill.assert_called_once()

    def test_socket_never_appears_reports_error(self, config):
        resource = MpvAudioResource("https://a.example/", config)
        events = []
        resource.add_listener(lambda event, detail: events.append((event, detail)))
        process = MagicMock()
        process.poll.return_value = None

        async def scenario():
            with patch(f"{MPV}.subprocess.Popen", return_value=process):
                resource.load()
                await asyncio.sleep(0.3)
                resource.release()

        asyncio.run(scenario())

        assert events == [(AudioEvent.ERROR, "Failed to start audio player")]

    def test_play_times_out_before_ready(self, config):
        resource = MpvAudioResource("https://a.example/", config)
        with pytest.raises(PlaybackStartError):
            asyncio.run(resource.play())

    def test_play_after_release_rejected(self, config):
        resource = MpvAudioResource("https://a.example/", config)
        resource.release()
        with pytest.raises(PlaybackStartError):
            asyncio.run(resource.play())

    def test_play_unpauses(self, config):
        resource = MpvAudioResource("https://a.example/", config)
        resource._ready.set()

        with patch(f"{MPV}.send_mpv_command", return_value=True) as send:
            asyncio.run(resource.play())

        send.assert_called_once_with(None, {"command": ["set_property", "pause", False]})

    def test_play_rejected_by_mpv(self, config):
        resource = MpvAudioResource("https://a.example/", config)
        resource._ready.set()

        with patch(f"{MPV}.send_mpv_command", return_value=False):
            with pytest.raises(PlaybackStartError):
                asyncio.run(resource.play())

    def test_ended_before_playing_is_an_error(self, config):
        resource = MpvAudioResource("https://a.example/", config)
        events = []
        resource.add_listener(lambda event, detail: events.append(event))

        resource._apply_status(MpvStatus(loaded=True))
        resource._apply_status(MpvStatus())

        assert events == [AudioEvent.CAN_PLAY, AudioEvent.ERROR]

    def test_set_volume_before_ready_is_remembered(self, config):
        resource = MpvAudioResource("https://a.example/", config)
        with patch(f"{MPV}.send_mpv_command") as send:
            resource.set_volume(0.5)
        send.assert_not_called()
        assert resource._volume == 0.5

    def test_factory(self, config):
        resource = mpv_resource_factory(config)("https://a.example/")
        assert isinstance(resource, MpvAudioResource)
        assert resource.url == "https://a.example/"


class TestCheckMpvAvailable:
    def test_available(self):
        with patch(f"{MPV}.subprocess.run", return_value=MagicMock(returncode=0)):
            assert check_mpv_available()

    def test_missing(self):
        with patch(f"{MPV}.subprocess.run", side_effect=FileNotFoundError):
            assert not check_mpv_available()

    def test_timeout(self):
        with patch(f"{MPV}.subprocess.run", side_effect=subprocess.TimeoutExpired("mpv", 5)):
            assert not check_mpv_available()
