"""
mpv-backed audio resource using JSON IPC.

Each resource runs its own `mpv --idle` process. The stream is opened paused
(nothing is audible until play()), and a watcher task polls mpv properties
and turns their edges into AudioEvents.
"""

import asyncio
import json
import os
import socket
import subprocess
import uuid
from pathlib import Path
from typing import Any, NamedTuple, Optional

from loguru import logger

from radio_player.core.config import PlayerConfig

from .resource import (
    AudioEvent,
    EventListener,
    PlaybackStartError,
    ResourceCreationError,
    ResourceFactory,
)


def check_mpv_available(mpv_path: str = "mpv") -> bool:
    """Check if MPV is available on the system."""
    try:
        result = subprocess.run(
            [mpv_path, "--version"], capture_output=True, text=True, timeout=5
        )
        return result.returncode == 0
    except (subprocess.SubprocessError, FileNotFoundError, OSError):
        return False


def _ipc_request(socket_path: Optional[str], command: dict[str, Any]) -> Optional[dict[str, Any]]:
    """Send one JSON IPC request and return the decoded reply."""
    if not socket_path or not os.path.exists(socket_path):
        return None

    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.settimeout(2.0)
            sock.connect(socket_path)
            sock.sendall((json.dumps(command) + "\n").encode("utf-8"))
            response = sock.recv(4096).decode("utf-8").strip()
    except (socket.error, OSError):
        return None

    # mpv may interleave async events; the reply is the line with "error"
    for line in response.splitlines():
        try:
            data = json.loads(line)
        except json.JSONDecodeError:
            continue
        if "error" in data:
            return data
    return None


def send_mpv_command(socket_path: Optional[str], command: dict[str, Any]) -> bool:
    """Send JSON IPC command to MPV."""
    reply = _ipc_request(socket_path, command)
    return reply is not None and reply.get("error") == "success"


def get_mpv_property(socket_path: Optional[str], property_name: str) -> Any:
    """Get a property value from MPV."""
    reply = _ipc_request(socket_path, {"command": ["get_property", property_name]})
    if reply is not None and reply.get("error") == "success":
        return reply.get("data")
    return None


class MpvStatus(NamedTuple):
    """Polled mpv state."""

    loaded: bool = False  # A file is open (idle-active is false)
    paused: bool = True
    core_idle: bool = True
    buffering: bool = False  # paused-for-cache

    @property
    def audible(self) -> bool:
        return self.loaded and not self.paused and not self.core_idle and not self.buffering


def translate_status(previous: MpvStatus, current: MpvStatus) -> list[AudioEvent]:
    """Map the change between two polls onto resource events."""
    events: list[AudioEvent] = []

    if previous.loaded and not current.loaded:
        events.append(AudioEvent.ENDED)
        return events

    if current.loaded and not previous.loaded:
        events.append(AudioEvent.CAN_PLAY)
    if current.buffering and not previous.buffering and not current.paused:
        events.append(AudioEvent.WAITING)
    if current.audible and not previous.audible:
        events.append(AudioEvent.PLAYING)
    if current.paused and not previous.paused:
        events.append(AudioEvent.PAUSE)

    return events


class MpvAudioResource:
    """One stream, one mpv process.

    load() must be called from inside a running event loop.
    """

    def __init__(self, url: str, config: PlayerConfig):
        self.url = url
        self.config = config
        self._listeners: list[EventListener] = []
        self._process: Optional[subprocess.Popen] = None
        self._socket_path: Optional[str] = None
        self._watcher: Optional[asyncio.Task] = None
        self._ready = asyncio.Event()
        self._volume = config.volume / 100
        self._status = MpvStatus()
        self._has_played = False
        self._released = False
        self._failed = False

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: AudioEvent, detail: Optional[str] = None) -> None:
        for listener in list(self._listeners):
            listener(event, detail)

    def _fail(self, message: str) -> None:
        self._failed = True
        self._emit(AudioEvent.ERROR, message)

    # === Lifecycle ===

    def load(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise ResourceCreationError("mpv resources need a running event loop") from e

        socket_path = str(
            Path(self.config.socket_dir) / f"radio-player-{os.getpid()}-{uuid.uuid4().hex[:8]}.sock"
        )
        cmd = [
            self.config.mpv_path,
            "--idle=yes",
            "--no-video",
            "--no-terminal",
            f"--input-ipc-server={socket_path}",
            f"--volume={round(self._volume * 100)}",
            "--pause=yes",
            "--load-scripts=no",
        ]

        logger.info(f"Starting mpv for {self.url} (socket: {socket_path})")
        try:
            self._process = subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
            )
        except (subprocess.SubprocessError, OSError) as e:
            raise ResourceCreationError(f"Failed to start mpv: {e}") from e

        self._socket_path = socket_path
        self._watcher = loop.create_task(self._watch())

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._listeners.clear()
        self._ready.clear()

        if self._watcher is not None:
            self._watcher.cancel()
            self._watcher = None

        if self._process:
            try:
                self._process.kill()
                self._process.wait(timeout=2.0)
            except (OSError, subprocess.TimeoutExpired):
                pass  # Process already terminated or couldn't be killed
            self._process = None

        if self._socket_path and os.path.exists(self._socket_path):
            try:
                os.unlink(self._socket_path)
            except OSError:
                pass

    # === Commands ===

    async def play(self) -> None:
        if self._released or self._failed:
            raise PlaybackStartError("Stream is not available")

        try:
            await asyncio.wait_for(self._ready.wait(), timeout=self.config.ready_timeout)
        except asyncio.TimeoutError as e:
            raise PlaybackStartError("mpv did not become ready") from e

        ok = await asyncio.to_thread(
            send_mpv_command, self._socket_path, {"command": ["set_property", "pause", False]}
        )
        if not ok:
            raise PlaybackStartError("mpv rejected the play command")

    def pause(self) -> None:
        # Streams open paused, so nothing to do before mpv is ready
        if not self._ready.is_set():
            return
        send_mpv_command(self._socket_path, {"command": ["set_property", "pause", True]})

    def set_volume(self, volume: float) -> None:
        self._volume = max(0.0, min(1.0, volume))
        if self._ready.is_set():
            send_mpv_command(
                self._socket_path,
                {"command": ["set_property", "volume", round(self._volume * 100)]},
            )

    # === Watcher ===

    async def _wait_for_socket(self) -> bool:
        elapsed = 0.0
        while self._socket_path and not os.path.exists(self._socket_path):
            if self._process is None or self._process.poll() is not None:
                return False
            if elapsed > self.config.ready_timeout:
                logger.error(f"mpv socket creation timeout after {self.config.ready_timeout}s")
                return False
            await asyncio.sleep(0.1)
            elapsed += 0.1
        return True

    def _read_status(self) -> Optional[MpvStatus]:
        idle = get_mpv_property(self._socket_path, "idle-active")
        if idle is None:
            return None
        return MpvStatus(
            loaded=not idle,
            paused=bool(get_mpv_property(self._socket_path, "pause")),
            core_idle=bool(get_mpv_property(self._socket_path, "core-idle")),
            buffering=bool(get_mpv_property(self._socket_path, "paused-for-cache")),
        )

    def _apply_status(self, status: MpvStatus) -> None:
        for event in translate_status(self._status, status):
            if event is AudioEvent.ENDED and not self._has_played:
                self._fail("Failed to load audio stream")
                continue
            if event is AudioEvent.PLAYING:
                self._has_played = True
            self._emit(event)
        self._status = status

    async def _watch(self) -> None:
        if not await self._wait_for_socket():
            self._fail("Failed to start audio player")
            return

        loaded = await asyncio.to_thread(
            send_mpv_command, self._socket_path, {"command": ["loadfile", self.url, "replace"]}
        )
        if not loaded:
            self._fail("Failed to load audio stream")
            return

        self._emit(AudioEvent.LOAD_START)
        self._ready.set()

        waited = 0.0
        while not self._released and not self._failed:
            if self._process is None or self._process.poll() is not None:
                self._fail("Audio player exited unexpectedly")
                return

            status = await asyncio.to_thread(self._read_status)
            if status is not None:
                self._apply_status(status)

            if not self._status.loaded and not self._has_played:
                waited += self.config.poll_interval
                if waited > self.config.ready_timeout * 4:
                    logger.warning(f"Stream never opened: {self.url}")
                    self._fail("Failed to load audio stream")
                    return

            await asyncio.sleep(self.config.poll_interval)


def mpv_resource_factory(config: PlayerConfig) -> ResourceFactory:
    """Resource factory for the coordinator."""

    def create(url: str) -> MpvAudioResource:
        return MpvAudioResource(url, config)

    return create
