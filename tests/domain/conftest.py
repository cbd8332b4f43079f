"""Shared fixtures for domain tests: a scripted stand-in for the audio resource."""

import asyncio
from typing import Optional

import pytest

from radio_player.domain.playback.resource import (
    AudioEvent,
    PlaybackStartError,
    ResourceCreationError,
)


class FakeResource:
    """Audio resource driven by the test instead of a real player."""

    def __init__(self, url: str, fail_load: bool = False, fail_play: bool = False):
        self.url = url
        self.fail_load = fail_load
        self.fail_play = fail_play
        self.listeners = []
        self.ever_attached = []  # Kept after removal, to replay stale events
        self.loaded = False
        self.released = False
        self.pause_calls = 0
        self.play_calls = 0
        self.volume: Optional[float] = None
        self.play_gate: Optional[asyncio.Event] = None

    def add_listener(self, listener) -> None:
        self.listeners.append(listener)
        self.ever_attached.append(listener)

    def remove_listener(self, listener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def emit(self, event: AudioEvent, detail: Optional[str] = None, stale: bool = False) -> None:
        targets = self.ever_attached if stale else self.listeners
        for listener in list(targets):
            listener(event, detail)

    def load(self) -> None:
        if self.fail_load:
            raise ResourceCreationError("cannot open")
        self.loaded = True

    async def play(self) -> None:
        self.play_calls += 1
        if self.play_gate is not None:
            await self.play_gate.wait()
        if self.fail_play:
            raise PlaybackStartError("autoplay blocked")

    def pause(self) -> None:
        self.pause_calls += 1

    def set_volume(self, volume: float) -> None:
        self.volume = volume

    def release(self) -> None:
        self.released = True


class FakeResourceFactory:
    """Creates FakeResources and records how many were live at each creation."""

    def __init__(self):
        self.created: list[FakeResource] = []
        self.live_at_creation: list[int] = []
        self.fail_create: set[str] = set()
        self.fail_load: set[str] = set()
        self.fail_play: set[str] = set()

    def __call__(self, url: str) -> FakeResource:
        if url in self.fail_create:
            raise ResourceCreationError("no decoder")
        self.live_at_creation.append(len(self.live))
        resource = FakeResource(
            url, fail_load=url in self.fail_load, fail_play=url in self.fail_play
        )
        self.created.append(resource)
        return resource

    @property
    def live(self) -> list[FakeResource]:
        return [r for r in self.created if not r.released]

    @property
    def last(self) -> FakeResource:
        return self.created[-1]


@pytest.fixture
def factory() -> FakeResourceFactory:
    return FakeResourceFactory()
