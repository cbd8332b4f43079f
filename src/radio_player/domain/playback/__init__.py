"""Playback domain - stream lifecycle and the playback state machine.

This domain handles:
- The audio resource contract and its mpv implementation (JSON IPC)
- The single-flight playback coordinator (idle/loading/playing/paused/errored)
- The remote control action table and displayed metadata
"""

# Resource contract
from .resource import (
    AudioEvent,
    AudioResource,
    EventListener,
    PlaybackError,
    PlaybackStartError,
    ResourceCreationError,
    ResourceFactory,
)

# mpv implementation
from .mpv import (
    MpvAudioResource,
    MpvStatus,
    check_mpv_available,
    get_mpv_property,
    mpv_resource_factory,
    send_mpv_command,
    translate_status,
)

# Remote control
from .remote import REMOTE_ACTIONS, MediaMetadata, RemoteControl, RemoteHandler

# Coordinator
from .coordinator import (
    DEFAULT_VOLUME,
    PlaybackCoordinator,
    PlaybackSnapshot,
    PlaybackState,
    clamp_volume,
)

__all__ = [
    # Resource contract
    "AudioEvent",
    "AudioResource",
    "EventListener",
    "PlaybackError",
    "PlaybackStartError",
    "ResourceCreationError",
    "ResourceFactory",
    # mpv implementation
    "MpvAudioResource",
    "MpvStatus",
    "check_mpv_available",
    "get_mpv_property",
    "mpv_resource_factory",
    "send_mpv_command",
    "translate_status",
    # Remote control
    "REMOTE_ACTIONS",
    "MediaMetadata",
    "RemoteControl",
    "RemoteHandler",
    # Coordinator
    "DEFAULT_VOLUME",
    "PlaybackCoordinator",
    "PlaybackSnapshot",
    "PlaybackState",
    "clamp_volume",
]
