"""
Station domain models.
"""

from dataclasses import asdict, dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Station:
    """A named streaming-audio source.

    `id` is assigned by the store at creation and never changes. Optional
    fields are None when absent, never empty strings.
    """

    id: str
    name: str
    url: str
    description: Optional[str] = None
    bitrate: Optional[str] = None  # Free-form label, e.g. "128 kbps"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Station":
        return cls(
            id=data["id"],
            name=data["name"],
            url=data["url"],
            description=data.get("description") or None,
            bitrate=data.get("bitrate") or None,
        )


@dataclass(frozen=True)
class FieldError:
    """A single invalid field in station input."""

    field: str
    message: str


# Seeded into empty stores so a fresh install has something to play
DEFAULT_STATIONS: list[dict[str, str]] = [
    {
        "name": "Classic Rock 101.5",
        "url": "https://streams.the80s.com/",
        "description": "The best classic rock hits",
        "bitrate": "128 kbps",
    },
    {
        "name": "Jazz FM 88.3",
        "url": "https://jazz-wr01.ice.infomaniak.ch/jazz-wr01-128.mp3",
        "description": "Smooth jazz and contemporary",
        "bitrate": "128 kbps",
    },
    {
        "name": "Electronic Beats",
        "url": "https://streams.fluxfm.de/Fluxfm/mp3-320/radioplayer",
        "description": "Electronic and dance music",
        "bitrate": "320 kbps",
    },
]
