"""
Pure rendering helpers for the player views.
"""

from typing import Optional

from rich.text import Text

from radio_player.domain.playback.coordinator import PlaybackSnapshot, PlaybackState
from radio_player.domain.stations.models import Station

# Icon constants
ICONS = {
    "radio": "📻",
    "play": "▶",
    "pause": "⏸",
    "loading": "…",
    "error": "⚠",
}

_STATUS = {
    PlaybackState.IDLE: ("Stopped", "dim"),
    PlaybackState.LOADING: ("Connecting...", "bold yellow"),
    PlaybackState.PLAYING: ("Playing", "bold green"),
    PlaybackState.PAUSED: ("Paused", "yellow"),
    PlaybackState.ERRORED: ("Error", "bold red"),
}


def station_subtitle(station: Station) -> str:
    return station.description or "Radio Station"


def status_label(snapshot: PlaybackSnapshot) -> tuple[str, str]:
    """(label, rich style) for the playback state."""
    return _STATUS[snapshot.state]


def volume_bar(volume: int, width: int = 20) -> str:
    """Render volume as a fixed-width bar, e.g. '██████░░░░ 60%'."""
    filled = round(width * max(0, min(100, volume)) / 100)
    return "█" * filled + "░" * (width - filled) + f" {volume}%"


def render_station_line(station: Station, is_selected: bool, is_playing: bool) -> Text:
    """One row of the station list."""
    text = Text()
    if is_selected and is_playing:
        text.append(f"{ICONS['play']} ", style="bold green")
    elif is_selected:
        text.append(f"{ICONS['pause']} ", style="yellow")
    else:
        text.append("  ")

    text.append(station.name, style="bold white" if is_selected else "white")
    text.append(f"  {station_subtitle(station)}", style="dim")
    if station.bitrate:
        text.append(f"  [{station.bitrate}]", style="cyan")
    return text


def render_now_playing(station: Optional[Station], snapshot: PlaybackSnapshot) -> Text:
    """The currently-playing panel body."""
    if station is None:
        text = Text(f"{ICONS['radio']} No station selected\n", style="bold")
        text.append("Choose a station to start listening", style="dim")
        return text

    label, style = status_label(snapshot)
    text = Text()
    text.append(f"{ICONS['radio']} {station.name}\n", style="bold cyan")
    text.append(f"{station_subtitle(station)}\n", style="dim")
    text.append("● ", style=style)
    text.append(label, style=style)
    if snapshot.error:
        text.append(f"  {snapshot.error}", style="red")
    return text


def render_controls(snapshot: PlaybackSnapshot, can_navigate: bool) -> Text:
    """Transport and volume line."""
    text = Text()
    nav_style = "bold" if can_navigate else "dim"
    text.append("⏮ p  ", style=nav_style)
    if snapshot.is_playing:
        text.append(f"{ICONS['pause']} space", style="bold")
    elif snapshot.is_loading:
        text.append(f"{ICONS['loading']} space", style="yellow")
    else:
        text.append(f"{ICONS['play']} space", style="bold")
    text.append("  n ⏭", style=nav_style)
    text.append("    vol ")
    text.append(volume_bar(snapshot.volume), style="magenta")
    return text
