"""
Player widgets: now-playing panel, station list and transport bar.
"""

from typing import Optional

from rich.panel import Panel
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option

from radio_player.domain.playback.coordinator import PlaybackSnapshot
from radio_player.domain.stations.models import Station

from .formatting import render_controls, render_now_playing, render_station_line


class CurrentlyPlaying(Static):
    """Selected station and its playback status."""

    def show(self, station: Optional[Station], snapshot: PlaybackSnapshot) -> None:
        self.update(Panel(render_now_playing(station, snapshot), title="Now Playing"))


class AudioControls(Static):
    """Previous / play-pause / next and volume."""

    def show(self, snapshot: PlaybackSnapshot, can_navigate: bool) -> None:
        self.update(render_controls(snapshot, can_navigate))


class StationsList(OptionList):
    """Selectable list of stations. Option ids are station ids."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.stations: list[Station] = []

    def set_stations(
        self, stations: list[Station], selected_id: Optional[str], is_playing: bool
    ) -> None:
        highlighted = self.highlighted
        self.stations = list(stations)
        self.clear_options()

        if not stations:
            self.add_option(
                Option("No stations yet - press 'a' to add your first station", disabled=True)
            )
            return

        self.add_options(
            [
                Option(
                    render_station_line(s, s.id == selected_id, is_playing),
                    id=s.id,
                )
                for s in stations
            ]
        )
        self.highlighted = min(highlighted or 0, len(stations) - 1)

    @property
    def highlighted_station(self) -> Optional[Station]:
        if not self.stations or self.highlighted is None:
            return None
        if self.highlighted >= len(self.stations):
            return None
        return self.stations[self.highlighted]

    def station_by_id(self, station_id: Optional[str]) -> Optional[Station]:
        return next((s for s in self.stations if s.id == station_id), None)
