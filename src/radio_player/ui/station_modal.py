"""
Add/Edit Station Modal - Textual implementation
Collects station fields and shows per-field validation messages
"""

from typing import Any, Awaitable, Callable, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from radio_player.domain.stations.errors import ValidationError
from radio_player.domain.stations.models import Station

StationSubmit = Callable[[dict[str, Any]], Awaitable[Optional[Station]]]

# (field, label, placeholder)
FORM_FIELDS = [
    ("name", "Station Name", "e.g. Jazz FM 88.3"),
    ("url", "Stream URL", "https://example.com/stream.mp3"),
    ("description", "Description", "Genre or description"),
    ("bitrate", "Bitrate", "e.g. 128 kbps"),
]


class StationFormModal(ModalScreen[Optional[Station]]):
    """
    Modal screen for adding or editing a station.

    The submit coroutine does the actual save; validation errors it raises
    are shown under the offending fields and the modal stays open.
    """

    CSS = """
    StationFormModal {
        align: center middle;
    }

    #modal-container {
        width: 70;
        height: auto;
        border: thick $primary;
        padding: 1;
    }

    .modal-title {
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }

    .field-error {
        color: $error;
        height: auto;
    }

    #buttons {
        height: auto;
        margin-top: 1;
        align: right middle;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, submit: StationSubmit, station: Optional[Station] = None):
        super().__init__()
        self._submit = submit
        self.station = station
        self.saving = False

    @property
    def title_text(self) -> str:
        return "Edit Station" if self.station else "Add Station"

    def compose(self) -> ComposeResult:
        values = self.station.to_dict() if self.station else {}
        with Container(id="modal-container"):
            yield Static(self.title_text, classes="modal-title")
            for field, label, placeholder in FORM_FIELDS:
                yield Label(label)
                yield Input(
                    value=values.get(field) or "",
                    placeholder=placeholder,
                    id=f"input-{field}",
                )
                yield Static("", id=f"error-{field}", classes="field-error")
            with Horizontal(id="buttons"):
                yield Button("Cancel", id="cancel")
                yield Button(self.title_text, id="save", variant="primary")

    def on_mount(self) -> None:
        self.query_one("#input-name", Input).focus()

    def form_data(self) -> dict[str, Any]:
        """Current input values; blank optional fields are left out."""
        data: dict[str, Any] = {}
        for field, _, _ in FORM_FIELDS:
            value = self.query_one(f"#input-{field}", Input).value.strip()
            if value or field in ("name", "url"):
                data[field] = value
        return data

    def show_errors(self, error: Optional[ValidationError]) -> None:
        messages = {e.field: e.message for e in error.errors} if error else {}
        for field, _, _ in FORM_FIELDS:
            self.query_one(f"#error-{field}", Static).update(messages.get(field, ""))

    async def save(self) -> None:
        if self.saving:
            return
        self.saving = True
        self.query_one("#save", Button).label = "Saving..."
        try:
            station = await self._submit(self.form_data())
        except ValidationError as e:
            self.show_errors(e)
            return
        finally:
            self.saving = False
            self.query_one("#save", Button).label = self.title_text

        if station is not None:
            self.dismiss(station)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            self.run_worker(self.save(), exclusive=True)
        else:
            self.action_cancel()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.run_worker(self.save(), exclusive=True)

    def action_cancel(self) -> None:
        self.dismiss(None)
