# ui.py
from typing import Callable, List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, DataTable, Input, Label, RichLog, Static

from models import MovieRecord, Notification, NotificationKind

class SearchControls(Static):
    """Widget for the search input with its search and clear buttons."""
    class QueryChanged(Message):
        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    class SearchRequested(Message):
        pass

    class ClearRequested(Message):
        pass

    def compose(self) -> ComposeResult:
        yield Label("Movie title")
        yield Input(id="search-input", placeholder="Star Wars: Rogue One", type="text")
        with Horizontal(classes="actions"):
            yield Button("clear", id="clear-button")
            yield Button("search", id="search-button", variant="primary")

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.QueryChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.SearchRequested())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "search-button":
            self.post_message(self.SearchRequested())
        elif event.button.id == "clear-button":
            self.post_message(self.ClearRequested())


class NominationControls(Static):
    """Reset and save buttons for the nomination list."""
    class ResetRequested(Message):
        pass

    class SaveRequested(Message):
        pass

    def compose(self) -> ComposeResult:
        with Horizontal(classes="actions"):
            yield Button("reset", id="reset-button")
            yield Button("save", id="save-button", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "reset-button":
            self.post_message(self.ResetRequested())
        elif event.button.id == "save-button":
            self.post_message(self.SaveRequested())


class MovieTable(DataTable):
    """A table of movies; selecting a row asks for that movie to be toggled."""
    class ToggleRequested(Message):
        def __init__(self, movie_id: str) -> None:
            self.movie_id = movie_id
            super().__init__()

    class Highlighted(Message):
        def __init__(self, movie_id: Optional[str]) -> None:
            self.movie_id = movie_id
            super().__init__()

    def __init__(self, show_status: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self.show_status = show_status

    def on_mount(self) -> None:
        self.add_columns("Title", "Year", "Type")
        if self.show_status:
            self.add_column("Status")
        self.cursor_type = "row"

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        if event.row_key.value is not None:
            self.post_message(self.ToggleRequested(event.row_key.value))

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        event.stop()
        self.post_message(self.Highlighted(event.row_key.value))

    def update_movies(self, movies: List[MovieRecord], is_nominated: Callable[[str], bool]) -> None:
        self.clear()
        for m in movies:
            row = [Text(m.title or ""), Text(m.year or ""), Text(m.kind or "")]
            if self.show_status:
                row.append("nominated" if is_nominated(m.id) else "")
            self.add_row(*row, key=m.id)


class Banner(Static):
    """Shows the current transient notification, hidden while there is none."""
    def on_mount(self) -> None:
        self.update_notification(None)

    def update_notification(self, notification: Optional[Notification]) -> None:
        self.display = notification is not None
        self.set_class(
            notification is not None and notification.kind is NotificationKind.SUCCESS,
            "success",
        )
        self.update(f"[b]{notification.text}[/b]" if notification else "")


class LogPane(RichLog):
    """A dedicated widget for logging application events."""
    def add_message(self, message: str) -> None:
        self.write(message)
