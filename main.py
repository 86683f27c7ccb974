# main.py
try:
    import pyperclip
except ImportError:
    pyperclip = None

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.reactive import reactive
from textual.timer import Timer
from textual.widgets import Footer, Header, Input, Label

from config import Config, setup_logging
from controller import NominationController
from models import AppState, SearchOutcome
from nominations import NominationSet
from notifications import NotificationCoordinator
from search import SearchSession
from services import MovieSearchService, NominationRepository, StorageService
from ui import Banner, LogPane, MovieTable, NominationControls, SearchControls

class TimerCancel:
    """Adapts a Textual timer to the cancel() handle the notifier expects."""
    def __init__(self, timer: Timer):
        self.timer = timer

    def cancel(self) -> None:
        self.timer.stop()


class TextualScheduler:
    def __init__(self, app: App):
        self.app = app

    def schedule(self, delay, callback) -> TimerCancel:
        return TimerCancel(self.app.set_timer(delay, callback))


class ShoppiesApp(App):
    BINDINGS = [
        ("d", "toggle_dark", "Toggle dark mode"),
        ("q", "quit", "Quit"),
        ("s", "save", "Save"),
        ("r", "reset", "Reset"),
        ("c", "copy_link", "Copy IMDb Link"),
    ]
    CSS_PATH = "shoppies.tcss"
    TITLE = "The Shoppies"

    app_state = reactive(AppState(), always_update=True)

    def __init__(self, search_service: MovieSearchService, repository: NominationRepository, config: Config):
        super().__init__()
        self.config = config
        self.notifier = NotificationCoordinator(TextualScheduler(self), config.NOTIFICATION_TIMEOUT)
        self.controller = NominationController(
            search=SearchSession(search_service),
            nominations=NominationSet(config.MAX_NOMINATIONS),
            repository=repository,
            notifier=self.notifier,
        )
        self.highlighted_id = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-container"):
            yield Banner(id="banner")
            yield Label(f"Select your top {self.config.MAX_NOMINATIONS} movies of the year, "
                        "then save your choices. Nominations are also saved when you quit.")
            with Horizontal(id="app-grid"):
                with Vertical(id="left-pane"):
                    yield SearchControls()
                    yield Label("Search results will appear here", id="results-title")
                    yield MovieTable(show_status=True, id="results-table")
                with Vertical(id="right-pane"):
                    yield Label("Your nominations are empty!", id="nominations-title")
                    yield MovieTable(id="nominations-table")
                    yield Label("", id="complete")
                    yield NominationControls()
            yield LogPane(id="log", wrap=True, highlight=True, markup=True)
        yield Footer()

    def on_mount(self) -> None:
        log = self.query_one(LogPane)
        self.query_one(Input).focus()
        if not self.config.OMDB_API_KEY:
            log.add_message("[yellow]⚠️ OMDB_API_KEY is not set, searches will fail.[/yellow]")
        if pyperclip:
            log.add_message("[green]✅ Clipboard found.[/green]")
        else:
            log.add_message("[yellow]⚠️ 'pyperclip' not installed.[/yellow]")
        self.notifier.subscribe(lambda _: self.refresh_state())
        self.controller.start()
        self.refresh_state()
        log.add_message(f"💾 Loaded {len(self.app_state.nominations)} saved nominations.")

    def refresh_state(self) -> None:
        self.app_state = self.controller.snapshot()

    def watch_app_state(self, old_state: AppState, new_state: AppState) -> None:
        """Pushes state changes to child widgets."""
        if old_state.results != new_state.results or old_state.nominations != new_state.nominations:
            self.query_one("#results-table", MovieTable).update_movies(
                new_state.results, self.controller.is_nominated)
        if old_state.nominations != new_state.nominations:
            self.query_one("#nominations-table", MovieTable).update_movies(
                new_state.nominations, self.controller.is_nominated)
        self.query_one(Banner).update_notification(new_state.notification)

        results_title = (f'Search results for "{escape(new_state.active_query)}"'
                         if new_state.active_query else "Search results will appear here")
        self.query_one("#results-title", Label).update(results_title)
        nominations_title = "Your nominations" if new_state.nominations else "Your nominations are empty!"
        self.query_one("#nominations-title", Label).update(nominations_title)
        self.query_one("#complete", Label).update(
            "[b]You've selected all your nominations![/b]" if new_state.complete else "")

    def action_save(self) -> None:
        if self.controller.save():
            self.query_one(LogPane).add_message(
                f"💾 Saved {len(self.app_state.nominations)} nominations.")
        self.refresh_state()

    def action_reset(self) -> None:
        self.controller.reset()
        self.query_one(LogPane).add_message("🧹 Nominations reset.")
        self.refresh_state()

    def action_copy_link(self) -> None:
        log = self.query_one(LogPane)
        if not pyperclip:
            log.add_message("[red]❌ 'pyperclip' not installed.[/red]")
            return
        candidates = self.app_state.results + self.app_state.nominations
        selected = next((m for m in candidates if m.id == self.highlighted_id), None)
        if selected:
            pyperclip.copy(selected.imdb_url)
            title = escape(selected.title or selected.id or "")
            log.add_message(f"📋 Copied IMDb link for '[b]{title}[/b]'.")
        else:
            log.add_message("[yellow]⚠️ No movie selected.[/yellow]")

    # --- Message Handlers ---
    def on_search_controls_query_changed(self, message: SearchControls.QueryChanged) -> None:
        self.controller.set_query(message.query)

    def on_search_controls_search_requested(self, message: SearchControls.SearchRequested) -> None:
        self.workers.cancel_group(self, "search_worker")
        self.run_worker(self.perform_search(), group="search_worker", exclusive=True)

    def on_search_controls_clear_requested(self, message: SearchControls.ClearRequested) -> None:
        self.controller.clear_search()
        self.refresh_state()

    def on_nomination_controls_reset_requested(self, message: NominationControls.ResetRequested) -> None:
        self.action_reset()

    def on_nomination_controls_save_requested(self, message: NominationControls.SaveRequested) -> None:
        self.action_save()

    def on_movie_table_toggle_requested(self, message: MovieTable.ToggleRequested) -> None:
        self.controller.toggle_by_id(message.movie_id)
        self.refresh_state()

    def on_movie_table_highlighted(self, message: MovieTable.Highlighted) -> None:
        self.highlighted_id = message.movie_id

    # --- Worker Methods ---
    async def perform_search(self) -> None:
        log = self.query_one(LogPane)
        query = self.controller.search.query
        if query:
            log.add_message(f"🔎 Searching for '{escape(query)}'...")
        outcome = await self.controller.execute_search()
        self.refresh_state()
        if outcome is SearchOutcome.FOUND:
            log.add_message(f"🎬 Found {len(self.app_state.results)} results for '{escape(query)}'.")
        elif outcome is SearchOutcome.NO_RESULTS:
            log.add_message(f"🤷 No movies found for '{escape(query)}'.")


def run() -> None:
    app_config = Config()
    setup_logging(app_config.LOG_LEVEL)
    storage = StorageService(app_config.DATABASE_FILENAME)
    repository = NominationRepository(storage, app_config.NOMINATION_KEY)
    search_service = MovieSearchService(app_config.OMDB_API_KEY, app_config.OMDB_URL, app_config.SEARCH_TIMEOUT)

    app = ShoppiesApp(search_service, repository, app_config)

    try:
        app.run()
    finally:
        app.controller.teardown()
        storage.close()


if __name__ == "__main__":
    run()
