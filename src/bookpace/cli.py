"""Command-line interface for bookpace.

Built with Typer for commands and Rich for output. Every command reloads
the library and recomputes pacing numbers for the current day, so what is
printed always matches the stored records.
"""

import logging
import time
from datetime import date
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from . import __version__
from .config import Config, get_config
from .library import BookCreate, BookRecord, BookStore, BookUpdate, LibraryError
from .motivation import MotivationClient, generate_motivation, should_motivate
from .pacing import PaceStatus, ReadingPlan, build_plan, clamp_percent, parse_date
from .session import (
    TIMER_PRESETS,
    SessionError,
    SessionManager,
    SettingsStore,
    current_track,
    format_duration,
    next_track_index,
    previous_track_index,
    resolve_session_book,
)

# Create the main app
app = typer.Typer(
    name="bookpace",
    help="Plan your reading pace and finish books on time.",
    no_args_is_help=True,
)

session_app = typer.Typer(help="Timed reading sessions.")
app.add_typer(session_app, name="session")

# Rich console for pretty output
console = Console()

# Evaluation day for all pacing numbers; None means the local date
_today: Optional[date] = None


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def _setup_logging(config: Config) -> None:
    root = logging.getLogger("bookpace")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    try:
        config.log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(config.log_path, encoding="utf-8")
    except OSError:
        return
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(logging.INFO)


def _get_store() -> BookStore:
    config = get_config()
    try:
        return BookStore(config.books_path, seed_example=config.seed_example)
    except LibraryError as e:
        print_error(str(e))
        raise typer.Exit(1)


def _get_settings_store() -> SettingsStore:
    return SettingsStore(get_config().settings_path)


def _get_session_manager(store: BookStore) -> SessionManager:
    return SessionManager(store, get_config().session_path)


def _parse_target(value: str) -> date:
    try:
        return parse_date(value)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)


def _validation_message(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err["loc"])
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


def _resolve_book(store: BookStore, query: str) -> BookRecord:
    """Find exactly one book, asking the user to choose if several match."""
    books = store.find_books(query)
    if not books:
        print_error(f"No book found matching: {query}")
        raise typer.Exit(1)

    if len(books) == 1:
        return books[0]

    console.print("\n[bold]Multiple books found:[/bold]")
    for i, b in enumerate(books, 1):
        console.print(f"  {i}. {b.display_title} [dim]({b.id[:8]})[/dim]")
    choice = typer.prompt("Select book number", type=int, default=1)
    if choice < 1 or choice > len(books):
        print_error("Invalid selection")
        raise typer.Exit(1)
    return books[choice - 1]


def _status_text(plan: ReadingPlan) -> str:
    status = plan.stats.status
    if status == PaceStatus.FINISHED:
        return "[green]Completed[/green]"
    if status == PaceStatus.OVERDUE:
        return "[red]Overdue[/red]"
    if plan.book.is_not_started:
        return "[dim]Not started[/dim]"
    if status == PaceStatus.DUE_TODAY:
        return "[yellow]Due today[/yellow]"
    return "[cyan]On plan[/cyan]"


def format_library_table(plans: list[ReadingPlan], title: str = "Your Library") -> Table:
    """Create a rich table for displaying books with their pace."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan", no_wrap=False, max_width=40)
    table.add_column("Progress", justify="right")
    table.add_column("Target", style="green")
    table.add_column("Pages/Day", justify="right")
    table.add_column("Status")

    for plan in plans:
        book, stats = plan.book, plan.stats
        pace = "-" if stats.status in (PaceStatus.FINISHED, PaceStatus.OVERDUE) else str(stats.pages_per_day)
        table.add_row(
            book.id[:8],
            book.display_title,
            f"{round(clamp_percent(stats.percent_complete))}%",
            book.target_date.isoformat(),
            pace,
            _status_text(plan),
        )

    return table


def render_plan(plan: ReadingPlan) -> Panel:
    """Render the reading plan for one book."""
    book, stats = plan.book, plan.stats

    if stats.status == PaceStatus.FINISHED:
        body = Text("You finished this book. Time to pick the next one!", style="bold green")
        return Panel(body, title=book.display_title, border_style="green")

    if stats.status == PaceStatus.OVERDUE:
        body = Text(
            "The date you selected has already passed. Please update your goal "
            "date to receive an accurate reading plan.",
            style="yellow",
        )
        return Panel(body, title=f"{book.display_title} (overdue)", border_style="red")

    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="dim")
    grid.add_column()
    grid.add_row("Read per day", f"[bold]{stats.pages_per_day}[/bold] pages")
    grid.add_row("Reach today", f"page {plan.target_page}")
    grid.add_row("Pages left", str(stats.pages_remaining))
    grid.add_row("Days left", "due today" if stats.days_remaining == 0 else str(stats.days_remaining))
    grid.add_row("Target date", book.target_date.isoformat())
    grid.add_row("Pace", "High intensity" if stats.is_high_intensity else "Comfortable pace")

    percent = clamp_percent(stats.percent_complete)
    progress = Table.grid(padding=(0, 1))
    progress.add_column()
    progress.add_column(justify="right")
    progress.add_row(ProgressBar(total=100, completed=percent, width=40), f"{round(percent)}%")

    return Panel(Group(grid, Text(""), progress), title=book.display_title, border_style="cyan")


def _session_view(manager: SessionManager, store: BookStore) -> Panel:
    session = manager.active_session
    timer = session.timer
    now = manager.clock()

    label = "Time Remaining" if timer.countdown else "Time Elapsed"
    lines = [Text(timer.display(now), style="bold", justify="center")]
    if timer.is_finished(now):
        lines.append(Text("Session complete!", style="bold green", justify="center"))
    elif timer.is_paused:
        lines.append(Text("Paused", style="yellow", justify="center"))
    if timer.countdown:
        lines.append(ProgressBar(total=100, completed=timer.progress_percent(now), width=40))

    book = store.get_book(session.book_id)
    if book:
        plan = build_plan(book, _today)
        lines.append(
            Text(
                f"Daily goal: {plan.stats.pages_per_day} pages | Reach page {plan.target_page}",
                style="dim",
                justify="center",
            )
        )

    return Panel(Group(*lines), title=f"{session.book_title} - {label}")


# ============================================================================
# App Callback
# ============================================================================


@app.callback()
def main_callback(
    today: Optional[str] = typer.Option(
        None, "--today", help="Compute plans as of this date (YYYY-MM-DD)"
    ),
) -> None:
    """Plan your reading pace and finish books on time."""
    global _today
    config = get_config()
    for problem in config.validate():
        print_warning(problem)
    _setup_logging(config)
    _today = _parse_target(today) if today else None


# ============================================================================
# Book Management Commands
# ============================================================================


@app.command("list")
def list_books() -> None:
    """List books with today's pace."""
    store = _get_store()
    books = store.list_books()
    if not books:
        console.print("[dim]No books yet. Use 'bookpace add' to start.[/dim]")
        return

    plans = [build_plan(book, _today) for book in books]
    console.print(format_library_table(plans))


@app.command()
def add(
    title: str = typer.Option("", "--title", "-t", help="Book title"),
    total: int = typer.Option(300, "--total", "-n", help="Total pages"),
    current: int = typer.Option(0, "--current", "-p", help="Current page"),
    target: Optional[str] = typer.Option(
        None, "--target", "-d", help="Goal date YYYY-MM-DD (default: end of month)"
    ),
) -> None:
    """Add a book to the library."""
    store = _get_store()
    fields = {"title": title, "total_pages": total, "current_page": current}
    if target:
        fields["target_date"] = _parse_target(target)

    try:
        book_data = BookCreate(**fields)
    except ValidationError as e:
        print_error(_validation_message(e))
        raise typer.Exit(1)

    book = store.add_book(book_data)
    print_success(f"Added: {book.display_title} [dim]({book.id[:8]})[/dim]")
    console.print(render_plan(build_plan(book, _today)))


@app.command()
def update(
    query: str = typer.Argument(..., help="Book title or ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    total: Optional[int] = typer.Option(None, "--total", "-n", help="Total pages"),
    current: Optional[int] = typer.Option(None, "--current", "-p", help="Current page"),
    target: Optional[str] = typer.Option(None, "--target", "-d", help="Goal date YYYY-MM-DD"),
) -> None:
    """Update a book and show its recomputed plan."""
    store = _get_store()
    book = _resolve_book(store, query)

    if title is None and total is None and current is None and target is None:
        print_warning("Nothing to update.")
        raise typer.Exit(1)

    try:
        changes = BookUpdate(
            title=title,
            total_pages=total,
            current_page=current,
            target_date=_parse_target(target) if target else None,
        )
    except ValidationError as e:
        print_error(_validation_message(e))
        raise typer.Exit(1)

    book = store.update_book(book.id, changes)
    print_success(f"Updated: {book.display_title}")
    console.print(render_plan(build_plan(book, _today)))


@app.command()
def delete(
    query: str = typer.Argument(..., help="Book title or ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove a book from the library."""
    store = _get_store()
    book = _resolve_book(store, query)

    if not yes and not typer.confirm(
        f'Are you sure you want to remove "{book.title or "this book"}" from your library?'
    ):
        console.print("[dim]Cancelled.[/dim]")
        raise typer.Exit(0)

    store.delete_book(book.id)

    settings_store = _get_settings_store()
    if settings_store.load().session_book_id == book.id:
        settings_store.update(session_book_id=None)

    print_success(f"Deleted: {book.display_title}")


@app.command()
def plan(
    query: str = typer.Argument(..., help="Book title or ID"),
    motivate: bool = typer.Option(False, "--motivate", "-m", help="Add an AI pep talk"),
) -> None:
    """Show the reading plan for a book."""
    store = _get_store()
    book = _resolve_book(store, query)
    reading_plan = build_plan(book, _today)
    console.print(render_plan(reading_plan))

    if motivate:
        if not should_motivate(book, reading_plan.stats):
            console.print("[dim]Motivation is available for titled books with an active plan.[/dim]")
            return
        config = get_config()
        client = None
        if config.has_gemini_config():
            client = MotivationClient(
                api_key=config.gemini_api_key,
                model=config.gemini_model,
                timeout=config.motivation_timeout,
            )
        with console.status("Thinking..."):
            message = generate_motivation(book, reading_plan.stats, client)
        console.print(Panel(message, title="AI Insight", border_style="magenta"))


# ============================================================================
# Session Commands
# ============================================================================


@session_app.command("start")
def session_start(
    query: Optional[str] = typer.Argument(None, help="Book title or ID (default: last session book)"),
) -> None:
    """Start a reading session."""
    store = _get_store()
    settings_store = _get_settings_store()
    settings = settings_store.load()

    if query:
        book = _resolve_book(store, query)
    else:
        book = resolve_session_book(store.list_books(), settings.session_book_id)
        if not book:
            print_error("No books in library.")
            raise typer.Exit(1)

    manager = _get_session_manager(store)
    try:
        session = manager.start_session(book.id, settings)
    except SessionError as e:
        print_error(str(e))
        raise typer.Exit(1)

    settings_store.update(session_book_id=book.id)

    mode = f"{settings.duration_minutes} minute countdown" if settings.countdown_mode else "stopwatch"
    console.print(f"[green]Started reading:[/green] {session.book_title} ({mode})")
    reading_plan = build_plan(book, _today)
    console.print(
        f"  Target for today: [bold]{reading_plan.stats.pages_per_day} pages[/bold], "
        f"reach page {reading_plan.target_page}"
    )
    if settings.music_enabled:
        track = current_track(settings.track_index)
        console.print(f"  Music: {track.title} - {track.artist}")
        console.print(f"  [dim]{track.src}[/dim]")
    console.print("[dim]Use 'bookpace session stop --page N' when done.[/dim]")


@session_app.command("pause")
def session_pause() -> None:
    """Pause the running session."""
    manager = _get_session_manager(_get_store())
    try:
        session = manager.pause_session()
    except SessionError as e:
        print_error(str(e))
        raise typer.Exit(1)
    console.print(f"[yellow]Paused[/yellow] at {session.timer.display(manager.clock())}")


@session_app.command("resume")
def session_resume() -> None:
    """Resume a paused session."""
    manager = _get_session_manager(_get_store())
    try:
        manager.resume_session()
    except SessionError as e:
        print_error(str(e))
        raise typer.Exit(1)
    console.print("[green]Resumed.[/green]")


@session_app.command("status")
def session_status(
    watch: bool = typer.Option(False, "--watch", "-w", help="Show a live timer until Ctrl+C"),
) -> None:
    """Show the active session."""
    store = _get_store()
    manager = _get_session_manager(store)
    if not manager.has_active_session():
        console.print("[dim]No active reading session.[/dim]")
        console.print("[dim]Use 'bookpace session start' to begin.[/dim]")
        return

    if not watch:
        console.print(_session_view(manager, store))
        return

    try:
        with Live(_session_view(manager, store), console=console, refresh_per_second=4) as live:
            while True:
                time.sleep(1)
                store = _get_store()
                manager = _get_session_manager(store)
                if not manager.has_active_session():
                    console.print("[dim]Session ended.[/dim]")
                    break
                live.update(_session_view(manager, store))
                if manager.active_session.timer.is_finished(manager.clock()):
                    console.bell()
                    break
    except KeyboardInterrupt:
        pass


@session_app.command("stop")
def session_stop(
    page: Optional[int] = typer.Option(None, "--page", "-p", help="Page you reached"),
) -> None:
    """End the session and record the page you reached."""
    store = _get_store()
    manager = _get_session_manager(store)
    try:
        summary = manager.stop_session(end_page=page, today=_today)
    except SessionError as e:
        print_error(str(e))
        raise typer.Exit(1)

    console.print("[green]Reading session ended.[/green]")
    console.print(f"  Duration: {format_duration(summary.duration_seconds)}")
    if summary.pages_read:
        console.print(f"  Pages read: {summary.pages_read}")
    console.print(render_plan(summary.plan))


@session_app.command("cancel")
def session_cancel() -> None:
    """Cancel the session without recording progress."""
    manager = _get_session_manager(_get_store())
    if manager.cancel_session():
        print_success("Reading session cancelled.")
    else:
        print_warning("No active session to cancel.")


# ============================================================================
# Settings
# ============================================================================


@app.command()
def settings(
    countdown: Optional[bool] = typer.Option(
        None, "--countdown/--stopwatch", help="Timer mode for new sessions"
    ),
    duration: Optional[int] = typer.Option(
        None, "--duration", help=f"Countdown minutes (presets: {', '.join(map(str, TIMER_PRESETS))})"
    ),
    music: Optional[bool] = typer.Option(None, "--music/--no-music", help="Background music"),
    track: Optional[int] = typer.Option(None, "--track", help="Playlist track number"),
    next_track: bool = typer.Option(False, "--next-track", help="Skip to the next track"),
    prev_track: bool = typer.Option(False, "--prev-track", help="Go back to the previous track"),
    volume: Optional[float] = typer.Option(None, "--volume", help="Volume from 0.0 to 1.0"),
) -> None:
    """Show or change session settings."""
    settings_store = _get_settings_store()
    changes = {}
    if countdown is not None:
        changes["countdown_mode"] = countdown
    if duration is not None:
        changes["duration_minutes"] = duration
    if music is not None:
        changes["music_enabled"] = music
    if track is not None:
        changes["track_index"] = track - 1
    elif next_track:
        changes["track_index"] = next_track_index(settings_store.load().track_index)
    elif prev_track:
        changes["track_index"] = previous_track_index(settings_store.load().track_index)
    if volume is not None:
        changes["volume"] = volume

    if changes:
        try:
            current = settings_store.update(**changes)
        except ValidationError as e:
            print_error(_validation_message(e))
            raise typer.Exit(1)
        print_success("Settings saved.")
    else:
        current = settings_store.load()

    table = Table(title="Session Settings", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Timer", "countdown" if current.countdown_mode else "stopwatch")
    table.add_row("Duration", f"{current.duration_minutes} min")
    table.add_row("Music", "on" if current.music_enabled else "off")
    table.add_row("Track", f"{current.track_index + 1}. {current_track(current.track_index).title}")
    table.add_row("Volume", f"{round(current.volume * 100)}%")
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"bookpace version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
