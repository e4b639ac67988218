import logging
import os
import uuid
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from catalog.book import BookInput
from catalog.errors import CatalogError
from catalog.repository import InMemoryBookRepository
from catalog.service import BookService
from catalog.unit_of_work import InMemoryUnitOfWork
from config import settings
from utils.cli_config import CLIConfig, parse_value
from utils.ui_helpers import (
    OUTPUT_MODE_ENV,
    print_book,
    print_list_result,
    print_stats_result,
    set_output_mode,
)
from utils.validators import TextValidator

APP_NAME = settings.app_name
APP_VERSION = settings.app_version

logger = logging.getLogger(__name__)

# soft_wrap keeps long error messages on one line
console = Console(soft_wrap=True)


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_service(seed: bool = True) -> BookService:
    """Wire repository -> unit of work -> service, optionally loading the sample books."""
    repository = InMemoryBookRepository()
    service = BookService(InMemoryUnitOfWork(repository))
    if seed:
        added = service.seed()
        logger.info(f"Seeded {added} sample books")
    return service


# ------------------------- Input helpers ------------------------- #
def ask(label: str, default: Optional[str] = None) -> str:
    """Prompt for one line of text; an empty answer keeps ``default``."""
    if default is None:
        raw = Prompt.ask(label, console=console, default="", show_default=False)
    else:
        raw = Prompt.ask(label, console=console, default=default)
    return TextValidator.sanitize_input(raw)


def parse_year(text: str) -> Optional[int]:
    try:
        year = int(text)
    except ValueError:
        return None
    return year if 0 < year < 3000 else None


def parse_book_id(text: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(text)
    except ValueError:
        return None


def ask_book_id(label: str) -> Optional[uuid.UUID]:
    book_id = parse_book_id(ask(label))
    if book_id is None:
        console.print("[yellow]Invalid ID format.[/]")
    return book_id


# ------------------------- Menu actions ------------------------- #
def list_all_books(service: BookService) -> None:
    console.print("[bold]=== All Books ===[/]")
    print_list_result(service.list_books(), title="Catalog")


def search(service: BookService) -> None:
    console.print("[bold]=== Search Books ===[/]")
    term = ask("Enter search term (title, author, or ISBN)")
    books = service.search_books(term)
    if books:
        console.print(f"Found {len(books)} book(s):")
    print_list_result(books, empty_message="No books found matching your search.", title="Search Results")


def add(service: BookService) -> None:
    """Prompt for the fields of a new book and add it."""
    console.print("[bold]=== Add New Book ===[/]")
    title = ask("Title")
    author = ask("Author")
    isbn = ask("ISBN")
    year = parse_year(ask("Publication Year"))
    if year is None:
        console.print("[yellow]Invalid publication year. Book not added.[/]")
        return

    book = service.add_book(BookInput(title=title, author=author, isbn=isbn, publication_year=year))
    console.print("\n[green]Book added successfully:[/]")
    print_book(book)


def update(service: BookService) -> None:
    """Prompt for new values, keeping the current ones for blank answers."""
    console.print("[bold]=== Update Book ===[/]")
    book_id = ask_book_id("Enter book ID to update")
    if book_id is None:
        return

    existing = service.get_book(book_id)
    console.print("\nCurrent book details:")
    print_book(existing)

    title = ask("Title", default=existing.title)
    author = ask("Author", default=existing.author)
    isbn = ask("ISBN", default=existing.isbn)
    year = parse_year(ask("Publication Year", default=str(existing.publication_year)))
    if year is None:
        console.print("[yellow]Invalid publication year. Book not updated.[/]")
        return

    book = service.update_book(book_id, BookInput(title=title, author=author, isbn=isbn, publication_year=year))
    console.print("\n[green]Book updated successfully:[/]")
    print_book(book)


def remove(service: BookService, confirm: bool = True) -> None:
    """Delete a book by ID, asking for confirmation first."""
    console.print("[bold]=== Delete Book ===[/]")
    book_id = ask_book_id("Enter book ID to delete")
    if book_id is None:
        return

    book = service.get_book(book_id)
    console.print("\nBook to delete:")
    print_book(book)

    if confirm and not Confirm.ask("Are you sure you want to delete this book?", default=False, console=console):
        console.print("[blue]Delete cancelled.[/]")
        return

    if service.delete_book(book_id):
        console.print(f"[green]Book deleted successfully:[/] {escape(book.title)}")
    else:
        console.print("[red]Delete failed.[/]")


def find_by_id(service: BookService) -> None:
    console.print("[bold]=== Get Book by ID ===[/]")
    book_id = ask_book_id("Enter book ID")
    if book_id is None:
        return
    print_book(service.get_book(book_id))


def find_by_isbn(service: BookService) -> None:
    console.print("[bold]=== Get Book by ISBN ===[/]")
    print_book(service.get_book_by_isbn(ask("Enter ISBN")))


def stats(service: BookService) -> None:
    print_stats_result(service.get_statistics())


MENU_ITEMS = [
    ("1", "Display all books"),
    ("2", "Search books"),
    ("3", "Add book"),
    ("4", "Update book"),
    ("5", "Delete book"),
    ("6", "Get book by ID"),
    ("7", "Get book by ISBN"),
    ("8", "Show statistics"),
    ("0", "Exit"),
]


def run_menu(service: BookService, user_config: Optional[CLIConfig] = None) -> None:
    """Interactive menu; catalog errors are reported and the loop carries on."""
    confirm_deletions = user_config.get("ui_settings.confirm_deletions", True) if user_config else True

    def render_menu() -> None:
        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label in MENU_ITEMS:
            table.add_row(f"[reverse]{key}[/]", label)

        console.print(Panel(
            table,
            title=APP_NAME,
            subtitle=f"v{APP_VERSION}",
            border_style="cyan",
            box=box.HEAVY,
            padding=(1, 2),
        ))

    while True:
        render_menu()
        choice = Prompt.ask(
            "Enter your choice",
            choices=[key for key, _ in MENU_ITEMS],
            show_choices=False,
            console=console,
        ).strip()

        if choice == "0":
            console.print("[green]Goodbye![/]")
            break

        try:
            if choice == "1":
                list_all_books(service)
            elif choice == "2":
                search(service)
            elif choice == "3":
                add(service)
            elif choice == "4":
                update(service)
            elif choice == "5":
                remove(service, confirm=confirm_deletions)
            elif choice == "6":
                find_by_id(service)
            elif choice == "7":
                find_by_isbn(service)
            elif choice == "8":
                stats(service)
        except CatalogError as e:
            console.print(f"[bold red]Error:[/] {escape(str(e))}")
        except Exception as e:
            logger.exception(f"Menu action {choice} failed")
            console.print(f"[bold red]Unexpected error:[/] {escape(str(e))}")
        console.print()


# --- Typer CLI Application ---
app = typer.Typer(help="Library Management CLI")


def _print_version(value: bool) -> None:
    if value:
        print(f"{APP_NAME} {APP_VERSION}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    seed: bool = typer.Option(True, "--seed/--no-seed", help="Load the sample books on startup"),
    config_dir: str = typer.Option(
        settings.cli_config_dir,
        "--config-dir",
        envvar="LIBRARY_CLI_CONFIG_DIR",
        help="Directory holding config.json",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """Global options; with no command the interactive menu starts."""
    configure_logging()
    user_config = CLIConfig(config_dir, console=console)

    mode = output or os.environ.get(OUTPUT_MODE_ENV) or user_config.get("preferences.default_output", "plain")
    if not set_output_mode(mode):
        console.print(f"[yellow]Unknown output mode '{escape(mode)}', using plain.[/]")

    seed = seed and settings.seed_sample_data and bool(user_config.get("preferences.seed_sample_data", True))
    ctx.obj = {"service": build_service(seed=seed), "config": user_config}

    if ctx.invoked_subcommand is None:
        run_menu(ctx.obj["service"], user_config)


@app.command("menu")
def cli_menu(ctx: typer.Context):
    """Start the interactive menu."""
    run_menu(ctx.obj["service"], ctx.obj["config"])


@app.command("list")
def cli_list(ctx: typer.Context):
    """List every book in the catalog."""
    print_list_result(ctx.obj["service"].list_books(), title="Catalog")


@app.command("search")
def cli_search(ctx: typer.Context, term: str = typer.Argument("", help="Text to look for in title, author or ISBN")):
    """Search by title, author or ISBN (case-insensitive)."""
    books = ctx.obj["service"].search_books(term)
    print_list_result(books, empty_message="No books found matching your search.", title="Search Results")


@app.command("show")
def cli_show(ctx: typer.Context, book_id: str = typer.Argument(..., help="Book ID (UUID)")):
    """Show one book by ID."""
    parsed = parse_book_id(book_id.strip())
    if parsed is None:
        print("Invalid ID format.")
        return
    try:
        print_book(ctx.obj["service"].get_book(parsed))
    except CatalogError as e:
        print(f"Error: {e}")


@app.command("find")
def cli_find(ctx: typer.Context, isbn: str = typer.Argument(..., help="ISBN-10 or ISBN-13")):
    """Show one book by ISBN."""
    try:
        print_book(ctx.obj["service"].get_book_by_isbn(isbn))
    except CatalogError as e:
        print(f"Error: {e}")


@app.command("stats")
def cli_stats(ctx: typer.Context):
    """Show catalog statistics."""
    print_stats_result(ctx.obj["service"].get_statistics())


@app.command("config")
def cli_config(
    ctx: typer.Context,
    action: str = typer.Argument(..., help="Action: show, get, set, reset"),
    key: Optional[str] = typer.Argument(None, help="Configuration key (dot notation)"),
    value: Optional[str] = typer.Argument(None, help="Configuration value"),
):
    """Manage CLI configuration and preferences."""
    config_manager: CLIConfig = ctx.obj["config"]

    if action == "show":
        config_manager.show_config()

    elif action == "get":
        if not key:
            print("Error: 'get' requires a key")
            return
        current = config_manager.get(key)
        if current is not None:
            print(f"{key}: {current}")
        else:
            print(f"Key '{key}' not found")

    elif action == "set":
        if not key or value is None:
            print("Error: 'set' requires both a key and a value")
            return
        parsed_value = parse_value(value)
        config_manager.set(key, parsed_value)
        print(f"{key} set to {parsed_value}")

    elif action == "reset":
        config_manager.reset_to_default()
        print("Configuration reset to default values")

    else:
        print(f"Unknown action: {action}")
        print("Available actions: show, get, set, reset")


if __name__ == "__main__":
    app()
