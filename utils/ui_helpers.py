import os
import json
from typing import List, Any, Dict
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from catalog.book import BookView, format_timestamp

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = ("plain", "json", "rich")

_console = Console()


def set_output_mode(mode: str) -> bool:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode
        return True
    return False


def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, "plain").lower()
    return mode if mode in OUTPUT_MODES else "plain"


def print_book(book: BookView) -> None:
    """Print every field of one book followed by a separator line."""
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps(book.to_dict(), ensure_ascii=False))
    elif mode == "rich":
        _console.print(Panel.fit(
            f"[bold]ID:[/] {book.id}\n"
            f"[bold]Title:[/] {escape(book.title)}\n"
            f"[bold]Author:[/] {escape(book.author)}\n"
            f"[bold]ISBN:[/] {book.isbn}\n"
            f"[bold]Publication Year:[/] {book.publication_year}\n"
            f"[bold]Created:[/] {format_timestamp(book.created_at)}\n"
            f"[bold]Updated:[/] {format_timestamp(book.updated_at)}",
            border_style="green",
        ))
    else:
        print(f"ID: {book.id}")
        print(f"Title: {book.title}")
        print(f"Author: {book.author}")
        print(f"ISBN: {book.isbn}")
        print(f"Publication Year: {book.publication_year}")
        print(f"Created: {format_timestamp(book.created_at)}")
        print(f"Updated: {format_timestamp(book.updated_at)}")
        print("-" * 50)


def print_list_result(books: List[BookView], empty_message: str = "No books found.", title: str = "Books") -> None:
    """Print a list of books in the current output mode.
    - plain: 'ID | ISBN - Title by Author (Year)' lines
    - json: JSON array of book dicts
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        # json callers still get a parseable document
        print("[]" if mode == "json" else empty_message)
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title=title, show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("ISBN", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Year", justify="right")
        table.add_column("Updated", style="dim")
        for b in books:
            table.add_row(str(b.id), b.isbn, escape(b.title), escape(b.author),
                          str(b.publication_year), format_timestamp(b.updated_at))
        _console.print(table)
    else:
        for b in books:
            print(f"{b.id} | {b.isbn} - {b.title} by {b.author} ({b.publication_year})")


def print_stats_result(stats: Dict[str, Any]) -> None:
    """Print catalog statistics in the current output mode."""
    mode = get_output_mode()

    total = stats.get("total_books", 0)
    authors = stats.get("unique_authors", 0)

    if mode == "json":
        print(json.dumps({"total_books": total, "unique_authors": authors}, ensure_ascii=False))
    elif mode == "rich":
        content = f"[bold]Total Books:[/] {total}\n[bold]Unique Authors:[/] {authors}"
        _console.print(Panel.fit(content, title="Stats", border_style="blue"))
    else:
        print(f"Total Books: {total}")
        print(f"Unique Authors: {authors}")
