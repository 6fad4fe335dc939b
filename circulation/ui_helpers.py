import os
import json
from decimal import Decimal
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from circulation.results import Result
from circulation.views import BookView, UserView

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()

def format_money(amount: Decimal, symbol: str = "$") -> str:
    return f"{symbol}{Decimal(amount):.2f}"

def _due_text(book: BookView) -> str:
    if book.due_at is None:
        return "-"
    text = book.due_at.strftime("%Y-%m-%d %H:%M:%S")
    return f"{text} (overdue)" if book.overdue else text

def print_inventory(books: List[BookView]) -> None:
    """Print the inventory in the current output mode.
    - plain: 'ISBN - Title by Author [Status]' lines, or 'No books in library.'
    - json: JSON array of book views (empty array when there are none)
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print("[]" if mode == "json" else "No books in library.")
        return

    if mode == "json":
        print(json.dumps([b.model_dump(mode="json") for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Library Inventory", show_lines=True, header_style="bold cyan")
        table.add_column("ISBN", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Status")
        table.add_column("Due", style="dim")
        for b in books:
            status = "[green]Available[/]" if b.available else "[yellow]Checked Out[/]"
            table.add_row(b.isbn, escape(b.title), escape(b.author), status, _due_text(b))
        _console.print(table)
    else:
        for b in books:
            line = f"{b.isbn} - {b.title} by {b.author} [{b.status}]"
            if b.due_at is not None:
                line += f" due {_due_text(b)}"
            print(line)

def print_user_summary(view: UserView, symbol: str = "$") -> None:
    """Print one user's summary and borrowed books in the current output mode."""
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps(view.model_dump(mode="json"), ensure_ascii=False))
        return

    if mode == "rich":
        content = (
            f"[bold]User:[/] {escape(view.name)}\n"
            f"[bold]ID:[/] {view.user_id}\n"
            f"[bold]Fines:[/] {format_money(view.fines, symbol)}\n"
            f"[bold]Borrowed books:[/] {view.borrowed_count}"
        )
        _console.print(Panel.fit(content, title="👤 User", border_style="blue"))
        if view.borrowed_books:
            print_inventory(view.borrowed_books)
        return

    print(f"User: {view.name}")
    print(f"ID: {view.user_id}")
    print(f"Fines: {format_money(view.fines, symbol)}")
    print(f"Borrowed books: {view.borrowed_count}")
    for b in view.borrowed_books:
        print(f"  {b.isbn} - {b.title} due {_due_text(b)}")

def print_result(result: Result, success_text: Optional[str] = None) -> None:
    """Print the outcome of a Library operation."""
    mode = get_output_mode()

    if mode == "json":
        payload = {"ok": result.ok}
        if result.ok:
            value = result.value
            payload["value"] = value.model_dump(mode="json") if hasattr(value, "model_dump") else value
        else:
            payload["error"] = result.error.value
            payload["message"] = result.message
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        if result.ok:
            _console.print(f"[green]✅ {escape(success_text or 'Done.')}[/]")
        else:
            _console.print(f"[bold red]❌ {escape(result.message)}[/]")
    else:
        print((success_text or "Done.") if result.ok else f"Error: {result.message}")
