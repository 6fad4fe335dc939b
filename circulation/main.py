import logging
import sys
from decimal import Decimal
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from circulation.clock import Clock, ManualClock
from circulation.config import LendingPolicy, settings
from circulation.library import Library
from circulation.ui_helpers import (
    format_money,
    print_inventory,
    print_result,
    print_user_summary,
    set_output_mode,
)
from circulation.validators import ISBNValidator, TextValidator, parse_amount

APP_NAME = settings.app_name

console = Console()


def build_library(clock: Optional[Clock] = None) -> Library:
    """Library wired from environment settings."""
    return Library(policy=LendingPolicy.from_settings(settings), clock=clock, settings=settings)


def _money(amount: Decimal) -> str:
    return format_money(amount, settings.currency_symbol)


# --- Menu actions ---
def add_book(lib: Library) -> None:
    title = Prompt.ask("Enter title").strip()
    author = Prompt.ask("Enter author").strip()
    isbn = Prompt.ask("Enter ISBN").strip()
    if not TextValidator.validate_title(title) or not TextValidator.validate_author(author):
        console.print("[yellow]Title and author are required.[/]")
        return
    if not ISBNValidator.is_valid_isbn(isbn):
        console.print(f"[dim]Note: {isbn} is not a valid ISBN-10/13; adding anyway.[/]")
    result = lib.add_book(title, author, isbn)
    print_result(result, "Book added to inventory.")


def remove_book(lib: Library) -> None:
    isbn = Prompt.ask("Enter ISBN of book to remove").strip()
    result = lib.remove_book(isbn)
    print_result(result, "Book removed from inventory.")


def register_user(lib: Library) -> None:
    name = Prompt.ask("Enter user name").strip()
    user_id = Prompt.ask("Enter user ID").strip()
    if not TextValidator.validate_user_id(user_id):
        console.print("[yellow]User ID must be a single word.[/]")
        return
    result = lib.register_user(name, user_id)
    print_result(result, "User registered successfully.")


def _choose_user(lib: Library) -> Optional[str]:
    users = lib.list_users()
    if not users:
        print("No users available.")
        return None
    for u in users:
        print(f"{u.user_id}. {u.name} (Fines: {_money(u.fines)})")
    return Prompt.ask("Select user ID").strip()


def borrow_book(lib: Library) -> None:
    books = lib.list_inventory()
    if not books or not lib.list_users():
        print("No users or books available.")
        return
    user_id = _choose_user(lib)
    for b in books:
        print(f"{b.isbn}. {b.title} [{b.status}]")
    isbn = Prompt.ask("Select book ISBN").strip()
    result = lib.borrow(user_id, isbn)
    due = result.value.due_at.strftime("%Y-%m-%d %H:%M:%S") if result.ok else ""
    print_result(result, f"Book borrowed successfully. Due {due}.")


def return_book(lib: Library) -> None:
    user_id = _choose_user(lib)
    if user_id is None:
        return
    summary = lib.get_user_summary(user_id)
    if not summary.ok:
        print_result(summary)
        return
    if not summary.value.borrowed_books:
        print("No books borrowed.")
        return
    for b in summary.value.borrowed_books:
        print(f"{b.isbn}. {b.title}")
    isbn = Prompt.ask("Select book ISBN to return").strip()
    result = lib.return_book(user_id, isbn)
    if result.ok and result.value.fine_applied:
        print(f"Book returned late. Fine added: {_money(result.value.fine)}")
    print_result(result, "Book returned successfully.")


def pay_fines(lib: Library) -> None:
    user_id = _choose_user(lib)
    if user_id is None:
        return
    raw = Prompt.ask(f"Enter amount to pay ({settings.currency_symbol})")
    try:
        amount = parse_amount(raw)
    except ValueError as e:
        print(f"Error: {e}")
        return
    result = lib.pay_fine(user_id, amount)
    remaining = _money(result.value.remaining_balance) if result.ok else ""
    print_result(result, f"Paid {_money(amount)} towards fines. Remaining: {remaining}")


def show_user(lib: Library) -> None:
    user_id = _choose_user(lib)
    if user_id is None:
        return
    result = lib.get_user_summary(user_id)
    if result.ok:
        print_user_summary(result.value, settings.currency_symbol)
    else:
        print_result(result)


MENU_ITEMS = [
    ("1", "Add Book", add_book),
    ("2", "Remove Book", remove_book),
    ("3", "Display Inventory", lambda lib: print_inventory(lib.list_inventory())),
    ("4", "Register User", register_user),
    ("5", "Borrow Book", borrow_book),
    ("6", "Return Book", return_book),
    ("7", "Pay Fines", pay_fines),
    ("8", "Display User Info", show_user),
]


def run_menu(lib: Library) -> None:
    """Interactive menu for the library system."""
    def render_menu() -> None:
        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, _ in MENU_ITEMS:
            table.add_row(f"[reverse]{key}[/]", label)
        table.add_row("[reverse]0[/]", "Exit")
        console.print(Panel(table, title=APP_NAME, border_style="cyan", box=box.HEAVY, padding=(1, 2)))

    actions = {key: action for key, _, action in MENU_ITEMS}
    while True:
        render_menu()
        choice = Prompt.ask("Enter choice", choices=[*actions, "0"], default="3").strip()
        if choice == "0":
            print("Exiting...")
            break
        actions[choice](lib)
        print()


# --- Typer CLI app ---
app = typer.Typer(help="Library circulation CLI")

@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (e.g. output mode)."""
    logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")
    set_output_mode(output or settings.output_mode)

@app.command("menu")
def cli_menu():
    """Start the interactive menu."""
    run_menu(build_library())

@app.command("policy")
def cli_policy():
    """Show the active loan duration and fine rate."""
    policy = LendingPolicy.from_settings(settings)
    print(f"Loan duration: {policy.loan_duration.total_seconds():g}s")
    print(f"Fine rate: {_money(policy.fine_rate)} per {policy.fine_unit.total_seconds():g}s overdue")

@app.command("demo")
def cli_demo(
    late: float = typer.Option(2, "--late", min=0, help="Seconds past the due date at which the book is returned"),
):
    """Walk through a late return on a simulated clock."""
    clock = ManualClock()
    lib = build_library(clock)

    lib.register_user("Demo Reader", "U001").unwrap()
    lib.add_book("The Pragmatic Programmer", "Andrew Hunt", "9780201616224").unwrap()

    receipt = lib.borrow("U001", "9780201616224").unwrap()
    print(f"Borrowed '{receipt.title}' (loan: {lib.policy.loan_duration.total_seconds():g}s)")

    clock.advance(seconds=lib.policy.loan_duration.total_seconds() + late)
    returned = lib.return_book("U001", "9780201616224").unwrap()
    if returned.fine_applied:
        print(f"Returned {returned.overdue.total_seconds():g}s late. Fine added: {_money(returned.fine)}")
    else:
        print("Returned on time. No fine.")

    rejected = lib.pay_fine("U001", returned.new_balance + 1)
    print_result(rejected)
    paid = lib.pay_fine("U001", returned.new_balance).unwrap()
    print(f"Paid {_money(paid.amount_paid)}. Remaining: {_money(paid.remaining_balance)}")
    print_inventory(lib.list_inventory())


def main() -> None:
    if len(sys.argv) > 1:
        app()
    else:
        logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")
        run_menu(build_library())


if __name__ == "__main__":
    main()
