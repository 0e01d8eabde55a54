"""CLI commands for planning settlements from a ledger snapshot."""

import logging
import sys
from decimal import Decimal
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..config import load_settings
from ..exceptions import ExpensiError
from ..models import PersonBalance, SettlementPlan, SimplifiedTransaction
from .ledger import load_ledger
from .service import SettlementService
from .summary import format_amount

app = typer.Typer(
    name="settle",
    help="Work out who pays whom to settle a ledger",
)

console = Console()


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def format_money(amount: Decimal, symbol: str = "$", use_color: bool = True) -> str:
    """
    Format money in accounting style with alignment.

    Negative amounts use parentheses: ($85.02)
    Positive amounts have spaces:      $85.02
    The spaces ensure decimal points align in tables.
    """
    abs_amount = abs(amount)
    if amount < 0:
        if use_color:
            formatted = f"({symbol}[red]{abs_amount:,.2f}[/red])"
        else:
            formatted = f"({symbol}{abs_amount:,.2f})"
    else:
        if use_color:
            formatted = f" [green]{symbol}{abs_amount:,.2f}[/green] "
        else:
            formatted = f" {symbol}{abs_amount:,.2f} "
    return formatted


def _service(epsilon: float | None) -> SettlementService:
    overrides = {}
    if epsilon is not None:
        overrides["settle_epsilon"] = Decimal(str(epsilon))
    return SettlementService(load_settings(**overrides))


def display_balances(balances: list[PersonBalance], symbol: str = "$"):
    """Display net balances in a table."""
    table = Table(title="Net Balances", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Balance", justify="right", width=14)
    table.add_column("Status", style="dim")

    for b in balances:
        if b.balance > 0:
            status = "is owed"
        elif b.balance < 0:
            status = "owes"
        else:
            status = "settled"
        table.add_row(b.user_id, b.name, format_money(b.balance, symbol), status)

    console.print(table)


def display_transactions(
    transactions: list[SimplifiedTransaction], title: str, symbol: str = "$"
):
    """Display payments in a table."""
    if not transactions:
        console.print("[green]✓ Nothing to settle[/green]")
        return

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("From", style="cyan")
    table.add_column("To", style="cyan")
    table.add_column("Amount", justify="right", width=14)

    for idx, tx in enumerate(transactions, start=1):
        table.add_row(
            str(idx), tx.from_name, tx.to_name, format_money(tx.amount, symbol)
        )

    console.print(table)


def display_plan(plan: SettlementPlan, symbol: str = "$"):
    """Display a settlement plan with its summary."""
    display_balances(plan.balances, symbol)
    console.print()
    display_transactions(plan.transactions, "Payment Plan", symbol)

    if plan.summary:
        console.print()
        console.print("[bold]Summary:[/bold]")
        for line in plan.summary:
            console.print(f"  {line}")

    console.print()
    if plan.is_complete:
        console.print("  [green]✓ Every balance is settled by this plan[/green]")
    else:
        console.print(
            "  [red]✗ Balances don't sum to zero, left unsettled:[/red] "
            + ", ".join(
                f"{b.name} {format_amount(b.balance, symbol)}"
                for b in plan.unsettled
            )
        )


@app.command()
def plan(
    ledger_path: Path = typer.Argument(..., help="Ledger snapshot (JSON)"),
    group: str | None = typer.Option(
        None, "--group", "-g", help="Only settle this group"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail if balances don't sum to zero"
    ),
    epsilon: float | None = typer.Option(
        None, "--epsilon", help="Settlement tolerance (default 0.01)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Compute the payments that settle a ledger.

    Reads expenses and settlements from LEDGER_PATH, derives each
    participant's net balance and prints a short list of payments.
    """
    setup_logging(verbose)

    try:
        service = _service(epsilon)
        ledger = load_ledger(ledger_path)
        result = service.plan_for_ledger(ledger, group_id=group, strict=strict or None)

        if as_json:
            typer.echo(result.model_dump_json(by_alias=True, indent=2))
            return

        display_plan(result, service.settings.currency_symbol)

    except ExpensiError as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


@app.command()
def balances(
    ledger_path: Path = typer.Argument(..., help="Ledger snapshot (JSON)"),
    group: str | None = typer.Option(
        None, "--group", "-g", help="Only count this group"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show each participant's net balance."""
    setup_logging(verbose)

    try:
        service = _service(None)
        ledger = load_ledger(ledger_path)
        display_balances(
            service.balances_for_ledger(ledger, group_id=group),
            service.settings.currency_symbol,
        )

    except ExpensiError as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


@app.command()
def user(
    ledger_path: Path = typer.Argument(..., help="Ledger snapshot (JSON)"),
    user_id: str = typer.Argument(..., help="User to show balances for"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show one user's balances with each friend, and suggested payments."""
    setup_logging(verbose)

    try:
        service = _service(None)
        symbol = service.settings.currency_symbol
        ledger = load_ledger(ledger_path)
        view = service.user_balances(ledger, user_id)
        names = ledger.names()

        console.print(f"\n[bold]Balances for {names.get(user_id, user_id)}:[/bold]")
        console.print(f"  You are owed: {format_money(view.total_owed, symbol)}")
        console.print(f"  You owe:      {format_money(-view.total_owe, symbol)}")
        console.print(f"  Net:          {format_money(view.net_balance, symbol)}")
        console.print()

        table = Table(title="Friends", show_header=True, header_style="bold magenta")
        table.add_column("Friend", style="cyan")
        table.add_column("Balance", justify="right", width=14)
        for friend_id, amount in view.friend_balances.items():
            table.add_row(names.get(friend_id, "Unknown"), format_money(amount, symbol))
        console.print(table)
        console.print()

        display_transactions(
            service.suggest_for_user(ledger, user_id), "Suggested Payments", symbol
        )

    except ExpensiError as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)
