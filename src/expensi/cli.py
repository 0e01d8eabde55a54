"""CLI for Expensi."""

import typer

from .settle.cli import app as settle_app

app = typer.Typer(
    name="expensi",
    help="Expense splitting tools",
)

app.add_typer(settle_app, name="settle", help="Debt simplification and settle-up")


if __name__ == "__main__":
    app()
