"""Human-readable summaries of settlement plans."""

from collections.abc import Iterable
from decimal import Decimal

from ..models import SimplifiedTransaction


def format_amount(amount: Decimal, currency_symbol: str = "$") -> str:
    """
    Format an amount with a currency symbol and two decimals.

    Example:
        format_amount(Decimal("1234.5")) -> "$1,234.50"
        format_amount(Decimal("-3")) -> "-$3.00"
    """
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol}{abs(amount):,.2f}"


def describe_transaction(tx: SimplifiedTransaction, currency_symbol: str = "$") -> str:
    """Describe one payment, e.g. "Bob pays Alice $10.00"."""
    return f"{tx.from_name} pays {tx.to_name} {currency_symbol}{tx.amount:.2f}"


def get_debt_summary(
    transactions: Iterable[SimplifiedTransaction], currency_symbol: str = "$"
) -> list[str]:
    """One line per payment, in plan order."""
    return [describe_transaction(tx, currency_symbol) for tx in transactions]
