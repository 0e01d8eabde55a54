"""Net balance computation from a ledger of expenses and settlements."""

import logging
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from ..exceptions import CurrencyMismatchError, LedgerError
from ..models import Expense, Ledger, PersonBalance, Settlement, UserBalances
from .simplifier import DEFAULT_EPSILON

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def load_ledger(path: Path) -> Ledger:
    """
    Read a ledger snapshot from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed ledger

    Raises:
        LedgerError: If the file can't be read or doesn't describe a ledger
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LedgerError(f"Cannot read ledger {path}: {e}") from e

    try:
        ledger = Ledger.model_validate_json(raw)
    except ValidationError as e:
        raise LedgerError(f"Invalid ledger {path}:\n{e}") from e

    logger.info(
        f"Loaded ledger with {len(ledger.participants)} participants, "
        f"{len(ledger.expenses)} expenses, {len(ledger.settlements)} settlements"
    )
    return ledger


def _check_currency(entry: Expense | Settlement, ledger: Ledger) -> None:
    if entry.currency != ledger.currency:
        raise CurrencyMismatchError(entry.id, entry.currency, ledger.currency)


def _in_group(entry: Expense | Settlement, group_id: str | None) -> bool:
    return group_id is None or entry.group_id == group_id


def compute_net_balances(
    ledger: Ledger,
    group_id: str | None = None,
    epsilon: Decimal = DEFAULT_EPSILON,
) -> list[PersonBalance]:
    """
    Compute each participant's net balance.

    For an expense, the payer is credited with the amount paid and every
    split participant is debited their share, so the payer's own share
    cancels out. For a settlement, the payer is credited and the receiver
    debited.

    An expense whose shares don't add up to its amount is logged; it leaves
    the balances short of zero by the difference, which check_zero_sum()
    reports.

    Args:
        ledger: Ledger snapshot
        group_id: Only count entries belonging to this group
        epsilon: Tolerance for the split total check

    Returns:
        Balances in participant order, followed by ids that appear in
        entries but not in the participant list

    Raises:
        CurrencyMismatchError: If an entry isn't in the ledger's currency
    """
    names = ledger.names()
    net: dict[str, Decimal] = {p.id: ZERO for p in ledger.participants}

    for expense in ledger.expenses:
        if not _in_group(expense, group_id):
            continue
        _check_currency(expense, ledger)

        split_total = expense.split_total
        if abs(split_total - expense.amount) > epsilon:
            logger.warning(
                f"Expense {expense.id} splits total {split_total}, "
                f"but its amount is {expense.amount}"
            )

        net[expense.paid_by] = net.get(expense.paid_by, ZERO) + expense.amount
        for split in expense.splits:
            net[split.user_id] = net.get(split.user_id, ZERO) - split.amount

    for settlement in ledger.settlements:
        if not _in_group(settlement, group_id):
            continue
        _check_currency(settlement, ledger)

        net[settlement.from_user_id] = (
            net.get(settlement.from_user_id, ZERO) + settlement.amount
        )
        net[settlement.to_user_id] = (
            net.get(settlement.to_user_id, ZERO) - settlement.amount
        )

    return [
        PersonBalance(user_id=user_id, name=names.get(user_id, "Unknown"), balance=bal)
        for user_id, bal in net.items()
    ]


def compute_user_balances(ledger: Ledger, user_id: str) -> UserBalances:
    """
    Compute what one user owes and is owed, per friend and per group.

    Only expenses the user paid for or has a share in count. When the user
    paid, each other participant owes them their share; otherwise the user
    owes the payer their own share. A settlement the user made raises the
    balance with the receiver, one they received lowers it.

    Args:
        ledger: Ledger snapshot
        user_id: The user whose view to compute

    Returns:
        The user's balances. total_owed and total_owe never go below zero.
    """
    total_owed = ZERO
    total_owe = ZERO
    friend_balances: dict[str, Decimal] = {}
    group_balances: dict[str, Decimal] = {}

    for expense in ledger.expenses:
        _check_currency(expense, ledger)
        user_split = next((s for s in expense.splits if s.user_id == user_id), None)

        if expense.paid_by == user_id:
            # User paid, others owe them
            others = [s for s in expense.splits if s.user_id != user_id]
            change = sum((s.amount for s in others), ZERO)
            total_owed += change
            for split in others:
                friend_balances[split.user_id] = (
                    friend_balances.get(split.user_id, ZERO) + split.amount
                )
        elif user_split is not None:
            # Someone else paid, user owes them
            change = -user_split.amount
            total_owe += user_split.amount
            friend_balances[expense.paid_by] = (
                friend_balances.get(expense.paid_by, ZERO) - user_split.amount
            )
        else:
            continue

        if expense.group_id:
            group_balances[expense.group_id] = (
                group_balances.get(expense.group_id, ZERO) + change
            )

    for settlement in ledger.settlements:
        _check_currency(settlement, ledger)
        if settlement.from_user_id == user_id:
            total_owe -= settlement.amount
            friend_balances[settlement.to_user_id] = (
                friend_balances.get(settlement.to_user_id, ZERO) + settlement.amount
            )
        elif settlement.to_user_id == user_id:
            total_owed -= settlement.amount
            friend_balances[settlement.from_user_id] = (
                friend_balances.get(settlement.from_user_id, ZERO) - settlement.amount
            )

    return UserBalances(
        user_id=user_id,
        currency=ledger.currency,
        total_owed=max(ZERO, total_owed),
        total_owe=max(ZERO, total_owe),
        net_balance=total_owed - total_owe,
        friend_balances=friend_balances,
        group_balances=group_balances,
    )
