"""Debt simplification: turn net balances into a short list of payments.

Creditors (positive balance) and debtors (negative balance) are matched
greedily, largest first, with a two-pointer sweep. Each step settles the
smaller of the current debtor's and creditor's remaining amounts, so every
step retires at least one participant and the plan never has more than
``creditors + debtors - 1`` payments.

Greedy largest-first is a deterministic approximation. Finding the true
minimum number of payments is NP-hard in general, and there are inputs where
a cleverer grouping needs fewer payments than this produces.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal

from ..exceptions import ImbalancedLedgerError
from ..models import PersonBalance, SimplifiedTransaction

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = Decimal("0.01")
DEFAULT_DECIMAL_PLACES = 2


def round_amount(
    amount: Decimal,
    decimal_places: int = DEFAULT_DECIMAL_PLACES,
    rounding: str = ROUND_HALF_UP,
) -> Decimal:
    """
    Round a monetary amount to the currency's minor unit.

    Args:
        amount: Amount to round
        decimal_places: Number of digits after the decimal point
        rounding: A decimal module rounding constant (ROUND_HALF_UP by default)

    Returns:
        The rounded amount
    """
    quantum = Decimal(1).scaleb(-decimal_places)
    return amount.quantize(quantum, rounding=rounding)


class _Account:
    """Working state for one side of the sweep."""

    __slots__ = ("user_id", "name", "remaining")

    def __init__(self, balance: PersonBalance):
        self.user_id = balance.user_id
        self.name = balance.name
        self.remaining = abs(balance.balance)


def simplify_debts(
    balances: Iterable[PersonBalance],
    epsilon: Decimal = DEFAULT_EPSILON,
    decimal_places: int = DEFAULT_DECIMAL_PLACES,
    rounding: str = ROUND_HALF_UP,
) -> list[SimplifiedTransaction]:
    """
    Compute payments that settle a set of net balances.

    Balances within [-epsilon, epsilon] count as settled and are ignored.
    Equal balances keep their input order, so the output is deterministic
    for a given input order.

    The balances are expected to sum to zero. When they don't, the sweep
    stops as soon as either side runs out and whatever is left stays
    unsettled; use check_zero_sum() beforehand to reject such input.

    Duplicate user ids are treated as separate accounts.

    Args:
        balances: Net balance per participant
        epsilon: Settlement tolerance, must be positive
        decimal_places: Precision of emitted amounts
        rounding: Rounding rule applied to each emitted amount

    Returns:
        Payments in matching order, each with a positive amount
    """
    if epsilon <= 0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")

    balances = list(balances)

    # sorted() is stable: ties keep input order
    creditors = [
        _Account(b)
        for b in sorted(
            (b for b in balances if b.balance > epsilon),
            key=lambda b: b.balance,
            reverse=True,
        )
    ]
    debtors = [
        _Account(b)
        for b in sorted(
            (b for b in balances if b.balance < -epsilon),
            key=lambda b: b.balance,
        )
    ]

    logger.debug(
        f"Simplifying {len(balances)} balances: "
        f"{len(creditors)} creditors, {len(debtors)} debtors"
    )

    transactions: list[SimplifiedTransaction] = []
    i = 0  # debtor cursor
    j = 0  # creditor cursor

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        amount = min(debtor.remaining, creditor.remaining)

        if amount > epsilon:
            rounded = round_amount(amount, decimal_places, rounding)
            if rounded > 0:
                transactions.append(
                    SimplifiedTransaction(
                        from_user_id=debtor.user_id,
                        from_name=debtor.name,
                        to_user_id=creditor.user_id,
                        to_name=creditor.name,
                        amount=rounded,
                    )
                )

        # Subtract the unrounded amount; rounding is per payment only
        debtor.remaining -= amount
        creditor.remaining -= amount

        if debtor.remaining < epsilon:
            i += 1
        if creditor.remaining < epsilon:
            j += 1

    if i < len(debtors) or j < len(creditors):
        logger.debug(
            f"Sweep ended with {len(debtors) - i} debtors and "
            f"{len(creditors) - j} creditors left unmatched"
        )

    return transactions


def calculate_suggested_settlements(
    friend_balances: Mapping[str, Decimal],
    friend_names: Mapping[str, str],
    epsilon: Decimal = DEFAULT_EPSILON,
    decimal_places: int = DEFAULT_DECIMAL_PLACES,
    rounding: str = ROUND_HALF_UP,
) -> list[SimplifiedTransaction]:
    """
    Suggest payments for a mapping of user id to net balance.

    Ids missing from friend_names are shown as "Unknown".
    """
    balances = [
        PersonBalance(
            user_id=user_id,
            name=friend_names.get(user_id, "Unknown"),
            balance=balance,
        )
        for user_id, balance in friend_balances.items()
    ]
    return simplify_debts(balances, epsilon, decimal_places, rounding)


def apply_transactions(
    balances: Sequence[PersonBalance],
    transactions: Iterable[SimplifiedTransaction],
) -> list[PersonBalance]:
    """
    Apply payments to balances and return what is left.

    The payer's balance rises by the amount and the receiver's falls by it.
    Transactions are matched to balances by user id; for duplicate ids the
    first entry absorbs the payment.

    Args:
        balances: Balances before payment
        transactions: Payments to apply

    Returns:
        New balances in the same order as the input
    """
    remaining = [b.model_copy() for b in balances]
    index: dict[str, PersonBalance] = {}
    for balance in remaining:
        index.setdefault(balance.user_id, balance)

    for tx in transactions:
        if tx.from_user_id in index:
            index[tx.from_user_id].balance += tx.amount
        if tx.to_user_id in index:
            index[tx.to_user_id].balance -= tx.amount

    return remaining


def check_zero_sum(
    balances: Iterable[PersonBalance],
    epsilon: Decimal = DEFAULT_EPSILON,
) -> Decimal:
    """
    Verify that balances sum to zero within epsilon.

    Run this before simplify_debts() when a partial settlement is not
    acceptable.

    Returns:
        The sum of all balances

    Raises:
        ImbalancedLedgerError: If the sum is further than epsilon from zero
    """
    total = sum((b.balance for b in balances), Decimal("0"))
    if abs(total) > epsilon:
        raise ImbalancedLedgerError(total=total, epsilon=epsilon)
    return total
