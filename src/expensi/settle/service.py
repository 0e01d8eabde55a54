"""Service layer that composes balance aggregation and debt simplification.

This module provides a higher-level API on top of the pure functions in
ledger, simplifier and summary, applying the configured settlement policy
(tolerance, rounding, zero-sum checking) in one place.
"""

import logging

from ..config import Settings
from ..models import (
    Ledger,
    PersonBalance,
    SettlementPlan,
    SimplifiedTransaction,
    UserBalances,
)
from .ledger import ZERO, compute_net_balances, compute_user_balances
from .simplifier import (
    apply_transactions,
    calculate_suggested_settlements,
    check_zero_sum,
    simplify_debts,
)
from .summary import get_debt_summary

logger = logging.getLogger(__name__)


class SettlementService:
    """Service for turning balances into settlement plans."""

    def __init__(self, settings: Settings):
        """Initialize the settlement service."""
        self.settings = settings

    def simplify(
        self,
        balances: list[PersonBalance],
        strict: bool | None = None,
        currency: str | None = None,
    ) -> SettlementPlan:
        """
        Build a settlement plan for a set of balances.

        Args:
            balances: Net balance per participant
            strict: Reject balances that don't sum to zero
                    (defaults to settings.strict_zero_sum)
            currency: Currency of the balances (defaults to settings.currency)

        Returns:
            The settlement plan. Its unsettled list holds whatever the plan
            leaves outstanding, which is only non-empty for imbalanced input.

        Raises:
            ImbalancedLedgerError: If strict and the balances don't sum to zero
        """
        epsilon = self.settings.settle_epsilon
        if strict is None:
            strict = self.settings.strict_zero_sum

        if strict:
            check_zero_sum(balances, epsilon)

        transactions = simplify_debts(
            balances,
            epsilon=epsilon,
            decimal_places=self.settings.decimal_places,
            rounding=self.settings.rounding_mode,
        )

        unsettled = [
            b
            for b in apply_transactions(balances, transactions)
            if abs(b.balance) > epsilon
        ]
        if unsettled:
            logger.warning(
                f"Plan leaves {len(unsettled)} balances unsettled: "
                + ", ".join(f"{b.name} ({b.balance})" for b in unsettled)
            )

        logger.info(
            f"Simplified {len(balances)} balances into {len(transactions)} payments"
        )

        return SettlementPlan(
            currency=currency or self.settings.currency,
            balances=balances,
            transactions=transactions,
            summary=get_debt_summary(transactions, self.settings.currency_symbol),
            unsettled=unsettled,
        )

    def balances_for_ledger(
        self, ledger: Ledger, group_id: str | None = None
    ) -> list[PersonBalance]:
        """Net balances for a ledger, optionally restricted to one group."""
        return compute_net_balances(
            ledger, group_id=group_id, epsilon=self.settings.settle_epsilon
        )

    def plan_for_ledger(
        self,
        ledger: Ledger,
        group_id: str | None = None,
        strict: bool | None = None,
    ) -> SettlementPlan:
        """
        Build a settlement plan straight from a ledger.

        Args:
            ledger: Ledger snapshot
            group_id: Only settle entries belonging to this group
            strict: Reject imbalanced balances (see simplify())

        Returns:
            The settlement plan
        """
        balances = self.balances_for_ledger(ledger, group_id)
        return self.simplify(balances, strict=strict, currency=ledger.currency)

    def user_balances(self, ledger: Ledger, user_id: str) -> UserBalances:
        """One user's view of the ledger."""
        return compute_user_balances(ledger, user_id)

    def suggest_for_user(
        self, ledger: Ledger, user_id: str
    ) -> list[SimplifiedTransaction]:
        """
        Suggest payments that clear a user's balances with their friends.

        The user's friend balances are turned into net balances (a friend who
        owes the user is a debtor, the user holds the opposite total) and
        simplified, so two friends on opposite sides of the user may be told
        to pay each other directly.
        """
        view = compute_user_balances(ledger, user_id)
        net = {user_id: sum(view.friend_balances.values(), ZERO)}
        for friend_id, balance in view.friend_balances.items():
            net[friend_id] = -balance
        return calculate_suggested_settlements(
            net,
            ledger.names(),
            epsilon=self.settings.settle_epsilon,
            decimal_places=self.settings.decimal_places,
            rounding=self.settings.rounding_mode,
        )
