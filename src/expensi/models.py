"""Pydantic domain models for Expensi."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# Settlement Models
# ============================================================================


class PersonBalance(BaseModel):
    """A participant's net balance in a single currency.

    Positive balance = the participant is owed money (creditor).
    Negative balance = the participant owes money (debtor).
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    name: str
    balance: Decimal


class SimplifiedTransaction(BaseModel):
    """A single payment in a settlement plan: debtor pays creditor."""

    model_config = ConfigDict(populate_by_name=True)

    from_user_id: str = Field(alias="from")
    from_name: str = Field(alias="fromName")
    to_user_id: str = Field(alias="to")
    to_name: str = Field(alias="toName")
    amount: Decimal = Field(gt=0)


class SettlementPlan(BaseModel):
    """The result of simplifying a set of balances."""

    currency: str
    balances: list[PersonBalance]
    transactions: list[SimplifiedTransaction]
    summary: list[str]
    unsettled: list[PersonBalance] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True when applying the transactions settles every balance."""
        return not self.unsettled


# ============================================================================
# Ledger Models
# ============================================================================


class Participant(BaseModel):
    """A member of the ledger."""

    id: str
    name: str


class SplitShare(BaseModel):
    """One participant's share of an expense."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    amount: Decimal


class Expense(BaseModel):
    """An expense paid by one participant and split between several."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    description: str = ""
    amount: Decimal
    currency: str = "USD"
    category: str | None = None
    paid_by: str = Field(alias="paidBy")
    splits: list[SplitShare]
    group_id: str | None = Field(default=None, alias="groupId")
    date: datetime | None = None

    @property
    def split_total(self) -> Decimal:
        """Sum of all split shares."""
        return sum((split.amount for split in self.splits), Decimal("0"))


class Settlement(BaseModel):
    """A recorded payment from one participant to another."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    from_user_id: str = Field(alias="fromUserId")
    to_user_id: str = Field(alias="toUserId")
    amount: Decimal = Field(gt=0)
    currency: str = "USD"
    group_id: str | None = Field(default=None, alias="groupId")
    date: datetime | None = None


class Ledger(BaseModel):
    """A snapshot of expenses and settlements in one currency."""

    currency: str = "USD"
    participants: list[Participant] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    settlements: list[Settlement] = Field(default_factory=list)

    def names(self) -> dict[str, str]:
        """Map participant id to display name."""
        return {p.id: p.name for p in self.participants}


class UserBalances(BaseModel):
    """One user's view of the ledger: who they owe and who owes them.

    friend_balances: positive = the friend owes the user, negative = the user
    owes the friend. group_balances follow the same sign convention.
    """

    user_id: str
    currency: str
    total_owed: Decimal
    total_owe: Decimal
    net_balance: Decimal
    friend_balances: dict[str, Decimal] = Field(default_factory=dict)
    group_balances: dict[str, Decimal] = Field(default_factory=dict)
