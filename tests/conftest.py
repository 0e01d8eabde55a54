"""Shared fixtures for Expensi tests."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from expensi.config import Settings
from expensi.models import Expense, Ledger, Participant, Settlement, SplitShare


@pytest.fixture
def settings():
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def sample_ledger():
    """Three friends: a dinner, a shared ride, and rent in a group."""
    return Ledger(
        currency="USD",
        participants=[
            Participant(id="user-1", name="John Doe"),
            Participant(id="user-2", name="Jane Smith"),
            Participant(id="user-3", name="Mike Johnson"),
        ],
        expenses=[
            Expense(
                id="exp-1",
                description="Dinner at Italian Place",
                amount=Decimal("85.50"),
                category="Food",
                paid_by="user-1",
                splits=[
                    SplitShare(user_id="user-1", amount=Decimal("28.50")),
                    SplitShare(user_id="user-2", amount=Decimal("28.50")),
                    SplitShare(user_id="user-3", amount=Decimal("28.50")),
                ],
                date=datetime(2025, 3, 1, 19, 0, 0, tzinfo=UTC),
            ),
            Expense(
                id="exp-2",
                description="Uber to Airport",
                amount=Decimal("45.00"),
                category="Travel",
                paid_by="user-2",
                splits=[
                    SplitShare(user_id="user-1", amount=Decimal("22.50")),
                    SplitShare(user_id="user-2", amount=Decimal("22.50")),
                ],
                date=datetime(2025, 2, 26, 8, 0, 0, tzinfo=UTC),
            ),
            Expense(
                id="exp-3",
                description="Monthly Rent",
                amount=Decimal("1200.00"),
                category="Rent",
                paid_by="user-1",
                splits=[
                    SplitShare(user_id="user-1", amount=Decimal("600.00")),
                    SplitShare(user_id="user-2", amount=Decimal("600.00")),
                ],
                group_id="group-1",
                date=datetime(2025, 2, 21, 9, 0, 0, tzinfo=UTC),
            ),
        ],
    )


@pytest.fixture
def rent_payment():
    """Jane pays John part of the rent."""
    return Settlement(
        id="set-1",
        from_user_id="user-2",
        to_user_id="user-1",
        amount=Decimal("100.00"),
        group_id="group-1",
    )
