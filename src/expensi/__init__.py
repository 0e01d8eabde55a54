"""Expensi - Split group expenses and settle debts in as few payments as possible."""

__version__ = "0.1.0"

from .config import Settings, load_settings
from .exceptions import ExpensiError, ImbalancedLedgerError
from .models import (
    Ledger,
    PersonBalance,
    SettlementPlan,
    SimplifiedTransaction,
)
from .settle.ledger import compute_net_balances, compute_user_balances
from .settle.service import SettlementService
from .settle.simplifier import (
    calculate_suggested_settlements,
    check_zero_sum,
    simplify_debts,
)
from .settle.summary import get_debt_summary

__all__ = [
    "Settings",
    "load_settings",
    "ExpensiError",
    "ImbalancedLedgerError",
    "Ledger",
    "PersonBalance",
    "SettlementPlan",
    "SimplifiedTransaction",
    "compute_net_balances",
    "compute_user_balances",
    "SettlementService",
    "calculate_suggested_settlements",
    "check_zero_sum",
    "simplify_debts",
    "get_debt_summary",
]
