"""Custom exceptions for Expensi."""

from decimal import Decimal


class ExpensiError(Exception):
    """Base exception for all Expensi errors."""

    pass


class ConfigurationError(ExpensiError):
    """Raised when configuration is invalid or missing."""

    pass


class LedgerError(ExpensiError):
    """Raised when a ledger snapshot cannot be read or is malformed."""

    pass


class CurrencyMismatchError(LedgerError):
    """Raised when a ledger entry is not in the ledger's currency."""

    def __init__(self, entry_id: str, currency: str, expected: str):
        self.entry_id = entry_id
        self.currency = currency
        self.expected = expected
        super().__init__(
            f"Entry {entry_id} is in {currency}, but the ledger is in {expected}. "
            f"Convert amounts to a single currency before settling."
        )


class ImbalancedLedgerError(ExpensiError):
    """Raised when net balances don't sum to zero."""

    def __init__(self, total: Decimal, epsilon: Decimal, message: str | None = None):
        self.total = total
        self.epsilon = epsilon
        super().__init__(
            message
            or f"Balances sum to {total}, not zero (tolerance {epsilon}). "
            f"Some debts cannot be settled."
        )
