"""
Money Error Types

Every domain failure is a ValueError subclass so callers that already catch
ValueError around monetary code keep working.
"""

from typing import Any, Sequence


class MoneyError(ValueError):
    """Base class for monetary domain errors"""


class InvalidCurrencyError(MoneyError):
    """Currency code does not match the ISO-4217 pattern"""

    def __init__(self, currency: Any):
        self.currency = currency
        super().__init__(f"'{currency}' is not a valid ISO-4217 currency code")


class InvalidAmountError(MoneyError):
    """Amount cannot be turned into an exact, finite decimal"""

    def __init__(self, amount: Any, reason: str = "is not a valid decimal amount"):
        self.amount = amount
        super().__init__(f"'{amount}' {reason}")


class CurrencyMismatchError(MoneyError):
    """Binary operation between two different currencies"""

    def __init__(self, operation: str, left: str, right: str):
        self.operation = operation
        self.left = left
        self.right = right
        if operation == "subtract":
            message = f"Cannot subtract {right} from {left}"
        else:
            message = f"Cannot {operation} {left} and {right}"
        super().__init__(message)


class InvalidAllocationError(MoneyError):
    """Ratios cannot split an amount (zero, negative or negative-sum ratios)"""

    def __init__(self, ratios: Sequence[Any], reason: str):
        self.ratios = list(ratios)
        super().__init__(f"Cannot allocate by ratios {self.ratios}: {reason}")


class NoRateError(MoneyError):
    """Forex service has no rate for the currency pair"""

    def __init__(self, from_currency: str, to_currency: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(f"Undefined exchange rate for {from_currency} to {to_currency}")


class ConfigurationError(RuntimeError):
    """Collaborators were reconfigured after first use"""
