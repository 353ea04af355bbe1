"""
Money Value Module

Immutable exact-decimal amount paired with an ISO 4217 currency code.
Arithmetic is exact, rounding is always round-half-to-even, and allocation
splits an amount into shares that sum back to it to the last minor unit.
NEVER uses float for monetary values.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import (
    Context, Decimal, DivisionByZero, InvalidOperation, Overflow,
    MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_EVEN,
)
from typing import Any, Dict, List, Optional, Union
import re

from .environment import get_environment
from .errors import (
    CurrencyMismatchError, InvalidAllocationError, InvalidAmountError,
    InvalidCurrencyError, NoRateError,
)
from .forex import ForexService, as_rate
from .l10n import FormatOptions
from .logging_config import get_logger, log_action
from .number import normalise

ISO_4217 = re.compile(r"[A-Z]{3}")
ZERO = Decimal(0)

# Unbounded context: add/subtract/multiply/quantize are exact, never rounded
EXACT = Context(
    prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

Numeric = Union[int, float, Decimal]

logger = get_logger("exact_money.money")


def _is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _to_decimal(value: Numeric) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Shortest repr, not the binary expansion: 0.1 -> Decimal('0.1')
        return Decimal(repr(value))
    return Decimal(value)


def _check_precision(precision: Any) -> None:
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise TypeError(f"Precision must be a non-negative integer, got {precision!r}")


def _quantize(value: Decimal, precision: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_EVEN, context=EXACT)


@dataclass(frozen=True)
class Money:
    """
    Immutable money representation with currency and exact precision.

    Money(amount, currency), Money("12.50 EUR") and
    Money({"amount": "12.50", "currency": "EUR"}) build the same value.
    """
    amount: Decimal
    currency: Optional[str] = None

    def __post_init__(self):
        amount, currency = self.amount, self.currency

        if currency is None:
            if isinstance(amount, Mapping):
                amount, currency = amount.get('amount'), amount.get('currency')
            elif isinstance(amount, str):
                # Allow Money('1.2 EUR'): currency follows the last space
                index = amount.rfind(' ')
                if index < 0:
                    currency = ''
                else:
                    amount, currency = amount[:index], amount[index + 1:]
        elif isinstance(amount, Mapping):
            raise TypeError("Currency must not be given separately for a mapping amount")
        elif isinstance(amount, str) and self._has_currency_suffix(amount):
            raise TypeError(f"Currency must not be given separately for '{amount}'")

        object.__setattr__(self, 'amount', self._validate_amount(amount))
        if not isinstance(currency, str) or not ISO_4217.fullmatch(currency):
            raise InvalidCurrencyError(currency)
        object.__setattr__(self, 'currency', currency)

    @staticmethod
    def _has_currency_suffix(text: str) -> bool:
        head, _, tail = text.strip().rpartition(' ')
        return bool(head) and ISO_4217.fullmatch(tail) is not None

    @staticmethod
    def _validate_amount(amount: Any) -> Decimal:
        if isinstance(amount, str):
            amount = normalise(amount)
        elif not _is_numeric(amount):
            raise InvalidAmountError(amount, "must be a number or numeric string")

        try:
            value = Decimal(amount) if isinstance(amount, str) else _to_decimal(amount)
        except (InvalidOperation, ValueError):
            raise InvalidAmountError(amount) from None
        if not value.is_finite():
            raise InvalidAmountError(amount, "is not a finite amount")
        return value

    @classmethod
    def parse(cls, text: str) -> 'Money':
        """Build Money from '<amount> <currency>' text"""
        if not isinstance(text, str):
            raise TypeError(f"Money.parse needs a string, got {type(text).__name__}")
        return cls(text)

    @classmethod
    def from_dict(cls, data: Mapping) -> 'Money':
        """Build Money from a mapping with 'amount' and 'currency' keys"""
        if not isinstance(data, Mapping):
            raise TypeError(f"Money.from_dict needs a mapping, got {type(data).__name__}")
        return cls(data)

    def to_dict(self) -> Dict[str, str]:
        return {"amount": self._amount_literal(), "currency": self.currency}

    @property
    def precision(self) -> int:
        """Standard minor-unit digits for this currency"""
        return get_environment().localization.resolved_precision(self.currency)

    def _check_same_currency(self, other: 'Money', operation: str) -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Cannot {operation} Money and {type(other).__name__}")
        if self.currency != other.currency:
            raise CurrencyMismatchError(operation, self.currency, other.currency)

    # Arithmetic
    def plus(self, other: 'Money') -> 'Money':
        self._check_same_currency(other, "add")
        return Money(EXACT.add(self.amount, other.amount), self.currency)

    def minus(self, other: 'Money') -> 'Money':
        self._check_same_currency(other, "subtract")
        return Money(EXACT.subtract(self.amount, other.amount), self.currency)

    def times(self, multiplier: Numeric) -> 'Money':
        """Exact, unrounded product; call round() to settle it"""
        if not _is_numeric(multiplier):
            raise TypeError(f"Money multiplication needs a number, got {type(multiplier).__name__}")
        factor = _to_decimal(multiplier)
        if not factor.is_finite():
            raise TypeError(f"Money multiplication needs a finite number, got {multiplier!r}")
        return Money(EXACT.multiply(self.amount, factor), self.currency)

    def round(self, precision: Optional[int] = None) -> 'Money':
        """
        Round half-to-even ("banker's rounding") to precision decimal places

        Args:
            precision: Decimal places, defaults to the currency's minor units

        Raises:
            TypeError: If precision is not a non-negative integer
        """
        if precision is None:
            precision = self.precision
        else:
            _check_precision(precision)
        return Money(_quantize(self.amount, precision), self.currency)

    def allocate(self, ratios: Sequence, precision: Optional[int] = None) -> List['Money']:
        """
        Split into shares proportional to ratios

        The amount is rounded first; every share is rounded to the same
        precision and the rounding remainder goes to the first share, so the
        shares always sum to exactly self.round(precision).

        Args:
            ratios: Non-empty sequence of non-negative numbers
            precision: Decimal places, defaults to the currency's minor units

        Raises:
            TypeError: If ratios is not a non-empty sequence of numbers
            InvalidAllocationError: If a ratio is negative or they sum to zero
        """
        if isinstance(ratios, (str, bytes)) or not isinstance(ratios, Sequence):
            raise TypeError("Money allocation needs a sequence of ratios")
        if len(ratios) < 1:
            raise TypeError("Money allocation needs a non-empty sequence of ratios")
        for ratio in ratios:
            if not _is_numeric(ratio):
                raise TypeError(f"Allocation ratios must be numbers, got {ratio!r}")

        weights = [_to_decimal(ratio) for ratio in ratios]
        if any(not weight.is_finite() or weight < ZERO for weight in weights):
            raise InvalidAllocationError(ratios, "ratios must be finite and non-negative")
        total = sum(weights, ZERO)
        if total <= ZERO:
            raise InvalidAllocationError(ratios, "ratios must sum to a positive number")

        if precision is None:
            precision = self.precision
        else:
            _check_precision(precision)

        amount = self.round(precision).amount

        # Enough digits to carry every integer and fraction digit of a share
        digits = max(get_environment().division_precision, amount.adjusted() + precision + 3)
        division = Context(prec=digits, rounding=ROUND_HALF_EVEN)

        remainder = amount
        shares = []
        for weight in weights:
            share = _quantize(division.divide(EXACT.multiply(amount, weight), total), precision)
            remainder = EXACT.subtract(remainder, share)
            shares.append(share)

        if remainder != ZERO:
            shares[0] = _quantize(EXACT.add(shares[0], remainder), precision)

        return [Money(share, self.currency) for share in shares]

    # Comparison
    def compare(self, other: 'Money') -> int:
        """-1, 0 or 1; currencies must match"""
        self._check_same_currency(other, "compare")
        if self.amount < other.amount:
            return -1
        if self.amount > other.amount:
            return 1
        return 0

    def eq(self, other: 'Money') -> bool:
        """Equal amount in the same currency; never raises on a currency mismatch"""
        return (isinstance(other, Money) and self.currency == other.currency
                and self.compare(other) == 0)

    def ne(self, other: 'Money') -> bool:
        return not self.eq(other)

    def lt(self, other: 'Money') -> bool:
        return self.compare(other) < 0

    def lte(self, other: 'Money') -> bool:
        return self.compare(other) <= 0

    def gt(self, other: 'Money') -> bool:
        return self.compare(other) > 0

    def gte(self, other: 'Money') -> bool:
        return self.compare(other) >= 0

    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.amount == ZERO

    def is_not_zero(self) -> bool:
        return self.amount != ZERO

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.amount > ZERO

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.amount < ZERO

    # Conversion
    async def to(self, currency: str, forex: Optional[ForexService] = None) -> 'Money':
        """
        Convert into another currency using the forex service

        Args:
            currency: Target ISO 4217 code
            forex: Rate service, defaults to the configured one

        Raises:
            InvalidCurrencyError: If currency is not an ISO 4217 code
            NoRateError: If the forex service has no rate for the pair
        """
        if currency == self.currency:
            return self
        if not isinstance(currency, str) or not ISO_4217.fullmatch(currency):
            raise InvalidCurrencyError(currency)

        forex = forex or get_environment().forex
        if forex is None:
            raise NoRateError(self.currency, currency)

        rate = await forex.rate(self.currency, currency)
        if rate is None:
            logger.warning(f"No exchange rate for {self.currency} to {currency}")
            raise NoRateError(self.currency, currency)

        rate = as_rate(rate)
        converted = Money(EXACT.multiply(self.amount, rate), currency)
        log_action(
            logger, "debug", f"Converted {self} to {converted}",
            action="convert", resource=f"{self.currency}/{currency}",
            extra={"rate": str(rate)}
        )
        return converted

    # Representation
    def _amount_literal(self) -> str:
        return f"{self.amount:f}"

    def __str__(self) -> str:
        return f"{self._amount_literal()} {self.currency}"

    def to_locale_string(self, locale: Optional[str] = None,
                         options: Optional[FormatOptions] = None) -> str:
        """Format for display through the localization service"""
        environment = get_environment()
        locale = locale or environment.default_locale
        options = options or environment.default_format_options

        if options is not None and options.maximum_fraction_digits is not None:
            rounded = self.round(options.maximum_fraction_digits)
        else:
            rounded = self.round()
        return environment.localization.format(rounded.amount, self.currency, options, locale)

    # Operator protocol
    def __add__(self, other: 'Money') -> 'Money':
        return self.plus(other)

    def __sub__(self, other: 'Money') -> 'Money':
        return self.minus(other)

    def __mul__(self, multiplier: Numeric) -> 'Money':
        if not _is_numeric(multiplier):
            return NotImplemented
        return self.times(multiplier)

    __rmul__ = __mul__

    def __neg__(self) -> 'Money':
        return Money(EXACT.minus(self.amount), self.currency)

    def __abs__(self) -> 'Money':
        return Money(EXACT.abs(self.amount), self.currency)

    def __round__(self, precision: Optional[int] = None) -> 'Money':
        return self.round(precision)

    def __eq__(self, other) -> bool:
        return self.eq(other)

    def __ne__(self, other) -> bool:
        return self.ne(other)

    def __lt__(self, other: 'Money') -> bool:
        return self.lt(other)

    def __le__(self, other: 'Money') -> bool:
        return self.lte(other)

    def __gt__(self, other: 'Money') -> bool:
        return self.gt(other)

    def __ge__(self, other: 'Money') -> bool:
        return self.gte(other)

    def __hash__(self) -> int:
        return hash((self.amount, self.currency))
