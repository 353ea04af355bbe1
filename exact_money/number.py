"""
Numeric String Normalisation

Turns free-form amount text ("$1,234.50", "1.234,50 €", "1'000") into a plain
decimal literal that Decimal() accepts. NEVER goes through float.
"""

from decimal import Decimal, InvalidOperation
import re

from .errors import InvalidAmountError

_GROUPING_CHARS = re.compile(r"['_\s]")
_NON_NUMERIC = re.compile(r"[^\d.,\-+]")
_DECIMAL_LITERAL = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")
_EXPONENT = re.compile(r"\d[eE][+-]?\d")


def normalise(value: str) -> str:
    """
    Normalise a numeric string to a canonical decimal literal

    Args:
        value: Raw text, possibly with currency symbols and grouping

    Returns:
        Decimal literal such as "-1234.50"

    Raises:
        InvalidAmountError: If no decimal number can be recovered
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidAmountError(value, "must be a non-empty numeric string")

    # Plain literals, exponent form included, are taken as they are
    literal = value.strip().replace('_', '')
    try:
        if Decimal(literal).is_finite():
            return literal
    except InvalidOperation:
        pass

    clean_value = _GROUPING_CHARS.sub('', value.strip())
    if _EXPONENT.search(clean_value):
        # Exponent next to symbols: stripping letters would change the value
        raise InvalidAmountError(value)
    # Remove currency symbols and letters
    clean_value = _NON_NUMERIC.sub('', clean_value)

    if ',' in clean_value and '.' in clean_value:
        # Both present - whichever comes last is the decimal separator
        if clean_value.rfind(',') > clean_value.rfind('.'):
            clean_value = clean_value.replace('.', '').replace(',', '.')
        else:
            clean_value = clean_value.replace(',', '')
    elif clean_value.count(',') > 1:
        clean_value = clean_value.replace(',', '')
    elif ',' in clean_value:
        integer_part, fraction_part = clean_value.split(',')
        if len(fraction_part) == 3 and integer_part.lstrip('+-'):
            # "1,234" reads as grouping
            clean_value = integer_part + fraction_part
        else:
            clean_value = f"{integer_part}.{fraction_part}"
    elif clean_value.count('.') > 1:
        # "1.234.567" - dots used as grouping
        clean_value = clean_value.replace('.', '')

    if not _DECIMAL_LITERAL.fullmatch(clean_value):
        raise InvalidAmountError(value)

    return clean_value
