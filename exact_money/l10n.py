"""
Localization Module

Currency minor-unit precision and display formatting. Money only talks to the
LocalizationService interface; DefaultLocalization covers ISO 4217 minor units
and a small set of locale separator conventions. Deployments with full CLDR
needs plug in their own service.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Dict, Optional, Tuple

# ISO 4217 minor units that differ from the common 2
MINOR_UNITS: Dict[str, int] = {
    # 0 decimal places
    "BIF": 0, "CLP": 0, "DJF": 0, "GNF": 0, "ISK": 0, "JPY": 0, "KMF": 0,
    "KRW": 0, "PYG": 0, "RWF": 0, "UGX": 0, "UYI": 0, "VND": 0, "VUV": 0,
    "XAF": 0, "XOF": 0, "XPF": 0,
    # 3 decimal places
    "BHD": 3, "IQD": 3, "JOD": 3, "KWD": 3, "LYD": 3, "OMR": 3, "TND": 3,
    # 4 decimal places
    "CLF": 4, "UYW": 4,
}

DEFAULT_MINOR_UNITS = 2

# language -> (grouping separator, decimal separator)
SEPARATORS: Dict[str, Tuple[str, str]] = {
    "en": (",", "."),
    "ja": (",", "."),
    "zh": (",", "."),
    "de": (".", ","),
    "nl": (".", ","),
    "it": (".", ","),
    "es": (".", ","),
    "pt": (".", ","),
    "fr": ("\u202f", ","),
    "sv": ("\u00a0", ","),
    "pl": ("\u00a0", ","),
    "ru": ("\u00a0", ","),
    "de-CH": ("\u2019", "."),
}


@dataclass(frozen=True)
class FormatOptions:
    """Display options understood by format()"""
    maximum_fraction_digits: Optional[int] = None
    use_grouping: bool = True


class LocalizationService(ABC):
    """Interface for currency precision and display formatting"""

    @abstractmethod
    def resolved_precision(self, currency: str) -> int:
        """Number of minor-unit digits for a currency"""
        pass

    @abstractmethod
    def format(self, amount: Decimal, currency: str,
               options: Optional[FormatOptions] = None,
               locale: Optional[str] = None) -> str:
        """Render an amount for display"""
        pass


class DefaultLocalization(LocalizationService):
    """ISO 4217 minor units with "<code> <amount>" display"""

    def __init__(self, minor_units: Optional[Dict[str, int]] = None):
        self._minor_units = dict(MINOR_UNITS)
        if minor_units:
            self._minor_units.update(minor_units)

    def resolved_precision(self, currency: str) -> int:
        return self._minor_units.get(currency, DEFAULT_MINOR_UNITS)

    def separators(self, locale: Optional[str]) -> Tuple[str, str]:
        """Grouping and decimal separators for a locale tag like 'de-DE'"""
        if not locale:
            return SEPARATORS["en"]
        tag = locale.replace("_", "-")
        if tag in SEPARATORS:
            return SEPARATORS[tag]
        return SEPARATORS.get(tag.split("-")[0].lower(), SEPARATORS["en"])

    def format(self, amount: Decimal, currency: str,
               options: Optional[FormatOptions] = None,
               locale: Optional[str] = None) -> str:
        options = options or FormatOptions()
        digits = options.maximum_fraction_digits
        if digits is None:
            digits = self.resolved_precision(currency)

        value = Decimal(amount).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_EVEN)
        rendered = f"{value:,.{digits}f}" if options.use_grouping else f"{value:.{digits}f}"

        group, point = self.separators(locale)
        if (group, point) != (",", "."):
            # Swap through a placeholder so "," and "." don't collide
            rendered = rendered.replace(",", "\0").replace(".", point).replace("\0", group)

        return f"{currency} {rendered}"
