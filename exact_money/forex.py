"""
Forex Rate Module

Exchange-rate lookup used by Money.to(). Rates are Decimal multipliers from one
currency into another; None means the pair is unknown. NEVER uses float.
"""

from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional, Tuple
import json

import httpx

from .logging_config import get_logger

logger = get_logger("exact_money.forex")


def as_rate(value) -> Decimal:
    """Convert a rate to Decimal without passing through binary float digits"""
    if isinstance(value, bool):
        raise TypeError(f"Exchange rate must be numeric, got {value!r}")
    try:
        rate = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid exchange rate: {value!r}") from None
    if not rate.is_finite() or rate <= 0:
        raise ValueError(f"Exchange rate must be positive, got {value!r}")
    return rate


class ForexService(ABC):
    """Interface for asynchronous exchange-rate lookup"""

    @abstractmethod
    async def rate(self, from_currency: str, to_currency: str) -> Optional[Decimal]:
        """Rate converting from_currency into to_currency, None if unknown"""
        pass


class StaticRateProvider(ForexService):
    """In-memory rate table, filled before use"""

    def __init__(self, rates: Optional[Dict[Tuple[str, str], object]] = None):
        self._rates: Dict[Tuple[str, str], Decimal] = {}
        for (from_currency, to_currency), rate in (rates or {}).items():
            self.set_rate(from_currency, to_currency, rate)

    def set_rate(self, from_currency: str, to_currency: str, rate) -> None:
        """Set exchange rate for currency pair"""
        rate = as_rate(rate)
        self._rates[(from_currency, to_currency)] = rate

        # Also set reverse rate unless one was given explicitly
        reverse_key = (to_currency, from_currency)
        if reverse_key not in self._rates:
            self._rates[reverse_key] = Decimal(1) / rate

    async def rate(self, from_currency: str, to_currency: str) -> Optional[Decimal]:
        if from_currency == to_currency:
            return Decimal(1)
        return self._rates.get((from_currency, to_currency))

    def get_all_rates(self) -> Dict[Tuple[str, str], Decimal]:
        """Get all current exchange rates"""
        return self._rates.copy()


class HttpForexClient(ForexService):
    """REST client for a Frankfurter-style rate API

    GET {base_url}/latest?from=USD&to=EUR -> {"rates": {"EUR": 0.92}}
    """

    def __init__(
        self,
        base_url: str = "https://api.frankfurter.app",
        timeout: float = 5.0,
        api_key: Optional[str] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.api_key = api_key

    async def rate(self, from_currency: str, to_currency: str) -> Optional[Decimal]:
        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        # A client per request keeps concurrent conversions independent
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.base_url}/latest",
                params={"from": from_currency, "to": to_currency},
                headers=headers
            )

        if response.status_code == 404:
            logger.warning(f"Rate service has no pair {from_currency}/{to_currency}")
            return None
        if response.status_code != 200:
            logger.warning(f"Rate service returned {response.status_code}: {response.text}")
            response.raise_for_status()

        data = json.loads(response.text, parse_float=Decimal)
        rate = data.get("rates", {}).get(to_currency)
        if rate is None:
            return None
        return as_rate(rate)
