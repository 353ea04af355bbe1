"""
Collaborator Environment

The localization and forex services Money relies on, installed once per
process before the first monetary operation. Reads after that point see a
frozen bundle, so behaviour cannot change underneath running code.
"""

from dataclasses import dataclass, field, replace
from typing import Optional
import threading

from .config import get_config
from .errors import ConfigurationError
from .forex import ForexService, HttpForexClient
from .l10n import DefaultLocalization, FormatOptions, LocalizationService


@dataclass(frozen=True)
class MoneyEnvironment:
    """Collaborators and defaults shared by every Money instance"""
    localization: LocalizationService = field(default_factory=DefaultLocalization)
    forex: Optional[ForexService] = None
    default_locale: Optional[str] = None
    default_format_options: Optional[FormatOptions] = None
    division_precision: int = 34


_lock = threading.Lock()
_environment: Optional[MoneyEnvironment] = None
_locked = False


def _from_config() -> MoneyEnvironment:
    settings = get_config()
    return MoneyEnvironment(
        forex=HttpForexClient(
            base_url=settings.forex_base_url,
            timeout=settings.forex_timeout,
            api_key=settings.forex_api_key or None,
        ),
        default_locale=settings.default_locale,
        division_precision=settings.division_precision,
    )


def configure(**hooks) -> MoneyEnvironment:
    """
    Install collaborators before first use

    Accepts the MoneyEnvironment fields as keyword arguments; anything not given
    keeps its configured default.

    Raises:
        ConfigurationError: If Money has already read the environment
        TypeError: On unknown hook names
    """
    global _environment
    with _lock:
        if _locked:
            raise ConfigurationError(
                "Money collaborators are already in use and cannot be reconfigured"
            )
        base = _environment or _from_config()
        _environment = replace(base, **hooks)
        return _environment


def get_environment() -> MoneyEnvironment:
    """Current environment; freezes configuration on first call"""
    global _environment, _locked
    with _lock:
        if _environment is None:
            _environment = _from_config()
        _locked = True
        return _environment


def reset_environment() -> None:
    """Drop the installed environment (for tests)"""
    global _environment, _locked
    with _lock:
        _environment = None
        _locked = False
