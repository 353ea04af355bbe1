"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class MoneyConfig(BaseSettings):
    """exact-money configuration"""

    # Forex rate service
    forex_base_url: str = "https://api.frankfurter.app"
    forex_timeout: float = 5.0
    forex_api_key: str = ""

    # Localization
    default_locale: Optional[str] = None  # None = "en" style separators

    # Significant digits used when dividing by ratio totals during allocation
    division_precision: int = 34

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    class Config:
        env_prefix = "EXACT_MONEY_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = MoneyConfig()


def get_config() -> MoneyConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> MoneyConfig:
    """Reload configuration from environment"""
    global config
    config = MoneyConfig()
    return config
