from decimal import Decimal
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "INFO"

    # Data paths
    data_dir: str = "sample_data"
    inventory_source: Literal["memory", "csv"] = "memory"
    seed_inventory_on_startup: bool = True

    # Discount policy
    discount_threshold: Decimal = Decimal("100")
    discount_rate: Decimal = Decimal("0.10")

    # Delivery loop
    delivery_workers: int = 4
    queue_poll_interval: float = 0.1

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
