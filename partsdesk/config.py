# partsdesk/config.py
"""
Desk configuration settings.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """
    Very simple settings holder.
    Reads storage / auth settings from the environment if present,
    otherwise defaults to a local sqlite file.
    """

    database_url: str = "sqlite:///./partsdesk.db"
    storage_backend: str = "sql"  # sql | file | memory
    data_dir: str = "./data"

    # Persistence slot names
    catalog_key: str = "partsdesk_master"
    ledger_key: str = "partsdesk_orders"

    # Auth
    shared_password: str = "trend2024"

    # Lookup
    lookup_min_chars: int = 3

    # Report thresholds
    high_demand_amd3: float = 10.0
    critical_on_hand: float = 2.0
    critical_preview: int = 10
    low_stock_on_hand: float = 5.0
    high_stock_on_hand: float = 50.0
    high_value_top_n: int = 20
    catalog_preview: int = 100

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            storage_backend=os.getenv("PARTSDESK_STORAGE", cls.storage_backend).lower(),
            data_dir=os.getenv("PARTSDESK_DATA_DIR", cls.data_dir),
            catalog_key=os.getenv("PARTSDESK_CATALOG_KEY", cls.catalog_key),
            ledger_key=os.getenv("PARTSDESK_LEDGER_KEY", cls.ledger_key),
            shared_password=os.getenv("PARTSDESK_PASSWORD", cls.shared_password),
            lookup_min_chars=int(os.getenv("PARTSDESK_LOOKUP_MIN_CHARS", cls.lookup_min_chars)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )


# Global settings instance
_settings: Settings = None


def get_settings() -> Settings:
    """Get or create global settings."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
