import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

class Settings:
    APP_VERSION: str = "1.0.0"
    CATALOG_VERSION: str = "2025.1-india-central"


    # --- CONFIG ---
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./schemefinder.db")
    SQL_ECHO = os.getenv("SQL_ECHO", "0").lower() in ("1", "true", "yes")

    # --- PAGING (display only, the engine never truncates) ---
    DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "24"))
    MAX_PAGE_SIZE = 500

@lru_cache
def get_settings():
    return Settings()
