# src/config/settings.py

"""Central configuration for the storefront client."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the storefront client."""

    # --- API ---
    BASE_URL: str = os.getenv(
        "STOREFRONT_BASE_URL", "https://fakestoreapi.in/api"
    )
    REQUEST_TIMEOUT: int = int(
        os.getenv("STOREFRONT_REQUEST_TIMEOUT", "15")
    )                                   # Seconds before a request times out
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = Path(
        os.getenv("STOREFRONT_LOGS_DIR", str(BASE_DIR / "logs"))
    )

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("STOREFRONT_LOG_LEVEL", "WARNING").upper()
    LOG_RETENTION: int = 20             # Run logs kept in LOGS_DIR

    # --- Categories (an empty id browses the whole catalog) ---
    CATEGORIES: list[dict[str, str]] = [
        {"id": "mobile", "label": "Mobile"},
        {"id": "audio", "label": "Audio"},
        {"id": "gaming", "label": "Gaming"},
        {"id": "tv", "label": "TV"},
        {"id": "", "label": "All Products"},
    ]
