# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
import os

from dotenv import load_dotenv

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
load_dotenv()

# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
# Backend API Settings
_API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3000")
_API_TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))
_API_VERIFY_SSL = os.getenv("API_VERIFY_SSL", "true").lower() in ("true", "1", "yes")

# Google Maps Platform (places autocomplete, place details, timezone)
_GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")
_GOOGLE_MAPS_BASE_URL = os.getenv("GOOGLE_MAPS_BASE_URL", "https://maps.googleapis.com/maps/api")

# Credits
_GUEST_PROFILE_CREDIT_COST = int(os.getenv("GUEST_PROFILE_CREDIT_COST", "1"))
_DEFAULT_SUBSCRIPTION_TIER = os.getenv("DEFAULT_SUBSCRIPTION_TIER", "free")

# Upload scratch directory (optional override)
_UPLOAD_TEMP_DIR = os.getenv("UPLOAD_TEMP_DIR", None)

# Console log level (the log file always records DEBUG)
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")



@dataclass
class Config:
    """Application configuration."""

    # HTTP API Backend Settings
    # If .env not found, uses default (http://localhost:3000)
    API_BASE_URL: str = _API_BASE_URL
    API_TIMEOUT: int = _API_TIMEOUT
    API_VERIFY_SSL: bool = _API_VERIFY_SSL

    # Google Maps Platform
    # Empty key means place search is disabled (suggestions stay empty)
    GOOGLE_API_KEY: str = _GOOGLE_API_KEY
    GOOGLE_MAPS_BASE_URL: str = _GOOGLE_MAPS_BASE_URL
    PLACE_TYPES_FILTER: str = "(cities)"

    # Credits
    GUEST_PROFILE_CREDIT_COST: int = _GUEST_PROFILE_CREDIT_COST
    DEFAULT_SUBSCRIPTION_TIER: str = _DEFAULT_SUBSCRIPTION_TIER
    SMALL_SHORTFALL_THRESHOLD: int = 20

    # Paths
    DATA_DIR: Path = Path(__file__).parent.parent / "data"
    LOGS_DIR: Path = Path(__file__).parent.parent / "logs"
    UPLOAD_TEMP_DIR: Path = Path(_UPLOAD_TEMP_DIR) if _UPLOAD_TEMP_DIR else DATA_DIR / "uploads"

    # Logging
    LOG_FILE: str = "app.log"
    LOG_PATH: Path = LOGS_DIR / LOG_FILE
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3
    LOG_LEVEL: str = _LOG_LEVEL

    # Profile photo constraints
    MAX_PHOTO_BYTES: int = 5 * 1024 * 1024  # 5MB
    ACCEPTED_PHOTO_TYPES: tuple = ("image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp")

    # Birth data
    MIN_BIRTH_YEAR: int = 1900
    UNKNOWN_TIME_SENTINEL: str = "12:00"

    @classmethod
    def ensure_directories(cls):
        """Create the data, logs and upload directories if missing."""
        for directory in (cls.DATA_DIR, cls.LOGS_DIR, cls.UPLOAD_TEMP_DIR):
            Path(directory).mkdir(parents=True, exist_ok=True)


# Screen identifiers the wizard can direct the shell to
class Screens:
    MAIN = "main"
    PAYWALL = "paywall"
    CREDIT_PURCHASE = "credit_purchase"
    SUBSCRIPTION = "subscription"


# Controlled vocabularies
class Vocabularies:
    # Value (API code), Name (English)
    GENDERS = [
        ("male", "Male"),
        ("female", "Female"),
        ("nonbinary", "Non-binary"),
    ]

    @classmethod
    def get_gender_display(cls, code: str) -> str:
        for value, name in cls.GENDERS:
            if value == code:
                return name
        return code or ""
