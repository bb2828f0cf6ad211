# assignmentpro/config/settings.py
# Application settings read from the environment

import logging
import os
import secrets
from decimal import Decimal
from typing import List

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _read_secret_key() -> str:
    secret_key = os.getenv("SECRET_KEY")
    if secret_key:
        return secret_key
    logger.warning(
        "SECRET_KEY is not set; using a random per-process key. "
        "Issued tokens will not survive a restart or work across workers."
    )
    return secrets.token_urlsafe(32)


class Settings:
    """Runtime configuration for the AssignmentPro API"""

    APP_NAME = os.getenv("APP_NAME", "AssignmentPro")

    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./assignmentpro.db")
    DATABASE_SSLMODE = os.getenv("DATABASE_SSLMODE")  # e.g. "require" on Render

    # JWT sessions
    SECRET_KEY = _read_secret_key()
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 30 * 24 * 60))

    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ]

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Ledger
    REGISTRATION_FEE = int(os.getenv("REGISTRATION_FEE", 300))  # Birr
    MAKER_COMMISSION_RATE = Decimal(os.getenv("MAKER_COMMISSION_RATE", "0.8"))

    # Feature switches
    ADMIN_REGISTRATION_ENABLED = _as_bool(os.getenv("ADMIN_REGISTRATION_ENABLED", "true"))
    REPORT_STRICT_TRANSITIONS = _as_bool(os.getenv("REPORT_STRICT_TRANSITIONS", "false"))

    # Bootstrap admin
    DEFAULT_ADMIN_EMAIL = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@assignmentpro.com")
    DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")
    DEFAULT_ADMIN_NAME = os.getenv("DEFAULT_ADMIN_NAME", "System Administrator")


settings = Settings()
