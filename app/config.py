# app/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./autoparts.db"

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    BACKEND_PORT: int = 8080

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints

    # ── Spreadsheet import defaults ───────────────────────────────────────
    IMPORT_START_ROW: int = 2       # 1-based, row 1 is usually the header
    IMPORT_CODE_COLUMN: Optional[int] = 0
    IMPORT_BRAND_COLUMN: Optional[int] = 1
    IMPORT_NAME_COLUMN: Optional[int] = 2
    IMPORT_BUY_PRICE_COLUMN: Optional[int] = 3
    IMPORT_SELL_PRICE_COLUMN: Optional[int] = 4

    # ── Reporting ─────────────────────────────────────────────────────────
    TOP_CUSTOMERS_LIMIT: int = 5

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None       # Defaults to <repo>/logs
    LOG_FILE: str = "autoparts.log"     # Empty string disables the file handler

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
