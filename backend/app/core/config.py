"""
Configuration settings for the Personal Ledger Service.

This module handles application configuration using Pydantic settings.
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Catatan Keuangan"
    version: str = "1.0.0"
    debug: bool = False

    # Database Configuration
    database_url: str = "sqlite+aiosqlite:///./pengeluaran.db"
    db_echo: bool = False

    # HTTP Server
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS
    cors_allow_origins: List[str] = ["*"]
    cors_allow_methods: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]

    # Landing page served at "/"
    landing_page: Path = Path(__file__).resolve().parent.parent / "static" / "index.html"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
