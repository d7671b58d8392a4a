#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from pathlib import Path
from typing import Tuple

from pydantic_settings import BaseSettings


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # ========== Service ==========
    app_name: str = "Translate Gateway"
    app_version: str = "1.0.0"

    # ========== translate-shell ==========
    trans_binary: str = "/usr/bin/trans"  # path to the translate-shell binary
    engine_timeout: float = 30.0  # seconds per engine invocation

    # ========== Cache ==========
    redis_url: str = "redis://127.0.0.1/"
    cache_timeout: float = 2.0  # seconds per HGET / HSET

    # ========== Server ==========
    host: str = "127.0.0.1"
    port: int = 8000

    # ========== Logging ==========
    log_level: str = "INFO"

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env that aren't defined in model

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def with_address(self, address: str) -> "Settings":
        """Return a copy bound to ``HOST:PORT``."""
        host, port = parse_address(address)
        return self.model_copy(update={"host": host, "port": port})


def parse_address(address: str) -> Tuple[str, int]:
    """Split a ``HOST:PORT`` binding address."""
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"Invalid binding address '{address}', expected HOST:PORT")
    return host, int(port)


# Global settings instance
settings = Settings()
