"""
Process configuration for the Product API.

Everything tunable is read from the environment once, at startup. A `.env`
file in the working directory fills in variables the environment lacks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Root configuration container."""

    host: str = "0.0.0.0"
    port: int = 3000
    api_key: Optional[str] = None
    log_level: str = "INFO"
    api_prefix: str = "/api"
    api_key_header: str = "x-api-key"
    default_page: int = 1
    default_limit: int = 10


def load_settings() -> Settings:
    """Load settings, overriding defaults from environment variables."""

    # real environment variables win over .env entries
    load_dotenv(dotenv_path=os.path.join(os.getcwd(), ".env"), override=False)

    return Settings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        api_key=os.getenv("API_KEY") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
