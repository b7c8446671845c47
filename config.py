from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    database_url: str | None
    log_level: str
    default_country: str


def get_settings() -> Settings:
    database_url = (os.getenv("DATABASE_URL") or "").strip()
    return Settings(
        database_url=database_url or None,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        default_country=os.getenv("DEFAULT_COUNTRY", "").strip(),
    )
