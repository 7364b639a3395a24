from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the ledger service."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("FITAURA_DATA_ROOT") or data_root_default
        ).expanduser()
        # Day boundaries for every DayKey are computed in this zone.
        self.timezone: str = (os.environ.get("FITAURA_TIMEZONE") or "UTC").strip() or "UTC"
        self.log_level: str = (os.environ.get("FITAURA_LOG_LEVEL") or "INFO").upper()
        self.host: str = os.environ.get("FITAURA_HOST") or "127.0.0.1"
        try:
            self.port: int = int(os.environ.get("FITAURA_PORT") or "8000")
        except ValueError:
            self.port = 8000

        # ---- AI collaborator (Gemini) ----
        self.gemini_api_key: str | None = os.environ.get("GEMINI_API_KEY") or None
        self.gemini_base_url: str = os.environ.get(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        ).rstrip("/")
        self.gemini_model: str = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
        self.gemini_timeout: float = float(os.environ.get("GEMINI_TIMEOUT", "30"))

        cors = os.environ.get("FITAURA_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
