from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the LivDaily backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("LIVDAILY_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("LIVDAILY_DB_PATH") or (self.data_root / "livdaily.db")
        ).expanduser()
        # In production you MUST set LIVDAILY_TOKEN_SECRET. The dev secret keeps local
        # demos easy but is not safe for public deployments.
        self.token_secret: str = os.environ.get("LIVDAILY_TOKEN_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("LIVDAILY_TOKEN_TTL_DAYS") or "365")
        self.log_level: str = (os.environ.get("LIVDAILY_LOG_LEVEL") or "INFO").upper()

        # ---- Structured generation (OpenAI-compatible chat completions) ----
        self.llm_api_key: str | None = os.environ.get("LLM_API_KEY")
        self.llm_base_url: str = os.environ.get("LLM_BASE_URL", "https://api.openai.com/v1")
        self.llm_model: str = os.environ.get("LLM_MODEL", "gpt-4o-mini")
        self.llm_timeout: float = float(os.environ.get("LLM_TIMEOUT", "60"))
        self.llm_max_tokens: int = int(os.environ.get("LLM_MAX_TOKENS", "1200"))
        self.llm_temperature: float = float(os.environ.get("LLM_TEMPERATURE", "0.7"))

        # Default base URL for livdaily.client.LivDailyClient.
        self.backend_url: str = os.environ.get("LIVDAILY_BACKEND_URL", "http://localhost:3000")

        cors = os.environ.get("LIVDAILY_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
