"""Settings loaded from the environment (and a .env file, if present)."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()  # load environment variables from .env file


class Settings(BaseModel):
    """Per-process configuration for sessions and the HTTP service."""

    chat_url: str = "http://localhost:8000/api/chat"
    chat_timeout: float = 10.0
    log_capacity: int = 200
    max_chain_steps: int = 1000
    run_log_dir: str | None = None  # None keeps run records in memory
    cors_origins: list[str] = ["*"]


def load_settings() -> Settings:
    """Read settings from FLOWBOARD_* environment variables."""
    defaults = Settings()
    return Settings(
        chat_url=os.getenv("FLOWBOARD_CHAT_URL", defaults.chat_url),
        chat_timeout=float(os.getenv("FLOWBOARD_CHAT_TIMEOUT", defaults.chat_timeout)),
        log_capacity=int(os.getenv("FLOWBOARD_LOG_CAPACITY", defaults.log_capacity)),
        max_chain_steps=int(
            os.getenv("FLOWBOARD_MAX_CHAIN_STEPS", defaults.max_chain_steps)
        ),
        run_log_dir=os.getenv("FLOWBOARD_RUN_LOG_DIR") or None,
        # comma-separated values for multiple origins, or "*" for all (development only)
        cors_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    )
