# ⚙️ Application Settings
# Built once at startup from the environment and passed down explicitly

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from realcheck.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_PORT = 3000
DEFAULT_MAX_BODY_MB = 50


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str = field(repr=False)
    gemini_model: str = DEFAULT_MODEL
    ai_timeout: Optional[float] = None
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_origins: Tuple[str, ...] = ("*",)
    max_body_bytes: int = DEFAULT_MAX_BODY_MB * 1024 * 1024
    log_level: str = "INFO"
    slow_request_ms: int = 2500
    prompts_dir: Optional[Path] = None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Read configuration from the environment (and an optional .env file).
    Raises ConfigError when GEMINI_API_KEY is missing so the process
    never starts without a credential.
    """
    load_dotenv(dotenv_path=env_file or Path.cwd() / ".env", override=False)

    api_key = (os.getenv("GEMINI_API_KEY") or "").strip()
    if not api_key:
        raise ConfigError("GEMINI_API_KEY is not set; refusing to start.")

    ai_timeout = None
    raw_timeout = os.getenv("AI_TIMEOUT")
    if raw_timeout and raw_timeout.strip():
        try:
            ai_timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"AI_TIMEOUT must be a number of seconds, got {raw_timeout!r}")
        if ai_timeout <= 0:
            raise ConfigError("AI_TIMEOUT must be positive")

    origins = tuple(
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ) or ("*",)

    prompts_dir = os.getenv("PROMPTS_DIR")

    settings = Settings(
        gemini_api_key=api_key,
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL,
        ai_timeout=ai_timeout,
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int_env("PORT", DEFAULT_PORT),
        cors_origins=origins,
        max_body_bytes=_int_env("MAX_BODY_MB", DEFAULT_MAX_BODY_MB) * 1024 * 1024,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        slow_request_ms=_int_env("SLOW_REQUEST_MS", 2500),
        prompts_dir=Path(prompts_dir) if prompts_dir else None,
    )
    logger.debug(f"Loaded settings: {settings}")
    return settings
