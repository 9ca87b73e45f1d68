"""
Runtime configuration.

Values come from the process environment; a local `.env` file is loaded first
so development setups can keep overrides out of the shell.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

DEFAULT_STORE_PATH = os.path.join("data", "variants.json")
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class Settings:
    store_path: str = DEFAULT_STORE_PATH
    log_level: str = "INFO"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings once per process."""
    return Settings(
        store_path=os.getenv("RESUME_BUILDER_STORE_PATH", DEFAULT_STORE_PATH),
        log_level=os.getenv("RESUME_BUILDER_LOG_LEVEL", "INFO").upper(),
        max_upload_bytes=_int_env("RESUME_BUILDER_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES),
    )
