# =============================================================================
# core/config.py  —  Process Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the environment ONCE and freezes the result into a Settings value.
#   The API client receives Settings at construction; nothing else in core/
#   reads os.environ.
#
# ENVIRONMENT VARIABLES:
#   CONTEXTREPO_API_KEY          (required)  credential sent as "API-Key <key>"
#   CONTEXTREPO_API_URL          (optional)  backend base URL
#   CONTEXTREPO_TIMEOUT_SECONDS  (optional)  per-request timeout; unset = none
#   CONTEXTREPO_LOG_LEVEL        (optional)  stdlib logging level name
#
#   main.py loads a .env file (python-dotenv) before calling load_settings(),
#   so any of these can live there instead of the shell environment.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigurationError

DEFAULT_API_BASE_URL = "https://adjoining-hare-150.convex.site"
API_KEY_PREFIX = "gm_"

SERVER_NAME = "context-repo"
SERVER_VERSION = "1.0.0"


@dataclass(frozen=True)
class Settings:
    """Immutable configuration shared by every invocation."""

    api_key: str
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: Optional[float] = None
    log_level: str = "INFO"

    @property
    def key_looks_valid(self) -> bool:
        # Context Repo keys are issued with a "gm_" prefix.
        return self.api_key.startswith(API_KEY_PREFIX)

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"API-Key {self.api_key}",
            "Content-Type": "application/json",
        }

    def __repr__(self) -> str:
        return (
            f"Settings(api_base_url={self.api_base_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r}, log_level={self.log_level!r})"
        )


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(
            f"CONTEXTREPO_TIMEOUT_SECONDS must be a number, got {raw!r}"
        ) from None
    if value <= 0:
        raise ConfigurationError("CONTEXTREPO_TIMEOUT_SECONDS must be greater than zero")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read from.  Defaults to os.environ; tests pass
                 a plain dict so they never touch the real process env.

    Raises:
        ConfigurationError: if CONTEXTREPO_API_KEY is missing or blank, or
            if an optional value is malformed.
    """
    env = os.environ if environ is None else environ

    api_key = (env.get("CONTEXTREPO_API_KEY") or "").strip()
    if not api_key:
        raise ConfigurationError("CONTEXTREPO_API_KEY environment variable is required")

    base_url = (env.get("CONTEXTREPO_API_URL") or "").strip() or DEFAULT_API_BASE_URL

    return Settings(
        api_key=api_key,
        api_base_url=base_url.rstrip("/"),
        timeout_seconds=_parse_timeout(env.get("CONTEXTREPO_TIMEOUT_SECONDS")),
        log_level=(env.get("CONTEXTREPO_LOG_LEVEL") or "INFO").strip().upper(),
    )
