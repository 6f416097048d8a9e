"""Environment configuration.

Secrets come from the process environment, optionally seeded from a .env
file. Missing required variables are reported all at once so a run fails
before any enrichment starts.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from university_enricher.backends import DEFAULT_MODEL

logger = logging.getLogger(__name__)

REQUIRED_ENV_VARS = ["OPENAI_API_KEY", "THROXY_API_KEY"]

DEFAULT_REQUEST_TIMEOUT = 60.0


class ConfigError(Exception):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str, missing: Optional[list[str]] = None):
        super().__init__(message)
        self.missing = missing or []


@dataclass(frozen=True)
class Settings:
    openai_api_key: str
    throxy_api_key: str
    model: str = DEFAULT_MODEL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def load_environment(dotenv_path: Optional[Path] = None) -> bool:
    """Load variables from a .env file without overriding the real environment.

    Returns:
        True if a .env file was found and loaded.
    """
    loaded = load_dotenv(dotenv_path=dotenv_path, override=False)
    if loaded:
        logger.debug(f"Loaded environment from {dotenv_path or '.env'}")
    return loaded


def check_required_env(
    names: Optional[list[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """Raise ConfigError listing every required variable that is unset or empty."""
    names = REQUIRED_ENV_VARS if names is None else names
    environ = os.environ if environ is None else environ

    missing = [name for name in names if not environ.get(name)]
    if missing:
        raise ConfigError(
            f"Missing required environment variables: {', '.join(missing)}",
            missing=missing,
        )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Validate the environment and build Settings from it."""
    environ = os.environ if environ is None else environ
    check_required_env(environ=environ)

    timeout_raw = environ.get("LLM_REQUEST_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_REQUEST_TIMEOUT
    except ValueError:
        raise ConfigError(f"LLM_REQUEST_TIMEOUT must be a number, got '{timeout_raw}'")
    if timeout <= 0:
        raise ConfigError(f"LLM_REQUEST_TIMEOUT must be positive, got {timeout}")

    return Settings(
        openai_api_key=environ["OPENAI_API_KEY"],
        throxy_api_key=environ["THROXY_API_KEY"],
        model=environ.get("OPENAI_MODEL") or DEFAULT_MODEL,
        request_timeout=timeout,
    )
