# itinerary_planner/config.py

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "mixtral-8x7b-32768"
API_KEY_ENV = "GROQ_API_KEY"


def _to_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if not normalized:
        return default
    if normalized in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


class AppSettings:
    """Application wide settings resolved from the environment."""

    def __init__(self):
        # --- Itinerary generation service ---
        self.API_BASE_URL: str = (os.getenv("PLANNER_API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/")
        self.MODEL: str = (os.getenv("PLANNER_MODEL") or DEFAULT_MODEL).strip()
        self.TEMPERATURE: float = self._get_float("PLANNER_TEMPERATURE", 0.7, minimum=0.0, maximum=2.0)
        self.MAX_TOKENS: int = self._get_int("PLANNER_MAX_TOKENS", 1000, minimum=1)
        self.REQUEST_TIMEOUT_SECONDS: int = self._get_int("PLANNER_REQUEST_TIMEOUT_SECONDS", 60, minimum=1)

        # --- UI ---
        # Lifetime of a toast notification in milliseconds
        self.TOAST_DURATION_MS: int = self._get_int("PLANNER_TOAST_DURATION_MS", 3000, minimum=1)
        self.HEADLESS: bool = _to_bool(os.getenv("PLANNER_HEADLESS"), False)

    def _get_int(self, env_key: str, default: int, minimum: int | None = None, maximum: int | None = None) -> int:
        raw_value = os.getenv(env_key)
        if raw_value is None:
            return default
        try:
            parsed = int(raw_value)
        except (TypeError, ValueError):
            return default
        if minimum is not None and parsed < minimum:
            return minimum
        if maximum is not None and parsed > maximum:
            return maximum
        return parsed

    def _get_float(
        self, env_key: str, default: float, minimum: float | None = None, maximum: float | None = None
    ) -> float:
        raw_value = os.getenv(env_key)
        if raw_value is None:
            return default
        try:
            parsed = float(raw_value)
        except (TypeError, ValueError):
            return default
        if parsed != parsed:
            return default
        if minimum is not None and parsed < minimum:
            return minimum
        if maximum is not None and parsed > maximum:
            return maximum
        return parsed


def get_api_key() -> Optional[str]:
    """Read the credential at call time so it can be fixed without a restart."""
    value = os.getenv(API_KEY_ENV)
    if value is None:
        return None
    value = value.strip()
    return value or None


# Settings instance shared by the whole application
settings = AppSettings()

PLANNER_API_BASE_URL = settings.API_BASE_URL
PLANNER_MODEL = settings.MODEL
PLANNER_TEMPERATURE = settings.TEMPERATURE
PLANNER_MAX_TOKENS = settings.MAX_TOKENS
PLANNER_REQUEST_TIMEOUT_SECONDS = settings.REQUEST_TIMEOUT_SECONDS
PLANNER_TOAST_DURATION_MS = settings.TOAST_DURATION_MS
PLANNER_HEADLESS = settings.HEADLESS
