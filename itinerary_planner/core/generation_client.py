"""HTTP client for the chat-completion service that writes itineraries."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

import requests

from itinerary_planner.agent.prompts import build_itinerary_prompt
from itinerary_planner.config import (
    API_KEY_ENV,
    PLANNER_API_BASE_URL,
    PLANNER_MAX_TOKENS,
    PLANNER_MODEL,
    PLANNER_REQUEST_TIMEOUT_SECONDS,
    PLANNER_TEMPERATURE,
    get_api_key,
)

from .exceptions import CollaboratorError, ConfigurationError
from .form_state import TripRequest

_logger = logging.getLogger(__name__)

MISSING_CREDENTIAL_MESSAGE = f"credential not configured: set the {API_KEY_ENV} environment variable."


class ItineraryGenerationClient:
    """Sends a single chat-completion request per itinerary; no retries, no streaming."""

    def __init__(
        self,
        api_base_url: str = PLANNER_API_BASE_URL,
        model: str = PLANNER_MODEL,
        temperature: float = PLANNER_TEMPERATURE,
        max_tokens: int = PLANNER_MAX_TOKENS,
        timeout_seconds: float = PLANNER_REQUEST_TIMEOUT_SECONDS,
        api_key_provider: Callable[[], Optional[str]] = get_api_key,
        session: Optional[requests.Session] = None,
    ):
        self.api_base_url = api_base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds
        self.api_key_provider = api_key_provider
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.api_base_url}/chat/completions"

    def build_payload(self, request: TripRequest) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": build_itinerary_prompt(request)}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    def generate(self, request: TripRequest) -> str:
        api_key = self.api_key_provider()
        if not api_key:
            raise ConfigurationError(MISSING_CREDENTIAL_MESSAGE)

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        _logger.info("Sending itinerary request to %s (model=%s).", self.endpoint, self.model)
        try:
            response = self.session.post(
                self.endpoint,
                json=self.build_payload(request),
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise CollaboratorError(f"Could not reach the itinerary service: {exc}") from exc

        _logger.info("Response received. Status: %s", response.status_code)
        if not response.ok:
            body = response.text
            _logger.error("Error response body: %s", body)
            raise CollaboratorError(
                f"API error: {response.status_code}. Details: {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise CollaboratorError(
                "The itinerary service returned a response that is not valid JSON.",
                status_code=response.status_code,
                body=response.text,
            ) from exc
        return self._extract_content(data)

    @staticmethod
    def _extract_content(data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise CollaboratorError("The itinerary service response contained no completion choices.") from exc
        if not isinstance(content, str):
            raise CollaboratorError("The itinerary service returned a non-text completion.")
        return content.strip()


__all__ = ["MISSING_CREDENTIAL_MESSAGE", "ItineraryGenerationClient"]
