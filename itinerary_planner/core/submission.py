"""Submission lifecycle for itinerary generation requests."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol, Union

from .exceptions import ItineraryPlannerError
from .form_state import TripRequest

_logger = logging.getLogger(__name__)

FAILURE_MESSAGE_PREFIX = "An error occurred while generating the itinerary: "
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while generating the itinerary."


class SubmissionPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    FAILED = "failed"
    SUCCEEDED = "succeeded"


@dataclass(frozen=True)
class Idle:
    phase = SubmissionPhase.IDLE


@dataclass(frozen=True)
class Loading:
    phase = SubmissionPhase.LOADING


@dataclass(frozen=True)
class Failed:
    message: str
    phase = SubmissionPhase.FAILED


@dataclass(frozen=True)
class Succeeded:
    itinerary_text: str
    request: TripRequest
    phase = SubmissionPhase.SUCCEEDED


SubmissionState = Union[Idle, Loading, Failed, Succeeded]
StateListener = Callable[[SubmissionState], None]


class ItineraryGenerator(Protocol):
    def generate(self, request: TripRequest) -> str:
        ...


def describe_failure(error: BaseException) -> str:
    """Build the user facing message for a failed submission."""
    if isinstance(error, ItineraryPlannerError):
        detail = str(error).strip()
        if detail:
            return f"{FAILURE_MESSAGE_PREFIX}{detail}"
    return UNKNOWN_ERROR_MESSAGE


class SubmissionController:
    """Runs one generation call per ``submit`` and tracks its outcome.

    The controller never re-validates the request and never rejects a
    second ``submit`` while one is loading; callers keep the submit control
    disabled while ``is_loading`` is true. There is no cancellation: a
    request always runs to success or failure.
    """

    def __init__(
        self,
        generator: ItineraryGenerator,
        on_success: Optional[Callable[[Succeeded], None]] = None,
    ):
        self.generator = generator
        self.on_success = on_success
        self._state: SubmissionState = Idle()
        self._lock = threading.Lock()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> SubmissionState:
        with self._lock:
            return self._state

    @property
    def is_loading(self) -> bool:
        return isinstance(self.state, Loading)

    @property
    def error(self) -> Optional[str]:
        state = self.state
        return state.message if isinstance(state, Failed) else None

    @property
    def itinerary(self) -> str:
        state = self.state
        return state.itinerary_text if isinstance(state, Succeeded) else ""

    def add_listener(self, listener: StateListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _transition(self, new_state: SubmissionState) -> None:
        with self._lock:
            self._state = new_state
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(new_state)
            except Exception as exc:
                _logger.exception("Submission state listener failed: %s", exc)

    def submit(self, request: TripRequest) -> SubmissionState:
        """Generate an itinerary for ``request`` and return the terminal state."""
        self._transition(Loading())
        _logger.info("Starting itinerary generation for %s (%d days).", request.destination, request.days)
        try:
            itinerary_text = self.generator.generate(request)
        except Exception as exc:
            _logger.error("Itinerary generation failed: %s", exc)
            failed = Failed(describe_failure(exc))
            self._transition(failed)
            return failed

        succeeded = Succeeded(itinerary_text=itinerary_text, request=request)
        self._transition(succeeded)
        _logger.info("Itinerary generated successfully.")
        if self.on_success is not None:
            try:
                self.on_success(succeeded)
            except Exception as exc:
                _logger.exception("Success callback failed: %s", exc)
        return succeeded


__all__ = [
    "FAILURE_MESSAGE_PREFIX",
    "UNKNOWN_ERROR_MESSAGE",
    "SubmissionPhase",
    "Idle",
    "Loading",
    "Failed",
    "Succeeded",
    "SubmissionState",
    "ItineraryGenerator",
    "describe_failure",
    "SubmissionController",
]
