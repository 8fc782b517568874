"""Messaging primitives shared by the desktop UI and worker thread."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from itinerary_planner.core.form_state import TripRequest
from itinerary_planner.core.submission import Failed, Succeeded


class RequestType(str, Enum):
    """Types of requests the UI can post to the worker thread."""

    GENERATE = "GENERATE"
    QUIT = "QUIT"


class ResponseType(str, Enum):
    """Categories of responses emitted by the worker thread."""

    STATUS = "status"
    ERROR = "error"
    ITINERARY = "itinerary"
    END_OF_TASK = "end_of_task"
    SHUTDOWN_COMPLETE = "shutdown_complete"


@dataclass(frozen=True)
class RequestMessage:
    """Request envelope that flows from UI to worker."""

    type: RequestType
    trip_request: Optional[TripRequest] = None

    @classmethod
    def generate(cls, trip_request: TripRequest) -> "RequestMessage":
        return cls(RequestType.GENERATE, trip_request)

    @classmethod
    def quit(cls) -> "RequestMessage":
        return cls(RequestType.QUIT)


@dataclass(frozen=True)
class ResponseMessage:
    """Response envelope that flows from worker to UI.

    ``trip_request`` is only set on ``ITINERARY`` responses, so the result
    view can show the details of the trip that produced the text.
    """

    type: ResponseType
    content: str = ""
    trip_request: Optional[TripRequest] = None

    @classmethod
    def status(cls, text: str) -> "ResponseMessage":
        return cls(ResponseType.STATUS, text)

    @classmethod
    def error(cls, message: str) -> "ResponseMessage":
        return cls(ResponseType.ERROR, message)

    @classmethod
    def from_outcome(cls, outcome: "Succeeded | Failed") -> "ResponseMessage":
        """Translate a terminal submission state into the message the view renders."""
        if isinstance(outcome, Succeeded):
            return cls(ResponseType.ITINERARY, outcome.itinerary_text, outcome.request)
        return cls(ResponseType.ERROR, outcome.message)


__all__ = [
    "RequestType",
    "ResponseType",
    "RequestMessage",
    "ResponseMessage",
]
