"""Background worker that runs itinerary submissions off the UI thread."""

from __future__ import annotations

import logging
import queue
from typing import Any

from itinerary_planner.core.form_state import TripRequest
from itinerary_planner.core.submission import Failed, SubmissionController, Succeeded

from .messages import RequestMessage, RequestType, ResponseMessage, ResponseType

_logger = logging.getLogger(__name__)

INVALID_TASK_PAYLOAD_MESSAGE = "The itinerary request is malformed."
GENERATING_STATUS_MESSAGE = "Generating itinerary..."


class ItineraryWorker:
    def __init__(
        self,
        request_q: queue.Queue,
        response_q: queue.Queue,
        controller: SubmissionController,
    ):
        self.request_queue = request_q
        self.response_queue = response_q
        self.controller = controller

    def run(self):
        _logger.info("Itinerary worker thread started.")
        try:
            self._main_loop()
        except Exception as e:
            _logger.exception("Critical error in worker run method: %s", e)
            self._emit_response(ResponseMessage.error(f"Fatal worker error: {e}"))
        finally:
            self._emit_response(ResponseMessage(ResponseType.SHUTDOWN_COMPLETE))
            _logger.info("Itinerary worker thread stopped.")

    def _emit_response(self, message: ResponseMessage):
        try:
            self.response_queue.put(message)
        except Exception as err:
            _logger.exception("Failed to enqueue response: %s", err)

    def _main_loop(self):
        while True:
            request = self.request_queue.get()
            if not isinstance(request, RequestMessage):
                _logger.error("Ignoring unsupported request object: %r", request)
                self._emit_response(ResponseMessage.error(f"Invalid request received: {type(request).__name__}"))
                continue

            if request.type is RequestType.QUIT:
                _logger.info("Quit request received; shutting down worker loop.")
                break
            if request.type is RequestType.GENERATE:
                self._execute_task(request.trip_request)

    def _execute_task(self, trip_request: Any):
        if not isinstance(trip_request, TripRequest):
            self._emit_response(ResponseMessage.error(INVALID_TASK_PAYLOAD_MESSAGE))
            self._emit_response(ResponseMessage(ResponseType.END_OF_TASK))
            return

        self._emit_response(ResponseMessage.status(GENERATING_STATUS_MESSAGE))
        try:
            outcome = self.controller.submit(trip_request)
            if isinstance(outcome, (Succeeded, Failed)):
                self._emit_response(ResponseMessage.from_outcome(outcome))
        finally:
            self._emit_response(ResponseMessage(ResponseType.END_OF_TASK))


__all__ = [
    "INVALID_TASK_PAYLOAD_MESSAGE",
    "GENERATING_STATUS_MESSAGE",
    "ItineraryWorker",
]
