import queue
import threading
import unittest
from typing import List

from itinerary_planner.core.exceptions import CollaboratorError
from itinerary_planner.core.form_state import TripRequest
from itinerary_planner.core.submission import SubmissionController
from itinerary_planner.ui.messages import RequestMessage, RequestType, ResponseMessage, ResponseType
from itinerary_planner.ui.worker import (
    GENERATING_STATUS_MESSAGE,
    INVALID_TASK_PAYLOAD_MESSAGE,
    ItineraryWorker,
)

TOKYO = TripRequest(destination="Tokyo", days=5, trip_type="cultural", interests="temples", budget=500.0)


class StubGenerator:
    def __init__(self, result: str = "", error: Exception = None):
        self.result = result
        self.error = error

    def generate(self, request: TripRequest) -> str:
        if self.error is not None:
            raise self.error
        return self.result


def _run_worker(generator: StubGenerator, requests: List[object]) -> List[ResponseMessage]:
    request_q: "queue.Queue" = queue.Queue()
    response_q: "queue.Queue[ResponseMessage]" = queue.Queue()
    worker = ItineraryWorker(request_q, response_q, SubmissionController(generator))
    for item in requests:
        request_q.put(item)
    request_q.put(RequestMessage.quit())

    thread = threading.Thread(target=worker.run, daemon=True)
    thread.start()
    thread.join(timeout=5)

    responses: List[ResponseMessage] = []
    while not response_q.empty():
        responses.append(response_q.get_nowait())
    return responses


class ItineraryWorkerTests(unittest.TestCase):
    def test_successful_generation_emits_itinerary_then_end(self) -> None:
        responses = _run_worker(StubGenerator("Day 1: ..."), [RequestMessage.generate(TOKYO)])

        types = [response.type for response in responses]
        self.assertEqual(
            types,
            [ResponseType.STATUS, ResponseType.ITINERARY, ResponseType.END_OF_TASK, ResponseType.SHUTDOWN_COMPLETE],
        )
        self.assertEqual(responses[0].content, GENERATING_STATUS_MESSAGE)
        self.assertEqual(responses[1].content, "Day 1: ...")
        self.assertEqual(responses[1].trip_request, TOKYO)

    def test_failed_generation_emits_error(self) -> None:
        generator = StubGenerator(error=CollaboratorError("API error: 500. Details: server error", status_code=500))

        responses = _run_worker(generator, [RequestMessage.generate(TOKYO)])

        errors = [response for response in responses if response.type is ResponseType.ERROR]
        self.assertEqual(len(errors), 1)
        self.assertIn("server error", errors[0].content)
        self.assertNotIn(ResponseType.ITINERARY, [response.type for response in responses])

    def test_generate_without_trip_request_reports_error_and_keeps_running(self) -> None:
        responses = _run_worker(
            StubGenerator("plan"),
            [RequestMessage(RequestType.GENERATE), RequestMessage.generate(TOKYO)],
        )

        types = [response.type for response in responses]
        self.assertEqual(
            types[:2],
            [ResponseType.ERROR, ResponseType.END_OF_TASK],
        )
        self.assertEqual(responses[0].content, INVALID_TASK_PAYLOAD_MESSAGE)
        self.assertIn(ResponseType.ITINERARY, types)
        self.assertIs(responses[-1].type, ResponseType.SHUTDOWN_COMPLETE)

    def test_foreign_queue_item_is_reported_and_skipped(self) -> None:
        responses = _run_worker(StubGenerator("plan"), ["garbage", RequestMessage.generate(TOKYO)])

        self.assertIs(responses[0].type, ResponseType.ERROR)
        self.assertEqual(responses[0].content, "Invalid request received: str")
        itineraries = [response for response in responses if response.type is ResponseType.ITINERARY]
        self.assertEqual([response.content for response in itineraries], ["plan"])
        self.assertIs(responses[-1].type, ResponseType.SHUTDOWN_COMPLETE)

    def test_quit_only_emits_shutdown_complete(self) -> None:
        responses = _run_worker(StubGenerator("plan"), [])

        self.assertEqual([response.type for response in responses], [ResponseType.SHUTDOWN_COMPLETE])



if __name__ == "__main__":
    unittest.main()
