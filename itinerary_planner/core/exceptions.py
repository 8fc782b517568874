# itinerary_planner/core/exceptions.py

from typing import Dict, Optional


class ItineraryPlannerError(Exception):
    """Base class for every application specific error."""
    pass


class ConfigurationError(ItineraryPlannerError):
    """Raised when a required setting (such as the API credential) is missing."""
    pass


class CollaboratorError(ItineraryPlannerError):
    """Raised when the itinerary generation service fails or is unreachable."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class FormValidationError(ItineraryPlannerError):
    """Raised when a request is built from a form that still has field errors."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = {name: message for name, message in errors.items() if message}
        super().__init__("\n".join(self.errors.values()))
