# itinerary_planner/agent/prompts.py

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from itinerary_planner.core.form_state import TripRequest


class TripType(str, Enum):
    """Trip styles offered by the form."""

    LAZER = "lazer"
    AVENTURA = "aventura"
    CULTURAL = "cultural"
    GASTRONOMICA = "gastronomica"


TRIP_TYPE_LABELS: Dict[str, str] = {
    TripType.LAZER.value: "Leisure",
    TripType.AVENTURA.value: "Adventure",
    TripType.CULTURAL.value: "Cultural",
    TripType.GASTRONOMICA.value: "Gastronomic",
}


@dataclass(frozen=True)
class PromptBundle:
    user_template: str
    currency: str = "euros"


_ITINERARY_PROMPT = """
Generate a detailed itinerary for a trip with the following characteristics:
Destination: {destination}
Duration: {days} days
Trip type: {trip_type}
Interests: {interests}
Total budget: {budget} {currency}

Please provide a day-by-day itinerary, including suggested activities, places to visit and restaurant recommendations that fit the specified budget and interests.
""".strip()


DEFAULT_PROMPT_BUNDLE = PromptBundle(user_template=_ITINERARY_PROMPT)


def format_budget(budget: float) -> str:
    if float(budget).is_integer():
        return str(int(budget))
    return f"{budget:.2f}"


def trip_type_label(trip_type: str) -> str:
    if not trip_type:
        return "Any"
    return TRIP_TYPE_LABELS.get(trip_type, trip_type)


def build_itinerary_prompt(request: TripRequest, bundle: PromptBundle = DEFAULT_PROMPT_BUNDLE) -> str:
    """Render every field of ``request`` into the user prompt."""
    return bundle.user_template.format(
        destination=request.destination,
        days=request.days,
        trip_type=trip_type_label(request.trip_type),
        interests=request.interests.strip() or "No particular preference",
        budget=format_budget(request.budget),
        currency=bundle.currency,
    )


__all__ = [
    "TripType",
    "TRIP_TYPE_LABELS",
    "PromptBundle",
    "DEFAULT_PROMPT_BUNDLE",
    "format_budget",
    "trip_type_label",
    "build_itinerary_prompt",
]
