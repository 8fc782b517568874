from itinerary_planner.agent.prompts import (
    TRIP_TYPE_LABELS,
    TripType,
    build_itinerary_prompt,
    format_budget,
    trip_type_label,
)
from itinerary_planner.core.form_state import TRIP_TYPES, TripRequest


def test_prompt_mentions_every_field():
    request = TripRequest(destination="Lisbon", days=3, trip_type="gastronomica", interests="seafood", budget=750.5)

    prompt = build_itinerary_prompt(request)

    assert "Destination: Lisbon" in prompt
    assert "Duration: 3 days" in prompt
    assert "Trip type: Gastronomic" in prompt
    assert "Interests: seafood" in prompt
    assert "Total budget: 750.50 euros" in prompt


def test_empty_optional_fields_are_still_represented():
    request = TripRequest(destination="Oslo", days=2, trip_type="", interests="  ", budget=300.0)

    prompt = build_itinerary_prompt(request)

    assert "Trip type: Any" in prompt
    assert "Interests: No particular preference" in prompt


def test_trip_type_labels_cover_form_options():
    assert [member.value for member in TripType] == TRIP_TYPES
    assert set(TRIP_TYPE_LABELS) == set(TRIP_TYPES)
    assert trip_type_label("unknown") == "unknown"


def test_format_budget():
    assert format_budget(1000.0) == "1000"
    assert format_budget(12.5) == "12.50"
