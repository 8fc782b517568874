"""Field-validated form state for the trip planner form."""

from __future__ import annotations

import logging
import math
import re
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .exceptions import FormValidationError

_logger = logging.getLogger(__name__)

FIELD_NAMES: List[str] = ["destination", "days", "tripType", "interests", "budget"]
TRIP_TYPES: List[str] = ["lazer", "aventura", "cultural", "gastronomica"]

MIN_DAYS = 1
MAX_DAYS = 30
DEFAULT_DAYS = 7

DESTINATION_EMPTY_MESSAGE = "destination must not be empty"
BUDGET_INVALID_MESSAGE = "budget must be a number greater than zero"
DAYS_INVALID_MESSAGE = f"days must be a number between {MIN_DAYS} and {MAX_DAYS}"

# Plain ASCII decimal notation: no digit separators, no non-ASCII digits.
_BUDGET_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

FieldValue = Union[str, int, float]


class FieldStatus(str, Enum):
    """Validation status of a single field."""

    UNTOUCHED = "untouched"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class TripRequest:
    """Immutable snapshot of a fully valid form, sent to the generator."""

    destination: str
    days: int
    trip_type: str
    interests: str
    budget: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "destination": self.destination,
            "days": self.days,
            "tripType": self.trip_type,
            "interests": self.interests,
            "budget": self.budget,
        }


def parse_budget(value: Any) -> Optional[float]:
    """Return the budget as a positive finite float, or None when it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        parsed = float(value)
    else:
        text = str(value if value is not None else "").strip()
        if not _BUDGET_PATTERN.fullmatch(text):
            return None
        parsed = float(text)
    if math.isnan(parsed) or math.isinf(parsed) or parsed <= 0:
        return None
    return parsed


def coerce_days(value: Any) -> int:
    # Slider controls report floats, and some report a one-element list.
    if isinstance(value, (list, tuple)):
        if not value:
            raise ValueError("days must not be empty")
        value = value[0]
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"days must be a number, got {value!r}") from exc
    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"days must be finite, got {value!r}")
    return max(MIN_DAYS, min(MAX_DAYS, int(round(number))))


def validate(name: str, value: Any) -> str:
    """Return the error message for ``value`` or an empty string when it is valid.

    Only ``destination`` and ``budget`` carry rules; every other field is
    accepted as-is.
    """
    if name == "destination":
        text = value if isinstance(value, str) else ("" if value is None else str(value))
        if not text.strip():
            return DESTINATION_EMPTY_MESSAGE
        return ""
    if name == "budget":
        if parse_budget(value) is None:
            return BUDGET_INVALID_MESSAGE
        return ""
    return ""


class FormStateController:
    """Owns the trip form values and the per-field error map.

    ``set_field`` is the only write path. Every mutation re-validates the
    touched field synchronously, so ``is_submittable`` always reflects the
    latest edit. Fields that were never edited have no error entry; use
    ``validate_all`` (or ``build_request``) before submitting.
    """

    def __init__(self, initial_values: Optional[Dict[str, FieldValue]] = None):
        self._lock = threading.RLock()
        self._values: Dict[str, FieldValue] = {
            "destination": "",
            "days": DEFAULT_DAYS,
            "tripType": "",
            "interests": "",
            "budget": "",
        }
        self._errors: Dict[str, str] = {}
        self._coercion_errors: Dict[str, str] = {}
        self._status: Dict[str, FieldStatus] = {name: FieldStatus.UNTOUCHED for name in FIELD_NAMES}
        for name, value in (initial_values or {}).items():
            self._check_name(name)
            self._values[name] = self._normalize(name, value)

    @staticmethod
    def _check_name(name: str) -> None:
        if name not in FIELD_NAMES:
            raise KeyError(f"Unknown form field: {name}")

    @staticmethod
    def _normalize(name: str, value: Any) -> FieldValue:
        if name == "days":
            return coerce_days(value)
        if value is None:
            return ""
        return value

    def _record(self, name: str, error: str) -> None:
        self._errors[name] = error
        self._status[name] = FieldStatus.INVALID if error else FieldStatus.VALID

    def set_field(self, name: str, value: Any) -> str:
        """Store ``value`` for ``name`` and return its fresh validation message.

        A ``days`` value that cannot be read as a number keeps the previous
        value and records ``DAYS_INVALID_MESSAGE`` instead of raising.
        """
        self._check_name(name)
        with self._lock:
            try:
                normalized = self._normalize(name, value)
            except ValueError as exc:
                _logger.debug("Rejected value for '%s': %s", name, exc)
                self._coercion_errors[name] = DAYS_INVALID_MESSAGE
                error = DAYS_INVALID_MESSAGE
            else:
                self._coercion_errors.pop(name, None)
                self._values[name] = normalized
                error = validate(name, normalized)
            self._record(name, error)
        if error:
            _logger.debug("Field '%s' is invalid: %s", name, error)
        return error

    def validate_all(self) -> Dict[str, str]:
        with self._lock:
            for name in FIELD_NAMES:
                error = validate(name, self._values[name]) or self._coercion_errors.get(name, "")
                self._record(name, error)
            return dict(self._errors)

    def is_submittable(self) -> bool:
        with self._lock:
            return all(not message for message in self._errors.values())

    def build_request(self) -> TripRequest:
        """Re-validate every field and snapshot the form into a ``TripRequest``."""
        errors = self.validate_all()
        with self._lock:
            values = dict(self._values)
        budget = parse_budget(values["budget"])
        if budget is None:
            errors["budget"] = errors.get("budget") or BUDGET_INVALID_MESSAGE
        if any(errors.values()):
            raise FormValidationError(errors)
        return TripRequest(
            destination=str(values["destination"]).strip(),
            days=int(values["days"]),
            trip_type=str(values["tripType"]),
            interests=str(values["interests"]),
            budget=budget,
        )

    def field_status(self, name: str) -> FieldStatus:
        self._check_name(name)
        with self._lock:
            return self._status[name]

    def error_for(self, name: str) -> str:
        self._check_name(name)
        with self._lock:
            return self._errors.get(name, "")

    def value(self, name: str) -> FieldValue:
        self._check_name(name)
        with self._lock:
            return self._values[name]

    def values(self) -> Dict[str, FieldValue]:
        with self._lock:
            return {name: self._values[name] for name in FIELD_NAMES}

    def errors(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._errors)


__all__ = [
    "FIELD_NAMES",
    "TRIP_TYPES",
    "MIN_DAYS",
    "MAX_DAYS",
    "DEFAULT_DAYS",
    "DESTINATION_EMPTY_MESSAGE",
    "BUDGET_INVALID_MESSAGE",
    "DAYS_INVALID_MESSAGE",
    "FieldStatus",
    "TripRequest",
    "parse_budget",
    "coerce_days",
    "validate",
    "FormStateController",
]
