"""
Restaurant API - Request Validation Rule Set
=============================================

What:  The fixed list of per-field predicates applied to write requests,
       plus the path-id format check.
Why:   Rejects bad input before any store connection is opened.
How:   Every rule is evaluated; all violations are collected and raised
       together in one ValidationError.

Rules:
    name    non-empty string
    image   non-empty string (URL)
    menu    list
    rating  number in [0, 5]

    Create: every rule applies; a missing field fails its rule.
    Update: a rule applies only when its field is present (null counts as
            present and fails).
"""

import math
from typing import Any, Callable, Dict, List, Optional, Tuple

from bson import ObjectId

from restaurant_api.exceptions import ValidationError

RATING_MIN = 0.0
RATING_MAX = 5.0

_MISSING = object()


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_sequence(value: Any) -> bool:
    return isinstance(value, list)


def _is_rating(value: Any) -> bool:
    # bool is an int subclass; true/false are not ratings
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return RATING_MIN <= value <= RATING_MAX


# (field, predicate, message on create, message on update)
_RULES: List[Tuple[str, Callable[[Any], bool], str, str]] = [
    ("name", _is_non_empty_string, "Name is required", "Name cannot be empty"),
    ("image", _is_non_empty_string, "Image URL is required", "Image URL cannot be empty"),
    ("menu", _is_sequence, "Menu must be an array", "Menu must be an array"),
    ("rating", _is_rating, "Rating must be between 0 and 5", "Rating must be between 0 and 5"),
]


def _violation(path: str, msg: str, value: Any = _MISSING, location: str = "body") -> Dict[str, Any]:
    entry: Dict[str, Any] = {"type": "field"}
    # NaN/Infinity parse from request bodies but cannot be rendered as strict JSON
    if isinstance(value, float) and not math.isfinite(value):
        value = str(value)
    if value is not _MISSING:
        entry["value"] = value
    entry.update({"msg": msg, "path": path, "location": location})
    return entry


def _check(payload: Dict[str, Any], partial: bool) -> Dict[str, Any]:
    errors: List[Dict[str, Any]] = []
    fields: Dict[str, Any] = {}

    for field, predicate, create_msg, update_msg in _RULES:
        value = payload.get(field, _MISSING)
        if value is _MISSING and partial:
            continue
        if value is _MISSING or not predicate(value):
            errors.append(_violation(field, update_msg if partial else create_msg, value))
            continue
        fields[field] = value

    if errors:
        raise ValidationError(errors=errors)
    return fields


def validate_new_restaurant(payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Apply the full rule set to a create body.

    Returns:
        Dict with exactly the four restaurant fields; unknown keys are dropped.

    Raises:
        ValidationError: One entry per failing field.
    """
    return _check(payload or {}, partial=False)


def validate_restaurant_update(payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Apply the rule set to the fields present in an update body.

    Returns:
        Dict with only the supplied restaurant fields (possibly empty).
    """
    return _check(payload or {}, partial=True)


def parse_restaurant_id(raw_id: str) -> ObjectId:
    """Convert a path id into an ObjectId, or raise a 400-class ValidationError."""
    if not ObjectId.is_valid(raw_id):
        raise ValidationError(
            errors=[_violation("id", "Invalid restaurant ID", raw_id, location="params")],
            message="Invalid restaurant ID",
        )
    return ObjectId(raw_id)


def violations_from_request_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Reshape FastAPI/Pydantic request errors into rule-set violation entries.

    Used for bodies that are not JSON objects at all, which FastAPI rejects
    before our handlers run.
    """
    violations = []
    for err in errors:
        loc = list(err.get("loc", ()))
        location = str(loc[0]) if loc else "body"
        path = ".".join(str(p) for p in loc[1:]) or location
        if location == "path":
            location = "params"
        msg = err.get("msg", "Invalid value")
        violations.append(_violation(path, msg, err.get("input", _MISSING), location))
    return violations
