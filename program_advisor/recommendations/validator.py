"""
Gatekeeping for data crossing the service boundary.

- ``validate_recommendation`` accepts a decoded provider payload only when
  every mandatory field is present and correctly typed.
- ``parse_questionnaire`` turns an inbound form payload into a
  ``Questionnaire`` or raises with field-level messages.
"""
from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from ..errors import QuestionnaireValidationError, RecommendationValidationError
from .models import Questionnaire, Recommendation


def _loc_to_path(loc: tuple[str | int, ...]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def validate_recommendation(candidate: Any) -> Recommendation:
    """
    Return ``candidate`` typed as a Recommendation.

    Raises RecommendationValidationError naming the first missing or
    mistyped field. Nothing is coerced or defaulted.
    """
    try:
        return Recommendation.model_validate(candidate)
    except ValidationError as exc:
        first = exc.errors()[0]
        raise RecommendationValidationError(_loc_to_path(first["loc"]), first["msg"]) from exc


def parse_questionnaire(form_data: Any) -> Questionnaire:
    try:
        return Questionnaire.model_validate(form_data)
    except ValidationError as exc:
        fields = [
            {"field": _loc_to_path(err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise QuestionnaireValidationError(fields) from exc
