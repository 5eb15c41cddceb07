from __future__ import annotations

from typing import Any


class AdvisorError(Exception):
    """Base class for every error raised by the program advisor."""


class QuestionnaireValidationError(AdvisorError):
    """The submitted questionnaire does not satisfy the questionnaire contract."""

    def __init__(self, fields: list[dict[str, str]]):
        self.fields = fields
        summary = "; ".join(f"{f['field']}: {f['message']}" for f in fields)
        super().__init__(summary or "Invalid questionnaire")


class RecommendationValidationError(AdvisorError):
    """A decoded provider payload is missing a field or has the wrong type."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class ProviderError(AdvisorError):
    """A provider call failed. ``category`` is ``transport`` or ``decode``."""

    category = "transport"

    def __init__(self, provider: str, message: str, *, cause: Any = None):
        self.provider = provider
        self.cause = cause
        super().__init__(f"{provider}: {message}")


class ProviderTransportError(ProviderError):
    category = "transport"


class ProviderDecodeError(ProviderError):
    category = "decode"


class ProviderNotConfigured(ProviderError):
    """The provider is disabled or has no credentials; skipped silently."""

    category = "unconfigured"


class AssessmentNotFound(AdvisorError):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Assessment not found: {session_id}")
