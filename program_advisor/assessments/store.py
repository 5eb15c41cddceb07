from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Protocol

from ..errors import AssessmentNotFound
from ..recommendations.models import Assessment, Questionnaire, Recommendation


class AssessmentStore(Protocol):
    def create_assessment(self, session_id: str, form_data: Questionnaire) -> Assessment: ...

    def get_assessment(self, session_id: str) -> Assessment | None: ...

    def update_assessment_recommendation(
        self, session_id: str, recommendation: Recommendation,
    ) -> Assessment | None: ...


class InMemoryAssessmentStore:
    """Assessments keyed by session id, kept for the life of the process."""

    def __init__(self) -> None:
        self._assessments: dict[str, Assessment] = {}
        self._lock = threading.Lock()

    def create_assessment(self, session_id: str, form_data: Questionnaire) -> Assessment:
        assessment = Assessment(
            id=str(uuid.uuid4()),
            session_id=session_id,
            form_data=form_data,
            recommendation=None,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._assessments[session_id] = assessment
        return assessment

    def get_assessment(self, session_id: str) -> Assessment | None:
        with self._lock:
            return self._assessments.get(session_id)

    def update_assessment_recommendation(
        self, session_id: str, recommendation: Recommendation,
    ) -> Assessment | None:
        with self._lock:
            assessment = self._assessments.get(session_id)
            if assessment is None:
                return None
            updated = assessment.model_copy(update={"recommendation": recommendation})
            self._assessments[session_id] = updated
            return updated

    def __len__(self) -> int:
        return len(self._assessments)


def require_assessment(store: AssessmentStore, session_id: str) -> Assessment:
    assessment = store.get_assessment(session_id)
    if assessment is None:
        raise AssessmentNotFound(session_id)
    return assessment
