from __future__ import annotations

import logging
import time
import uuid

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .analytics.aggregator import compute_analytics
from .analytics.store import EventLog
from .assessments.store import AssessmentStore, InMemoryAssessmentStore, require_assessment
from .errors import AssessmentNotFound, QuestionnaireValidationError
from .llm.prompts import CAREER_GOAL_LABELS, EDUCATION_LEVEL_LABELS, LEARNING_PREFERENCE_LABELS
from .llm.registry import build_adapters
from .recommendations.models import (
    Assessment,
    AssessmentRequest,
    AssessmentResponse,
    ExperienceBucket,
)
from .recommendations.orchestrator import RecommendationOrchestrator
from .recommendations.validator import parse_questionnaire

logger = logging.getLogger(__name__)

app = FastAPI(title="Program Advisor API", version="1.0.0")
app.state.store = InMemoryAssessmentStore()
app.state.events = EventLog()
app.state.orchestrator = RecommendationOrchestrator(build_adapters())


def get_store(request: Request) -> AssessmentStore:
    return request.app.state.store


def get_orchestrator(request: Request) -> RecommendationOrchestrator:
    return request.app.state.orchestrator


def get_event_log(request: Request) -> EventLog:
    return request.app.state.events


def new_session_id() -> str:
    return f"session_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


# ── Error handlers ───────────────────────────────────────────────────────


@app.exception_handler(QuestionnaireValidationError)
def questionnaire_error_handler(request: Request, exc: QuestionnaireValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "message": "Failed to process assessment",
            "error": str(exc),
            "fields": exc.fields,
        },
    )


@app.exception_handler(RequestValidationError)
def request_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Envelope problems (non-object body, non-string sessionId) share the
    # questionnaire error shape.
    fields = [
        {"field": ".".join(str(p) for p in err["loc"] if p != "body") or "<root>", "message": err["msg"]}
        for err in exc.errors()
    ]
    return questionnaire_error_handler(request, QuestionnaireValidationError(fields))


@app.exception_handler(AssessmentNotFound)
def assessment_not_found_handler(request: Request, exc: AssessmentNotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": "Assessment not found"})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "educationLevels": EDUCATION_LEVEL_LABELS,
        "careerGoals": CAREER_GOAL_LABELS,
        "learningPreferences": LEARNING_PREFERENCE_LABELS,
        "yearsExperience": [bucket.value for bucket in ExperienceBucket],
    }


# ── Assessment endpoints ─────────────────────────────────────────────────


@app.post("/api/assessment", response_model=AssessmentResponse)
def submit_assessment(
    body: AssessmentRequest,
    store: AssessmentStore = Depends(get_store),
    orchestrator: RecommendationOrchestrator = Depends(get_orchestrator),
    events: EventLog = Depends(get_event_log),
) -> AssessmentResponse:
    session_id = body.session_id or new_session_id()
    questionnaire = parse_questionnaire(body.form_data)

    store.create_assessment(session_id, questionnaire)
    result = orchestrator.recommend_with_source(questionnaire)
    store.update_assessment_recommendation(session_id, result.recommendation)
    events.record("assessment", result.event_data(questionnaire))

    logger.info("Assessment %s answered by %s", session_id, result.source)
    return AssessmentResponse(session_id=session_id, recommendation=result.recommendation)


@app.get("/api/assessment/{session_id}", response_model=Assessment)
def get_assessment(
    session_id: str,
    store: AssessmentStore = Depends(get_store),
) -> Assessment:
    return require_assessment(store, session_id)


# ── Operations ───────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(events: EventLog = Depends(get_event_log)) -> dict:
    return compute_analytics(events.get())
