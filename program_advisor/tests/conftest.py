from __future__ import annotations

import copy
from typing import Any

import pytest
from pydantic.alias_generators import to_camel

from program_advisor.analytics.store import EventLog
from program_advisor.recommendations.models import Questionnaire

VALID_PAYLOAD: dict[str, Any] = {
    "recommendedProgram": {
        "title": "Master of Science in Nursing",
        "description": "Builds on clinical experience toward advanced practice.",
        "matchScore": 91,
    },
    "programInsights": {
        "enrolled": 1200,
        "graduated": 3000,
        "completionTime": "20 months",
        "successRate": 84.5,
    },
    "careerProjections": {
        "jobTitles": ["Nurse Practitioner", "Nurse Educator"],
        "salaryRange": "$95,000 - $130,000",
        "industryGrowth": "40% growth by 2030",
        "alumniExample": "A graduate now runs a rural clinic.",
    },
    "financialInfo": {
        "estimatedCost": "$28,000",
        "scholarships": ["Nursing Excellence Scholarship"],
        "corporateDiscounts": True,
    },
    "alternativePathways": [
        {"title": "RN to BSN", "description": "Degree completion", "matchScore": 80},
    ],
}

BASE_FORM: dict[str, Any] = {
    "educationLevel": "bachelor",
    "fieldOfStudy": "",
    "currentRole": "",
    "yearsExperience": "3-5",
    "location": "New York",
    "careerGoals": "leadership",
    "learningPreference": "full_time",
}


@pytest.fixture
def valid_payload() -> dict[str, Any]:
    return copy.deepcopy(VALID_PAYLOAD)


@pytest.fixture
def make_questionnaire():
    def _make(**overrides: Any) -> Questionnaire:
        form = {**BASE_FORM, **{to_camel(k): v for k, v in overrides.items()}}
        return Questionnaire.model_validate(form)
    return _make


@pytest.fixture
def event_log() -> EventLog:
    return EventLog()
