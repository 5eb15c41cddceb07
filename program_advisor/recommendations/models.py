from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
)
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Wire models use camelCase keys; Python code uses snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Questionnaire ────────────────────────────────────────────────────────


class EducationLevel(str, Enum):
    high_school = "high_school"
    associate = "associate"
    bachelor = "bachelor"
    master = "master"
    doctoral = "doctoral"


class CareerGoal(str, Enum):
    leadership = "leadership"
    specialization = "specialization"
    research = "research"
    industry_change = "industry_change"


class LearningPreference(str, Enum):
    full_time = "full_time"
    part_time = "part_time"
    self_paced = "self_paced"


class ExperienceBucket(str, Enum):
    entry = "0-2"
    early = "3-5"
    mid = "6-10"
    senior = "10+"


class Questionnaire(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    education_level: EducationLevel
    field_of_study: str | None = None
    current_role: str | None = None
    years_experience: ExperienceBucket
    location: str
    career_goals: CareerGoal
    learning_preference: LearningPreference


# ── Recommendation ───────────────────────────────────────────────────────
# Leaves are strict: provider output is never coerced, so "85" is not a
# number and true is not an integer.


class RecommendedProgram(_CamelModel):
    title: StrictStr
    description: StrictStr
    match_score: StrictFloat


class ProgramInsights(_CamelModel):
    enrolled: StrictInt
    graduated: StrictInt
    completion_time: StrictStr
    success_rate: StrictFloat


class CareerProjections(_CamelModel):
    job_titles: list[StrictStr] = Field(..., min_length=1)
    salary_range: StrictStr
    industry_growth: StrictStr
    alumni_example: StrictStr


class FinancialInfo(_CamelModel):
    estimated_cost: StrictStr
    scholarships: list[StrictStr]
    corporate_discounts: StrictBool


class AlternativePathway(_CamelModel):
    title: StrictStr
    description: StrictStr
    match_score: StrictFloat


class Recommendation(_CamelModel):
    recommended_program: RecommendedProgram
    program_insights: ProgramInsights
    career_projections: CareerProjections
    financial_info: FinancialInfo
    alternative_pathways: list[AlternativePathway]

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# ── Assessments ──────────────────────────────────────────────────────────


class Assessment(_CamelModel):
    id: str
    session_id: str
    form_data: Questionnaire
    recommendation: Recommendation | None = None
    created_at: datetime


class AssessmentRequest(_CamelModel):
    session_id: str | None = None
    form_data: Any = None


class AssessmentResponse(_CamelModel):
    session_id: str
    recommendation: Recommendation
