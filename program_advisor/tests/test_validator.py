from __future__ import annotations

import pytest

from program_advisor.errors import QuestionnaireValidationError, RecommendationValidationError
from program_advisor.recommendations.models import EducationLevel, Recommendation
from program_advisor.recommendations.validator import parse_questionnaire, validate_recommendation


# ── Recommendation shape ─────────────────────────────────────────────────


def test_valid_payload_is_accepted_unchanged(valid_payload):
    recommendation = validate_recommendation(valid_payload)

    assert isinstance(recommendation, Recommendation)
    assert recommendation.to_payload() == valid_payload


def test_missing_nested_field_names_its_path(valid_payload):
    del valid_payload["financialInfo"]["estimatedCost"]

    with pytest.raises(RecommendationValidationError) as excinfo:
        validate_recommendation(valid_payload)

    assert excinfo.value.path == "financialInfo.estimatedCost"


def test_missing_group_is_rejected(valid_payload):
    del valid_payload["careerProjections"]

    with pytest.raises(RecommendationValidationError) as excinfo:
        validate_recommendation(valid_payload)

    assert excinfo.value.path == "careerProjections"


def test_numeric_string_is_not_coerced(valid_payload):
    valid_payload["recommendedProgram"]["matchScore"] = "85"

    with pytest.raises(RecommendationValidationError) as excinfo:
        validate_recommendation(valid_payload)

    assert excinfo.value.path == "recommendedProgram.matchScore"


def test_float_enrolled_is_rejected(valid_payload):
    valid_payload["programInsights"]["enrolled"] = 1200.5

    with pytest.raises(RecommendationValidationError) as excinfo:
        validate_recommendation(valid_payload)

    assert excinfo.value.path == "programInsights.enrolled"


def test_bool_is_not_a_number(valid_payload):
    valid_payload["programInsights"]["graduated"] = True

    with pytest.raises(RecommendationValidationError):
        validate_recommendation(valid_payload)


def test_string_is_not_a_bool(valid_payload):
    valid_payload["financialInfo"]["corporateDiscounts"] = "yes"

    with pytest.raises(RecommendationValidationError) as excinfo:
        validate_recommendation(valid_payload)

    assert excinfo.value.path == "financialInfo.corporateDiscounts"


def test_empty_job_titles_rejected(valid_payload):
    valid_payload["careerProjections"]["jobTitles"] = []

    with pytest.raises(RecommendationValidationError) as excinfo:
        validate_recommendation(valid_payload)

    assert excinfo.value.path == "careerProjections.jobTitles"


def test_mistyped_list_element_reports_index(valid_payload):
    valid_payload["alternativePathways"].append({"title": "MPA", "description": "Public administration"})

    with pytest.raises(RecommendationValidationError) as excinfo:
        validate_recommendation(valid_payload)

    assert excinfo.value.path == "alternativePathways.1.matchScore"


def test_empty_lists_allowed_where_optional(valid_payload):
    valid_payload["financialInfo"]["scholarships"] = []
    valid_payload["alternativePathways"] = []

    recommendation = validate_recommendation(valid_payload)

    assert recommendation.financial_info.scholarships == []
    assert recommendation.alternative_pathways == []


def test_extra_keys_are_dropped(valid_payload):
    valid_payload["confidence"] = "high"

    recommendation = validate_recommendation(valid_payload)

    assert "confidence" not in recommendation.to_payload()


@pytest.mark.parametrize("candidate", [None, [], "recommendation", 42])
def test_non_object_rejected(candidate):
    with pytest.raises(RecommendationValidationError):
        validate_recommendation(candidate)


# ── Questionnaire ────────────────────────────────────────────────────────


def test_parse_questionnaire_accepts_form():
    q = parse_questionnaire({
        "educationLevel": "master",
        "yearsExperience": "10+",
        "location": "Denver",
        "careerGoals": "research",
        "learningPreference": "part_time",
    })

    assert q.education_level == EducationLevel.master
    assert q.field_of_study is None
    assert q.current_role is None


def test_parse_questionnaire_reports_each_bad_field():
    with pytest.raises(QuestionnaireValidationError) as excinfo:
        parse_questionnaire({
            "educationLevel": "kindergarten",
            "yearsExperience": "3-5",
            "careerGoals": "leadership",
            "learningPreference": "full_time",
        })

    fields = {f["field"] for f in excinfo.value.fields}
    assert fields == {"educationLevel", "location"}


def test_parse_questionnaire_rejects_unknown_experience_bucket():
    with pytest.raises(QuestionnaireValidationError) as excinfo:
        parse_questionnaire({
            "educationLevel": "bachelor",
            "yearsExperience": "eleven",
            "location": "Austin",
            "careerGoals": "leadership",
            "learningPreference": "full_time",
        })

    assert excinfo.value.fields[0]["field"] == "yearsExperience"
