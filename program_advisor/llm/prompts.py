from __future__ import annotations

import json

from ..recommendations.models import Questionnaire, Recommendation

EDUCATION_LEVEL_LABELS: dict[str, str] = {
    "high_school": "High School Graduate",
    "associate": "Associate Degree",
    "bachelor": "Bachelor's Degree",
    "master": "Master's Degree",
    "doctoral": "Doctoral Degree",
}

CAREER_GOAL_LABELS: dict[str, str] = {
    "leadership": "Leadership and Management",
    "specialization": "Technical Specialization",
    "research": "Research and Academia",
    "industry_change": "Career Transition",
}

LEARNING_PREFERENCE_LABELS: dict[str, str] = {
    "full_time": "Full-time Study",
    "part_time": "Part-time Study",
    "self_paced": "Self-paced (FlexPath)",
}

EXAMPLE_RESPONSE = """\
{
  "recommendedProgram": {
    "title": "Program name",
    "description": "Why this program fits the student's profile and goals",
    "matchScore": 85
  },
  "programInsights": {
    "enrolled": 1200,
    "graduated": 3000,
    "completionTime": "18 months",
    "successRate": 82
  },
  "careerProjections": {
    "jobTitles": ["Job Title 1", "Job Title 2", "Job Title 3"],
    "salaryRange": "$XX,000 - $XX,000",
    "industryGrowth": "X% growth by 2030",
    "alumniExample": "Brief success story"
  },
  "financialInfo": {
    "estimatedCost": "$XX,000",
    "scholarships": ["Scholarship 1", "Scholarship 2"],
    "corporateDiscounts": true
  },
  "alternativePathways": [
    {"title": "Alternative Program 1", "description": "Brief description", "matchScore": 75},
    {"title": "Alternative Program 2", "description": "Brief description", "matchScore": 70}
  ]
}"""


def recommendation_schema_hint() -> str:
    """JSON schema of the Recommendation shape, keyed the way the wire expects."""
    return json.dumps(Recommendation.model_json_schema(by_alias=True), separators=(",", ":"))


SYSTEM_PROMPT = (
    "You are an expert educational advisor. Based on a student profile, "
    "recommend the most suitable educational program and provide detailed insights.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    f"{EXAMPLE_RESPONSE}\n\n"
    "All numbers must be JSON numbers, not strings. "
    "enrolled and graduated are whole numbers. "
    "jobTitles must contain at least one entry.\n\n"
    "The response must conform to this JSON schema:\n"
)


def build_system_prompt() -> str:
    return SYSTEM_PROMPT + recommendation_schema_hint()


def build_user_message(questionnaire: Questionnaire) -> str:
    q = questionnaire
    lines = [
        "## Student Profile",
        f"- Education Level: {EDUCATION_LEVEL_LABELS[q.education_level.value]}",
        f"- Field of Study: {q.field_of_study or 'Not specified'}",
        f"- Current Role: {q.current_role or 'Not specified'}",
        f"- Years of Experience: {q.years_experience.value}",
        f"- Location: {q.location or 'Not specified'}",
        f"- Career Goals: {CAREER_GOAL_LABELS[q.career_goals.value]}",
        f"- Learning Preference: {LEARNING_PREFERENCE_LABELS[q.learning_preference.value]}",
        "",
        "Ensure all numbers are realistic and the recommendations are relevant "
        "to the student's background and goals.",
    ]
    return "\n".join(lines)
