"""
Rule-based recommendation synthesizer.

The terminal fallback when no LLM provider produces a usable answer. Rules
are evaluated top to bottom, first match per axis wins:

1. Base bundle by (education level, career goal).
2. Technology or data-analytics keywords in field of study / current role
   upgrade the bundle.
3. Completion time follows the learning preference.
4. Salary range scales for high cost-of-living locations.
5. Enrollment figures are drawn from the injected random source.
6. Scholarships accumulate from an ordered rule list, capped at three.
7. Alternative pathways come from the bundle or a generic pair.
"""
from __future__ import annotations

import random
import re
from dataclasses import dataclass

from .models import (
    AlternativePathway,
    CareerGoal,
    CareerProjections,
    EducationLevel,
    ExperienceBucket,
    FinancialInfo,
    LearningPreference,
    ProgramInsights,
    Questionnaire,
    Recommendation,
    RecommendedProgram,
)

FULL_TIME_FACTOR = (7, 10)
HIGH_COST_FACTOR = (13, 10)
SELF_PACED_SUFFIX = " (FlexPath)"
MAX_SCHOLARSHIPS = 3

ENROLLED_RANGE = (500, 1500)
GRADUATED_RANGE = (1500, 3500)
SUCCESS_RATE_RANGE = (75, 90)

TECH_TERMS = (
    "computer",
    "software",
    "technology",
    "programming",
    "developer",
    "cyber",
    "network",
    "web development",
)
DATA_TERMS = (
    "data",
    "analytics",
    "statistic",
    "business intelligence",
    "machine learning",
)
HIGH_COST_LOCATIONS = (
    "new york",
    "san francisco",
    "los angeles",
    "san jose",
    "san diego",
    "boston",
    "seattle",
    "honolulu",
    "washington, d.c.",
    "washington dc",
)


@dataclass(frozen=True)
class ProgramBundle:
    title: str
    description: str
    match_score: int
    completion_time: str
    job_titles: tuple[str, ...]
    salary_range: str
    industry_growth: str
    alumni_example: str
    estimated_cost: str
    alternatives: tuple[tuple[str, str, int], ...] | None = None


GENERAL_STUDIES = ProgramBundle(
    title="General Studies Program",
    description=(
        "Based on your profile (current role: {role}), we recommend exploring our "
        "general studies program to help you identify your specific interests and career path."
    ),
    match_score=70,
    completion_time="24 months",
    job_titles=("Program Coordinator", "Business Analyst", "Project Manager"),
    salary_range="$45,000 - $75,000",
    industry_growth="5% growth by 2030",
    alumni_example="A graduate from {location} successfully transitioned to a management role in their field.",
    estimated_cost="$18,000",
)

_E = EducationLevel
_G = CareerGoal

PROGRAM_BUNDLES: dict[tuple[EducationLevel, CareerGoal], ProgramBundle] = {
    (_E.high_school, _G.leadership): ProgramBundle(
        title="Bachelor of Science in Business Administration",
        description=(
            "An undergraduate business degree that builds management fundamentals "
            "and prepares you to lead teams early in your career."
        ),
        match_score=82,
        completion_time="48 months",
        job_titles=("Management Trainee", "Operations Supervisor", "Team Lead"),
        salary_range="$45,000 - $70,000",
        industry_growth="7% growth by 2030",
        alumni_example="A graduate from {location} was promoted to store operations manager within three years.",
        estimated_cost="$52,000",
    ),
    (_E.high_school, _G.specialization): ProgramBundle(
        title="Bachelor of Arts in Liberal Studies",
        description=(
            "A foundational undergraduate program that provides broad knowledge across "
            "multiple disciplines, ideal while you decide where to specialize."
        ),
        match_score=78,
        completion_time="48 months",
        job_titles=("Administrative Coordinator", "Customer Success Associate", "Program Assistant"),
        salary_range="$38,000 - $60,000",
        industry_growth="5% growth by 2030",
        alumni_example="A graduate from {location} used the program to move into a specialized policy role.",
        estimated_cost="$48,000",
    ),
    (_E.high_school, _G.research): ProgramBundle(
        title="Bachelor of Science in Psychology",
        description=(
            "An evidence-based undergraduate program covering research methods and "
            "statistics, a strong first step toward a research career."
        ),
        match_score=76,
        completion_time="48 months",
        job_titles=("Research Assistant", "Case Manager", "Behavioral Technician"),
        salary_range="$36,000 - $58,000",
        industry_growth="6% growth by 2030",
        alumni_example="A graduate from {location} joined a university lab as a research coordinator.",
        estimated_cost="$50,000",
    ),
    (_E.high_school, _G.industry_change): ProgramBundle(
        title="Bachelor of Arts in Liberal Studies",
        description=(
            "A flexible undergraduate program with transferable skills in communication "
            "and critical thinking that carry across industries."
        ),
        match_score=75,
        completion_time="48 months",
        job_titles=("Administrative Coordinator", "Sales Associate", "Program Assistant"),
        salary_range="$38,000 - $60,000",
        industry_growth="5% growth by 2030",
        alumni_example="A graduate from {location} changed from retail to nonprofit program management.",
        estimated_cost="$48,000",
    ),
    (_E.associate, _G.leadership): ProgramBundle(
        title="Bachelor of Science in Business Administration (Degree Completion)",
        description=(
            "Applies your associate credits toward a bachelor's degree focused on "
            "management, finance, and organizational behavior."
        ),
        match_score=84,
        completion_time="24 months",
        job_titles=("Operations Manager", "Assistant Branch Manager", "Team Supervisor"),
        salary_range="$50,000 - $80,000",
        industry_growth="7% growth by 2030",
        alumni_example="A graduate from {location} moved from shift lead to operations manager after finishing.",
        estimated_cost="$28,000",
    ),
    (_E.associate, _G.specialization): ProgramBundle(
        title="Bachelor of Science in Health Care Administration",
        description=(
            "Builds specialized knowledge of health care systems, compliance, and "
            "finance on top of your associate degree."
        ),
        match_score=80,
        completion_time="30 months",
        job_titles=("Health Services Coordinator", "Medical Office Manager", "Patient Access Supervisor"),
        salary_range="$48,000 - $78,000",
        industry_growth="28% growth by 2030",
        alumni_example="A graduate from {location} now manages a multi-site outpatient clinic.",
        estimated_cost="$30,000",
    ),
    (_E.associate, _G.research): ProgramBundle(
        title="Bachelor of Science in Psychology (Degree Completion)",
        description=(
            "Transfers your associate credits into a bachelor's program in research "
            "methods, statistics, and behavioral science."
        ),
        match_score=78,
        completion_time="30 months",
        job_titles=("Research Assistant", "Clinical Research Coordinator", "Program Evaluator"),
        salary_range="$40,000 - $65,000",
        industry_growth="6% growth by 2030",
        alumni_example="A graduate from {location} joined a public health study as a data collection lead.",
        estimated_cost="$29,000",
    ),
    (_E.associate, _G.industry_change): ProgramBundle(
        title="Bachelor of Science in Business (Degree Completion)",
        description=(
            "A broad business bachelor's that transfers your existing credits and "
            "opens doors in a new industry."
        ),
        match_score=79,
        completion_time="24 months",
        job_titles=("Business Analyst", "Account Coordinator", "Operations Analyst"),
        salary_range="$48,000 - $76,000",
        industry_growth="8% growth by 2030",
        alumni_example="A graduate from {location} switched from hospitality to supply chain analysis.",
        estimated_cost="$27,000",
    ),
    (_E.bachelor, _G.leadership): ProgramBundle(
        title="Master of Business Administration (MBA)",
        description=(
            "A versatile graduate degree that builds on your experience in {field} and "
            "develops leadership and business skills applicable across industries."
        ),
        match_score=88,
        completion_time="18 months",
        job_titles=("Operations Manager", "Senior Project Manager", "Director of Strategy"),
        salary_range="$70,000 - $120,000",
        industry_growth="9% growth by 2030",
        alumni_example="A graduate from {location} moved from analyst to director of operations within two years.",
        estimated_cost="$35,000",
        alternatives=(
            ("Master of Science in Organizational Leadership", "Leadership theory and change management for managers", 82),
            ("Master of Science in Project Management", "Plan, execute, and deliver complex initiatives", 78),
        ),
    ),
    (_E.bachelor, _G.specialization): ProgramBundle(
        title="Master of Public Health (MPH)",
        description=(
            "A specialized graduate degree in epidemiology, policy, and program "
            "evaluation that deepens expertise gained in {field}."
        ),
        match_score=84,
        completion_time="24 months",
        job_titles=("Public Health Analyst", "Program Manager", "Health Policy Advisor"),
        salary_range="$60,000 - $98,000",
        industry_growth="12% growth by 2030",
        alumni_example="A graduate from {location} leads community health programs for a regional agency.",
        estimated_cost="$32,000",
    ),
    (_E.bachelor, _G.research): ProgramBundle(
        title="Master of Science in Psychology",
        description=(
            "A research-focused graduate program in experimental design and analysis, "
            "preparing you for doctoral study or applied research roles."
        ),
        match_score=83,
        completion_time="24 months",
        job_titles=("Research Associate", "Behavioral Analyst", "Clinical Research Coordinator"),
        salary_range="$55,000 - $90,000",
        industry_growth="8% growth by 2030",
        alumni_example="A graduate from {location} published two papers before entering a PhD program.",
        estimated_cost="$30,000",
    ),
    (_E.bachelor, _G.industry_change): ProgramBundle(
        title="Master of Science in Project Management",
        description=(
            "A practical graduate degree whose methods apply in any industry, easing "
            "a move away from {field}."
        ),
        match_score=82,
        completion_time="18 months",
        job_titles=("Project Manager", "Program Coordinator", "Scrum Master"),
        salary_range="$65,000 - $110,000",
        industry_growth="11% growth by 2030",
        alumni_example="A graduate from {location} moved from teaching to managing software projects.",
        estimated_cost="$29,000",
    ),
    (_E.master, _G.leadership): ProgramBundle(
        title="Doctor of Business Administration (DBA)",
        description=(
            "An applied doctorate for experienced professionals who want to lead "
            "organizations with research-backed decision making."
        ),
        match_score=86,
        completion_time="36 months",
        job_titles=("Vice President of Operations", "Chief Strategy Officer", "Executive Director"),
        salary_range="$110,000 - $190,000",
        industry_growth="8% growth by 2030",
        alumni_example="A graduate from {location} became chief operating officer of a regional health system.",
        estimated_cost="$55,000",
    ),
    (_E.master, _G.specialization): ProgramBundle(
        title="Professional Development Certificate",
        description=(
            "Focused skill enhancement programs designed for experienced professionals "
            "seeking to advance their expertise in {field}."
        ),
        match_score=80,
        completion_time="12 months",
        job_titles=("Senior Specialist", "Subject Matter Expert", "Principal Consultant"),
        salary_range="$85,000 - $135,000",
        industry_growth="7% growth by 2030",
        alumni_example="A graduate from {location} earned a senior specialist title after completing the certificate.",
        estimated_cost="$9,000",
    ),
    (_E.master, _G.research): ProgramBundle(
        title="Doctor of Philosophy (PhD) in Business Management",
        description=(
            "A research doctorate that trains you to produce original scholarship and "
            "teach at the university level."
        ),
        match_score=85,
        completion_time="48 months",
        job_titles=("Assistant Professor", "Research Scientist", "Policy Researcher"),
        salary_range="$80,000 - $130,000",
        industry_growth="10% growth by 2030",
        alumni_example="A graduate from {location} joined a business school faculty after defending.",
        estimated_cost="$60,000",
    ),
    (_E.master, _G.industry_change): ProgramBundle(
        title="Graduate Certificate in Project Management",
        description=(
            "A short graduate credential that repackages your experience for a new "
            "industry with recognized project management practice."
        ),
        match_score=79,
        completion_time="12 months",
        job_titles=("Project Manager", "Program Manager", "Portfolio Analyst"),
        salary_range="$75,000 - $120,000",
        industry_growth="11% growth by 2030",
        alumni_example="A graduate from {location} moved from engineering into program management.",
        estimated_cost="$12,000",
    ),
    (_E.doctoral, _G.leadership): ProgramBundle(
        title="Executive Leadership Certificate",
        description=(
            "A compact executive program that sharpens strategic leadership for "
            "doctoral-level professionals stepping into senior roles."
        ),
        match_score=80,
        completion_time="6 months",
        job_titles=("Department Chair", "Chief Academic Officer", "Executive Director"),
        salary_range="$120,000 - $200,000",
        industry_growth="6% growth by 2030",
        alumni_example="A graduate from {location} was appointed dean within a year of completing the program.",
        estimated_cost="$8,000",
    ),
    (_E.doctoral, _G.research): ProgramBundle(
        title="Graduate Certificate in Advanced Research Methods",
        description=(
            "Advanced quantitative and qualitative methods for researchers extending "
            "their work in {field}."
        ),
        match_score=78,
        completion_time="9 months",
        job_titles=("Principal Investigator", "Research Director", "Senior Scientist"),
        salary_range="$95,000 - $160,000",
        industry_growth="9% growth by 2030",
        alumni_example="A graduate from {location} secured a multi-year federal research grant.",
        estimated_cost="$10,000",
    ),
}

TECH_BUNDLES: dict[EducationLevel, ProgramBundle] = {
    _E.high_school: ProgramBundle(
        title="Bachelor of Science in Information Technology",
        description=(
            "An undergraduate information technology degree covering programming, "
            "networking, and security, a natural next step from your interest in {field}."
        ),
        match_score=85,
        completion_time="48 months",
        job_titles=("IT Support Specialist", "Junior Software Developer", "Network Technician"),
        salary_range="$50,000 - $85,000",
        industry_growth="15% growth by 2030",
        alumni_example="A graduate from {location} started as a help desk analyst and now works as a cloud engineer.",
        estimated_cost="$56,000",
    ),
    _E.associate: ProgramBundle(
        title="Bachelor of Science in Information Technology (Degree Completion)",
        description=(
            "Completes your bachelor's with coursework in software, systems, and "
            "security that builds directly on {field}."
        ),
        match_score=86,
        completion_time="24 months",
        job_titles=("Systems Administrator", "Software Developer", "Security Analyst"),
        salary_range="$60,000 - $95,000",
        industry_growth="15% growth by 2030",
        alumni_example="A graduate from {location} moved from desktop support to systems administration.",
        estimated_cost="$30,000",
    ),
    _E.bachelor: ProgramBundle(
        title="Master of Science in Information Technology",
        description=(
            "A graduate technology degree in architecture, cloud, and IT leadership "
            "that deepens your background in {field}."
        ),
        match_score=90,
        completion_time="18 months",
        job_titles=("Solutions Architect", "IT Manager", "Cloud Engineer"),
        salary_range="$85,000 - $140,000",
        industry_growth="15% growth by 2030",
        alumni_example="A graduate from {location} became an IT manager overseeing a team of twelve.",
        estimated_cost="$34,000",
    ),
    _E.master: ProgramBundle(
        title="Graduate Certificate in Cybersecurity",
        description=(
            "A focused credential in threat analysis and security engineering for "
            "professionals already working in {field}."
        ),
        match_score=87,
        completion_time="12 months",
        job_titles=("Security Engineer", "Information Security Manager", "Penetration Tester"),
        salary_range="$95,000 - $150,000",
        industry_growth="33% growth by 2030",
        alumni_example="A graduate from {location} now leads incident response for a national retailer.",
        estimated_cost="$14,000",
    ),
    _E.doctoral: ProgramBundle(
        title="Doctor of Information Technology (DIT)",
        description=(
            "An applied technology doctorate focused on emerging systems and IT "
            "strategy, extending your work in {field}."
        ),
        match_score=88,
        completion_time="36 months",
        job_titles=("Chief Information Officer", "Director of Technology", "Principal Architect"),
        salary_range="$130,000 - $210,000",
        industry_growth="15% growth by 2030",
        alumni_example="A graduate from {location} became CIO of a regional university.",
        estimated_cost="$52,000",
    ),
}

DATA_BUNDLES: dict[EducationLevel, ProgramBundle] = {
    _E.high_school: ProgramBundle(
        title="Bachelor of Science in Data Analytics",
        description=(
            "An undergraduate analytics degree in statistics, SQL, and visualization "
            "that turns your interest in {field} into job-ready skills."
        ),
        match_score=84,
        completion_time="48 months",
        job_titles=("Data Analyst", "Reporting Specialist", "Business Intelligence Associate"),
        salary_range="$52,000 - $85,000",
        industry_growth="23% growth by 2030",
        alumni_example="A graduate from {location} built the reporting platform for a logistics company.",
        estimated_cost="$54,000",
    ),
    _E.associate: ProgramBundle(
        title="Bachelor of Science in Data Analytics",
        description=(
            "Completes your bachelor's with applied statistics and analytics "
            "coursework that builds on {field}."
        ),
        match_score=84,
        completion_time="30 months",
        job_titles=("Data Analyst", "Operations Analyst", "Business Intelligence Developer"),
        salary_range="$55,000 - $88,000",
        industry_growth="23% growth by 2030",
        alumni_example="A graduate from {location} moved from billing to a data analyst role.",
        estimated_cost="$31,000",
    ),
    _E.bachelor: ProgramBundle(
        title="Master of Science in Data Analytics",
        description=(
            "A graduate program in predictive modeling, machine learning, and data "
            "strategy that extends your background in {field}."
        ),
        match_score=89,
        completion_time="18 months",
        job_titles=("Data Scientist", "Analytics Manager", "Machine Learning Analyst"),
        salary_range="$80,000 - $135,000",
        industry_growth="36% growth by 2030",
        alumni_example="A graduate from {location} leads the analytics team at a fintech startup.",
        estimated_cost="$33,000",
    ),
    _E.master: ProgramBundle(
        title="Master of Science in Data Analytics",
        description=(
            "Adds advanced analytics and machine learning to your existing graduate "
            "training in {field}."
        ),
        match_score=89,
        completion_time="18 months",
        job_titles=("Senior Data Scientist", "Director of Analytics", "Quantitative Analyst"),
        salary_range="$95,000 - $150,000",
        industry_growth="36% growth by 2030",
        alumni_example="A graduate from {location} became director of analytics at a hospital network.",
        estimated_cost="$33,000",
    ),
}

GENERIC_ALTERNATIVES: tuple[tuple[str, str, int], ...] = (
    ("Professional Certificate Program", "Focused skill development in a specific area", 10),
    ("Continuing Education Courses", "Stackable courses that build toward a credential", 15),
)

ENTRY_LEVEL_SCHOLARSHIPS = (
    "First-Generation College Student Scholarship",
    "Academic Excellence Scholarship",
)
LEADERSHIP_SCHOLARSHIPS = ("Emerging Leaders Grant",)
STEM_SCHOLARSHIPS = ("STEM Excellence Grant",)
GENERIC_SCHOLARSHIPS = ("Merit-Based Scholarship", "Need-Based Grant")

_LEADING_NUMBER_RE = re.compile(r"^\s*(\d+)(.*)$")
_DOLLAR_AMOUNT_RE = re.compile(r"\$([\d,]+)")


def _ceil_ratio(value: int, ratio: tuple[int, int]) -> int:
    num, den = ratio
    return -(-value * num // den)


def _keyword_text(questionnaire: Questionnaire) -> str:
    parts = [questionnaire.field_of_study or "", questionnaire.current_role or ""]
    return " ".join(parts).lower()


def _matches_any(text: str, terms: tuple[str, ...]) -> bool:
    return any(term in text for term in terms)


def has_tech_keywords(questionnaire: Questionnaire) -> bool:
    return _matches_any(_keyword_text(questionnaire), TECH_TERMS)


def has_data_keywords(questionnaire: Questionnaire) -> bool:
    return _matches_any(_keyword_text(questionnaire), DATA_TERMS)


def select_bundle(questionnaire: Questionnaire) -> ProgramBundle:
    """Steps 1 and 2: base bundle by profile, then keyword refinement."""
    level = questionnaire.education_level
    if has_tech_keywords(questionnaire) and level in TECH_BUNDLES:
        return TECH_BUNDLES[level]
    if has_data_keywords(questionnaire) and level in DATA_BUNDLES:
        return DATA_BUNDLES[level]
    return PROGRAM_BUNDLES.get((level, questionnaire.career_goals), GENERAL_STUDIES)


def adjust_completion_time(completion_time: str, preference: LearningPreference) -> str:
    if preference == LearningPreference.self_paced:
        return completion_time + SELF_PACED_SUFFIX
    if preference == LearningPreference.full_time:
        match = _LEADING_NUMBER_RE.match(completion_time)
        if match:
            shortened = _ceil_ratio(int(match.group(1)), FULL_TIME_FACTOR)
            return f"{shortened}{match.group(2)}"
    return completion_time


def is_high_cost_location(location: str | None) -> bool:
    return _matches_any((location or "").lower(), HIGH_COST_LOCATIONS)


def adjust_salary_range(salary_range: str, location: str | None) -> str:
    if not is_high_cost_location(location):
        return salary_range

    def _scale(match: re.Match[str]) -> str:
        amount = int(match.group(1).replace(",", ""))
        return f"${_ceil_ratio(amount, HIGH_COST_FACTOR):,}"

    return _DOLLAR_AMOUNT_RE.sub(_scale, salary_range)


def build_scholarships(questionnaire: Questionnaire) -> list[str]:
    scholarships: list[str] = []
    if questionnaire.education_level == EducationLevel.high_school:
        scholarships.extend(ENTRY_LEVEL_SCHOLARSHIPS)
    if questionnaire.career_goals == CareerGoal.leadership:
        scholarships.extend(LEADERSHIP_SCHOLARSHIPS)
    if has_tech_keywords(questionnaire):
        scholarships.extend(STEM_SCHOLARSHIPS)
    scholarships.extend(GENERIC_SCHOLARSHIPS)
    return scholarships[:MAX_SCHOLARSHIPS]


def qualifies_for_corporate_discount(questionnaire: Questionnaire) -> bool:
    return not (
        questionnaire.years_experience == ExperienceBucket.entry
        and not (questionnaire.current_role or "").strip()
    )


def build_alternatives(bundle: ProgramBundle) -> list[AlternativePathway]:
    if bundle.alternatives is not None:
        return [
            AlternativePathway(title=title, description=description, match_score=score)
            for title, description, score in bundle.alternatives
        ]
    return [
        AlternativePathway(
            title=title, description=description, match_score=bundle.match_score - offset,
        )
        for title, description, offset in GENERIC_ALTERNATIVES
    ]


def synthesize(questionnaire: Questionnaire, rng: random.Random | None = None) -> Recommendation:
    """
    Build a complete Recommendation without any network call.

    Only the enrollment figures depend on ``rng``; pass a seeded
    ``random.Random`` for reproducible output.
    """
    rng = rng or random.Random()
    bundle = select_bundle(questionnaire)

    text_fields = {
        "field": (questionnaire.field_of_study or "").strip() or "your current field",
        "role": (questionnaire.current_role or "").strip() or "Not specified",
        "location": (questionnaire.location or "").strip() or "their region",
    }

    return Recommendation(
        recommended_program=RecommendedProgram(
            title=bundle.title,
            description=bundle.description.format(**text_fields),
            match_score=bundle.match_score,
        ),
        program_insights=ProgramInsights(
            enrolled=rng.randrange(*ENROLLED_RANGE),
            graduated=rng.randrange(*GRADUATED_RANGE),
            completion_time=adjust_completion_time(
                bundle.completion_time, questionnaire.learning_preference,
            ),
            success_rate=rng.randrange(*SUCCESS_RATE_RANGE),
        ),
        career_projections=CareerProjections(
            job_titles=list(bundle.job_titles),
            salary_range=adjust_salary_range(bundle.salary_range, questionnaire.location),
            industry_growth=bundle.industry_growth,
            alumni_example=bundle.alumni_example.format(**text_fields),
        ),
        financial_info=FinancialInfo(
            estimated_cost=bundle.estimated_cost,
            scholarships=build_scholarships(questionnaire),
            corporate_discounts=qualifies_for_corporate_discount(questionnaire),
        ),
        alternative_pathways=build_alternatives(bundle),
    )
