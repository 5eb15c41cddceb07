from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable

from ..errors import ProviderError, ProviderNotConfigured, RecommendationValidationError
from ..llm.base import ProviderAdapter
from .models import Questionnaire, Recommendation
from .synthesizer import synthesize
from .validator import validate_recommendation

logger = logging.getLogger(__name__)

SYNTHESIZER_SOURCE = "rule_based"


@dataclass
class ProviderAttempt:
    provider: str
    outcome: str  # "success" | "skipped" | "transport" | "decode" | "validation" | "unexpected"
    detail: str | None = None


@dataclass
class OrchestrationResult:
    recommendation: Recommendation
    source: str
    attempts: list[ProviderAttempt] = field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def used_fallback(self) -> bool:
        return self.source == SYNTHESIZER_SOURCE

    def event_data(self, questionnaire: Questionnaire) -> dict[str, Any]:
        """Analytics payload for one run: who answered and who failed on the way."""
        return {
            "education_level": questionnaire.education_level.value,
            "career_goals": questionnaire.career_goals.value,
            "learning_preference": questionnaire.learning_preference.value,
            "source": self.source,
            "failures": [
                {"provider": a.provider, "category": a.outcome}
                for a in self.attempts
                if a.outcome not in ("success", "skipped")
            ],
            "response_time_ms": self.elapsed_ms,
        }


class RecommendationOrchestrator:
    """
    Try each provider in priority order and fall back to the rule-based
    synthesizer. ``recommend`` never raises for provider failures.
    """

    def __init__(
        self,
        providers: list[ProviderAdapter],
        synthesizer: Callable[[Questionnaire, random.Random | None], Recommendation] = synthesize,
        rng: random.Random | None = None,
    ):
        self.providers = list(providers)
        self.synthesizer = synthesizer
        self.rng = rng

    def _attempt(self, provider: ProviderAdapter, questionnaire: Questionnaire) -> tuple[ProviderAttempt, Recommendation | None]:
        try:
            candidate = provider.generate(questionnaire)
        except ProviderNotConfigured:
            logger.info("Skipping LLM provider %s: not configured", provider.name)
            return ProviderAttempt(provider.name, "skipped"), None
        except ProviderError as exc:
            logger.warning(
                "LLM provider %s failed (%s), trying next: %s",
                provider.name, exc.category, exc,
                exc_info=True,
                extra={"provider": provider.name, "category": exc.category},
            )
            return ProviderAttempt(provider.name, exc.category, str(exc)), None
        except Exception as exc:
            logger.exception(
                "LLM provider %s raised unexpectedly, trying next", provider.name,
                extra={"provider": provider.name, "category": "unexpected"},
            )
            return ProviderAttempt(provider.name, "unexpected", repr(exc)), None

        try:
            recommendation = validate_recommendation(candidate)
        except RecommendationValidationError as exc:
            logger.warning(
                "LLM provider %s returned an invalid recommendation at %s, trying next",
                provider.name, exc.path,
                extra={"provider": provider.name, "category": "validation"},
            )
            return ProviderAttempt(provider.name, "validation", str(exc)), None

        logger.info("LLM provider %s produced a valid recommendation", provider.name)
        return ProviderAttempt(provider.name, "success"), recommendation

    def recommend_with_source(self, questionnaire: Questionnaire) -> OrchestrationResult:
        start_time = time.time()
        attempts: list[ProviderAttempt] = []
        result: OrchestrationResult | None = None

        for provider in self.providers:
            attempt, recommendation = self._attempt(provider, questionnaire)
            attempts.append(attempt)
            if recommendation is not None:
                result = OrchestrationResult(recommendation, provider.name, attempts)
                break

        if result is None:
            logger.info(
                "All LLM providers exhausted, using rule-based recommendation",
                extra={"provider": SYNTHESIZER_SOURCE, "category": "fallback"},
            )
            result = OrchestrationResult(
                self.synthesizer(questionnaire, self.rng), SYNTHESIZER_SOURCE, attempts,
            )

        result.elapsed_ms = round((time.time() - start_time) * 1000, 1)
        return result

    def recommend(self, questionnaire: Questionnaire) -> Recommendation:
        return self.recommend_with_source(questionnaire).recommendation
