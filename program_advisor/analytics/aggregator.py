from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    runs = [e for e in events if e["type"] == "assessment"]
    total = len(runs)

    # Average response time
    times = [r["response_time_ms"] for r in runs if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Which strategy produced each recommendation
    source_counter: Counter[str] = Counter(r.get("source", "unknown") for r in runs)
    fallback_count = source_counter.get("rule_based", 0)

    # Provider failures, by provider and by category
    failures: dict[str, Counter[str]] = {}
    for r in runs:
        for failure in r.get("failures", []) or []:
            failures.setdefault(failure["provider"], Counter())[failure["category"]] += 1
    provider_failures = {
        provider: dict(counter) for provider, counter in sorted(failures.items())
    }

    goal_counter: Counter[str] = Counter(r.get("career_goals", "unknown") for r in runs)
    education_counter: Counter[str] = Counter(r.get("education_level", "unknown") for r in runs)

    return {
        "total_assessments": total,
        "avg_response_time_ms": avg_time,
        "sources": dict(source_counter),
        "fallback_rate": round(fallback_count / total * 100, 1) if total else 0.0,
        "provider_failures": provider_failures,
        "top_career_goals": [{"name": n, "count": c} for n, c in goal_counter.most_common(10)],
        "top_education_levels": [
            {"name": n, "count": c} for n, c in education_counter.most_common(10)
        ],
    }
