"""
Program recommendation engine.

Responsibilities:
- Define the questionnaire and recommendation contracts.
- Validate provider output against the recommendation shape.
- Orchestrate the provider fallback chain.
- Synthesize a rule-based recommendation when every provider fails.
"""
