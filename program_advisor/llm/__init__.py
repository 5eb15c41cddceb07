"""
LLM integration layer.

Responsibilities:
- Manage provider configuration and credentials (OpenAI, Groq).
- Build the advisor prompt and JSON schema hint from a questionnaire.
- Call each provider in JSON mode and decode the reply.
- Report transport and decode failures as distinct ProviderError types.
"""
