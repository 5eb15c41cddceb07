from __future__ import annotations

import openai
from openai import OpenAI

from .base import ProviderAdapter


class OpenAIAdapter(ProviderAdapter):
    transport_errors = (openai.APIError,)

    def _build_client(self) -> OpenAI:
        return OpenAI(
            api_key=self.config.api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            max_retries=0,
        )
