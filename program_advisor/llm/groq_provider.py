from __future__ import annotations

import groq
from groq import Groq

from .base import ProviderAdapter


class GroqAdapter(ProviderAdapter):
    transport_errors = (groq.APIError,)

    def _build_client(self) -> Groq:
        return Groq(
            api_key=self.config.api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            max_retries=0,
        )
