from __future__ import annotations

import json
import logging
from typing import Any

from ..errors import ProviderDecodeError, ProviderNotConfigured, ProviderTransportError
from ..recommendations.models import Questionnaire
from .config import ProviderConfig
from .prompts import build_system_prompt, build_user_message

logger = logging.getLogger(__name__)


class ProviderAdapter:
    """
    Uniform wrapper around one chat-completion provider.

    Subclasses build the SDK client and list the SDK exceptions that mean
    the request never produced a usable reply. ``generate`` returns the
    decoded JSON object; shape validation happens elsewhere.
    """

    transport_errors: tuple[type[BaseException], ...] = ()

    def __init__(self, config: ProviderConfig, client: Any = None):
        self.config = config
        self._client = client

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def is_configured(self) -> bool:
        return self.config.enabled and (self._client is not None or bool(self.config.api_key))

    def _build_client(self) -> Any:
        raise NotImplementedError

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = self._build_client()
        return self._client

    def _request_kwargs(self, system: str, user: str) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
            "response_format": {"type": "json_object"},
        }

    def _complete(self, system: str, user: str) -> str | None:
        client = self._get_client()
        try:
            response = client.chat.completions.create(**self._request_kwargs(system, user))
        except self.transport_errors as exc:
            raise ProviderTransportError(self.name, str(exc) or type(exc).__name__, cause=exc) from exc

        if not response.choices:
            raise ProviderDecodeError(self.name, "response contained no choices")
        return response.choices[0].message.content

    def generate(self, questionnaire: Questionnaire) -> dict[str, Any]:
        if not self.is_configured:
            raise ProviderNotConfigured(self.name, "provider disabled or missing credentials")

        content = self._complete(build_system_prompt(), build_user_message(questionnaire))
        return decode_payload(self.name, content)


def decode_payload(provider: str, content: str | None) -> dict[str, Any]:
    """Decode a raw completion into a JSON object or raise ProviderDecodeError."""
    if not content or not content.strip():
        raise ProviderDecodeError(provider, "empty response body")
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ProviderDecodeError(provider, f"malformed JSON: {exc.msg}", cause=exc) from exc
    if not isinstance(parsed, dict):
        raise ProviderDecodeError(provider, f"expected a JSON object, got {type(parsed).__name__}")
    return parsed
