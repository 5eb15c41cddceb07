from __future__ import annotations

import logging

from .base import ProviderAdapter
from .config import ProviderConfig, load_provider_configs
from .groq_provider import GroqAdapter
from .openai_provider import OpenAIAdapter

logger = logging.getLogger(__name__)

PROVIDER_CLASSES: dict[str, type[ProviderAdapter]] = {
    "openai": OpenAIAdapter,
    "groq": GroqAdapter,
}


def build_adapters(configs: list[ProviderConfig] | None = None) -> list[ProviderAdapter]:
    """Instantiate adapters in the configured priority order."""
    if configs is None:
        configs = load_provider_configs()

    adapters: list[ProviderAdapter] = []
    for config in configs:
        cls = PROVIDER_CLASSES.get(config.name)
        if cls is None:
            logger.warning("Unknown LLM provider %r in provider order, ignoring", config.name)
            continue
        adapters.append(cls(config))
    return adapters
