from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

DEFAULT_PROVIDER_ORDER = ("openai", "groq")
DEFAULT_TIMEOUT = 20.0

_DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "groq": "llama-3.3-70b-versatile",
}


@dataclass(frozen=True)
class ProviderConfig:
    name: str
    api_key: str = ""
    model: str = ""
    base_url: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    max_tokens: int = 2048
    temperature: float = 0.7
    enabled: bool = True


def _env_flag(name: str, default: bool = True) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off", ""}


def _api_key_for(name: str) -> str:
    if name == "openai":
        return os.getenv("OPENAI_API_KEY") or os.getenv("OPENAI_KEY", "")
    return os.getenv(f"{name.upper()}_API_KEY", "")


def provider_order() -> tuple[str, ...]:
    raw = os.getenv("LLM_PROVIDER_ORDER", "")
    names = tuple(n.strip().lower() for n in raw.split(",") if n.strip())
    return names or DEFAULT_PROVIDER_ORDER


def load_provider_configs() -> list[ProviderConfig]:
    """
    Build one ProviderConfig per provider, in priority order, from the
    environment. Call once at startup and pass the result to the adapters.
    """
    enabled = _env_flag("LLM_ENABLED")
    timeout = float(os.getenv("LLM_TIMEOUT_SECONDS", DEFAULT_TIMEOUT))

    configs: list[ProviderConfig] = []
    for name in provider_order():
        prefix = name.upper()
        configs.append(ProviderConfig(
            name=name,
            api_key=_api_key_for(name),
            model=os.getenv(f"{prefix}_MODEL", _DEFAULT_MODELS.get(name, "")),
            base_url=os.getenv(f"{prefix}_BASE_URL") or None,
            timeout=timeout,
            enabled=enabled,
        ))
    return configs
