import logging
from typing import Dict, Tuple

from chartgpt.core.config import settings
from chartgpt.core.llm.base import BaseLLM
from chartgpt.core.llm.providers.anthropic import AnthropicProvider
from chartgpt.core.llm.providers.openai import OpenAIProvider
from chartgpt.core.llm.providers.xai import XaiProvider

logger = logging.getLogger(__name__)


PROVIDER_ALIASES = {
    "grok": "xai",
    "claude": "anthropic",
}

LLM_REGISTRY = {
    "openai": OpenAIProvider,
    "xai": XaiProvider,
    "anthropic": AnthropicProvider,
}

PROVIDER_CONFIG: Dict[str, dict[str, str]] = {
    "openai": {
        "api_key_attr": "OPENAI_API_KEY",
    },
    "xai": {
        "api_key_attr": "XAI_API_KEY",
    },
    "anthropic": {
        "api_key_attr": "ANTHROPIC_API_KEY",
    },
}

# Settings attribute holding the model override for each call role
ROLE_MODEL_ATTRS = {
    "classifier": "CHART_CLASSIFIER_MODEL",
    "generator": "CHART_GENERATOR_MODEL",
}


# cache instance per (provider, model); only server-keyed instances are cached
_instances: Dict[Tuple[str, str], BaseLLM] = {}


def _resolve_model(role: str) -> str:
    attr = ROLE_MODEL_ATTRS.get(role)
    if attr:
        val = getattr(settings, attr, "")
        if val:
            return str(val)
    return str(settings.CHART_DEFAULT_MODEL)


def _resolve_api_key(provider: str) -> str:
    provider = PROVIDER_ALIASES.get(provider, provider)
    cfg = PROVIDER_CONFIG.get(provider, {})
    attr = cfg.get("api_key_attr", "")
    if attr:
        val = getattr(settings, attr, "")
        if val:
            return str(val)
    return ""


def create_llm(
    provider: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
    role: str = "default",
    use_cache: bool = True,
) -> BaseLLM:
    """Build (or reuse) a provider client.

    A caller-supplied ``api_key`` takes precedence over the server key for the
    provider. Such instances are never cached, so one user's key can't leak
    into another request.
    """
    provider = (provider or settings.CHART_DEFAULT_LLM or "").strip().lower()
    provider = PROVIDER_ALIASES.get(provider, provider)
    model = model or _resolve_model(role)

    if provider not in LLM_REGISTRY:
        raise ValueError(f"Unsupported LLM provider: {provider}")

    user_key = (api_key or "").strip()
    if user_key:
        use_cache = False
    resolved_key = user_key or _resolve_api_key(provider)
    if not resolved_key:
        attr = PROVIDER_CONFIG.get(provider, {}).get("api_key_attr", "")
        hint = f" Set {attr} in env or pass an API key." if attr else ""
        raise ValueError(f"Missing API key for provider '{provider}'.{hint}")
    key = (provider, model)

    if use_cache and key in _instances:
        return _instances[key]

    llm_class = LLM_REGISTRY[provider]
    logger.debug(
        "Creating %s client for model %s (%s key)",
        provider,
        model,
        "user" if user_key else "server",
    )

    instance = llm_class(
        api_key=resolved_key,
        model=model,
    )

    if use_cache:
        _instances[key] = instance

    return instance


def clear_llm_cache() -> None:
    """Clear cached LLM instances so next call picks up new config."""
    _instances.clear()
