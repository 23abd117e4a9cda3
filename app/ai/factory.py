import os

from app.ai.config import PROVIDER_SPECS, AIConfig, AIProvider, load_ai_config
from app.ai.types import AIClient, ProviderConfigError

from app.ai.providers.openai_provider import OpenAICompatibleProvider


def _api_key_for(provider: AIProvider) -> str:
    spec = PROVIDER_SPECS[provider]
    key = (os.getenv(spec.api_key_env) or os.getenv("AI_API_KEY") or "").strip()
    if not key:
        raise ProviderConfigError(
            f"{spec.api_key_env} (or AI_API_KEY) is not defined in environment variables"
        )
    return key


def get_ai_client(config: AIConfig | None = None) -> AIClient:
    cfg = config or load_ai_config()

    try:
        provider = AIProvider(cfg.provider)
    except ValueError:
        raise ProviderConfigError(f"Unsupported AI_PROVIDER='{cfg.provider}'") from None

    spec = PROVIDER_SPECS[provider]
    return OpenAICompatibleProvider(
        model=cfg.model,
        api_key=_api_key_for(provider),
        base_url=cfg.base_url or spec.base_url,
        timeout_s=cfg.timeout_s,
        max_retries=cfg.max_retries,
        temperature=cfg.temperature,
        max_tokens=cfg.max_tokens,
    )
