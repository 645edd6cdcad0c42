from .adapters import (
    MAX_OUTPUT_TOKENS,
    PROVIDERS,
    GeminiAdapter,
    OpenAICompatibleAdapter,
    ProviderAdapter,
    ProviderRequest,
    ProviderResult,
    get_adapter,
    redact_api_key,
)

__all__ = [
    "ProviderAdapter",
    "OpenAICompatibleAdapter",
    "GeminiAdapter",
    "ProviderRequest",
    "ProviderResult",
    "PROVIDERS",
    "MAX_OUTPUT_TOKENS",
    "get_adapter",
    "redact_api_key",
]
