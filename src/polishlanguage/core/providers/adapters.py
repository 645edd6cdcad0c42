"""
Provider adapters for the supported LLM backends.

Each adapter turns (instruction, text, settings) into one backend-specific HTTP
call and maps the response back to plain text. The adapter is chosen solely by
``settings.provider``; unknown ids use the OpenAI-compatible adapter.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Type
from urllib.parse import quote

import requests

from ...utils.logger import get_logger
from ..errors import ApiError, EmptyResponseError, ProviderRequestError
from ..settings import Settings
from ..settings.config import REQUEST_TIMEOUT_SECONDS

logger = get_logger(__name__)

MAX_OUTPUT_TOKENS = 1000
GEMINI_ENDPOINT_MARKER = "generateContent"

# provider id -> display name
PROVIDERS: Dict[str, str] = {
    "openai": "OpenAI (compatible)",
    "gemini": "Google Gemini",
}

_KEY_PARAM_RE = re.compile(r"(key=)[^&\s'\"]+")


def redact_api_key(value: str) -> str:
    """Mask the ``key`` query parameter so URLs can be logged safely."""
    return _KEY_PARAM_RE.sub(r"\1***", value)


@dataclass
class ProviderRequest:
    url: str
    payload: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class ProviderResult:
    text: str
    provider: str


class ProviderAdapter(ABC):
    """
    Base class for provider adapters.

    Subclasses own the request builder and the response parser; sending,
    status checking and JSON decoding are shared.
    """

    provider_id: str = ""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    @abstractmethod
    def build_request(
        self, instruction: str, text: str, settings: Settings, temperature: float
    ) -> ProviderRequest: ...

    @abstractmethod
    def parse_response(self, data: Any) -> str: ...

    def transform(
        self,
        instruction: str,
        text: str,
        settings: Settings,
        temperature: float = 0.3,
    ) -> str:
        return self.send(instruction, text, settings, temperature).text

    def send(
        self, instruction: str, text: str, settings: Settings, temperature: float
    ) -> ProviderResult:
        request = self.build_request(instruction, text, settings, temperature)

        logger.info(
            f"Sending {len(text)} chars to {self.provider_id} "
            f"(model={settings.model}) at {redact_api_key(request.url)}"
        )

        try:
            response = requests.post(
                request.url,
                headers=request.headers,
                json=request.payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ProviderRequestError(
                f"Request failed: {redact_api_key(str(e))}", e
            ) from None

        if not 200 <= response.status_code < 300:
            raise ApiError(response.status_code, _read_body(response))

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderRequestError(f"Failed to parse response: {e}", e) from e

        result = ProviderResult(text=self.parse_response(data), provider=self.provider_id)
        logger.info(f"{self.provider_id} returned {len(result.text)} chars")
        return result


class OpenAICompatibleAdapter(ProviderAdapter):
    """Chat-completions API: system instruction + user text, bearer auth."""

    provider_id = "openai"

    def build_request(
        self, instruction: str, text: str, settings: Settings, temperature: float
    ) -> ProviderRequest:
        return ProviderRequest(
            url=f"{settings.base_url.rstrip('/')}/chat/completions",
            headers={
                "Authorization": f"Bearer {settings.resolve_api_key()}",
                "Content-Type": "application/json",
            },
            payload={
                "model": settings.model,
                "messages": [
                    {"role": "system", "content": instruction},
                    {"role": "user", "content": text},
                ],
                "max_tokens": MAX_OUTPUT_TOKENS,
                "temperature": temperature,
            },
        )

    def parse_response(self, data: Any) -> str:
        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices:
            raise EmptyResponseError()

        try:
            content = choices[0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise EmptyResponseError(
                "Missing choices/message/content in response"
            ) from None

        if not isinstance(content, str):
            raise EmptyResponseError("Missing choices/message/content in response")
        return content.strip()


class GeminiAdapter(ProviderAdapter):
    """generateContent API: one combined prompt, key passed as a query parameter."""

    provider_id = "gemini"

    def build_url(self, settings: Settings) -> str:
        key = quote(settings.resolve_api_key(), safe="")
        if GEMINI_ENDPOINT_MARKER in settings.base_url:
            return f"{settings.base_url}?key={key}"
        return (
            f"{settings.base_url.rstrip('/')}/v1beta/models/"
            f"{settings.model}:{GEMINI_ENDPOINT_MARKER}?key={key}"
        )

    def build_request(
        self, instruction: str, text: str, settings: Settings, temperature: float
    ) -> ProviderRequest:
        combined_prompt = f"{instruction}\n\n{text}"
        return ProviderRequest(
            url=self.build_url(settings),
            headers={"Content-Type": "application/json"},
            payload={
                "contents": [{"parts": [{"text": combined_prompt}]}],
                "generationConfig": {
                    "temperature": temperature,
                    "maxOutputTokens": MAX_OUTPUT_TOKENS,
                },
            },
        )

    def parse_response(self, data: Any) -> str:
        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not candidates:
            raise EmptyResponseError()

        try:
            part_text = candidates[0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise EmptyResponseError(
                "Missing candidates/content/parts in response"
            ) from None

        if not isinstance(part_text, str):
            raise EmptyResponseError("Missing candidates/content/parts in response")
        return part_text.strip()


_ADAPTERS: Dict[str, Type[ProviderAdapter]] = {
    OpenAICompatibleAdapter.provider_id: OpenAICompatibleAdapter,
    GeminiAdapter.provider_id: GeminiAdapter,
}


def get_adapter(
    provider_id: str, timeout: Optional[float] = REQUEST_TIMEOUT_SECONDS
) -> ProviderAdapter:
    adapter_cls = _ADAPTERS.get(provider_id)
    if adapter_cls is None:
        logger.debug(
            f"Unknown provider '{provider_id}', using the OpenAI-compatible adapter"
        )
        adapter_cls = OpenAICompatibleAdapter
    return adapter_cls(timeout=timeout)


def _read_body(response: requests.Response) -> str:
    try:
        return response.text
    except (requests.RequestException, UnicodeDecodeError, LookupError):
        return ""
