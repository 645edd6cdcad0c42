"""
Tests for the provider adapters.

requests.post is mocked; no network access happens.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from polishlanguage.core.errors import ApiError, EmptyResponseError, ProviderRequestError
from polishlanguage.core.providers import (
    MAX_OUTPUT_TOKENS,
    GeminiAdapter,
    OpenAICompatibleAdapter,
    get_adapter,
    redact_api_key,
)
from polishlanguage.core.settings import Settings

POST = "polishlanguage.core.providers.adapters.requests.post"


def make_response(status_code=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    response.text = text
    return response


@pytest.fixture
def openai_settings():
    return Settings(
        provider="openai",
        api_keys={"openai": "sk-test"},
        model="gpt-4o-mini",
        base_url="https://api.example.com/v1/",
    )


@pytest.fixture
def gemini_settings():
    return Settings(
        provider="gemini",
        api_keys={"gemini": "g-key"},
        model="gemini-1.5-flash",
        base_url="https://generativelanguage.googleapis.com",
    )


class TestOpenAICompatibleAdapter:
    def test_returns_trimmed_content(self, openai_settings):
        data = {"choices": [{"message": {"content": "  Hello.  "}}]}
        with patch(POST, return_value=make_response(json_data=data)):
            result = OpenAICompatibleAdapter().transform(
                "Polish:", "hello", openai_settings
            )

        assert result == "Hello."

    def test_request_shape(self, openai_settings):
        data = {"choices": [{"message": {"content": "ok"}}]}
        with patch(POST, return_value=make_response(json_data=data)) as mock_post:
            OpenAICompatibleAdapter().transform(
                "Polish:", "hello", openai_settings, temperature=0.1
            )

        args, kwargs = mock_post.call_args
        assert args[0] == "https://api.example.com/v1/chat/completions"
        assert kwargs["headers"] == {
            "Authorization": "Bearer sk-test",
            "Content-Type": "application/json",
        }
        assert kwargs["json"] == {
            "model": "gpt-4o-mini",
            "messages": [
                {"role": "system", "content": "Polish:"},
                {"role": "user", "content": "hello"},
            ],
            "max_tokens": MAX_OUTPUT_TOKENS,
            "temperature": 0.1,
        }
        assert kwargs["timeout"] is None

    def test_empty_choices(self, openai_settings):
        with patch(POST, return_value=make_response(json_data={"choices": []})):
            with pytest.raises(EmptyResponseError, match="No response from API"):
                OpenAICompatibleAdapter().transform("Polish:", "hello", openai_settings)

    def test_missing_message_content(self, openai_settings):
        data = {"choices": [{"finish_reason": "length"}]}
        with patch(POST, return_value=make_response(json_data=data)):
            with pytest.raises(EmptyResponseError):
                OpenAICompatibleAdapter().transform("Polish:", "hello", openai_settings)

    def test_non_success_status(self, openai_settings):
        response = make_response(status_code=401, text='{"error": "bad key"}')
        with patch(POST, return_value=response):
            with pytest.raises(ApiError) as exc_info:
                OpenAICompatibleAdapter().transform("Polish:", "hello", openai_settings)

        assert exc_info.value.status == 401
        assert exc_info.value.body == '{"error": "bad key"}'
        assert "status: 401" in str(exc_info.value)

    def test_invalid_json(self, openai_settings):
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        with patch(POST, return_value=response):
            with pytest.raises(ProviderRequestError, match="Failed to parse response"):
                OpenAICompatibleAdapter().transform("Polish:", "hello", openai_settings)

    def test_transport_error(self, openai_settings):
        with patch(POST, side_effect=requests.ConnectionError("connection refused")):
            with pytest.raises(ProviderRequestError) as exc_info:
                OpenAICompatibleAdapter().transform("Polish:", "hello", openai_settings)

        assert isinstance(exc_info.value.cause, requests.ConnectionError)


class TestGeminiAdapter:
    def test_returns_trimmed_text(self, gemini_settings):
        data = {"candidates": [{"content": {"parts": [{"text": "Bonjour\n"}]}}]}
        with patch(POST, return_value=make_response(json_data=data)):
            result = GeminiAdapter().transform("Translate:", "Hello", gemini_settings)

        assert result == "Bonjour"

    def test_request_shape(self, gemini_settings):
        data = {"candidates": [{"content": {"parts": [{"text": "ok"}]}}]}
        with patch(POST, return_value=make_response(json_data=data)) as mock_post:
            GeminiAdapter().transform(
                "Translate:", "Hello", gemini_settings, temperature=0.1
            )

        args, kwargs = mock_post.call_args
        assert args[0] == (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "gemini-1.5-flash:generateContent?key=g-key"
        )
        assert kwargs["headers"] == {"Content-Type": "application/json"}
        assert kwargs["json"] == {
            "contents": [{"parts": [{"text": "Translate:\n\nHello"}]}],
            "generationConfig": {
                "temperature": 0.1,
                "maxOutputTokens": MAX_OUTPUT_TOKENS,
            },
        }

    def test_full_endpoint_base_url_used_as_is(self, gemini_settings):
        gemini_settings.base_url = (
            "https://proxy.example.com/v1beta/models/custom:generateContent"
        )

        url = GeminiAdapter().build_url(gemini_settings)

        assert url == (
            "https://proxy.example.com/v1beta/models/custom:generateContent?key=g-key"
        )

    def test_api_key_is_url_encoded(self, gemini_settings):
        gemini_settings.api_keys["gemini"] = "a&b=c"

        url = GeminiAdapter().build_url(gemini_settings)

        assert url.endswith("?key=a%26b%3Dc")

    def test_no_candidates(self, gemini_settings):
        with patch(POST, return_value=make_response(json_data={"candidates": []})):
            with pytest.raises(EmptyResponseError, match="No response from API"):
                GeminiAdapter().transform("Translate:", "Hello", gemini_settings)

    def test_non_success_status(self, gemini_settings):
        response = make_response(status_code=503, text="overloaded")
        with patch(POST, return_value=response):
            with pytest.raises(ApiError) as exc_info:
                GeminiAdapter().transform("Translate:", "Hello", gemini_settings)

        assert exc_info.value.status == 503
        assert exc_info.value.body == "overloaded"

    def test_transport_error_does_not_leak_key(self, gemini_settings):
        error = requests.ConnectionError(
            "Max retries exceeded with url: /v1beta/models/x:generateContent?key=g-key"
        )
        with patch(POST, side_effect=error):
            with pytest.raises(ProviderRequestError) as exc_info:
                GeminiAdapter().transform("Translate:", "Hello", gemini_settings)

        assert "g-key" not in str(exc_info.value)
        assert "key=***" in str(exc_info.value)


class TestGetAdapter:
    def test_known_providers(self):
        assert isinstance(get_adapter("openai"), OpenAICompatibleAdapter)
        assert isinstance(get_adapter("gemini"), GeminiAdapter)

    def test_unknown_provider_uses_openai_compatible(self):
        assert isinstance(get_adapter("groq"), OpenAICompatibleAdapter)

    def test_timeout_passed_through(self):
        assert get_adapter("gemini", timeout=30).timeout == 30


class TestRedactApiKey:
    def test_masks_key_parameter(self):
        assert redact_api_key("https://x/y?key=secret&alt=json") == (
            "https://x/y?key=***&alt=json"
        )

    def test_leaves_other_text_alone(self):
        assert redact_api_key("https://api.openai.com/v1") == "https://api.openai.com/v1"
