from unittest.mock import patch

import pytest

from ingredex.config.settings import Settings
from ingredex.llm.example_client_adapter import ExampleClientAdapter
from ingredex.llm.factory import LLMClientFactory
from ingredex.llm.openai_client_adapter import OpenAIClientAdapter


def _make_settings(**overrides: object) -> Settings:
    defaults: dict[str, object] = {"llm_provider": "openai", "llm_api_key": "k"}
    defaults.update(overrides)
    return Settings(**defaults)


class TestLLMClientFactory:
    def test_example_provider_needs_no_network(self) -> None:
        client = LLMClientFactory.create(_make_settings(llm_provider="example"))
        assert isinstance(client, ExampleClientAdapter)

    def test_openai_provider(self) -> None:
        with patch("ingredex.llm.openai_client_adapter.openai.OpenAI") as mock_openai:
            client = LLMClientFactory.create(_make_settings(llm_timeout_seconds=12))
        assert isinstance(client, OpenAIClientAdapter)
        mock_openai.assert_called_once_with(api_key="k", timeout=12, base_url=None)

    def test_named_provider_uses_default_base_url(self) -> None:
        with patch("ingredex.llm.openai_client_adapter.openai.OpenAI") as mock_openai:
            LLMClientFactory.create(_make_settings(llm_provider="OpenRouter"))
        assert mock_openai.call_args.kwargs["base_url"] == "https://openrouter.ai/api/v1"

    def test_base_url_override(self) -> None:
        with patch("ingredex.llm.openai_client_adapter.openai.OpenAI") as mock_openai:
            LLMClientFactory.create(_make_settings(llm_provider="ollama", llm_base_url="http://gpu:11434/v1"))
        assert mock_openai.call_args.kwargs["base_url"] == "http://gpu:11434/v1"

    def test_openai_compatible_requires_base_url(self) -> None:
        with pytest.raises(ValueError, match="llm_base_url is required"):
            LLMClientFactory.create(_make_settings(llm_provider="openai_compatible"))

    def test_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="Unknown LLM provider 'acme'"):
            LLMClientFactory.create(_make_settings(llm_provider="acme"))

    def test_is_offline(self) -> None:
        assert LLMClientFactory.is_offline(_make_settings(llm_provider="example")) is True
        assert LLMClientFactory.is_offline(_make_settings()) is False

    @pytest.mark.parametrize(("configured", "expected"), [(0.7, 0.2), (-1.0, 0.0), (0.1, 0.1)])
    def test_temperature_is_clamped(self, configured: float, expected: float) -> None:
        assert LLMClientFactory.resolve_temperature(_make_settings(llm_temperature=configured)) == expected
