"""Tests for legalease/services/llm_service.py — generate, retry, fallback, timeout."""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock
from tenacity import wait_none

from legalease.exceptions import BackendFailure
from legalease.services.llm_service import LLMService, get_llm_service


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    """Retry immediately instead of backing off."""
    monkeypatch.setattr(LLMService._call_anthropic.retry, "wait", wait_none())
    monkeypatch.setattr(LLMService._call_openai.retry, "wait", wait_none())


@pytest.fixture
def llm_service():
    """LLMService with mocked Anthropic/OpenAI clients."""
    mock_settings = MagicMock()
    mock_settings.llm_max_tokens = 1024
    mock_settings.llm_temperature = 0.0
    mock_settings.llm_timeout = 5.0

    svc = LLMService.__new__(LLMService)
    svc.settings = mock_settings
    svc.primary_provider = "anthropic"
    svc.primary_model = "claude-test"
    svc.fallback_provider = "openai"
    svc.fallback_model = "gpt-test"

    # Mock Anthropic client
    mock_anthropic = MagicMock()
    mock_response = MagicMock()
    mock_response.content = [MagicMock(text="Test response")]
    mock_anthropic.messages.create = AsyncMock(return_value=mock_response)
    svc._anthropic = mock_anthropic

    # Mock OpenAI client
    mock_openai = MagicMock()
    mock_oi_response = MagicMock()
    mock_oi_response.choices = [MagicMock(message=MagicMock(content="Fallback response"))]
    mock_openai.chat.completions.create = AsyncMock(return_value=mock_oi_response)
    svc._openai = mock_openai

    return svc


class TestGenerate:

    async def test_returns_text(self, llm_service):
        text, model = await llm_service.generate("system", "user")
        assert text == "Test response"
        assert model == "claude-test"

    async def test_passes_prompts(self, llm_service):
        await llm_service.generate("system", "user", max_tokens=50)
        kwargs = llm_service._anthropic.messages.create.call_args.kwargs
        assert kwargs["system"] == "system"
        assert kwargs["messages"] == [{"role": "user", "content": "user"}]
        assert kwargs["max_tokens"] == 50
        assert kwargs["model"] == "claude-test"

    async def test_retry_on_api_error(self, llm_service):
        """One failure then success."""
        good = llm_service._anthropic.messages.create.return_value
        llm_service._anthropic.messages.create.side_effect = [Exception("API error"), good]
        text, _ = await llm_service.generate("system", "user")
        assert text == "Test response"
        assert llm_service._anthropic.messages.create.call_count == 2

    async def test_fallback_to_openai(self, llm_service):
        llm_service._anthropic.messages.create.side_effect = Exception("Always fails")
        text, model = await llm_service.generate("system", "user")
        assert text == "Fallback response"
        assert model == "gpt-test"
        assert llm_service._anthropic.messages.create.call_count == 3

    async def test_no_fallback_when_disabled(self, llm_service):
        llm_service._anthropic.messages.create.side_effect = Exception("Always fails")
        with pytest.raises(BackendFailure):
            await llm_service.generate("system", "user", use_fallback=False)
        llm_service._openai.chat.completions.create.assert_not_called()

    async def test_all_providers_fail(self, llm_service):
        llm_service._anthropic.messages.create.side_effect = Exception("down")
        llm_service._openai.chat.completions.create.side_effect = Exception("down too")
        with pytest.raises(BackendFailure) as exc_info:
            await llm_service.generate("system", "user")
        assert "down too" in str(exc_info.value)

    async def test_no_provider_configured(self, llm_service):
        llm_service._anthropic = None
        llm_service._openai = None
        with pytest.raises(BackendFailure, match="No LLM provider available"):
            await llm_service.generate("system", "user")

    async def test_timeout_is_backend_failure(self, llm_service):
        async def slow(**kwargs):
            await asyncio.sleep(1)

        llm_service.settings.llm_timeout = 0.01
        llm_service._anthropic.messages.create.side_effect = slow
        llm_service._openai.chat.completions.create.side_effect = slow
        with pytest.raises(BackendFailure):
            await llm_service.generate("system", "user")

    async def test_timeout_falls_back(self, llm_service):
        async def slow(**kwargs):
            await asyncio.sleep(1)

        llm_service.settings.llm_timeout = 0.01
        llm_service._anthropic.messages.create.side_effect = slow
        text, model = await llm_service.generate("system", "user")
        assert model == "gpt-test"


class TestConfiguration:

    def test_no_keys_means_no_clients(self):
        svc = LLMService()
        assert svc.health_check() == {"anthropic": False, "openai": False}
        assert not svc.is_configured

    def test_keys_create_clients(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        svc = LLMService()
        assert svc.health_check() == {"anthropic": True, "openai": False}
        assert svc.is_configured

    def test_missing_client_property_raises(self):
        svc = LLMService()
        with pytest.raises(BackendFailure):
            svc.anthropic

    def test_singleton(self):
        assert get_llm_service() is get_llm_service()
