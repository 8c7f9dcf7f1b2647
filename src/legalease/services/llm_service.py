"""
LLM service for document analysis, question answering and comparison.

Supports Claude (Anthropic) and GPT-4o (OpenAI) with automatic fallback.
The service only moves text: prompts in, raw completions out. Every provider
error, timeout or missing configuration surfaces as ``BackendFailure``.
"""

import asyncio
from functools import lru_cache

import structlog
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI
from tenacity import retry, stop_after_attempt, wait_exponential

from legalease.config import get_settings
from legalease.exceptions import BackendFailure

logger = structlog.get_logger(__name__)


class LLMService:
    """
    Generative backend client.

    Supports Claude Sonnet (primary) and GPT-4o (fallback).
    """

    def __init__(self):
        settings = get_settings()
        self.settings = settings

        # Initialize clients
        self._anthropic: AsyncAnthropic | None = None
        self._openai: AsyncOpenAI | None = None

        if settings.anthropic_api_key:
            self._anthropic = AsyncAnthropic(api_key=settings.anthropic_api_key)
        if settings.openai_api_key:
            self._openai = AsyncOpenAI(api_key=settings.openai_api_key)

        self.primary_provider = settings.primary_llm_provider
        self.primary_model = settings.primary_llm_model
        self.fallback_provider = settings.fallback_llm_provider
        self.fallback_model = settings.fallback_llm_model

    @property
    def anthropic(self) -> AsyncAnthropic:
        if not self._anthropic:
            raise BackendFailure("Anthropic client not configured. Set ANTHROPIC_API_KEY.")
        return self._anthropic

    @property
    def openai(self) -> AsyncOpenAI:
        if not self._openai:
            raise BackendFailure("OpenAI client not configured. Set OPENAI_API_KEY.")
        return self._openai

    @property
    def is_configured(self) -> bool:
        return self._provider_available(self.primary_provider) or self._provider_available(
            self.fallback_provider
        )

    def _provider_available(self, provider: str) -> bool:
        if provider == "anthropic":
            return self._anthropic is not None
        return self._openai is not None

    def health_check(self) -> dict[str, bool]:
        """Report which providers have credentials configured."""
        return {
            "anthropic": self._anthropic is not None,
            "openai": self._openai is not None,
        }

    # =========================================================================
    # Core LLM Calls
    # =========================================================================

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _call_anthropic(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int | None = None,
    ) -> str:
        """Call Anthropic Claude API."""
        response = await asyncio.wait_for(
            self.anthropic.messages.create(
                model=model,
                max_tokens=max_tokens or self.settings.llm_max_tokens,
                temperature=self.settings.llm_temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            ),
            timeout=self.settings.llm_timeout,
        )
        return response.content[0].text

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _call_openai(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int | None = None,
    ) -> str:
        """Call OpenAI GPT-4o API."""
        response = await asyncio.wait_for(
            self.openai.chat.completions.create(
                model=model,
                max_tokens=max_tokens or self.settings.llm_max_tokens,
                temperature=self.settings.llm_temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            ),
            timeout=self.settings.llm_timeout,
        )
        return response.choices[0].message.content or ""

    async def _call(
        self,
        provider: str,
        model: str,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int | None,
    ) -> str:
        if provider == "anthropic":
            return await self._call_anthropic(model, system_prompt, user_prompt, max_tokens)
        return await self._call_openai(model, system_prompt, user_prompt, max_tokens)

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int | None = None,
        use_fallback: bool = True,
    ) -> tuple[str, str]:
        """
        Generate LLM response with automatic fallback.

        Returns (response_text, model_used).
        Raises BackendFailure when no provider produced a response.
        """
        attempts = [(self.primary_provider, self.primary_model)]
        if use_fallback:
            attempts.append((self.fallback_provider, self.fallback_model))

        last_error: Exception | None = None
        for provider, model in attempts:
            if not self._provider_available(provider):
                continue
            try:
                response = await self._call(
                    provider, model, system_prompt, user_prompt, max_tokens
                )
                logger.debug("llm_response_received", provider=provider, model=model)
                return response, model
            except asyncio.TimeoutError as e:
                logger.warning("llm_call_timed_out", provider=provider, model=model)
                last_error = e
            except Exception as e:
                logger.warning("llm_call_failed", provider=provider, model=model, error=str(e))
                last_error = e

        if last_error is None:
            raise BackendFailure("No LLM provider available")
        raise BackendFailure(f"All LLM providers failed: {last_error}") from last_error


@lru_cache()
def get_llm_service() -> LLMService:
    """Get cached LLM service instance."""
    return LLMService()
