"""Completion collaborator: a prompt-in, text-out wrapper around Anthropic.

The pipeline only needs ``invoke(prompt) -> text``.  Deadline and retry
policy live here, not in the classifier or composer.
"""

from __future__ import annotations

from typing import Protocol

from anthropic import AsyncAnthropic

from portfolio_contact.config import Settings
from portfolio_contact.resilience.retry import resilient_api_call

DEFAULT_MAX_TOKENS = 1024


class CompletionService(Protocol):
    """Anything that turns a prompt into generated text."""

    async def invoke(self, prompt: str) -> str: ...


class AnthropicCompletionClient:
    """``CompletionService`` backed by the Anthropic Messages API.

    The SDK's own retries are disabled so the retry budget is applied by
    ``resilient_api_call``; the SDK timeout bounds each attempt.

    Args:
        client: An ``anthropic.AsyncAnthropic`` instance (or compatible mock).
        model: The Anthropic model ID to use.
        max_retries: Retries after the first failed attempt.
        max_tokens: Completion length cap.
    """

    def __init__(
        self,
        client: AsyncAnthropic,
        model: str,
        *,
        max_retries: int = 2,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        self._client = client
        self.model = model
        self._max_retries = max_retries
        self._max_tokens = max_tokens

    async def invoke(self, prompt: str) -> str:
        """Send *prompt* as a single user turn and return the response text.

        Raises:
            anthropic.APIError: When every attempt fails (timeouts surface as
                ``anthropic.APITimeoutError``).
        """

        @resilient_api_call("anthropic", max_retries=self._max_retries)
        async def _create() -> str:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=self._max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
            return "".join(
                block.text for block in response.content if getattr(block, "type", "") == "text"
            )

        return await _create()


def get_anthropic_client(settings: Settings) -> AsyncAnthropic:
    """Create an async Anthropic client with the configured deadline.

    Args:
        settings: Application settings carrying the API key and timeout.

    Returns:
        Configured ``AsyncAnthropic`` instance with SDK retries disabled.
    """
    return AsyncAnthropic(
        api_key=settings.anthropic_api_key.get_secret_value() or None,
        timeout=settings.completion_timeout_seconds,
        max_retries=0,
    )


def build_completion_clients(
    settings: Settings,
    anthropic_client: AsyncAnthropic,
) -> tuple[AnthropicCompletionClient, AnthropicCompletionClient]:
    """Build the classifier and composer completion clients.

    Both share *anthropic_client* but may use different models.

    Returns:
        A ``(classify_client, compose_client)`` tuple.
    """
    classify = AnthropicCompletionClient(
        anthropic_client,
        settings.classify_model,
        max_retries=settings.completion_max_retries,
        max_tokens=16,
    )
    compose = AnthropicCompletionClient(
        anthropic_client,
        settings.compose_model,
        max_retries=settings.completion_max_retries,
    )
    return classify, compose
