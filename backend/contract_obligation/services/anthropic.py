"""Anthropic Claude SDK wrapper service.

Provides a singleton AsyncAnthropic client and a single-shot completion
helper for obligation analysis.
"""

from dataclasses import dataclass

from anthropic import AsyncAnthropic

from contract_obligation.config import settings

# Singleton client instance
_client: AsyncAnthropic | None = None


@dataclass
class Completion:
    """Text reply from Claude plus usage for analytics."""

    text: str
    model: str
    input_tokens: int
    output_tokens: int


def get_client() -> AsyncAnthropic:
    """
    Get or create the singleton AsyncAnthropic client.

    Returns:
        The shared AsyncAnthropic client instance.
    """
    global _client
    if _client is None:
        _client = AsyncAnthropic(api_key=settings.anthropic_api_key)
    return _client


async def generate(
    messages: list[dict],
    system_prompt: str | None = None,
    model: str | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
) -> Completion:
    """
    Generate a complete (non-streaming) response from Claude.

    Args:
        messages: List of message dicts with 'role' and 'content' keys.
        system_prompt: Optional system prompt for context.
        model: Claude model to use (defaults to settings.claude_model).
        max_tokens: Maximum tokens in the response.
        temperature: Sampling temperature.

    Returns:
        The concatenated text blocks of the reply with token usage.
    """
    client = get_client()
    response = await client.messages.create(
        model=model or settings.claude_model,
        max_tokens=max_tokens or settings.analysis_max_tokens,
        temperature=settings.analysis_temperature if temperature is None else temperature,
        system=system_prompt or "",
        messages=messages,
    )
    text = "".join(block.text for block in response.content if block.type == "text")
    return Completion(
        text=text,
        model=response.model,
        input_tokens=response.usage.input_tokens,
        output_tokens=response.usage.output_tokens,
    )


async def close_client() -> None:
    """
    Close the singleton client and release resources.

    Should be called during application shutdown for graceful cleanup.
    """
    global _client
    if _client is not None:
        await _client.close()
        _client = None
