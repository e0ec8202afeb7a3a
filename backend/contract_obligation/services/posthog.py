"""PostHog analytics service.

Tracks Claude API calls (tokens, latency, model) and product funnel events
such as completed extractions and verified payments.
"""

import logging
import time
from typing import Any

from contract_obligation.config import settings

logger = logging.getLogger(__name__)

# Singleton PostHog client
_posthog_client = None


def get_posthog_client():
    """
    Get or create the singleton PostHog client.

    Returns:
        The shared PostHog client instance, or None if disabled/not configured.
    """
    global _posthog_client
    if settings.posthog_enabled and settings.posthog_api_key:
        if _posthog_client is None:
            from posthog import Posthog

            _posthog_client = Posthog(
                settings.posthog_api_key,
                host=settings.posthog_host,
            )
        return _posthog_client
    return None


def shutdown_posthog() -> None:
    """
    Shutdown the PostHog client gracefully.

    Should be called during application shutdown.
    """
    global _posthog_client
    if _posthog_client is not None:
        _posthog_client.shutdown()
        _posthog_client = None


def track_event(
    distinct_id: str,
    event: str,
    properties: dict[str, Any] | None = None,
) -> None:
    """
    Track a product event (e.g. "extraction_completed", "payment_verified").

    Args:
        distinct_id: Payment reference, email, or "anonymous"
        event: Event name
        properties: Additional custom properties
    """
    client = get_posthog_client()
    if client is None:
        return

    client.capture(
        distinct_id=distinct_id,
        event=event,
        properties=properties or {},
    )
    logger.debug(f"PostHog: tracked {event} for {distinct_id}")


def track_llm_generation(
    distinct_id: str,
    model: str,
    input_tokens: int,
    output_tokens: int,
    latency_ms: float,
    properties: dict[str, Any] | None = None,
) -> None:
    """
    Track an LLM generation event in PostHog.

    Args:
        distinct_id: Per-upload analytics id or "anonymous"
        model: Claude model used (e.g., "claude-sonnet-4-5-20250929")
        input_tokens: Number of input tokens
        output_tokens: Number of output tokens
        latency_ms: Response latency in milliseconds
        properties: Additional custom properties (e.g., obligation count)
    """
    client = get_posthog_client()
    if client is None:
        return

    # PostHog expects latency in seconds
    latency_seconds = latency_ms / 1000.0

    event_properties = {
        "$ai_model": model,
        "$ai_provider": "anthropic",
        "$ai_input_tokens": input_tokens,
        "$ai_output_tokens": output_tokens,
        "$ai_latency": latency_seconds,
    }

    if properties:
        event_properties.update(properties)

    client.capture(
        distinct_id=distinct_id,
        event="$ai_generation",
        properties=event_properties,
    )
    logger.info(
        f"PostHog: tracked $ai_generation for {distinct_id} - "
        f"{input_tokens} in / {output_tokens} out tokens, {latency_seconds:.2f}s"
    )


class LLMTimer:
    """Context manager for timing LLM calls."""

    def __init__(self):
        self.start_time: float = 0
        self.end_time: float = 0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.end_time = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (self.end_time - self.start_time) * 1000
