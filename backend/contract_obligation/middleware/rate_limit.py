"""Rate limiting using SlowAPI.

The service has no user accounts, so every limit is keyed on the client IP.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from contract_obligation.config import settings

logger = logging.getLogger(__name__)


def get_ip_key(request: Request) -> str:
    """Rate-limit key for a request: the client IP address."""
    return f"ip:{get_remote_address(request)}"


# In-memory storage by default; point rate_limit_storage_uri at Redis when
# running more than one worker
limiter = Limiter(
    key_func=get_ip_key,
    storage_uri=settings.rate_limit_storage_uri,
    default_limits=[f"{settings.rate_limit_general_per_minute}/minute"],
    headers_enabled=True,  # Include X-RateLimit-* headers in responses
    enabled=settings.rate_limit_enabled,
)


def rate_limit_extract():
    """Decorator for the upload/extract endpoint (LLM calls are expensive)."""
    return limiter.limit(f"{settings.rate_limit_extract_per_minute}/minute")


def rate_limit_payment():
    """Decorator for payment initialization and verification."""
    return limiter.limit(f"{settings.rate_limit_payment_per_minute}/minute")


def rate_limit_unauthenticated():
    """Decorator for other public endpoints."""
    return limiter.limit(f"{settings.rate_limit_unauthenticated_per_minute}/minute")
