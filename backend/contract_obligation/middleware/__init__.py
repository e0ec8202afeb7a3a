"""Middleware components for request validation and protection."""

from contract_obligation.middleware.rate_limit import get_ip_key, limiter
from contract_obligation.middleware.size_limit import RequestSizeLimitMiddleware

__all__ = [
    "RequestSizeLimitMiddleware",
    "limiter",
    "get_ip_key",
]
