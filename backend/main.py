import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from contract_obligation.config import settings
from contract_obligation.middleware import RequestSizeLimitMiddleware, limiter
from contract_obligation.routes import debug, extraction, health, payments, pricing, results
from contract_obligation.services.anthropic import close_client as close_anthropic_client
from contract_obligation.services.paystack import close_http_client as close_paystack_client
from contract_obligation.services.posthog import shutdown_posthog
from contract_obligation.services.results_store import get_result_store

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


class CSRFProtectionMiddleware(BaseHTTPMiddleware):
    """Validate Origin header for state-changing requests to prevent CSRF."""

    async def dispatch(self, request: Request, call_next):
        # Only check state-changing methods
        if request.method in ("POST", "PUT", "DELETE", "PATCH"):
            origin = request.headers.get("origin")
            # Allow requests without Origin (same-origin, non-browser)
            if origin and origin not in settings.cors_origins:
                return JSONResponse(
                    status_code=403,
                    content={"detail": "CSRF validation failed: invalid origin"},
                )
        return await call_next(request)


async def sweep_expired_results(interval_seconds: float) -> None:
    """Evict expired results until cancelled."""
    store = get_result_store()
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            store.sweep_expired()
        except Exception as e:
            logger.error(f"Result sweep failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    sweeper = asyncio.create_task(sweep_expired_results(settings.result_sweep_interval_seconds))
    yield
    # Shutdown - stop the sweeper and clean up SDK clients
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    await close_anthropic_client()
    await close_paystack_client()
    shutdown_posthog()


app = FastAPI(
    title="ContractObligation API",
    description="Extract contract obligations with source locations, behind a one-time payment",
    version="0.1.0",
    lifespan=lifespan,
)

# Rate limiter state (required by slowapi)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Request size limit middleware (rejects oversized uploads early)
app.add_middleware(RequestSizeLimitMiddleware)

# CSRF protection - validates Origin header for state-changing requests
app.add_middleware(CSRFProtectionMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(extraction.router, prefix="/api", tags=["extraction"])
app.include_router(results.router, prefix="/api/results", tags=["results"])
app.include_router(payments.router, prefix="/api/payments", tags=["payments"])
app.include_router(pricing.router, prefix="/api/pricing", tags=["pricing"])
app.include_router(debug.router, prefix="/api/debug", tags=["debug"])
app.include_router(health.router, prefix="/api/health", tags=["health"])
