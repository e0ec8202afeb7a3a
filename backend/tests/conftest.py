"""Shared fixtures for unit and route tests."""

import os
from unittest.mock import AsyncMock

import pytest

# Override settings before importing app modules
os.environ["ANTHROPIC_API_KEY"] = "test-anthropic-key"
os.environ["PAYSTACK_SECRET_KEY"] = "sk_test_secret"
os.environ["POSTHOG_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from fastapi.testclient import TestClient

from contract_obligation.routes.extraction import get_obligation_analyzer
from contract_obligation.services.attribution import CandidateObligation
from contract_obligation.services.paystack import Transaction, get_paystack_service
from contract_obligation.services.results_store import InMemoryResultStore, get_result_store
from main import app

SAMPLE_CONTRACT = (
    "--- Page 1 ---\n"
    "Party A shall pay $500 within 30 days.\n"
    "\n"
    "--- Page 2 ---\n"
    "Confidentiality survives termination.\n"
)


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sample_contract() -> str:
    return SAMPLE_CONTRACT


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> InMemoryResultStore:
    return InMemoryResultStore(ttl_seconds=3600, clock=clock)


@pytest.fixture
def mock_analyzer():
    """Analyzer returning two candidates quoted from SAMPLE_CONTRACT."""
    analyzer = AsyncMock()
    analyzer.analyze.return_value = [
        CandidateObligation(
            description="Pay $500",
            responsible_party="Party A",
            deadline="within 30 days",
            source_text="Party A shall pay $500 within 30 days.",
            risk_level="High",
            risk_explanation="Short payment window.",
        ),
        CandidateObligation(
            description="Keep information confidential",
            responsible_party="Both Parties",
            source_text="Confidentiality survives termination.",
        ),
    ]
    return analyzer


@pytest.fixture
def mock_paystack():
    """Paystack service whose calls are configured per test."""
    paystack = AsyncMock()
    paystack.verify_transaction.return_value = Transaction(
        reference="PSK_123",
        status="abandoned",
        amount=9000,
        metadata={},
        raw={"reference": "PSK_123", "status": "abandoned"},
    )
    return paystack


@pytest.fixture
def client(store, mock_analyzer, mock_paystack):
    """Test client with the store, analyzer and payment gateway overridden."""
    app.dependency_overrides[get_result_store] = lambda: store
    app.dependency_overrides[get_obligation_analyzer] = lambda: mock_analyzer
    app.dependency_overrides[get_paystack_service] = lambda: mock_paystack
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
