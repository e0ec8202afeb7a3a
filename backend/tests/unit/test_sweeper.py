"""Tests for the background sweep of expired results."""

import asyncio
import contextlib
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from contract_obligation.services.results_store import StoredResult
from main import app, sweep_expired_results


class TestSweeper:
    """Tests for sweep_expired_results and the app lifespan."""

    @pytest.mark.asyncio
    async def test_evicts_expired_results(self, store, clock):
        store.put("old", StoredResult(reference="old", status="pending", obligations=[]))
        clock.advance(3601)

        with patch("main.get_result_store", return_value=store):
            task = asyncio.create_task(sweep_expired_results(0))
            await asyncio.sleep(0.05)
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

        assert store.delete("old") is False

    @pytest.mark.asyncio
    async def test_sweep_errors_do_not_stop_loop(self, store):
        with (
            patch("main.get_result_store", return_value=store),
            patch.object(store, "sweep_expired", side_effect=RuntimeError("boom")) as mock_sweep,
        ):
            task = asyncio.create_task(sweep_expired_results(0))
            await asyncio.sleep(0.05)
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

        assert mock_sweep.call_count > 1

    def test_lifespan_starts_and_stops(self):
        """Startup and shutdown complete without external services."""
        with TestClient(app) as client:
            assert client.get("/api/health").status_code == 200
