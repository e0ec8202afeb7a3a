"""Tests for the in-memory result store."""

from contract_obligation.services.results_store import InMemoryResultStore, StoredResult


def _result(reference: str = "ref_1", status: str = "pending") -> StoredResult:
    return StoredResult(
        reference=reference,
        status=status,
        obligations=[{"obligation": "Pay $500"}],
        extracted_text="Party A shall pay $500.",
        filename="msa.pdf",
        page_info="1 page",
    )


class TestInMemoryResultStore:
    """Tests for InMemoryResultStore."""

    def test_put_and_get(self, store, clock):
        store.put("ref_1", _result())

        stored = store.get("ref_1")

        assert stored is not None
        assert stored.status == "pending"
        assert stored.timestamp == clock.now
        assert stored.obligations == [{"obligation": "Pay $500"}]

    def test_put_uses_key_as_reference(self, store):
        store.put("ref_other", _result(reference="ref_1"))
        assert store.get("ref_other").reference == "ref_other"

    def test_missing_key(self, store):
        assert store.get("nope") is None

    def test_get_within_ttl(self, store, clock):
        store.put("ref_1", _result())
        clock.advance(3600)
        assert store.get("ref_1") is not None

    def test_get_evicts_expired(self, store, clock):
        """An entry older than the TTL is removed on read."""
        store.put("ref_1", _result())
        clock.advance(3601)

        assert store.get("ref_1") is None
        clock.now -= 3601
        assert store.get("ref_1") is None

    def test_update_status(self, store):
        store.put("ref_1", _result())

        updated = store.update_status("ref_1", "success")

        assert updated.status == "success"
        assert store.get("ref_1").status == "success"

    def test_update_status_keeps_timestamp(self, store, clock):
        """Paying does not extend the retention window."""
        store.put("ref_1", _result())
        clock.advance(1800)
        store.update_status("ref_1", "success")
        clock.advance(1801)

        assert store.get("ref_1") is None

    def test_update_status_missing_or_expired(self, store, clock):
        assert store.update_status("nope", "success") is None

        store.put("ref_1", _result())
        clock.advance(3601)
        assert store.update_status("ref_1", "success") is None

    def test_delete(self, store):
        store.put("ref_1", _result())

        assert store.delete("ref_1") is True
        assert store.delete("ref_1") is False
        assert store.get("ref_1") is None

    def test_sweep_expired(self, store, clock):
        store.put("old", _result())
        clock.advance(2000)
        store.put("new", _result())
        clock.advance(2000)

        assert store.sweep_expired() == 1
        assert [r.reference for r in store.entries()] == ["new"]
        assert store.sweep_expired() == 0

    def test_entries_skip_expired(self, store, clock):
        store.put("old", _result())
        clock.advance(3601)
        store.put("new", _result())

        assert [r.reference for r in store.entries()] == ["new"]

    def test_default_ttl_from_settings(self):
        assert InMemoryResultStore().ttl_seconds == 3600

    def test_to_dict(self, store):
        store.put("ref_1", _result())
        data = store.get("ref_1").to_dict()

        assert data["reference"] == "ref_1"
        assert data["filename"] == "msa.pdf"
        assert set(data) == {
            "reference",
            "status",
            "obligations",
            "extracted_text",
            "filename",
            "page_info",
            "timestamp",
        }
