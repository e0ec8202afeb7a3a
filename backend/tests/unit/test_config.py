"""Tests for application settings."""

from contract_obligation.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_base_url_trailing_slash_stripped(self, monkeypatch):
        monkeypatch.setenv("PAYSTACK_BASE_URL", "https://api.paystack.co/")

        assert Settings().paystack_base_url == "https://api.paystack.co"

    def test_unused_environment_keys_ignored(self, monkeypatch):
        """Frontend-only keys in a shared .env do not become settings."""
        monkeypatch.setenv("FRONTEND_URL", "http://localhost:3000")
        monkeypatch.setenv("PAYSTACK_PUBLIC_KEY", "pk_test_public")

        loaded = Settings()

        assert not hasattr(loaded, "frontend_url")
        assert not hasattr(loaded, "paystack_public_key")
