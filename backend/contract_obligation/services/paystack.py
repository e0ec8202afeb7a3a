"""Paystack API service for one-time payments."""

import logging
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from contract_obligation.config import settings
from contract_obligation.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)

# Module-level HTTP client for connection reuse
_http_client: httpx.AsyncClient | None = None


def _get_http_client() -> httpx.AsyncClient:
    """Get shared HTTP client for connection reuse."""
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(timeout=30.0)
    return _http_client


async def close_http_client() -> None:
    """Close the shared HTTP client on shutdown."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


@dataclass
class Transaction:
    """The parts of a Paystack transaction the app relies on."""

    reference: str
    status: str
    amount: int
    metadata: dict
    paid_at: str | None = None
    raw: dict | None = None

    @property
    def is_successful(self) -> bool:
        return self.status == "success"

    @property
    def internal_reference(self) -> str | None:
        """Our result-store reference, carried through the payment metadata."""
        value = self.metadata.get("reference")
        return value if isinstance(value, str) and value else None


class PaystackService:
    """Service for interacting with the Paystack transactions API."""

    def __init__(
        self,
        secret_key: str | None = None,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.secret_key = settings.paystack_secret_key if secret_key is None else secret_key
        self.base_url = (base_url or settings.paystack_base_url).rstrip("/")
        self._http_client = http_client

    @property
    def headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return self._http_client or _get_http_client()

    def _require_key(self) -> None:
        if not self.secret_key:
            raise PaymentGatewayError("Paystack secret key not configured", status_code=500)

    @staticmethod
    def _parse_body(response: httpx.Response) -> dict:
        try:
            data = response.json()
        except ValueError:
            data = {}
        return data if isinstance(data, dict) else {}

    async def initialize_transaction(
        self,
        email: str,
        amount: int,
        metadata: dict | None = None,
        currency: str | None = None,
    ) -> dict:
        """
        Start a transaction and return Paystack's authorization data.

        Args:
            email: Customer email
            amount: Amount in major currency units (e.g. 90 for R90)
            metadata: Extra data echoed back on verification; carries our
                internal result reference
            currency: ISO currency code (defaults to settings.payment_currency)

        Returns:
            Paystack's ``data`` block (authorization_url, access_code, reference)
            with the submitted amount in minor units.
        """
        self._require_key()

        payload = {
            "email": email,
            "amount": amount * 100,  # Paystack expects minor units (cents)
            "currency": currency or settings.payment_currency,
            "metadata": {
                **(metadata or {}),
                "custom_fields": [
                    {
                        "display_name": "Service",
                        "variable_name": "service",
                        "value": "Contract Analysis",
                    }
                ],
            },
        }

        try:
            response = await self._client().post(
                f"{self.base_url}/transaction/initialize",
                headers=self.headers,
                json=payload,
            )
        except httpx.HTTPError as e:
            logger.error(f"Payment initialization failed: {e}")
            raise PaymentGatewayError("Payment provider unreachable") from e

        data = self._parse_body(response)
        if response.is_error:
            logger.error(f"Paystack error: {data}")
            raise PaymentGatewayError(
                data.get("message") or "Failed to initialize payment",
                status_code=response.status_code,
                details=data,
            )

        return {**(data.get("data") or {}), "amount": payload["amount"]}

    async def verify_transaction(self, reference: str) -> Transaction:
        """Look up a transaction by its Paystack reference."""
        self._require_key()

        try:
            response = await self._client().get(
                f"{self.base_url}/transaction/verify/{quote(reference, safe='')}",
                headers=self.headers,
            )
        except httpx.HTTPError as e:
            logger.error(f"Payment verification failed: {e}")
            raise PaymentGatewayError("Payment provider unreachable") from e

        data = self._parse_body(response)
        if response.is_error:
            raise PaymentGatewayError(
                data.get("message") or "Failed to verify payment",
                status_code=response.status_code,
                details=data,
            )

        tx = data.get("data") or {}
        metadata = tx.get("metadata")
        return Transaction(
            reference=tx.get("reference", reference),
            status=tx.get("status", "unknown"),
            amount=tx.get("amount", 0),
            metadata=metadata if isinstance(metadata, dict) else {},
            paid_at=tx.get("paid_at"),
            raw=tx,
        )


def get_paystack_service() -> PaystackService:
    """FastAPI dependency returning a Paystack service with configured keys."""
    return PaystackService()
