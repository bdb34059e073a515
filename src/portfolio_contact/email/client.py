"""Resend REST API client for sending transactional email.

Provides the ``ResendClient`` class, the ``EmailSender`` protocol the
contact pipeline depends on, and nothing else: deadlines are imposed by the
caller, and failed sends are not retried here.
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from portfolio_contact.email.models import OutboundEmail
from portfolio_contact.errors import EmailDeliveryError

DEFAULT_BASE_URL = "https://api.resend.com"


class EmailSender(Protocol):
    """Anything that can deliver an ``OutboundEmail``."""

    async def send(self, outbound: OutboundEmail) -> dict[str, Any]: ...


class ResendClient:
    """Wrapper around the Resend ``POST /emails`` endpoint.

    Args:
        api_key: The Resend API key.
        base_url: API root, overridable for testing.
        http_client: An ``httpx.AsyncClient`` to reuse.  When omitted the
            client creates and owns one without a transport timeout.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=None)
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def send(self, outbound: OutboundEmail) -> dict[str, Any]:
        """Send *outbound* through Resend.

        Args:
            outbound: The email to send.

        Returns:
            The Resend response dict (contains the message ``id``).

        Raises:
            EmailDeliveryError: If the request fails or Resend returns a
                non-2xx status.
        """
        label = f"email to {outbound.to}"
        try:
            response = await self._http.post(
                f"{self._base_url}/emails",
                headers=self._headers,
                json=outbound.model_dump(by_alias=True),
            )
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(label, str(exc) or type(exc).__name__) from exc

        if response.is_error:
            raise EmailDeliveryError(label, _error_message(response))
        return dict(response.json())

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    message = payload.get("message") if isinstance(payload, dict) else None
    return f"HTTP {response.status_code}: {message}" if message else f"HTTP {response.status_code}"
