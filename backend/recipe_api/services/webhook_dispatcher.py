"""
Outbound webhook dispatcher.

Sends a single JSON POST per notification. There are no retries: any
transport error or non-success status is raised as ``WebhookError``.
"""
import logging
from typing import Any, Optional

import httpx

from recipe_api.errors import WebhookError

logger = logging.getLogger(__name__)


class WebhookDispatcher:
    """
    Async client for delivering webhook notifications.
    """

    def __init__(self, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        """Initialize dispatcher; ``client`` overrides the pooled client."""
        self.timeout = timeout
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with connection pooling."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def build_body(payload: dict[str, Any], secret: str, target_url: str) -> dict[str, Any]:
        """Notification body: the payload plus the secret and target URL."""
        return {
            **payload,
            "secret": secret,
            "webhook": target_url,
        }

    async def send_webhook(
        self,
        payload: dict[str, Any],
        secret: str,
        target_url: str,
    ) -> httpx.Response:
        """
        POST a notification to ``target_url``.

        Args:
            payload: Event data
            secret: Shared secret of the receiving user
            target_url: Registered webhook URL

        Returns:
            The successful HTTP response

        Raises:
            WebhookError: On network failure or a non-2xx status
        """
        client = await self._get_client()
        body = self.build_body(payload, secret, target_url)

        try:
            response = await client.post(
                target_url,
                json=body,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Webhook delivery to %s failed: %s", target_url, e)
            raise WebhookError("Failed to send webhook.", cause=e) from e

        logger.info("Webhook delivered to %s (%s)", target_url, response.status_code)
        return response
