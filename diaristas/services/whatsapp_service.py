"""
WhatsApp Gateway
Sends messages through the UltraMsg HTTP API
"""

import logging
from typing import Optional

import httpx

from ..exceptions import DispatchError

logger = logging.getLogger(__name__)


class WhatsAppGateway:
    """Thin client over the UltraMsg chat endpoint"""

    def __init__(
        self,
        api_url: Optional[str],
        instance_id: Optional[str],
        api_token: Optional[str],
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.instance_id = instance_id
        self.api_token = api_token
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_url and self.instance_id and self.api_token)

    @property
    def messages_url(self) -> str:
        base_url = self.api_url if self.api_url.endswith("/") else self.api_url + "/"
        return f"{base_url}messages/chat"

    async def _post(self, to: str, body: str, priority: str) -> dict:
        payload = {
            "token": self.api_token,
            "to": to,
            "body": body,
            "priority": priority,
        }
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(self.messages_url, json=payload)
        except httpx.HTTPError as e:
            raise DispatchError(f"Gateway request failed: {e}") from e

        logger.info(f"📡 UltraMsg API response status: {response.status_code}")

        if response.status_code not in (200, 201):
            raise DispatchError(f"Gateway returned HTTP {response.status_code}: {response.text[:200]}")

        try:
            data = response.json()
        except ValueError:
            data = {}

        # UltraMsg answers 200 with an "error" field for rejected messages
        if isinstance(data, dict) and data.get("error"):
            raise DispatchError(f"Gateway rejected message: {data['error']}")

        return data

    async def send(self, to: str, body: str, priority: str = "normal") -> bool:
        """
        Send a WhatsApp message

        Args:
            to: Recipient channel (phone number with country code, digits only)
            body: Message text
            priority: "high" or "normal"

        Returns:
            True when the gateway acknowledged the message
        """
        if not self.configured:
            logger.warning("⚠️ UltraMsg credentials not configured, message not sent")
            return False

        if not to:
            logger.debug("No phone number provided")
            return False

        logger.info(f"🚀 Sending WhatsApp message to {to} (priority={priority})")
        try:
            data = await self._post(to, body, priority)
        except DispatchError as e:
            logger.error(f"❌ WhatsApp message to {to} failed: {e.detail}")
            return False

        logger.info(f"✅ WhatsApp message sent to {to}: {data}")
        return True
