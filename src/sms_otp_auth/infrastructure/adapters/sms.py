"""
Bulker.gr SMS Adapter.

Delivers one-time codes through the Bulker.gr HTTP API using httpx.
Every failure surfaces as TransportError so the engine can answer the
attempt with a "not sent" response.
"""

import logging
import time
from typing import Any, Optional

import httpx

from sms_otp_auth.domain.errors import TransportError
from sms_otp_auth.infrastructure.ports.communication import (
    SMSSenderPort,
    SMSMessage,
)

logger = logging.getLogger("sms_otp_auth.infrastructure.adapters.sms")

BULKER_SMS_URL = "https://www.bulker.gr/api/v1/sms/send"


class BulkerSMSSender(SMSSenderPort):
    """
    SMSSenderPort backed by Bulker.gr.

    Bulker answers ``OK;<message id>;<charge>`` on success and
    ``ERROR;<code>;<description>`` otherwise. ``validity`` is the number
    of hours the operator keeps retrying delivery.

    Usage:
        sender = BulkerSMSSender(auth_key="...", default_from_sms="ACME")
        await sender.send(SMSMessage(to="+306912345678", body="Your code is 482913"))
    """

    def __init__(
        self,
        auth_key: Optional[str],
        sms_url: str = BULKER_SMS_URL,
        default_from_sms: Optional[str] = None,
        validity: int = 1,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.auth_key = auth_key
        self.sms_url = sms_url
        self.default_from_sms = default_from_sms
        self.validity = validity
        self.timeout = timeout
        self._client = client

    async def send(self, message: SMSMessage) -> None:
        payload = self._payload(message)

        try:
            if self._client is not None:
                response = await self._client.post(self.sms_url, data=payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.sms_url, data=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportError(
                "Bulker request failed",
                details={"provider": "bulker", "error": str(e)},
            ) from e

        message_id = self._parse_ack(response.text)
        logger.info(f"SMS {message_id} accepted by Bulker for {message.to}")

    def _payload(self, message: SMSMessage) -> dict[str, Any]:
        if not self.auth_key:
            raise TransportError(
                "Bulker auth key is not configured", details={"provider": "bulker"}
            )

        originator = message.from_number or self.default_from_sms
        if not originator:
            raise TransportError(
                "No SMS originator configured", details={"provider": "bulker"}
            )

        return {
            "auth_key": self.auth_key,
            "id": time.time_ns() // 1_000_000,
            "from": originator,
            # Bulker wants the number without the leading '+'
            "to": message.to.lstrip("+"),
            "text": message.body,
            "validity": self.validity,
        }

    @staticmethod
    def _parse_ack(content: str) -> str:
        fields = content.strip().split(";")
        if fields[0] != "OK":
            raise TransportError(
                f"Bulker API returned error: {content}",
                details={"provider": "bulker", "response": content},
            )
        return fields[1] if len(fields) > 1 else ""


__all__ = ["BulkerSMSSender", "BULKER_SMS_URL"]
