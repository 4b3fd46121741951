"""
Tests for the Bulker SMS Adapter.
"""

import httpx
import pytest
from unittest.mock import AsyncMock, patch, MagicMock

from sms_otp_auth.domain.errors import TransportError
from sms_otp_auth.infrastructure.adapters.sms import BulkerSMSSender
from sms_otp_auth.infrastructure.ports.communication import SMSMessage


def bulker_reply(text="OK;12345;0.05"):
    response = MagicMock()
    response.status_code = 200
    response.text = text
    response.raise_for_status = MagicMock()
    return response


@pytest.mark.asyncio
async def test_bulker_send_success():
    sender = BulkerSMSSender(auth_key="test_key")

    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = bulker_reply()

        msg = SMSMessage(to="+306912345678", body="Hello Bulker", from_number="SENDER")
        await sender.send(msg)

        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        data = kwargs["data"]
        assert args[0] == "https://www.bulker.gr/api/v1/sms/send"
        assert data["auth_key"] == "test_key"
        assert data["to"] == "306912345678"
        assert data["from"] == "SENDER"
        assert data["text"] == "Hello Bulker"
        assert data["validity"] == 1
        assert isinstance(data["id"], int)


@pytest.mark.asyncio
async def test_bulker_uses_default_originator():
    sender = BulkerSMSSender(auth_key="test_key", default_from_sms="DEFAULT")

    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = bulker_reply()
        await sender.send(SMSMessage(to="+306900000000", body="Hi"))

        assert mock_post.call_args.kwargs["data"]["from"] == "DEFAULT"


@pytest.mark.asyncio
async def test_bulker_uses_injected_client():
    client = MagicMock()
    client.post = AsyncMock(return_value=bulker_reply())
    sender = BulkerSMSSender(auth_key="test_key", default_from_sms="ACME", client=client)

    await sender.send(SMSMessage(to="+306912345678", body="Hi"))

    client.post.assert_awaited_once()


@pytest.mark.asyncio
async def test_bulker_api_error_raises_transport_error():
    sender = BulkerSMSSender(auth_key="test_key")

    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = bulker_reply("ERROR;101;Invalid auth key")

        msg = SMSMessage(to="+306912345678", body="Fail", from_number="SENDER")
        with pytest.raises(TransportError, match="Bulker API returned error") as exc:
            await sender.send(msg)

        assert exc.value.details["response"] == "ERROR;101;Invalid auth key"


@pytest.mark.asyncio
async def test_bulker_http_error_becomes_transport_error():
    sender = BulkerSMSSender(auth_key="test_key")

    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.side_effect = httpx.ConnectError("unreachable")

        with pytest.raises(TransportError, match="Bulker request failed") as exc:
            await sender.send(
                SMSMessage(to="+306912345678", body="x", from_number="SENDER")
            )

        assert isinstance(exc.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_bulker_missing_auth_key():
    sender = BulkerSMSSender(auth_key="")
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        with pytest.raises(TransportError, match="auth key"):
            await sender.send(SMSMessage(to="+306912345678", body="No key"))
        mock_post.assert_not_called()


@pytest.mark.asyncio
async def test_bulker_missing_originator():
    sender = BulkerSMSSender(auth_key="test_key")
    with pytest.raises(TransportError, match="originator"):
        await sender.send(SMSMessage(to="+306912345678", body="No sender"))
