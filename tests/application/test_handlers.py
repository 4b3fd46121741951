"""
Tests for SMS OTP command handlers.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from sms_otp_auth.application.commands import AuthenticateWithSMSOTP
from sms_otp_auth.application.config import OTPSettings
from sms_otp_auth.application.handlers import AuthenticateWithSMSOTPHandler
from sms_otp_auth.application.results import OTPResponse, ResponseKind
from sms_otp_auth.domain.value_objects import (
    Channel,
    FactorRequirement,
    IdentityKey,
)


@pytest.fixture
def mock_engine():
    engine = MagicMock()
    engine.settings = OTPSettings()
    engine.authenticate = AsyncMock(return_value=OTPResponse(kind=ResponseKind.SUCCESS))
    return engine


@pytest.mark.asyncio
class TestAuthenticateWithSMSOTPHandler:
    async def test_classifies_token_path(self, mock_engine):
        handler = AuthenticateWithSMSOTPHandler(engine=mock_engine)
        cmd = AuthenticateWithSMSOTP(
            realm="demo",
            username="alice",
            otp="482913",
            request_path="/realms/demo/protocol/openid-connect/token",
        )

        response = await handler.handle(cmd)

        mock_engine.authenticate.assert_awaited_once_with(
            IdentityKey("demo", "alice"),
            otp="482913",
            channel=Channel.NON_INTERACTIVE,
            session_id=None,
            requirement=FactorRequirement.REQUIRED,
        )
        assert response.result.kind is ResponseKind.SUCCESS

    async def test_classifies_browser_request(self, mock_engine):
        handler = AuthenticateWithSMSOTPHandler(engine=mock_engine)
        cmd = AuthenticateWithSMSOTP(
            realm="demo",
            username="alice",
            session_id="s1",
            request_path="/realms/demo/sms-otp",
            accept_header="text/html,application/xhtml+xml",
            requirement=FactorRequirement.ALTERNATIVE,
        )

        await handler.handle(cmd)

        kwargs = mock_engine.authenticate.call_args.kwargs
        assert kwargs["channel"] is Channel.INTERACTIVE
        assert kwargs["session_id"] == "s1"
        assert kwargs["otp"] is None
        assert kwargs["requirement"] is FactorRequirement.ALTERNATIVE

    async def test_explicit_channel_wins(self, mock_engine):
        handler = AuthenticateWithSMSOTPHandler(engine=mock_engine)
        cmd = AuthenticateWithSMSOTP(
            realm="demo",
            username="alice",
            channel=Channel.INTERACTIVE,
            request_path="/realms/demo/protocol/openid-connect/token",
        )

        await handler.handle(cmd)

        assert mock_engine.authenticate.call_args.kwargs["channel"] is (
            Channel.INTERACTIVE
        )

    async def test_uses_configured_marker(self, mock_engine):
        mock_engine.settings = OTPSettings(token_endpoint_marker="/exchange")
        handler = AuthenticateWithSMSOTPHandler(engine=mock_engine)
        cmd = AuthenticateWithSMSOTP(
            realm="demo", username="alice", request_path="/oauth/exchange"
        )

        await handler.handle(cmd)

        assert mock_engine.authenticate.call_args.kwargs["channel"] is (
            Channel.NON_INTERACTIVE
        )


@pytest.mark.asyncio
async def test_handler_with_real_engine(make_engine):
    handler = AuthenticateWithSMSOTPHandler(engine=make_engine())
    token_path = "/realms/demo/protocol/openid-connect/token"

    issued = await handler.handle(
        AuthenticateWithSMSOTP(realm="demo", username="alice", request_path=token_path)
    )
    accepted = await handler.handle(
        AuthenticateWithSMSOTP(
            realm="demo", username="alice", otp="482913", request_path=token_path
        )
    )

    assert issued.result.body["status"] == "otp_required"
    assert accepted.result.status_code == 200
    assert accepted.result.is_success
