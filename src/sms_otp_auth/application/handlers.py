"""
SMS OTP command handlers.

Uses CommandHandler base class from py-cqrs-ddd-toolkit.
"""

import logging

from cqrs_ddd.core import CommandHandler, CommandResponse

from sms_otp_auth.application.commands import AuthenticateWithSMSOTP
from sms_otp_auth.application.engine import OTPChallengeEngine
from sms_otp_auth.application.results import OTPResponse
from sms_otp_auth.domain.classifier import resolve_channel
from sms_otp_auth.domain.value_objects import IdentityKey

logger = logging.getLogger("sms_otp_auth.application.handlers")


class AuthenticateWithSMSOTPHandler(CommandHandler[OTPResponse]):
    """Resolve the channel and run one attempt through the engine."""

    def __init__(self, engine: OTPChallengeEngine):
        super().__init__()
        self.engine = engine

    async def handle(
        self, command: AuthenticateWithSMSOTP
    ) -> CommandResponse[OTPResponse]:
        channel = resolve_channel(
            command.channel,
            request_path=command.request_path,
            accept_header=command.accept_header,
            token_endpoint_marker=self.engine.settings.token_endpoint_marker,
        )
        identity_key = IdentityKey(realm=command.realm, username=command.username)
        logger.debug(f"SMS OTP attempt for {identity_key} via {channel.value}")

        response = await self.engine.authenticate(
            identity_key,
            otp=command.otp,
            channel=channel,
            session_id=command.session_id,
            requirement=command.requirement,
        )

        return CommandResponse(
            result=response,
            events=[],
            correlation_id=command.correlation_id,
            causation_id=command.command_id,
        )


__all__ = ["AuthenticateWithSMSOTPHandler"]
