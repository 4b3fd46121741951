"""
OTP challenge lifecycle engine.

Orchestrates one attempt of the SMS factor:
- no code submitted: generate, store, send, render "challenge issued"
- code submitted: validate against the stores, render the outcome

Transport failures are caught here and turned into a terminal response
for the attempt; configuration errors are raised at construction.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from sms_otp_auth.application.config import OTPSettings
from sms_otp_auth.application.responses import ResponseShaper
from sms_otp_auth.application.results import OTPResponse
from sms_otp_auth.application.validator import ChallengeValidator
from sms_otp_auth.domain.errors import TransportError
from sms_otp_auth.domain.generator import generate_code
from sms_otp_auth.domain.value_objects import (
    Challenge,
    Channel,
    FactorRequirement,
    IdentityKey,
    utc_now,
)
from sms_otp_auth.infrastructure.ports.challenge_store import ChallengeStorePort
from sms_otp_auth.infrastructure.ports.communication import (
    SMSMessage,
    SMSSenderPort,
)
from sms_otp_auth.infrastructure.ports.directory import UserDirectoryPort
from sms_otp_auth.infrastructure.ports.tokens import TokenIssuerPort

logger = logging.getLogger("sms_otp_auth.application.engine")


class OTPChallengeEngine:
    """
    Drives the challenge lifecycle for both channels.

    The identity-keyed store is always written; the session-scoped store
    is written too when the caller supplies a session handle.

    Usage:
        engine = OTPChallengeEngine(
            identity_store=InMemoryChallengeStore(),
            sms_sender=ConsoleSMSSender(),
            user_directory=InMemoryUserDirectory({IdentityKey("demo", "alice"): "+15550100"}),
            settings=OTPSettings(ttl_seconds=300),
        )
        response = await engine.authenticate(key, otp=None, channel=channel)
    """

    def __init__(
        self,
        identity_store: ChallengeStorePort,
        sms_sender: SMSSenderPort,
        user_directory: UserDirectoryPort,
        settings: Optional[OTPSettings] = None,
        session_store: Optional[ChallengeStorePort] = None,
        shaper: Optional[ResponseShaper] = None,
        token_issuer: Optional[TokenIssuerPort] = None,
        clock: Callable[[], datetime] = utc_now,
        code_generator: Callable[[int], str] = generate_code,
    ):
        self.settings = settings or OTPSettings()
        self.identity_store = identity_store
        self.session_store = session_store
        self.sms_sender = sms_sender
        self.user_directory = user_directory
        self.shaper = shaper or ResponseShaper.from_settings(self.settings)
        self.token_issuer = token_issuer
        self.validator = ChallengeValidator(
            identity_store, session_store=session_store, clock=clock
        )
        self._clock = clock
        self._generate = code_generator

    async def authenticate(
        self,
        identity_key: IdentityKey,
        otp: Optional[str],
        channel: Channel,
        session_id: Optional[str] = None,
        requirement: FactorRequirement = FactorRequirement.REQUIRED,
    ) -> OTPResponse:
        """
        Handle one attempt.

        Args:
            identity_key: Realm and username resolved by the host
            otp: Submitted code, or None to request a new challenge. An
                empty string is a submitted (wrong) code.
            channel: Interactive or non-interactive
            session_id: Host session handle, interactive flows only
            requirement: How the factor is configured in the flow

        Returns:
            OTPResponse for the host to render
        """
        if otp is None:
            return await self.issue_challenge(identity_key, channel, session_id)
        return await self.verify_code(
            identity_key, otp, channel, session_id, requirement
        )

    async def issue_challenge(
        self,
        identity_key: IdentityKey,
        channel: Channel,
        session_id: Optional[str] = None,
    ) -> OTPResponse:
        now = self._clock()
        challenge = Challenge.issue(
            identity_key,
            self._generate(self.settings.code_length),
            self.settings.ttl_seconds,
            now,
        )

        await self.identity_store.put(str(identity_key), challenge)
        if session_id and self.session_store is not None:
            await self.session_store.put(session_id, challenge)
        logger.info(
            f"OTP challenge issued for {identity_key} "
            f"(channel={channel.value}, expires_at={challenge.expires_at.isoformat()})"
        )

        try:
            await self._deliver(challenge)
        except TransportError as e:
            logger.error(
                f"Failed to send OTP SMS for {identity_key}: {e.message} {e.details}"
            )
            return self.shaper.transport_failed(channel)

        return self.shaper.challenge_issued(
            channel, challenge.code, self.settings.ttl_seconds
        )

    async def verify_code(
        self,
        identity_key: IdentityKey,
        otp: Optional[str],
        channel: Channel,
        session_id: Optional[str] = None,
        requirement: FactorRequirement = FactorRequirement.REQUIRED,
    ) -> OTPResponse:
        outcome = await self.validator.validate(identity_key, otp, session_id)

        tokens: Optional[dict[str, Any]] = None
        if (
            outcome.is_accepted
            and channel is Channel.NON_INTERACTIVE
            and self.token_issuer is not None
        ):
            tokens = await self.token_issuer.issue(identity_key)

        return self.shaper.for_outcome(channel, outcome, requirement, tokens)

    async def is_configured_for(self, identity_key: IdentityKey) -> bool:
        """Whether the user has a destination number for the factor."""
        return await self.user_directory.is_configured_for(identity_key)

    async def _deliver(self, challenge: Challenge) -> None:
        if self.settings.simulation_mode:
            logger.warning(
                f"***** SIMULATION MODE ***** Would send SMS to "
                f"{challenge.identity_key} with text: "
                f"{self.settings.render_message(challenge.code)}"
            )
            return

        mobile_number = await self.user_directory.get_mobile_number(
            challenge.identity_key
        )
        if not mobile_number:
            raise TransportError(
                "No mobile number registered",
                details={"identity_key": str(challenge.identity_key)},
            )

        message = SMSMessage(
            to=mobile_number,
            body=self.settings.render_message(challenge.code),
            from_number=self.settings.sender_id,
        )
        try:
            await self.sms_sender.send(message)
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(
                "SMS transport raised an error",
                details={"error": str(e), "type": type(e).__name__},
            ) from e


__all__ = ["OTPChallengeEngine"]
