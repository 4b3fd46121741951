"""
Challenge validation.

Consumes a candidate code against the stored challenge of an identity
and reports one of four outcomes. Rejections are values, not errors.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from sms_otp_auth.domain.value_objects import (
    Challenge,
    IdentityKey,
    ValidationOutcome,
    utc_now,
)
from sms_otp_auth.infrastructure.ports.challenge_store import ChallengeStorePort

logger = logging.getLogger("sms_otp_auth.application.validator")


class ChallengeValidator:
    """
    Validates candidate codes.

    Lookup tries the session-scoped store first (when a session handle
    is given) and falls back to the identity-keyed store. A session copy
    that differs from the identity-keyed challenge was superseded by a
    later issue and is discarded.

    Transitions:
        Pending -> ACCEPTED | REJECTED_EXPIRED   (challenge deleted)
        Pending -> REJECTED_MISMATCH -> Pending  (challenge kept)
        nothing stored -> REJECTED_NO_CHALLENGE
    """

    def __init__(
        self,
        identity_store: ChallengeStorePort,
        session_store: Optional[ChallengeStorePort] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.identity_store = identity_store
        self.session_store = session_store
        self._clock = clock

    async def validate(
        self,
        identity_key: IdentityKey,
        candidate: Optional[str],
        session_id: Optional[str] = None,
    ) -> ValidationOutcome:
        challenge = await self._lookup(identity_key, session_id)
        if challenge is None:
            logger.debug(f"No OTP challenge found for {identity_key}")
            return ValidationOutcome.REJECTED_NO_CHALLENGE

        # Code first: a wrong code is a mismatch even after expiry
        if not challenge.matches(candidate):
            logger.debug(f"OTP mismatch for {identity_key}")
            return ValidationOutcome.REJECTED_MISMATCH

        if challenge.is_expired(self._clock()):
            await self._consume(identity_key, challenge, session_id)
            logger.info(f"Expired OTP submitted for {identity_key}")
            return ValidationOutcome.REJECTED_EXPIRED

        if not await self._consume(identity_key, challenge, session_id):
            # Another attempt consumed or superseded it in the meantime
            logger.debug(f"OTP challenge for {identity_key} already consumed")
            return ValidationOutcome.REJECTED_NO_CHALLENGE

        logger.info(f"OTP accepted for {identity_key}")
        return ValidationOutcome.ACCEPTED

    async def _lookup(
        self, identity_key: IdentityKey, session_id: Optional[str]
    ) -> Optional[Challenge]:
        keyed = await self.identity_store.get(str(identity_key))

        if session_id and self.session_store is not None:
            from_session = await self.session_store.get(session_id)
            if from_session is not None and from_session.identity_key == identity_key:
                if keyed is None or keyed == from_session:
                    return from_session
                logger.warning(
                    f"Discarding superseded session OTP for {identity_key}"
                )
                await self.session_store.remove(session_id, expected=from_session)

        return keyed

    async def _consume(
        self,
        identity_key: IdentityKey,
        challenge: Challenge,
        session_id: Optional[str],
    ) -> bool:
        """Delete the challenge from both views; True if this call won."""
        consumed = await self.identity_store.remove(
            str(identity_key), expected=challenge
        )
        if session_id and self.session_store is not None:
            from_session = await self.session_store.remove(
                session_id, expected=challenge
            )
            consumed = consumed or from_session
        return consumed


__all__ = ["ChallengeValidator"]
