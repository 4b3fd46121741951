"""
Domain value objects for the SMS OTP second factor.

Value objects are immutable and defined only by their attributes.
A Challenge is created once and deleted once; it is never updated
in place, so it is modelled as a value rather than a mutable entity.

Uses ValueObject base class from py-cqrs-ddd-toolkit.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from pyotp.utils import strings_equal

from cqrs_ddd.ddd import ValueObject

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Default clock: current timezone-aware UTC time."""
    return datetime.now(timezone.utc)


# ═══════════════════════════════════════════════════════════════
# ENUMERATIONS
# ═══════════════════════════════════════════════════════════════


class Channel(str, Enum):
    """How the caller talks to the identity provider."""

    INTERACTIVE = "interactive"  # Browser flow, host keeps a session between steps
    NON_INTERACTIVE = "non_interactive"  # Token exchange, each call stands alone


class ValidationOutcome(str, Enum):
    """Result of checking a candidate code against the stored challenge."""

    ACCEPTED = "accepted"
    REJECTED_NO_CHALLENGE = "rejected_no_challenge"
    REJECTED_MISMATCH = "rejected_mismatch"
    REJECTED_EXPIRED = "rejected_expired"

    @property
    def is_accepted(self) -> bool:
        return self is ValidationOutcome.ACCEPTED


class FactorRequirement(str, Enum):
    """
    How the SMS factor is configured in the authentication flow.

    REQUIRED factors let the user retry a wrong code until it expires.
    ALTERNATIVE and CONDITIONAL factors give up on the first wrong code
    and let the flow continue with another factor.
    """

    REQUIRED = "required"
    ALTERNATIVE = "alternative"
    CONDITIONAL = "conditional"

    @property
    def allows_retry(self) -> bool:
        return self is FactorRequirement.REQUIRED


# ═══════════════════════════════════════════════════════════════
# IDENTITY
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class IdentityKey(ValueObject):
    """
    Stable identifier of a user across both channels.

    Combines the realm (tenant) with the username so that equal
    usernames in different realms never share a challenge.
    """

    realm: str
    username: str

    SEPARATOR = ":"

    def __str__(self) -> str:
        return f"{self.realm}{self.SEPARATOR}{self.username}"

    @classmethod
    def parse(cls, value: str) -> "IdentityKey":
        """Rebuild a key from its string form (``realm:username``)."""
        realm, sep, username = value.partition(cls.SEPARATOR)
        if not sep:
            raise ValueError(f"Malformed identity key: {value!r}")
        return cls(realm=realm, username=username)


# ═══════════════════════════════════════════════════════════════
# CHALLENGE
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Challenge(ValueObject):
    """
    The single active OTP record for one identity.

    Holds the numeric code and the absolute moment it stops being
    accepted. The channel that created it is deliberately not stored.
    """

    identity_key: IdentityKey
    code: str
    expires_at: datetime

    @classmethod
    def issue(
        cls,
        identity_key: IdentityKey,
        code: str,
        ttl_seconds: int,
        now: datetime,
    ) -> "Challenge":
        """
        Factory method to create a challenge valid for ``ttl_seconds``.

        Expiry is truncated to whole milliseconds so the session copy,
        stored as epoch milliseconds, compares equal to the keyed copy.
        """
        expires_at = now + timedelta(seconds=ttl_seconds)
        return cls(
            identity_key=identity_key,
            code=code,
            expires_at=expires_at.replace(
                microsecond=expires_at.microsecond // 1000 * 1000
            ),
        )

    def is_expired(self, now: datetime) -> bool:
        """A code submitted exactly at ``expires_at`` is still valid."""
        return now > self.expires_at

    def matches(self, candidate: str) -> bool:
        """Constant-time comparison of the candidate against the code."""
        if candidate is None:
            return False
        return strings_equal(candidate, self.code)

    def expires_at_millis(self) -> int:
        return (self.expires_at - EPOCH) // timedelta(milliseconds=1)

    @classmethod
    def from_millis(
        cls, identity_key: IdentityKey, code: str, expires_at_millis: int
    ) -> "Challenge":
        return cls(
            identity_key=identity_key,
            code=code,
            expires_at=EPOCH + timedelta(milliseconds=expires_at_millis),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "identity_key": str(self.identity_key),
            "code": self.code,
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Challenge":
        return cls(
            identity_key=IdentityKey.parse(data["identity_key"]),
            code=data["code"],
            expires_at=datetime.fromisoformat(data["expires_at"]),
        )


__all__ = [
    "utc_now",
    "Channel",
    "ValidationOutcome",
    "FactorRequirement",
    "IdentityKey",
    "Challenge",
]
