"""Port interfaces (Protocols) for infrastructure adapters."""

from sms_otp_auth.infrastructure.ports.challenge_store import (
    ChallengeStorePort,
    SessionNotesPort,
)
from sms_otp_auth.infrastructure.ports.communication import (
    SMSMessage,
    SMSSenderPort,
)
from sms_otp_auth.infrastructure.ports.directory import UserDirectoryPort
from sms_otp_auth.infrastructure.ports.tokens import TokenIssuerPort
from sms_otp_auth.infrastructure.ports.rendering import PageRendererPort

__all__ = [
    # Storage
    "ChallengeStorePort",
    "SessionNotesPort",
    # Communication
    "SMSMessage",
    "SMSSenderPort",
    # Collaborators
    "UserDirectoryPort",
    "TokenIssuerPort",
    "PageRendererPort",
]
