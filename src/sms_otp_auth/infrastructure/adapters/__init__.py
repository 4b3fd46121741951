"""Concrete infrastructure adapters (stores, session notes, SMS, directory, rendering)."""

from sms_otp_auth.infrastructure.adapters.challenge_store import (
    InMemoryChallengeStore,
    RedisChallengeStore,
    SessionChallengeStore,
)
from sms_otp_auth.infrastructure.adapters.session import InMemorySessionNotes
from sms_otp_auth.infrastructure.adapters.communication import ConsoleSMSSender
from sms_otp_auth.infrastructure.adapters.sms import BulkerSMSSender
from sms_otp_auth.infrastructure.adapters.directory import InMemoryUserDirectory
from sms_otp_auth.infrastructure.adapters.keycloak import (
    KeycloakDirectoryConfig,
    KeycloakUserDirectory,
)
from sms_otp_auth.infrastructure.adapters.rendering import SimplePageRenderer

__all__ = [
    # Challenge stores
    "InMemoryChallengeStore",
    "RedisChallengeStore",
    "SessionChallengeStore",
    # Session notes
    "InMemorySessionNotes",
    # SMS transport
    "ConsoleSMSSender",
    "BulkerSMSSender",
    # User directory
    "InMemoryUserDirectory",
    "KeycloakDirectoryConfig",
    "KeycloakUserDirectory",
    # Rendering
    "SimplePageRenderer",
]
