"""
Pytest configuration for py-sms-otp-auth tests.
"""

from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import AsyncMock, MagicMock

from sms_otp_auth.application.config import OTPSettings
from sms_otp_auth.application.engine import OTPChallengeEngine
from sms_otp_auth.domain.value_objects import IdentityKey
from sms_otp_auth.infrastructure.adapters.challenge_store import (
    InMemoryChallengeStore,
    SessionChallengeStore,
)
from sms_otp_auth.infrastructure.adapters.directory import InMemoryUserDirectory
from sms_otp_auth.infrastructure.adapters.session import InMemorySessionNotes
from sms_otp_auth.infrastructure.ports.communication import SMSSenderPort


T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable clock; call it to read, advance() to move forward."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)

    def at(self, seconds: float) -> None:
        """Jump to ``seconds`` after the start time."""
        self.now = T0 + timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def identity_key():
    return IdentityKey(realm="demo", username="alice")


# -----------------------------------------------------------------------------
# STORES
# -----------------------------------------------------------------------------


@pytest.fixture
def identity_store(clock):
    return InMemoryChallengeStore(clock=clock)


@pytest.fixture
def session_notes():
    return InMemorySessionNotes()


@pytest.fixture
def session_store(session_notes):
    return SessionChallengeStore(session_notes)


# -----------------------------------------------------------------------------
# MOCKS
# -----------------------------------------------------------------------------


@pytest.fixture
def mock_sms_sender():
    mock = MagicMock(spec=SMSSenderPort)
    mock.send = AsyncMock()
    return mock


@pytest.fixture
def user_directory(identity_key):
    return InMemoryUserDirectory({identity_key: "+306912345678"})


@pytest.fixture
def settings():
    return OTPSettings(code_length=6, ttl_seconds=300, sender_id="DEMO")


@pytest.fixture
def make_engine(
    identity_store, session_store, mock_sms_sender, user_directory, clock
):
    """Build an engine over the shared fixtures with a fixed code sequence."""

    def _make(settings=None, codes=("482913",), **kwargs):
        sequence = iter(codes)
        params = dict(
            identity_store=identity_store,
            sms_sender=mock_sms_sender,
            user_directory=user_directory,
            settings=settings or OTPSettings(sender_id="DEMO"),
            session_store=session_store,
            clock=clock,
            code_generator=lambda length: next(sequence),
        )
        params.update(kwargs)
        return OTPChallengeEngine(**params)

    return _make
