"""
Challenge Store Ports.

Defines the storage interface for OTP challenges and the host-managed
session note store the interactive channel relies on.
"""

from typing import Protocol, Optional, runtime_checkable

from sms_otp_auth.domain.value_objects import Challenge


@runtime_checkable
class ChallengeStorePort(Protocol):
    """
    Port for holding at most one challenge per key.

    Two addressing schemes share this interface:
    - Identity-keyed (InMemoryChallengeStore, RedisChallengeStore):
      key is ``str(IdentityKey)``, used by the non-interactive channel.
    - Session-scoped (SessionChallengeStore): key is the host's opaque
      session handle, used by the interactive channel.

    Usage:
        store = InMemoryChallengeStore()
        await store.put("realm:alice", challenge)
        current = await store.get("realm:alice")
        consumed = await store.remove("realm:alice", expected=current)
    """

    async def put(self, key: str, challenge: Challenge) -> None:
        """
        Store a challenge, replacing any previous one under ``key``.

        Implementations sweep expired entries before writing.
        """
        ...

    async def get(self, key: str) -> Optional[Challenge]:
        """
        Get the challenge stored under ``key``.

        Expired challenges are returned as-is; the validator decides
        what an expired challenge means.
        """
        ...

    async def remove(self, key: str, expected: Optional[Challenge] = None) -> bool:
        """
        Delete the challenge under ``key``.

        With ``expected``, delete only if the stored challenge is still
        equal to it. This is the atomic consume step that keeps a code
        single-use when two attempts race on it.

        Returns:
            True if a challenge was deleted
        """
        ...

    async def sweep(self) -> int:
        """
        Delete all expired challenges.

        Returns:
            Number of challenges deleted
        """
        ...


@runtime_checkable
class SessionNotesPort(Protocol):
    """
    Port for the host's per-attempt session notes.

    The host owns creation, lifetime and concurrency of the session;
    this core only reads, writes and removes string notes on it.
    """

    async def get_note(self, session_id: str, name: str) -> Optional[str]:
        """Read a note, None if the session or note does not exist."""
        ...

    async def set_note(self, session_id: str, name: str, value: str) -> None:
        """Write a note, creating the session entry if needed."""
        ...

    async def remove_note(self, session_id: str, name: str) -> None:
        """Remove a note if present."""
        ...
