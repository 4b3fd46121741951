"""
Challenge Store Implementations.

Provides backends for ChallengeStorePort:
- InMemoryChallengeStore: identity-keyed, process-wide, for single-node hosts
- RedisChallengeStore: identity-keyed, shared between nodes
- SessionChallengeStore: session-scoped view over the host's session notes
"""

import json
import logging
import threading
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from redis.exceptions import WatchError

from sms_otp_auth.domain.value_objects import Challenge, IdentityKey, utc_now
from sms_otp_auth.infrastructure.ports.challenge_store import (
    ChallengeStorePort,
    SessionNotesPort,
)


logger = logging.getLogger("sms_otp_auth.infrastructure.adapters.challenge_store")


# ═══════════════════════════════════════════════════════════════
# IN-MEMORY CHALLENGE STORE (identity-keyed)
# ═══════════════════════════════════════════════════════════════


class InMemoryChallengeStore(ChallengeStorePort):
    """
    In-memory identity-keyed implementation of ChallengeStorePort.

    Every operation takes an internal lock for its own duration only,
    so put/get/remove are atomic even when the host dispatches attempts
    on several threads. Concurrent puts for one key: last write wins.

    Expired entries are swept before every put. Without ``max_entries``
    the map holds one entry per identity currently mid-challenge; with
    it, the oldest entry is evicted when the map is full.

    Usage:
        store = InMemoryChallengeStore(max_entries=10_000)
        await store.put(str(identity_key), challenge)
    """

    def __init__(
        self,
        max_entries: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._challenges: Dict[str, Challenge] = {}
        self._lock = threading.Lock()
        self._max_entries = max_entries
        self._clock = clock

    async def put(self, key: str, challenge: Challenge) -> None:
        with self._lock:
            self._sweep_locked(self._clock())
            # Re-inserting moves the key to the end of the eviction order
            self._challenges.pop(key, None)
            if self._max_entries and len(self._challenges) >= self._max_entries:
                oldest = next(iter(self._challenges))
                del self._challenges[oldest]
                logger.warning(f"Challenge store full, evicted oldest: {oldest}")
            self._challenges[key] = challenge
        logger.debug(f"Stored OTP challenge for {key}")

    async def get(self, key: str) -> Optional[Challenge]:
        with self._lock:
            return self._challenges.get(key)

    async def remove(self, key: str, expected: Optional[Challenge] = None) -> bool:
        with self._lock:
            current = self._challenges.get(key)
            if current is None or (expected is not None and current != expected):
                return False
            del self._challenges[key]
        logger.debug(f"Removed OTP challenge for {key}")
        return True

    async def sweep(self) -> int:
        with self._lock:
            return self._sweep_locked(self._clock())

    def _sweep_locked(self, now: datetime) -> int:
        expired = [k for k, c in self._challenges.items() if c.is_expired(now)]
        for key in expired:
            del self._challenges[key]
        if expired:
            logger.debug(f"Swept {len(expired)} expired OTP challenges")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._challenges)

    def clear(self) -> None:
        """Clear all challenges (for testing)."""
        with self._lock:
            self._challenges.clear()


# ═══════════════════════════════════════════════════════════════
# REDIS CHALLENGE STORE (identity-keyed, distributed)
# ═══════════════════════════════════════════════════════════════


class RedisChallengeStore(ChallengeStorePort):
    """
    Redis implementation of ChallengeStorePort.

    Entries are written with SETEX. The Redis TTL outlives ``expires_at``
    by ``retention_seconds`` so that a correct code submitted slightly
    late is still reported as expired instead of unknown.

    Requires: redis[hiredis]

    Usage:
        import redis.asyncio as redis

        client = redis.Redis.from_url("redis://localhost:6379")
        store = RedisChallengeStore(client)
    """

    def __init__(
        self,
        redis_client: Any,
        prefix: str = "sms_otp:challenge:",
        retention_seconds: int = 60,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._redis = redis_client
        self._prefix = prefix
        self._retention_seconds = retention_seconds
        self._clock = clock

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def put(self, key: str, challenge: Challenge) -> None:
        remaining = (challenge.expires_at - self._clock()).total_seconds()
        ttl = max(1, int(remaining) + self._retention_seconds)

        await self._redis.setex(
            self._key(key),
            ttl,
            json.dumps(challenge.to_dict()),
        )
        logger.debug(f"Stored Redis OTP challenge for {key} (TTL: {ttl}s)")

    async def get(self, key: str) -> Optional[Challenge]:
        return self._decode(await self._redis.get(self._key(key)))

    @staticmethod
    def _decode(data: Any) -> Optional[Challenge]:
        if data is None:
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return Challenge.from_dict(json.loads(data))

    async def remove(self, key: str, expected: Optional[Challenge] = None) -> bool:
        redis_key = self._key(key)
        if expected is None:
            return bool(await self._redis.delete(redis_key))

        # Compare-and-delete under WATCH so a concurrent consume or
        # supersede makes this transaction fail instead of double-deleting
        async with self._redis.pipeline(transaction=True) as pipe:
            try:
                await pipe.watch(redis_key)
                current = self._decode(await pipe.get(redis_key))
                if current != expected:
                    await pipe.unwatch()
                    return False
                pipe.multi()
                pipe.delete(redis_key)
                await pipe.execute()
            except WatchError:
                logger.debug(f"Redis OTP challenge for {key} changed during consume")
                return False

        logger.debug(f"Removed Redis OTP challenge for {key}")
        return True

    async def sweep(self) -> int:
        # Redis handles expiration via TTL
        return 0


# ═══════════════════════════════════════════════════════════════
# SESSION CHALLENGE STORE (session-scoped)
# ═══════════════════════════════════════════════════════════════


class SessionChallengeStore(ChallengeStorePort):
    """
    Session-scoped implementation of ChallengeStorePort.

    Keeps the challenge as three notes on the host's authentication
    session: the code, the expiry in epoch milliseconds and the
    identity key. Keys are session handles, not identities.
    """

    CODE_NOTE = "sms_otp.code"
    EXPIRY_NOTE = "sms_otp.ttl"
    IDENTITY_NOTE = "sms_otp.identity"

    def __init__(self, notes: SessionNotesPort):
        self._notes = notes

    async def put(self, key: str, challenge: Challenge) -> None:
        await self._notes.set_note(key, self.CODE_NOTE, challenge.code)
        await self._notes.set_note(
            key, self.EXPIRY_NOTE, str(challenge.expires_at_millis())
        )
        await self._notes.set_note(
            key, self.IDENTITY_NOTE, str(challenge.identity_key)
        )

    async def get(self, key: str) -> Optional[Challenge]:
        code = await self._notes.get_note(key, self.CODE_NOTE)
        expiry = await self._notes.get_note(key, self.EXPIRY_NOTE)
        identity = await self._notes.get_note(key, self.IDENTITY_NOTE)
        if code is None or expiry is None or identity is None:
            return None

        try:
            return Challenge.from_millis(
                identity_key=IdentityKey.parse(identity),
                code=code,
                expires_at_millis=int(expiry),
            )
        except ValueError:
            logger.warning(f"Ignoring malformed OTP notes on session {key}")
            return None

    async def remove(self, key: str, expected: Optional[Challenge] = None) -> bool:
        current = await self.get(key)
        if current is None or (expected is not None and current != expected):
            return False

        for name in (self.CODE_NOTE, self.EXPIRY_NOTE, self.IDENTITY_NOTE):
            await self._notes.remove_note(key, name)
        return True

    async def sweep(self) -> int:
        # Session lifetime is owned by the host
        return 0


__all__ = [
    "InMemoryChallengeStore",
    "RedisChallengeStore",
    "SessionChallengeStore",
]
