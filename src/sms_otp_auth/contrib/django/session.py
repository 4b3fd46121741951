"""
Django Session Notes Adapter.

Keeps the SMS OTP notes of a Django session in Django's cache framework,
keyed by the session key. The notes live outside the session payload so
the session middleware never overwrites them when it saves the request's
session at the end of the response.
"""

import logging
from typing import Optional

from django.conf import settings
from django.core.cache import caches

from sms_otp_auth.infrastructure.ports.challenge_store import SessionNotesPort

logger = logging.getLogger("sms_otp_auth.contrib.django.session")


class DjangoSessionNotes(SessionNotesPort):
    """
    SessionNotesPort on top of a Django cache alias.

    Notes expire together with the session cookie
    (``SESSION_COOKIE_AGE``) unless ``timeout`` is given.
    """

    def __init__(
        self,
        cache_alias: str = "default",
        prefix: str = "sms_otp:notes:",
        timeout: Optional[int] = None,
    ):
        self.cache_alias = cache_alias
        self.prefix = prefix
        self.timeout = timeout

    @property
    def _cache(self):
        return caches[self.cache_alias]

    def _key(self, session_id: str, name: str) -> str:
        return f"{self.prefix}{session_id}:{name}"

    def _timeout(self) -> int:
        if self.timeout is not None:
            return self.timeout
        return getattr(settings, "SESSION_COOKIE_AGE", 1209600)

    async def get_note(self, session_id: str, name: str) -> Optional[str]:
        return await self._cache.aget(self._key(session_id, name))

    async def set_note(self, session_id: str, name: str, value: str) -> None:
        await self._cache.aset(
            self._key(session_id, name), value, timeout=self._timeout()
        )
        logger.debug(f"Session note {name} set for {session_id}")

    async def remove_note(self, session_id: str, name: str) -> None:
        await self._cache.adelete(self._key(session_id, name))


__all__ = ["DjangoSessionNotes"]
