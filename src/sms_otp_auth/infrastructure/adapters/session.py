"""
Session Notes Adapter.

In-memory stand-in for the host's authentication session store.
"""

import logging
from typing import Dict, Optional

from sms_otp_auth.infrastructure.ports.challenge_store import SessionNotesPort

logger = logging.getLogger("sms_otp_auth.infrastructure.adapters.session")


class InMemorySessionNotes(SessionNotesPort):
    """
    In-memory implementation of SessionNotesPort.

    Suitable for development and testing. Not for production
    as notes are lost on restart and not distributed.
    """

    def __init__(self):
        self._sessions: Dict[str, Dict[str, str]] = {}

    async def get_note(self, session_id: str, name: str) -> Optional[str]:
        return self._sessions.get(session_id, {}).get(name)

    async def set_note(self, session_id: str, name: str, value: str) -> None:
        self._sessions.setdefault(session_id, {})[name] = value

    async def remove_note(self, session_id: str, name: str) -> None:
        notes = self._sessions.get(session_id)
        if notes is None:
            return
        notes.pop(name, None)
        if not notes:
            del self._sessions[session_id]

    async def discard(self, session_id: str) -> None:
        """Drop a whole session, as the host does when the attempt ends."""
        self._sessions.pop(session_id, None)
        logger.debug(f"Discarded session notes: {session_id}")
