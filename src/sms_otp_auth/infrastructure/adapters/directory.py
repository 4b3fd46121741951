"""
In-memory User Directory Adapter.

Maps identity keys to mobile numbers. For development, tests and
hosts that already resolved the number before calling the engine.
"""

from typing import Dict, Optional

from sms_otp_auth.domain.value_objects import IdentityKey
from sms_otp_auth.infrastructure.ports.directory import UserDirectoryPort


class InMemoryUserDirectory(UserDirectoryPort):
    """
    Dictionary-backed implementation of UserDirectoryPort.

    Usage:
        directory = InMemoryUserDirectory()
        directory.register(IdentityKey("acme", "alice"), "+306912345678")
    """

    def __init__(self, numbers: Optional[Dict[IdentityKey, str]] = None):
        self._numbers: Dict[IdentityKey, str] = dict(numbers or {})

    def register(self, identity_key: IdentityKey, mobile_number: str) -> None:
        self._numbers[identity_key] = mobile_number

    async def get_mobile_number(self, identity_key: IdentityKey) -> Optional[str]:
        return self._numbers.get(identity_key)

    async def is_configured_for(self, identity_key: IdentityKey) -> bool:
        return bool(self._numbers.get(identity_key))
