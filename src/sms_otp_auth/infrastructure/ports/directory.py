"""
User Directory Port.

Looks up the attributes the SMS factor needs from the identity provider.
"""

from typing import Protocol, Optional

from sms_otp_auth.domain.value_objects import IdentityKey


class UserDirectoryPort(Protocol):
    """Port for reading the destination phone number of a user."""

    async def get_mobile_number(self, identity_key: IdentityKey) -> Optional[str]:
        """
        Get the user's mobile number.

        Returns:
            Phone number, or None if the user has none or does not exist
        """
        ...

    async def is_configured_for(self, identity_key: IdentityKey) -> bool:
        """True if the SMS factor can be used for this user."""
        ...
