"""
Token Issuer Port.

Token issuance belongs to the identity provider. The non-interactive
channel asks it for tokens once the code has been accepted.
"""

from typing import Protocol, Any

from sms_otp_auth.domain.value_objects import IdentityKey


class TokenIssuerPort(Protocol):
    """Port for issuing tokens after a successful second factor."""

    async def issue(self, identity_key: IdentityKey) -> dict[str, Any]:
        """
        Issue tokens for the authenticated user.

        Returns:
            Token response body, e.g. access_token, refresh_token, expires_in
        """
        ...
