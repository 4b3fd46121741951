"""
Keycloak User Directory Adapter.

Implements UserDirectoryPort on top of the Keycloak admin API.
Uses KeycloakAdmin from python-keycloak.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from keycloak import KeycloakAdmin
from keycloak.exceptions import KeycloakError

from sms_otp_auth.domain.value_objects import IdentityKey
from sms_otp_auth.infrastructure.ports.directory import UserDirectoryPort

logger = logging.getLogger("sms_otp_auth.infrastructure.adapters.keycloak")


@dataclass
class KeycloakDirectoryConfig:
    """
    Connection to the realm whose users receive codes.

    Authenticates with the client credentials of a service account
    unless admin user credentials are given.
    """

    server_url: str
    realm: str
    client_id: str = "admin-cli"
    client_secret: Optional[str] = None
    admin_username: Optional[str] = None
    admin_password: Optional[str] = None
    verify: bool = True
    # Keycloak user attribute holding the destination number
    mobile_number_attribute: str = "mobile_number"


class KeycloakUserDirectory(UserDirectoryPort):
    """
    Keycloak implementation of UserDirectoryPort.

    One instance serves one realm; identity keys from other realms
    are treated as unknown users.

    Example usage:
        config = KeycloakDirectoryConfig(
            server_url="https://keycloak.example.com",
            realm="my-realm",
            client_secret="admin-secret",
        )
        directory = KeycloakUserDirectory(config)
        number = await directory.get_mobile_number(IdentityKey("my-realm", "alice"))
    """

    MOBILE_NUMBER_REQUIRED_ACTION = "mobile-number-ra"

    def __init__(self, config: KeycloakDirectoryConfig):
        self.config = config
        self._admin = self._create_admin_client()

    def _create_admin_client(self) -> KeycloakAdmin:
        """Create KeycloakAdmin client based on configuration."""
        if self.config.admin_username and self.config.admin_password:
            return KeycloakAdmin(
                server_url=self.config.server_url,
                username=self.config.admin_username,
                password=self.config.admin_password,
                realm_name=self.config.realm,
                verify=self.config.verify,
            )
        return KeycloakAdmin(
            server_url=self.config.server_url,
            client_id=self.config.client_id,
            client_secret_key=self.config.client_secret,
            realm_name=self.config.realm,
            verify=self.config.verify,
        )

    def _find_user(self, identity_key: IdentityKey) -> Optional[dict[str, Any]]:
        if identity_key.realm != self.config.realm:
            logger.warning(
                f"Identity {identity_key} is outside realm {self.config.realm}"
            )
            return None
        try:
            users = self._admin.get_users(
                {"username": identity_key.username, "exact": True}
            )
        except KeycloakError as e:
            logger.error(f"Keycloak user lookup failed for {identity_key}: {e}")
            return None
        return users[0] if users else None

    async def get_mobile_number(self, identity_key: IdentityKey) -> Optional[str]:
        """
        Get the first value of the mobile number attribute.

        Keycloak stores attributes as lists of strings.
        """
        user = self._find_user(identity_key)
        if not user:
            return None

        values = user.get("attributes", {}).get(self.config.mobile_number_attribute)
        if isinstance(values, str):
            return values or None
        return values[0] if values else None

    async def is_configured_for(self, identity_key: IdentityKey) -> bool:
        return await self.get_mobile_number(identity_key) is not None

    async def require_mobile_number(self, identity_key: IdentityKey) -> bool:
        """
        Ask the user to register a mobile number on next login.

        Adds the ``mobile-number-ra`` required action, which needs the
        matching required-action provider installed in Keycloak.

        Returns:
            True if the action is set on the user, False if the user
            could not be found or updated
        """
        user = self._find_user(identity_key)
        if not user:
            return False

        actions = list(user.get("requiredActions", []))
        if self.MOBILE_NUMBER_REQUIRED_ACTION in actions:
            return True

        actions.append(self.MOBILE_NUMBER_REQUIRED_ACTION)
        try:
            self._admin.update_user(user["id"], {"requiredActions": actions})
        except KeycloakError as e:
            logger.error(f"Failed to add required action for {identity_key}: {e}")
            return False
        return True


__all__ = ["KeycloakDirectoryConfig", "KeycloakUserDirectory"]
