"""
SMS OTP settings.

Validated once at setup time so that a bad code length or TTL fails
when the application starts, not on the first login attempt.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from sms_otp_auth.domain.errors import ConfigurationError


DEFAULT_MESSAGE_TEMPLATE = (
    "Your verification code is {code}. It expires in {minutes} minutes."
)

# Keys used by the identity provider's authenticator config screen
PROVIDER_CONFIG_KEYS = {
    "length": "code_length",
    "ttl": "ttl_seconds",
    "senderId": "sender_id",
    "simulation": "simulation_mode",
}


@dataclass
class OTPSettings:
    """Configuration of the SMS OTP factor."""

    code_length: int = 6
    ttl_seconds: int = 300
    sender_id: Optional[str] = None
    simulation_mode: bool = False
    token_endpoint_marker: str = "/token"
    message_template: str = DEFAULT_MESSAGE_TEMPLATE
    form_template: str = "login-sms.html"
    error_template: str = "error.html"

    def __post_init__(self):
        self.code_length = _positive_int("code_length", self.code_length)
        self.ttl_seconds = _positive_int("ttl_seconds", self.ttl_seconds)
        self.simulation_mode = _as_bool("simulation_mode", self.simulation_mode)

        try:
            self.message_template.format(code="0" * self.code_length, minutes=0)
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid message_template: {e}",
                details={"message_template": self.message_template},
            )

    @property
    def ttl_minutes(self) -> int:
        return self.ttl_seconds // 60

    def render_message(self, code: str) -> str:
        """Build the SMS text for ``code``."""
        return self.message_template.format(code=code, minutes=self.ttl_minutes)

    @classmethod
    def from_mapping(cls, config: Optional[Mapping[str, Any]]) -> "OTPSettings":
        """
        Build settings from a plain mapping.

        Accepts both the field names of this class and the identity
        provider's authenticator config keys (``length``, ``ttl``,
        ``senderId``, ``simulation``), whose values arrive as strings.
        Unknown keys and None values are ignored; a None mapping gives
        the defaults.
        """
        known = set(cls.__dataclass_fields__)
        values: dict[str, Any] = {}
        for key, value in (config or {}).items():
            name = PROVIDER_CONFIG_KEYS.get(key, key)
            if name in known and value is not None:
                values[name] = value
        return cls(**values)


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(
            f"{name} must be an integer", details={name: value}
        )
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"{name} must be an integer", details={name: value}
        )
    if number < 1:
        raise ConfigurationError(
            f"{name} must be at least 1", details={name: value}
        )
    return number


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off", ""):
            return False
    raise ConfigurationError(f"{name} must be a boolean", details={name: value})


__all__ = ["OTPSettings", "DEFAULT_MESSAGE_TEMPLATE"]
