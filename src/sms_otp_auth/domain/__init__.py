"""Domain layer: value objects, errors, code generation and flow classification."""

from sms_otp_auth.domain.errors import (
    OTPDomainError,
    ConfigurationError,
    TransportError,
)
from sms_otp_auth.domain.value_objects import (
    Channel,
    ValidationOutcome,
    FactorRequirement,
    IdentityKey,
    Challenge,
    utc_now,
)
from sms_otp_auth.domain.generator import generate_code
from sms_otp_auth.domain.classifier import classify_flow, resolve_channel

__all__ = [
    # Errors
    "OTPDomainError",
    "ConfigurationError",
    "TransportError",
    # Value objects
    "Channel",
    "ValidationOutcome",
    "FactorRequirement",
    "IdentityKey",
    "Challenge",
    "utc_now",
    # Functions
    "generate_code",
    "classify_flow",
    "resolve_channel",
]
