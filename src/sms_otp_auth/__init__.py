"""
py-sms-otp-auth: SMS one-time-password second factor.

Built on the CQRS and DDD building blocks of py-cqrs-ddd-toolkit.
"""

__version__ = "0.1.0"

from sms_otp_auth.domain import (
    OTPDomainError,
    ConfigurationError,
    TransportError,
    Channel,
    ValidationOutcome,
    FactorRequirement,
    IdentityKey,
    Challenge,
    generate_code,
    classify_flow,
    resolve_channel,
)
from sms_otp_auth.application import (
    OTPSettings,
    OTPResponse,
    ResponseKind,
    ResponseShaper,
    ChallengeValidator,
    OTPChallengeEngine,
    AuthenticateWithSMSOTP,
    AuthenticateWithSMSOTPHandler,
)

__all__ = [
    "__version__",
    # Domain
    "OTPDomainError",
    "ConfigurationError",
    "TransportError",
    "Channel",
    "ValidationOutcome",
    "FactorRequirement",
    "IdentityKey",
    "Challenge",
    "generate_code",
    "classify_flow",
    "resolve_channel",
    # Application
    "OTPSettings",
    "OTPResponse",
    "ResponseKind",
    "ResponseShaper",
    "ChallengeValidator",
    "OTPChallengeEngine",
    "AuthenticateWithSMSOTP",
    "AuthenticateWithSMSOTPHandler",
]
