"""
Domain errors for the SMS OTP second factor.

Only configuration and transport failures are raised. Rejected codes are
reported as ValidationOutcome values and never travel as exceptions.
"""

from typing import Optional, Any


class OTPDomainError(Exception):
    """Base class for all SMS OTP domain errors."""

    def __init__(
        self,
        message: str,
        code: str = "OTP_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ConfigurationError(OTPDomainError):
    """Raised at setup time when code length, TTL or templates are invalid."""

    def __init__(
        self,
        message: str = "Invalid OTP configuration",
        code: str = "OTP_CONFIGURATION_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class TransportError(OTPDomainError):
    """Raised when the SMS could not be delivered to the user."""

    def __init__(
        self,
        message: str = "Failed to send SMS",
        code: str = "SMS_SEND_FAILED",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


__all__ = [
    "OTPDomainError",
    "ConfigurationError",
    "TransportError",
]
