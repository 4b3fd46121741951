"""Application layer: settings, validation, response shaping and the engine."""

from sms_otp_auth.application.config import OTPSettings
from sms_otp_auth.application.results import OTPResponse, ResponseKind
from sms_otp_auth.application.responses import ResponseShaper
from sms_otp_auth.application.validator import ChallengeValidator
from sms_otp_auth.application.engine import OTPChallengeEngine
from sms_otp_auth.application.commands import AuthenticateWithSMSOTP
from sms_otp_auth.application.handlers import AuthenticateWithSMSOTPHandler

__all__ = [
    "OTPSettings",
    "OTPResponse",
    "ResponseKind",
    "ResponseShaper",
    "ChallengeValidator",
    "OTPChallengeEngine",
    "AuthenticateWithSMSOTP",
    "AuthenticateWithSMSOTPHandler",
]
