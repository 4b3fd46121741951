"""
Django settings integration.

Reads ``SMS_OTP_*`` settings for the factor and ``BULKER_*`` settings
for the Bulker.gr transport.

Usage:
    container.settings.override(providers.Object(get_otp_settings()))
    container.sms_sender.override(providers.Object(get_bulker_sender()))
"""

from django.conf import settings

from sms_otp_auth.application.config import OTPSettings
from sms_otp_auth.infrastructure.adapters.sms import BulkerSMSSender, BULKER_SMS_URL

SETTINGS_PREFIX = "SMS_OTP_"


def get_otp_settings() -> OTPSettings:
    """Build OTPSettings from ``SMS_OTP_<FIELD>`` Django settings."""
    values = {}
    for name in OTPSettings.__dataclass_fields__:
        setting = f"{SETTINGS_PREFIX}{name.upper()}"
        if hasattr(settings, setting):
            values[name] = getattr(settings, setting)
    return OTPSettings.from_mapping(values)


def get_bulker_sender() -> BulkerSMSSender:
    """Build a BulkerSMSSender from ``BULKER_*`` Django settings."""
    return BulkerSMSSender(
        auth_key=getattr(settings, "BULKER_AUTH_KEY", None),
        sms_url=getattr(settings, "BULKER_SMS_URL", BULKER_SMS_URL),
        default_from_sms=getattr(settings, "BULKER_DEFAULT_FROM_SMS", None),
        validity=getattr(settings, "BULKER_SMS_VALIDITY", 1),
    )


__all__ = ["get_otp_settings", "get_bulker_sender"]
