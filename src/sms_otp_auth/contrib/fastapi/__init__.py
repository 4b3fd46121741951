"""
FastAPI integration for py-sms-otp-auth.

Provides the SMS OTP router and exception handlers.
"""

from .router import create_otp_router, to_http_response
from .exception_handlers import register_exception_handlers

__all__ = [
    "create_otp_router",
    "to_http_response",
    "register_exception_handlers",
]
