"""
Exception handlers for FastAPI.

Maps domain errors to HTTP responses.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from sms_otp_auth.domain.errors import (
    ConfigurationError,
    OTPDomainError,
    TransportError,
)

logger = logging.getLogger("sms_otp_auth.contrib.fastapi.exception_handlers")


async def configuration_error_handler(request: Request, exc: ConfigurationError):
    """Handle ConfigurationError (500)."""
    logger.error(f"SMS OTP misconfigured: {exc.message} {exc.details}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": exc.code, "message": exc.message},
    )


async def transport_error_handler(request: Request, exc: TransportError):
    """Handle TransportError (500) without leaking transport details."""
    logger.error(f"SMS transport failure: {exc.message} {exc.details}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "sms_send_failed", "message": "Failed to send SMS"},
    )


async def domain_error_handler(request: Request, exc: OTPDomainError):
    """Handle generic domain errors (400)."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.code, "message": exc.message, "details": exc.details},
    )


def register_exception_handlers(app):
    """
    Register uniform exception handlers for the FastAPI app.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(TransportError, transport_error_handler)
    app.add_exception_handler(OTPDomainError, domain_error_handler)
