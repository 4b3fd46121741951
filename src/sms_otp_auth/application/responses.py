"""
Channel-adaptive response shaping.

Pure mapping from (channel, event) to an OTPResponse. Nothing here
touches storage or transport.
"""

from typing import Any, Optional

from sms_otp_auth.application.results import OTPResponse, ResponseKind
from sms_otp_auth.domain.value_objects import (
    Channel,
    FactorRequirement,
    ValidationOutcome,
)


# Message keys understood by the page renderer
ERROR_CODE_INVALID = "smsAuthCodeInvalid"
ERROR_CODE_EXPIRED = "smsAuthCodeExpired"
ERROR_SMS_NOT_SENT = "smsAuthSmsNotSent"
ERROR_INTERNAL = "smsAuthInternalError"

MESSAGE_SENT = "OTP sent to your phone"
MESSAGE_SIMULATION = "OTP verification required"


class ResponseShaper:
    """
    Builds the external representation of each lifecycle event.

    Usage:
        shaper = ResponseShaper(simulation_mode=False)
        response = shaper.for_outcome(channel, outcome, tokens=tokens)
    """

    def __init__(
        self,
        simulation_mode: bool = False,
        form_template: str = "login-sms.html",
        error_template: str = "error.html",
    ):
        self.simulation_mode = simulation_mode
        self.form_template = form_template
        self.error_template = error_template

    @classmethod
    def from_settings(cls, settings) -> "ResponseShaper":
        return cls(
            simulation_mode=settings.simulation_mode,
            form_template=settings.form_template,
            error_template=settings.error_template,
        )

    # ═══════════════════════════════════════════════════════════════
    # ISSUE
    # ═══════════════════════════════════════════════════════════════

    def challenge_issued(
        self, channel: Channel, code: str, expires_in: int
    ) -> OTPResponse:
        if channel is Channel.INTERACTIVE:
            return self._form(context={"expires_in": expires_in})

        body: dict[str, Any] = {
            "status": "otp_required",
            "message": MESSAGE_SIMULATION if self.simulation_mode else MESSAGE_SENT,
            "expires_in": expires_in,
        }
        if self.simulation_mode:
            body["otp"] = code
        return OTPResponse(kind=ResponseKind.JSON, status_code=200, body=body)

    def transport_failed(self, channel: Channel) -> OTPResponse:
        if channel is Channel.INTERACTIVE:
            return self._error_page(500, ERROR_SMS_NOT_SENT)
        return self._json(500, "sms_send_failed", "Failed to send SMS")

    # ═══════════════════════════════════════════════════════════════
    # VALIDATION
    # ═══════════════════════════════════════════════════════════════

    def accepted(
        self, channel: Channel, tokens: Optional[dict[str, Any]] = None
    ) -> OTPResponse:
        if channel is Channel.INTERACTIVE:
            return OTPResponse(
                kind=ResponseKind.SUCCESS, outcome=ValidationOutcome.ACCEPTED
            )
        # Without a token issuer the host only learns the factor passed
        body = dict(tokens) if tokens else {"status": "authenticated"}
        return OTPResponse(
            kind=ResponseKind.JSON,
            status_code=200,
            body=body,
            outcome=ValidationOutcome.ACCEPTED,
        )

    def rejected(
        self,
        channel: Channel,
        outcome: ValidationOutcome,
        requirement: FactorRequirement = FactorRequirement.REQUIRED,
    ) -> OTPResponse:
        if outcome is ValidationOutcome.ACCEPTED:
            raise ValueError("Accepted outcome is not a rejection")

        if channel is Channel.NON_INTERACTIVE:
            if outcome is ValidationOutcome.REJECTED_EXPIRED:
                response = self._json(400, "otp_expired", "OTP has expired")
            elif outcome is ValidationOutcome.REJECTED_MISMATCH:
                response = self._json(401, "invalid_otp", "Invalid OTP code")
            else:
                response = self._json(
                    400, "invalid_request", "No OTP session found"
                )
        elif outcome is ValidationOutcome.REJECTED_EXPIRED:
            response = self._error_page(400, ERROR_CODE_EXPIRED)
        elif outcome is ValidationOutcome.REJECTED_MISMATCH:
            if requirement.allows_retry:
                response = self._form(error=ERROR_CODE_INVALID)
            else:
                response = OTPResponse(kind=ResponseKind.ATTEMPTED)
        else:
            response = self._error_page(500, ERROR_INTERNAL)

        response.outcome = outcome
        return response

    def for_outcome(
        self,
        channel: Channel,
        outcome: ValidationOutcome,
        requirement: FactorRequirement = FactorRequirement.REQUIRED,
        tokens: Optional[dict[str, Any]] = None,
    ) -> OTPResponse:
        if outcome.is_accepted:
            return self.accepted(channel, tokens)
        return self.rejected(channel, outcome, requirement)

    # ═══════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════

    def _form(
        self, error: Optional[str] = None, context: Optional[dict] = None
    ) -> OTPResponse:
        return OTPResponse(
            kind=ResponseKind.FORM,
            status_code=200,
            template=self.form_template,
            error=error,
            context=context or {},
        )

    def _error_page(self, status_code: int, error: str) -> OTPResponse:
        return OTPResponse(
            kind=ResponseKind.ERROR_PAGE,
            status_code=status_code,
            template=self.error_template,
            error=error,
        )

    @staticmethod
    def _json(status_code: int, error: str, message: str) -> OTPResponse:
        return OTPResponse(
            kind=ResponseKind.JSON,
            status_code=status_code,
            body={"error": error, "message": message},
        )


__all__ = [
    "ResponseShaper",
    "ERROR_CODE_INVALID",
    "ERROR_CODE_EXPIRED",
    "ERROR_SMS_NOT_SENT",
    "ERROR_INTERNAL",
]
