"""
SMS OTP result types.

These represent what the host should do with an attempt.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from sms_otp_auth.domain.value_objects import ValidationOutcome


class ResponseKind(str, Enum):
    """What the host does with the response."""
    FORM = "form"  # Render the code entry form
    ERROR_PAGE = "error_page"  # Render a terminal error page
    JSON = "json"  # Serialize body as JSON
    SUCCESS = "success"  # Factor satisfied, continue the flow
    ATTEMPTED = "attempted"  # Factor failed, flow may try another one


@dataclass
class OTPResponse:
    """
    Channel-specific representation of one attempt.

    Interactive responses carry a template and an optional inline error
    key. Non-interactive responses carry a JSON body.
    """
    kind: ResponseKind
    status_code: int = 200
    body: Optional[dict[str, Any]] = None
    template: Optional[str] = None
    error: Optional[str] = None
    context: dict[str, Any] = field(default_factory=dict)
    outcome: Optional[ValidationOutcome] = None

    @property
    def is_success(self) -> bool:
        return self.kind is ResponseKind.SUCCESS or (
            self.kind is ResponseKind.JSON
            and self.outcome is ValidationOutcome.ACCEPTED
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "status_code": self.status_code,
            "body": self.body,
            "template": self.template,
            "error": self.error,
            "outcome": self.outcome.value if self.outcome else None,
        }


__all__ = ["ResponseKind", "OTPResponse"]
