"""
SMS OTP commands.

Uses Command base class from py-cqrs-ddd-toolkit.
"""

from dataclasses import dataclass
from typing import Optional

from cqrs_ddd.core import Command

from sms_otp_auth.domain.value_objects import Channel, FactorRequirement


@dataclass(kw_only=True)
class AuthenticateWithSMSOTP(Command):
    """
    One attempt of the SMS second factor.

    Without ``otp`` a new challenge is issued and sent. With ``otp`` the
    code is validated. The channel is taken from ``channel`` when the
    host knows it, otherwise classified from the request metadata.
    """

    realm: str
    username: str
    otp: Optional[str] = None

    # Interactive flows only
    session_id: Optional[str] = None

    # Channel resolution
    channel: Optional[Channel] = None
    request_path: str = ""
    accept_header: str = ""

    requirement: FactorRequirement = FactorRequirement.REQUIRED


__all__ = ["AuthenticateWithSMSOTP"]
