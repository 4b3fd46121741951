"""
Console SMS Adapter.

Development transport: the message is written to the log and, by
default, to stdout instead of reaching a phone.
"""

import logging

from sms_otp_auth.infrastructure.ports.communication import (
    SMSSenderPort,
    SMSMessage,
)

logger = logging.getLogger("sms_otp_auth.infrastructure.adapters.communication")

RULE = "-" * 50


class ConsoleSMSSender(SMSSenderPort):
    """SMSSenderPort that never fails and never leaves the process."""

    def __init__(self, output_to_stdout: bool = True):
        self.output_to_stdout = output_to_stdout

    @staticmethod
    def format(message: SMSMessage) -> str:
        return "\n".join(
            (
                RULE,
                "SMS SENT (Console)",
                f"To: {message.to}",
                f"From: {message.from_number or '(default)'}",
                "Body:",
                message.body,
                RULE,
            )
        )

    async def send(self, message: SMSMessage) -> None:
        text = self.format(message)
        logger.info(text)
        if self.output_to_stdout:
            print(text)


__all__ = ["ConsoleSMSSender"]
