"""
Communication Ports.

Defines the protocol for delivering the one-time code by SMS.
"""

from dataclasses import dataclass
from typing import Protocol, Optional


@dataclass
class SMSMessage:
    """Standard SMS message structure."""

    to: str  # Phone number
    body: str
    from_number: Optional[str] = None  # Sender ID or number


class SMSSenderPort(Protocol):
    """
    Port for sending SMS.

    Implementations: Bulker.gr, Console (dev), etc.
    """

    async def send(self, message: SMSMessage) -> None:
        """
        Send an SMS message.

        Args:
            message: SMSMessage object

        Raises:
            Exception: If sending fails. The engine converts any
                failure into a TransportError.
        """
        ...
