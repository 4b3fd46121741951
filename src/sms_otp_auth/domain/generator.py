"""One-time code generation."""

import secrets
import string

from sms_otp_auth.domain.errors import ConfigurationError


def generate_code(length: int) -> str:
    """
    Generate a numeric one-time code.

    Each digit is drawn independently from the ``secrets`` CSPRNG,
    so leading zeros are as likely as any other digit.

    Args:
        length: Number of digits, at least 1

    Returns:
        String of exactly ``length`` decimal digits
    """
    if not isinstance(length, int) or isinstance(length, bool) or length < 1:
        raise ConfigurationError(
            f"Code length must be a positive integer, got {length!r}",
            details={"code_length": length},
        )
    return "".join(secrets.choice(string.digits) for _ in range(length))
