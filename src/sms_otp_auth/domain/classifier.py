"""
Flow classification.

Guesses whether a request belongs to the interactive (browser) channel
or the non-interactive (token exchange) channel from its metadata.
Entry points that already know the channel should pass it explicitly
through resolve_channel() instead of relying on the guess.
"""

from typing import Optional

from sms_otp_auth.domain.value_objects import Channel

TOKEN_ENDPOINT_MARKER = "/token"
JSON_MEDIA_TYPE = "application/json"
HTML_MEDIA_TYPE = "text/html"


def classify_flow(
    request_path: Optional[str],
    accept_header: Optional[str],
    token_endpoint_marker: str = TOKEN_ENDPOINT_MARKER,
) -> Channel:
    """
    Classify a request by path and Accept header.

    Rules, first match wins:
    1. Path contains the token endpoint marker -> NON_INTERACTIVE
    2. Accept wants JSON and not HTML -> NON_INTERACTIVE
    3. Anything else -> INTERACTIVE
    """
    if token_endpoint_marker and token_endpoint_marker in (request_path or ""):
        return Channel.NON_INTERACTIVE

    accept = (accept_header or "").lower()
    if JSON_MEDIA_TYPE in accept and HTML_MEDIA_TYPE not in accept:
        return Channel.NON_INTERACTIVE

    return Channel.INTERACTIVE


def resolve_channel(
    explicit: Optional[Channel],
    request_path: Optional[str] = None,
    accept_header: Optional[str] = None,
    token_endpoint_marker: str = TOKEN_ENDPOINT_MARKER,
) -> Channel:
    """Prefer the caller-provided channel; classify only as a fallback."""
    if explicit is not None:
        return Channel(explicit)
    return classify_flow(request_path, accept_header, token_endpoint_marker)
