"""
Simple Page Renderer.

Minimal PageRendererPort for hosts without a template engine.
"""

from html import escape
from typing import Any

from sms_otp_auth.infrastructure.ports.rendering import PageRendererPort


FORM_PAGE = """<!DOCTYPE html>
<html>
<head><title>SMS verification</title></head>
<body>
<h1>SMS verification</h1>
{error}<form method="post" action="{action}">
{hidden}<label for="otp">Code</label>
<input id="otp" name="otp" type="text" inputmode="numeric" autocomplete="one-time-code" autofocus>
<button type="submit">Verify</button>
</form>
</body>
</html>
"""

ERROR_PAGE = """<!DOCTYPE html>
<html>
<head><title>SMS verification failed</title></head>
<body>
<h1>SMS verification failed</h1>
{error}</body>
</html>
"""

# Form fields carried over to the next submission
HIDDEN_FIELDS = ("username", "session_id", "redirect_uri")

MESSAGES = {
    "smsAuthCodeInvalid": "Invalid code, please try again.",
    "smsAuthCodeExpired": "The code has expired.",
    "smsAuthSmsNotSent": "The SMS could not be sent.",
    "smsAuthInternalError": "Something went wrong, please start again.",
}


class SimplePageRenderer(PageRendererPort):
    """
    Renders the SMS code form and the error page as plain HTML.

    Templates ending in ``error.html`` render the error page, anything
    else renders the code form. Error keys are translated through
    ``messages``.
    """

    def __init__(self, messages: dict[str, str] = None):
        self.messages = {**MESSAGES, **(messages or {})}

    def render(self, template: str, context: dict[str, Any]) -> str:
        error_key = context.get("error")
        error = ""
        if error_key:
            text = self.messages.get(error_key, error_key)
            error = f'<p class="error">{escape(text)}</p>\n'

        if template.endswith("error.html"):
            return ERROR_PAGE.format(error=error)
        hidden = "".join(
            f'<input type="hidden" name="{name}" value="{escape(str(context[name]), quote=True)}">\n'
            for name in HIDDEN_FIELDS
            if context.get(name)
        )
        return FORM_PAGE.format(
            error=error,
            hidden=hidden,
            action=escape(context.get("action", ""), quote=True),
        )


__all__ = ["SimplePageRenderer", "MESSAGES"]
