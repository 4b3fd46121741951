"""
Tests for the simple page renderer.
"""

from sms_otp_auth.infrastructure.adapters.rendering import SimplePageRenderer


def test_form_without_error():
    html = SimplePageRenderer().render("login-sms.html", {"action": "/realms/demo/sms-otp"})
    assert '<form method="post" action="/realms/demo/sms-otp">' in html
    assert 'name="otp"' in html
    assert 'class="error"' not in html


def test_form_with_inline_error():
    html = SimplePageRenderer().render(
        "login-sms.html", {"error": "smsAuthCodeInvalid"}
    )
    assert "Invalid code, please try again." in html


def test_form_carries_hidden_fields():
    html = SimplePageRenderer().render(
        "login-sms.html",
        {"username": "alice", "session_id": "s1", "redirect_uri": None},
    )
    assert '<input type="hidden" name="username" value="alice">' in html
    assert '<input type="hidden" name="session_id" value="s1">' in html
    assert 'name="redirect_uri"' not in html


def test_error_page():
    html = SimplePageRenderer().render("error.html", {"error": "smsAuthCodeExpired"})
    assert "The code has expired." in html
    assert "<form" not in html


def test_values_are_escaped():
    html = SimplePageRenderer().render(
        "login-sms.html", {"username": '"><script>', "error": "<b>raw</b>"}
    )
    assert "<script>" not in html
    assert "&lt;b&gt;raw&lt;/b&gt;" in html


def test_custom_messages():
    renderer = SimplePageRenderer(messages={"smsAuthCodeInvalid": "Nope"})
    assert "Nope" in renderer.render("login-sms.html", {"error": "smsAuthCodeInvalid"})
