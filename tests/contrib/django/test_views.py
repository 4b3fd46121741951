"""
Tests for the Django SMS OTP views.
"""

import json

import pytest
from dependency_injector import providers
from django.contrib.sessions.backends.cache import SessionStore
from django.core.cache import cache
from django.test import RequestFactory
from django.urls import resolve, reverse

from sms_otp_auth.contrib.dependency_injector import OTPContainer
from sms_otp_auth.contrib.django import DjangoSessionNotes, SMSOTPTokenView, SMSOTPView
from sms_otp_auth.domain.errors import ConfigurationError

FORM_URL = "/realms/demo/sms-otp/"
TOKEN_URL = "/realms/demo/protocol/openid-connect/token"


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def container():
    container = OTPContainer()
    container.config.from_dict({"otp": {"simulation_mode": True}})
    container.session_notes.override(providers.Singleton(DjangoSessionNotes))
    container.engine.add_kwargs(code_generator=lambda length: "482913")
    return container


@pytest.fixture
def handler(container):
    return container.authenticate_handler()


@pytest.fixture
def rf():
    return RequestFactory()


def browser_post(rf, data, session=None):
    request = rf.post(FORM_URL, data=data, HTTP_ACCEPT="text/html")
    request.session = session if session is not None else SessionStore()
    return request


class TestSMSOTPView:
    @pytest.mark.asyncio
    async def test_issue_renders_form(self, rf, handler):
        request = browser_post(rf, {"username": "alice"})
        response = await SMSOTPView(handler=handler).post(request, realm="demo")

        assert response.status_code == 200
        html = response.content.decode()
        assert '<input type="hidden" name="username" value="alice">' in html
        assert f'action="{FORM_URL}"' in html
        assert "482913" not in html
        assert request.session.session_key is not None

    @pytest.mark.asyncio
    async def test_wrong_code_rerenders_form_with_message(self, rf, handler):
        session = SessionStore()
        view = SMSOTPView(handler=handler)
        await view.post(browser_post(rf, {"username": "alice"}, session), realm="demo")

        response = await view.post(
            browser_post(rf, {"username": "alice", "otp": "000000"}, session),
            realm="demo",
        )

        assert response.status_code == 200
        assert "Invalid code, please try again." in response.content.decode()

    @pytest.mark.asyncio
    async def test_empty_code_rerenders_form_and_keeps_challenge(
        self, rf, handler, container
    ):
        session = SessionStore()
        view = SMSOTPView(handler=handler)
        await view.post(browser_post(rf, {"username": "alice"}, session), realm="demo")

        response = await view.post(
            browser_post(rf, {"username": "alice", "otp": ""}, session),
            realm="demo",
        )

        assert response.status_code == 200
        assert "Invalid code, please try again." in response.content.decode()
        stored = await container.identity_store().get("demo:alice")
        assert stored.code == "482913"

    @pytest.mark.asyncio
    async def test_accepted_redirects(self, rf, handler):
        session = SessionStore()
        view = SMSOTPView(handler=handler)
        await view.post(browser_post(rf, {"username": "alice"}, session), realm="demo")

        response = await view.post(
            browser_post(
                rf,
                {"username": "alice", "otp": "482913", "redirect_uri": "/home"},
                session,
            ),
            realm="demo",
        )

        assert response.status_code == 302
        assert response["Location"] == "/home"

    @pytest.mark.asyncio
    async def test_offsite_redirect_falls_back_to_root(self, rf, handler):
        session = SessionStore()
        view = SMSOTPView(handler=handler)
        await view.post(browser_post(rf, {"username": "alice"}, session), realm="demo")

        response = await view.post(
            browser_post(
                rf,
                {
                    "username": "alice",
                    "otp": "482913",
                    "redirect_uri": "https://evil.example.com/",
                },
                session,
            ),
            realm="demo",
        )

        assert response.status_code == 302
        assert response["Location"] == "/"

    @pytest.mark.asyncio
    async def test_session_copy_survives_identity_store_loss(
        self, rf, handler, container
    ):
        session = SessionStore()
        view = SMSOTPView(handler=handler)
        await view.post(browser_post(rf, {"username": "alice"}, session), realm="demo")

        # Notes are kept in the Django cache under the session key
        notes = container.session_notes()
        assert await notes.get_note(session.session_key, "sms_otp.code") == "482913"

        container.identity_store().clear()
        response = await view.post(
            browser_post(rf, {"username": "alice", "otp": "482913"}, session),
            realm="demo",
        )

        assert response.status_code == 302
        assert await notes.get_note(session.session_key, "sms_otp.code") is None

    @pytest.mark.asyncio
    async def test_no_challenge_renders_error_page(self, rf, handler):
        request = browser_post(rf, {"username": "alice", "otp": "482913"})
        response = await SMSOTPView(handler=handler).post(request, realm="demo")

        assert response.status_code == 500
        assert "SMS verification failed" in response.content.decode()

    @pytest.mark.asyncio
    async def test_missing_username(self, rf, handler):
        request = browser_post(rf, {"otp": "482913"})
        response = await SMSOTPView(handler=handler).post(request, realm="demo")

        assert response.status_code == 400
        assert json.loads(response.content)["error"] == "invalid_request"

    @pytest.mark.asyncio
    async def test_domain_error_becomes_json(self, rf):
        class FailingHandler:
            async def handle(self, command):
                raise ConfigurationError("No SMS transport configured")

        request = browser_post(rf, {"username": "alice"})
        response = await SMSOTPView(handler=FailingHandler()).post(
            request, realm="demo"
        )

        assert response.status_code == 500
        assert json.loads(response.content) == {
            "error": "OTP_CONFIGURATION_ERROR",
            "message": "No SMS transport configured",
        }


class TestSMSOTPTokenView:
    @pytest.mark.asyncio
    async def test_token_flow(self, rf, handler):
        view = SMSOTPTokenView(handler=handler)

        issued = await view.post(
            rf.post(TOKEN_URL, data={"username": "alice"}), realm="demo"
        )
        assert issued.status_code == 200
        body = json.loads(issued.content)
        assert body["status"] == "otp_required"
        assert body["otp"] == "482913"

        accepted = await view.post(
            rf.post(TOKEN_URL, data={"username": "alice", "otp": "482913"}),
            realm="demo",
        )
        assert accepted.status_code == 200
        assert json.loads(accepted.content) == {"status": "authenticated"}

        replayed = await view.post(
            rf.post(TOKEN_URL, data={"username": "alice", "otp": "482913"}),
            realm="demo",
        )
        assert replayed.status_code == 400
        assert json.loads(replayed.content)["message"] == "No OTP session found"

    @pytest.mark.asyncio
    async def test_session_is_not_used(self, rf, handler):
        request = rf.post(TOKEN_URL, data={"username": "alice"})
        request.session = SessionStore()

        await SMSOTPTokenView(handler=handler).post(request, realm="demo")

        assert request.session.session_key is None


def test_urls():
    assert reverse("sms_otp", kwargs={"realm": "demo"}) == FORM_URL
    assert reverse("sms_otp_token", kwargs={"realm": "demo"}) == TOKEN_URL
    assert resolve(TOKEN_URL).func.view_class is SMSOTPTokenView
    assert resolve(FORM_URL).kwargs == {"realm": "demo"}
