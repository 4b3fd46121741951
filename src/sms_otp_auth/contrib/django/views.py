import logging
from typing import Any, List, Optional

from asgiref.sync import sync_to_async
from django.http import HttpRequest, HttpResponse, HttpResponseRedirect, JsonResponse
from django.shortcuts import render
from django.urls import path
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from dependency_injector.wiring import inject, Provide

from sms_otp_auth.contrib.dependency_injector import OTPContainer
from sms_otp_auth.application.commands import AuthenticateWithSMSOTP
from sms_otp_auth.application.results import OTPResponse, ResponseKind
from sms_otp_auth.domain.errors import OTPDomainError
from sms_otp_auth.domain.value_objects import Channel
from sms_otp_auth.infrastructure.adapters.rendering import MESSAGES

logger = logging.getLogger("sms_otp_auth.contrib.django.views")


class SMSOTPView(View):
    """
    Browser flow of the SMS factor.

    The Django session key is the session handle of the challenge;
    pages are rendered with Django templates.
    """

    channel: Optional[Channel] = None

    @inject
    def __init__(
        self,
        handler: Any = Provide[OTPContainer.authenticate_handler],
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.handler = handler

    async def post(self, request: HttpRequest, realm: str) -> HttpResponse:
        username = request.POST.get("username")
        if not username:
            return JsonResponse(
                {"error": "invalid_request", "message": "username is required"},
                status=400,
            )

        cmd = AuthenticateWithSMSOTP(
            realm=realm,
            username=username,
            otp=request.POST.get("otp"),
            session_id=await self.get_session_key(request),
            channel=self.channel,
            request_path=request.path,
            accept_header=request.headers.get("Accept", ""),
        )

        try:
            result = await self.handler.handle(cmd)
        except OTPDomainError as e:
            logger.error(f"SMS OTP attempt failed: {e.message} {e.details}")
            return JsonResponse({"error": e.code, "message": e.message}, status=500)

        return self.to_response(request, result.result, username)

    async def get_session_key(self, request: HttpRequest) -> Optional[str]:
        session = getattr(request, "session", None)
        if session is None or self.channel is Channel.NON_INTERACTIVE:
            return None
        if session.session_key is None:
            await sync_to_async(session.save)()
        return session.session_key

    def to_response(
        self, request: HttpRequest, response: OTPResponse, username: str
    ) -> HttpResponse:
        if response.kind is ResponseKind.JSON:
            return JsonResponse(response.body, status=response.status_code)

        redirect_uri = self.get_redirect_uri(request)

        if response.kind in (ResponseKind.FORM, ResponseKind.ERROR_PAGE):
            context = {
                **response.context,
                "error": response.error,
                "message": MESSAGES.get(response.error) if response.error else None,
                "action": request.path,
                "username": username,
                "redirect_uri": redirect_uri,
            }
            return render(
                request, response.template, context, status=response.status_code
            )

        if response.kind is ResponseKind.ATTEMPTED:
            separator = "&" if "?" in redirect_uri else "?"
            redirect_uri = f"{redirect_uri}{separator}sms_otp=attempted"
        return HttpResponseRedirect(redirect_uri)

    def get_redirect_uri(self, request: HttpRequest) -> str:
        candidate = request.POST.get("redirect_uri") or "/"
        if url_has_allowed_host_and_scheme(
            candidate,
            allowed_hosts={request.get_host()},
            require_https=request.is_secure(),
        ):
            return candidate
        return "/"


class SMSOTPTokenView(SMSOTPView):
    """Token exchange flow of the SMS factor; always answers with JSON."""

    channel = Channel.NON_INTERACTIVE


def get_otp_urls() -> List[Any]:
    """
    Factory to get URL patterns for the SMS OTP endpoints.
    """
    return [
        path(
            "realms/<str:realm>/sms-otp/",
            SMSOTPView.as_view(),
            name="sms_otp",
        ),
        path(
            "realms/<str:realm>/protocol/openid-connect/token",
            csrf_exempt(SMSOTPTokenView.as_view()),
            name="sms_otp_token",
        ),
    ]


__all__ = ["SMSOTPView", "SMSOTPTokenView", "get_otp_urls"]
