from typing import Any, Optional
from urllib.parse import urlsplit

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from pydantic import BaseModel, ValidationError, field_validator
from starlette.datastructures import URL
from dependency_injector.wiring import inject, Provide

from sms_otp_auth.contrib.dependency_injector import OTPContainer
from sms_otp_auth.application.commands import AuthenticateWithSMSOTP
from sms_otp_auth.application.results import OTPResponse, ResponseKind
from sms_otp_auth.domain.value_objects import Channel
from sms_otp_auth.infrastructure.ports.rendering import PageRendererPort


# -----------------------------------------------------------------------------
# Response conversion
# -----------------------------------------------------------------------------


def to_http_response(
    response: OTPResponse,
    renderer: PageRendererPort,
    context: Optional[dict[str, Any]] = None,
    redirect_uri: str = "/",
) -> Response:
    """
    Convert an OTPResponse into a Starlette response.

    SUCCESS redirects to ``redirect_uri``; ATTEMPTED redirects there too
    with ``sms_otp=attempted`` so the host can offer another factor.
    """
    if response.kind is ResponseKind.JSON:
        return JSONResponse(status_code=response.status_code, content=response.body)

    if response.kind in (ResponseKind.FORM, ResponseKind.ERROR_PAGE):
        page_context = {**(context or {}), **response.context, "error": response.error}
        return HTMLResponse(
            renderer.render(response.template, page_context),
            status_code=response.status_code,
        )

    target = URL(redirect_uri)
    if response.kind is ResponseKind.ATTEMPTED:
        target = target.include_query_params(sms_otp="attempted")
    return RedirectResponse(str(target), status_code=status.HTTP_303_SEE_OTHER)


class OTPForm(BaseModel):
    username: str
    otp: Optional[str] = None
    session_id: Optional[str] = None
    redirect_uri: Optional[str] = None

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("username is required")
        return value

    @field_validator("session_id", "redirect_uri")
    @classmethod
    def blank_as_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


def safe_redirect_uri(candidate: Optional[str], request: Request) -> str:
    """
    Return ``candidate`` if it stays on this site, else ``"/"``.

    Relative URLs and absolute http(s) URLs on the request's own host
    are allowed; scheme-relative URLs and backslash tricks are not.
    """
    if not candidate:
        return "/"
    if candidate.startswith("//") or "\\" in candidate:
        return "/"
    if any(ord(c) < 32 for c in candidate):
        return "/"

    parts = urlsplit(candidate)
    if not parts.scheme and not parts.netloc:
        return candidate
    if parts.scheme in ("http", "https") and parts.netloc == request.url.netloc:
        return candidate
    return "/"


async def _read_form(request: Request) -> OTPForm:
    form = await request.form()
    try:
        return OTPForm.model_validate(
            {key: value for key, value in form.items() if isinstance(value, str)}
        )
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="username is required"
        )


# -----------------------------------------------------------------------------
# Module-level handlers (required for dependency-injector wiring)
# -----------------------------------------------------------------------------


@inject
async def sms_otp(
    realm: str,
    request: Request,
    handler: Any = Depends(Provide[OTPContainer.authenticate_handler]),
    renderer: PageRendererPort = Depends(Provide[OTPContainer.page_renderer]),
):
    form = await _read_form(request)
    redirect_uri = safe_redirect_uri(form.redirect_uri, request)

    cmd = AuthenticateWithSMSOTP(
        realm=realm,
        username=form.username,
        otp=form.otp,
        session_id=form.session_id,
        request_path=request.url.path,
        accept_header=request.headers.get("accept", ""),
    )
    result = await handler.handle(cmd)

    return to_http_response(
        result.result,
        renderer,
        context={
            "action": request.url.path,
            "username": form.username,
            "session_id": form.session_id,
            "redirect_uri": redirect_uri,
        },
        redirect_uri=redirect_uri,
    )


@inject
async def token(
    realm: str,
    request: Request,
    handler: Any = Depends(Provide[OTPContainer.authenticate_handler]),
    renderer: PageRendererPort = Depends(Provide[OTPContainer.page_renderer]),
):
    form = await _read_form(request)

    cmd = AuthenticateWithSMSOTP(
        realm=realm,
        username=form.username,
        otp=form.otp,
        channel=Channel.NON_INTERACTIVE,
    )
    result = await handler.handle(cmd)
    return to_http_response(result.result, renderer)


# -----------------------------------------------------------------------------
# Router Factory
# -----------------------------------------------------------------------------


def create_otp_router(prefix: str = "", tags: Optional[list] = None) -> APIRouter:
    """
    Factory to create a FastAPI router with the SMS OTP endpoints.

    Routes:
        POST /realms/{realm}/sms-otp                          browser form flow
        POST /realms/{realm}/protocol/openid-connect/token    token exchange
    """
    router = APIRouter(prefix=prefix, tags=tags or ["sms-otp"])

    router.add_api_route(
        "/realms/{realm}/sms-otp",
        sms_otp,
        methods=["POST"],
        response_class=Response,
    )
    router.add_api_route(
        "/realms/{realm}/protocol/openid-connect/token",
        token,
        methods=["POST"],
        response_class=Response,
    )

    return router


__all__ = ["create_otp_router", "to_http_response", "safe_redirect_uri", "OTPForm"]
