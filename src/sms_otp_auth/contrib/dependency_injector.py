"""
Dependency Injector integration for py-sms-otp-auth.

Provides an IoC Container with pre-configured SMS OTP services.
Host applications can extend this container or use it directly.

Usage:
    from sms_otp_auth.contrib.dependency_injector import OTPContainer

    class AppContainer(OTPContainer):
        # Provide implementations for production collaborators
        identity_store = providers.Singleton(RedisChallengeStore, redis_client=...)
        sms_sender = providers.Singleton(BulkerSMSSender, auth_key=...)
"""

from dependency_injector import containers, providers

from sms_otp_auth.application.config import OTPSettings
from sms_otp_auth.application.engine import OTPChallengeEngine
from sms_otp_auth.application.handlers import AuthenticateWithSMSOTPHandler
from sms_otp_auth.application.responses import ResponseShaper
from sms_otp_auth.infrastructure.adapters.challenge_store import (
    InMemoryChallengeStore,
    SessionChallengeStore,
)
from sms_otp_auth.infrastructure.adapters.communication import ConsoleSMSSender
from sms_otp_auth.infrastructure.adapters.directory import InMemoryUserDirectory
from sms_otp_auth.infrastructure.adapters.rendering import SimplePageRenderer
from sms_otp_auth.infrastructure.adapters.session import InMemorySessionNotes


class OTPContainer(containers.DeclarativeContainer):
    """
    IoC Container for the SMS OTP factor.

    External dependencies (can be overridden by host app):
    - identity_store: ChallengeStorePort keyed by identity (default: InMemoryChallengeStore)
    - session_notes: SessionNotesPort of the host session (default: InMemorySessionNotes)
    - sms_sender: SMSSenderPort implementation (default: ConsoleSMSSender)
    - user_directory: UserDirectoryPort implementation (default: InMemoryUserDirectory)
    - token_issuer: TokenIssuerPort for non-interactive logins (default: None)
    - page_renderer: PageRendererPort for interactive pages (default: SimplePageRenderer)

    Config (under config.otp.*):
    - code_length: Number of digits (default: 6)
    - ttl_seconds: Challenge lifetime (default: 300)
    - sender_id: SMS originator (default: None)
    - simulation_mode: Skip SMS and echo the code (default: False)
    - token_endpoint_marker: Path fragment of the token endpoint (default: "/token")
    - message_template: SMS text with {code} and {minutes}
    - max_entries: Capacity of the in-memory store (default: None)

    Usage:
        container = OTPContainer()
        container.config.from_dict({"otp": {"ttl_seconds": 120}})

        for cmd_class, handler_provider in get_all_command_handlers(container).items():
            mediator.register(cmd_class, handler_provider())
    """

    wiring_config = containers.WiringConfiguration(
        modules=[
            "sms_otp_auth.contrib.fastapi.router",
            "sms_otp_auth.contrib.django.views",
        ]
    )

    config = providers.Configuration()

    # ═══════════════════════════════════════════════════════════════
    # SETTINGS
    # ═══════════════════════════════════════════════════════════════

    settings = providers.Singleton(OTPSettings.from_mapping, config.otp)

    # ═══════════════════════════════════════════════════════════════
    # DEFAULT ADAPTERS (can be overridden)
    # ═══════════════════════════════════════════════════════════════

    identity_store = providers.Singleton(
        InMemoryChallengeStore,
        max_entries=config.otp.max_entries,
    )

    session_notes = providers.Singleton(InMemorySessionNotes)

    session_store = providers.Singleton(SessionChallengeStore, notes=session_notes)

    sms_sender = providers.Singleton(ConsoleSMSSender)

    user_directory = providers.Singleton(InMemoryUserDirectory)

    # Optional - must be provided by app for non-interactive logins
    token_issuer = providers.Object(None)

    page_renderer = providers.Singleton(SimplePageRenderer)

    # ═══════════════════════════════════════════════════════════════
    # ENGINE
    # ═══════════════════════════════════════════════════════════════

    response_shaper = providers.Singleton(ResponseShaper.from_settings, settings)

    engine = providers.Singleton(
        OTPChallengeEngine,
        identity_store=identity_store,
        sms_sender=sms_sender,
        user_directory=user_directory,
        settings=settings,
        session_store=session_store,
        shaper=response_shaper,
        token_issuer=token_issuer,
    )

    # ═══════════════════════════════════════════════════════════════
    # COMMAND HANDLERS
    # ═══════════════════════════════════════════════════════════════

    authenticate_handler = providers.Factory(
        AuthenticateWithSMSOTPHandler,
        engine=engine,
    )


def get_all_command_handlers(container: OTPContainer) -> dict:
    """
    Return a mapping of Command classes to their handler providers.

    Useful for registering all handlers with a Mediator.
    """
    from sms_otp_auth.application.commands import AuthenticateWithSMSOTP

    return {
        AuthenticateWithSMSOTP: container.authenticate_handler,
    }


__all__ = ["OTPContainer", "get_all_command_handlers"]
