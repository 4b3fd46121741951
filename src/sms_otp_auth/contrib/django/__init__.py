"""
Django integration for py-sms-otp-auth.

Add ``"sms_otp_auth.contrib.django"`` to ``INSTALLED_APPS`` to make the
``login-sms.html`` and ``error.html`` templates available, then include
``get_otp_urls()`` in the URLconf.
"""

from .views import SMSOTPView, SMSOTPTokenView, get_otp_urls
from .session import DjangoSessionNotes
from .conf import get_otp_settings, get_bulker_sender

__all__ = [
    "SMSOTPView",
    "SMSOTPTokenView",
    "get_otp_urls",
    "DjangoSessionNotes",
    "get_otp_settings",
    "get_bulker_sender",
]
