from django.conf import settings


def pytest_configure():
    if not settings.configured:
        settings.configure(
            INSTALLED_APPS=[
                "django.contrib.contenttypes",
                "django.contrib.sessions",
                "sms_otp_auth.contrib.django",
            ],
            MIDDLEWARE=[
                "django.contrib.sessions.middleware.SessionMiddleware",
            ],
            TEMPLATES=[
                {
                    "BACKEND": "django.template.backends.django.DjangoTemplates",
                    "APP_DIRS": True,
                }
            ],
            CACHES={
                "default": {
                    "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
                }
            },
            SESSION_ENGINE="django.contrib.sessions.backends.cache",
            ALLOWED_HOSTS=["testserver"],
            SECRET_KEY="test_secret",
            ROOT_URLCONF="tests.contrib.django.urls",
        )
        import django

        django.setup()
