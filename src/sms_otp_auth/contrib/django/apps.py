from django.apps import AppConfig


class SMSOTPConfig(AppConfig):
    name = "sms_otp_auth.contrib.django"
    label = "sms_otp_auth"
    verbose_name = "SMS OTP"
