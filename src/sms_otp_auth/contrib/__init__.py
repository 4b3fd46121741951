"""
Contrib modules for framework and library integrations.

Available integrations:
- dependency_injector: OTPContainer for DI
- django: Views, session notes and settings helpers for Django
- fastapi: Router and exception handlers for FastAPI

Import them from their submodules; nothing is imported here so that
using one framework never requires the others to be configured.
"""
