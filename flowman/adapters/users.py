"""
Request User Provider — current user for documents built during a request.

Usage in settings.py:
    MIDDLEWARE = [
        ...
        "django.contrib.auth.middleware.AuthenticationMiddleware",
        "flowman.adapters.users.CurrentUserMiddleware",
    ]

Outside requests (management commands, Celery tasks) wrap the work in
acting_as(user), or pass the user to DocumentBuilder explicitly.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar

_current_user: ContextVar = ContextVar("flowman_current_user", default=None)


class CurrentUserMiddleware:
    """Expose request.user to RequestUserProvider for the request's duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        token = _current_user.set(getattr(request, "user", None))
        try:
            return self.get_response(request)
        finally:
            _current_user.reset(token)


@contextmanager
def acting_as(user):
    """Make user the current user inside the block."""
    token = _current_user.set(user)
    try:
        yield user
    finally:
        _current_user.reset(token)


class RequestUserProvider:
    """Implements UserProvider from the user set by the middleware."""

    def current_user(self):
        user = _current_user.get()
        if user is None or not getattr(user, "is_authenticated", False):
            return None
        return user
