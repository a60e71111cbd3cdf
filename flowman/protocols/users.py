"""
User Provider Protocol — Who is building the document.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class UserProvider(Protocol):
    """
    Protocol for resolving the current user.

    Implementations:
        - RequestUserProvider: user of the request being served (default)
    """

    def current_user(self) -> Any | None:
        """
        Return the current user.

        Returns:
            A saved AUTH_USER_MODEL instance, or None when there is no
            authenticated user (e.g. management commands, Celery tasks)
        """
        ...
