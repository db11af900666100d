"""
Per-request session context.

The auth guard resolves the caller once at the API boundary and hands a
frozen SessionContext to every service call that needs one. Services never
look the current user up on their own.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.http import HttpRequest

from apps.core.errors import Unauthenticated
from .jwt_auth import ACCESS_COOKIE, get_user_id_from_token
from .models import Account

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    user_id: UUID
    email: str
    flagged_deleted: bool = False

    @classmethod
    def for_account(cls, account: Account) -> "SessionContext":
        return cls(
            user_id=account.id,
            email=account.email or '',
            flagged_deleted=account.is_deleted,
        )


def _bearer_token(request: HttpRequest) -> Optional[str]:
    header = request.headers.get('Authorization', '')
    if header.lower().startswith('bearer '):
        return header[7:].strip() or None
    return request.COOKIES.get(ACCESS_COOKIE)


def get_session(request: HttpRequest) -> Optional[SessionContext]:
    """
    Resolve the caller from a bearer token, the access_token cookie, or a
    Django login session (admin/tests), in that order.
    """
    token = _bearer_token(request)
    if token:
        user_id = get_user_id_from_token(token)
        if not user_id:
            return None
        try:
            return SessionContext.for_account(Account.objects.get(id=user_id, is_active=True))
        except Account.DoesNotExist:
            logger.warning(f"Token for unknown or inactive account {user_id}")
            return None

    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated and user.is_active:
        return SessionContext.for_account(user)
    return None


def require_session(session: Optional[SessionContext]) -> SessionContext:
    """Raise Unauthenticated unless a session is present."""
    if session is None:
        raise Unauthenticated()
    return session


class SessionAuth:
    """
    Ninja auth guard. On success ``request.auth`` is the SessionContext;
    otherwise Ninja answers 401 before the view runs.
    """

    def __call__(self, request: HttpRequest) -> Optional[SessionContext]:
        return get_session(request)


session_auth = SessionAuth()
