"""
Signed session tokens for KilledIt.

Access tokens identify the caller on every request; refresh tokens only mint
new access tokens. Both travel as httpOnly cookies, or the access token as a
bearer header.
"""
import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from uuid import UUID
from django.conf import settings


JWT_ALGORITHM = 'HS256'
ACCESS_TOKEN_EXPIRE_MINUTES = 60
REFRESH_TOKEN_EXPIRE_DAYS = 30


def _secret() -> str:
    return getattr(settings, 'JWT_SECRET', None) or settings.SECRET_KEY


def _encode(user_id: UUID, token_type: str, lifetime: timedelta, email: str = '') -> str:
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(user_id),
        'exp': now + lifetime,
        'iat': now,
        'type': token_type,
    }
    if email:
        payload['email'] = email
    return jwt.encode(payload, _secret(), algorithm=JWT_ALGORITHM)


def create_access_token(user_id: UUID, email: str = '') -> str:
    """
    Create a short-lived access token carrying the account id (and email).
    """
    return _encode(user_id, 'access', timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES), email)


def create_refresh_token(user_id: UUID) -> str:
    """Long-lived token accepted only by the refresh endpoint."""
    return _encode(user_id, 'refresh', timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS))


def create_token_pair(user_id: UUID, email: str = '') -> Tuple[str, str]:
    return create_access_token(user_id, email), create_refresh_token(user_id)


def decode_token(token: str) -> Optional[dict]:
    """Payload of a valid, unexpired token, else None."""
    try:
        return jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None


def get_user_id_from_token(token: str, token_type: str = 'access') -> Optional[UUID]:
    """
    Extract the account id from a valid token of the given type.
    """
    payload = decode_token(token)
    if not payload or payload.get('type') != token_type or 'sub' not in payload:
        return None
    try:
        return UUID(payload['sub'])
    except ValueError:
        return None


ACCESS_COOKIE = 'access_token'
REFRESH_COOKIE = 'refresh_token'


def _cookie(max_age: int, secure: bool) -> dict:
    return {'httponly': True, 'secure': secure, 'samesite': 'Lax', 'path': '/', 'max_age': max_age}


def set_auth_cookies(response, access_token: str, refresh_token: Optional[str] = None, secure: bool = False):
    """Attach tokens as httpOnly cookies. ``secure`` is on outside local dev."""
    response.set_cookie(ACCESS_COOKIE, access_token, **_cookie(ACCESS_TOKEN_EXPIRE_MINUTES * 60, secure))
    if refresh_token:
        response.set_cookie(
            REFRESH_COOKIE, refresh_token, **_cookie(REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60, secure)
        )
    return response


def clear_auth_cookies(response):
    response.delete_cookie(ACCESS_COOKIE, path='/')
    response.delete_cookie(REFRESH_COOKIE, path='/')
    return response
