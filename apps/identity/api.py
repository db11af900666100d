"""
Identity API endpoints with JWT authentication.

Provides login, logout, token refresh, profile provisioning, settings and
account deletion. Tokens travel in httpOnly cookies or an Authorization
bearer header.
"""
import os
from typing import List
from uuid import UUID

from django.conf import settings
from django.contrib.auth import authenticate
from django.http import HttpRequest, HttpResponse
from ninja import Router
from ninja.errors import HttpError

from .dtos import (
    AccountSettingsDTO,
    LoginSchema,
    ProvisionResultDTO,
    PublicProfileOut,
    SettingsUpdate,
    TokenResponse,
)
from .jwt_auth import (
    REFRESH_COOKIE,
    clear_auth_cookies,
    create_access_token,
    create_token_pair,
    get_user_id_from_token,
    set_auth_cookies,
)
from .models import Account
from .provisioning import ensure_profile
from .services import (
    delete_account,
    get_account_settings,
    get_public_profile,
    list_timezones,
    to_profile_dto,
    update_settings,
)
from .session import session_auth

router = Router(tags=["Identity"])


def is_production() -> bool:
    """Check if running in production (DEBUG=False or explicitly flagged)."""
    return os.getenv('ENVIRONMENT', '').lower() == 'production' or not settings.DEBUG


def _json_response(payload: TokenResponse) -> HttpResponse:
    return HttpResponse(payload.model_dump_json(), content_type='application/json')


# =============================================================================
# Auth Endpoints
# =============================================================================

@router.post("/login", response=TokenResponse, auth=None)
def login_user(request: HttpRequest, payload: LoginSchema):
    """
    Authenticate and set JWT tokens in httpOnly cookies.
    """
    account = authenticate(request, username=payload.username, password=payload.password)

    if account is None:
        raise HttpError(401, "Invalid username or password")

    if not account.is_active:
        raise HttpError(401, "Account is disabled")

    access_token, refresh_token = create_token_pair(account.id, account.email)

    response = _json_response(TokenResponse(success=True, user_id=account.id))
    return set_auth_cookies(response, access_token, refresh_token, secure=is_production())


@router.post("/logout", response=TokenResponse, auth=None)
def logout_user(request: HttpRequest):
    """
    Clear authentication cookies.
    """
    return clear_auth_cookies(_json_response(TokenResponse(success=True, message="Logged out")))


@router.post("/refresh", response=TokenResponse, auth=None)
def refresh_token(request: HttpRequest):
    """
    Issue a new access token from the refresh token cookie.
    """
    refresh_token_value = request.COOKIES.get(REFRESH_COOKIE)
    if not refresh_token_value:
        raise HttpError(401, "No refresh token")

    user_id = get_user_id_from_token(refresh_token_value, token_type='refresh')
    if not user_id:
        raise HttpError(401, "Invalid refresh token")

    try:
        account = Account.objects.get(id=user_id, is_active=True)
    except Account.DoesNotExist:
        raise HttpError(401, "Invalid refresh token")

    response = _json_response(TokenResponse(success=True, user_id=account.id))
    return set_auth_cookies(response, create_access_token(account.id, account.email), secure=is_production())


# =============================================================================
# Profile Endpoints
# =============================================================================

@router.post("/profile/ensure", response=ProvisionResultDTO, auth=session_auth)
def ensure_profile_api(request: HttpRequest):
    """
    Provision the caller's profile. ``created`` tells the client to route a
    first-time user to onboarding (handle + timezone).
    """
    profile, created = ensure_profile(request.auth)
    return ProvisionResultDTO(profile=to_profile_dto(profile), created=created)


@router.get("/me", response=AccountSettingsDTO, auth=session_auth)
def get_me(request: HttpRequest):
    """
    Get the caller's own profile, including private fields.
    """
    account_settings = get_account_settings(request.auth)
    if not account_settings:
        raise HttpError(404, "User not found")
    return account_settings


@router.put("/settings", response=AccountSettingsDTO, auth=session_auth)
def update_settings_api(request: HttpRequest, payload: SettingsUpdate):
    """
    Change handle and/or timezone.
    """
    return update_settings(request.auth, payload)


@router.get("/timezones", response=List[str], auth=None)
def list_timezones_api(request: HttpRequest):
    return list_timezones()


@router.delete("/account", response={204: None}, auth=session_auth)
def delete_account_api(request: HttpRequest):
    """
    Permanently delete the caller's obituaries, comments, reactions and
    profile. Auth cookies are cleared.
    """
    delete_account(request.auth)
    return clear_auth_cookies(HttpResponse(status=204))


@router.get("/profiles/{user_id}", response=PublicProfileOut, auth=None)
def get_profile_api(request: HttpRequest, user_id: UUID):
    """
    Public profile: handle, Burn Score and the user's obituaries.
    """
    profile = get_public_profile(user_id)
    if not profile:
        raise HttpError(404, "Profile not found")
    return profile
