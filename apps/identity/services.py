"""Services for Identity app."""
import logging
from typing import List, Optional
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import Q

from apps.core.errors import ValidationFailed
from .dtos import AccountSettingsDTO, ProfileDTO, SettingsUpdate
from .models import Account, Profile
from .provisioning import ensure_profile
from .session import SessionContext, require_session

logger = logging.getLogger(__name__)

HANDLE_MAX_LENGTH = 50

TIMEZONES = [
    'UTC',
    'America/New_York',
    'America/Chicago',
    'America/Denver',
    'America/Los_Angeles',
    'Europe/London',
    'Europe/Paris',
    'Europe/Berlin',
    'Asia/Tokyo',
    'Asia/Shanghai',
    'Asia/Kolkata',
    'Asia/Dubai',
    'Australia/Sydney',
    'Pacific/Auckland',
]


def _burn_score(user_id: UUID) -> int:
    from apps.obituaries.engagement_service import burn_score
    return burn_score(user_id)


def to_profile_dto(profile: Profile) -> ProfileDTO:
    return ProfileDTO(
        id=profile.id,
        handle=profile.handle or '',
        avatar_url=profile.avatar_url,
        karma=profile.karma,
        timezone=profile.timezone,
        created_at=profile.created_at,
        burn_score=_burn_score(profile.id),
    )


def get_profile_dto(user_id: UUID) -> Optional[ProfileDTO]:
    try:
        return to_profile_dto(Profile.objects.get(id=user_id))
    except Profile.DoesNotExist:
        return None


def get_public_profile(user_id: UUID) -> Optional[dict]:
    """
    Profile plus obituary cards with their comment and emoji totals.
    Counts are fetched in two batched queries, not per card.
    """
    from apps.obituaries.engagement_service import comment_counts, emoji_reaction_totals
    from apps.obituaries.services import list_user_obituaries

    profile = get_profile_dto(user_id)
    if profile is None:
        return None

    obituaries = list_user_obituaries(user_id)
    ids = [o.id for o in obituaries]
    comments = comment_counts(ids)
    reactions = emoji_reaction_totals(ids)

    return {
        "profile": profile,
        "obituaries": [
            {
                "id": o.id,
                "title": o.title,
                "blurb": o.blurb,
                "causes": o.causes,
                "created_at": o.created_at,
                "comment_count": comments.get(str(o.id), 0),
                "reaction_count": reactions.get(str(o.id), 0),
            }
            for o in obituaries
        ],
    }


def get_account_settings(session: Optional[SessionContext]) -> Optional[AccountSettingsDTO]:
    session = require_session(session)
    profile = Profile.objects.filter(id=session.user_id).first()
    if profile is None:
        return None
    return AccountSettingsDTO(
        id=profile.id,
        handle=profile.handle or '',
        email=profile.email,
        karma=profile.karma,
        timezone=profile.timezone,
        created_at=profile.created_at,
        burn_score=_burn_score(profile.id),
    )


def update_settings(session: Optional[SessionContext], payload: SettingsUpdate) -> AccountSettingsDTO:
    """
    Change handle and/or timezone. Only fields that actually differ are written.
    """
    session = require_session(session)
    profile, _ = ensure_profile(session)

    updates = {}
    if payload.handle is not None:
        handle = payload.handle.strip()
        if not handle:
            raise ValidationFailed("Handle cannot be empty")
        if len(handle) > HANDLE_MAX_LENGTH:
            raise ValidationFailed(f"Handle must be at most {HANDLE_MAX_LENGTH} characters")
        if handle != profile.handle:
            updates['handle'] = handle

    if payload.timezone is not None and payload.timezone != profile.timezone:
        if payload.timezone and payload.timezone not in TIMEZONES:
            raise ValidationFailed(f"Unsupported timezone: {payload.timezone}")
        updates['timezone'] = payload.timezone

    if updates:
        try:
            with transaction.atomic():
                Profile.objects.filter(id=profile.id).update(**updates)
        except IntegrityError:
            raise ValidationFailed("That handle is already taken")
        logger.info(f"Profile {profile.id} updated: {sorted(updates)}")

    return get_account_settings(session)


def delete_account(session: Optional[SessionContext]) -> None:
    """
    Remove everything the caller owns or wrote, then their profile, and flag
    the account as deleted. One transaction: either all of it goes or none.
    """
    from apps.obituaries.models import Comment, Obituary, Reaction

    session = require_session(session)
    user_id = session.user_id

    with transaction.atomic():
        obituary_ids = list(Obituary.objects.filter(founder_id=user_id).values_list('id', flat=True))
        own_comment_ids = list(Comment.objects.filter(
            Q(author_id=user_id) | Q(obituary_id__in=obituary_ids)
        ).values_list('id', flat=True))
        reply_ids = list(Comment.objects.filter(parent_id__in=own_comment_ids).values_list('id', flat=True))
        comment_ids = set(own_comment_ids) | set(reply_ids)

        Reaction.objects.filter(
            Q(obituary_id__in=obituary_ids) | Q(comment_id__in=comment_ids) | Q(user_id=user_id)
        ).delete()
        Comment.objects.filter(id__in=reply_ids).delete()
        Comment.objects.filter(id__in=comment_ids).delete()
        Obituary.objects.filter(id__in=obituary_ids).delete()
        Profile.objects.filter(id=user_id).delete()
        Account.objects.filter(id=user_id).update(is_deleted=True)

    logger.info(f"Account {user_id} deleted ({len(obituary_ids)} obituaries removed)")


def list_timezones() -> List[str]:
    return list(TIMEZONES)
