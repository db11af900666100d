"""
Anonymous identity provisioning.

Every authenticated session maps to exactly one Profile row with a non-null
handle. Rows are created lazily, the first time the caller writes anything.
"""
import logging
import random
from typing import Tuple

from django.db import IntegrityError, transaction

from apps.core.errors import RemoteFailure
from .models import Account, Profile
from .session import SessionContext, require_session

logger = logging.getLogger(__name__)

ADJECTIVES = [
    'Failed', 'Burned', 'Crashed', 'Doomed', 'Broken', 'Lost', 'Dead', 'Ruined',
    'Fallen', 'Wrecked', 'Sunk', 'Busted', 'Tanked', 'Bombed', 'Folded', 'Ghosted',
]

NOUNS = [
    'Founder', 'Entrepreneur', 'Builder', 'Dreamer', 'Visionary', 'Creator', 'Starter',
    'Hustler', 'Pioneer', 'Innovator', 'Disruptor', 'Maker', 'Idealist', 'Optimist',
]

HANDLE_NUMBER_MAX = 999


def generate_anonymous_handle() -> str:
    """Return ``{Adjective}{Noun}{1-999}`` drawn from the fixed word lists."""
    adjective = random.choice(ADJECTIVES)
    noun = random.choice(NOUNS)
    number = random.randint(1, HANDLE_NUMBER_MAX)
    return f"{adjective}{noun}{number}"


def ensure_profile(session: SessionContext) -> Tuple[Profile, bool]:
    """
    Make sure the caller has a Profile with a handle.

    Returns:
        (profile, created) - created is True only when a new row was inserted,
        which is the caller's cue to send the user through onboarding.

    Raises:
        Unauthenticated: no session.
        RemoteFailure: the write was rejected (e.g. handle collision). Not retried.
    """
    session = require_session(session)

    if session.flagged_deleted:
        logger.info(f"Account {session.user_id} was previously deleted, resetting")
        Account.objects.filter(id=session.user_id).update(is_deleted=False)

    profile = Profile.objects.filter(id=session.user_id).first()
    if profile is not None and profile.handle:
        return profile, False

    try:
        with transaction.atomic():
            if profile is not None:
                # Legacy/partial row without a handle
                profile.handle = generate_anonymous_handle()
                profile.save(update_fields=['handle'])
                logger.info(f"Assigned handle {profile.handle} to existing profile {profile.id}")
                return profile, False

            profile = Profile.objects.create(
                id=session.user_id,
                email=session.email,
                handle=generate_anonymous_handle(),
                avatar_url=None,
                karma=0,
            )
    except IntegrityError as e:
        # A concurrent first write for the same session created the row
        existing = Profile.objects.filter(id=session.user_id).first()
        if existing is not None and existing.handle:
            logger.info(f"Profile {existing.id} was provisioned concurrently")
            return existing, False
        logger.error(f"Failed to provision profile for {session.user_id}: {e}")
        raise RemoteFailure(f"Failed to create user: {e}")

    logger.info(f"Created profile {profile.id} with handle {profile.handle}")
    return profile, True
