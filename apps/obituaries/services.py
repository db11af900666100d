"""
Data access for obituaries, comments and reactions.

Every write takes the caller's SessionContext explicitly. Reads that do not
depend on the caller take plain ids.
"""
import logging
from typing import List, Optional, Sequence
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import Q

from apps.core.errors import RemoteFailure, Unauthorized, ValidationFailed
from apps.identity.provisioning import ensure_profile
from apps.identity.session import SessionContext, require_session
from .dtos import ObituaryIn
from .models import EMOJI_REACTIONS, Comment, Obituary, Reaction, ReactionType
from .pagination import Page, normalize_window

logger = logging.getLogger(__name__)

BLURB_MAX_LENGTH = 120


# =============================================================================
# Obituaries
# =============================================================================

def _obituaries():
    return Obituary.objects.select_related('founder').order_by('-created_at', '-id')


def list_obituaries(limit: int = 20, offset: int = 0) -> List[Obituary]:
    """Newest first, founder joined in."""
    limit, offset = normalize_window(limit, offset)
    return list(_obituaries()[offset:offset + limit])


def get_feed_page(limit: int = 20, offset: int = 0) -> Page:
    limit, offset = normalize_window(limit, offset)
    return Page(items=list_obituaries(limit, offset), offset=offset, limit=limit)


def count_obituaries() -> int:
    return Obituary.objects.count()


def get_obituary(obituary_id: UUID) -> Optional[Obituary]:
    return _obituaries().filter(id=obituary_id).first()


def list_user_obituaries(user_id: UUID) -> List[Obituary]:
    return list(_obituaries().filter(founder_id=user_id))


def _clean_causes(causes: Sequence[str]) -> List[str]:
    cleaned = []
    for cause in causes:
        cause = cause.strip()
        if cause and cause not in cleaned:
            cleaned.append(cause)
    return cleaned


def validate_obituary(payload: ObituaryIn) -> None:
    if not payload.title.strip() or not payload.blurb.strip() or not payload.story_md.strip():
        raise ValidationFailed("Please fill in all required fields")
    if len(payload.blurb.strip()) > BLURB_MAX_LENGTH:
        raise ValidationFailed(f"Blurb must be at most {BLURB_MAX_LENGTH} characters")
    if not _clean_causes(payload.causes):
        raise ValidationFailed("Pick at least one cause of death")


def create_obituary(session: Optional[SessionContext], payload: ObituaryIn) -> Obituary:
    """
    Create an obituary owned by the caller, provisioning their profile first
    if this is their first write.
    """
    session = require_session(session)
    validate_obituary(payload)
    ensure_profile(session)

    try:
        obituary = Obituary.objects.create(
            title=payload.title.strip(),
            blurb=payload.blurb.strip(),
            causes=_clean_causes(payload.causes),
            story_md=payload.story_md,
            media_urls=list(payload.media_urls),
            founder_id=session.user_id,
        )
    except IntegrityError as e:
        logger.error(f"Failed to create obituary: {e}")
        raise RemoteFailure(f"Failed to create obituary: {e}")

    logger.info(f"Obituary {obituary.id} created by {session.user_id}")
    return get_obituary(obituary.id)


def delete_obituary(session: Optional[SessionContext], obituary_id: UUID) -> None:
    """
    Founder-only delete. Reactions, then comments, then the obituary,
    all in one transaction.
    """
    session = require_session(session)

    founder_id = Obituary.objects.filter(id=obituary_id).values_list('founder_id', flat=True).first()
    if founder_id is None or founder_id != session.user_id:
        raise Unauthorized("Unauthorized or obituary not found")

    with transaction.atomic():
        Reaction.objects.filter(
            Q(obituary_id=obituary_id) | Q(comment__obituary_id=obituary_id)
        ).delete()
        # Replies first so the parent FK never dangles mid-delete
        Comment.objects.filter(obituary_id=obituary_id, parent__isnull=False).delete()
        Comment.objects.filter(obituary_id=obituary_id).delete()
        Obituary.objects.filter(id=obituary_id).delete()

    logger.info(f"Obituary {obituary_id} deleted by founder {session.user_id}")


# =============================================================================
# Reactions
# =============================================================================

def _toggle(session: SessionContext, kind: str, **target) -> bool:
    """
    Delete the caller's reaction if present, insert it otherwise.
    Returns True when the reaction now exists.
    """
    ensure_profile(session)
    lookup = dict(user_id=session.user_id, type=kind, **target)

    with transaction.atomic():
        deleted, _ = Reaction.objects.filter(**lookup).delete()
        if deleted:
            return False
        try:
            with transaction.atomic():
                Reaction.objects.create(**lookup)
        except IntegrityError:
            # A concurrent toggle inserted the same row first
            logger.warning(f"Duplicate reaction {kind} for {session.user_id} on {target}")
        return True


def toggle_reaction(session: Optional[SessionContext], obituary_id: UUID, kind: str) -> bool:
    session = require_session(session)
    if kind not in EMOJI_REACTIONS:
        raise ValidationFailed("Invalid emoji reaction")
    if not Obituary.objects.filter(id=obituary_id).exists():
        raise ValidationFailed("Obituary does not exist")
    return _toggle(session, kind, obituary_id=obituary_id)


def toggle_save(session: Optional[SessionContext], obituary_id: UUID) -> bool:
    session = require_session(session)
    if not Obituary.objects.filter(id=obituary_id).exists():
        raise ValidationFailed("Obituary does not exist")
    return _toggle(session, ReactionType.SAVE, obituary_id=obituary_id)


def is_saved(session: Optional[SessionContext], obituary_id: UUID) -> bool:
    if session is None:
        return False
    return Reaction.objects.filter(
        user_id=session.user_id, type=ReactionType.SAVE, obituary_id=obituary_id
    ).exists()


def list_saved_obituaries(session: Optional[SessionContext]) -> List[Obituary]:
    """The caller's saved obituaries, most recently saved first."""
    session = require_session(session)
    saves = (
        Reaction.objects.filter(user_id=session.user_id, type=ReactionType.SAVE, obituary__isnull=False)
        .select_related('obituary__founder')
        .order_by('-created_at')
    )
    seen = {}
    for reaction in saves:
        seen.setdefault(reaction.obituary_id, reaction.obituary)
    return list(seen.values())


def toggle_comment_like(session: Optional[SessionContext], comment_id: UUID) -> bool:
    session = require_session(session)
    if not Comment.objects.filter(id=comment_id).exists():
        raise ValidationFailed("Comment does not exist")
    return _toggle(session, ReactionType.LIKE, comment_id=comment_id)


# =============================================================================
# Comments
# =============================================================================

def create_comment(
    session: Optional[SessionContext],
    obituary_id: UUID,
    content: str,
    media_urls: Optional[List[str]] = None,
    parent_id: Optional[UUID] = None,
) -> Comment:
    """
    Trimmed content; empty content is only allowed with media attached.
    Replies must target a top-level comment on the same obituary.
    """
    session = require_session(session)
    content = (content or '').strip()
    media_urls = list(media_urls or [])

    if not content and not media_urls:
        raise ValidationFailed("Comment cannot be empty")
    if not Obituary.objects.filter(id=obituary_id).exists():
        raise ValidationFailed("Obituary does not exist")

    if parent_id is not None:
        parent = Comment.objects.filter(id=parent_id, obituary_id=obituary_id).first()
        if parent is None:
            raise ValidationFailed("Parent comment not found on this obituary")
        if parent.parent_id is not None:
            raise ValidationFailed("Replies cannot be replied to")

    ensure_profile(session)

    comment = Comment.objects.create(
        content=content,
        author_id=session.user_id,
        obituary_id=obituary_id,
        parent_id=parent_id,
        media_urls=media_urls,
    )
    logger.info(f"Comment {comment.id} added to obituary {obituary_id}")
    return Comment.objects.select_related('author').get(id=comment.id)


def list_comments(obituary_id: UUID) -> List[Comment]:
    """Oldest first, author joined in."""
    return list(
        Comment.objects.filter(obituary_id=obituary_id)
        .select_related('author')
        .order_by('created_at', 'id')
    )


def build_comment_threads(comments: List[Comment]) -> List[dict]:
    """
    Group a flat comment list into ``{"comment", "replies"}`` threads,
    keeping chronological order at both levels.
    """
    threads = {}
    for comment in comments:
        if comment.parent_id is None:
            threads[comment.id] = {"comment": comment, "replies": []}
    for comment in comments:
        if comment.parent_id is not None and comment.parent_id in threads:
            threads[comment.parent_id]["replies"].append(comment)
    return list(threads.values())


def delete_comment(session: Optional[SessionContext], comment_id: UUID) -> bool:
    """Author-only delete. Returns False when nothing matched."""
    session = require_session(session)
    with transaction.atomic():
        comment = Comment.objects.filter(id=comment_id, author_id=session.user_id).first()
        if comment is None:
            return False
        Reaction.objects.filter(
            Q(comment_id=comment_id) | Q(comment__parent_id=comment_id)
        ).delete()
        comment.delete()
    return True
