"""
Engagement aggregation: comment counts, emoji reactions, comment likes and
the per-profile Burn Score.

Every function issues a fixed number of queries regardless of how many ids
it is given (``IN`` filter + ``GROUP BY``).
"""
from typing import Dict, Iterable, Optional
from uuid import UUID

from django.db.models import Count

from apps.identity.session import SessionContext
from .dtos import CommentLikesDTO, EmojiReactionsDTO
from .models import EMOJI_REACTIONS, Comment, Obituary, Reaction, ReactionType


def _zero_filled(ids: Iterable[UUID], rows, key: str) -> Dict[str, int]:
    counts = {str(i): 0 for i in ids}
    for row in rows:
        counts[str(row[key])] = row['total']
    return counts


def comment_counts(obituary_ids: Iterable[UUID]) -> Dict[str, int]:
    """
    Map obituary id -> number of comments. Every requested id is present.
    """
    ids = list(obituary_ids)
    if not ids:
        return {}
    rows = (
        Comment.objects.filter(obituary_id__in=ids)
        .values('obituary_id')
        .annotate(total=Count('id'))
        .order_by()
    )
    return _zero_filled(ids, rows, 'obituary_id')


def emoji_reaction_counts(obituary_id: UUID, session: Optional[SessionContext] = None) -> EmojiReactionsDTO:
    """
    Counts for all five emoji kinds on one obituary (zero-filled), plus the
    subset the caller authored.
    """
    rows = Reaction.objects.filter(
        obituary_id=obituary_id, type__in=EMOJI_REACTIONS
    ).values_list('type', 'user_id')

    counts = {str(kind): 0 for kind in EMOJI_REACTIONS}
    mine = []
    for kind, user_id in rows:
        counts[kind] += 1
        if session is not None and user_id == session.user_id:
            mine.append(kind)

    return EmojiReactionsDTO(counts=counts, mine=[k for k in counts if k in mine])


def emoji_reaction_totals(obituary_ids: Iterable[UUID]) -> Dict[str, int]:
    """Map obituary id -> total emoji reactions (all five kinds)."""
    ids = list(obituary_ids)
    if not ids:
        return {}
    rows = (
        Reaction.objects.filter(obituary_id__in=ids, type__in=EMOJI_REACTIONS)
        .values('obituary_id')
        .annotate(total=Count('id'))
        .order_by()
    )
    return _zero_filled(ids, rows, 'obituary_id')


def comment_like_counts(comment_ids: Iterable[UUID], session: Optional[SessionContext] = None) -> CommentLikesDTO:
    """
    Map comment id -> like count (zero-filled), plus the comments the caller liked.
    """
    ids = list(comment_ids)
    if not ids:
        return CommentLikesDTO(counts={}, mine=[])

    rows = Reaction.objects.filter(
        comment_id__in=ids, type=ReactionType.LIKE
    ).values_list('comment_id', 'user_id')

    counts = {str(i): 0 for i in ids}
    mine = []
    for comment_id, user_id in rows:
        counts[str(comment_id)] += 1
        if session is not None and user_id == session.user_id:
            mine.append(str(comment_id))

    return CommentLikesDTO(counts=counts, mine=mine)


def burn_score(user_id: UUID) -> int:
    """
    Emoji reactions + comments on the user's obituaries, plus likes on
    comments under those obituaries.
    """
    obituary_ids = Obituary.objects.filter(founder_id=user_id).values('id')

    reactions = Reaction.objects.filter(
        obituary_id__in=obituary_ids, type__in=EMOJI_REACTIONS
    ).count()
    comments = Comment.objects.filter(obituary_id__in=obituary_ids).count()
    likes = Reaction.objects.filter(
        comment__obituary_id__in=obituary_ids, type=ReactionType.LIKE
    ).count()

    return reactions + comments + likes
