"""
Obituaries API endpoints.

Feed, posts, emoji reactions, saves, comments and comment likes. Reads are
public; writes go through the session guard.
"""
from typing import List
from uuid import UUID

from django.http import HttpRequest, HttpResponse
from ninja import Router
from ninja.errors import HttpError

from apps.identity.session import get_session, session_auth
from . import engagement_service, services
from .dtos import (
    CommentIn,
    CommentLikesDTO,
    CommentOut,
    CommentThreadOut,
    EmojiReactionsDTO,
    FeedPageOut,
    IdsIn,
    ObituaryIn,
    ObituaryOut,
    ReactionIn,
    ToggleResultDTO,
)
from .pagination import DEFAULT_PAGE_SIZE
from .submission import SUGGESTED_CAUSES

router = Router(tags=["Obituaries"])


# =============================================================================
# Feed & Posts
# =============================================================================

@router.get("", response=FeedPageOut, auth=None)
def get_feed(request: HttpRequest, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0):
    """
    One page of the feed, newest first. ``has_more`` is false once a short
    page comes back.
    """
    page = services.get_feed_page(limit, offset)
    return {
        "items": page.items,
        "offset": page.offset,
        "limit": page.limit,
        "next_offset": page.next_offset,
        "has_more": page.has_more,
    }


@router.get("/count", auth=None)
def count_obituaries_api(request: HttpRequest):
    return {"count": services.count_obituaries()}


@router.get("/causes", response=List[str], auth=None)
def list_causes(request: HttpRequest):
    """Suggested cause-of-death tags for the submission form."""
    return SUGGESTED_CAUSES


@router.get("/saved", response=List[ObituaryOut], auth=session_auth)
def list_saved(request: HttpRequest):
    return services.list_saved_obituaries(request.auth)


@router.post("", response=ObituaryOut, auth=session_auth)
def create_obituary_api(request: HttpRequest, payload: ObituaryIn):
    return services.create_obituary(request.auth, payload)


@router.post("/comment-counts", auth=None)
def comment_counts_api(request: HttpRequest, payload: IdsIn):
    """Comment totals for a batch of obituaries, zero-filled."""
    return engagement_service.comment_counts(payload.ids)


@router.post("/comments/likes", response=CommentLikesDTO, auth=None)
def comment_likes_api(request: HttpRequest, payload: IdsIn):
    """Like totals for a batch of comments, plus the ones the caller liked."""
    return engagement_service.comment_like_counts(payload.ids, get_session(request))


@router.post("/comments/{comment_id}/like", response=ToggleResultDTO, auth=session_auth)
def toggle_comment_like_api(request: HttpRequest, comment_id: UUID):
    return ToggleResultDTO(active=services.toggle_comment_like(request.auth, comment_id))


@router.delete("/comments/{comment_id}", response={204: None}, auth=session_auth)
def delete_comment_api(request: HttpRequest, comment_id: UUID):
    """
    Delete one of the caller's own comments.
    """
    if not services.delete_comment(request.auth, comment_id):
        raise HttpError(404, "Comment not found")
    return HttpResponse(status=204)


@router.get("/{obituary_id}", response=ObituaryOut, auth=None)
def get_obituary_api(request: HttpRequest, obituary_id: UUID):
    obituary = services.get_obituary(obituary_id)
    if not obituary:
        raise HttpError(404, "Obituary not found")
    return obituary


@router.delete("/{obituary_id}", response={204: None}, auth=session_auth)
def delete_obituary_api(request: HttpRequest, obituary_id: UUID):
    """
    Founder-only. Removes reactions and comments along with the post.
    """
    services.delete_obituary(request.auth, obituary_id)
    return HttpResponse(status=204)


# =============================================================================
# Reactions & Saves
# =============================================================================

@router.get("/{obituary_id}/reactions", response=EmojiReactionsDTO, auth=None)
def get_reactions(request: HttpRequest, obituary_id: UUID):
    return engagement_service.emoji_reaction_counts(obituary_id, get_session(request))


@router.post("/{obituary_id}/reactions", response=ToggleResultDTO, auth=session_auth)
def toggle_reaction_api(request: HttpRequest, obituary_id: UUID, payload: ReactionIn):
    return ToggleResultDTO(active=services.toggle_reaction(request.auth, obituary_id, payload.kind))


@router.get("/{obituary_id}/save", response=ToggleResultDTO, auth=None)
def get_saved_state(request: HttpRequest, obituary_id: UUID):
    return ToggleResultDTO(active=services.is_saved(get_session(request), obituary_id))


@router.post("/{obituary_id}/save", response=ToggleResultDTO, auth=session_auth)
def toggle_save_api(request: HttpRequest, obituary_id: UUID):
    return ToggleResultDTO(active=services.toggle_save(request.auth, obituary_id))


# =============================================================================
# Comments
# =============================================================================

@router.get("/{obituary_id}/comments", response=List[CommentThreadOut], auth=None)
def list_comments_api(request: HttpRequest, obituary_id: UUID):
    """
    Comments grouped into single-level threads, oldest first.
    """
    return services.build_comment_threads(services.list_comments(obituary_id))


@router.post("/{obituary_id}/comments", response=CommentOut, auth=session_auth)
def create_comment_api(request: HttpRequest, obituary_id: UUID, payload: CommentIn):
    return services.create_comment(
        request.auth,
        obituary_id,
        payload.content,
        media_urls=payload.media_urls,
        parent_id=payload.parent_id,
    )
