"""DTOs and API schemas for the Obituaries app."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from ninja import Schema


@dataclass(frozen=True)
class EmojiReactionsDTO:
    """Per-emoji counts for one obituary, plus the kinds the caller used."""
    counts: Dict[str, int]
    mine: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CommentLikesDTO:
    counts: Dict[str, int]
    mine: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ToggleResultDTO:
    active: bool


# =============================================================================
# Schemas
# =============================================================================

class FounderOut(Schema):
    id: UUID
    handle: Optional[str] = None
    avatar_url: Optional[str] = None


class AuthorOut(Schema):
    id: UUID
    handle: Optional[str] = None


class ObituaryOut(Schema):
    id: UUID
    title: str
    blurb: str
    causes: List[str]
    story_md: str
    media_urls: List[str]
    upvotes: int
    roast_score: int
    founder_id: UUID
    created_at: datetime
    founder: FounderOut


class ObituaryIn(Schema):
    title: str
    blurb: str
    causes: List[str] = []
    story_md: str
    media_urls: List[str] = []


class FeedPageOut(Schema):
    items: List[ObituaryOut]
    offset: int
    limit: int
    next_offset: int
    has_more: bool


class CommentOut(Schema):
    id: UUID
    content: str
    author_id: UUID
    obituary_id: UUID
    parent_id: Optional[UUID] = None
    media_urls: List[str]
    created_at: datetime
    author: AuthorOut


class CommentThreadOut(Schema):
    comment: CommentOut
    replies: List[CommentOut]


class CommentIn(Schema):
    content: str = ''
    media_urls: List[str] = []
    parent_id: Optional[UUID] = None


class ReactionIn(Schema):
    kind: str


class IdsIn(Schema):
    ids: List[UUID]
