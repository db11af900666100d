"""DTOs for Identity app."""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from ninja import Schema


@dataclass(frozen=True)
class ProfileDTO:
    id: UUID
    handle: str
    avatar_url: Optional[str]
    karma: int
    timezone: str
    created_at: datetime
    burn_score: int


@dataclass(frozen=True)
class AccountSettingsDTO:
    """Private view of the caller's own profile."""
    id: UUID
    handle: str
    email: str
    karma: int
    timezone: str
    created_at: datetime
    burn_score: int


@dataclass(frozen=True)
class ProvisionResultDTO:
    profile: ProfileDTO
    created: bool


class SettingsUpdate(Schema):
    handle: Optional[str] = None
    timezone: Optional[str] = None


class LoginSchema(Schema):
    username: str
    password: str


class TokenResponse(Schema):
    success: bool
    user_id: Optional[UUID] = None
    message: Optional[str] = None


class ProfileCardOut(Schema):
    """Obituary summary shown on a profile page."""
    id: UUID
    title: str
    blurb: str
    causes: List[str]
    created_at: datetime
    comment_count: int
    reaction_count: int


class PublicProfileOut(Schema):
    profile: ProfileDTO
    obituaries: List[ProfileCardOut]
