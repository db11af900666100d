"""
Four-step obituary submission wizard: basics -> causes -> story -> media.

Holds the draft between steps and issues a single ``create_obituary`` call
at the end. Going back never discards data, and a failed submit keeps the
draft intact with ``error_message`` set.
"""
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from apps.core.errors import KilledItError
from apps.identity.session import SessionContext
from .dtos import ObituaryIn
from .models import Obituary
from .services import create_obituary

logger = logging.getLogger(__name__)

SUGGESTED_CAUSES = [
    'founder-burnout', 'bad-ui', 'market-saturation', 'over-engineering',
    'no-market-need', 'ai-hype', 'crypto-winter', 'regulatory-issues',
    'terrible-idea', 'ran-out-of-money', 'team-conflict', 'bad-timing',
    'competition', 'pivot-fatigue', 'feature-creep', 'poor-execution',
]


class WizardStep(IntEnum):
    BASICS = 1
    CAUSES = 2
    STORY = 3
    MEDIA = 4


@dataclass
class SubmissionWizard:
    title: str = ''
    blurb: str = ''
    causes: List[str] = field(default_factory=list)
    story_md: str = ''
    media_urls: List[str] = field(default_factory=list)
    selected_gifs: List[str] = field(default_factory=list)
    step: WizardStep = WizardStep.BASICS
    is_submitting: bool = False
    error_message: Optional[str] = None
    redirect_to: Optional[str] = None

    def can_proceed(self) -> bool:
        if self.step == WizardStep.BASICS:
            return bool(self.title.strip() and self.blurb.strip())
        if self.step == WizardStep.CAUSES:
            return len(self.causes) > 0
        if self.step == WizardStep.STORY:
            return bool(self.story_md.strip())
        return True

    def next_step(self) -> bool:
        if self.step == WizardStep.MEDIA or not self.can_proceed():
            return False
        self.step = WizardStep(self.step + 1)
        return True

    def previous_step(self) -> bool:
        if self.step == WizardStep.BASICS:
            return False
        self.step = WizardStep(self.step - 1)
        return True

    # -- causes -------------------------------------------------------------

    def add_cause(self, cause: str) -> None:
        if cause not in self.causes:
            self.causes.append(cause)

    def remove_cause(self, cause: str) -> None:
        self.causes = [c for c in self.causes if c != cause]

    def add_custom_cause(self, cause: str) -> bool:
        cause = cause.strip()
        if not cause or cause in self.causes:
            return False
        self.causes.append(cause)
        return True

    # -- media --------------------------------------------------------------

    def attach_uploads(self, urls: List[str]) -> None:
        self.media_urls.extend(urls)

    def add_gif(self, url: str) -> None:
        self.selected_gifs.append(url)

    def remove_gif(self, index: int) -> None:
        if 0 <= index < len(self.selected_gifs):
            del self.selected_gifs[index]

    @property
    def all_media_urls(self) -> List[str]:
        """Uploaded files first, then picked GIFs."""
        return [*self.media_urls, *self.selected_gifs]

    # -- submit -------------------------------------------------------------

    def submit(self, session: Optional[SessionContext]) -> Optional[Obituary]:
        """
        Create the obituary. On success sets ``redirect_to`` to the new
        post's page; on failure sets ``error_message`` and leaves the draft
        untouched.
        """
        self.error_message = None
        self.is_submitting = True
        try:
            obituary = create_obituary(session, ObituaryIn(
                title=self.title,
                blurb=self.blurb,
                causes=self.causes,
                story_md=self.story_md,
                media_urls=self.all_media_urls,
            ))
        except KilledItError as e:
            logger.error(f"Failed to create obituary: {e.message}")
            self.error_message = f"Failed to create obituary: {e.message}"
            return None
        finally:
            self.is_submitting = False

        self.redirect_to = f"/obituary/{obituary.id}"
        return obituary
