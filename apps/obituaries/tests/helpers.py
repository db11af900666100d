from uuid import uuid4

from django.contrib.auth import get_user_model

from apps.identity.session import SessionContext
from apps.obituaries.dtos import ObituaryIn
from apps.obituaries.services import create_obituary

Account = get_user_model()


def make_session(username=None):
    """Create an account and return (account, session)."""
    username = username or f"user_{uuid4().hex[:8]}"
    account = Account.objects.create_user(
        username=username,
        email=f"{username}@test.com",
        password="testpass123",
    )
    return account, SessionContext.for_account(account)


def make_obituary(session, title="RIP SnackSendr", **overrides):
    fields = dict(
        title=title,
        blurb="A snack delivery app that died from founder burnout.",
        causes=["founder-burnout"],
        story_md="## What went wrong\n- everything",
        media_urls=[],
    )
    fields.update(overrides)
    return create_obituary(session, ObituaryIn(**fields))
