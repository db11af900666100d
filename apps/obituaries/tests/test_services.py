"""
Unit tests for obituary data access.
Covers creation, reaction/save toggles, comments and cascading deletes.
"""
from unittest.mock import patch
from uuid import uuid4

from django.db import DatabaseError, IntegrityError
from django.test import TestCase

from apps.core.errors import Unauthenticated, Unauthorized, ValidationFailed
from apps.identity.models import Profile
from apps.obituaries import services
from apps.obituaries.dtos import ObituaryIn
from apps.obituaries.models import EMOJI_REACTIONS, Comment, Obituary, Reaction, ReactionType

from .helpers import make_obituary, make_session


class CreateObituaryTest(TestCase):

    def setUp(self):
        self.account, self.session = make_session()

    def test_requires_session(self):
        with self.assertRaises(Unauthenticated):
            make_obituary(None)

    def test_provisions_profile_lazily(self):
        self.assertFalse(Profile.objects.filter(id=self.account.id).exists())

        obit = make_obituary(self.session, causes=[" bad-ui ", "bad-ui", "ai-hype"])

        self.assertTrue(Profile.objects.filter(id=self.account.id).exists())
        self.assertEqual(obit.founder_id, self.account.id)
        self.assertEqual(obit.causes, ["bad-ui", "ai-hype"])
        self.assertIsNotNone(obit.founder.handle)

    def test_required_fields(self):
        for field in ("title", "blurb", "story_md"):
            with self.subTest(field=field):
                with self.assertRaises(ValidationFailed):
                    make_obituary(self.session, **{field: "   "})

    def test_needs_a_cause(self):
        with self.assertRaises(ValidationFailed):
            make_obituary(self.session, causes=[])

    def test_blurb_limit(self):
        with self.assertRaises(ValidationFailed):
            make_obituary(self.session, blurb="x" * 121)
        self.assertEqual(len(make_obituary(self.session, blurb="x" * 120).blurb), 120)

    def test_get_obituary_miss_returns_none(self):
        self.assertIsNone(services.get_obituary(uuid4()))


class ToggleReactionTest(TestCase):

    def setUp(self):
        _, self.founder = make_session()
        _, self.fan = make_session()
        self.obit = make_obituary(self.founder)

    def test_toggle_twice_restores_state(self):
        for kind in EMOJI_REACTIONS:
            with self.subTest(kind=kind):
                before = Reaction.objects.filter(obituary=self.obit, type=kind).count()

                self.assertTrue(services.toggle_reaction(self.fan, self.obit.id, kind))
                self.assertEqual(Reaction.objects.filter(obituary=self.obit, type=kind).count(), before + 1)

                self.assertFalse(services.toggle_reaction(self.fan, self.obit.id, kind))
                self.assertEqual(Reaction.objects.filter(obituary=self.obit, type=kind).count(), before)

    def test_rejects_non_emoji_kinds(self):
        for kind in (ReactionType.SAVE, ReactionType.LIKE, "👍"):
            with self.assertRaises(ValidationFailed):
                services.toggle_reaction(self.fan, self.obit.id, kind)

    def test_requires_session(self):
        with self.assertRaises(Unauthenticated):
            services.toggle_reaction(None, self.obit.id, ReactionType.FIRE)

    def test_unknown_obituary(self):
        with self.assertRaises(ValidationFailed):
            services.toggle_reaction(self.fan, uuid4(), ReactionType.FIRE)


class SaveTest(TestCase):

    def setUp(self):
        _, self.founder = make_session()
        _, self.reader = make_session()
        self.first = make_obituary(self.founder, "RIP One")
        self.second = make_obituary(self.founder, "RIP Two")

    def test_toggle_save_and_saved_state(self):
        self.assertFalse(services.is_saved(self.reader, self.first.id))
        self.assertTrue(services.toggle_save(self.reader, self.first.id))
        self.assertTrue(services.is_saved(self.reader, self.first.id))
        self.assertFalse(services.toggle_save(self.reader, self.first.id))
        self.assertFalse(services.is_saved(self.reader, self.first.id))

    def test_anonymous_is_never_saved(self):
        self.assertFalse(services.is_saved(None, self.first.id))

    def test_saved_list_newest_save_first(self):
        services.toggle_save(self.reader, self.first.id)
        services.toggle_save(self.reader, self.second.id)

        saved = services.list_saved_obituaries(self.reader)
        self.assertEqual([o.id for o in saved], [self.second.id, self.first.id])

    def test_save_does_not_count_as_emoji(self):
        services.toggle_save(self.reader, self.first.id)
        self.assertFalse(Reaction.objects.filter(type__in=EMOJI_REACTIONS).exists())


class CommentTest(TestCase):

    def setUp(self):
        _, self.founder = make_session()
        _, self.mourner = make_session()
        self.obit = make_obituary(self.founder)

    def test_content_is_trimmed(self):
        comment = services.create_comment(self.mourner, self.obit.id, "  RIP  ")
        self.assertEqual(comment.content, "RIP")
        self.assertEqual(comment.author.id, self.mourner.user_id)

    def test_empty_content_needs_media(self):
        with self.assertRaises(ValidationFailed):
            services.create_comment(self.mourner, self.obit.id, "   ")

        comment = services.create_comment(
            self.mourner, self.obit.id, "", media_urls=["https://media.tenor.com/x.gif"]
        )
        self.assertEqual(comment.content, "")
        self.assertEqual(comment.media_urls, ["https://media.tenor.com/x.gif"])

    def test_single_level_threads(self):
        top = services.create_comment(self.mourner, self.obit.id, "top")
        reply = services.create_comment(self.founder, self.obit.id, "reply", parent_id=top.id)

        with self.assertRaises(ValidationFailed):
            services.create_comment(self.mourner, self.obit.id, "nested", parent_id=reply.id)

        threads = services.build_comment_threads(services.list_comments(self.obit.id))
        self.assertEqual(len(threads), 1)
        self.assertEqual(threads[0]["comment"].id, top.id)
        self.assertEqual([r.id for r in threads[0]["replies"]], [reply.id])

    def test_parent_must_be_on_same_obituary(self):
        other = make_obituary(self.founder, "RIP Other")
        top = services.create_comment(self.mourner, other.id, "elsewhere")
        with self.assertRaises(ValidationFailed):
            services.create_comment(self.mourner, self.obit.id, "reply", parent_id=top.id)

    def test_only_author_can_delete(self):
        comment = services.create_comment(self.mourner, self.obit.id, "mine")

        self.assertFalse(services.delete_comment(self.founder, comment.id))
        self.assertTrue(Comment.objects.filter(id=comment.id).exists())

        self.assertTrue(services.delete_comment(self.mourner, comment.id))
        self.assertFalse(Comment.objects.filter(id=comment.id).exists())

    def test_comment_like_toggle(self):
        comment = services.create_comment(self.mourner, self.obit.id, "like me")

        self.assertTrue(services.toggle_comment_like(self.founder, comment.id))
        like = Reaction.objects.get(comment=comment)
        self.assertEqual(like.type, ReactionType.LIKE)
        self.assertIsNone(like.obituary_id)

        self.assertFalse(services.toggle_comment_like(self.founder, comment.id))
        self.assertFalse(Reaction.objects.filter(comment=comment).exists())


class DeleteObituaryTest(TestCase):

    def setUp(self):
        _, self.founder = make_session()
        _, self.stranger = make_session()
        self.obit = make_obituary(self.founder)
        top = services.create_comment(self.stranger, self.obit.id, "F")
        services.create_comment(self.founder, self.obit.id, "thanks", parent_id=top.id)
        services.toggle_reaction(self.stranger, self.obit.id, ReactionType.SKULL)
        services.toggle_save(self.stranger, self.obit.id)
        services.toggle_comment_like(self.founder, top.id)

    def test_only_founder_can_delete(self):
        with self.assertRaises(Unauthorized):
            services.delete_obituary(self.stranger, self.obit.id)
        self.assertTrue(Obituary.objects.filter(id=self.obit.id).exists())

    def test_missing_obituary_is_unauthorized(self):
        with self.assertRaises(Unauthorized):
            services.delete_obituary(self.founder, uuid4())

    def test_cascade_removes_dependents(self):
        services.delete_obituary(self.founder, self.obit.id)

        self.assertFalse(Obituary.objects.filter(id=self.obit.id).exists())
        self.assertFalse(Comment.objects.exists())
        self.assertFalse(Reaction.objects.exists())

    def test_failed_cascade_rolls_back(self):
        reactions = Reaction.objects.count()
        comments = Comment.objects.count()

        with patch.object(Comment.objects, 'filter') as comment_filter:
            comment_filter.return_value.delete.side_effect = DatabaseError("disk I/O error")
            with self.assertRaises(DatabaseError):
                services.delete_obituary(self.founder, self.obit.id)

        self.assertTrue(Obituary.objects.filter(id=self.obit.id).exists())
        self.assertEqual(Reaction.objects.count(), reactions)
        self.assertEqual(Comment.objects.count(), comments)


class ToggleRaceTest(TestCase):

    def setUp(self):
        _, self.founder = make_session()
        _, self.fan = make_session()
        self.obit = make_obituary(self.founder)

    def test_losing_insert_is_absorbed(self):
        with patch.object(Reaction.objects, 'create', side_effect=IntegrityError("UNIQUE constraint failed")):
            with self.assertLogs('apps.obituaries.services', level='WARNING'):
                active = services.toggle_reaction(self.fan, self.obit.id, ReactionType.FIRE)

        self.assertTrue(active)
