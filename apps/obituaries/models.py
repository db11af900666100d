import uuid
from django.db import models
from django.db.models import Q

from apps.identity.models import Profile


class ReactionType(models.TextChoices):
    FIRE = '🔥', 'Fire'
    SKULL = '💀', 'Skull'
    CRYING = '😭', 'Crying'
    MIND_BLOWN = '🤯', 'Mind Blown'
    BRAIN = '🧠', 'Big Brain'
    SAVE = 'save', 'Saved'
    LIKE = '❤️', 'Comment Like'


# Order matters: this is the order counts are reported in
EMOJI_REACTIONS = [
    ReactionType.FIRE,
    ReactionType.SKULL,
    ReactionType.CRYING,
    ReactionType.MIND_BLOWN,
    ReactionType.BRAIN,
]


class Obituary(models.Model):
    """
    A user-authored post describing a failed startup.
    Owned exclusively by its founder.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    blurb = models.CharField(max_length=120)
    causes = models.JSONField(default=list, blank=True)
    story_md = models.TextField()
    media_urls = models.JSONField(default=list, blank=True)
    upvotes = models.IntegerField(default=0)
    roast_score = models.IntegerField(default=0)
    founder = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='obituaries')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'Obituary'
        ordering = ['-created_at']
        verbose_name_plural = 'obituaries'

    def __str__(self):
        return self.title


class Comment(models.Model):
    """
    Comment on an obituary. Threads are a single level deep: a reply's
    parent is always a top-level comment.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    content = models.TextField(blank=True)
    author = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='comments')
    obituary = models.ForeignKey(Obituary, on_delete=models.CASCADE, related_name='comments')
    parent = models.ForeignKey(
        'self', on_delete=models.CASCADE, null=True, blank=True, related_name='replies'
    )
    media_urls = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'Comment'
        ordering = ['created_at']

    def __str__(self):
        return f"Comment by {self.author_id} on {self.obituary_id}"


class Reaction(models.Model):
    """
    Typed link between a profile and an obituary (emoji or save) or a
    comment (like). Exactly one of obituary/comment is set.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    type = models.CharField(max_length=16, choices=ReactionType.choices)
    user = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='reactions')
    obituary = models.ForeignKey(
        Obituary, on_delete=models.CASCADE, null=True, blank=True, related_name='reactions'
    )
    comment = models.ForeignKey(
        Comment, on_delete=models.CASCADE, null=True, blank=True, related_name='reactions'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'Reaction'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'type', 'obituary'],
                condition=Q(obituary__isnull=False),
                name='unique_obituary_reaction',
            ),
            models.UniqueConstraint(
                fields=['user', 'type', 'comment'],
                condition=Q(comment__isnull=False),
                name='unique_comment_reaction',
            ),
        ]

    def __str__(self):
        target = self.obituary_id or self.comment_id
        return f"{self.type} by {self.user_id} on {target}"
