import uuid
from django.db import models
from django.contrib.auth.models import AbstractUser


class Account(AbstractUser):
    """
    Authenticated identity. Stands in for the sign-in provider's user record;
    the public, pseudonymous side lives in Profile.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Set when the owner deletes their account, cleared on the next provisioning
    is_deleted = models.BooleanField(default=False)

    class Meta:
        ordering = ['username']

    def __str__(self):
        return self.email or self.username


class Profile(models.Model):
    """
    Public user row. Shares its id with the Account and is created lazily on
    the first authenticated write.
    """
    id = models.UUIDField(primary_key=True, editable=False)
    handle = models.CharField(max_length=50, unique=True, null=True, blank=True)
    email = models.EmailField(blank=True, default='')
    avatar_url = models.URLField(max_length=500, null=True, blank=True)
    karma = models.IntegerField(default=0)
    timezone = models.CharField(max_length=64, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'User'
        ordering = ['handle']

    def __str__(self):
        return f"@{self.handle}" if self.handle else str(self.id)
