"""
Shared abstract models

- TimeStampedModel: created/updated timestamps
- UserOwnedModel: owned by a user + timestamps
"""

from django.db import models
from django.contrib.auth import get_user_model

User = get_user_model()


class TimeStampedModel(models.Model):
    """Tracks creation and modification time."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class UserOwnedModel(TimeStampedModel):
    """Resource owned by a single user (with timestamps)."""

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='%(class)s_set',
        db_index=True
    )

    class Meta:
        abstract = True

    def is_owner(self, user):
        """Ownership check"""
        return self.user_id == getattr(user, 'pk', None)
