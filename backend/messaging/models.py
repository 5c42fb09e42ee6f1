"""
Messaging app models.

One thread per complaint, between the citizen who filed it and the
administrator who owns it.  Messages are immutable apart from their
*seen* flag, which the reader's side flips in batches.
"""

from django.conf import settings
from django.db import models

from accounts.models import UserRole
from core.models import TimeStampedModel


class Message(TimeStampedModel):
    complaint = models.ForeignKey(
        "complaints.Complaint",
        on_delete=models.CASCADE,
        related_name="messages",
        verbose_name="Complaint",
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
        verbose_name="Sender",
    )
    sender_role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        verbose_name="Sender Role",
    )
    body = models.TextField(verbose_name="Message")
    is_seen = models.BooleanField(default=False, verbose_name="Seen")
    seen_at = models.DateTimeField(null=True, blank=True, verbose_name="Seen At")

    class Meta:
        verbose_name = "Message"
        verbose_name_plural = "Messages"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["complaint", "is_seen"], name="message_unseen_idx"),
        ]

    def __str__(self):
        return f"#{self.complaint_id} {self.sender_role}: {self.body[:40]}"
