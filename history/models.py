import uuid
from django.db import models
from django.utils import timezone


class ChatSession(models.Model):
    """
    A conversation thread. Created lazily on the first message and never deleted.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "sessions"

    def __str__(self):
        return f"ChatSession {self.id}"


class Message(models.Model):
    """
    One turn of a session. The log is append-only and ordered by created_at,
    then by the auto-increment id for rows that share a timestamp.
    """

    class Role(models.TextChoices):
        USER = "user", "user"
        ASSISTANT = "assistant", "assistant"

    id = models.BigAutoField(primary_key=True)
    session = models.ForeignKey(
        ChatSession,
        related_name="messages",
        on_delete=models.CASCADE
    )
    role = models.CharField(max_length=16, choices=Role.choices)
    content = models.TextField()
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        db_table = "messages"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["session", "created_at"], name="messages_session_created_idx"),
        ]

    def __str__(self):
        return f"[{self.role}] {self.content[:50]}…"
