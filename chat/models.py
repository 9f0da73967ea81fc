from django.db import models
from django.utils import timezone

from hotel.models import Hotel


class ChatSessionQuerySet(models.QuerySet):
    def session_data(self):
        """Rows stored for the bot to fetch; plain tracking rows have no expiry."""
        return self.filter(expires_at__isnull=False)

    def unexpired(self):
        return self.session_data().filter(expires_at__gt=timezone.now())

    def expired(self):
        return self.session_data().filter(expires_at__lte=timezone.now())


class ChatSession(models.Model):
    """
    A guest chat session opened from a room QR code.

    Rows with `expires_at` set are session-data records the bot looks up
    by session or widget user id; the rest are analytics only.
    """
    hotel = models.ForeignKey(Hotel, on_delete=models.SET_NULL, null=True, blank=True, related_name='chat_sessions')
    hotel_id_raw = models.CharField(max_length=64, db_index=True)
    room_number = models.CharField(max_length=20, blank=True)
    session_id = models.CharField(max_length=128, db_index=True)
    hotel_name = models.CharField(max_length=200, blank=True)
    guest_name = models.CharField(max_length=200, blank=True)
    reservation_id = models.CharField(max_length=100, blank=True)
    source = models.CharField(max_length=50, default='qr_code')
    user_id = models.CharField(max_length=128, blank=True, db_index=True)
    original_session_id = models.CharField(max_length=128, blank=True)
    user_agent = models.TextField(blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = ChatSessionQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['hotel', 'created_at'], name='chatsession_hotel_created_idx'),
        ]

    def __str__(self):
        return f"Session {self.session_id} (room {self.room_number})"

    @property
    def is_expired(self):
        return self.expires_at is not None and self.expires_at <= timezone.now()


class ChatEvent(models.Model):
    hotel_id_raw = models.CharField(max_length=64, db_index=True)
    session_id = models.CharField(max_length=128, db_index=True)
    room_number = models.CharField(max_length=20, blank=True)
    event_type = models.CharField(max_length=100)
    message = models.TextField(blank=True)
    occurred_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-occurred_at']
        indexes = [
            models.Index(fields=['hotel_id_raw', 'occurred_at'], name='chatevent_hotel_time_idx'),
        ]

    def __str__(self):
        return f"{self.event_type} for session {self.session_id}"
