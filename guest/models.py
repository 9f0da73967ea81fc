import uuid

from django.db import models

from hotel.models import Hotel, Room


def generate_guest_identifier():
    return f"G-{uuid.uuid4().hex[:8].upper()}"


class Guest(models.Model):
    GUEST_STATUS = [
        ('reserved', 'Reserved'),
        ('checked_in', 'Checked In'),
        ('checked_out', 'Checked Out'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name='guests')
    room = models.ForeignKey(Room, on_delete=models.SET_NULL, null=True, blank=True, related_name='guests')
    full_name = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=20, blank=True)
    guest_identifier = models.CharField(max_length=50, blank=True)
    reservation_id = models.CharField(max_length=100, blank=True)
    check_in_date = models.DateField(null=True, blank=True)
    check_out_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=GUEST_STATUS, default='reserved')
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ['hotel', 'guest_identifier']
        indexes = [
            models.Index(fields=['hotel', 'status'], name='guest_hotel_status_idx'),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.guest_identifier})"

    def save(self, *args, **kwargs):
        if not self.guest_identifier:
            identifier = generate_guest_identifier()
            while Guest.objects.filter(hotel_id=self.hotel_id, guest_identifier=identifier).exists():
                identifier = generate_guest_identifier()
            self.guest_identifier = identifier
        super().save(*args, **kwargs)
