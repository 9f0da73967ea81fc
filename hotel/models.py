import uuid
from urllib.parse import urlparse, parse_qs

from django.conf import settings
from django.db import models
from django.utils.text import slugify

from roomchat.utils.file_url import upload_to_hotel_documents
from .qr import build_chat_url, new_session_id, MISSING_HOTEL_ID


class Hotel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True, blank=True)
    base_url = models.URLField(blank=True, help_text="Site that serves the guest chat page. Blank uses the default chat site.")

    # Contact
    phone = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    address = models.TextField(blank=True)
    city = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True)
    website = models.URLField(blank=True)

    # Branding
    tagline = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    primary_color = models.CharField(max_length=20, default='#1f2937')
    secondary_color = models.CharField(max_length=20, default='#374151')
    accent_color = models.CharField(max_length=20, default='#2563eb')
    background_color = models.CharField(max_length=20, default='#ffffff')
    text_color = models.CharField(max_length=20, default='#111827')
    logo_url = models.URLField(blank=True)
    hero_image_url = models.URLField(blank=True)
    features = models.JSONField(default=list, blank=True)
    amenities = models.JSONField(default=list, blank=True)
    social_media = models.JSONField(default=dict, blank=True)

    timezone = models.CharField(max_length=50, default='UTC')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            base_slug = slugify(self.name) or 'hotel'
            slug = base_slug
            while Hotel.objects.filter(slug=slug).exclude(pk=self.pk).exists():
                slug = f"{base_slug}-{uuid.uuid4().hex[:6]}"
            self.slug = slug
        super().save(*args, **kwargs)

    def get_admin(self):
        return self.staff.filter(user_type='hotel_admin').first()

    @property
    def chat_base_url(self):
        return self.base_url or settings.CHAT_SITE_BASE_URL

    def branding(self):
        return {
            'name': self.name,
            'slug': self.slug,
            'tagline': self.tagline,
            'description': self.description,
            'colors': {
                'primary': self.primary_color,
                'secondary': self.secondary_color,
                'accent': self.accent_color,
                'background': self.background_color,
                'text': self.text_color,
            },
            'logo_url': self.logo_url,
            'hero_image_url': self.hero_image_url,
            'features': self.features,
            'amenities': self.amenities,
            'social_media': self.social_media,
            'contact': {
                'phone': self.phone,
                'email': self.email,
                'address': self.address,
                'website': self.website,
            },
        }


class HotelDocument(models.Model):
    """
    Files the hotel publishes to its chat bot (menus, policies, guides).
    The blob lives in the default storage; this row is the pointer.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name='documents')
    uploaded_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                    related_name='uploaded_documents')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    file = models.FileField(upload_to=upload_to_hotel_documents, max_length=500)
    file_type = models.CharField(max_length=100, blank=True)
    file_size = models.PositiveBigIntegerField(default=0)
    tags = models.JSONField(default=list, blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    processed = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['hotel', 'file_type'], name='document_hotel_type_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.hotel.name})"

    @property
    def file_name(self):
        return self.file.name.rsplit('/', 1)[-1] if self.file else ''


class RoomManager(models.Manager):
    def for_hotel(self, hotel):
        return self.filter(hotel=hotel, is_active=True).order_by('room_number')


class Room(models.Model):
    ROOM_STATUS = [
        ('available', 'Available'),
        ('occupied', 'Occupied'),
        ('cleaning', 'Under Cleaning'),
        ('maintenance', 'Under Maintenance'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name='rooms')
    room_number = models.CharField(max_length=20)
    room_type = models.CharField(max_length=50, default='standard')
    floor_number = models.IntegerField(null=True, blank=True)
    capacity = models.PositiveIntegerField(default=2)
    base_price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    status = models.CharField(max_length=20, choices=ROOM_STATUS, default='available')
    amenities = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    last_cleaned_at = models.DateTimeField(null=True, blank=True)

    # QR deep link
    qr_session_id = models.UUIDField(null=True, blank=True)
    qr_code_url = models.URLField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RoomManager()

    class Meta:
        unique_together = ['hotel', 'room_number']
        indexes = [
            models.Index(fields=['hotel', 'floor_number'], name='room_hotel_floor_idx'),
            models.Index(fields=['hotel', 'status'], name='room_hotel_status_idx'),
        ]

    def __str__(self):
        return f"Room {self.room_number} ({self.hotel.name})"

    def save(self, *args, **kwargs):
        if not self.qr_session_id:
            self.qr_session_id = uuid.UUID(new_session_id())
        # A renamed room keeps its session but needs a link with the new number
        if not self.qr_code_url or self.qr_link_is_stale():
            self.qr_code_url = self.build_chat_url()
        super().save(*args, **kwargs)

    def qr_link_is_stale(self):
        query = parse_qs(urlparse(self.qr_code_url).query)
        encoded = {key: query.get(key, [''])[0] for key in ('hotel_id', 'room_number', 'session_id')}
        return encoded != {
            'hotel_id': str(self.hotel_id) if self.hotel_id else MISSING_HOTEL_ID,
            'room_number': str(self.room_number),
            'session_id': str(self.qr_session_id),
        }

    def build_chat_url(self, **extra):
        return build_chat_url(
            self.hotel.base_url,
            self.hotel_id,
            self.room_number,
            str(self.qr_session_id),
            **extra,
        )

    def rotate_qr_session(self):
        """Assign a fresh session id and rebuild the deep link. Does not save."""
        previous = str(self.qr_session_id) if self.qr_session_id else None
        self.qr_session_id = uuid.UUID(new_session_id(previous))
        self.qr_code_url = self.build_chat_url()


class RoomServiceItem(models.Model):
    """An orderable item on the hotel's in-room dining menu."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name='room_service_items')
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        indexes = [
            models.Index(fields=['hotel', 'available'], name='roomservice_hotel_avail_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.price})"
