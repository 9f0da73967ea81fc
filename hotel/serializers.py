from rest_framework import serializers

from .models import Hotel, HotelDocument, Room, RoomServiceItem


class HotelSerializer(serializers.ModelSerializer):
    chat_base_url = serializers.ReadOnlyField()

    class Meta:
        model = Hotel
        fields = [
            'id', 'name', 'slug', 'base_url', 'chat_base_url',
            'phone', 'email', 'address', 'city', 'country', 'website',
            'tagline', 'description', 'primary_color', 'secondary_color',
            'accent_color', 'background_color', 'text_color', 'logo_url',
            'hero_image_url', 'features', 'amenities', 'social_media',
            'timezone', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ('id', 'is_active', 'created_at', 'updated_at')
        extra_kwargs = {
            'slug': {'required': False},
        }


class HotelBaseUrlSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hotel
        fields = ('base_url',)
        extra_kwargs = {
            'base_url': {'required': True, 'allow_blank': True},
        }

    def validate_base_url(self, value):
        return value.rstrip('/')


class RoomSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Room
        fields = [
            'id', 'hotel', 'room_number', 'room_type', 'floor_number', 'capacity',
            'base_price', 'status', 'status_display', 'amenities', 'notes',
            'is_active', 'last_cleaned_at', 'qr_session_id', 'qr_code_url',
            'created_at', 'updated_at',
        ]
        read_only_fields = ('hotel', 'qr_session_id', 'qr_code_url', 'created_at', 'updated_at')

    def validate_room_number(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Room number cannot be blank.")

        request = self.context.get('request')
        hotel = self.instance.hotel if self.instance else getattr(request.user, 'hotel', None)
        duplicates = Room.objects.filter(hotel=hotel, room_number=value)
        if self.instance:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError(f"Room {value} already exists in this hotel.")
        return value


class RoomStatusUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ('status',)


class RoomQRCodeSerializer(serializers.ModelSerializer):
    room_id = serializers.UUIDField(source='id', read_only=True)
    chat_url = serializers.CharField(source='qr_code_url', read_only=True)
    session_id = serializers.UUIDField(source='qr_session_id', read_only=True)

    class Meta:
        model = Room
        fields = ('room_id', 'room_number', 'chat_url', 'session_id')


class HotelDocumentSerializer(serializers.ModelSerializer):
    file_name = serializers.ReadOnlyField()
    uploaded_by = serializers.StringRelatedField()

    class Meta:
        model = HotelDocument
        fields = (
            'id', 'hotel', 'title', 'description', 'file_name', 'file_type',
            'file_size', 'tags', 'metadata', 'processed', 'uploaded_by',
            'created_at', 'updated_at',
        )
        read_only_fields = fields


class HotelDocumentUploadSerializer(serializers.Serializer):
    """Multipart upload form. Presence of file/title is checked by the view."""
    file = serializers.FileField()
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    tags = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_tags(self, value):
        # Comma separated in the multipart form
        return [tag.strip() for tag in value.split(',') if tag.strip()]


class RoomServiceItemSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)

    class Meta:
        model = RoomServiceItem
        fields = ('id', 'hotel', 'name', 'description', 'price', 'available', 'created_at', 'updated_at')
        read_only_fields = ('id', 'hotel', 'created_at', 'updated_at')


class RoomServiceMenuRequestSerializer(serializers.Serializer):
    hotel_id = serializers.UUIDField()
