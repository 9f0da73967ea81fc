from rest_framework import serializers

from .models import ChatSession


class TrackSessionSerializer(serializers.Serializer):
    hotel_id = serializers.CharField(max_length=64)
    room_number = serializers.CharField(max_length=20)
    session_id = serializers.CharField(max_length=128, required=False, allow_blank=True, default='')
    hotel_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    guest_name = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True, default='')
    reservation_id = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True, default='')
    source = serializers.CharField(max_length=50, required=False, allow_blank=True, default='unknown')


class TrackChatEventSerializer(serializers.Serializer):
    hotel_id = serializers.CharField(max_length=64)
    session_id = serializers.CharField(max_length=128)
    event_type = serializers.CharField(max_length=100)
    room_number = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    message = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    timestamp = serializers.DateTimeField(required=False, allow_null=True)


class SessionDataSerializer(serializers.ModelSerializer):
    hotel_id = serializers.CharField(source='hotel_id_raw', required=False, allow_blank=True, default='')
    timestamp = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = ChatSession
        fields = [
            'session_id', 'user_id', 'original_session_id', 'hotel_id', 'room_number',
            'hotel_name', 'source', 'timestamp', 'expires_at',
        ]
        read_only_fields = ('expires_at',)
        extra_kwargs = {
            'room_number': {'required': False},
            'source': {'required': False},
        }

