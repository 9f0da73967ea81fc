from rest_framework import serializers

from hotel.models import Room
from .models import Guest


class GuestSerializer(serializers.ModelSerializer):
    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.all(), required=False, allow_null=True)
    room_number = serializers.CharField(source='room.room_number', read_only=True, default=None)

    class Meta:
        model = Guest
        fields = [
            'id', 'hotel', 'room', 'room_number', 'full_name', 'email', 'phone',
            'guest_identifier', 'reservation_id', 'check_in_date', 'check_out_date',
            'status', 'notes', 'created_at', 'updated_at',
        ]
        read_only_fields = ('hotel', 'status', 'created_at', 'updated_at')
        extra_kwargs = {
            'guest_identifier': {'required': False},
        }
        # Uniqueness of guest_identifier is checked per hotel in validate()
        validators = []

    def _hotel(self):
        if self.instance is not None:
            return self.instance.hotel
        return self.context['request'].user.hotel

    def validate_room(self, value):
        if value is not None and value.hotel_id != self._hotel().id:
            raise serializers.ValidationError("Room does not belong to this hotel.")
        return value

    def validate(self, attrs):
        check_in = attrs.get('check_in_date', getattr(self.instance, 'check_in_date', None))
        check_out = attrs.get('check_out_date', getattr(self.instance, 'check_out_date', None))
        if check_in and check_out and check_out < check_in:
            raise serializers.ValidationError({'check_out_date': ["Check-out date cannot be before check-in date."]})

        identifier = attrs.get('guest_identifier')
        if identifier:
            duplicates = Guest.objects.filter(hotel=self._hotel(), guest_identifier=identifier)
            if self.instance is not None:
                duplicates = duplicates.exclude(pk=self.instance.pk)
            if duplicates.exists():
                raise serializers.ValidationError({'guest_identifier': ["A guest with this identifier already exists."]})
        return attrs


class CheckInSerializer(serializers.Serializer):
    room_id = serializers.UUIDField(required=False, allow_null=True)
