import logging

from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import viewsets, permissions
from rest_framework.decorators import action

from hotel.models import Room
from roomchat.utils.responses import success_response, error_response
from .filters import GuestFilter
from .models import Guest
from .permissions import CanManageGuests
from .serializers import GuestSerializer, CheckInSerializer

logger = logging.getLogger(__name__)


class GuestViewSet(viewsets.ModelViewSet):
    serializer_class = GuestSerializer
    permission_classes = [permissions.IsAuthenticated, CanManageGuests]
    filterset_class = GuestFilter
    search_fields = ['full_name', 'email', 'guest_identifier', 'reservation_id']
    ordering_fields = ['full_name', 'check_in_date', 'created_at']

    def get_queryset(self):
        return Guest.objects.filter(hotel=self.request.user.hotel).select_related('room', 'hotel').order_by('-created_at')

    def perform_create(self, serializer):
        guest = serializer.save(hotel=self.request.user.hotel)
        logger.info(f"Guest {guest.guest_identifier} created for hotel {guest.hotel_id}")

    @action(detail=True, methods=['post'], url_path='check-in')
    def check_in(self, request, pk=None):
        """
        Check a guest into a room. `room_id` overrides the room already
        assigned to the guest; the room must be available.
        """
        guest = self.get_object()
        serializer = CheckInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if guest.status == 'checked_in':
            return error_response(f"Guest {guest.full_name} is already checked in")

        room_id = serializer.validated_data.get('room_id')
        if room_id:
            room = get_object_or_404(Room, pk=room_id, hotel=request.user.hotel)
        elif guest.room_id:
            room = guest.room
        else:
            return error_response("A room is required to check in")

        with transaction.atomic():
            room = Room.objects.select_for_update().get(pk=room.pk)
            if room.status != 'available':
                return error_response(f"Room {room.room_number} is not available")

            room.status = 'occupied'
            room.save(update_fields=['status', 'updated_at'])

            guest.room = room
            guest.status = 'checked_in'
            if not guest.check_in_date:
                guest.check_in_date = timezone.localdate()
            guest.save()

        logger.info(f"Guest {guest.guest_identifier} checked into room {room.room_number}")
        return success_response(data=GuestSerializer(guest).data, message="Guest checked in")

    @action(detail=True, methods=['post'], url_path='check-out')
    def check_out(self, request, pk=None):
        guest = self.get_object()
        if guest.status != 'checked_in':
            return error_response(f"Guest is not checked in. Current status: {guest.status}")

        with transaction.atomic():
            if guest.room_id:
                room = guest.room
                room.status = 'cleaning'
                room.save(update_fields=['status', 'updated_at'])

            guest.status = 'checked_out'
            guest.check_out_date = timezone.localdate()
            guest.save()

        logger.info(f"Guest {guest.guest_identifier} checked out")
        return success_response(data=GuestSerializer(guest).data, message="Guest checked out")

    @action(detail=True, methods=['get'], url_path='chat-link')
    def chat_link(self, request, pk=None):
        guest = self.get_object()
        if not guest.room_id:
            return error_response("Guest has no room assigned")

        room = guest.room
        chat_url = room.build_chat_url(guest_name=guest.full_name, reservation_id=guest.reservation_id)
        return success_response(data={
            'chat_url': chat_url,
            'room_number': room.room_number,
            'session_id': str(room.qr_session_id),
        })
