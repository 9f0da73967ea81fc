import logging
from datetime import timedelta

from django.conf import settings
from django.db.models import Count
from django.utils import timezone
from rest_framework import permissions
from rest_framework.views import APIView

from roomchat.utils.responses import success_response, created_response, error_response, not_found_response
from user.permissions import IsHotelStaff
from .lookups import get_hotel
from .models import ChatSession, ChatEvent
from .serializers import TrackSessionSerializer, TrackChatEventSerializer, SessionDataSerializer

logger = logging.getLogger(__name__)


class GuestAPIView(APIView):
    """Anonymous endpoints called from guest pages and by the chat bot."""
    permission_classes = [permissions.AllowAny]
    authentication_classes = []


class TrackSessionView(GuestAPIView):

    def post(self, request):
        serializer = TrackSessionSerializer(data=request.data)
        if not serializer.is_valid():
            if {'hotel_id', 'room_number'} & set(serializer.errors):
                return error_response("Missing required fields: hotel_id and room_number", errors=serializer.errors)
            return error_response("Invalid session data", errors=serializer.errors)

        data = serializer.validated_data
        session = ChatSession.objects.create(
            hotel=get_hotel(data['hotel_id']),
            hotel_id_raw=data['hotel_id'],
            room_number=data['room_number'],
            session_id=data['session_id'],
            hotel_name=data['hotel_name'],
            guest_name=data['guest_name'] or '',
            reservation_id=data['reservation_id'] or '',
            source=data['source'] or 'unknown',
            user_agent=request.META.get('HTTP_USER_AGENT', ''),
        )
        logger.info(f"Chat session {session.session_id} tracked for hotel {session.hotel_id_raw} room {session.room_number}")
        return success_response(data={'session_id': session.session_id}, message="Session tracked successfully")


class TrackChatEventView(GuestAPIView):

    def post(self, request):
        serializer = TrackChatEventSerializer(data=request.data)
        if not serializer.is_valid():
            if {'hotel_id', 'session_id', 'event_type'} & set(serializer.errors):
                return error_response(
                    "Missing required fields: hotel_id, session_id and event_type",
                    errors=serializer.errors,
                )
            return error_response("Invalid chat event", errors=serializer.errors)

        data = serializer.validated_data
        event = ChatEvent.objects.create(
            hotel_id_raw=data['hotel_id'],
            session_id=data['session_id'],
            room_number=data['room_number'],
            event_type=data['event_type'],
            message=data['message'] or '',
            occurred_at=data.get('timestamp') or timezone.now(),
        )
        return created_response(data={'event_id': event.id}, message="Chat event tracked")


class SessionDataView(GuestAPIView):
    """
    Session context the bot fetches to learn which hotel and room a
    conversation belongs to. Records expire CHAT_SESSION_DATA_TTL_HOURS
    after they are stored.
    """

    def post(self, request):
        if not request.data.get('session_id'):
            return error_response("session_id is required")

        serializer = SessionDataSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        hotel_id = serializer.validated_data.get('hotel_id_raw', '')
        record = serializer.save(
            hotel=get_hotel(hotel_id),
            expires_at=timezone.now() + timedelta(hours=settings.CHAT_SESSION_DATA_TTL_HOURS),
        )
        logger.info(f"Session data stored for {record.session_id}")
        return success_response(data={'session_id': record.session_id}, message="Session data stored successfully")

    def get(self, request):
        session_id = request.query_params.get('session_id')
        user_id = request.query_params.get('user_id')
        records = ChatSession.objects.unexpired()

        if request.query_params.get('recent') == 'true':
            record = records.order_by('-created_at').first()
            if record is None:
                return not_found_response("No recent sessions found")
            return success_response(data=SessionDataSerializer(record).data, message="Most recent session")

        if not session_id and not user_id:
            return error_response("session_id, user_id, or recent=true is required")

        record = None
        if session_id:
            record = records.filter(session_id=session_id).order_by('-created_at').first()
        if record is None and user_id:
            record = records.filter(user_id=user_id).order_by('-created_at').first()

        if record is None:
            return not_found_response("Session data not found or expired")
        return success_response(data=SessionDataSerializer(record).data)


METRIC_RANGES = {
    'today': None,
    'week': timedelta(days=7),
    'month': timedelta(days=30),
}


class ChatMetricsView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsHotelStaff]

    def get(self, request):
        range_name = request.query_params.get('range', 'week')
        if range_name not in METRIC_RANGES:
            return error_response(f"range must be one of {', '.join(METRIC_RANGES)}")

        now = timezone.now()
        span = METRIC_RANGES[range_name]
        if span is None:
            since = timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)
        else:
            since = now - span

        hotel = request.user.hotel
        sessions = ChatSession.objects.filter(hotel=hotel, expires_at__isnull=True, created_at__gte=since)
        events = ChatEvent.objects.filter(hotel_id_raw=str(hotel.id), occurred_at__gte=since)

        events_by_type = {
            row['event_type']: row['count']
            for row in events.values('event_type').annotate(count=Count('id')).order_by()
        }
        busiest_rooms = list(
            sessions.values('room_number')
            .annotate(sessions=Count('id'))
            .order_by('-sessions', 'room_number')[:5]
        )

        return success_response(data={
            'range': range_name,
            'since': since.isoformat(),
            'total_sessions': sessions.count(),
            'unique_rooms': sessions.order_by().values('room_number').distinct().count(),
            'total_events': sum(events_by_type.values()),
            'events_by_type': events_by_type,
            'busiest_rooms': busiest_rooms,
        })
