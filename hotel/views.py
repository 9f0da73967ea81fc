import logging

from django.conf import settings
from django.http import FileResponse, HttpResponse, Http404
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, permissions, status, generics
from rest_framework.decorators import action
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.views import APIView

from roomchat.utils.responses import (
    success_response,
    created_response,
    error_response,
    partial_response,
    server_error_response,
)
from user.permissions import IsHotelStaff, IsHotelAdmin, IsHotelManagerOrAdmin
from .filters import RoomFilter, HotelDocumentFilter, RoomServiceItemFilter
from .models import Hotel, HotelDocument, Room, RoomServiceItem
from .permissions import RoomPermissions
from .qr import render_qr_code, QRRenderError
from .serializers import (
    HotelSerializer,
    HotelBaseUrlSerializer,
    RoomSerializer,
    RoomStatusUpdateSerializer,
    RoomQRCodeSerializer,
    HotelDocumentSerializer,
    HotelDocumentUploadSerializer,
    RoomServiceItemSerializer,
    RoomServiceMenuRequestSerializer,
)
from .services import regenerate_room_qr_codes

logger = logging.getLogger(__name__)


def _user_hotel(user):
    hotel = getattr(user, "hotel", None)
    if hotel is None:
        raise Http404("No hotel associated with this user.")
    return hotel


class CurrentHotelView(APIView):
    """
    The caller's own hotel. Every staff member can read it, only the
    hotel admin can change it.
    """
    permission_classes = [permissions.IsAuthenticated, IsHotelStaff]

    def get_permissions(self):
        if self.request.method == 'PATCH':
            return [permissions.IsAuthenticated(), IsHotelAdmin()]
        return super().get_permissions()

    def get(self, request):
        hotel = _user_hotel(request.user)
        return success_response(data=HotelSerializer(hotel).data)

    def patch(self, request):
        hotel = _user_hotel(request.user)
        serializer = HotelSerializer(hotel, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info(f"Hotel {hotel.id} updated by {request.user.username}")
        return success_response(data=serializer.data, message="Hotel updated")


class HotelBaseUrlView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsHotelAdmin]

    def patch(self, request):
        hotel = _user_hotel(request.user)
        serializer = HotelBaseUrlSerializer(hotel, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        # Existing QR codes keep pointing at the old site until regenerated
        logger.info(f"Base URL of hotel {hotel.id} set to {hotel.base_url!r}")
        return success_response(
            data={'base_url': hotel.base_url, 'chat_base_url': hotel.chat_base_url},
            message="Base URL updated",
        )


class HotelBrandingView(APIView):
    """Public branding for the hotel landing site."""
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def get(self, request, slug):
        hotel = get_object_or_404(Hotel, slug=slug, is_active=True)
        return success_response(data=hotel.branding())


class RoomViewSet(viewsets.ModelViewSet):
    serializer_class = RoomSerializer
    permission_classes = [permissions.IsAuthenticated, RoomPermissions]
    filterset_class = RoomFilter
    ordering_fields = ['room_number', 'floor_number', 'status']
    search_fields = ['room_number']

    def get_serializer_class(self):
        if self.action in ['partial_update', 'update'] and self.request.user.user_type in ['receptionist', 'manager']:
            return RoomStatusUpdateSerializer
        return self.serializer_class

    def get_queryset(self):
        return Room.objects.filter(hotel=self.request.user.hotel).select_related('hotel').order_by('room_number')

    def perform_create(self, serializer):
        room = serializer.save(hotel=self.request.user.hotel)
        logger.info(f"Room {room.room_number} created for hotel {room.hotel_id}")

    @action(detail=False, methods=['get'], url_path='qr-codes')
    def qr_codes(self, request):
        rooms = Room.objects.for_hotel(request.user.hotel)
        return success_response(data=RoomQRCodeSerializer(rooms, many=True).data)

    @action(detail=False, methods=['post'], url_path='regenerate-qr-codes')
    def regenerate_qr_codes(self, request):
        result = regenerate_room_qr_codes(request.user.hotel)
        data = result.as_dict()

        if result.all_failed:
            return server_error_response(
                message=f"QR code regeneration failed for all {result.total} rooms",
                data=data,
            )
        if not result.all_succeeded:
            return partial_response(
                message=f"QR codes regenerated for {len(result.updated)} of {result.total} rooms",
                data=data,
                errors={'failed_rooms': [f['room_number'] for f in result.failed]},
            )
        return success_response(data=data, message=f"QR codes regenerated for {result.total} rooms")

    @action(detail=True, methods=['get'], url_path='qr-code')
    def qr_code(self, request, pk=None):
        room = self.get_object()
        image_format = request.query_params.get('format', 'png').lower()
        try:
            content = render_qr_code(
                room.qr_code_url,
                size=request.query_params.get('size', 300),
                error_correction=request.query_params.get('ecc', 'M'),
                image_format=image_format,
            )
        except QRRenderError as e:
            return error_response(str(e))

        content_type = 'image/svg+xml' if image_format == 'svg' else 'image/png'
        response = HttpResponse(content, content_type=content_type)
        response['Content-Disposition'] = f'inline; filename="room-{room.room_number}-qr.{image_format}"'
        return response


class HotelDocumentUploadView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsHotelManagerOrAdmin]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        hotel = _user_hotel(request.user)
        upload = request.FILES.get('file')
        if not upload or not request.data.get('title'):
            return error_response("Missing required file or title")

        if upload.size > settings.DOCUMENT_MAX_UPLOAD_SIZE:
            limit_mb = settings.DOCUMENT_MAX_UPLOAD_SIZE // (1024 * 1024)
            return error_response(
                f"File too large. Maximum size is {limit_mb}MB",
                status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )

        serializer = HotelDocumentUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        document = HotelDocument.objects.create(
            hotel=hotel,
            uploaded_by=request.user,
            title=data['title'],
            description=data['description'],
            file=upload,
            file_type=upload.content_type or 'application/octet-stream',
            file_size=upload.size,
            tags=data['tags'],
            metadata={'original_name': upload.name},
        )
        logger.info(f"Document {document.id} ({upload.size} bytes) uploaded to hotel {hotel.id}")
        return created_response(
            data={'document_id': str(document.id), 'document': HotelDocumentSerializer(document).data},
            message="Document uploaded",
        )


class HotelDocumentListView(generics.ListAPIView):
    serializer_class = HotelDocumentSerializer
    permission_classes = [permissions.IsAuthenticated, IsHotelStaff]
    filterset_class = HotelDocumentFilter
    search_fields = ['title', 'description']
    ordering_fields = ['created_at', 'title', 'file_size']

    def get_queryset(self):
        return HotelDocument.objects.filter(hotel=self.request.user.hotel).select_related('uploaded_by')


class HotelDocumentDetailView(generics.RetrieveDestroyAPIView):
    serializer_class = HotelDocumentSerializer
    permission_classes = [permissions.IsAuthenticated, IsHotelStaff]

    def get_permissions(self):
        if self.request.method == 'DELETE':
            return [permissions.IsAuthenticated(), IsHotelManagerOrAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        return HotelDocument.objects.filter(hotel=self.request.user.hotel)

    def retrieve(self, request, *args, **kwargs):
        return success_response(data=self.get_serializer(self.get_object()).data)

    def perform_destroy(self, instance):
        document_id = instance.id
        name = instance.file.name
        if name:
            instance.file.delete(save=False)
        instance.delete()
        logger.info(f"Document {document_id} and blob {name!r} deleted by {self.request.user.username}")


class HotelDocumentDownloadView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsHotelStaff]

    def get(self, request, pk):
        document = get_object_or_404(HotelDocument, pk=pk, hotel=request.user.hotel)
        if not document.file:
            raise Http404("Document has no file.")
        filename = document.metadata.get('original_name') or document.file_name
        return FileResponse(
            document.file.open('rb'),
            as_attachment=True,
            filename=filename,
            content_type=document.file_type or 'application/octet-stream',
        )


class HotelDocumentSignedUrlView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsHotelStaff]

    def get(self, request, pk):
        document = get_object_or_404(HotelDocument, pk=pk, hotel=request.user.hotel)
        return success_response(data={
            'id': str(document.id),
            'url': document.file.url,
            'expires_in': settings.AWS_QUERYSTRING_EXPIRE,
            'file_type': document.file_type,
        })


class RoomServiceItemViewSet(viewsets.ModelViewSet):
    """
    The hotel's room service menu. Staff read it, managers and admins edit it.
    Lists only show available items unless ?available=false is passed.
    """
    serializer_class = RoomServiceItemSerializer
    permission_classes = [permissions.IsAuthenticated, IsHotelStaff]
    filterset_class = RoomServiceItemFilter
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'price', 'created_at', 'updated_at']

    def get_permissions(self):
        if self.action not in ['list', 'retrieve']:
            return [permissions.IsAuthenticated(), IsHotelManagerOrAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        queryset = RoomServiceItem.objects.filter(hotel=self.request.user.hotel)
        if self.action == 'list' and 'available' not in self.request.query_params:
            queryset = queryset.filter(available=True)
        return queryset

    def perform_create(self, serializer):
        item = serializer.save(hotel=self.request.user.hotel)
        logger.info(f"Room service item {item.id} created for hotel {item.hotel_id}")

    def perform_destroy(self, instance):
        item_id = instance.id
        instance.delete()
        logger.info(f"Room service item {item_id} deleted by {self.request.user.username}")


class RoomServiceMenuView(APIView):
    """
    Available room service items for the chat bot, looked up by hotel id.
    Accepts ?hotel_id= on GET or {"hotel_id": ...} on POST.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def get(self, request):
        return self._menu(request.query_params)

    def post(self, request):
        return self._menu(request.data)

    def _menu(self, params):
        serializer = RoomServiceMenuRequestSerializer(data=params)
        serializer.is_valid(raise_exception=True)
        hotel = get_object_or_404(Hotel, pk=serializer.validated_data['hotel_id'], is_active=True)

        items = hotel.room_service_items.filter(available=True).order_by('name')
        data = RoomServiceItemSerializer(items, many=True).data
        logger.info(f"Room service menu for hotel {hotel.id}: {len(data)} items")
        return success_response(
            data={'hotel_id': str(hotel.id), 'count': len(data), 'items': data},
            message=f"Found {len(data)} room service items",
        )
