import logging

from rest_framework import status, views, viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from roomchat.utils.responses import success_response, error_response
from .models import User
from .permissions import IsHotelStaffReadOnlyOrAdmin
from .serializers import UserSerializer, MyTokenObtainPairSerializer

logger = logging.getLogger(__name__)


class CustomTokenObtainPairView(TokenObtainPairView):
    serializer_class = MyTokenObtainPairSerializer


class LogoutView(views.APIView):
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        refresh_token = request.data.get("refresh_token")
        if not refresh_token:
            return error_response("refresh_token is required.")
        try:
            RefreshToken(refresh_token).blacklist()
        except TokenError as e:
            logger.warning(f"Logout with invalid refresh token for user {request.user.pk}: {e}")
            return error_response("Invalid or expired refresh token.")
        return success_response(message="Logged out.", status=status.HTTP_205_RESET_CONTENT)


class MeView(views.APIView):
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        return success_response(data=UserSerializer(request.user).data)


class UserViewSet(viewsets.ModelViewSet):
    """
    Staff management for the caller's hotel.

    Every hotel staff member can list and view colleagues; only the hotel
    admin can create, edit or deactivate accounts. DELETE deactivates the
    account instead of removing the row.
    """
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsHotelStaffReadOnlyOrAdmin]
    filterset_fields = ['user_type', 'department', 'is_active_hotel_user']
    search_fields = ['username', 'email', 'first_name', 'last_name']
    ordering_fields = ['username', 'created_at']

    def get_queryset(self):
        return User.objects.filter(hotel=self.request.user.hotel).select_related('hotel').order_by('username')

    def perform_create(self, serializer):
        user = serializer.save(hotel=self.request.user.hotel, created_by=self.request.user)
        logger.info(f"Staff user {user.username} ({user.user_type}) created by {self.request.user.username}")

    def perform_destroy(self, instance):
        if instance.pk == self.request.user.pk:
            raise ValidationError("You cannot deactivate your own account.")
        instance.is_active_hotel_user = False
        instance.is_active = False
        instance.save(update_fields=['is_active_hotel_user', 'is_active'])
        logger.info(f"Staff user {instance.username} deactivated by {self.request.user.username}")
