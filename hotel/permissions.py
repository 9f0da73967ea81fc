from rest_framework.permissions import BasePermission

from user.permissions import IsHotelStaff


class RoomPermissions(BasePermission):
    """
    Custom permissions for the Room viewset.
    - All staff can list/retrieve rooms and read QR codes.
    - Receptionists and managers can only change a room's status.
    - Only admins can create, delete or regenerate QR codes.
    """
    def has_permission(self, request, view):
        if not IsHotelStaff().has_permission(request, view):
            return False

        if view.action in ['list', 'retrieve', 'qr_codes', 'qr_code']:
            return True

        if view.action == 'partial_update':
            if request.user.user_type == 'hotel_admin':
                return True
            return request.user.user_type in ['manager', 'receptionist'] and set(request.data.keys()) <= {'status'}

        return request.user.user_type == 'hotel_admin'

    def has_object_permission(self, request, view, obj):
        return obj.hotel_id == request.user.hotel_id
