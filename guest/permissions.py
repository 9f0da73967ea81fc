from rest_framework.permissions import BasePermission, SAFE_METHODS

from user.permissions import IsHotelStaff


class CanManageGuests(BasePermission):
    """
    Allows hotel staff to manage guests.
    - All staff can view guests
    - Front-of-house staff (admin, manager, receptionist) can create, edit,
      check in and check out
    - Only admins can delete
    """
    def has_permission(self, request, view):
        if not IsHotelStaff().has_permission(request, view):
            return False

        if request.method in SAFE_METHODS:
            return True

        if request.method == 'DELETE':
            return request.user.user_type == 'hotel_admin'

        return request.user.user_type in ['hotel_admin', 'manager', 'receptionist']

    def has_object_permission(self, request, view, obj):
        return obj.hotel_id == request.user.hotel_id
