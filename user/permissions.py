from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsHotelStaff(BasePermission):
    """
    Active staff member (any user_type) attached to a hotel.
    """
    def has_permission(self, request, view):
        user = request.user
        return (
            user.is_authenticated
            and user.is_hotel_staff
            and user.is_active_hotel_user
        )


class IsHotelAdmin(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.user_type == 'hotel_admin'


class IsHotelStaffReadOnlyOrAdmin(BasePermission):
    """
    Read access for every hotel staff member, write access for the hotel admin only.
    """
    def has_permission(self, request, view):
        if not IsHotelStaff().has_permission(request, view):
            return False
        if request.method in SAFE_METHODS:
            return True
        return request.user.user_type == 'hotel_admin'


class IsHotelManagerOrAdmin(BasePermission):
    def has_permission(self, request, view):
        return (
            IsHotelStaff().has_permission(request, view)
            and request.user.user_type in ['hotel_admin', 'manager']
        )
