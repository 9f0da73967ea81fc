from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    USER_TYPES = [
        ('hotel_admin', 'Hotel Admin'),
        ('manager', 'Manager'),
        ('receptionist', 'Receptionist'),
        ('staff', 'Staff'),
    ]

    DEPARTMENT_CHOICES = [
        ('Reception', 'Reception'),
        ('Housekeeping', 'Housekeeping'),
        ('Room Service', 'Room Service'),
        ('Restaurant', 'Restaurant'),
        ('Management', 'Management'),
    ]

    HOTEL_STAFF_TYPES = ('hotel_admin', 'manager', 'receptionist', 'staff')

    email = models.EmailField(unique=True)
    user_type = models.CharField(max_length=20, choices=USER_TYPES, null=True, blank=True)
    phone_number = models.CharField(max_length=20, blank=True)
    hotel = models.ForeignKey('hotel.Hotel', on_delete=models.CASCADE, null=True, blank=True, related_name='staff')
    department = models.CharField(max_length=20, choices=DEPARTMENT_CHOICES, blank=True)
    created_by = models.ForeignKey('self', on_delete=models.SET_NULL, null=True, blank=True)
    is_active_hotel_user = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    @property
    def is_hotel_admin(self):
        return self.user_type == 'hotel_admin'

    @property
    def is_hotel_staff(self):
        return self.user_type in self.HOTEL_STAFF_TYPES and self.hotel_id is not None
