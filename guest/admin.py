from django.contrib import admin

from .models import Guest


@admin.register(Guest)
class GuestAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'guest_identifier', 'hotel', 'room', 'status', 'check_in_date')
    list_filter = ('status', 'hotel')
    search_fields = ('full_name', 'email', 'guest_identifier', 'reservation_id')
