from django.contrib import admin

from .models import Hotel, Room, HotelDocument, RoomServiceItem


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'city', 'is_active', 'created_at')
    list_filter = ('is_active', 'city', 'country')
    search_fields = ('name', 'slug', 'city')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(HotelDocument)
class HotelDocumentAdmin(admin.ModelAdmin):
    list_display = ('title', 'hotel', 'file_type', 'file_size', 'processed', 'created_at')
    list_filter = ('processed', 'file_type')
    search_fields = ('title', 'hotel__name')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ('room_number', 'hotel', 'status', 'floor_number', 'is_active')
    list_filter = ('status', 'is_active', 'hotel')
    search_fields = ('room_number', 'hotel__name')
    readonly_fields = ('qr_session_id', 'qr_code_url', 'created_at', 'updated_at')


@admin.register(RoomServiceItem)
class RoomServiceItemAdmin(admin.ModelAdmin):
    list_display = ('name', 'hotel', 'price', 'available', 'updated_at')
    list_filter = ('available', 'hotel')
    search_fields = ('name', 'description', 'hotel__name')
    readonly_fields = ('created_at', 'updated_at')
