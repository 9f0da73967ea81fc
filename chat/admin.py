from django.contrib import admin

from .models import ChatSession, ChatEvent


@admin.register(ChatSession)
class ChatSessionAdmin(admin.ModelAdmin):
    list_display = ['session_id', 'hotel', 'room_number', 'source', 'expires_at', 'created_at']
    list_filter = ['source', 'hotel', 'created_at']
    search_fields = ['session_id', 'user_id', 'room_number', 'hotel_name']
    readonly_fields = ['created_at']
    ordering = ['-created_at']


@admin.register(ChatEvent)
class ChatEventAdmin(admin.ModelAdmin):
    list_display = ['event_type', 'session_id', 'room_number', 'occurred_at']
    list_filter = ['event_type']
    search_fields = ['session_id', 'room_number', 'message']
    readonly_fields = ['created_at']
