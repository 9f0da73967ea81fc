from django.urls import path

from .api_views import TrackSessionView, TrackChatEventView, SessionDataView, ChatMetricsView

urlpatterns = [
    path('track-session/', TrackSessionView.as_view(), name='track-session'),
    path('track-chat-event/', TrackChatEventView.as_view(), name='track-chat-event'),
    path('session-data/', SessionDataView.as_view(), name='session-data'),
    path('chat/metrics/', ChatMetricsView.as_view(), name='chat-metrics'),
]
