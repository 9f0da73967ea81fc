from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    CurrentHotelView,
    HotelBaseUrlView,
    HotelBrandingView,
    RoomViewSet,
    HotelDocumentUploadView,
    HotelDocumentListView,
    HotelDocumentDetailView,
    HotelDocumentDownloadView,
    HotelDocumentSignedUrlView,
    RoomServiceItemViewSet,
    RoomServiceMenuView,
)

router = DefaultRouter()
router.register(r'rooms', RoomViewSet, basename='room')
router.register(r'room-service', RoomServiceItemViewSet, basename='room-service-item')

urlpatterns = [
    # ahead of the router so "menu" is not read as an item id
    path('room-service/menu/', RoomServiceMenuView.as_view(), name='room-service-menu'),
    path('', include(router.urls)),
    path('hotels/current/', CurrentHotelView.as_view(), name='hotel-current'),
    path('hotels/current/base-url/', HotelBaseUrlView.as_view(), name='hotel-base-url'),
    path('hotels/<slug:slug>/branding/', HotelBrandingView.as_view(), name='hotel-branding'),
    path('upload/', HotelDocumentUploadView.as_view(), name='document-upload'),
    path('documents/', HotelDocumentListView.as_view(), name='document-list'),
    path('documents/<uuid:pk>/', HotelDocumentDetailView.as_view(), name='document-detail'),
    path('documents/<uuid:pk>/download/', HotelDocumentDownloadView.as_view(), name='document-download'),
    path('documents/<uuid:pk>/view/', HotelDocumentSignedUrlView.as_view(), name='document-view'),
]
