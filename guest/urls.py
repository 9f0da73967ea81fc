from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import GuestViewSet

router = DefaultRouter()
router.register(r'guests', GuestViewSet, basename='guest')

urlpatterns = [
    path('', include(router.urls)),
]

# URL Structure:
# GET/POST         /api/guests/
# GET/PATCH/DELETE /api/guests/{id}/
# POST             /api/guests/{id}/check-in/
# POST             /api/guests/{id}/check-out/
# GET              /api/guests/{id}/chat-link/
