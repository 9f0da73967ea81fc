from django.contrib import admin
from django.urls import path, include

from user.urls import staff_router

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/auth/', include('user.urls')),
    path('api/', include(staff_router.urls)),
    path('api/', include('hotel.urls')),
    path('api/', include('guest.urls')),
    path('api/', include('chat.api_urls')),
    path('', include('chat.urls')),
]
