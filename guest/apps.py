from django.apps import AppConfig


class GuestConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'guest'
