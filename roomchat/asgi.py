'''
ASGI config for roomchat project.
'''
import os
import environ
from pathlib import Path

environ_config = environ.Env(DEBUG=(bool, False))

BASE_DIR = Path(__file__).resolve().parent.parent

environ.Env.read_env(BASE_DIR / '.env')

django_env = environ_config('DJANGO_ENV', default='development')

# Set the settings module BEFORE any Django imports
if django_env == 'production':
    settings_module = 'roomchat.config.production'
else:
    settings_module = 'roomchat.config.development'

os.environ.setdefault('DJANGO_SETTINGS_MODULE', settings_module)

import django
from django.core.asgi import get_asgi_application

django.setup()

from channels.routing import ProtocolTypeRouter, URLRouter
from channels.security.websocket import AllowedHostsOriginValidator
from chat.routing import websocket_urlpatterns

application = ProtocolTypeRouter({
    "http": get_asgi_application(),
    # Guest chat sockets are anonymous; the session context travels in the query string.
    "websocket": AllowedHostsOriginValidator(
        URLRouter(websocket_urlpatterns)
    ),
})
