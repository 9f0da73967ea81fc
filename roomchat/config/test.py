from .base import *

DEBUG = False
SECRET_KEY = 'roomchat-test-key'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.InMemoryStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer',
    },
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

BOTPRESS_BOT_ID = 'test-bot'
BOTPRESS_CONFIG_SCRIPT = 'https://files.example.test/bot-config.js'
CHAT_SITE_BASE_URL = 'https://chat.example.test'
CHAT_TRACKING_BASE_URL = 'https://chat.example.test'
CHAT_WIDGET_READY_TIMEOUT = 1.0
CHAT_SCRIPT_LOAD_TIMEOUT = 1.0
