from django.apps import AppConfig


class ChatConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'chat'

    def ready(self):
        from .services.config import MasterBotConfig
        self.master_bot_config = MasterBotConfig.from_settings()
