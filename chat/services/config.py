from dataclasses import dataclass
from urllib.parse import urlencode, quote

from django.conf import settings


@dataclass(frozen=True)
class MasterBotConfig:
    """
    The single shared chat bot every hotel's guests talk to.

    Built once from Django settings when the chat app is ready and handed
    to the consumer, bootstrapper and tracker explicitly.
    """
    bot_id: str
    host_url: str
    webchat_script: str
    config_script: str
    theme_color: str
    site_base_url: str
    tracking_base_url: str
    widget_ready_timeout: float
    script_load_timeout: float
    tracking_timeout: float

    @classmethod
    def from_settings(cls):
        return cls(
            bot_id=settings.BOTPRESS_BOT_ID,
            host_url=settings.BOTPRESS_HOST_URL.rstrip('/'),
            webchat_script=settings.BOTPRESS_WEBCHAT_SCRIPT,
            config_script=settings.BOTPRESS_CONFIG_SCRIPT,
            theme_color=settings.BOTPRESS_THEME_COLOR,
            site_base_url=settings.CHAT_SITE_BASE_URL.rstrip('/'),
            tracking_base_url=settings.CHAT_TRACKING_BASE_URL.rstrip('/'),
            widget_ready_timeout=float(settings.CHAT_WIDGET_READY_TIMEOUT),
            script_load_timeout=float(settings.CHAT_SCRIPT_LOAD_TIMEOUT),
            tracking_timeout=float(settings.CHAT_TRACKING_TIMEOUT),
        )

    @property
    def scripts(self):
        """Widget scripts in load order; the config script is optional."""
        return [src for src in (self.webchat_script, self.config_script) if src]

    def messaging_url(self, session):
        params = {
            'hotel_id': session.hotel_id,
            'room_number': session.room_number,
            'session_id': session.session_id,
            'hotel_name': session.hotel_name,
            'source': session.source,
        }
        return f"{self.host_url}/api/v1/bots/{self.bot_id}?{urlencode(params, quote_via=quote)}"

    def widget_init_config(self, session):
        return {
            'botId': self.bot_id,
            'hostUrl': self.host_url,
            'messagingUrl': self.messaging_url(session),
            'botName': f"{session.hotel_name} Assistant",
            'theme': 'prism',
            'themeColor': self.theme_color,
            'hideWidget': False,
            'showPoweredBy': False,
            'closeOnEscape': True,
            'showConversationsButton': False,
            'enableTranscriptDownload': False,
            'userData': session.as_user_data(),
            'messagePayload': {
                'hotel_id': session.hotel_id,
                'room_number': session.room_number,
                'session_id': session.session_id,
                'hotel_name': session.hotel_name,
                'source': session.source,
            },
        }
