import abc

from django.utils import timezone


class WidgetChannelError(Exception):
    """The widget could not be driven (page gone, command rejected)."""


class WidgetTimeout(WidgetChannelError):
    pass


class ScriptLoadError(WidgetChannelError):
    def __init__(self, src, reason=''):
        self.src = src
        self.reason = reason
        super().__init__(f"Failed to load widget script {src}" + (f": {reason}" if reason else ''))


class ChatWidget(abc.ABC):
    """
    Async handle on the vendor chat widget running in the guest's browser.
    """

    @abc.abstractmethod
    async def load_script(self, src, timeout):
        """Load `src` into the page; raise ScriptLoadError or WidgetTimeout."""

    @abc.abstractmethod
    async def wait_until_available(self, timeout):
        """Resolve once the widget global exists; raise WidgetTimeout otherwise."""

    @abc.abstractmethod
    async def init(self, config):
        pass

    @abc.abstractmethod
    async def merge_config(self, config):
        pass

    @abc.abstractmethod
    async def send_event(self, event):
        pass

    @abc.abstractmethod
    async def send_message(self, message):
        pass

    def cancel_pending(self):
        """Abandon outstanding waits, e.g. when the guest leaves the page."""


class SessionAwareWidget:
    """
    Wraps a ChatWidget so everything sent through it carries the session's
    userData and a fresh timestamp. The wrapped widget is left untouched.
    """

    def __init__(self, widget, session):
        self.widget = widget
        self.session = session
        self.attach_metadata = False

    def enable_metadata(self):
        self.attach_metadata = True

    def _user_data(self):
        user_data = self.session.as_user_data()
        user_data['timestamp'] = timezone.now().isoformat()
        return user_data

    def _enrich(self, payload):
        enriched = dict(payload)
        enriched['userData'] = {**self._user_data(), **payload.get('userData', {})}
        if self.attach_metadata:
            enriched['metadata'] = {
                'hotel_id': self.session.hotel_id,
                'room_number': self.session.room_number,
                'session_id': self.session.session_id,
                'hotel_name': self.session.hotel_name,
                **payload.get('metadata', {}),
            }
        return enriched

    async def send_message(self, message):
        if isinstance(message, str):
            message = {'type': 'text', 'text': message}
        return await self.widget.send_message(self._enrich(message))

    async def send_event(self, event):
        return await self.widget.send_event(self._enrich(event))
