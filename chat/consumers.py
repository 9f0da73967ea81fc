import asyncio
import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.apps import apps
from django.http import QueryDict

from .lookups import get_hotel_name
from .services.bootstrapper import BootstrapState, ChatBootstrapper
from .services.session import REQUIRED_PARAMS, MissingSessionParameters
from .services.tracker import SessionTracker
from .services.widget import ChatWidget, ScriptLoadError, WidgetChannelError, WidgetTimeout

logger = logging.getLogger(__name__)

lookup_hotel_name = database_sync_to_async(get_hotel_name)


class WebSocketWidget(ChatWidget):
    """
    ChatWidget driven over the guest page's socket.

    Commands go out as `widget.*` messages; the page answers script loads
    and widget availability with `script.loaded`, `script.failed` and
    `widget.available`, which resolve the futures awaited here.
    """

    def __init__(self, send_command):
        self.send_command = send_command
        self._scripts = {}
        self._available = None
        self._is_available = False

    def _future(self):
        return asyncio.get_running_loop().create_future()

    async def load_script(self, src, timeout):
        future = self._future()
        self._scripts[src] = future
        await self.send_command({'type': 'widget.load_script', 'src': src})
        try:
            await asyncio.wait_for(future, timeout)
        except asyncio.TimeoutError:
            raise WidgetTimeout(f"Timed out loading widget script {src}")
        finally:
            self._scripts.pop(src, None)

    def script_loaded(self, src):
        future = self._scripts.get(src)
        if future is not None and not future.done():
            future.set_result(True)

    def script_failed(self, src, reason=''):
        future = self._scripts.get(src)
        if future is not None and not future.done():
            future.set_exception(ScriptLoadError(src, reason))

    async def wait_until_available(self, timeout):
        if self._is_available:
            return
        self._available = self._future()
        try:
            await asyncio.wait_for(self._available, timeout)
        except asyncio.TimeoutError:
            raise WidgetTimeout("Chat widget did not become available")
        finally:
            self._available = None

    def widget_available(self):
        self._is_available = True
        if self._available is not None and not self._available.done():
            self._available.set_result(True)

    async def init(self, config):
        await self.send_command({'type': 'widget.init', 'config': config})

    async def merge_config(self, config):
        await self.send_command({'type': 'widget.merge_config', 'config': config})

    async def send_event(self, event):
        await self.send_command({'type': 'widget.send_event', 'event': event})

    async def send_message(self, message):
        await self.send_command({'type': 'widget.send_message', 'message': message})

    def cancel_pending(self):
        pending = list(self._scripts.values())
        if self._available is not None:
            pending.append(self._available)
        for future in pending:
            if not future.done():
                future.cancel()
        self._scripts.clear()


class ChatSessionConsumer(AsyncWebsocketConsumer):
    """
    One socket per guest chat page.

    The query string carries the QR session (hotel_id, room_number,
    session_id and the optional guest_name and reservation_id). The
    consumer runs a ChatBootstrapper for it and relays its state changes
    and widget commands to the page.
    """

    async def connect(self):
        await self.accept()

        self.params = QueryDict(self.scope.get('query_string', b'').decode())
        config = apps.get_app_config('chat').master_bot_config

        self.widget = WebSocketWidget(self.send_json)
        self.bootstrapper = ChatBootstrapper(
            config,
            self.widget,
            SessionTracker.from_config(config),
            on_state_change=self.on_state_change,
        )

        hotel_name = await lookup_hotel_name(self.params.get('hotel_id'))
        self.bootstrap_task = asyncio.ensure_future(self.bootstrapper.start(self.params, hotel_name=hotel_name))

    async def disconnect(self, close_code):
        bootstrapper = getattr(self, 'bootstrapper', None)
        if bootstrapper is None:
            return
        bootstrapper.cancel()
        if not self.bootstrap_task.done():
            self.bootstrap_task.cancel()
        logger.info(f"Chat socket closed ({close_code}) in state {bootstrapper.state.value}")

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or '')
        except json.JSONDecodeError:
            await self.send_error("Invalid JSON")
            return

        message_type = data.get('type')

        if message_type == 'script.loaded':
            self.widget.script_loaded(data.get('src'))
        elif message_type == 'script.failed':
            self.widget.script_failed(data.get('src'), data.get('reason', ''))
        elif message_type == 'widget.available':
            self.widget.widget_available()
        elif message_type == 'widget.event':
            await self.bootstrapper.handle_event(data.get('event_type'), data.get('payload') or {})
        elif message_type == 'widget.outgoing':
            await self.handle_outgoing(data.get('message'))
        elif message_type == 'bootstrap.retry':
            # retry waits on page replies, so it must not block this receive loop
            self.bootstrap_task = asyncio.ensure_future(self.bootstrapper.retry())
        else:
            await self.send_error(f"Unknown message type: {message_type}")

    async def handle_outgoing(self, message):
        if not message:
            await self.send_error("message is required")
            return
        try:
            await self.bootstrapper.send_guest_message(message)
        except WidgetChannelError as e:
            await self.send_error(str(e))

    async def on_state_change(self, state, detail=None):
        await self.send_json({'type': 'bootstrap.state', 'state': state.value})

        if state == BootstrapState.SESSION_ESTABLISHED:
            await self.send_json({
                'type': 'session.established',
                'session': self.bootstrapper.session.as_user_data(),
            })
        elif state == BootstrapState.ERROR and self.bootstrapper.session is None:
            missing = [key for key in REQUIRED_PARAMS if not (self.params.get(key) or '').strip()]
            await self.send_json({
                'type': 'chat.unavailable',
                'message': detail or MissingSessionParameters.message,
                'missing': missing,
            })
            await self.close()
        elif state == BootstrapState.ERROR:
            await self.send_json({'type': 'bootstrap.error', 'message': detail, 'recoverable': False})
        elif state == BootstrapState.WIDGET_UNAVAILABLE:
            await self.send_json({'type': 'bootstrap.error', 'message': detail, 'recoverable': True})

    async def send_json(self, data):
        await self.send(text_data=json.dumps(data))

    async def send_error(self, message):
        await self.send_json({'type': 'error', 'message': message})
