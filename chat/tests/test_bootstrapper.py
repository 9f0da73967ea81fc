from unittest.mock import MagicMock

from django.test import SimpleTestCase

from chat.services.bootstrapper import BootstrapState, ChatBootstrapper, INIT_FAILED_MESSAGE
from chat.services.config import MasterBotConfig
from chat.services.session import MissingSessionParameters
from chat.services.widget import ChatWidget, ScriptLoadError, WidgetChannelError, WidgetTimeout

PARAMS = {'hotel_id': 'h-1', 'room_number': '101', 'session_id': 's-1'}


class FakeWidget(ChatWidget):
    """Records every command instead of talking to a browser."""

    def __init__(self):
        self.calls = []
        self.failing_script = None
        self.available = True
        self.init_error = None
        self.merge_error = None
        self.on_init = None

    async def load_script(self, src, timeout):
        self.calls.append(('load_script', src))
        if src == self.failing_script:
            raise ScriptLoadError(src, 'network error')

    async def wait_until_available(self, timeout):
        self.calls.append(('wait_until_available', None))
        if not self.available:
            raise WidgetTimeout("Chat widget did not become available")

    async def init(self, config):
        self.calls.append(('init', config))
        if self.on_init:
            await self.on_init()
        if self.init_error:
            raise self.init_error

    async def merge_config(self, config):
        self.calls.append(('merge_config', config))
        if self.merge_error:
            raise self.merge_error

    async def send_event(self, event):
        self.calls.append(('send_event', event))

    async def send_message(self, message):
        self.calls.append(('send_message', message))

    def names(self):
        return [name for name, _ in self.calls]

    def last(self, name):
        return [payload for n, payload in self.calls if n == name][-1]


class ChatBootstrapperTest(SimpleTestCase):

    def setUp(self):
        self.config = MasterBotConfig.from_settings()
        self.widget = FakeWidget()
        self.tracker = MagicMock()
        self.states = []

        async def record(state, detail=None):
            self.states.append(state)

        self.bootstrapper = ChatBootstrapper(self.config, self.widget, self.tracker, on_state_change=record)

    async def test_missing_parameters_stop_before_any_side_effect(self):
        state = await self.bootstrapper.start({'hotel_id': 'h-1'})
        await self.bootstrapper.wait_for_background()

        self.assertEqual(state, BootstrapState.ERROR)
        self.assertEqual(self.bootstrapper.error, MissingSessionParameters.message)
        self.assertIsNone(self.bootstrapper.session)
        self.assertEqual(self.widget.calls, [])
        self.tracker.track_session.assert_not_called()

    async def test_full_bootstrap(self):
        state = await self.bootstrapper.start(PARAMS, hotel_name="Grand Plaza")
        await self.bootstrapper.wait_for_background()

        self.assertEqual(state, BootstrapState.INITIALIZED)
        self.assertTrue(self.bootstrapper.is_ready)
        self.assertEqual(self.states, [
            BootstrapState.PARSING_PARAMS,
            BootstrapState.SESSION_ESTABLISHED,
            BootstrapState.LOADING_WIDGET_SCRIPTS,
            BootstrapState.WAITING_FOR_WIDGET,
            BootstrapState.INITIALIZED,
        ])
        self.assertEqual(self.widget.names(), [
            'load_script', 'load_script', 'wait_until_available', 'init', 'merge_config', 'send_event',
        ])
        self.assertEqual(self.widget.last('init')['userData']['hotel_name'], "Grand Plaza")
        self.assertEqual(self.widget.last('merge_config')['userData']['session_id'], 's-1')
        event = self.widget.last('send_event')
        self.assertEqual(event['type'], 'session_start')
        self.assertEqual(event['userData']['room_number'], '101')
        self.tracker.track_session.assert_called_once_with(self.bootstrapper.session)

    async def test_tracking_failure_does_not_block_init(self):
        self.tracker.track_session.side_effect = RuntimeError("tracking down")

        state = await self.bootstrapper.start(PARAMS)
        await self.bootstrapper.wait_for_background()

        self.assertEqual(state, BootstrapState.INITIALIZED)

    async def test_script_failure_then_retry(self):
        self.widget.failing_script = self.config.scripts[1]

        state = await self.bootstrapper.start(PARAMS)

        self.assertEqual(state, BootstrapState.WIDGET_UNAVAILABLE)
        self.assertIn(self.config.scripts[1], self.bootstrapper.error)
        self.assertNotIn('init', self.widget.names())

        self.widget.failing_script = None
        state = await self.bootstrapper.retry()
        await self.bootstrapper.wait_for_background()

        self.assertEqual(state, BootstrapState.INITIALIZED)
        self.assertIsNone(self.bootstrapper.error)
        self.tracker.track_session.assert_called_once()

    async def test_widget_never_available(self):
        self.widget.available = False

        state = await self.bootstrapper.start(PARAMS)

        self.assertEqual(state, BootstrapState.WIDGET_UNAVAILABLE)
        self.assertEqual(self.bootstrapper.error, "Chat widget did not become available")

    async def test_retry_ignored_unless_widget_unavailable(self):
        await self.bootstrapper.start(PARAMS)

        state = await self.bootstrapper.retry()

        self.assertEqual(state, BootstrapState.INITIALIZED)
        self.assertEqual(self.widget.names().count('init'), 1)

    async def test_init_failure_is_fatal(self):
        self.widget.init_error = WidgetChannelError("init rejected")

        state = await self.bootstrapper.start(PARAMS)

        self.assertEqual(state, BootstrapState.ERROR)
        self.assertEqual(self.bootstrapper.error, INIT_FAILED_MESSAGE)
        self.assertNotIn('merge_config', self.widget.names())

    async def test_redundant_strategy_failure_is_tolerated(self):
        self.widget.merge_error = WidgetChannelError("mergeConfig not supported")

        state = await self.bootstrapper.start(PARAMS)

        self.assertEqual(state, BootstrapState.INITIALIZED)
        failed = [o for o in self.bootstrapper.outcomes if not o.ok]
        self.assertEqual([o.strategy for o in failed], ['merge_config'])
        self.assertIn('send_event', self.widget.names())

    async def test_events_ignored_before_ready(self):
        outcomes = await self.bootstrapper.handle_event('webchat:ready')

        self.assertEqual(outcomes, [])
        self.tracker.track_chat_event.assert_not_called()

    async def test_ready_event_sends_system_message(self):
        await self.bootstrapper.start(PARAMS, hotel_name="Grand Plaza")

        await self.bootstrapper.handle_event('webchat:ready')
        await self.bootstrapper.wait_for_background()

        message = self.widget.last('send_message')
        self.assertEqual(message['type'], 'session_init')
        self.assertEqual(message['text'], "SYSTEM: Initialize session for Grand Plaza, Room 101")
        self.assertTrue(message['metadata']['isSystem'])
        self.assertEqual(message['metadata']['hotel_id'], 'h-1')
        self.assertTrue(message['userData']['initialized'])
        self.tracker.track_chat_event.assert_called_once()

    async def test_opened_event_resends_tagged_session(self):
        await self.bootstrapper.start(PARAMS, hotel_name="Grand Plaza")

        await self.bootstrapper.handle_event('webchat:opened')

        self.assertEqual(self.bootstrapper.state, BootstrapState.CHAT_OPENED)
        self.assertEqual(self.widget.last('send_message')['text'], "SESSION_DATA: Grand Plaza|101|h-1|s-1")

    async def test_session_event_stores_widget_user(self):
        await self.bootstrapper.start(PARAMS)

        await self.bootstrapper.handle_event('session', {'userId': 'user-42'})
        await self.bootstrapper.wait_for_background()

        self.tracker.store_session_data.assert_called_once_with(self.bootstrapper.session, 'user-42')

    async def test_guest_message_requires_ready_chat(self):
        with self.assertRaises(WidgetChannelError):
            await self.bootstrapper.send_guest_message("Hi")

        await self.bootstrapper.start(PARAMS)
        await self.bootstrapper.send_guest_message("Hi")

        message = self.widget.last('send_message')
        self.assertEqual(message['text'], "Hi")
        self.assertEqual(message['metadata']['session_id'], 's-1')
        self.assertIn('timestamp', message['userData'])

    async def test_event_during_initialization_is_replayed(self):
        async def widget_ready_during_init():
            await self.bootstrapper.handle_event('webchat:ready')

        self.widget.on_init = widget_ready_during_init

        state = await self.bootstrapper.start(PARAMS, hotel_name="Grand Plaza")
        await self.bootstrapper.wait_for_background()

        self.assertEqual(state, BootstrapState.INITIALIZED)
        names = self.widget.names()
        self.assertEqual(names[-1], 'send_message')
        self.assertLess(names.index('send_event'), names.index('send_message'))
        self.assertEqual(self.widget.last('send_message')['type'], 'session_init')
        self.assertEqual([o.strategy for o in self.bootstrapper.outcomes][-1], 'ready_system_message')
        self.tracker.track_chat_event.assert_called_once()
