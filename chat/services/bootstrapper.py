"""
Chat bootstrapper.

Drives one guest page from the QR query string to a ready chat widget:

    IDLE -> PARSING_PARAMS -> SESSION_ESTABLISHED -> LOADING_WIDGET_SCRIPTS
         -> WAITING_FOR_WIDGET -> INITIALIZED -> CHAT_OPENED

Missing parameters end in ERROR before any widget or tracking call. Script
or availability failures end in WIDGET_UNAVAILABLE, from which retry()
starts loading again. Session tracking runs in the background, once per
bootstrapper, and never affects the flow.
"""
import asyncio
import enum
import logging

from asgiref.sync import sync_to_async

from .propagation import (
    INIT,
    POST_INIT,
    WEBCHAT_OPENED,
    DEFAULT_STRATEGIES,
    PropagationContext,
    run_strategies,
    strategies_for,
)
from .session import SessionContext, MissingSessionParameters
from .widget import SessionAwareWidget, WidgetChannelError

logger = logging.getLogger(__name__)

INIT_FAILED_MESSAGE = "Failed to initialize chat bot"


class BootstrapState(str, enum.Enum):
    IDLE = 'idle'
    PARSING_PARAMS = 'parsing_params'
    ERROR = 'error'
    SESSION_ESTABLISHED = 'session_established'
    LOADING_WIDGET_SCRIPTS = 'loading_widget_scripts'
    WAITING_FOR_WIDGET = 'waiting_for_widget'
    INITIALIZED = 'initialized'
    CHAT_OPENED = 'chat_opened'
    WIDGET_UNAVAILABLE = 'widget_unavailable'


READY_STATES = (BootstrapState.INITIALIZED, BootstrapState.CHAT_OPENED)


class ChatBootstrapper:

    def __init__(self, config, widget, tracker, on_state_change=None, strategies=None):
        self.config = config
        self.widget = widget
        self.tracker = tracker
        self.on_state_change = on_state_change
        self.strategies = strategies or DEFAULT_STRATEGIES

        self.state = BootstrapState.IDLE
        self.session = None
        self.adapter = None
        self.error = None
        self.outcomes = []
        self._session_tracked = False
        self._background = set()
        self._early_events = []

    @property
    def is_ready(self):
        return self.state in READY_STATES

    async def _set_state(self, state, detail=None):
        self.state = state
        logger.info(f"Chat bootstrap -> {state.value}" + (f" ({detail})" if detail else ''))
        if self.on_state_change is not None:
            await self.on_state_change(state, detail)

    def _in_background(self, func, *args):
        task = asyncio.ensure_future(sync_to_async(func, thread_sensitive=False)(*args))
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def wait_for_background(self):
        """Await pending tracking calls. Used on shutdown and in tests."""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def start(self, params, hotel_name=None):
        if self.state != BootstrapState.IDLE:
            logger.warning(f"Chat bootstrap already started (state {self.state.value})")
            return self.state

        await self._set_state(BootstrapState.PARSING_PARAMS)
        try:
            session = SessionContext.from_query(params, hotel_name=hotel_name)
        except MissingSessionParameters as e:
            self.error = str(e)
            logger.warning(f"Chat session rejected, missing {', '.join(e.missing)}")
            await self._set_state(BootstrapState.ERROR, self.error)
            return self.state

        self.session = session
        self.adapter = SessionAwareWidget(self.widget, session)
        await self._set_state(BootstrapState.SESSION_ESTABLISHED)

        if not self._session_tracked:
            self._session_tracked = True
            self._in_background(self.tracker.track_session, session)

        return await self._bring_up_widget()

    async def retry(self):
        if self.state != BootstrapState.WIDGET_UNAVAILABLE:
            logger.warning(f"Chat bootstrap retry ignored in state {self.state.value}")
            return self.state
        self.error = None
        return await self._bring_up_widget()

    async def _bring_up_widget(self):
        await self._set_state(BootstrapState.LOADING_WIDGET_SCRIPTS)
        try:
            for src in self.config.scripts:
                await self.widget.load_script(src, self.config.script_load_timeout)
            await self._set_state(BootstrapState.WAITING_FOR_WIDGET)
            await self.widget.wait_until_available(self.config.widget_ready_timeout)
        except WidgetChannelError as e:
            self.error = str(e)
            await self._set_state(BootstrapState.WIDGET_UNAVAILABLE, self.error)
            return self.state

        ctx = self._context()
        outcomes = await run_strategies(INIT, ctx, self.strategies)
        self.outcomes.extend(outcomes)
        fatal = {s.name for s in strategies_for(INIT, self.strategies) if s.fatal}
        if any(not o.ok and o.strategy in fatal for o in outcomes):
            self.error = INIT_FAILED_MESSAGE
            self._early_events = []
            logger.error(f"{INIT_FAILED_MESSAGE} for session {self.session.session_id}")
            await self._set_state(BootstrapState.ERROR, self.error)
            return self.state

        self.outcomes.extend(await run_strategies(POST_INIT, ctx, self.strategies))
        await self._set_state(BootstrapState.INITIALIZED)

        early, self._early_events = self._early_events, []
        for event_type, payload in early:
            await self.handle_event(event_type, payload)
        return self.state

    def _context(self):
        return PropagationContext(config=self.config, session=self.session, widget=self.widget, adapter=self.adapter)

    async def handle_event(self, event_type, payload=None):
        """React to an event emitted by the widget in the page."""
        payload = payload or {}
        if self.state == BootstrapState.WAITING_FOR_WIDGET:
            # the page binds events right after init, before post-init finishes
            self._early_events.append((event_type, payload))
            return []
        if not self.is_ready:
            logger.debug(f"Widget event {event_type} ignored in state {self.state.value}")
            return []

        self._in_background(self.tracker.track_chat_event, self.session, event_type, payload.get('text', ''))

        if event_type == 'session' and payload.get('userId'):
            self._in_background(self.tracker.store_session_data, self.session, payload['userId'])

        outcomes = await run_strategies(event_type, self._context(), self.strategies)
        self.outcomes.extend(outcomes)

        if event_type == WEBCHAT_OPENED and self.state != BootstrapState.CHAT_OPENED:
            await self._set_state(BootstrapState.CHAT_OPENED)
        return outcomes

    async def send_guest_message(self, message):
        if not self.is_ready:
            raise WidgetChannelError("Chat is not ready")
        return await self.adapter.send_message(message)

    def cancel(self):
        for task in list(self._background):
            task.cancel()
        self.widget.cancel_pending()
