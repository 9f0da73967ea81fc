"""
Ranked channels that hand the session context to the chat bot.

The bot may read the context from any of them, so all are attempted in
rank order and each attempt is recorded as a PropagationOutcome. Only the
init strategy is fatal; the rest are redundant and their failures are
logged and tolerated.
"""
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

INIT = 'init'
POST_INIT = 'post_init'
WEBCHAT_READY = 'webchat:ready'
WEBCHAT_OPENED = 'webchat:opened'


@dataclass(frozen=True)
class PropagationOutcome:
    strategy: str
    ok: bool
    detail: str = ''


@dataclass
class PropagationContext:
    config: object
    session: object
    widget: object
    adapter: object


class PropagationStrategy:
    name = None
    rank = None
    trigger = None
    fatal = False

    async def apply(self, ctx):
        raise NotImplementedError

    async def run(self, ctx):
        try:
            detail = await self.apply(ctx)
        except Exception as e:
            logger.warning(f"Propagation strategy {self.name} failed for session {ctx.session.session_id}: {e}")
            return PropagationOutcome(self.name, False, str(e))

        logger.info(f"Propagation strategy {self.name} applied for session {ctx.session.session_id}")
        return PropagationOutcome(self.name, True, detail or '')


class InitConfig(PropagationStrategy):
    name = 'init_config'
    rank = 1
    trigger = INIT
    fatal = True

    async def apply(self, ctx):
        await ctx.widget.init(ctx.config.widget_init_config(ctx.session))
        return 'widget initialized with userData and messagingUrl'


class MergeConfig(PropagationStrategy):
    name = 'merge_config'
    rank = 2
    trigger = POST_INIT

    async def apply(self, ctx):
        await ctx.widget.merge_config({'userData': ctx.session.as_user_data()})


class MessageEnrichment(PropagationStrategy):
    name = 'message_enrichment'
    rank = 3
    trigger = POST_INIT

    async def apply(self, ctx):
        ctx.adapter.enable_metadata()


class SessionStartEvent(PropagationStrategy):
    name = 'session_start_event'
    rank = 4
    trigger = POST_INIT

    async def apply(self, ctx):
        await ctx.adapter.send_event({'type': 'session_start'})


class ReadySystemMessage(PropagationStrategy):
    name = 'ready_system_message'
    rank = 5
    trigger = WEBCHAT_READY

    async def apply(self, ctx):
        session = ctx.session
        await ctx.adapter.send_message({
            'type': 'session_init',
            'text': f"SYSTEM: Initialize session for {session.hotel_name}, Room {session.room_number}",
            'userData': {'initialized': True},
            'metadata': {'isSystem': True},
        })


class OpenedResend(PropagationStrategy):
    name = 'opened_resend'
    rank = 6
    trigger = WEBCHAT_OPENED

    async def apply(self, ctx):
        await ctx.adapter.send_message({
            'type': 'text',
            'text': ctx.session.tagged_text(),
            'userData': {'initialized': True},
        })


DEFAULT_STRATEGIES = sorted(
    [InitConfig(), MergeConfig(), MessageEnrichment(), SessionStartEvent(), ReadySystemMessage(), OpenedResend()],
    key=lambda strategy: strategy.rank,
)


def strategies_for(trigger, strategies=None):
    return [s for s in (strategies or DEFAULT_STRATEGIES) if s.trigger == trigger]


async def run_strategies(trigger, ctx, strategies=None):
    outcomes = []
    for strategy in strategies_for(trigger, strategies):
        outcomes.append(await strategy.run(ctx))
    return outcomes
