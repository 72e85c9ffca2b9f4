from __future__ import annotations

import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    List,
    MutableMapping,
    Optional,
    Set,
    Tuple,
    Type,
)

from hikari.api.special_endpoints import SlashCommandBuilder
from hikari.events.interaction_events import InteractionCreateEvent
from hikari.events.lifetime_events import StartedEvent
from hikari.impl.gateway_bot import GatewayBot
from hikari.interactions.command_interactions import CommandInteraction
from hikari.snowflakes import Snowflakeish

from aniroll.interactions.context import Context
from aniroll.interactions.data import DataContainerMixin
from aniroll.interactions.errors import (
    CommandNameConflictError,
    CommandRuntimeError,
    ExtensionInitializationError,
    InteractionError,
    MissingCommandCallbackError,
)
from aniroll.interactions.events import (
    CommandCallEvent,
    CommandFailureEvent,
    CommandSuccessEvent,
)
from aniroll.interactions.extensions import load_extension
from aniroll.interactions.typedefs import (
    CommandCallback,
    CommandContainer,
    EventCallback,
    Extension,
)
from aniroll.interactions.utils import get_command_builder

if TYPE_CHECKING:
    from hikari.api.event_manager import CallbackT, EventT

__all__ = ("GatewayCommandHandler",)
_LOGGER = logging.getLogger("aniroll.interactions.handler")


class GatewayCommandHandler(DataContainerMixin):
    """Registers slash commands, syncs them, and dispatches their interactions."""

    __slots__ = (
        "app",
        "guild_ids",
        "context_type",
        "_commands",
        "_extensions",
        "_listeners",
    )

    def __init__(
        self,
        app: GatewayBot,
        guild_ids: Optional[Set[Snowflakeish]] = None,
        context_type: Type[Context] = Context,
    ) -> None:
        super().__init__()
        self.app = app
        self.set_data(app)
        self.guild_ids = guild_ids or set()
        self.context_type = context_type
        self._commands: CommandContainer = {}
        self._extensions: Dict[str, Extension] = {}
        self._listeners: Dict[EventCallback[Any], CallbackT[Any]] = {}
        app.subscribe(StartedEvent, self._on_started)
        app.subscribe(InteractionCreateEvent, self._process_command_interaction)

    @property
    def commands(self) -> CommandContainer:
        return self._commands

    @property
    def extensions(self) -> Dict[str, Extension]:
        return self._extensions

    def _wrap_event_callback(self, func: EventCallback[EventT]) -> CallbackT[EventT]:
        async def callback(event: EventT) -> Any:
            return await self._invoke_callback(func, event)

        self._listeners[func] = callback
        return callback

    def subscribe(self, callback: EventCallback[Any]) -> None:
        self.app.subscribe(callback.__etype__, self._wrap_event_callback(callback))

    def add_command(self, func: CommandCallback, /) -> None:
        if func.__name__ in self._commands:
            raise CommandNameConflictError(
                f"command {func.__name__!r} already has a callback."
            )

        self._commands[func.__name__] = func

    def load_extension(self, name: str) -> None:
        mod = load_extension(name)
        try:
            mod.__einit__ and mod.__einit__(self)
        except Exception as e:
            raise ExtensionInitializationError(e, mod) from e

        self._extensions[name] = mod
        _LOGGER.debug("Loaded extension %s", name)

    async def _on_started(self, _: StartedEvent) -> None:
        await self._sync()

    async def _sync(self) -> None:
        commands: List[SlashCommandBuilder] = []
        guild_commands: MutableMapping[Snowflakeish, List[SlashCommandBuilder]] = {}
        for callback in self._commands.values():
            builder = get_command_builder(self.app.rest, callback)
            if guild_ids := callback.__guild_ids__ | self.guild_ids:
                for guild_id in guild_ids:
                    guild_commands.setdefault(guild_id, []).append(builder)
            else:
                commands.append(builder)

        me = self.app.get_me()
        assert me is not None

        await self.app.rest.set_application_commands(me.id, commands)

        for guild_id, builders in guild_commands.items():
            await self.app.rest.set_application_commands(me.id, builders, guild_id)

        _LOGGER.info(
            "Synced %d command(s) to %d guild(s)",
            len(self._commands),
            len(guild_commands),
        )

    def _resolve_cb(
        self, interaction: CommandInteraction
    ) -> Tuple[CommandCallback, Dict[str, Any]]:
        cb = self._commands[interaction.command_name]
        return cb, {o.name: o.value for o in interaction.options or []}

    async def _process_command_interaction(self, event: InteractionCreateEvent) -> None:
        if not isinstance(interaction := event.interaction, CommandInteraction):
            return

        ctx = self.context_type(interaction, self)

        try:
            cb, options = self._resolve_cb(interaction)
        except KeyError:
            await self._dispatch_command_failure(
                ctx,
                MissingCommandCallbackError(
                    f"couldn't find any implementation for {interaction.command_name!r}"
                ),
            )
            return

        ctx.set_command(cb)
        await self.app.dispatch(CommandCallEvent(self.app, ctx))

        extra_env: MutableMapping[Type[Any], Any] = {
            InteractionCreateEvent: event,
            CommandInteraction: interaction,
            self.context_type: ctx,
        }

        try:
            await self._invoke_callback(cb, extra_env=extra_env, **options)
        except Exception as e:
            await self._dispatch_command_failure(
                ctx,
                e if isinstance(e, InteractionError) else CommandRuntimeError(e, cb),
            )
        else:
            await self.app.dispatch(CommandSuccessEvent(self.app, ctx))

    async def _dispatch_command_failure(
        self, ctx: Context, exc: InteractionError
    ) -> None:
        await self.app.dispatch(CommandFailureEvent(self.app, ctx, exc))
