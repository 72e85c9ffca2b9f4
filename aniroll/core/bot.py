"""A module that contains the bot class."""
from __future__ import annotations

import datetime
import logging
import os
import typing

import hikari

from aniroll.anilist.rest import AniListRest
from aniroll.core import constants
from aniroll.core.cache import ExpiringCache
from aniroll.core.metrics import MetricsService
from aniroll.core.orchestrator import CommandOrchestrator
from aniroll.interactions import Context, GatewayCommandHandler

__all__: typing.Final[typing.List[str]] = ["AniRoll"]
_LOGGER = logging.getLogger("aniroll.core.bot")


class AniRoll(hikari.GatewayBot):
    """The bot, wiring the command handler to the AniList services."""

    def __init__(self, token: typing.Optional[str] = None) -> None:
        if not (token := token or constants.DISCORD_TOKEN):
            raise RuntimeError("DISCORD_TOKEN isn't set.")

        # slash commands don't need any privileged intents
        super().__init__(
            token=token,
            intents=hikari.Intents.GUILDS,
            logs=constants.LOG_LEVEL,
        )

        self.metrics = MetricsService()
        self.stats_cache = ExpiringCache(constants.CACHE_TTL)
        self.anilist = AniListRest(
            url=constants.ANILIST_API_URL, timeout=constants.ANILIST_TIMEOUT
        )
        self.orchestrator = CommandOrchestrator(
            self.anilist, self.stats_cache, self.metrics
        )

        self.handler = (
            GatewayCommandHandler(self, constants.GUILD_IDS, context_type=Context)
            .set_data(self.metrics)
            .set_data(self.stats_cache)
            .set_data(self.anilist)
            .set_data(self.orchestrator)
        )

        self.launch_time: typing.Optional[datetime.datetime] = None

        self.subscribe(hikari.StartingEvent, self.on_starting)
        self.subscribe(hikari.StartedEvent, self.on_started)
        self.subscribe(hikari.StoppingEvent, self.on_stopping)

    @property
    def raw_extensions(self) -> typing.Iterator[str]:
        """Returns the dotted paths of the extensions."""
        here = os.path.join(os.path.dirname(__file__), "..", "extensions")
        return (
            f"aniroll.extensions.{file[:-3]}"
            for file in sorted(os.listdir(here))
            if file.endswith(".py") and not file.startswith("_")
        )

    def load_extensions(self) -> None:
        """Loads all the extensions."""
        for extension in self.raw_extensions:
            try:
                self.handler.load_extension(extension)
            except Exception as _e:  # pylint: disable=broad-except
                _LOGGER.error("%s failed to load", extension, exc_info=_e)

    async def on_starting(self, _: hikari.StartingEvent) -> None:
        self.load_extensions()

        if constants.METRICS_PORT:
            self.metrics.start_server(constants.METRICS_PORT)

    async def on_started(self, _: hikari.StartedEvent) -> None:
        self.launch_time = datetime.datetime.now(datetime.timezone.utc)
        _LOGGER.info(
            "Ready with %d command(s) at %s",
            len(self.handler.commands),
            self.launch_time.isoformat(timespec="seconds"),
        )

    async def on_stopping(self, _: hikari.StoppingEvent) -> None:
        await self.anilist.close()
