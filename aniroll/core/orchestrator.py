"""A module that runs the anime commands from acknowledgement to reply."""
from __future__ import annotations

import contextlib
import logging
import typing

from aniroll.anilist.errors import AniListError, UpstreamError, UserNotFoundError
from aniroll.anilist.rest import AniListRest
from aniroll.anilist.stats import AnimeStats, aggregate
from aniroll.core.cache import ExpiringCache
from aniroll.core.metrics import MetricsService
from aniroll.interactions.context import Context
from aniroll.utils.formatter import (
    COVER_FETCH_FAILED,
    INVALID_ANIME_ID,
    INVALID_USERNAME,
    NO_COVER_FOUND,
    UNEXPECTED_ERROR,
    create_cover_embed,
    create_stats_embed,
    stats_fetch_failed,
)

__all__: typing.Final[typing.List[str]] = [
    "CommandOrchestrator",
    "parse_media_id",
    "stats_cache_key",
]
_LOGGER = logging.getLogger("aniroll.core.orchestrator")
STATS_COMPONENT: typing.Final[str] = "anime_stats"
COVER_COMPONENT: typing.Final[str] = "anime_cover"


def parse_media_id(raw: typing.Optional[str]) -> typing.Optional[int]:
    """Returns the id if the string is a positive integer, None otherwise."""
    raw = (raw or "").strip()
    if not (raw.isascii() and raw.isdigit()):
        return None

    return media_id if (media_id := int(raw)) > 0 else None


def stats_cache_key(username: str) -> str:
    return f"stats_{username}"


class CommandOrchestrator:
    """
    Takes a command from the interaction to exactly one reply.

    Every command is deferred before anything touches the network,
    validated, served from the cache or AniList, then rendered.
    Whatever fails on the way ends up as an error message to the user,
    nothing is raised out of `run_stats` or `run_cover`.
    """

    def __init__(
        self, rest: AniListRest, cache: ExpiringCache, metrics: MetricsService
    ) -> None:
        self.rest = rest
        self.cache = cache
        self.metrics = metrics

    @contextlib.asynccontextmanager
    async def guard(
        self, ctx: Context, component: str, message: str = UNEXPECTED_ERROR
    ) -> typing.AsyncIterator[None]:
        """Turns any exception into one last best-effort reply."""
        try:
            yield
        except Exception as e:  # pylint: disable=broad-except
            _LOGGER.error(
                "Critical error in %s command (state: %s)",
                component,
                ctx.state.name,
                exc_info=e,
            )
            self.metrics.track_error("unexpected", component)
            ctx.failed = True
            await ctx.respond_final(message)

    async def _respond_error(self, ctx: Context, message: str) -> None:
        ctx.failed = True
        await ctx.respond(message)

    async def fetch_user_stats(
        self, username: str, *, refresh: bool = False
    ) -> AnimeStats:
        """
        Returns the stats from the cache, or from AniList on a miss.

        Raises:
            UpstreamError: the request failed.
            UserNotFoundError: AniList has no such user.
        """
        key = stats_cache_key(username)
        if refresh:
            self.cache.clear(key)
        elif (cached := self.cache.get(key)) is not None:
            self.metrics.track_cache_hit(STATS_COMPONENT)
            return cached

        try:
            result = await self.rest.fetch_user_lists(username)
            if result.user is None:
                raise UserNotFoundError(username)
        except AniListError as e:
            self.metrics.track_error("fetch_failure", STATS_COMPONENT)
            self.metrics.track_api_request(STATS_COMPONENT, "failure", username)
            _LOGGER.error("Anime stats fetch failed for %s", username, exc_info=e)
            raise

        self.metrics.track_api_request(STATS_COMPONENT, "success", username)
        return self.cache.set(key, aggregate(result.collection))

    async def fetch_cover_image(
        self, media_id: int, identity: str
    ) -> typing.Optional[str]:
        try:
            url = await self.rest.fetch_cover_image(media_id)
        except UpstreamError as e:
            _LOGGER.error(
                "Failed to fetch the cover of %d for %s", media_id, identity, exc_info=e
            )
            self.metrics.track_error("cover_fetch_failure", COVER_COMPONENT)
            self.metrics.track_api_request(COVER_COMPONENT, "failure", identity)
            raise

        self.metrics.track_api_request(
            COVER_COMPONENT, "success" if url else "failure", identity
        )
        return url

    async def run_stats(
        self, ctx: Context, username: typing.Optional[str], *, refresh: bool = False
    ) -> None:
        async with self.guard(ctx, STATS_COMPONENT):
            await ctx.defer()

            if not (username := (username or "").strip()):
                await ctx.respond(INVALID_USERNAME)
                return

            try:
                stats = await self.fetch_user_stats(username, refresh=refresh)
            except AniListError:
                await self._respond_error(ctx, stats_fetch_failed(username))
                return

            await ctx.respond(embed=create_stats_embed(username, stats))

    async def run_cover(self, ctx: Context, raw_media_id: typing.Optional[str]) -> None:
        async with self.guard(ctx, COVER_COMPONENT, COVER_FETCH_FAILED):
            await ctx.defer()

            if (media_id := parse_media_id(raw_media_id)) is None:
                await ctx.respond(INVALID_ANIME_ID)
                return

            try:
                url = await self.fetch_cover_image(media_id, ctx.user.username)
            except UpstreamError:
                await self._respond_error(ctx, COVER_FETCH_FAILED)
                return

            if not url:
                await ctx.respond(NO_COVER_FOUND)
                return

            await ctx.respond(embed=create_cover_embed(media_id, url))
