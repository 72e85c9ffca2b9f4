from hikari.commands import OptionType

from aniroll.core.orchestrator import CommandOrchestrator
from aniroll.interactions import Context, command, data, with_option


@command("animestats", "Shows the anime statistics of an AniList user.")
@with_option(OptionType.STRING, "username", "The AniList username.", required=True)
@with_option(OptionType.BOOLEAN, "refresh", "Ignore the cached statistics.")
async def animestats(
    ctx: Context = data(Context),
    orchestrator: CommandOrchestrator = data(CommandOrchestrator),
    username: str = "",
    refresh: bool = False,
) -> None:
    await orchestrator.run_stats(ctx, username, refresh=refresh)


@command("animecover", "Shows the cover image of an anime by its AniList ID.")
@with_option(
    OptionType.STRING, "animeid", "The AniList ID of the anime.", required=True
)
async def animecover(
    ctx: Context = data(Context),
    orchestrator: CommandOrchestrator = data(CommandOrchestrator),
    animeid: str = "",
) -> None:
    await orchestrator.run_cover(ctx, animeid)
