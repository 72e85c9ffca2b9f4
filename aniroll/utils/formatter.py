"""A module that renders the replies of the anime commands."""

import typing

import hikari

from aniroll.anilist.stats import AnimeStats

__all__: typing.Final[typing.List[str]] = [
    "STATS_COLOR",
    "INVALID_USERNAME",
    "INVALID_ANIME_ID",
    "NO_COVER_FOUND",
    "COVER_FETCH_FAILED",
    "UNEXPECTED_ERROR",
    "stats_fetch_failed",
    "create_stats_embed",
    "create_cover_embed",
]

STATS_COLOR: typing.Final[hikari.Color] = hikari.Color.from_hex_code("#0099ff")

INVALID_USERNAME: typing.Final[str] = "❌ Please provide a valid AniList username."
INVALID_ANIME_ID: typing.Final[str] = "Please provide a valid anime ID."
NO_COVER_FOUND: typing.Final[str] = "No cover image found for that anime ID."
COVER_FETCH_FAILED: typing.Final[
    str
] = "❌ An error occurred while fetching the anime cover."
UNEXPECTED_ERROR: typing.Final[
    str
] = "❌ An unexpected error occurred. Please try again later."


def stats_fetch_failed(username: str) -> str:
    """The same message for every failure, AniList doesn't tell them apart reliably."""
    return (
        f"❌ Error fetching anime stats for {username}. Possible reasons:\n"
        "- Invalid AniList username\n"
        "- Empty anime list\n"
        "- AniList API temporarily unavailable\n"
        "- Network connectivity issues"
    )


def create_stats_embed(username: str, stats: AnimeStats) -> hikari.Embed:
    average = stats.average_score if stats.has_average_score else "N/A"
    return (
        hikari.Embed(title=f"📊 Anime Stats for {username}", color=STATS_COLOR)
        .add_field(name="📈 Total Anime", value=f"🌟 {stats.total_anime}", inline=True)
        .add_field(name="✅ Completed", value=f"🏆 {stats.completed_anime}", inline=True)
        .add_field(
            name="📺 Currently Watching",
            value=f"🔴 {stats.watching_anime}",
            inline=True,
        )
        .add_field(name="⏸️ Paused", value=f"⏳ {stats.paused_anime}", inline=True)
        .add_field(name="❌ Dropped", value=f"🗑️ {stats.dropped_anime}", inline=True)
        .add_field(
            name="📅 Planning to Watch",
            value=f"📝 {stats.planning_anime}",
            inline=True,
        )
        .add_field(name="⭐ Average Score", value=f"🌈 {average}", inline=True)
        .set_footer("Stats fetched from AniList")
    )


def create_cover_embed(media_id: int, url: str) -> hikari.Embed:
    return hikari.Embed(title=f"Anime Cover for ID: {media_id}").set_image(url)
