"""A Discord bot that shows AniList statistics and cover images."""

__version__ = "1.0.0"
