"""A module that contains the configuration read from the environment."""

import os
import typing

from dotenv import load_dotenv

load_dotenv()


def _get_float(var: str, default: float) -> float:
    value = os.getenv(var)
    return float(value) if value else default


def _get_int(var: str, default: int) -> int:
    value = os.getenv(var)
    return int(value) if value else default


def _get_snowflakes(var: str) -> typing.Set[int]:
    return {int(i) for i in os.getenv(var, "").split(",") if i.strip()}


DISCORD_TOKEN: typing.Optional[str] = os.getenv("DISCORD_TOKEN")
GUILD_IDS: typing.Set[int] = _get_snowflakes("GUILD_IDS")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")

METRICS_PORT = _get_int("METRICS_PORT", 9090)

# seconds
CACHE_TTL = _get_float("CACHE_TTL", 300.0)

ANILIST_API_URL = os.getenv("ANILIST_API_URL", "https://graphql.anilist.co")
ANILIST_TIMEOUT = _get_float("ANILIST_TIMEOUT", 15.0)
