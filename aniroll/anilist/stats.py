"""A module that turns a user's media lists into summary statistics."""
from __future__ import annotations

import typing

import attr

from aniroll.anilist.typings import MediaListCollection, MediaListEntry

__all__: typing.Final[typing.List[str]] = [
    "AnimeStats",
    "STATUS_LISTS",
    "UNAVAILABLE",
    "aggregate",
]

# The default list names on AniList, in display order.
STATUS_LISTS: typing.Final[typing.Tuple[str, ...]] = (
    "Completed",
    "Watching",
    "Paused",
    "Dropped",
    "Planning",
)
UNAVAILABLE: typing.Final[str] = "unavailable"


@attr.frozen
class AnimeStats:
    total_anime: int = attr.field(default=0)
    completed_anime: int = attr.field(default=0)
    watching_anime: int = attr.field(default=0)
    paused_anime: int = attr.field(default=0)
    dropped_anime: int = attr.field(default=0)
    planning_anime: int = attr.field(default=0)
    average_score: str = attr.field(default=UNAVAILABLE)

    @property
    def has_average_score(self) -> bool:
        return self.average_score != UNAVAILABLE

    def as_dict(self) -> typing.Dict[str, typing.Any]:
        return {
            "totalAnime": self.total_anime,
            "completedAnime": self.completed_anime,
            "watchingAnime": self.watching_anime,
            "pausedAnime": self.paused_anime,
            "droppedAnime": self.dropped_anime,
            "planningAnime": self.planning_anime,
            "averageScore": self.average_score,
        }


def _average(entries: typing.Iterable[MediaListEntry]) -> str:
    scores = [e.average_score for e in entries if e.average_score is not None]
    if not scores:
        return UNAVAILABLE

    return f"{sum(scores) / len(scores):.2f}"


def aggregate(collection: typing.Optional[MediaListCollection]) -> AnimeStats:
    """
    Counts the entries of every status list and averages their scores.

    A missing list counts as an empty one, so this never fails
    on a partial or empty collection.
    """
    collection = collection or MediaListCollection()
    by_status: typing.Dict[str, typing.Tuple[MediaListEntry, ...]] = {
        name: lst.entries if (lst := collection.get_list(name)) else ()
        for name in STATUS_LISTS
    }
    all_entries = [e for entries in by_status.values() for e in entries]

    return AnimeStats(
        total_anime=len(all_entries),
        completed_anime=len(by_status["Completed"]),
        watching_anime=len(by_status["Watching"]),
        paused_anime=len(by_status["Paused"]),
        dropped_anime=len(by_status["Dropped"]),
        planning_anime=len(by_status["Planning"]),
        average_score=_average(all_entries),
    )
