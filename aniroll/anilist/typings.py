"""Typed records of the AniList responses this bot consumes."""
from __future__ import annotations

import typing

import attr

__all__: typing.Final[typing.List[str]] = [
    "AniListUser",
    "MediaListEntry",
    "MediaList",
    "MediaListCollection",
    "UserListCollection",
    "MediaCover",
]

_Payload = typing.Mapping[str, typing.Any]


def _mapping(obj: typing.Any) -> _Payload:
    return obj if isinstance(obj, typing.Mapping) else {}


def _sequence(obj: typing.Any) -> typing.Sequence[typing.Any]:
    return obj if isinstance(obj, (list, tuple)) else ()


@attr.frozen
class AniListUser:
    id: int = attr.field()
    name: str = attr.field()

    @classmethod
    def from_payload(cls, payload: typing.Any) -> typing.Optional[AniListUser]:
        if not isinstance(payload, typing.Mapping) or payload.get("id") is None:
            return None

        return cls(id=payload["id"], name=payload.get("name") or "")


@attr.frozen
class MediaListEntry:
    status: typing.Optional[str] = attr.field()
    average_score: typing.Optional[int] = attr.field()

    @classmethod
    def from_payload(cls, payload: typing.Any) -> MediaListEntry:
        payload = _mapping(payload)
        score = _mapping(payload.get("media")).get("averageScore")
        return cls(
            status=payload.get("status"),
            average_score=score
            if isinstance(score, (int, float)) and not isinstance(score, bool)
            else None,
        )


@attr.frozen
class MediaList:
    name: str = attr.field()
    entries: typing.Tuple[MediaListEntry, ...] = attr.field(default=())

    @classmethod
    def from_payload(cls, payload: typing.Any) -> MediaList:
        payload = _mapping(payload)
        return cls(
            name=payload.get("name") or "",
            entries=tuple(
                MediaListEntry.from_payload(e)
                for e in _sequence(payload.get("entries"))
            ),
        )


@attr.frozen
class MediaListCollection:
    lists: typing.Tuple[MediaList, ...] = attr.field(default=())

    @classmethod
    def from_payload(cls, payload: typing.Any) -> MediaListCollection:
        return cls(
            lists=tuple(
                MediaList.from_payload(lst)
                for lst in _sequence(_mapping(payload).get("lists"))
            )
        )

    def get_list(self, name: str) -> typing.Optional[MediaList]:
        return next((lst for lst in self.lists if lst.name == name), None)


@attr.frozen
class UserListCollection:
    user: typing.Optional[AniListUser] = attr.field()
    collection: MediaListCollection = attr.field(factory=MediaListCollection)

    @classmethod
    def from_payload(cls, payload: typing.Any) -> UserListCollection:
        payload = _mapping(payload)
        return cls(
            user=AniListUser.from_payload(payload.get("User")),
            collection=MediaListCollection.from_payload(
                payload.get("MediaListCollection")
            ),
        )


@attr.frozen
class MediaCover:
    media_id: int = attr.field()
    extra_large: typing.Optional[str] = attr.field()

    @classmethod
    def from_payload(cls, media_id: int, payload: typing.Any) -> MediaCover:
        cover = _mapping(_mapping(_mapping(payload).get("Media")).get("coverImage"))
        url = cover.get("extraLarge")
        return cls(media_id=media_id, extra_large=url if url else None)
