from __future__ import annotations

import asyncio
import logging
import typing

import aiohttp

from aniroll.anilist.errors import UpstreamError
from aniroll.anilist.typings import MediaCover, UserListCollection

__all__: typing.Final[typing.List[str]] = ["AniListRest", "ANILIST_API_URL"]
_LOGGER = logging.getLogger("aniroll.anilist.rest")
ANILIST_API_URL: typing.Final[str] = "https://graphql.anilist.co"
HEADERS: typing.Final[typing.Dict[str, str]] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

USER_LISTS_QUERY: typing.Final[str] = """
query ($username: String) {
    User(name: $username) {
        id
        name
    }
    MediaListCollection(userName: $username, type: ANIME) {
        lists {
            name
            entries {
                status
                media {
                    averageScore
                }
            }
        }
    }
}
"""

COVER_QUERY: typing.Final[str] = """
query ($id: Int) {
    Media(id: $id, type: ANIME) {
        coverImage {
            extraLarge
        }
    }
}
"""


def _error_message(body: typing.Any) -> str:
    if isinstance(body, typing.Mapping) and (errors := body.get("errors")):
        return "; ".join(
            str(e.get("message", e)) if isinstance(e, typing.Mapping) else str(e)
            for e in errors
        )

    return "malformed response payload"


class AniListRest:
    """A thin GraphQL client for the AniList API."""

    def __init__(
        self,
        *,
        url: str = ANILIST_API_URL,
        timeout: float = 15.0,
        session: typing.Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Returns the ClientSession, creating one if there's none alive."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True

        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

        self._session = None

    async def query(
        self, query: str, variables: typing.Dict[str, typing.Any]
    ) -> typing.Mapping[str, typing.Any]:
        """
        Posts a GraphQL query and returns its `data` object.

        AniList answers 404 alongside a `data` object with null fields
        when the requested entity doesn't exist. That's returned as is,
        the callers decide what a null means.
        """
        try:
            async with self.session.post(
                self.url,
                json={"query": query, "variables": variables},
                headers=HEADERS,
                timeout=self._timeout,
            ) as r:
                status = r.status
                try:
                    body = await r.json(content_type=None)
                except ValueError as e:
                    raise UpstreamError(
                        "undecodable response body", status=status
                    ) from e
        except aiohttp.ClientError as e:
            raise UpstreamError(str(e) or e.__class__.__name__) from e
        except asyncio.TimeoutError as e:
            raise UpstreamError("request timed out") from e

        _LOGGER.debug("AniList responded with %s to %s", status, variables)

        if status >= 400 and status != 404:
            raise UpstreamError(_error_message(body), status=status)

        if not isinstance(body, typing.Mapping) or not isinstance(
            data := body.get("data"), typing.Mapping
        ):
            raise UpstreamError(_error_message(body), status=status)

        return data

    async def fetch_user_lists(self, username: str) -> UserListCollection:
        data = await self.query(USER_LISTS_QUERY, {"username": username})
        return UserListCollection.from_payload(data)

    async def fetch_cover_image(self, media_id: int) -> typing.Optional[str]:
        """Returns the extra large cover of the anime, None if it doesn't exist."""
        data = await self.query(COVER_QUERY, {"id": media_id})
        return MediaCover.from_payload(media_id, data).extra_large
