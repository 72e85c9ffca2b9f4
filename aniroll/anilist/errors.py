import typing

__all__: typing.Final[typing.List[str]] = [
    "AniListError",
    "UpstreamError",
    "UserNotFoundError",
]


class AniListError(Exception):
    """Base class of the errors raised while talking to AniList."""


class UpstreamError(AniListError):
    """Raised when the request failed or AniList returned something unusable."""

    def __init__(self, message: str, *, status: typing.Optional[int] = None) -> None:
        super().__init__(message if status is None else f"{status}: {message}")
        self.status = status


class UserNotFoundError(AniListError):
    """Raised when AniList didn't resolve the requested user."""

    def __init__(self, username: str) -> None:
        super().__init__(f"user {username!r} wasn't found on AniList.")
        self.username = username
