import inspect
from types import TracebackType
from typing import Any, Optional, Tuple, Type, cast

from hikari.api.rest import RESTClient
from hikari.api.special_endpoints import SlashCommandBuilder
from typing_extensions import TypeGuard

from aniroll.interactions.typedefs import (
    CallableProto,
    CommandCallback,
    EventCallback,
    SignatureAware,
)

__all__ = (
    "get_command_builder",
    "ensure_signature",
    "ensure_options",
    "get_exc_info",
    "is_command",
    "is_listener",
)


def get_command_builder(
    rest: RESTClient, callback: CommandCallback
) -> SlashCommandBuilder:
    builder = rest.slash_command_builder(callback.__name__, callback.__description__)
    for option in callback.options:
        builder.add_option(option)

    return builder


def ensure_signature(callback: CallableProto) -> SignatureAware:
    callback = cast(SignatureAware, callback)
    if not hasattr(callback, "__signature__"):
        callback.__signature__ = inspect.signature(callback)
    return callback


def ensure_options(callback: CallableProto) -> CommandCallback:
    callback = cast(CommandCallback, callback)
    callback.__dict__.setdefault("options", [])
    return callback


def get_exc_info(
    exception: BaseException,
) -> Tuple[Type[BaseException], BaseException, Optional[TracebackType]]:
    return type(exception), exception, exception.__traceback__


def is_command(obj: Any) -> TypeGuard[CommandCallback]:
    return getattr(obj, "__is_command__", False)


def is_listener(obj: Any) -> TypeGuard[EventCallback]:
    return getattr(obj, "__is_listener__", False)
