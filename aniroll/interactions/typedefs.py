from __future__ import annotations

import inspect
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    List,
    Literal,
    Optional,
    Protocol,
    Set,
    Type,
    TypeVar,
)

from hikari.commands import CommandOption
from hikari.events.base_events import Event
from hikari.snowflakes import Snowflakeish

if TYPE_CHECKING:
    from aniroll.interactions.handler import GatewayCommandHandler

__all__ = (
    "CallableProto",
    "SignatureAware",
    "CommandCallback",
    "CommandContainer",
    "Extension",
    "ExtensionInitializer",
    "EventCallback",
)
EventT = TypeVar("EventT", bound=Event)


class CallableProto(Protocol):
    __call__: Callable[..., Any]


class SignatureAware(CallableProto, Protocol):
    __signature__: inspect.Signature


class CommandCallback(SignatureAware, Protocol):
    __name__: str
    __description__: str
    __module__: str
    __guild_ids__: Set[Snowflakeish]
    __is_command__: Literal[True]
    options: List[CommandOption]


CommandContainer = Dict[str, CommandCallback]


class ExtensionInitializer(Protocol):
    __name__: Literal["__einit__"]

    def __call__(self, handler: GatewayCommandHandler) -> Any:
        ...


class Extension(Protocol):
    __name__: str
    __dict__: Dict[str, Any]
    __einit__: Optional[ExtensionInitializer]


class EventCallback(SignatureAware, Protocol[EventT]):
    __etype__: Type[EventT]
    __is_listener__: Literal[True]
