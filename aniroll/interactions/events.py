from __future__ import annotations

from attr import attrib, attrs
from hikari.events.base_events import Event
from hikari.traits import RESTAware

from aniroll.interactions.context import Context
from aniroll.interactions.errors import InteractionError

__all__ = (
    "CommandEvent",
    "CommandCallEvent",
    "CommandFailureEvent",
    "CommandSuccessEvent",
)


@attrs(slots=True, weakref_slot=False)
class CommandEvent(Event):
    app: RESTAware = attrib()
    context: Context = attrib()


@attrs(slots=True, weakref_slot=False)
class CommandCallEvent(CommandEvent):
    ...


@attrs(slots=True, weakref_slot=False)
class CommandFailureEvent(CommandEvent):
    exception: InteractionError = attrib()


@attrs(slots=True, weakref_slot=False)
class CommandSuccessEvent(CommandEvent):
    ...
