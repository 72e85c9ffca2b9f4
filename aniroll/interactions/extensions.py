from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Callable, Optional, Type, cast

from hikari.events.base_events import Event

from aniroll.interactions.typedefs import (
    CallableProto,
    EventCallback,
    EventT,
    Extension,
    ExtensionInitializer,
)
from aniroll.interactions.utils import ensure_signature, is_command, is_listener

if TYPE_CHECKING:
    from aniroll.interactions.handler import GatewayCommandHandler

__all__ = ("initializer", "listener", "load_extension")


def _get_default_einit(mod: Extension) -> ExtensionInitializer:
    @initializer
    def _default_einit(handler: GatewayCommandHandler) -> None:
        for obj in mod.__dict__.values():
            if is_command(obj):
                handler.add_command(obj)
            elif is_listener(obj):
                handler.subscribe(obj)

    return _default_einit


def load_extension(name: str) -> Extension:
    """Imports the module, giving it the default initializer if it has none."""
    mod = cast(Extension, importlib.import_module(name))

    if not hasattr(mod, "__einit__"):
        mod.__einit__ = _get_default_einit(mod)

    return mod


def initializer(func: CallableProto) -> ExtensionInitializer:
    func = cast(ExtensionInitializer, func)
    func.__name__ = "__einit__"
    return func


def listener(
    event: Optional[Type[EventT]] = None,
) -> Callable[[CallableProto], EventCallback[EventT]]:
    """Marks the function as a listener, inferring the event type if not given."""

    def decorator(func: CallableProto) -> EventCallback[EventT]:
        cast_func = cast("EventCallback[EventT]", ensure_signature(func))
        event_type = event
        if event_type is None:
            param = next(iter(cast_func.__signature__.parameters.values()))
            annotation = param.annotation
            if isinstance(annotation, str):
                annotation = func.__globals__.get(annotation)  # type: ignore

            if not (isinstance(annotation, type) and issubclass(annotation, Event)):
                raise RuntimeError(
                    "please either provide the event type "
                    "or annotate the event parameter."
                )

            event_type = cast("Type[EventT]", annotation)

        cast_func.__etype__ = event_type
        cast_func.__is_listener__ = True
        return cast_func

    return decorator
