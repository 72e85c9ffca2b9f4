from inspect import Signature
from typing import Callable, Optional, Sequence, Set, cast

from hikari.commands import CommandChoice, CommandOption, OptionType
from hikari.snowflakes import Snowflakeish

from aniroll.interactions.typedefs import CallableProto, CommandCallback
from aniroll.interactions.utils import ensure_options, ensure_signature

__all__ = ("command", "with_option")


def command(
    name: str,
    description: str,
    guild_ids: Optional[Set[Snowflakeish]] = None,
) -> Callable[[CallableProto], CommandCallback]:
    def decorator(func: CallableProto) -> CommandCallback:
        cast_func = ensure_options(ensure_signature(func))
        cast_func.__name__ = name
        cast_func.__description__ = description
        cast_func.__is_command__ = True
        cast_func.__guild_ids__ = guild_ids or set()
        return cast_func

    return decorator


def with_option(
    type_: OptionType,
    name: str,
    description: str,
    choices: Optional[Sequence[CommandChoice]] = None,
    *,
    required: Optional[bool] = None,
) -> Callable[[CallableProto], CommandCallback]:
    """
    Adds an option to the command.

    The option is required if the parameter has no default,
    unless `required` says otherwise. Decorators apply bottom-up,
    so options are prepended to keep them in the written order.
    """

    def decorator(func: CallableProto) -> CommandCallback:
        cast_func = ensure_options(ensure_signature(func))
        if (param := cast_func.__signature__.parameters.get(name)) is None:
            raise TypeError(f"{func!r} has no parameter named {name!r}.")

        cast_func.options.insert(
            0,
            CommandOption(
                type=type_,
                name=name,
                description=description,
                is_required=param.default is Signature.empty
                if required is None
                else required,
                choices=choices or None,
            ),
        )
        return cast_func

    return decorator
