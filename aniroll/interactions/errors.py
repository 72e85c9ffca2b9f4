from typing import Final, Tuple

from aniroll.interactions.typedefs import CommandCallback, Extension

__all__: Final[Tuple[str, ...]] = (
    "InteractionError",
    "MissingCommandCallbackError",
    "CommandNameConflictError",
    "CommandRuntimeError",
    "AlreadyRepliedError",
    "ExtensionInitializationError",
)


class InteractionError(Exception):
    ...


class MissingCommandCallbackError(InteractionError):
    ...


class CommandNameConflictError(InteractionError):
    ...


class AlreadyRepliedError(InteractionError):
    def __init__(self) -> None:
        super().__init__("the interaction has already been replied to.")


class CommandRuntimeError(InteractionError):
    def __init__(self, exception: Exception, command: CommandCallback) -> None:
        super().__init__(
            f"callback of command {command.__name__} raised an error:\n"
            f"    {exception!r}"
        )
        self.command = command
        self.exception = exception


class ExtensionInitializationError(InteractionError):
    def __init__(self, exception: Exception, extension: Extension) -> None:
        super().__init__(
            f"extension {extension.__name__} failed to initialize:\n    {exception!r}"
        )
        self.exception = exception
        self.extension = extension
