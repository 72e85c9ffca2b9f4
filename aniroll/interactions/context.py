from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any, Optional, TypeVar

from hikari.embeds import Embed
from hikari.interactions.base_interactions import ResponseType
from hikari.interactions.command_interactions import CommandInteraction
from hikari.messages import MessageFlag
from hikari.undefined import UNDEFINED, UndefinedOr
from hikari.users import User

from aniroll.interactions.errors import AlreadyRepliedError
from aniroll.interactions.typedefs import CommandCallback

if TYPE_CHECKING:
    from aniroll.interactions.handler import GatewayCommandHandler

__all__ = ("Context", "ReplyState")
_LOGGER = logging.getLogger("aniroll.interactions.context")
ContextT = TypeVar("ContextT", bound="Context")


class ReplyState(enum.Enum):
    RECEIVED = enum.auto()
    """Nothing has been sent back yet."""

    DEFERRED = enum.auto()
    """The "thinking..." acknowledgement was sent, the reply must be an edit."""

    REPLIED = enum.auto()
    """The one and only reply was sent."""


class Context:
    """
    Wraps a command interaction and tracks what has been sent back.

    Every method that talks to Discord checks the state first,
    so the interaction is never acknowledged twice
    and never answered after it has been answered.
    """

    __slots__ = ("interaction", "handler", "command", "state", "failed")

    def __init__(
        self,
        interaction: CommandInteraction,
        handler: Optional[GatewayCommandHandler] = None,
    ) -> None:
        self.interaction = interaction
        self.handler = handler
        self.command: Optional[CommandCallback] = None
        self.state = ReplyState.RECEIVED
        # set when the reply is an error message
        self.failed = False

    def set_command(self: ContextT, command: CommandCallback) -> ContextT:
        self.command = command
        return self

    @property
    def deferred(self) -> bool:
        return self.state is ReplyState.DEFERRED

    @property
    def replied(self) -> bool:
        return self.state is ReplyState.REPLIED

    @property
    def user(self) -> User:
        return self.interaction.user

    @property
    def command_name(self) -> str:
        return self.command.__name__ if self.command else self.interaction.command_name

    async def defer(self) -> None:
        """Acknowledges the interaction, does nothing if that's already done."""
        if self.state is not ReplyState.RECEIVED:
            return

        await self.interaction.create_initial_response(
            ResponseType.DEFERRED_MESSAGE_CREATE
        )
        self.state = ReplyState.DEFERRED

    async def respond(
        self,
        content: UndefinedOr[Any] = UNDEFINED,
        *,
        embed: UndefinedOr[Embed] = UNDEFINED,
        ephemeral: bool = False,
    ) -> None:
        """
        Sends the reply, editing the deferred response if there's one.

        Ephemerality can't be changed after deferring,
        so `ephemeral` only applies to a reply that wasn't deferred.
        """
        if self.state is ReplyState.REPLIED:
            raise AlreadyRepliedError()

        if self.state is ReplyState.DEFERRED:
            await self.interaction.edit_initial_response(content, embed=embed)
        else:
            await self.interaction.create_initial_response(
                ResponseType.MESSAGE_CREATE,
                content,
                embed=embed,
                flags=MessageFlag.EPHEMERAL if ephemeral else MessageFlag.NONE,
            )

        self.state = ReplyState.REPLIED

    async def respond_final(self, content: str) -> bool:
        """
        Makes one last attempt to tell the user something went wrong.

        Returns whether a message was sent. Failures are only logged.
        """
        if self.state is ReplyState.REPLIED:
            _LOGGER.debug(
                "%s was already replied to, skipping the final message",
                self.command_name,
            )
            return False

        try:
            await self.respond(content, ephemeral=True)
        except Exception as e:  # pylint: disable=broad-except
            _LOGGER.error(
                "Failed to send the final error message of %s",
                self.command_name,
                exc_info=e,
            )
            return False

        return True
