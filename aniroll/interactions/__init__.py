"""A small slash-command framework on top of hikari's gateway bot."""

from aniroll.interactions.commands import command, with_option
from aniroll.interactions.context import Context, ReplyState
from aniroll.interactions.data import data
from aniroll.interactions.errors import *
from aniroll.interactions.events import *
from aniroll.interactions.extensions import initializer, listener
from aniroll.interactions.handler import GatewayCommandHandler
