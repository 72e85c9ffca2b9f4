import logging
import traceback

from aniroll.core.metrics import MetricsService
from aniroll.interactions import (
    CommandCallEvent,
    CommandFailureEvent,
    CommandSuccessEvent,
    data,
    listener,
)
from aniroll.interactions.utils import get_exc_info
from aniroll.utils.formatter import UNEXPECTED_ERROR

_LOGGER = logging.getLogger("aniroll.extensions.errors")


@listener()
async def on_command_call(event: CommandCallEvent) -> None:
    _LOGGER.debug(
        "%s was called by %s", event.context.command_name, event.context.user
    )


@listener()
async def on_command_success(
    event: CommandSuccessEvent, metrics: MetricsService = data(MetricsService)
) -> None:
    # errors handled inside the command still count as failures
    ctx = event.context
    metrics.track_command(ctx.command_name, "failure" if ctx.failed else "success")


@listener()
async def on_command_error(
    event: CommandFailureEvent, metrics: MetricsService = data(MetricsService)
) -> None:
    """Catches whatever escaped a command callback."""
    ctx = event.context
    metrics.track_command(ctx.command_name, "failure")
    _LOGGER.error(
        "Ignoring exception in command %s:\n%s",
        ctx.command_name,
        "".join(traceback.format_exception(*get_exc_info(event.exception))),
    )
    await ctx.respond_final(UNEXPECTED_ERROR)
