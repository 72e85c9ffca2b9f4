import types
import typing
from unittest.mock import AsyncMock, MagicMock

import pytest
from hikari.commands import OptionType
from hikari.interactions.base_interactions import ResponseType
from hikari.interactions.command_interactions import CommandInteraction
from hikari.messages import MessageFlag
from hikari.undefined import UNDEFINED

from aniroll.core.metrics import MetricsService
from aniroll.core.orchestrator import CommandOrchestrator
from aniroll.extensions import anime
from aniroll.anilist.errors import UpstreamError
from aniroll.extensions.errors import on_command_error, on_command_success
from aniroll.interactions import (
    AlreadyRepliedError,
    CommandCallEvent,
    CommandFailureEvent,
    CommandRuntimeError,
    CommandSuccessEvent,
    Context,
    GatewayCommandHandler,
    MissingCommandCallbackError,
    ReplyState,
    command,
    data,
    with_option,
)
from aniroll.interactions.data import DataContainerMixin
from aniroll.interactions.utils import ensure_signature
from aniroll.utils.formatter import INVALID_ANIME_ID, UNEXPECTED_ERROR


@pytest.mark.asyncio
async def test_defer_is_idempotent(ctx, interaction) -> None:
    await ctx.defer()
    await ctx.defer()

    interaction.create_initial_response.assert_awaited_once_with(
        ResponseType.DEFERRED_MESSAGE_CREATE
    )
    assert ctx.deferred and not ctx.replied


@pytest.mark.asyncio
async def test_respond_after_defer_edits(ctx, interaction) -> None:
    await ctx.defer()
    await ctx.respond("hello")

    interaction.edit_initial_response.assert_awaited_once_with(
        "hello", embed=UNDEFINED
    )
    assert interaction.create_initial_response.await_count == 1
    assert ctx.state is ReplyState.REPLIED


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "ephemeral, flags", [(True, MessageFlag.EPHEMERAL), (False, MessageFlag.NONE)]
)
async def test_respond_without_defer(ctx, interaction, ephemeral, flags) -> None:
    await ctx.respond("hello", ephemeral=ephemeral)

    interaction.create_initial_response.assert_awaited_once_with(
        ResponseType.MESSAGE_CREATE, "hello", embed=UNDEFINED, flags=flags
    )
    interaction.edit_initial_response.assert_not_awaited()


@pytest.mark.asyncio
async def test_second_reply_is_refused(ctx, interaction) -> None:
    await ctx.respond("first")

    with pytest.raises(AlreadyRepliedError):
        await ctx.respond("second")

    # defer after replying doesn't send anything either
    await ctx.defer()
    assert interaction.create_initial_response.await_count == 1


@pytest.mark.asyncio
async def test_respond_final(ctx, interaction) -> None:
    await ctx.defer()
    assert await ctx.respond_final("oops")
    assert not await ctx.respond_final("oops again")
    interaction.edit_initial_response.assert_awaited_once_with("oops", embed=UNDEFINED)


@pytest.mark.asyncio
async def test_respond_final_swallows_failures(ctx, interaction) -> None:
    await ctx.defer()
    interaction.edit_initial_response.side_effect = RuntimeError("unknown webhook")

    assert not await ctx.respond_final("oops")
    assert ctx.state is ReplyState.DEFERRED


def test_with_option_keeps_the_written_order() -> None:
    @command("dummy", "A dummy command.")
    @with_option(OptionType.STRING, "first", "The first option.")
    @with_option(OptionType.INTEGER, "second", "The second option.")
    @with_option(OptionType.BOOLEAN, "third", "The third option.", required=False)
    async def dummy(first: str, third: bool, second: int = 0) -> None:
        ...

    assert dummy.__name__ == "dummy"
    assert dummy.__description__ == "A dummy command."
    assert [(o.name, o.is_required) for o in dummy.options] == [
        ("first", True),
        ("second", False),
        ("third", False),
    ]


def test_with_option_needs_a_parameter() -> None:
    with pytest.raises(TypeError):

        @with_option(OptionType.STRING, "missing", "Not a parameter.")
        async def dummy() -> None:
            ...


def test_anime_command_options() -> None:
    assert [(o.name, o.type, o.is_required) for o in anime.animestats.options] == [
        ("username", OptionType.STRING, True),
        ("refresh", OptionType.BOOLEAN, False),
    ]
    assert [(o.name, o.is_required) for o in anime.animecover.options] == [
        ("animeid", True)
    ]


class Base:
    ...


class Derived(Base):
    ...


@pytest.mark.asyncio
async def test_data_injection() -> None:
    container = DataContainerMixin()
    derived = Derived()
    container.set_data(derived)

    with pytest.raises(RuntimeError):
        container.set_data(Derived())

    async def callback(value: int, obj: Base = data(Base)) -> typing.Tuple[int, Base]:
        return value, obj

    ensure_signature(callback)
    assert await container._invoke_callback(callback, 1) == (1, derived)
    assert container.get_data(Derived) is derived
    assert container.get_data(str) is None

    replacement = Derived()
    container.set_data(replacement, override=True)
    assert container.get_data(Base) is replacement


def make_handler(
    orchestrator: CommandOrchestrator, metrics: MetricsService
) -> GatewayCommandHandler:
    app = MagicMock()
    app.dispatch = AsyncMock()
    handler = GatewayCommandHandler(app)
    handler.set_data(orchestrator).set_data(metrics)
    handler.load_extension("aniroll.extensions.anime")
    return handler


def make_event(command_name: str, **options: typing.Any) -> types.SimpleNamespace:
    interaction = MagicMock(spec=CommandInteraction)
    interaction.command_name = command_name
    interaction.user = types.SimpleNamespace(username="tester")
    interaction.options = [
        types.SimpleNamespace(name=k, value=v) for k, v in options.items()
    ]
    interaction.create_initial_response = AsyncMock()
    interaction.edit_initial_response = AsyncMock()
    return types.SimpleNamespace(interaction=interaction)


def dispatched(handler: GatewayCommandHandler) -> typing.List[typing.Any]:
    return [c.args[0] for c in handler.app.dispatch.await_args_list]


def test_load_extension_registers_commands(orchestrator, metrics) -> None:
    handler = make_handler(orchestrator, metrics)
    assert set(handler.commands) == {"animestats", "animecover"}
    assert "aniroll.extensions.anime" in handler.extensions


@pytest.mark.asyncio
async def test_interaction_is_dispatched(orchestrator, metrics) -> None:
    handler = make_handler(orchestrator, metrics)
    event = make_event("animecover", animeid="abc")

    await handler._process_command_interaction(event)  # type: ignore

    event.interaction.edit_initial_response.assert_awaited_once_with(
        INVALID_ANIME_ID, embed=UNDEFINED
    )
    call, success = dispatched(handler)
    assert isinstance(call, CommandCallEvent)
    assert isinstance(success, CommandSuccessEvent)
    assert success.context.command_name == "animecover"


@pytest.mark.asyncio
async def test_unknown_command(orchestrator, metrics) -> None:
    handler = make_handler(orchestrator, metrics)

    await handler._process_command_interaction(make_event("animequote"))  # type: ignore

    (failure,) = dispatched(handler)
    assert isinstance(failure, CommandFailureEvent)
    assert isinstance(failure.exception, MissingCommandCallbackError)


@pytest.mark.asyncio
async def test_callback_errors_are_wrapped(orchestrator, metrics, monkeypatch) -> None:
    handler = make_handler(orchestrator, metrics)
    monkeypatch.setattr(
        orchestrator, "run_stats", AsyncMock(side_effect=RuntimeError("boom"))
    )

    await handler._process_command_interaction(  # type: ignore
        make_event("animestats", username="alice")
    )

    call, failure = dispatched(handler)
    assert isinstance(failure, CommandFailureEvent)
    assert isinstance(failure.exception, CommandRuntimeError)
    assert isinstance(failure.exception.exception, RuntimeError)


def test_listener_infers_the_event_type() -> None:
    assert on_command_error.__etype__ is CommandFailureEvent


@pytest.mark.asyncio
async def test_on_command_error_replies_once(ctx, interaction, metrics, registry) -> None:
    ctx.set_command(anime.animestats)
    await ctx.defer()
    exc = CommandRuntimeError(RuntimeError("boom"), anime.animestats)

    await on_command_error(CommandFailureEvent(MagicMock(), ctx, exc), metrics=metrics)

    interaction.edit_initial_response.assert_awaited_once_with(
        UNEXPECTED_ERROR, embed=UNDEFINED
    )
    assert (
        registry.get_sample_value(
            "aniroll_commands_total", {"command": "animestats", "outcome": "failure"}
        )
        == 1
    )


@pytest.mark.asyncio
async def test_handled_failure_counts_as_failure(
    orchestrator, rest, metrics, registry
) -> None:
    handler = make_handler(orchestrator, metrics)
    rest.fetch_user_lists.side_effect = UpstreamError("down", status=503)

    await handler._process_command_interaction(  # type: ignore
        make_event("animestats", username="alice")
    )

    call, success = dispatched(handler)
    assert isinstance(success, CommandSuccessEvent)
    assert success.context.failed

    await on_command_success(success, metrics=metrics)

    labels = {"command": "animestats"}
    assert registry.get_sample_value(
        "aniroll_commands_total", {**labels, "outcome": "failure"}
    ) == 1
    assert registry.get_sample_value(
        "aniroll_commands_total", {**labels, "outcome": "success"}
    ) is None


@pytest.mark.asyncio
async def test_validation_reply_counts_as_success(
    orchestrator, rest, metrics, registry
) -> None:
    handler = make_handler(orchestrator, metrics)

    await handler._process_command_interaction(  # type: ignore
        make_event("animecover", animeid="abc")
    )

    _, success = dispatched(handler)
    assert not success.context.failed
    await on_command_success(success, metrics=metrics)

    assert registry.get_sample_value(
        "aniroll_commands_total", {"command": "animecover", "outcome": "success"}
    ) == 1
    rest.fetch_cover_image.assert_not_awaited()
