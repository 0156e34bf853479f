"""Tests for the invocation facade.

Every callable command is reachable as a function that never echoes to
the session and returns the command's output as a string.
"""

import asyncio
import threading

import pytest

from cashell.core.errors import CommandError
from cashell.core.facade import CommandFacade


class TestKernelFacade:
    """Verify the facade built by a loaded kernel."""

    def test_exposes_only_callable_commands(self, kernel) -> None:
        """Callable builtins are present, the rest are not."""
        assert "echo" in kernel.commands
        assert "pwd" in kernel.commands
        assert "cd" not in kernel.commands
        assert "source" not in kernel.commands

    def test_echo_returns_output_silently(self, kernel, capsys) -> None:
        """The call returns what the command printed and echoes nothing."""
        assert kernel.commands.echo(["hello", "world"]) == "hello world"
        assert capsys.readouterr().out == ""

    def test_single_string_argument(self, kernel) -> None:
        """A bare string counts as one positional argument."""
        assert kernel.commands.echo("hi") == "hi"

    def test_unknown_attribute(self, kernel) -> None:
        """Missing commands raise AttributeError."""
        with pytest.raises(AttributeError):
            kernel.commands.cd


class TestFacadeEntry:
    """Verify defaults, callbacks and the sync/async convention."""

    @pytest.fixture
    def facade(self, interpreter):
        def build():
            return CommandFacade().build(interpreter)

        return build

    def test_defaults_and_injected_options(self, interpreter, facade) -> None:
        """Options default to empty and receive the interpreter and silent flag."""
        seen = {}

        def action(ctx, args):
            seen["options"] = dict(args.options)
            seen["positional"] = list(args.positional)
            seen["silent"] = ctx.silent

        interpreter.command("probe", action, callable=True)
        facade().probe()
        assert seen["positional"] == []
        assert seen["options"] == {"interpreter": interpreter, "silent": True}
        assert seen["silent"] is True

    def test_caller_options_are_not_mutated(self, interpreter, facade) -> None:
        """The caller's options record is copied before injection."""
        interpreter.command("probe", lambda ctx, args: None, callable=True)
        options = {"n": True}
        facade().probe([], options)
        assert options == {"n": True}

    def test_callback_receives_output(self, interpreter, facade) -> None:
        """The callback is called with no error and the output."""
        interpreter.command("hello", lambda ctx, args: ctx.log("hi"), callable=True)
        results = []
        assert facade().hello(callback=lambda error, out: results.append((error, out))) == "hi"
        assert results == [(None, "hi")]

    def test_failure_reaches_callback_and_caller(self, interpreter, facade) -> None:
        """A failing command raises and reports the error to the callback."""

        def action(ctx, args):
            raise CommandError("nope")

        interpreter.command("broken", action, callable=True)
        results = []
        with pytest.raises(CommandError, match="nope"):
            facade().broken(callback=lambda error, out: results.append((error, out)))
        assert isinstance(results[0][0], CommandError)
        assert results[0][1] is None

    def test_coroutine_action(self, interpreter, facade) -> None:
        """Awaitable results are awaited before returning."""

        async def action(ctx, args):
            await asyncio.sleep(0)
            ctx.log("async done")

        interpreter.command("later", action, callable=True)
        assert facade().later() == "async done"

    def test_callback_style_action(self, interpreter, facade) -> None:
        """Declared asynchronous units complete through done()."""

        def action(ctx, args, done):
            def finish():
                ctx.log(f"got {args.positional[0]}")
                done(None, True)

            threading.Timer(0.01, finish).start()

        interpreter.command("deferred", action, callable=True, is_async=True)
        assert facade().deferred(["x"]) == "got x"

    def test_callback_style_error(self, interpreter, facade) -> None:
        """An error passed to done() is raised to the caller."""
        interpreter.command(
            "deferred",
            lambda ctx, args, done: done(CommandError("late failure")),
            callable=True,
            is_async=True,
        )
        with pytest.raises(CommandError, match="late failure"):
            facade().deferred()

    def test_acall_inside_event_loop(self, interpreter, facade) -> None:
        """Hosts with a running loop await the entry instead."""
        interpreter.command("hello", lambda ctx, args: ctx.log("hi"), callable=True)
        entries = facade()
        assert asyncio.run(entries.hello.acall()) == "hi"

    def test_sync_call_inside_event_loop_is_refused(self, interpreter, facade) -> None:
        """The synchronous form cannot nest inside a running loop."""
        interpreter.command("hello", lambda ctx, args: ctx.log("hi"), callable=True)
        entries = facade()

        async def host():
            entries.hello()

        with pytest.raises(RuntimeError, match="running event loop"):
            asyncio.run(host())
