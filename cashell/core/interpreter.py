"""
Line interpreter engine for Cashell.
Registers command units, parses lines and runs them one at a time
"""

import asyncio
import inspect
import json
import logging
import re
import shlex
from typing import Any, Callable, Dict, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape

from .caller import drive
from .command import Arguments, CommandContext, CommandUnit
from .environment import LocalEnvironment
from .errors import CommandError, CommandNotFound, SessionExit
from .storage import LocalStorage

try:
    import readline
except ImportError:  # Windows without pyreadline
    readline = None

logger = logging.getLogger(__name__)

console = Console()
error_console = Console(stderr=True)

_VARIABLE = re.compile(r"\$(?:\{(\w+)\}|(\w+))")
_FIRST_WORD = re.compile(r"(\S+)(.*)", re.S)


def parse_arguments(tokens: List[str], line: str = "") -> Arguments:
    """Split tokens into positionals and options"""
    args = Arguments(line=line)
    only_positional = False
    for token in tokens:
        if only_positional or token == "-" or not token.startswith("-"):
            args.positional.append(token)
        elif token == "--":
            only_positional = True
        elif token.startswith("--"):
            key, sep, value = token[2:].partition("=")
            args.options[key] = value if sep else True
        else:
            for flag in token[1:]:
                args.options[flag] = True
    return args


class Interpreter:
    """Executes command lines against registered units"""

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console
        self.error_console = error_console
        self.commands: Dict[str, CommandUnit] = {}
        self.api: Dict[str, CommandUnit] = {}
        self.aliases: Dict[str, str] = {}
        self.local_env = LocalEnvironment()
        self.local_storage: Optional[LocalStorage] = None
        self.delimiter = "$ "

        self._fallback: Optional[CommandUnit] = None
        self._context: Optional[Dict[str, Any]] = None
        self._sigint_handler: Optional[Callable[[], None]] = None
        self._interceptors: List[Callable[[str], None]] = []
        self._history_key: Optional[str] = None
        self._history_limit = 0
        self._loop: Optional[asyncio.AbstractEventLoop] = None

        self._register_builtins()

    # -- registration -------------------------------------------------------

    def use(self, register: Callable[..., Any], context: Optional[Dict[str, Any]] = None) -> None:
        """Let a unit module register its commands, tagged with context"""
        previous, self._context = self._context, context
        try:
            register(self, context or {})
        finally:
            self._context = previous

    def command(
        self,
        name: str,
        action: Callable[..., Any],
        description: str = "",
        callable: bool = False,
        is_async: bool = False,
        importable: bool = False,
    ) -> CommandUnit:
        """Register a command unit under its name"""
        unit = CommandUnit(
            name=name,
            action=action,
            description=description,
            importable=importable,
            callable=callable,
            is_async=is_async,
            context=self._context,
        )
        self.commands[name] = unit
        if callable:
            self.api[name] = unit
        else:
            self.api.pop(name, None)
        return unit

    def catch(self, action: Callable[..., Any], description: str = "", is_async: bool = False) -> CommandUnit:
        """Register the unit that receives lines naming no known command"""
        self._fallback = CommandUnit(
            name="catch",
            action=action,
            description=description,
            is_async=is_async,
            context=self._context,
        )
        return self._fallback

    def find(self, name: str) -> Optional[CommandUnit]:
        return self.commands.get(name)

    # -- parsing ------------------------------------------------------------

    def expand_aliases(self, line: str) -> str:
        """Replace the first word with its alias, once per alias name"""
        seen = set()
        while True:
            match = _FIRST_WORD.match(line)
            if match is None:
                return line
            word, rest = match.group(1), match.group(2)
            if word in seen or word not in self.aliases:
                return line
            seen.add(word)
            line = self.aliases[word] + rest

    def expand_variables(self, token: str) -> str:
        return _VARIABLE.sub(lambda m: str(self.local_env.get(m.group(1) or m.group(2), "")), token)

    def parse(self, line: str) -> Optional[Tuple[CommandUnit, Arguments]]:
        """Resolve a line to its unit and arguments, None for an empty line"""
        line = self.expand_aliases(line.strip())
        try:
            tokens = shlex.split(line, comments=True)
        except ValueError as e:
            raise CommandError(f"{line}: {e}", status=2) from e
        if not tokens:
            return None
        tokens = [self.expand_variables(token) for token in tokens]

        unit = self.find(tokens[0])
        if unit is not None:
            return unit, parse_arguments(tokens[1:], line)
        if self._fallback is not None:
            return self._fallback, Arguments(positional=tokens, line=line)
        raise CommandNotFound(tokens[0])

    # -- execution ----------------------------------------------------------

    async def exec(self, line: str, fatal: bool = False) -> Any:
        """Run one line; failures raise when fatal, otherwise are logged"""
        unit = None
        try:
            parsed = self.parse(line)
            if parsed is None:
                return None
            unit, args = parsed
            return await drive(unit, CommandContext(self, unit), args)
        except SessionExit:
            raise
        except Exception as e:
            if isinstance(e, CommandError):
                error = e
            else:
                error = CommandError(f"{unit.name if unit else line}: {e}")
                error.__cause__ = e
            if fatal:
                raise error
            logger.error("%s", error)
            return None

    def exec_sync(self, line: str, fatal: bool = False) -> Any:
        """Run one line to completion before returning"""
        return self.run(self.exec(line, fatal=fatal))

    def run(self, awaitable: Any) -> Any:
        """Drive an awaitable on the interpreter's own event loop"""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            raise RuntimeError("cannot run commands synchronously inside a running event loop; await exec() instead")
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.new_event_loop()
        return self._loop.run_until_complete(awaitable)

    def close(self) -> None:
        if self._loop is not None and not self._loop.is_closed():
            self._loop.close()

    # -- output -------------------------------------------------------------

    def log(self, *parts: Any) -> None:
        """Print one line, or hand it to the innermost interceptor"""
        text = " ".join(str(part) for part in parts)
        if self._interceptors:
            self._interceptors[-1](text)
            return
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def intercept(self, fn: Callable[[str], None]) -> Callable[[], None]:
        """Divert logged lines to fn until the returned unhook is called"""
        self._interceptors.append(fn)

        def unhook() -> None:
            if fn in self._interceptors:
                self._interceptors.remove(fn)

        return unhook

    # -- interactive --------------------------------------------------------

    def sigint(self, handler: Callable[[], None]) -> None:
        """Replace the default interrupt behaviour of the input loop"""
        self._sigint_handler = handler

    def submit(self, line: str) -> None:
        """Submit a line as though it was typed at the prompt"""
        if not line.strip():
            self.console.print()
            return
        self._remember(line)
        self.exec_sync(line)

    def history(self, storage: LocalStorage, key: str = "history", limit: int = 100) -> None:
        """Persist submitted lines under key, keeping the last limit"""
        self.local_storage = storage
        self._history_key = key
        self._history_limit = limit
        if readline is not None:
            for entry in self._history_entries():
                readline.add_history(entry)

    def _history_entries(self) -> List[str]:
        if self.local_storage is None or self._history_key is None:
            return []
        try:
            entries = json.loads(self.local_storage.get(self._history_key))
        except (TypeError, ValueError):
            return []
        return [entry for entry in entries if isinstance(entry, str)] if isinstance(entries, list) else []

    def _remember(self, line: str) -> None:
        if self.local_storage is None or self._history_key is None:
            return
        entries = (self._history_entries() + [line])[-self._history_limit:]
        self.local_storage.set(self._history_key, json.dumps(entries))

    def show(self) -> None:
        """Read and execute lines until exit or end of input"""
        while True:
            try:
                line = self.console.input(escape(self.delimiter))
            except KeyboardInterrupt:
                if self._sigint_handler is None:
                    raise
                self._sigint_handler()
                continue
            except EOFError:
                self.console.print()
                return
            try:
                self.submit(line)
            except SessionExit:
                return
            except KeyboardInterrupt:
                self.console.print()

    # -- engine builtins ----------------------------------------------------

    def _register_builtins(self) -> None:
        self.command("help", self._help, "Provides help for a given command.")
        self.command("exit", self._exit, "Exits the shell.")

    def _help(self, ctx: CommandContext, args: Arguments) -> None:
        if args.positional:
            name = args.positional[0]
            unit = self.find(name)
            if unit is None:
                raise CommandNotFound(name)
            ctx.log(unit.help_text() or unit.description or f"No help available for {name}")
            return
        width = max(len(name) for name in self.commands)
        for name in sorted(self.commands):
            ctx.log(f"  {name.ljust(width)}  {self.commands[name].description}".rstrip())

    def _exit(self, ctx: CommandContext, args: Arguments) -> None:
        raise SessionExit()
