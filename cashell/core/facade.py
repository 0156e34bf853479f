"""
Invocation facade: registered callable commands as plain functions
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Union

from .caller import drive
from .command import Arguments, CommandContext, CommandUnit

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Any], None]


def _noop(error: Optional[BaseException], result: Any) -> None:
    pass


def _arguments(args: Union[None, str, Sequence[str]], options: Dict[str, Any]) -> Arguments:
    if args is None:
        positional: List[str] = []
    elif isinstance(args, str):
        positional = [args]
    else:
        positional = [str(arg) for arg in args]
    return Arguments(positional=positional, options=options)


class FacadeEntry:
    """Calls one command unit without going through line parsing.

    Output is never echoed to the session; it is collected and returned
    (trailing newline removed) and also passed to the callback as
    ``callback(error, output)``.
    """

    def __init__(self, interpreter, unit: CommandUnit):
        self.interpreter = interpreter
        self.unit = unit
        self.__name__ = unit.name
        self.__doc__ = unit.description or None

    def _prepare(self, args, options) -> tuple:
        options = dict(options or {})
        options["interpreter"] = self.interpreter
        options["silent"] = True
        sink: List[str] = []
        ctx = CommandContext(self.interpreter, self.unit, options=options, silent=True, sink=sink)
        return ctx, _arguments(args, options), sink

    async def acall(self, args=None, options: Optional[Dict[str, Any]] = None, callback: Optional[Callback] = None) -> str:
        """Awaitable form for hosts that already run an event loop"""
        callback = callback or _noop
        ctx, arguments, sink = self._prepare(args, options)
        try:
            await drive(self.unit, ctx, arguments)
        except Exception as e:
            logger.debug("%s failed: %s", self.unit.name, e)
            callback(e, None)
            raise
        output = "\n".join(sink)
        callback(None, output)
        return output

    def __call__(self, args=None, options: Optional[Dict[str, Any]] = None, callback: Optional[Callback] = None) -> str:
        return self.interpreter.run(self.acall(args, options, callback))


class CommandFacade:
    """Attribute access to every callable command: ``facade.echo(["hi"])``"""

    def __init__(self):
        self._entries: Dict[str, FacadeEntry] = {}

    def build(self, interpreter) -> "CommandFacade":
        """Wrap each unit in the interpreter's callable set"""
        self._entries = {name: FacadeEntry(interpreter, unit) for name, unit in interpreter.api.items()}
        return self

    def __getattr__(self, name: str) -> FacadeEntry:
        try:
            return self.__dict__["_entries"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, name: str) -> FacadeEntry:
        return self._entries[name]

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
