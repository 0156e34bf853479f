"""
Script execution for Cashell.
Runs a command or a multi-line script and returns what it printed
"""

import io
import re
from contextlib import contextmanager, redirect_stdout
from typing import Any, Iterator, List, Sequence, Union

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_SKIPPED = re.compile(r"^\s*(?:#|$)")


def split_script(text: str) -> List[str]:
    """Lines of a script, minus blank lines and comments"""
    return [line for line in _LINE_BREAK.split(text) if not _SKIPPED.match(line)]


def render(segments: Sequence[str], values: Sequence[Any]) -> str:
    """Interleave literal segments with interpolated values"""
    rendered = segments[0] if segments else ""
    for value, segment in zip(values, segments[1:]):
        rendered += f"{value}{segment}"
    return rendered


@contextmanager
def capture(interpreter) -> Iterator[io.StringIO]:
    """Collect everything the interpreter prints until the block exits"""
    buffer = io.StringIO()
    unhook = interpreter.intercept(lambda text: buffer.write(f"{text}\n"))
    try:
        with redirect_stdout(buffer):
            yield buffer
    finally:
        unhook()


class ScriptEngine:
    """Executes commands and scripts against a session's interpreter"""

    def __init__(self, session):
        self.session = session

    def lines(self, script: Union[str, Sequence[str]], values: Sequence[Any] = ()) -> List[str]:
        """A plain string is one command; a segment sequence is a script"""
        if isinstance(script, str):
            return [script]
        return split_script(render(script, values))

    def run(self, script: Union[str, Sequence[str]], *values: Any) -> str:
        """Execute in order and return captured output"""
        interpreter = self.session.interpreter
        with capture(interpreter) as buffer:
            for line in self.lines(script, values):
                interpreter.exec_sync(line, fatal=self.session.fatal)
        out = buffer.getvalue()
        return out[:-1] if out.endswith("\n") else out

    def run_text(self, text: str) -> str:
        """Execute a multi-line script given as one string"""
        return self.run([text])
