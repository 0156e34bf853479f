"""
source: execute a script file in the current session
"""

import os
from pathlib import Path

from cashell.core.errors import CommandError
from cashell.core.script import split_script


async def source(ctx, args):
    if not args.positional:
        raise CommandError("source: filename argument required", status=2)
    target = Path(os.path.expanduser(args.positional[0]))
    parent = ctx.parent
    if not target.is_absolute() and parent is not None:
        target = Path(parent.session.cwd) / target
    try:
        text = target.read_text(encoding="utf-8")
    except OSError as e:
        raise CommandError(f"source: {args.positional[0]}: {e.strerror or e}") from e

    fatal = parent.session.fatal if parent is not None else False
    for line in split_script(text):
        await ctx.interpreter.exec(line, fatal=fatal)


def register(interpreter, options):
    interpreter.command("source", source, "Executes commands from a file in the current shell.")
