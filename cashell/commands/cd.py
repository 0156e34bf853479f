"""
cd: change the session's working directory
"""

import os
from pathlib import Path

from cashell.core.errors import CommandError


def cd(ctx, args):
    kernel = ctx.parent
    session = kernel.session
    target = args.positional[0] if args.positional else str(kernel.home_dir)
    if target == "-":
        target = session.env.get("OLDPWD", session.cwd)
    path = Path(os.path.expanduser(target))
    if not path.is_absolute():
        path = Path(session.cwd) / path
    path = path.resolve()
    if not path.is_dir():
        raise CommandError(f"cd: {target}: No such file or directory")
    session.env["OLDPWD"] = session.cwd
    kernel.chdir(str(path))


def register(interpreter, options):
    interpreter.command("cd", cd, "Changes the current working directory.")
