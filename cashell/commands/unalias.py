"""
unalias: remove command aliases
"""

from cashell.core.aliases import remove_alias
from cashell.core.errors import CommandError


def unalias(ctx, args):
    interpreter = ctx.interpreter
    names = list(interpreter.aliases) if args.options.get("a") else args.positional
    if not names:
        raise CommandError("unalias: usage: unalias [-a] name [name ...]", status=2)
    missing = [name for name in names if name not in interpreter.aliases]
    for name in names:
        interpreter.aliases.pop(name, None)
        if interpreter.local_storage is not None:
            remove_alias(interpreter.local_storage, name)
    if missing:
        raise CommandError(f"unalias: {', '.join(missing)}: not found")


def register(interpreter, options):
    interpreter.command("unalias", unalias, "Removes aliases from the alias table.")
