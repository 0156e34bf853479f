"""
alias: define or list command aliases
"""

from cashell.core.aliases import save_alias
from cashell.core.errors import CommandError


def alias(ctx, args):
    interpreter = ctx.interpreter
    aliases = interpreter.aliases
    if not args.positional:
        for name in sorted(aliases):
            ctx.log(f"alias {name}='{aliases[name]}'")
        return

    name, sep, value = args.positional[0].partition("=")
    if not sep:
        if len(args.positional) > 1:
            value = " ".join(args.positional[1:])
        elif name in aliases:
            ctx.log(f"alias {name}='{aliases[name]}'")
            return
        else:
            raise CommandError(f"alias: {name}: not found")
    elif len(args.positional) > 1:
        value = " ".join([value] + args.positional[1:])

    aliases[name] = value
    if interpreter.local_storage is not None:
        save_alias(interpreter.local_storage, name, value)


def register(interpreter, options):
    interpreter.command("alias", alias, "Defines aliases for commands.")
