"""
export: set session environment variables
"""

from cashell.core.errors import CommandError


def export(ctx, args):
    env = ctx.env
    if not args.positional:
        for key in sorted(env.local):
            ctx.log(f"declare -x {key}=\"{env.local[key]}\"")
        return
    for assignment in args.positional:
        name, sep, value = assignment.partition("=")
        if not name.isidentifier():
            raise CommandError(f"export: `{assignment}': not a valid identifier")
        if sep:
            env[name] = value
        elif name not in env:
            env[name] = ""


def register(interpreter, options):
    interpreter.command("export", export, "Sets an environment variable for this session.")
