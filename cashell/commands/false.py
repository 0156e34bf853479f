"""
false: fail without doing anything
"""

from cashell.core.errors import CommandError


def false(ctx, args):
    raise CommandError("false", status=1)


def register(interpreter, options):
    interpreter.command("false", false, "Does nothing, unsuccessfully.", callable=True)
