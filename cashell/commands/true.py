"""
true: succeed without doing anything
"""


def register(interpreter, options):
    interpreter.command("true", lambda ctx, args: 0, "Does nothing, successfully.", callable=True)
