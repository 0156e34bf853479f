"""
pwd: print the session's working directory
"""


def pwd(ctx, args):
    cwd = ctx.parent.session.cwd if ctx.parent else ctx.env.get("PWD", "")
    ctx.log(cwd)
    return cwd


def register(interpreter, options):
    interpreter.command("pwd", pwd, "Prints the current working directory.", callable=True)
