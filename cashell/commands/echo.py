"""
echo: print arguments
"""


def echo(ctx, args):
    text = " ".join(args.positional)
    if args.options.get("e"):
        text = text.encode("utf-8").decode("unicode_escape")
    ctx.log(text)
    return text


def register(interpreter, options):
    interpreter.command("echo", echo, "Displays a line of text.", callable=True)
