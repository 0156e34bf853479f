#!/usr/bin/env python3
"""
Cashell - persistent, scriptable command shell
"""

import typer
from typing import List, Optional
from rich.console import Console
from rich import print

from cashell import __version__
from cashell.config import configure_logging, get_config
from cashell.core.errors import SessionExit
from cashell.core.kernel import Kernel

# Initialize rich console
console = Console()

# Create the main CLI app
app = typer.Typer(
    name="cashell",
    help="Cashell - a persistent, cross-platform, programmable shell",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={
        "help_option_names": ["-h", "--help"],
        "allow_interspersed_args": False,
    },
)


def version_callback(value: bool):
    """Show version and exit"""
    if value:
        print(f"[bold green]Cashell[/bold green] v{__version__}")
        raise typer.Exit()


@app.command()
def main(
    command: Optional[str] = typer.Option(
        None,
        "-c",
        help="Execute an inline script and exit",
    ),
    files: Optional[List[str]] = typer.Argument(
        None,
        help="Script file to source and exit; further arguments become $1, $2, ...",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """
    Run a script, or start an interactive session

    Examples:
    \b
        cashell                      # interactive session
        cashell -c "echo hello"      # run one command and exit
        cashell build.sh release     # source build.sh with $1=release
    """
    config = get_config()
    configure_logging(config.log_level)

    kernel = Kernel(config)
    try:
        kernel.load()

        if command is not None or files:
            raise typer.Exit(kernel.run_batch(command, files or []))

        kernel.prepare_interactive()
        kernel.show()
    except SessionExit:
        # exit from the profile script ends the session normally
        raise typer.Exit(0)
    except KeyboardInterrupt:
        console.print()
        raise typer.Exit(130)
    finally:
        kernel.close()


if __name__ == "__main__":
    app()
