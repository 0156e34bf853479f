"""
Platform command set: run unknown command lines as child processes
"""

import logging
import subprocess
import sys
from typing import Optional

from .command import Arguments, CommandContext
from .errors import CommandError

logger = logging.getLogger(__name__)


class ProcessSpawner:
    """Executes a command line through the host shell"""

    def __init__(self, kernel, platform: Optional[str] = None, timeout: Optional[float] = None):
        self.kernel = kernel
        self.platform = platform or sys.platform
        self.timeout = timeout

    def _spawn_options(self) -> dict:
        if self.platform == "win32":
            # keep cmd.exe from flashing a console window
            return {"creationflags": getattr(subprocess, "CREATE_NO_WINDOW", 0)}
        return {}

    def __call__(self, ctx: CommandContext, args: Arguments) -> int:
        session = self.kernel.session
        command = args.line or " ".join(args.positional)
        logger.debug("Spawning: %s", command)

        try:
            process = subprocess.run(
                command,
                shell=True,
                capture_output=True,
                text=True,
                cwd=session.cwd,
                env=session.env.flatten(),
                timeout=self.timeout,
                check=False,  # Don't raise on non-zero exit
                **self._spawn_options(),
            )
        except subprocess.TimeoutExpired:
            raise CommandError(f"{args.positional[0]}: timed out after {self.timeout} seconds", status=124)
        except OSError as e:
            raise CommandError(f"{args.positional[0]}: {e}", status=126) from e

        if process.stdout:
            ctx.log(process.stdout.rstrip("\n"))
        if process.stderr:
            ctx.interpreter.error_console.print(process.stderr.rstrip("\n"), markup=False, highlight=False)
        if process.returncode != 0:
            raise CommandError(f"{args.positional[0]}: exited with status {process.returncode}", status=process.returncode)
        return process.returncode


def register_commands(kernel, platform: Optional[str] = None) -> None:
    """Install the catch-all process spawner into the kernel's interpreter"""
    spawner = ProcessSpawner(kernel, platform=platform or kernel.platform)
    kernel.interpreter.use(
        lambda interpreter, options: interpreter.catch(spawner, "Runs a program from the host system."),
        {"parent": kernel},
    )
