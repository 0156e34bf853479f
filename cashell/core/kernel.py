"""
Session kernel for Cashell.
Owns the interpreter and session state, and runs the startup sequence:
command registration, alias restore, then either one batch script or
the interactive loop with interrupt handling and the profile script.
"""

import logging
import os
import shlex
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from cashell.config import Config

from . import delimiter
from .aliases import load_aliases
from .environment import LocalEnvironment
from .errors import SessionExit
from .facade import CommandFacade
from .interpreter import Interpreter
from .interrupt import InterruptHandler, wants_interrupt_handling
from .loader import CommandLoader, CommandManifest
from .platform import register_commands
from .profile import candidate_paths, load_profile
from .script import ScriptEngine
from .storage import LocalStorage

logger = logging.getLogger(__name__)

SHELL_NAME = "cashell"


@dataclass
class Session:
    """Live state of one shell session"""
    interpreter: Interpreter
    env: LocalEnvironment
    aliases: Dict[str, str] = field(default_factory=dict)
    fatal: bool = False
    cwd: str = field(default_factory=os.getcwd)


class Kernel:
    """Builds and drives one session"""

    def __init__(
        self,
        config: Optional[Config] = None,
        manifest: Optional[CommandManifest] = None,
        interpreter: Optional[Interpreter] = None,
        storage: Optional[LocalStorage] = None,
        loader: Optional[CommandLoader] = None,
        platform: Optional[str] = None,
    ):
        self.config = config or Config()
        self.platform = platform or sys.platform
        self.storage = storage or LocalStorage(self.config.storage_file)
        self.loader = loader or CommandLoader(manifest or CommandManifest.load())

        interpreter = interpreter or Interpreter()
        self.session = Session(
            interpreter=interpreter,
            env=LocalEnvironment(),
            fatal=self.config.fatal,
        )
        interpreter.local_env = self.session.env
        interpreter.local_storage = self.storage

        self.commands = CommandFacade()
        self.scripts = ScriptEngine(self.session)
        self.interrupts: Optional[InterruptHandler] = None
        self.loaded = False

    @property
    def interpreter(self) -> Interpreter:
        return self.session.interpreter

    @property
    def home_dir(self) -> Path:
        return Path(self.config.home_dir)

    @property
    def fatal(self) -> bool:
        return self.session.fatal

    @fatal.setter
    def fatal(self, value: bool) -> None:
        self.session.fatal = value

    def load(self) -> "Kernel":
        """Register commands, the platform set and the facade; restore aliases"""
        if self.loaded:
            return self
        self.loader.load(self)
        register_commands(self)
        self.commands.build(self.interpreter)
        self.restore_aliases()
        self.refresh_delimiter()
        self.loaded = True
        return self

    def restore_aliases(self) -> Dict[str, str]:
        aliases = load_aliases(self.storage)
        self.session.aliases = aliases
        self.interpreter.aliases = aliases
        return aliases

    def chdir(self, path: str) -> None:
        """Move the session, and the process, to path"""
        os.chdir(path)
        self.session.cwd = path
        self.session.env["PWD"] = path
        self.refresh_delimiter()

    def refresh_delimiter(self) -> None:
        self.interpreter.delimiter = delimiter.render(self.session.cwd, self.home_dir)

    # -- bootstrap ----------------------------------------------------------

    def run_batch(self, script: Optional[str], files: Sequence[str] = ()) -> int:
        """Dispatch an inline script or a script file once.

        The status is 0 once the script was dispatched, whatever its
        commands did.
        """
        files = list(files)
        self.session.env["0"] = files[0] if script is None and files else SHELL_NAME
        parameters = files[1:] if script is None else files
        for position, value in enumerate(parameters, 1):
            self.session.env[str(position)] = value

        line = script if script is not None else f"source {shlex.quote(files[0])}"
        logger.debug("Batch: %s", line)
        try:
            self.interpreter.exec_sync(line)
        except SessionExit:
            logger.debug("Batch script called exit")
        return 0

    def prepare_interactive(self) -> None:
        """History, interrupt handling and the profile script.

        Raises SessionExit when the profile script calls exit.
        """
        self.session.env["0"] = SHELL_NAME
        self.interpreter.history(self.storage, "history", self.config.history_size)

        if wants_interrupt_handling(self.platform):
            self.interrupts = InterruptHandler(
                self.interpreter,
                threshold=self.config.interrupt_threshold,
                interval=self.config.interrupt_interval,
                cooldown=self.config.interrupt_cooldown,
            )
            self.interrupts.install()

        self.load_profile()

    def load_profile(self) -> Optional[Path]:
        candidates = candidate_paths(
            self.home_dir,
            self.config.profile_names,
            platform=self.platform,
            windows_name=self.config.windows_profile_name,
        )
        return load_profile(self.interpreter, candidates)

    # -- programmatic API ---------------------------------------------------

    def export(self, script: Union[str, Sequence[str]], *values: Any) -> str:
        """Run a command, or a script given as segments, and return its output"""
        return self.scripts.run(script, *values)

    def script(self, text: str) -> str:
        """Run a multi-line script and return its output"""
        return self.scripts.run_text(text)

    def show(self) -> None:
        """Enter (or re-enter) the interactive loop"""
        self.interpreter.show()

    def close(self) -> None:
        if self.interrupts is not None:
            self.interrupts.stop()
            self.interrupts = None
        self.interpreter.close()
