"""
Command registry: resolves the manifest's builtin and plugin units and
registers each into the interpreter.

A unit that cannot be resolved or that fails while registering is logged
and skipped; the rest keep loading.
"""

import importlib
import json
import logging
import re
from dataclasses import dataclass, field
from importlib import resources
from importlib.metadata import entry_points
from typing import Any, Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

PLUGIN_GROUP = "cashell.plugins"

Register = Callable[[Any, dict], None]


@dataclass(frozen=True)
class CommandManifest:
    """Builtin and plugin command names, in load order"""
    commands: Tuple[str, ...] = ()
    imported_commands: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "CommandManifest":
        return cls(
            commands=tuple(data.get("commands", [])),
            imported_commands=tuple(data.get("importedCommands", [])),
        )

    @classmethod
    def load(cls) -> "CommandManifest":
        """The manifest shipped with the package"""
        text = resources.files("cashell").joinpath("commands.json").read_text(encoding="utf-8")
        return cls.from_dict(json.loads(text))

    def builtins(self) -> List[str]:
        """Builtin names not claimed by a plugin"""
        return [name for name in self.commands if name not in self.imported_commands]


def resolve_builtin(name: str) -> Register:
    module = importlib.import_module(f"cashell.commands.{name}")
    return module.register


def resolve_help(name: str) -> Optional[str]:
    """Help text for a builtin, one leading and trailing blank line removed"""
    resource = resources.files("cashell").joinpath("help").joinpath(f"{name}.txt")
    if not resource.is_file():
        return None
    return re.sub(r"\A\n|\n\Z", "", resource.read_text(encoding="utf-8"))


def resolve_plugin(name: str) -> Register:
    for entry_point in entry_points(group=PLUGIN_GROUP):
        if entry_point.name == name:
            return entry_point.load()
    raise LookupError(f"no '{PLUGIN_GROUP}' entry point named {name}")


@dataclass
class CommandLoader:
    """Registers every manifest unit into a kernel's interpreter"""
    manifest: CommandManifest
    resolve_builtin: Callable[[str], Register] = resolve_builtin
    resolve_help: Callable[[str], Optional[str]] = resolve_help
    resolve_plugin: Callable[[str], Register] = resolve_plugin
    failed: List[str] = field(default_factory=list)

    def load(self, kernel) -> List[str]:
        """Register builtins then plugins; return the names that failed"""
        interpreter = kernel.interpreter
        context = {"parent": kernel}
        self.failed = []

        for name in self.manifest.builtins():
            try:
                register = self.resolve_builtin(name)
                help_text = self._help(name)
                interpreter.use(register, context)
                unit = interpreter.find(name)
                if unit is not None and help_text:
                    unit.help = lambda text=help_text: text
            except Exception as e:
                self._failed(name, e)

        for name in self.manifest.imported_commands:
            try:
                register = self.resolve_plugin(name)
                before = set(interpreter.commands)
                interpreter.use(register, context)
                for added in set(interpreter.commands) - before:
                    interpreter.commands[added].importable = True
            except Exception as e:
                self._failed(name, e)

        return self.failed

    def _help(self, name: str) -> Optional[str]:
        # help text is optional; an unreadable resource leaves the unit without it
        try:
            return self.resolve_help(name)
        except Exception as e:
            logger.debug("No help for %s: %s", name, e)
            return None

    def _failed(self, name: str, error: Exception) -> None:
        logger.error("Error loading command %s: %s", name, error)
        self.failed.append(name)
