"""
Command units and the records handed to their actions
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


@dataclass
class Arguments:
    """Parsed arguments for one command invocation"""
    positional: List[str] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)
    line: str = ""


@dataclass
class CommandUnit:
    """One named, registerable action exposed to the interpreter"""
    name: str
    action: Callable[..., Any]
    description: str = ""
    help: Optional[Callable[[], str]] = None
    importable: bool = False
    callable: bool = False
    is_async: bool = False
    context: Optional[Dict[str, Any]] = None

    def help_text(self) -> Optional[str]:
        """Resolve the attached help responder, if any"""
        if self.help is None:
            return None
        return self.help()


@dataclass
class CommandContext:
    """What an action sees while it runs"""
    interpreter: Any
    unit: CommandUnit
    options: Dict[str, Any] = field(default_factory=dict)
    silent: bool = False
    sink: Optional[List[str]] = None

    @property
    def parent(self):
        """The kernel that registered the unit"""
        return (self.unit.context or {}).get("parent")

    @property
    def env(self):
        return self.interpreter.local_env

    def log(self, *parts: Any) -> None:
        """Emit one line of command output"""
        text = " ".join(str(part) for part in parts)
        if self.sink is not None:
            self.sink.append(text)
        if not self.silent:
            self.interpreter.log(text)
