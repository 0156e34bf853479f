"""
Core functionality for Cashell
"""

from .command import Arguments, CommandContext, CommandUnit
from .environment import LocalEnvironment
from .errors import CashellError, CommandError, CommandNotFound, SessionExit
from .facade import CommandFacade, FacadeEntry
from .interpreter import Interpreter
from .kernel import Kernel, Session
from .loader import CommandLoader, CommandManifest
from .script import ScriptEngine
from .storage import LocalStorage

__all__ = [
    "Arguments",
    "CommandContext",
    "CommandUnit",
    "LocalEnvironment",
    "CashellError",
    "CommandError",
    "CommandNotFound",
    "SessionExit",
    "CommandFacade",
    "FacadeEntry",
    "Interpreter",
    "Kernel",
    "Session",
    "CommandLoader",
    "CommandManifest",
    "ScriptEngine",
    "LocalStorage",
]
