"""
Cashell - a persistent, scriptable command shell

Session kernel that registers commands into a line interpreter, runs
scripts with output capture, restores aliases and sources the user's
profile script.
"""
__version__ = "0.1.0"
__description__ = "Persistent, cross-platform, programmable command shell"


from cashell.config import Config
from cashell.core.kernel import Kernel, Session

__all__ = [
    "__version__",
    "__description__",
    "Config",
    "Kernel",
    "Session",
]
