"""
Prompt rendering and home directory lookup
"""

import getpass
import os
import socket
from pathlib import Path


def get_home_dir() -> Path:
    return Path(os.path.expanduser("~"))


def get_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "user"


def render(cwd: str, home: Path) -> str:
    """user@host:~/path$ """
    path = str(cwd)
    home_str = str(home)
    if path == home_str or path.startswith(home_str + os.sep):
        path = "~" + path[len(home_str):]
    host = socket.gethostname().split(".")[0]
    return f"{get_user()}@{host}:{path.replace(os.sep, '/')}$ "
