"""
Startup profile loading: source the first profile script that exists
"""

import logging
import shlex
from pathlib import Path
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)


def candidate_paths(
    home: Path,
    names: Sequence[str] = (".cashrc",),
    platform: str = "linux",
    windows_name: str = "_cashrc",
) -> List[Path]:
    """Profile locations in lookup order"""
    names = list(names)
    if platform == "win32":
        # underscore-prefixed rc files are the Windows convention
        names.append(windows_name)
    return [Path(home) / name for name in names]


def load_profile(interpreter, candidates: Sequence[Path]) -> Optional[Path]:
    """Source the first candidate that is a file; return its path"""
    for path in candidates:
        try:
            if path.is_dir() or not path.exists():
                continue
        except OSError as e:
            logger.debug("Skipping profile %s: %s", path, e)
            continue
        logger.debug("Sourcing profile %s", path)
        interpreter.exec_sync(f"source {shlex.quote(str(path))}")
        return path
    return None
