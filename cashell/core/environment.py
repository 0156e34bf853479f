"""
Copy-on-write view of the process environment for one session
"""

import os
from collections import ChainMap
from typing import Mapping, MutableMapping, Optional


class LocalEnvironment(ChainMap):
    """Layered environment map.

    Reads check the session layer first and fall through to the host
    environment; writes and deletions only ever touch the session layer,
    so ``os.environ`` is never mutated.
    """

    def __init__(self, base: Optional[Mapping[str, str]] = None, local: Optional[MutableMapping[str, str]] = None):
        super().__init__(local if local is not None else {}, os.environ if base is None else base)

    @property
    def local(self) -> MutableMapping[str, str]:
        """Session-local overrides only"""
        return self.maps[0]

    @property
    def base(self) -> Mapping[str, str]:
        return self.maps[1]

    def flatten(self) -> dict:
        """Merged copy suitable for handing to a child process"""
        return {str(key): str(value) for key, value in self.items()}
