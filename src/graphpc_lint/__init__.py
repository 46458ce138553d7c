"""graphpc-lint: flag undecorated public methods on graphpc Node subclasses."""
from __future__ import annotations

from graphpc_lint.constants import __version__

__all__ = ["__version__"]
