"""Allow ``python -m graphpc_lint``."""
from __future__ import annotations

from graphpc_lint.cli import main

main()
