"""Vercel entrypoint serving the macro tracker ASGI app."""

import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parent.parent / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from macro_tracker.api.asgi import app  # noqa: E402

__all__ = ["app"]
