"""Module entrypoint.

Allows:
    python -m p2000_viewer
"""

from __future__ import annotations

from p2000_viewer.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
