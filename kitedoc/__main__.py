"""Entry point for running kitedoc as a module (``python -m kitedoc``)."""

from __future__ import annotations

from kitedoc.cli import main

if __name__ == "__main__":
    main()
