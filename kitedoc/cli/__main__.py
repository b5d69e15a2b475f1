#!/usr/bin/env python3
"""Entry point for the kitedoc CLI when run as python -m kitedoc.cli."""

if __name__ == "__main__":
    from kitedoc.cli.main import main

    main()
