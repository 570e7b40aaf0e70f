#!/usr/bin/env python3
"""Entry point for running as `python -m resourcepack_cli`."""

from resourcepack_cli.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
