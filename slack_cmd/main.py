"""Entrypoint for running slack-cmd via `python -m slack_cmd.main`."""

from __future__ import annotations

import sys

from .cli import app

USAGE_EXIT_CODE = 2


def run() -> None:
    # Usage errors exit with 1 like every other failure, not 2.
    try:
        app()
    except SystemExit as exc:
        if exc.code == USAGE_EXIT_CODE:
            sys.exit(1)
        raise


if __name__ == "__main__":  # pragma: no cover
    run()
