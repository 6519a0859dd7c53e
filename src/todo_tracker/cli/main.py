# src/todo_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs exactly one command:
load tasks.json -> apply the command -> save (mutating commands only) -> exit.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry
from ..config import get_settings
from ..logging_setup import setup_logging
from ..tasks.task_errors import InvalidArgumentError, TodoError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def run(argv: list[str], *, settings=None, repo=None) -> int:
    """Run one command and return the process exit code."""
    state = create_initial_state(settings=settings, repo=repo)

    try:
        reply = registry.handle(state, argv)
    except InvalidArgumentError as e:
        logger.debug("Rejected arguments %s", argv, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except TodoError as e:
        logger.debug("Command failed argv=%s", argv, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILED

    print(reply)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(console_level=console_level, log_dir=getattr(settings, "log_dir", None))

    if argv is None:
        argv = sys.argv[1:]

    logger.info("Starting %s argv=%s", getattr(settings, "app_name", "todo"), argv)
    return run(argv, settings=settings)


if __name__ == "__main__":
    sys.exit(main())
