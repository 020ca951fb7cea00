# src/things_bridge/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds a ThingsClient, dispatches one command and prints
a single JSON envelope on stdout:
- {"ok": true, "data": ...}                      exit 0
- {"ok": false, "error": "...", "code": "..."}   exit 1
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from ..config import get_settings
from ..core.errors import ThingsError
from ..logging_setup import setup_logging
from ..things.things_api import ThingsClient
from .commands import registry

logger = logging.getLogger(__name__)

HELP_NOTES = """
Notes:
  - All output is JSON on stdout; logs go to stderr
  - --when accepts today|tomorrow|someday|anytime (edit also: inbox) or a date
  - Dates are YYYY-MM-DD; other text is handed to AppleScript as-is
  - IDs are Things internal ids (e.g. GNhFtoqboi9WGdx4bwPNcc)
  - Use --deadline none or --project none to clear those fields
"""


def _emit(payload: dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
    sys.stdout.flush()


def run(argv: list[str], client: ThingsClient | None = None) -> int:
    """Dispatch argv and print the JSON envelope. Returns the process exit code."""
    if not argv or argv[0] in ("help", "--help", "-h"):
        sys.stdout.write("Things CLI: CRUD for Things 3\n\n" + registry.build_help() + "\n" + HELP_NOTES)
        return 0

    try:
        if client is None:
            client = ThingsClient()
        data = registry.handle(client, argv)
    except ThingsError as e:
        logger.debug("Command failed code=%s: %s", e.code, e.message)
        _emit({"ok": False, "error": e.message, "code": e.code})
        return 1
    except Exception as e:
        logger.exception("Unexpected failure running %r", argv[:1])
        _emit({"ok": False, "error": str(e), "code": "ERROR"})
        return 1

    _emit({"ok": True, "data": data})
    return 0


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)
    log_dir = settings.data_dir if settings.log_to_file else None
    try:
        setup_logging(log_dir=log_dir, file_level=file_level)
    except OSError:
        # Unwritable data dir must not break the command itself.
        setup_logging(log_dir=None)
        logger.warning("Could not open log file in %s; logging to stderr only.", log_dir)

    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
