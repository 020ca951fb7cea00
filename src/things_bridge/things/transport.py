# src/things_bridge/things/transport.py

"""
osascript transport.

One call = one blocking subprocess run. No retries, no timeout override,
no partial results: a failure anywhere fails the whole call.
"""

from __future__ import annotations

import logging
import re
import subprocess

from ..core.errors import ProjectNotFoundError, ScriptError, TaskNotFoundError, ThingsError
from ..core.ports import ScriptResult, ScriptRunner

logger = logging.getLogger(__name__)

# Fragments of the app's "Can't get ..." diagnostics. The project pattern also
# covers the name fallback ("Can't get project 1 whose name = ...").
_TASK_NOT_FOUND_RE = re.compile(r"get to do id")
_PROJECT_NOT_FOUND_RE = re.compile(r"get project (?:id|whose|\d+ whose)")


class OsascriptRunner:
    """ScriptRunner backed by `osascript -e <script>`."""

    def __init__(self, osascript_path: str = "osascript") -> None:
        self.osascript_path = osascript_path

    def execute(self, script: str) -> ScriptResult:
        try:
            proc = subprocess.run(
                [self.osascript_path, "-e", script],
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            raise ScriptError(f"{self.osascript_path} not found (is this macOS?)") from None
        return ScriptResult(stdout=proc.stdout or "", stderr=proc.stderr or "", returncode=proc.returncode)


def classify_failure(stderr: str, returncode: int | None = None) -> ThingsError:
    """Turn a raw osascript diagnostic into a stable, user-facing error."""
    msg = stderr.strip()
    if _TASK_NOT_FOUND_RE.search(msg):
        return TaskNotFoundError()
    if _PROJECT_NOT_FOUND_RE.search(msg):
        return ProjectNotFoundError()
    return ScriptError(msg, returncode)


def run_script(runner: ScriptRunner, script: str) -> str:
    """
    Execute `script` and return its stripped stdout.

    Non-zero exit or anything on stderr is a failure and raises a ThingsError.
    """
    logger.debug("osascript call: %d chars", len(script))
    result = runner.execute(script)

    if result.returncode != 0 or result.stderr.strip():
        err = classify_failure(result.stderr, result.returncode)
        logger.info("osascript failed rc=%s: %s", result.returncode, err.message)
        raise err

    logger.debug("osascript ok: %d chars out", len(result.stdout))
    return result.stdout.strip()
