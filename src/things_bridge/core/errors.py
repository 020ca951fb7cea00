# src/things_bridge/core/errors.py

"""
Error taxonomy.

- UsageError: the caller's intent is invalid; raised before any script is built.
- NotFoundError: the app reported that a referenced task/project does not exist.
- ScriptError: any other failure reported by osascript or the app.

Decoding never raises; see things/wire.py.
"""

from __future__ import annotations


class ThingsError(RuntimeError):
    """Base class for every failure the client surfaces."""

    code = "ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UsageError(ThingsError, ValueError):
    code = "USAGE"


class NotFoundError(ThingsError):
    code = "NOT_FOUND"


class TaskNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("Todo not found")


class ProjectNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("Project not found")


class ScriptError(ThingsError):
    """Wraps the raw osascript diagnostic."""

    def __init__(self, stderr: str, returncode: int | None = None) -> None:
        super().__init__(f"AppleScript error: {stderr}")
        self.stderr = stderr
        self.returncode = returncode
