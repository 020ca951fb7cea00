# src/things_bridge/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the client.

ThingsClient depends on a Protocol instead of subprocess directly.
This keeps the transport swappable and lets tests replay canned osascript output.
"""

from typing import NamedTuple, Protocol


class ScriptResult(NamedTuple):
    """Raw outcome of one osascript invocation."""

    stdout: str
    stderr: str
    returncode: int


class ScriptRunner(Protocol):
    """Runs one AppleScript source string, synchronously, with no session state."""

    def execute(self, script: str) -> ScriptResult: ...
