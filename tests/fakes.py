# tests/fakes.py

from __future__ import annotations

from collections.abc import Iterable

from things_bridge.core.ports import ScriptResult
from things_bridge.things.wire import FIELD_DELIMITER, ROW_DELIMITER


class FakeRunner:
    """
    Deterministic ScriptRunner for unit tests.

    - Captures every script for assertions
    - Replays queued results in order; once the queue is empty, returns
      `default` (empty stdout, exit 0)
    """

    def __init__(self, results: Iterable[ScriptResult | str] = ()) -> None:
        self.scripts: list[str] = []
        self._queue: list[ScriptResult] = [self._coerce(r) for r in results]
        self.default = ScriptResult(stdout="", stderr="", returncode=0)

    @staticmethod
    def _coerce(r: ScriptResult | str) -> ScriptResult:
        if isinstance(r, ScriptResult):
            return r
        return ScriptResult(stdout=r, stderr="", returncode=0)

    def push(self, result: ScriptResult | str) -> None:
        self._queue.append(self._coerce(result))

    def fail(self, stderr: str, returncode: int = 1) -> None:
        self._queue.append(ScriptResult(stdout="", stderr=stderr, returncode=returncode))

    def execute(self, script: str) -> ScriptResult:
        self.scripts.append(script)
        if self._queue:
            return self._queue.pop(0)
        return self.default

    @property
    def last_script(self) -> str:
        return self.scripts[-1]


def row(*fields: str) -> str:
    """Join fields the way the generated AppleScript does."""
    return FIELD_DELIMITER.join(fields)


def rows(*items: str) -> str:
    return ROW_DELIMITER.join(items)
