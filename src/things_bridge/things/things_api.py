# src/things_bridge/things/things_api.py

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..config import Settings, get_settings
from ..core.errors import UsageError
from ..core.ports import ScriptRunner
from .decode import (
    parse_created,
    parse_project_detail,
    parse_projects,
    parse_tags,
    parse_task_detail,
    parse_task_rows,
)
from .scripts import CommandBuilder
from .things_models import Created, Project, ProjectDetail, Task, TaskDetail, TaskStatus, ThingsList
from .transport import OsascriptRunner, run_script

logger = logging.getLogger(__name__)


def _require(value: str | None, what: str) -> str:
    if value is None or not value.strip():
        raise UsageError(f"Missing {what}")
    return value


def _check_limit(limit: int | None) -> int | None:
    if limit is None:
        return None
    try:
        value = int(limit)
    except (TypeError, ValueError):
        raise UsageError(f"Limit must be an integer, got {limit!r}") from None
    if value <= 0:
        raise UsageError(f"Limit must be positive, got {limit}")
    return value


class ThingsClient:
    """
    Typed CRUD operations against Things 3.

    Every public method is one round trip: build a script, run it once,
    decode the output. Nothing is cached between calls.

    Errors:
    - UsageError before any script runs
    - TaskNotFoundError / ProjectNotFoundError / ScriptError from the transport
    """

    def __init__(
        self,
        runner: ScriptRunner | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.runner: ScriptRunner = runner or OsascriptRunner(self.settings.osascript_path)
        self.scripts = CommandBuilder(self.settings.application)

    def _run(self, script: str) -> str:
        return run_script(self.runner, script)

    # ---- tasks: read ----

    def list_tasks(self, list_name: str, *, limit: int | None = None) -> list[Task]:
        target = ThingsList.parse(list_name)
        raw = self._run(self.scripts.list_tasks(target, _check_limit(limit)))
        tasks = parse_task_rows(raw)
        # Blank names are time-block placeholders; only the list view hides them.
        visible = [t for t in tasks if t.name and t.name.strip()]
        logger.debug("list %s: %d rows, %d visible", target, len(tasks), len(visible))
        return visible

    def get_task(self, task_id: str) -> TaskDetail:
        _require(task_id, "ID")
        return parse_task_detail(self._run(self.scripts.get_task(task_id)))

    def search_tasks(self, query: str, *, limit: int | None = None) -> list[Task]:
        _require(query, "query")
        max_items = _check_limit(limit) or self.settings.search_limit
        return parse_task_rows(self._run(self.scripts.search_tasks(query, max_items)))

    # ---- tasks: write ----

    def create_task(
        self,
        title: str,
        *,
        notes: str | None = None,
        when: str | None = None,
        deadline: str | None = None,
        tags: str | None = None,
        project: str | None = None,
        checklist: Sequence[str] | None = None,
    ) -> Created:
        _require(title, "title")
        script = self.scripts.create_task(
            title,
            notes=notes,
            when=when,
            deadline=deadline,
            tags=tags,
            project=project,
            checklist=checklist,
        )
        created = parse_created(self._run(script), title)
        logger.info("Created todo id=%s", created.id)
        return created

    def update_task(
        self,
        task_id: str,
        *,
        name: str | None = None,
        notes: str | None = None,
        when: str | None = None,
        deadline: str | None = None,
        tags: str | None = None,
        project: str | None = None,
    ) -> bool:
        _require(task_id, "ID")
        if all(v is None for v in (name, notes, when, deadline, tags, project)):
            raise UsageError("No changes specified")
        if name is not None:
            _require(name, "name")
        script = self.scripts.update_task(
            task_id,
            name=name,
            notes=notes,
            when=when,
            deadline=deadline,
            tags=tags,
            project=project,
        )
        self._run(script)
        logger.info("Updated todo id=%s", task_id)
        return True

    def complete_task(self, task_id: str) -> bool:
        _require(task_id, "ID")
        self._run(self.scripts.set_task_status(task_id, TaskStatus.COMPLETED))
        return True

    def cancel_task(self, task_id: str) -> bool:
        _require(task_id, "ID")
        self._run(self.scripts.set_task_status(task_id, TaskStatus.CANCELED))
        return True

    def delete_task(self, task_id: str) -> bool:
        _require(task_id, "ID")
        self._run(self.scripts.delete_task(task_id))
        logger.info("Deleted todo id=%s", task_id)
        return True

    # ---- projects ----

    def list_projects(self) -> list[Project]:
        return parse_projects(self._run(self.scripts.list_projects()))

    def show_project(self, identifier: str) -> ProjectDetail:
        _require(identifier, "project name or ID")
        return parse_project_detail(self._run(self.scripts.show_project(identifier)))

    def create_project(
        self,
        name: str,
        *,
        notes: str | None = None,
        area: str | None = None,
        tags: str | None = None,
        when: str | None = None,
        deadline: str | None = None,
    ) -> Created:
        _require(name, "name")
        script = self.scripts.create_project(
            name,
            notes=notes,
            area=area,
            tags=tags,
            when=when,
            deadline=deadline,
        )
        created = parse_created(self._run(script), name)
        logger.info("Created project id=%s", created.id)
        return created

    def update_project(
        self,
        identifier: str,
        *,
        name: str | None = None,
        notes: str | None = None,
        tags: str | None = None,
        deadline: str | None = None,
    ) -> bool:
        _require(identifier, "project name or ID")
        if all(v is None for v in (name, notes, tags, deadline)):
            raise UsageError("No changes specified")
        if name is not None:
            _require(name, "name")
        self._run(
            self.scripts.update_project(
                identifier,
                name=name,
                notes=notes,
                tags=tags,
                deadline=deadline,
            )
        )
        return True

    def complete_project(self, identifier: str) -> bool:
        _require(identifier, "project name or ID")
        self._run(self.scripts.complete_project(identifier))
        return True

    def delete_project(self, identifier: str) -> bool:
        _require(identifier, "project name or ID")
        self._run(self.scripts.delete_project(identifier))
        logger.info("Deleted project %s", identifier)
        return True

    # ---- tags ----

    def list_tags(self) -> list[str]:
        return parse_tags(self._run(self.scripts.list_tags()))
