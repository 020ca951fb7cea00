# src/things_bridge/things/scripts.py

"""
AppleScript command builder.

Every user-supplied value goes through `escape()` and then `quote()` before it
lands in a script. Do not interpolate values into script text any other way.

Builders return plain script text; they never run anything.
"""

from __future__ import annotations

from collections.abc import Sequence

from .dates import format_date
from .things_models import ProjectStatus, ThingsList
from .wire import (
    FIELD_DELIMITER,
    PROJECT_DETAIL,
    PROJECT_ROW,
    PROJECT_TASK_ROW,
    ROW_DELIMITER,
    TAG_ROW,
    TASK_DETAIL,
    TASK_ROW,
    WireField,
)

# Sentinel accepted by update operations to unset a field.
CLEAR = "none"

TASK_WHEN_LISTS: dict[str, ThingsList] = {
    "today": ThingsList.TODAY,
    "tomorrow": ThingsList.TOMORROW,
    "someday": ThingsList.SOMEDAY,
    "anytime": ThingsList.ANYTIME,
}

TASK_UPDATE_WHEN_LISTS: dict[str, ThingsList] = {
    **TASK_WHEN_LISTS,
    "inbox": ThingsList.INBOX,
}

PROJECT_WHEN_LISTS: dict[str, ThingsList] = {
    "today": ThingsList.TODAY,
    "tomorrow": ThingsList.TOMORROW,
    "someday": ThingsList.SOMEDAY,
    "anytime": ThingsList.ANYTIME,
}


def escape(value: object) -> str:
    """Backslashes first, then double quotes. None becomes ""."""
    if value is None:
        return ""
    return str(value).replace("\\", "\\\\").replace('"', '\\"')


def quote(value: object) -> str:
    return f'"{escape(value)}"'


def _indent(lines: Sequence[str], depth: int = 1) -> list[str]:
    pad = "  " * depth
    return [pad + line for line in lines]


def emit_fields(var: str, schema: Sequence[WireField]) -> list[str]:
    """
    Lines that append one row of `schema` for record `var` to `output`.

    Guarded fields fall back to "" when the relation is missing, so the
    field count stays fixed.
    """
    lines: list[str] = []
    last = len(schema) - 1
    for i, wf in enumerate(schema):
        expr = wf.expression.format(var=var)
        if wf.guarded:
            lines += [
                "try",
                f"  set output to output & {expr}",
                "on error",
                '  set output to output & ""',
                "end try",
            ]
            if i != last:
                lines.append(f"set output to output & {quote(FIELD_DELIMITER)}")
        elif i != last:
            lines.append(f"set output to output & {expr} & {quote(FIELD_DELIMITER)}")
        else:
            lines.append(f"set output to output & {expr}")
    return lines


def emit_rows(
    var: str,
    collection: str,
    schema: Sequence[WireField],
    *,
    limit: int | None = None,
) -> list[str]:
    """Loop over `collection`, emitting at most `limit` rows separated by ROW_DELIMITER."""
    lines = [f"set recordList to {collection}"]
    if limit is not None:
        lines.append(f"set maxItems to {int(limit)}")
    else:
        lines.append("set maxItems to count of recordList")
    lines += [
        "set counter to 0",
        f"repeat with {var} in recordList",
        "  set counter to counter + 1",
        "  if counter > maxItems then exit repeat",
        f"  if counter > 1 then set output to output & {quote(ROW_DELIMITER)}",
    ]
    lines += _indent(emit_fields(var, schema))
    lines.append("end repeat")
    return lines


class CommandBuilder:
    """Builds scripts addressed to one scriptable application (Things3 by default)."""

    def __init__(self, application: str = "Things3") -> None:
        self.application = application

    # ---- framing ----

    def _tell(self, body: Sequence[str]) -> str:
        lines = [f"tell application {quote(self.application)}"]
        lines += _indent(body)
        lines.append("end tell")
        return "\n".join(lines)

    def _tell_one(self, command: str) -> str:
        return f"tell application {quote(self.application)} to {command}"

    @staticmethod
    def _resolve_project(identifier: str, var: str = "p") -> list[str]:
        """
        Look a project up by id, falling back to the first project with that name.

        `project id "x"` and `first project whose name is "x"` fail differently,
        so the id lookup is wrapped and only its failure triggers the name lookup.
        """
        return [
            "try",
            f"  set {var} to project id {quote(identifier)}",
            "on error",
            f"  set {var} to first project whose name is {quote(identifier)}",
            "end try",
        ]

    @staticmethod
    def _move(var: str, target: ThingsList) -> str:
        return f"move {var} to list {quote(target.value)}"

    def _when(self, var: str, when: str | None, tokens: dict[str, ThingsList]) -> list[str]:
        """
        Known tokens move to their list. Any other non-empty value is a start
        date: move to Anytime, then set the activation date explicitly.
        """
        if when is None or not when.strip():
            return []
        target = tokens.get(when.strip().lower())
        if target is not None:
            return [self._move(var, target)]
        return [
            f"set startDate to date {quote(format_date(when))}",
            self._move(var, ThingsList.ANYTIME),
            f"set activation date of {var} to startDate",
        ]

    # ---- tasks: read ----

    def list_tasks(self, target: ThingsList, limit: int | None = None) -> str:
        body = ['set output to ""']
        body += emit_rows("t", f"to dos of list {quote(target.value)}", TASK_ROW, limit=limit)
        body.append("return output")
        return self._tell(body)

    def get_task(self, task_id: str) -> str:
        body = [
            f"set t to to do id {quote(task_id)}",
            'set output to ""',
        ]
        body += emit_fields("t", TASK_DETAIL)
        body.append("return output")
        return self._tell(body)

    def search_tasks(self, query: str, limit: int) -> str:
        collection = f"(to dos whose name contains {quote(query)} and status is open)"
        body = ['set output to ""']
        body += emit_rows("t", collection, TASK_ROW, limit=limit)
        body.append("return output")
        return self._tell(body)

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
    ) -> str:
        props = [f"name:{quote(title)}"]
        if notes is not None:
            props.append(f"notes:{quote(notes)}")
        if deadline is not None:
            props.append(f"due date:date {quote(format_date(deadline))}")
        if tags is not None:
            props.append(f"tag names:{quote(tags)}")

        body = [f"set newTodo to make new to do with properties {{{', '.join(props)}}}"]

        if project is not None:
            body += [
                f"set proj to first project whose name is {quote(project)}",
                "set project of newTodo to proj",
            ]

        for item in checklist or ():
            body += [
                "tell newTodo",
                f"  make new checklist item with properties {{name:{quote(item)}}}",
                "end tell",
            ]

        body += self._when("newTodo", when, TASK_WHEN_LISTS)
        body.append("return id of newTodo")
        return self._tell(body)

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
    ) -> str:
        body = [f"set t to to do id {quote(task_id)}"]

        if name is not None:
            body.append(f"set name of t to {quote(name)}")
        if notes is not None:
            body.append(f"set notes of t to {quote(notes)}")
        if tags is not None:
            body.append(f"set tag names of t to {quote(tags)}")

        if deadline == CLEAR:
            body.append("set due date of t to missing value")
        elif deadline is not None:
            body.append(f"set due date of t to date {quote(format_date(deadline))}")

        if project == CLEAR:
            body.append("set project of t to missing value")
        elif project is not None:
            body += [
                f"set proj to first project whose name is {quote(project)}",
                "set project of t to proj",
            ]

        body += self._when("t", when, TASK_UPDATE_WHEN_LISTS)
        body.append("return name of t")
        return self._tell(body)

    def set_task_status(self, task_id: str, status: str) -> str:
        return self._tell_one(f"set status of to do id {quote(task_id)} to {status}")

    def delete_task(self, task_id: str) -> str:
        return self._tell_one(f"delete to do id {quote(task_id)}")

    # ---- projects ----

    def list_projects(self) -> str:
        body = ['set output to ""']
        body += emit_rows("p", "every project", PROJECT_ROW)
        body.append("return output")
        return self._tell(body)

    def show_project(self, identifier: str) -> str:
        body = self._resolve_project(identifier)
        body.append('set output to ""')
        body += emit_fields("p", PROJECT_DETAIL)
        # Always emit the separator; a project without tasks leaves an empty
        # trailing segment that the decoder drops.
        body.append(f"set output to output & {quote(ROW_DELIMITER)}")
        body += [
            "set counter to 0",
            "repeat with t in to dos of p",
            "  set counter to counter + 1",
            f"  if counter > 1 then set output to output & {quote(ROW_DELIMITER)}",
        ]
        body += _indent(emit_fields("t", PROJECT_TASK_ROW))
        body += ["end repeat", "return output"]
        return self._tell(body)

    def create_project(
        self,
        name: str,
        *,
        notes: str | None = None,
        area: str | None = None,
        tags: str | None = None,
        when: str | None = None,
        deadline: str | None = None,
    ) -> str:
        props = [f"name:{quote(name)}"]
        if notes is not None:
            props.append(f"notes:{quote(notes)}")
        if tags is not None:
            props.append(f"tag names:{quote(tags)}")
        if deadline is not None:
            props.append(f"due date:date {quote(format_date(deadline))}")

        body = [f"set newProj to make new project with properties {{{', '.join(props)}}}"]
        if area is not None:
            body += [
                f"set a to first area whose name is {quote(area)}",
                "set area of newProj to a",
            ]
        body += self._when("newProj", when, PROJECT_WHEN_LISTS)
        body.append("return id of newProj")
        return self._tell(body)

    def update_project(
        self,
        identifier: str,
        *,
        name: str | None = None,
        notes: str | None = None,
        tags: str | None = None,
        deadline: str | None = None,
    ) -> str:
        body = self._resolve_project(identifier)
        if name is not None:
            body.append(f"set name of p to {quote(name)}")
        if notes is not None:
            body.append(f"set notes of p to {quote(notes)}")
        if tags is not None:
            body.append(f"set tag names of p to {quote(tags)}")

        if deadline == CLEAR:
            body.append("set due date of p to missing value")
        elif deadline is not None:
            body.append(f"set due date of p to date {quote(format_date(deadline))}")

        body.append("return name of p")
        return self._tell(body)

    def complete_project(self, identifier: str) -> str:
        body = self._resolve_project(identifier)
        body.append(f"set status of p to {ProjectStatus.COMPLETED}")
        return self._tell(body)

    def delete_project(self, identifier: str) -> str:
        body = self._resolve_project(identifier)
        body.append("delete p")
        return self._tell(body)

    # ---- tags ----

    def list_tags(self) -> str:
        body = ['set output to ""']
        body += emit_rows("g", "every tag", TAG_ROW)
        body.append("return output")
        return self._tell(body)


