# src/things_bridge/things/decode.py

"""
Response decoder: one osascript stdout string -> typed records.

Lenient by contract. A malformed field degrades to None or to its raw text;
nothing here raises on content, so one bad row never voids a whole response.
Row filtering that differs per operation (blank names in list vs. search)
happens in the caller, not here.
"""

from __future__ import annotations

import logging

from .things_models import Created, Project, ProjectDetail, ProjectTask, Task, TaskDetail
from .wire import (
    PROJECT_DETAIL,
    PROJECT_ROW,
    PROJECT_TASK_ROW,
    ROW_DELIMITER,
    TASK_DETAIL,
    TASK_ROW,
    blank,
    decode_row,
    split_fields,
    split_rows,
)

logger = logging.getLogger(__name__)


def _has_id(values: dict) -> bool:
    return bool(values.get("id") and values["id"].strip())


def parse_task_rows(raw: str) -> list[Task]:
    """Rows of TASK_ROW. Rows without an id are dropped; blank names are kept."""
    out: list[Task] = []
    for row in split_rows(raw):
        values = decode_row(row, TASK_ROW)
        if not _has_id(values):
            logger.debug("Skipping task row without id: %r", row[:80])
            continue
        out.append(Task(**values))
    return out


def parse_task_detail(raw: str) -> TaskDetail:
    return TaskDetail(**decode_row(raw, TASK_DETAIL))


def parse_projects(raw: str) -> list[Project]:
    out: list[Project] = []
    for row in split_rows(raw):
        values = decode_row(row, PROJECT_ROW)
        if not _has_id(values):
            continue
        out.append(Project(**values))
    return out


def parse_project_detail(raw: str) -> ProjectDetail:
    """
    First segment: the project itself. Every following segment: one child task.

    A project without tasks still ends with a row delimiter; the resulting
    empty segment has a blank first field and is dropped.
    """
    segments = raw.split(ROW_DELIMITER)
    head = decode_row(segments[0], PROJECT_DETAIL)

    tasks: list[ProjectTask] = []
    for seg in segments[1:]:
        fields = split_fields(seg)
        if not fields[0].strip():
            continue
        tasks.append(ProjectTask(**decode_row(seg, PROJECT_TASK_ROW)))

    return ProjectDetail(**head, tasks=tasks)


def parse_tags(raw: str) -> list[str]:
    out: list[str] = []
    for row in split_rows(raw):
        name = blank(row)
        if name is not None:
            out.append(name)
    return out


def parse_created(raw: str, name: str) -> Created:
    """Creates return only the new id; the name is echoed from the request."""
    return Created(id=raw.strip(), name=name)
