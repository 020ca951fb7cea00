# tests/test_decode.py

from __future__ import annotations

from things_bridge.things.decode import (
    parse_created,
    parse_project_detail,
    parse_projects,
    parse_tags,
    parse_task_detail,
    parse_task_rows,
)
from things_bridge.things.things_models import ProjectTask

from .fakes import row, rows

MIDNIGHT = "Thursday, February 26, 2026 at 12:00:00 AM"
MORNING = "Thursday, February 26, 2026 at 9:15:00 AM"


def test_task_rows_decode_every_field() -> None:
    raw = rows(
        row("t1", "Buy milk", "open", "Errand,Home", MIDNIGHT, "missing value", "2%", "Chores", "Life"),
        row("t2", "Call", "open", "", "", "", "", "", ""),
    )
    tasks = parse_task_rows(raw)
    assert [t.id for t in tasks] == ["t1", "t2"]

    t1 = tasks[0]
    assert t1.tags == "Errand,Home"
    assert t1.deadline == "2026-02-26"
    assert t1.start_date is None
    assert t1.notes == "2%"
    assert t1.project == "Chores"
    assert t1.area == "Life"

    t2 = tasks[1]
    assert (t2.tags, t2.deadline, t2.notes, t2.project, t2.area) == (None, None, None, None, None)


def test_task_rows_keep_blank_names() -> None:
    raw = rows(row("t1", "", "open", "", "", "", "", "", ""), row("t2", "Real", "open"))
    assert [t.id for t in parse_task_rows(raw)] == ["t1", "t2"]


def test_task_rows_drop_rows_without_id() -> None:
    raw = rows(row("t1", "A", "open"), row("", "ghost", "open"))
    assert [t.id for t in parse_task_rows(raw)] == ["t1"]


def test_blank_response_is_no_records() -> None:
    assert parse_task_rows("") == []
    assert parse_projects("   ") == []
    assert parse_tags("") == []


def test_status_is_passed_through() -> None:
    (task,) = parse_task_rows(row("t1", "A", "someday-ish"))
    assert task.status == "someday-ish"


def test_task_detail_timestamps() -> None:
    raw = row(
        "t1", "A", "completed", "", "", "", "", "", "",
        MORNING, MORNING, MIDNIGHT, "missing value",
    )
    detail = parse_task_detail(raw)
    assert detail.created == "2026-02-26T09:15:00"
    assert detail.modified == "2026-02-26T09:15:00"
    assert detail.completed == "2026-02-26"
    assert detail.cancelled is None


def test_task_detail_tolerates_short_response() -> None:
    detail = parse_task_detail(row("t1", "A", "open", "Tag"))
    assert detail.tags == "Tag"
    assert detail.project is None
    assert detail.cancelled is None


def test_unparseable_date_does_not_void_rows() -> None:
    raw = rows(row("t1", "A", "open", "", "sometime soon"), row("t2", "B", "open"))
    tasks = parse_task_rows(raw)
    assert tasks[0].deadline == "sometime soon"
    assert tasks[1].id == "t2"


def test_projects() -> None:
    raw = rows(row("p1", "Reno", "open", "Home", "3"), row("p2", "Trip", "completed", "", "0"))
    projects = parse_projects(raw)
    assert projects[0].area == "Home"
    assert projects[0].todo_count == 3
    assert projects[1].area is None
    assert projects[1].todo_count == 0


def test_project_detail_with_tasks() -> None:
    raw = rows(
        row("p1", "Reno", "open", "Home", "Paint first", MORNING, MORNING),
        row("t1", "Buy paint", "open", "Store", MIDNIGHT),
        row("t2", "Sand", "open", "", ""),
    )
    detail = parse_project_detail(raw)
    assert detail.id == "p1"
    assert detail.notes == "Paint first"
    assert detail.created == "2026-02-26T09:15:00"
    assert detail.tasks == [
        ProjectTask(id="t1", name="Buy paint", status="open", tags="Store", deadline="2026-02-26"),
        ProjectTask(id="t2", name="Sand", status="open", tags=None, deadline=None),
    ]


def test_project_detail_without_tasks_drops_trailing_segment() -> None:
    raw = row("p1", "Empty", "open", "", "", MORNING, MORNING) + "~~~"
    detail = parse_project_detail(raw)
    assert detail.name == "Empty"
    assert detail.area is None
    assert detail.tasks == []


def test_project_detail_to_dict_nests_tasks() -> None:
    raw = rows(row("p1", "P", "open", "", "", "", ""), row("t1", "A", "open", "", ""))
    data = parse_project_detail(raw).to_dict()
    assert data["tasks"] == [{"id": "t1", "name": "A", "status": "open", "tags": None, "deadline": None}]


def test_tags_are_trimmed() -> None:
    assert parse_tags(rows("Errand", " Home ", "", "Work")) == ["Errand", "Home", "Work"]


def test_created_echoes_name() -> None:
    created = parse_created("ABC123\n", "My Task")
    assert created.to_dict() == {"id": "ABC123", "name": "My Task"}
