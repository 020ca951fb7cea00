# src/things_bridge/things/things_models.py

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any

from ..core.errors import UsageError


class TaskStatus(StrEnum):
    """
    Status tokens Things uses on the wire.

    Decoded records keep whatever token the app returned (plain str);
    this enum is only used when building status-change commands.
    """

    OPEN = "open"
    COMPLETED = "completed"
    CANCELED = "canceled"


class ProjectStatus(StrEnum):
    OPEN = "open"
    COMPLETED = "completed"


class ThingsList(StrEnum):
    """The eight built-in lists. Membership is exclusive and set by moving."""

    INBOX = "Inbox"
    TODAY = "Today"
    TOMORROW = "Tomorrow"
    ANYTIME = "Anytime"
    UPCOMING = "Upcoming"
    SOMEDAY = "Someday"
    LOGBOOK = "Logbook"
    TRASH = "Trash"

    @classmethod
    def parse(cls, raw: str | None) -> ThingsList:
        """Case-insensitive lookup; unknown names are a usage error."""
        wanted = (raw or "").strip().lower()
        for item in cls:
            if item.value.lower() == wanted:
                return item
        raise UsageError(f"Unknown list: {raw}")


@dataclass(slots=True)
class Record:
    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class Task(Record):
    """One row of a list or search result."""

    id: str
    name: str | None = None
    status: str | None = None
    tags: str | None = None
    deadline: str | None = None
    start_date: str | None = None
    notes: str | None = None
    project: str | None = None
    area: str | None = None


@dataclass(slots=True)
class TaskDetail(Task):
    """A single task as returned by get; adds the app-assigned timestamps."""

    created: str | None = None
    modified: str | None = None
    completed: str | None = None
    cancelled: str | None = None


@dataclass(slots=True)
class ProjectTask(Record):
    """Reduced task row nested inside a project detail."""

    id: str
    name: str | None = None
    status: str | None = None
    tags: str | None = None
    deadline: str | None = None


@dataclass(slots=True)
class Project(Record):
    id: str
    name: str | None = None
    status: str | None = None
    area: str | None = None
    todo_count: int | None = None


@dataclass(slots=True)
class ProjectDetail(Record):
    id: str
    name: str | None = None
    status: str | None = None
    area: str | None = None
    notes: str | None = None
    created: str | None = None
    modified: str | None = None
    tasks: list[ProjectTask] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class Created:
    """Result of a create: the id Things assigned plus the requested name."""

    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}
