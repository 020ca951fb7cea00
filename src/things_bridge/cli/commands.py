# src/things_bridge/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from typing import Any, NoReturn

from ..core.errors import UsageError
from ..things.things_api import ThingsClient
from ..things.things_models import ThingsList

CommandHandler = Callable[[ThingsClient, list[str]], Any]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Maps a command word (`things <word> ...`) to its handler."""

    def __init__(self, prog: str = "things") -> None:
        self.prog = prog
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def names(self) -> list[str]:
        return list(self._help)

    def handle(self, client: ThingsClient, argv: list[str]) -> Any:
        """Dispatch argv[0] and return the handler's JSON-ready result."""
        if not argv:
            raise UsageError(f"Missing command. Run '{self.prog} help' for usage.")

        name = argv[0].lower()
        handler = self._handlers.get(name)
        if handler is None:
            raise UsageError(f"Unknown command: {argv[0]}. Run '{self.prog} help' for usage.")
        return handler(client, argv[1:])

    def build_help(self) -> str:
        width = max((len(n) for n in self._help), default=0)
        lines = ["Commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {self.prog} {name.ljust(width)}  {help_text}")
        return "\n".join(lines)


class _OptionParser(argparse.ArgumentParser):
    """argparse that reports problems as UsageError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(f"{self.prog}: {message}")


def _parser(prog: str, positional: str | None = None) -> _OptionParser:
    p = _OptionParser(prog=prog, add_help=False)
    if positional:
        p.add_argument(positional, nargs="?")
    return p


def _positional(ns: argparse.Namespace, name: str, usage: str) -> str:
    value = getattr(ns, name)
    if not value:
        raise UsageError(f"Missing {name}. Usage: {usage}")
    return value


def _split_checklist(raw: str | None) -> list[str] | None:
    if raw is None:
        return None
    return [item.strip() for item in raw.split(",")]


registry = CommandRegistry()
project_registry = CommandRegistry(prog="things project")


# ---- lists ----


def _make_list_handler(target: ThingsList) -> CommandHandler:
    def handler(client: ThingsClient, args: list[str]) -> dict[str, Any]:
        p = _parser(f"things {target.value.lower()}")
        p.add_argument("--limit", type=int)
        ns = p.parse_args(args)
        tasks = client.list_tasks(target.value, limit=ns.limit)
        return {"todos": [t.to_dict() for t in tasks], "total": len(tasks)}

    return handler


# ---- todos ----


def cmd_add(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    p = _parser("things add", "title")
    for opt in ("--notes", "--when", "--deadline", "--tags", "--project", "--checklist"):
        p.add_argument(opt)
    ns = p.parse_args(args)
    title = _positional(ns, "title", 'things add "title" [--when today] [--deadline DATE] ...')
    return client.create_task(
        title,
        notes=ns.notes,
        when=ns.when,
        deadline=ns.deadline,
        tags=ns.tags,
        project=ns.project,
        checklist=_split_checklist(ns.checklist),
    ).to_dict()


def cmd_show(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    ns = _parser("things show", "id").parse_args(args)
    return client.get_task(_positional(ns, "id", "things show <ID>")).to_dict()


def cmd_edit(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    p = _parser("things edit", "id")
    for opt in ("--name", "--notes", "--when", "--deadline", "--tags", "--project"):
        p.add_argument(opt)
    ns = p.parse_args(args)
    task_id = _positional(ns, "id", "things edit <ID> [--name NAME] [--notes NOTES] ...")
    client.update_task(
        task_id,
        name=ns.name,
        notes=ns.notes,
        when=ns.when,
        deadline=ns.deadline,
        tags=ns.tags,
        project=ns.project,
    )
    return {"updated": True, "id": task_id}


def cmd_complete(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    ns = _parser("things complete", "id").parse_args(args)
    task_id = _positional(ns, "id", "things complete <ID>")
    client.complete_task(task_id)
    return {"completed": True, "id": task_id}


def cmd_cancel(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    ns = _parser("things cancel", "id").parse_args(args)
    task_id = _positional(ns, "id", "things cancel <ID>")
    client.cancel_task(task_id)
    return {"cancelled": True, "id": task_id}


def cmd_delete(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    ns = _parser("things delete", "id").parse_args(args)
    task_id = _positional(ns, "id", "things delete <ID>")
    client.delete_task(task_id)
    return {"deleted": True, "id": task_id}


def cmd_search(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    p = _parser("things search", "query")
    p.add_argument("--limit", type=int)
    ns = p.parse_args(args)
    query = _positional(ns, "query", 'things search "query" [--limit N]')
    tasks = client.search_tasks(query, limit=ns.limit)
    return {"todos": [t.to_dict() for t in tasks], "total": len(tasks)}


# ---- projects ----


def cmd_projects(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    _parser("things projects").parse_args(args)
    projects = client.list_projects()
    return {"projects": [p.to_dict() for p in projects], "total": len(projects)}


def cmd_project(client: ThingsClient, args: list[str]) -> Any:
    choices = ", ".join(project_registry.names())
    if not args:
        raise UsageError(f"Missing project subcommand. Use: {choices}")
    if args[0].lower() not in project_registry.names():
        raise UsageError(f"Unknown project subcommand: {args[0]}. Use: {choices}")
    return project_registry.handle(client, args)


def cmd_project_show(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    ns = _parser("things project show", "identifier").parse_args(args)
    ident = _positional(ns, "identifier", "things project show <name-or-id>")
    return client.show_project(ident).to_dict()


def cmd_project_add(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    p = _parser("things project add", "name")
    for opt in ("--notes", "--area", "--tags", "--when", "--deadline"):
        p.add_argument(opt)
    ns = p.parse_args(args)
    name = _positional(ns, "name", 'things project add "name" [--notes NOTES] [--area AREA] ...')
    return client.create_project(
        name,
        notes=ns.notes,
        area=ns.area,
        tags=ns.tags,
        when=ns.when,
        deadline=ns.deadline,
    ).to_dict()


def cmd_project_edit(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    p = _parser("things project edit", "identifier")
    for opt in ("--name", "--notes", "--tags", "--deadline"):
        p.add_argument(opt)
    ns = p.parse_args(args)
    ident = _positional(ns, "identifier", "things project edit <name-or-id> [--name NAME] ...")
    client.update_project(ident, name=ns.name, notes=ns.notes, tags=ns.tags, deadline=ns.deadline)
    return {"updated": True, "identifier": ident}


def cmd_project_complete(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    ns = _parser("things project complete", "identifier").parse_args(args)
    ident = _positional(ns, "identifier", "things project complete <name-or-id>")
    client.complete_project(ident)
    return {"completed": True, "identifier": ident}


def cmd_project_delete(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    ns = _parser("things project delete", "identifier").parse_args(args)
    ident = _positional(ns, "identifier", "things project delete <name-or-id>")
    client.delete_project(ident)
    return {"deleted": True, "identifier": ident}


# ---- tags ----


def cmd_tags(client: ThingsClient, args: list[str]) -> dict[str, Any]:
    _parser("things tags").parse_args(args)
    tags = client.list_tags()
    return {"tags": tags, "total": len(tags)}


for _target in ThingsList:
    registry.register(
        _target.value.lower(),
        _make_list_handler(_target),
        f"List {_target.value} todos [--limit N]",
    )

registry.register("add", cmd_add, 'Create a todo: "title" [--notes --when --deadline --tags --project --checklist]')
registry.register("show", cmd_show, "Show todo details: <ID>")
registry.register("edit", cmd_edit, "Update a todo: <ID> [--name --notes --when --deadline --tags --project]")
registry.register("complete", cmd_complete, "Mark todo complete: <ID>")
registry.register("cancel", cmd_cancel, "Mark todo cancelled: <ID>")
registry.register("delete", cmd_delete, "Move todo to Trash: <ID>")
registry.register("search", cmd_search, 'Search open todos by name: "query" [--limit N]')
registry.register("projects", cmd_projects, "List all projects")
registry.register("project", cmd_project, "Project commands: show | add | edit | complete | delete")
registry.register("tags", cmd_tags, "List all tags")

project_registry.register("show", cmd_project_show, "Show project + its todos: <name-or-id>")
project_registry.register("add", cmd_project_add, 'Create a project: "name" [--notes --area --tags --when --deadline]')
project_registry.register("edit", cmd_project_edit, "Update a project: <name-or-id> [--name --notes --tags --deadline]")
project_registry.register("complete", cmd_project_complete, "Complete a project: <name-or-id>")
project_registry.register("delete", cmd_project_delete, "Trash a project: <name-or-id>")
