# tests/test_commands.py

from __future__ import annotations

import json

import pytest

from things_bridge.cli.commands import CommandRegistry, registry
from things_bridge.cli.main import run
from things_bridge.core.errors import UsageError

from .fakes import row


def _envelope(capsys) -> dict:
    out = capsys.readouterr().out
    return json.loads(out)


def test_command_registry_routes_and_aliases(client) -> None:
    reg = CommandRegistry()
    called = {"a": 0}

    def handler(client, args):
        called["a"] += 1
        return {"args": args}

    reg.register("alpha", handler, "alpha things", aliases=["al"])

    assert reg.handle(client, ["alpha", "x"]) == {"args": ["x"]}
    assert reg.handle(client, ["AL"]) == {"args": []}
    assert called["a"] == 2
    assert "things alpha" in reg.build_help()


def test_command_registry_unknown_command(client) -> None:
    reg = CommandRegistry()
    with pytest.raises(UsageError, match="Unknown command"):
        reg.handle(client, ["nope"])
    with pytest.raises(UsageError, match="Missing command"):
        reg.handle(client, [])


def test_every_list_has_a_command() -> None:
    for name in ("inbox", "today", "tomorrow", "anytime", "upcoming", "someday", "logbook", "trash"):
        assert name in registry.names()


def test_add_prints_created_record(client, runner, capsys) -> None:
    runner.push("ABC123")
    code = run(["add", "My Task", "--when", "today", "--tags", "A,B", "--checklist", "one, two"], client)

    assert code == 0
    assert _envelope(capsys) == {"ok": True, "data": {"id": "ABC123", "name": "My Task"}}
    assert 'make new checklist item with properties {name:"two"}' in runner.last_script


def test_list_command_envelope(client, runner, capsys) -> None:
    runner.push(row("t1", "Milk", "open", "", "", "", "", "", ""))
    assert run(["today", "--limit", "5"], client) == 0

    env = _envelope(capsys)
    assert env["ok"] is True
    assert env["data"]["total"] == 1
    assert env["data"]["todos"][0]["name"] == "Milk"


def test_edit_with_clear_sentinel(client, runner, capsys) -> None:
    assert run(["edit", "t1", "--deadline", "none", "--project", "none"], client) == 0
    assert _envelope(capsys) == {"ok": True, "data": {"updated": True, "id": "t1"}}
    assert "set due date of t to missing value" in runner.last_script
    assert "set project of t to missing value" in runner.last_script


def test_project_subcommands(client, runner, capsys) -> None:
    runner.push(row("p1", "Reno", "open", "", "", "", "") + "~~~")
    assert run(["project", "show", "Reno"], client) == 0
    env = _envelope(capsys)
    assert env["data"]["name"] == "Reno"
    assert env["data"]["tasks"] == []

    assert run(["project", "frobnicate"], client) == 1
    env = _envelope(capsys)
    assert env["code"] == "USAGE"
    assert "Unknown project subcommand" in env["error"]


def test_usage_errors_become_json(client, runner, capsys) -> None:
    assert run(["show"], client) == 1
    env = _envelope(capsys)
    assert env == {"ok": False, "error": "Missing id. Usage: things show <ID>", "code": "USAGE"}

    assert run(["today", "--limit", "lots"], client) == 1
    assert _envelope(capsys)["code"] == "USAGE"

    assert run(["edit", "t1"], client) == 1
    assert _envelope(capsys)["error"] == "No changes specified"
    assert runner.scripts == []


def test_not_found_becomes_json(client, runner, capsys) -> None:
    runner.fail('Things3 got an error: Can’t get to do id "x". (-1728)')
    assert run(["complete", "x"], client) == 1
    assert _envelope(capsys) == {"ok": False, "error": "Todo not found", "code": "NOT_FOUND"}


def test_help_is_plain_text(capsys) -> None:
    assert run(["help"]) == 0
    out = capsys.readouterr().out
    assert "Commands:" in out
    assert "--deadline none" in out
