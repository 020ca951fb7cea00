"""
Things subsystem.

Components:
- things_models.py: record types (Task, Project, ...) and list/status enums
- wire.py: delimiters and the per-record field schemas shared by both sides
- dates.py: ISO -> AppleScript date text, verbose AppleScript date -> ISO
- scripts.py: AppleScript command builder (escaping lives here)
- decode.py: osascript stdout -> records
- transport.py: osascript subprocess runner + failure classification
- things_api.py: ThingsClient, the typed CRUD surface used by the CLI
"""
