"""Command-line bridge to Things 3 over AppleScript (osascript)."""

__version__ = "0.1.0"
