"""Driver reputation tagging for sim-racing sessions: data model, SQLite storage and view logic."""

__version__ = "0.1.0"

__all__ = [
    "colors",
    "icons",
    "logger",
    "panels",
    "persistence",
    "session_info",
    "store",
    "strings",
    "tagging",
    "types",
]