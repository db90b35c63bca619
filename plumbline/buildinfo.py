"""Release metadata for the plumbline tool."""

from __future__ import annotations

VERSION = "dev"
COMMIT = "unknown"

# The current frozen signal-set version. v1 -> v2 merged l2.claude-md and
# l2.copilot-instructions into l2.agent-instructions; the old IDs remain
# valid as deprecation aliases.
SIGNAL_SET_VERSION = "v2"

# Top-level $id prefix for the published JSON Schemas.
SCHEMA = "plumbline/v1"


def describe() -> dict[str, str]:
    """Return the build metadata as a JSON-ready mapping."""
    return {
        "version": VERSION,
        "commit": COMMIT,
        "signal_set_version": SIGNAL_SET_VERSION,
        "schema": SCHEMA,
    }