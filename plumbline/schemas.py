"""Published JSON Schemas (draft 2020-12) for plumbline's public output types."""

from __future__ import annotations

import json
from typing import Any

_DRAFT = "https://json-schema.org/draft/2020-12/schema"
_PREFIX = "plumbline/v1/"

_STATUSES = ["found", "partial", "missing", "na"]
_CONFIDENCES = ["low", "medium", "high"]
_METHODS = ["filename", "content-regex", "ast", "cross-file"]
_SCORES = [0.0, 0.33, 0.67, 1.0]
_PROFILES = ["default", "go-only", "frontend-only", "oss-cncf"]
_EVENTS = ["scan.start", "signal.start", "signal.complete", "scan.complete"]
_DIAG_ACTIONS = ["stat", "read", "regex", "ast-query"]


def _string(**extra: Any) -> dict[str, Any]:
    return {"type": "string", **extra}


def _integer(minimum: int, maximum: int | None = None) -> dict[str, Any]:
    out: dict[str, Any] = {"type": "integer", "minimum": minimum}
    if maximum is not None:
        out["maximum"] = maximum
    return out


def _unit_interval() -> dict[str, Any]:
    return {"type": "number", "minimum": 0, "maximum": 1}


def _array_of(items: dict[str, Any]) -> dict[str, Any]:
    return {"type": "array", "items": items}


def _object(properties: dict[str, Any], **extra: Any) -> dict[str, Any]:
    return {"type": "object", **extra, "properties": properties}


def _document(name: str, title: str, body: dict[str, Any], **extra: Any) -> dict[str, Any]:
    return {"$schema": _DRAFT, "$id": _PREFIX + name, "title": title, **extra, **body}


_LEVEL = _integer(1, 5)

_VERDICT = _document(
    "verdict",
    "Verdict",
    _object(
        {
            "schema": {"const": "plumbline/v1"},
            "tool_version": _string(),
            "signal_set_version": _string(examples=["v1"]),
            "ci_system": _string(enum=["github-actions", "auto"]),
            "repo": _string(description="Absolute path to the scanned repository"),
            "scanned_at": _string(format="date-time"),
            "verdict": _object(
                {
                    "level": _LEVEL,
                    "name": _string(),
                    "level_scores": {
                        "type": "object",
                        "patternProperties": {"^[2-5]$": _unit_interval()},
                    },
                    "next_gap": _array_of(_string()),
                    "min_confidence_applied": _string(enum=_CONFIDENCES),
                },
                required=["level", "name", "level_scores", "next_gap", "min_confidence_applied"],
            ),
            "signals": _array_of({"$ref": _PREFIX + "signal-result"}),
        },
        required=[
            "schema",
            "tool_version",
            "signal_set_version",
            "ci_system",
            "repo",
            "scanned_at",
            "verdict",
            "signals",
        ],
    ),
)

_EVIDENCE = _object(
    {
        "path": _string(),
        "span": _object({"start": _integer(1), "end": _integer(1)}),
        "excerpt": _string(),
    },
    required=["path"],
)

_DIAG = _object(
    {
        "path": _string(),
        "action": _string(enum=_DIAG_ACTIONS),
        "hit": {"type": "boolean"},
        "detail": _string(),
    },
    required=["path", "action", "hit"],
)

_SIGNAL_RESULT = _document(
    "signal-result",
    "SignalResult",
    _object(
        {
            "id": _string(examples=["l2.agent-instructions"]),
            "level": _LEVEL,
            "family": _string(),
            "title": _string(),
            "status": _string(enum=_STATUSES),
            "score": {"type": "number", "enum": _SCORES},
            "confidence": _string(enum=_CONFIDENCES),
            "method": _string(enum=_METHODS),
            "evidence": _array_of(_EVIDENCE),
            "notes": _array_of(_string()),
            "fix_hint": _string(
                description="Short prose recipe for how to move this signal toward Found."
            ),
            "diag": _array_of(_DIAG),
        },
        required=["id", "level", "family", "status", "score", "confidence", "method"],
    ),
)

_EVENT = _document(
    "event",
    "Event",
    _object(
        {
            "event": _string(enum=_EVENTS),
            "ts": _string(format="date-time"),
            "repo": _string(),
            "signal_count": _integer(0),
            "id": _string(),
            "status": _string(enum=_STATUSES),
            "score": {"type": "number"},
            "duration_ms": _integer(0),
            "level": _LEVEL,
        },
        required=["event", "ts"],
    ),
    description="One NDJSON event line emitted by 'assess --events ndjson' to stderr.",
)

_THRESHOLD_PROPERTIES: dict[str, Any] = dict.fromkeys(["pass"])
_THRESHOLD_PROPERTIES.update((key, _unit_interval()) for key in list(_THRESHOLD_PROPERTIES))

_CONFIG = _document(
    "config",
    "Config",
    _object(
        {
            "profile": _string(enum=_PROFILES),
            "thresholds": _object(
                _THRESHOLD_PROPERTIES,
                additionalProperties=False,
            ),
            "signals": {
                "type": "object",
                "patternProperties": {
                    r"^l[2-5]\.[a-z0-9-]+$": _object(
                        {"enabled": {"type": "boolean"}, "args": {"type": "object"}},
                        additionalProperties=False,
                    )
                },
            },
            "paths": _object(
                {"ignore": _array_of(_string())},
                additionalProperties=False,
            ),
        },
        additionalProperties=False,
    ),
    description=".plumbline.yml schema",
)

_SCHEMAS: dict[str, dict[str, Any]] = {
    "verdict": _VERDICT,
    "signal-result": _SIGNAL_RESULT,
    "event": _EVENT,
    "config": _CONFIG,
}


def schema_names() -> list[str]:
    """Names of the published schemas, in documentation order."""
    return list(_SCHEMAS)


def get_schema(name: str) -> str:
    """Return the JSON text of a schema; unknown names raise KeyError."""
    try:
        doc = _SCHEMAS[name]
    except KeyError:
        raise KeyError(
            f"unknown schema {name!r} (available: {', '.join(_SCHEMAS)})"
        ) from None
    return json.dumps(doc, indent=2, ensure_ascii=False) + "\n"