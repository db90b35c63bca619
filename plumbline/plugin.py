"""External signal plugins.

A plugin is an executable that prints ``signal-result`` JSON objects on
stdout when run as ``<path> --repo <repoRoot> --json``. Output may be a
single object, NDJSON (one object per line) or a top-level JSON array.
The plugin's binary can be pinned by its SHA-256 digest.
"""

from __future__ import annotations

import hashlib
import json
import os
import subprocess
from dataclasses import dataclass, field
from typing import Any

STATUS_MISSING = "missing"
SCORE_MISSING = 0.0
CONFIDENCE_LOW = "low"
METHOD_FILENAME = "filename"


class PluginError(Exception):
    """Raised when a plugin cannot be parsed, verified, run or understood."""


@dataclass
class Evidence:
    """A file that supports a signal's result, with an optional line span."""

    path: str
    start: int | None = None
    end: int | None = None
    excerpt: str = ""


@dataclass
class Result:
    """What a detector reports about one signal."""

    status: str = ""
    score: float = 0.0
    confidence: str = ""
    method: str = ""
    evidence: list[Evidence] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    fix_hint: str = ""
    diag: list[dict[str, Any]] = field(default_factory=list)


def _expect(value: Any, kinds: type | tuple[type, ...], name: str, default: Any) -> Any:
    if value is None:
        return default
    if isinstance(value, bool) and bool not in (
        kinds if isinstance(kinds, tuple) else (kinds,)
    ):
        raise PluginError(f"field {name!r}: expected {kinds}, got bool")
    if not isinstance(value, kinds):
        raise PluginError(
            f"field {name!r}: expected {kinds}, got {type(value).__name__}"
        )
    return value


def _evidence_from(item: Any) -> Evidence:
    if not isinstance(item, dict):
        raise PluginError("field 'evidence': entries must be objects")
    span = _expect(item.get("span"), dict, "evidence.span", {})
    return Evidence(
        path=_expect(item.get("path"), str, "evidence.path", ""),
        start=_expect(span.get("start"), int, "evidence.span.start", None),
        end=_expect(span.get("end"), int, "evidence.span.end", None),
        excerpt=_expect(item.get("excerpt"), str, "evidence.excerpt", ""),
    )


@dataclass
class SignalResult:
    """A full signal-result document: signal metadata plus its Result."""

    id: str = ""
    level: int = 0
    family: str = ""
    title: str = ""
    status: str = ""
    score: float = 0.0
    confidence: str = ""
    method: str = ""
    evidence: list[Evidence] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    fix_hint: str = ""
    diag: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "SignalResult":
        """Build from a decoded JSON object; unknown keys are ignored."""
        if not isinstance(data, dict):
            raise PluginError(
                f"signal-result must be a JSON object, got {type(data).__name__}"
            )
        evidence = _expect(data.get("evidence"), list, "evidence", [])
        notes = _expect(data.get("notes"), list, "notes", [])
        if not all(isinstance(n, str) for n in notes):
            raise PluginError("field 'notes': entries must be strings")
        diag = _expect(data.get("diag"), list, "diag", [])
        if not all(isinstance(d, dict) for d in diag):
            raise PluginError("field 'diag': entries must be objects")
        return cls(
            id=_expect(data.get("id"), str, "id", ""),
            level=_expect(data.get("level"), int, "level", 0),
            family=_expect(data.get("family"), str, "family", ""),
            title=_expect(data.get("title"), str, "title", ""),
            status=_expect(data.get("status"), str, "status", ""),
            score=float(_expect(data.get("score"), (int, float), "score", 0.0)),
            confidence=_expect(data.get("confidence"), str, "confidence", ""),
            method=_expect(data.get("method"), str, "method", ""),
            evidence=[_evidence_from(e) for e in evidence],
            notes=list(notes),
            fix_hint=_expect(data.get("fix_hint"), str, "fix_hint", ""),
            diag=[dict(d) for d in diag],
        )

    def to_result(self) -> Result:
        """The Result half of this document, without signal metadata."""
        return Result(
            status=self.status,
            score=self.score,
            confidence=self.confidence,
            method=self.method,
            evidence=list(self.evidence),
            notes=list(self.notes),
            fix_hint=self.fix_hint,
            diag=list(self.diag),
        )


@dataclass(frozen=True)
class Spec:
    """A plugin executable and, optionally, the SHA-256 it must match."""

    path: str
    sha256: str = ""


def parse_spec(text: str) -> Spec:
    """Parse ``<path>`` or ``<path>@<sha256>``."""
    if not text:
        raise PluginError("plugin spec is empty")
    if "@" in text:
        path, _, sha = text.partition("@")
        if not path or not sha:
            raise PluginError(f"plugin spec {text!r}: empty path or sha256")
        return Spec(path=path, sha256=sha)
    return Spec(path=text)


def verify_checksum(spec: Spec) -> None:
    """Check the file's SHA-256 against the pinned digest, if any."""
    if not spec.sha256:
        return
    digest = hashlib.sha256()
    try:
        with open(spec.path, "rb") as fh:
            for chunk in iter(lambda: fh.read(65536), b""):
                digest.update(chunk)
    except OSError as exc:
        raise PluginError(f"plugin {spec.path}: open: {exc}") from exc
    got = digest.hexdigest()
    if got.lower() != spec.sha256.lower():
        raise PluginError(
            f"plugin {spec.path}: sha256 mismatch (want {spec.sha256}, got {got})"
        )


def parse_signal_results(text: str) -> list[SignalResult]:
    """Parse a JSON array, a single object or NDJSON into signal results."""
    text = text.strip()
    if not text:
        raise PluginError("plugin produced no output")
    if text.startswith("["):
        try:
            items = json.loads(text)
            if not isinstance(items, list):
                raise PluginError("expected a JSON array")
            return [SignalResult.from_dict(item) for item in items]
        except (ValueError, PluginError) as exc:
            raise PluginError(
                f"plugin output not a valid signal-result array: {exc}"
            ) from exc
    results = []
    for number, line in enumerate(text.split("\n"), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            results.append(SignalResult.from_dict(json.loads(line)))
        except (ValueError, PluginError) as exc:
            raise PluginError(
                f"plugin output line {number} not valid signal-result JSON: {exc}"
            ) from exc
    return results


def _error_result(signal_id: str, message: str) -> Result:
    return Result(
        status=STATUS_MISSING,
        score=SCORE_MISSING,
        confidence=CONFIDENCE_LOW,
        method=METHOD_FILENAME,
        notes=[f"plugin error ({signal_id}): {message}"],
    )


class Plugin:
    """A signal backed by an external executable.

    Its metadata (id, level, family, title) comes from the first result
    the plugin emits when probed by :func:`load`.
    """

    def __init__(self, spec: Spec) -> None:
        self.spec = spec
        self.id = ""
        self.level = 0
        self.family = ""
        self.title = ""
        self.probe_ok = False

    def __repr__(self) -> str:
        return f"Plugin(path={self.spec.path!r}, id={self.id!r})"

    def _invoke(self, repo_root: str) -> list[SignalResult]:
        try:
            proc = subprocess.run(
                [self.spec.path, "--repo", repo_root, "--json"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise PluginError(str(exc)) from exc
        if proc.returncode != 0:
            raise PluginError(
                f"exit status {proc.returncode} (stderr: {proc.stderr.strip()})"
            )
        return parse_signal_results(proc.stdout)

    def detect(self, repo_root: str | os.PathLike | None) -> Result:
        """Run the plugin and return the result for its registered ID.

        Failures are reported as a missing result with the reason in notes.
        """
        if not self.probe_ok:
            return _error_result(self.id, "plugin not loaded; call load first")
        root = os.fspath(repo_root) if repo_root is not None else ""
        try:
            results = self._invoke(root)
        except PluginError as exc:
            return _error_result(self.id, str(exc))
        for result in results:
            if result.id == self.id:
                return result.to_result()
        return _error_result(
            self.id,
            f"plugin {self.spec.path} did not emit signal-result for {self.id!r}",
        )


def load(spec: Spec, repo_root: str | os.PathLike) -> Plugin:
    """Verify and probe a plugin, capturing its advertised metadata."""
    if not spec.path:
        raise PluginError("plugin: empty path")
    verify_checksum(spec)
    plugin = Plugin(spec)
    try:
        results = plugin._invoke(os.fspath(repo_root))
    except PluginError as exc:
        raise PluginError(f"plugin probe {spec.path}: {exc}") from exc
    if not results:
        raise PluginError(f"plugin {spec.path} emitted no signal-result on probe")
    first = results[0]
    if not first.id:
        raise PluginError(f"plugin {spec.path}: first signal-result has empty id")
    plugin.id = first.id
    plugin.level = first.level
    plugin.family = first.family
    plugin.title = first.title
    plugin.probe_ok = True
    return plugin