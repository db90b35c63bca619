"""Execution of fix plans against a target repository.

This is the only place that writes inside a target repo. Rules:
paths must be relative and stay inside the repo root; create-file never
overwrites; append-file requires an existing file; dry runs touch nothing;
unknown operation kinds are rejected.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from typing import Any


class FixError(Exception):
    """Raised when a fix plan cannot be applied safely."""


class FixOpKind(str, enum.Enum):
    """The kinds of file operation a fix plan may contain."""

    CREATE_FILE = "create-file"
    APPEND_FILE = "append-file"

    def __str__(self) -> str:
        return self.value


@dataclass
class FixOp:
    """One file operation: a kind, a repo-relative path and a body."""

    kind: FixOpKind | str
    path: str
    body: bytes = b""

    def __post_init__(self) -> None:
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")


@dataclass
class FixPlan:
    """An ordered list of operations scaffolding a fix for one signal."""

    signal_id: str = ""
    summary: str = ""
    ops: list[FixOp] = field(default_factory=list)


@dataclass
class OpResult:
    """Outcome of one operation."""

    kind: FixOpKind
    path: str
    wrote: bool = False
    size: int = 0
    existed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "path": self.path,
            "wrote": self.wrote,
            "bytes": self.size,
            "existed": self.existed,
        }


@dataclass
class ApplyResult:
    """Per-operation outcomes of an apply call."""

    operations: list[OpResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {"operations": [op.to_dict() for op in self.operations]}


def _safe_path(root: str, rel: str) -> str:
    if not rel:
        raise FixError("invalid path: empty")
    if os.path.isabs(rel):
        raise FixError(f"invalid path {rel!r}: absolute paths not allowed")
    clean = os.path.normpath(rel)
    parent = os.sep + ".." + os.sep
    if clean.startswith("..") or parent in clean:
        raise FixError(f"invalid path {rel!r}: escape outside repo root")
    resolved = os.path.normpath(os.path.join(root, clean))
    root_abs = os.path.abspath(root)
    if resolved != root_abs and not resolved.startswith(root_abs + os.sep):
        raise FixError(f"invalid path {rel!r}: resolves outside repo root")
    return resolved


def _create(op: FixOp, result: OpResult, dry_run: bool) -> OpResult:
    target = result.path
    try:
        os.stat(target)
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise FixError(f"create-file: stat {op.path!r}: {exc}") from exc
    else:
        raise FixError(
            f"create-file: {op.path!r} already exists; refusing to overwrite. "
            "Remove it manually first or use append"
        )
    if dry_run:
        return result
    try:
        os.makedirs(os.path.dirname(target), exist_ok=True)
    except OSError as exc:
        raise FixError(f"create-file: mkdir parents of {op.path!r}: {exc}") from exc
    try:
        with open(target, "wb") as fh:
            fh.write(op.body)
    except OSError as exc:
        raise FixError(f"create-file: write {op.path!r}: {exc}") from exc
    result.wrote = True
    return result


def _append(op: FixOp, result: OpResult, dry_run: bool) -> OpResult:
    target = result.path
    if not os.path.exists(target):
        raise FixError(
            f"append-file: {op.path!r} does not exist "
            "(use create-file or pre-create the file)"
        )
    if os.path.isdir(target):
        raise FixError(f"append-file: {op.path!r} is a directory")
    result.existed = True
    if dry_run:
        return result
    try:
        with open(target, "ab") as fh:
            # Keep the appended block separate from existing content.
            fh.write(b"\n")
            fh.write(op.body)
    except OSError as exc:
        raise FixError(f"append-file: write {op.path!r}: {exc}") from exc
    result.wrote = True
    return result


def _apply_op(root: str, op: FixOp, dry_run: bool) -> OpResult:
    target = _safe_path(root, op.path)
    try:
        kind = FixOpKind(op.kind)
    except ValueError:
        raise FixError(
            f"unknown FixOpKind {str(op.kind)!r} (allowed: create-file, append-file)"
        ) from None
    result = OpResult(kind=kind, path=target, size=len(op.body))
    if kind is FixOpKind.CREATE_FILE:
        return _create(op, result, dry_run)
    return _append(op, result, dry_run)


def apply(
    repo_root: str | os.PathLike, plan: FixPlan, dry_run: bool = False
) -> ApplyResult:
    """Execute plan under repo_root, an absolute path to an existing directory."""
    root = os.fspath(repo_root)
    if not os.path.isabs(root):
        raise FixError(f"repoRoot must be absolute, got {root!r}")
    try:
        is_dir = os.path.isdir(root) if os.stat(root) else False
    except OSError as exc:
        raise FixError(f"repoRoot {root!r}: {exc}") from exc
    if not is_dir:
        raise FixError(f"repoRoot {root!r} is not a directory")

    return ApplyResult(operations=[_apply_op(root, op, dry_run) for op in plan.ops])