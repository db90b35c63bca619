"""Loading and strict validation of the .plumbline.yml configuration file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

import yaml

DEFAULT_PATH = ".plumbline.yml"

PROFILES = ("default", "go-only", "frontend-only", "oss-cncf")

_TOP_KEYS = ("profile", "thresholds", "signals", "paths")
_THRESHOLD_KEYS = ("pass",)
_SIGNAL_KEYS = ("enabled", "args")
_PATHS_KEYS = ("ignore",)


class ConfigError(ValueError):
    """Raised when a configuration file is missing, unreadable or invalid."""


@dataclass
class Thresholds:
    """Pass threshold used to decide whether a level is achieved."""

    pass_: float = 0.0


@dataclass
class SignalConfig:
    """Per-signal settings, keyed by signal ID in Config.signals."""

    enabled: bool | None = None
    args: dict[str, Any] = field(default_factory=dict)


@dataclass
class Paths:
    """Repo-relative ignore configuration."""

    ignore: list[str] = field(default_factory=list)


@dataclass
class Config:
    """The parsed contents of a .plumbline.yml file."""

    profile: str = ""
    thresholds: Thresholds | None = None
    signals: dict[str, SignalConfig] = field(default_factory=dict)
    paths: Paths | None = None

    def disabled_signals(self) -> list[str]:
        """IDs of signals explicitly set to ``enabled: false``."""
        return [sid for sid, sc in self.signals.items() if sc.enabled is False]


def _invalid(message: str) -> ConfigError:
    return ConfigError(f"invalid .plumbline.yml: {message}")


def _check_mapping(value: Any, where: str) -> dict:
    if not isinstance(value, dict):
        raise _invalid(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def _check_keys(mapping: dict, allowed: tuple[str, ...], where: str) -> None:
    for key in mapping:
        if key not in allowed:
            raise _invalid(f"field {key} not found in {where}")


def _build_thresholds(value: Any) -> Thresholds | None:
    if value is None:
        return None
    mapping = _check_mapping(value, "thresholds")
    _check_keys(mapping, _THRESHOLD_KEYS, "thresholds")
    raw = mapping.get("pass")
    if raw is None:
        return Thresholds()
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise _invalid(f"thresholds.pass must be a number, got {raw!r}")
    return Thresholds(pass_=float(raw))


def _build_signal(sid: str, value: Any) -> SignalConfig:
    if value is None:
        return SignalConfig()
    where = f"signals.{sid}"
    mapping = _check_mapping(value, where)
    _check_keys(mapping, _SIGNAL_KEYS, where)
    enabled = mapping.get("enabled")
    if enabled is not None and not isinstance(enabled, bool):
        raise _invalid(f"{where}.enabled must be a boolean, got {enabled!r}")
    args = mapping.get("args")
    if args is None:
        args = {}
    args = dict(_check_mapping(args, f"{where}.args"))
    return SignalConfig(enabled=enabled, args=args)


def _build_signals(value: Any) -> dict[str, SignalConfig]:
    if value is None:
        return {}
    mapping = _check_mapping(value, "signals")
    return {str(sid): _build_signal(str(sid), sc) for sid, sc in mapping.items()}


def _build_paths(value: Any) -> Paths | None:
    if value is None:
        return None
    mapping = _check_mapping(value, "paths")
    _check_keys(mapping, _PATHS_KEYS, "paths")
    ignore = mapping.get("ignore")
    if ignore is None:
        return Paths()
    if not isinstance(ignore, list) or not all(isinstance(p, str) for p in ignore):
        raise _invalid("paths.ignore must be a list of strings")
    return Paths(ignore=list(ignore))


def _validate(cfg: Config) -> None:
    if cfg.profile and cfg.profile not in PROFILES:
        raise ConfigError(
            f"invalid profile {cfg.profile!r} (want one of: {', '.join(PROFILES)})"
        )
    if cfg.thresholds is not None and not 0 <= cfg.thresholds.pass_ <= 1:
        raise ConfigError(
            f"thresholds.pass = {cfg.thresholds.pass_:g} out of range [0, 1]"
        )


def parse(data: bytes | str) -> Config:
    """Parse and validate raw YAML; unknown keys are an error.

    Empty input yields a default Config rather than an error.
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise _invalid(str(exc)) from exc
    else:
        text = data
    if not text.strip():
        return Config()
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise _invalid(str(exc)) from exc
    if doc is None:
        return Config()
    top = _check_mapping(doc, "document")
    _check_keys(top, _TOP_KEYS, "config")

    profile = top.get("profile")
    if profile is None:
        profile = ""
    if not isinstance(profile, str):
        raise _invalid(f"profile must be a string, got {profile!r}")

    cfg = Config(
        profile=profile,
        thresholds=_build_thresholds(top.get("thresholds")),
        signals=_build_signals(top.get("signals")),
        paths=_build_paths(top.get("paths")),
    )
    _validate(cfg)
    return cfg


def _load_from_path(path: str | os.PathLike, require_exist: bool) -> Config | None:
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except FileNotFoundError as exc:
        if not require_exist:
            return None
        raise ConfigError(f"read config {os.fspath(path)}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"read config {os.fspath(path)}: {exc}") from exc
    return parse(data)


def load(path: str | os.PathLike) -> Config:
    """Read an explicitly named config file; a missing file is an error."""
    cfg = _load_from_path(path, require_exist=True)
    assert cfg is not None
    return cfg


def load_default(repo_root: str | os.PathLike) -> Config | None:
    """Read ``.plumbline.yml`` under repo_root, or return None if absent."""
    return _load_from_path(os.path.join(os.fspath(repo_root), DEFAULT_PATH), False)