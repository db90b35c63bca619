import pytest

from plumbline.config import (
    DEFAULT_PATH,
    Config,
    ConfigError,
    Paths,
    SignalConfig,
    Thresholds,
    load,
    load_default,
    parse,
)

VALID = b"""
profile: go-only
thresholds:
  pass: 0.8
signals:
  l3.user-feedback:
    enabled: false
  l3.coverage-gate:
    enabled: true
paths:
  ignore:
    - vendor/
"""


def test_parse_valid_config():
    cfg = parse(VALID)
    assert cfg.profile == "go-only"
    assert cfg.thresholds == Thresholds(pass_=0.8)
    assert len(cfg.signals) == 2
    assert cfg.signals["l3.coverage-gate"].enabled is True
    assert cfg.paths == Paths(ignore=["vendor/"])


def test_parse_accepts_text():
    cfg = parse(VALID.decode())
    assert cfg.profile == "go-only"


def test_unknown_top_level_key_is_error():
    with pytest.raises(ConfigError) as info:
        parse(b"profile: default\ntypo_at_top_level: oops\n")
    assert "typo_at_top_level" in str(info.value)


def test_unknown_signal_key_is_error():
    data = b"signals:\n  l3.coverage-gate:\n    enabled: true\n    unknown_arg: bad\n"
    with pytest.raises(ConfigError) as info:
        parse(data)
    assert "unknown_arg" in str(info.value)


def test_unknown_threshold_key_is_error():
    with pytest.raises(ConfigError):
        parse(b"thresholds:\n  fail: 0.2\n")


def test_invalid_profile_rejected():
    with pytest.raises(ConfigError) as info:
        parse(b"profile: invented-profile")
    assert "invented-profile" in str(info.value)


def test_threshold_out_of_range_rejected():
    with pytest.raises(ConfigError) as info:
        parse(b"thresholds:\n  pass: 1.5\n")
    assert "out of range" in str(info.value)


def test_threshold_wrong_type_rejected():
    with pytest.raises(ConfigError):
        parse(b"thresholds:\n  pass: yes\n")


def test_enabled_wrong_type_rejected():
    with pytest.raises(ConfigError):
        parse(b"signals:\n  l3.x:\n    enabled: sometimes\n")


def test_malformed_yaml_rejected():
    with pytest.raises(ConfigError) as info:
        parse(b"profile: [unclosed\n")
    assert "invalid .plumbline.yml" in str(info.value)


@pytest.mark.parametrize("data", [b"", b"   \n\t\n", ""])
def test_empty_config_ok(data):
    assert parse(data) == Config()


def test_signal_args_kept():
    cfg = parse(b"signals:\n  l3.x:\n    args:\n      depth: 3\n")
    assert cfg.signals["l3.x"] == SignalConfig(enabled=None, args={"depth": 3})


def test_load_missing_file_is_error_when_explicit(tmp_path):
    with pytest.raises(ConfigError):
        load(tmp_path / "nope.yml")


def test_load_default_missing_file_returns_none(tmp_path):
    assert load_default(tmp_path) is None


def test_load_default_picks_up_file_at_root(tmp_path):
    (tmp_path / DEFAULT_PATH).write_text("profile: default\n")
    cfg = load_default(tmp_path)
    assert cfg is not None
    assert cfg.profile == "default"


def test_load_default_propagates_unknown_key(tmp_path):
    (tmp_path / DEFAULT_PATH).write_text("typo_at_top_level: oops\n")
    with pytest.raises(ConfigError) as info:
        load_default(tmp_path)
    assert "typo_at_top_level" in str(info.value)


def test_load_default_disabled_signal(tmp_path):
    (tmp_path / DEFAULT_PATH).write_text(
        "signals:\n  l3.user-feedback:\n    enabled: false\n"
    )
    cfg = load_default(tmp_path)
    assert cfg.disabled_signals() == ["l3.user-feedback"]


def test_disabled_signals_returns_only_explicitly_disabled():
    cfg = Config(
        signals={
            "l3.user-feedback": SignalConfig(enabled=False),
            "l3.coverage-gate": SignalConfig(enabled=True),
            "l4.flake-recovery": SignalConfig(),
        }
    )
    assert cfg.disabled_signals() == ["l3.user-feedback"]


def test_disabled_signals_empty_config():
    assert Config().disabled_signals() == []