import hashlib
import os

import pytest

from plumbline.plugin import (
    Plugin,
    PluginError,
    SignalResult,
    Spec,
    load,
    parse_signal_results,
    parse_spec,
    verify_checksum,
)

GOOD_OUTPUT = (
    '{"id":"x.demo","level":3,"family":"custom","title":"Demo plugin",'
    '"status":"missing","score":0,"confidence":"medium","method":"filename"}'
)


def write_plugin(directory, stdout, name="plugin.sh"):
    path = directory / name
    path.write_text("#!/bin/sh\ncat <<'EOF'\n" + stdout + "\nEOF\n")
    os.chmod(path, 0o755)
    return str(path)


def write_script(directory, body, name="script.sh"):
    path = directory / name
    path.write_text("#!/bin/sh\n" + body)
    os.chmod(path, 0o755)
    return str(path)


def test_load_parses_first_result(tmp_path):
    p = load(Spec(path=write_plugin(tmp_path, GOOD_OUTPUT)), "/repo")
    assert p.id == "x.demo"
    assert p.level == 3
    assert p.family == "custom"
    assert p.title == "Demo plugin"
    assert p.probe_ok is True


def test_load_passes_repo_argument(tmp_path):
    path = write_script(
        tmp_path, 'printf \'{"id":"x.arg","title":"%s %s"}\\n\' "$2" "$3"\n'
    )
    p = load(Spec(path=path), "/some/repo")
    assert p.title == "/some/repo --json"


def test_load_rejects_empty_output(tmp_path):
    with pytest.raises(PluginError):
        load(Spec(path=write_plugin(tmp_path, "")), "/repo")


def test_load_rejects_bad_json(tmp_path):
    with pytest.raises(PluginError):
        load(Spec(path=write_plugin(tmp_path, "this is not json")), "/repo")


def test_load_rejects_empty_id(tmp_path):
    path = write_plugin(tmp_path, '{"level":3}')
    with pytest.raises(PluginError, match="empty id"):
        load(Spec(path=path), "/repo")


def test_load_rejects_empty_path():
    with pytest.raises(PluginError, match="empty path"):
        load(Spec(path=""), "/repo")


def test_load_verifies_sha256(tmp_path):
    path = write_plugin(tmp_path, GOOD_OUTPUT)
    with pytest.raises(PluginError, match="sha256 mismatch"):
        load(Spec(path=path, sha256="0" * 64), "/repo")

    with open(path, "rb") as fh:
        correct = hashlib.sha256(fh.read()).hexdigest()
    p = load(Spec(path=path, sha256=correct.upper()), "/repo")
    assert p.id == "x.demo"


def test_verify_checksum_missing_file(tmp_path):
    with pytest.raises(PluginError, match="open"):
        verify_checksum(Spec(path=str(tmp_path / "nope"), sha256="ab"))


def test_detect_returns_matching_result(tmp_path):
    p = load(Spec(path=write_plugin(tmp_path, GOOD_OUTPUT)), "/repo")
    got = p.detect(None)
    assert got.status == "missing"
    assert got.confidence == "medium"
    assert got.method == "filename"


def test_detect_without_load_reports_missing(tmp_path):
    p = Plugin(Spec(path=write_plugin(tmp_path, GOOD_OUTPUT)))
    got = p.detect("/repo")
    assert got.status == "missing"
    assert got.confidence == "low"
    assert "not loaded" in got.notes[0]


def test_detect_failure_after_load_surfaces_as_missing(tmp_path):
    path = write_plugin(tmp_path, GOOD_OUTPUT)
    p = load(Spec(path=path), "/repo")
    os.remove(path)
    got = p.detect("/repo")
    assert got.status == "missing"
    assert got.score == 0.0
    assert got.notes[0].startswith("plugin error (x.demo):")


def test_crashing_plugin_fails_load(tmp_path):
    path = write_script(tmp_path, 'echo "oops" >&2\nexit 1\n', "broken.sh")
    with pytest.raises(PluginError, match="plugin probe") as info:
        load(Spec(path=path), "/repo")
    assert "oops" in str(info.value)


def test_parse_signal_results_ndjson():
    got = parse_signal_results(
        '{"id":"a","status":"found"}\n{"id":"b","status":"missing"}\n'
    )
    assert [r.id for r in got] == ["a", "b"]
    assert [r.status for r in got] == ["found", "missing"]


def test_parse_signal_results_top_level_array():
    got = parse_signal_results(
        '[{"id":"a","status":"found"},{"id":"b","status":"missing"}]'
    )
    assert len(got) == 2


def test_parse_signal_results_reports_line_number():
    with pytest.raises(PluginError, match="line 2"):
        parse_signal_results('{"id":"a"}\nnot json\n')


def test_parse_signal_results_empty():
    with pytest.raises(PluginError, match="no output"):
        parse_signal_results("   \n")


def test_signal_result_from_dict_carries_fields():
    sr = SignalResult.from_dict(
        {
            "id": "x.demo",
            "level": 3,
            "score": 0.67,
            "fix_hint": "add a thing",
            "evidence": [{"path": "a.md", "span": {"start": 1, "end": 4}}],
            "notes": ["n"],
            "unknown": True,
        }
    )
    result = sr.to_result()
    assert result.fix_hint == "add a thing"
    assert result.score == 0.67
    assert result.evidence[0].path == "a.md"
    assert (result.evidence[0].start, result.evidence[0].end) == (1, 4)
    assert result.notes == ["n"]


def test_signal_result_from_dict_rejects_bad_types():
    with pytest.raises(PluginError):
        SignalResult.from_dict({"id": "x", "level": "three"})
    with pytest.raises(PluginError):
        SignalResult.from_dict(["not", "an", "object"])


def test_parse_spec_path_only():
    assert parse_spec("/usr/local/bin/myplugin") == Spec(path="/usr/local/bin/myplugin")


def test_parse_spec_path_at_sha():
    got = parse_spec("/p@abc123")
    assert got.path == "/p"
    assert got.sha256 == "abc123"


def test_parse_spec_empty():
    with pytest.raises(PluginError):
        parse_spec("")


@pytest.mark.parametrize("text", ["@deadbeef", "/path@"])
def test_parse_spec_partial_at(text):
    with pytest.raises(PluginError, match="empty path or sha256"):
        parse_spec(text)