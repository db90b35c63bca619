import json
import re

import pytest

from plumbline.schemas import get_schema, schema_names


def test_schema_names_in_documented_order():
    assert schema_names() == ["verdict", "signal-result", "event", "config"]


@pytest.mark.parametrize("name", ["verdict", "signal-result", "event", "config"])
def test_schema_contract(name):
    doc = json.loads(get_schema(name))
    assert doc["$id"].startswith("plumbline/v1/")
    assert doc["$id"] == "plumbline/v1/" + name
    assert "$schema" in doc
    assert "properties" in doc


def test_unknown_schema_raises():
    with pytest.raises(KeyError, match="unknown schema"):
        get_schema("definitely-not-a-schema")


def test_verdict_required_fields():
    doc = json.loads(get_schema("verdict"))
    assert doc["required"] == [
        "schema",
        "tool_version",
        "signal_set_version",
        "ci_system",
        "repo",
        "scanned_at",
        "verdict",
        "signals",
    ]
    assert doc["properties"]["schema"] == {"const": "plumbline/v1"}


def test_signal_result_status_enum():
    doc = json.loads(get_schema("signal-result"))
    assert doc["properties"]["status"]["enum"] == ["found", "partial", "missing", "na"]
    assert doc["properties"]["score"]["enum"] == [0.0, 0.33, 0.67, 1.0]


def test_config_signal_id_pattern():
    doc = json.loads(get_schema("config"))
    patterns = list(doc["properties"]["signals"]["patternProperties"])
    assert patterns == ["^l[2-5]\\.[a-z0-9-]+$"]
    pattern = re.compile(patterns[0])
    assert pattern.match("l2.agent-instructions")
    assert not pattern.match("l2xagent")
    assert doc["additionalProperties"] is False


def test_event_kinds():
    doc = json.loads(get_schema("event"))
    assert doc["properties"]["event"]["enum"] == [
        "scan.start",
        "signal.start",
        "signal.complete",
        "scan.complete",
    ]