import json

from plumbline import buildinfo


def test_describe_has_all_keys():
    info = buildinfo.describe()
    assert set(info) == {"version", "commit", "signal_set_version", "schema"}


def test_describe_matches_module_constants():
    info = buildinfo.describe()
    assert info["version"] == buildinfo.VERSION
    assert info["commit"] == buildinfo.COMMIT
    assert info["signal_set_version"] == buildinfo.SIGNAL_SET_VERSION
    assert info["schema"] == buildinfo.SCHEMA


def test_signal_set_and_schema_values():
    info = buildinfo.describe()
    assert info["signal_set_version"] == "v2"
    assert info["schema"] == "plumbline/v1"


def test_describe_is_json_serialisable_round_trip():
    info = buildinfo.describe()
    assert json.loads(json.dumps(info)) == info


def test_describe_returns_fresh_mapping():
    first = buildinfo.describe()
    first["version"] = "changed"
    assert buildinfo.describe()["version"] == buildinfo.VERSION