from __future__ import annotations

import pytest

from etcd_clientconfig.env import ENV_VARS, load_settings, parse_bool
from etcd_clientconfig.errors import ConflictingSourceError, FileEncodingError, FileReadError


def test_recognised_variables_in_order():
    assert ENV_VARS == (
        "ETCD_ENDPOINTS",
        "ETCD_USERNAME",
        "ETCD_PASSWORD",
        "ETCD_USERNAME_AND_PASSWORD",
        "ETCD_INSECURE_SKIP_VERIFY",
        "ETCD_SERVER_CA",
        "ETCD_CLIENT_CERT",
        "ETCD_CLIENT_KEY",
    )


def test_unknown_and_empty_variables_are_ignored():
    env = {"ETCD_ENDPOINTS": "", "ETCD_USERNAME": "bob", "ETCD_OTHER": "x", "HOME": "/root"}
    assert load_settings(env) == {"ETCD_USERNAME": "bob"}


@pytest.mark.parametrize("name", ENV_VARS)
def test_direct_and_file_conflict(name):
    env = {name: "value", f"{name}_FILE": "/does/not/matter"}
    with pytest.raises(ConflictingSourceError) as ei:
        load_settings(env)
    assert ei.value.name == name
    assert str(ei.value) == f"conflicting value for {name}: both {name} and {name}_FILE are set"


def test_empty_direct_value_does_not_conflict(tmp_path):
    f = tmp_path / "user"
    f.write_text("alice")
    env = {"ETCD_USERNAME": "", "ETCD_USERNAME_FILE": str(f)}
    assert load_settings(env) == {"ETCD_USERNAME": "alice"}


def test_file_contents_are_kept_verbatim(tmp_path):
    f = tmp_path / "password"
    f.write_bytes(b"s3cret\r\n")
    assert load_settings({"ETCD_PASSWORD_FILE": str(f)}) == {"ETCD_PASSWORD": "s3cret\r\n"}


def test_empty_file_counts_as_unset(tmp_path):
    f = tmp_path / "empty"
    f.write_text("")
    assert load_settings({"ETCD_ENDPOINTS_FILE": str(f)}) == {}


def test_missing_file_names_path_and_variable(tmp_path):
    missing = tmp_path / "nope"
    with pytest.raises(FileReadError) as ei:
        load_settings({"ETCD_SERVER_CA_FILE": str(missing)})
    msg = str(ei.value)
    assert str(missing) in msg
    assert "ETCD_SERVER_CA_FILE" in msg
    assert isinstance(ei.value.__cause__, OSError)


def test_non_utf8_file_is_an_encoding_error(tmp_path):
    f = tmp_path / "password"
    f.write_bytes(b"p\xe4ss")
    with pytest.raises(FileEncodingError) as ei:
        load_settings({"ETCD_PASSWORD_FILE": str(f)})
    assert not isinstance(ei.value, FileReadError)
    assert "not valid UTF-8" in str(ei.value)
    assert str(f) in str(ei.value)
    assert "ETCD_PASSWORD_FILE" in str(ei.value)
    assert isinstance(ei.value.__cause__, UnicodeDecodeError)


def test_defaults_to_process_environment(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(f"{name}_FILE", raising=False)
    monkeypatch.setenv("ETCD_ENDPOINTS", "localhost:2379")
    assert load_settings() == {"ETCD_ENDPOINTS": "localhost:2379"}


@pytest.mark.parametrize("raw", ["1", "t", "T", "TRUE", "true", "True"])
def test_parse_bool_true(raw):
    assert parse_bool(raw) is True


@pytest.mark.parametrize("raw", ["0", "f", "F", "FALSE", "false", "False"])
def test_parse_bool_false(raw):
    assert parse_bool(raw) is False


@pytest.mark.parametrize("raw", ["yes", "no", "tRuE", " true", "notabool"])
def test_parse_bool_rejects(raw):
    with pytest.raises(ValueError):
        parse_bool(raw)
