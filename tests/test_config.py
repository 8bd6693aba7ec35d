"""Tests for the dict/YAML config loader."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from urlhash import create_hasher, create_redactor, load_config, load_from_yaml


def test_load_config_nested_with_preset():
    cfg = load_config({"urlhash": {"salt": "mysalt", "presets": ["openshift"], "allow_list": ["example"]}})
    assert cfg["salt"] == "mysalt"
    assert {"com", "openshift", "example"} <= cfg["allow_list"]
    assert cfg["enabled"] is True
    assert cfg["use_presidio"] is False


def test_load_config_is_idempotent():
    cfg = load_config({"salt": "s", "presets": ["openshift"]})
    assert load_config(cfg) == cfg


def test_unknown_preset_rejected():
    with pytest.raises(ValueError, match="unknown allow-list preset"):
        load_config({"presets": ["nope"]})


def test_salt_from_environment(monkeypatch):
    monkeypatch.setenv("URLHASH_SALT", "mysalt")
    assert create_hasher({}).hash("127.0.0.1") == "a1f.6a3.6a3.024"


def test_salt_env_name_configurable(monkeypatch):
    monkeypatch.delenv("URLHASH_SALT", raising=False)
    monkeypatch.setenv("APP_HASH_SALT", "mysalt")
    assert create_hasher({"salt_env": "APP_HASH_SALT"}).hash("127.0.0.1") == "a1f.6a3.6a3.024"


def test_explicit_salt_wins_over_environment(monkeypatch):
    monkeypatch.setenv("URLHASH_SALT", "mysalt")
    assert create_hasher({"salt": ""}).hash("127.0.0.1") == "04c.7e9.7e9.b4b"


def test_disabled_redactor_passes_through():
    redactor = create_redactor({"enabled": False})
    assert redactor.redact_text("from 10.0.0.7") == "from 10.0.0.7"
    assert redactor.redact("from 10.0.0.7").matches == []


def test_create_redactor_applies_settings():
    redactor = create_redactor({"salt": "", "presets": ["openshift"], "skip_kinds": ["IPV4"]})
    out = redactor.redact_text("https://my.customer.com from 10.0.0.7")
    assert out == "https://05.ee8ca6dd.com from 10.0.0.7"


def test_load_from_yaml(tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "urlhash.yaml"
    path.write_text(
        "urlhash:\n"
        "  salt: mysalt\n"
        "  presets:\n"
        "    - openshift\n"
        "  preserve:\n"
        "    - 127.0.0.1\n"
    )
    cfg = load_from_yaml(path)
    assert cfg["salt"] == "mysalt"
    assert "openshift" in cfg["allow_list"]
    assert cfg["preserve"] == {"127.0.0.1"}
    assert create_hasher(cfg).hash("http://my.openshift.api.console.customer.com") == (
        "http://5a.openshift.api.console.d6474651.com"
    )


def test_scalar_values_are_single_items():
    cfg = load_config({"allow_list": "com", "presets": "openshift", "skip_kinds": "PATH", "preserve": "10.0.0.7"})
    assert "com" in cfg["allow_list"]
    assert "c" not in cfg["allow_list"]
    assert "openshift" in cfg["allow_list"]
    assert cfg["skip_kinds"] == {"PATH"}
    assert cfg["preserve"] == {"10.0.0.7"}
    assert create_hasher({"salt": "", "allow_list": "com"}).hash("my.customer.com") == "05.ee8ca6dd.com"
