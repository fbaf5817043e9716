"""Tests for esclient.config covering secrets loading and environment overrides.

Run with coverage:
    pytest tests/test_config.py --maxfail=1 -v --cov=esclient.config --cov-report=term-missing
"""

import json

from esclient import config


def test_defaults_without_secrets_or_env(tmp_path):
    settings = config.resolve_settings(tmp_path / "missing.json", env={})
    assert settings == config.ClientSettings()
    assert settings.es_url == config.DEFAULT_ES_URL
    assert settings.timeout == config.DEFAULT_TIMEOUT


def test_secrets_file_section_is_used(tmp_path):
    secrets = tmp_path / "local_secrets.json"
    secrets.write_text(json.dumps({
        "elasticsearch": {"url": "https://es:9243", "api_key": "abc", "verify_tls": False, "timeout": 10}
    }))
    settings = config.resolve_settings(secrets, env={})
    assert settings.es_url == "https://es:9243"
    assert settings.api_key == "abc"
    assert settings.verify_tls is False
    assert settings.timeout == 10.0


def test_environment_overrides_secrets(tmp_path):
    secrets = tmp_path / "local_secrets.json"
    secrets.write_text(json.dumps({"elasticsearch": {"url": "https://es:9243", "username": "file"}}))
    env = {
        "ES_URL": "http://override:9200",
        "ES_USERNAME": "user",
        "ES_PASSWORD": "pass",
        "ES_VERIFY_TLS": "false",
        "ES_REQUEST_TIMEOUT": "2.5",
        "ES_HTTP_COMPRESS": "0",
    }
    settings = config.resolve_settings(secrets, env=env)
    assert settings.es_url == "http://override:9200"
    assert settings.username == "user"
    assert settings.password == "pass"
    assert settings.verify_tls is False
    assert settings.timeout == 2.5
    assert settings.compress is False


def test_secrets_path_from_environment_variable(tmp_path, monkeypatch):
    secrets = tmp_path / "other.json"
    secrets.write_text(json.dumps({"elasticsearch": {"url": "http://from-env-file:9200"}}))
    monkeypatch.setenv(config.SECRETS_ENV_VAR, str(secrets))
    assert config.load_local_secrets()["elasticsearch"]["url"] == "http://from-env-file:9200"


def test_unreadable_secrets_are_ignored(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    assert config.load_local_secrets(broken) == {}

    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]")
    assert config.load_local_secrets(listing) == {}
    assert config.resolve_settings(listing, env={}).es_url == config.DEFAULT_ES_URL
