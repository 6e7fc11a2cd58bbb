"""Tests for configuration."""

import logging

from pms import configure_logging
from pms.config import Config


def test_default_attribute_type_uuid():
    assert (
        Config.get_provider_role_attribute_type_uuid()
        == Config.DEFAULT_PROVIDER_ROLE_ATTRIBUTE_TYPE_UUID
    )


def test_attribute_type_uuid_from_env(monkeypatch):
    monkeypatch.setenv("PMS_PROVIDER_ROLE_ATTRIBUTE_TYPE_UUID", "from-env")
    assert Config.get_provider_role_attribute_type_uuid() == "from-env"


def test_attribute_type_uuid_override_wins(monkeypatch):
    monkeypatch.setenv("PMS_PROVIDER_ROLE_ATTRIBUTE_TYPE_UUID", "from-env")
    assert Config.get_provider_role_attribute_type_uuid("explicit") == "explicit"


def test_log_level(monkeypatch):
    monkeypatch.delenv("PMS_LOG_LEVEL", raising=False)
    assert Config.get_log_level() == "INFO"

    monkeypatch.setenv("PMS_LOG_LEVEL", "debug")
    assert Config.get_log_level() == "DEBUG"
    assert Config.get_log_level("warning") == "WARNING"


def test_configure_logging(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging("debug")

    assert calls == [{"level": "DEBUG"}]
