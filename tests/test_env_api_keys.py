import pytest

from gx.env_api_keys import get_api_key, has_api_key
from gx.exceptions import ConfigurationError


def test_has_api_key_true_when_set(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    assert has_api_key("gemini") is True


def test_has_api_key_false_when_unset():
    assert has_api_key("gemini", environ={}) is False


def test_has_api_key_for_keyless_provider():
    assert has_api_key("local", environ={}) is True


def test_get_api_key_lookup_order():
    env = {"GEMINI_API_KEY": "first", "GOOGLE_API_KEY": "second"}
    assert get_api_key("gemini", env) == "first"
    assert get_api_key("gemini", {"GOOGLE_API_KEY": "second"}) == "second"


def test_get_api_key_missing():
    with pytest.raises(ConfigurationError) as info:
        get_api_key("openai", {})
    assert info.value.missing_key == "OPENAI_API_KEY"
