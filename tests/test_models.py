"""Tests for aiagent.models -- config and prompt validation rules."""

from __future__ import annotations

import pydantic
import pytest

from aiagent.models import AgentConfig, Prompt, TextOutput


class TestAgentConfigDefaults:
    def test_defaults(self) -> None:
        cfg = AgentConfig(host="api.example.com")
        assert cfg.port == "443"
        assert cfg.api_key is None
        assert cfg.endpoint == "/generate"
        assert cfg.timeout == 30.0
        assert cfg.verify_ssl is True

    def test_base_url(self) -> None:
        cfg = AgentConfig(host="api.example.com", port="8443")
        assert cfg.base_url == "https://api.example.com:8443"

    def test_frozen(self) -> None:
        cfg = AgentConfig(host="api.example.com")
        with pytest.raises(pydantic.ValidationError):
            cfg.host = "other.example.com"


class TestHost:
    @pytest.mark.parametrize(
        "raw",
        ["api.example.com", "  api.example.com  ", "https://api.example.com/", "HTTPS://api.example.com"],
    )
    def test_normalised(self, raw: str) -> None:
        assert AgentConfig(host=raw).host == "api.example.com"

    @pytest.mark.parametrize("raw", ["", "   ", "https://"])
    def test_empty_rejected(self, raw: str) -> None:
        with pytest.raises(pydantic.ValidationError, match="host must not be empty"):
            AgentConfig(host=raw)

    @pytest.mark.parametrize(
        "raw",
        [
            "http://api.example.com",
            "api.example.com/v1",
            "api example.com",
            "user@api.example.com",
            "api.example.com?x=1",
            "api.example.com#frag",
        ],
    )
    def test_not_bare_rejected(self, raw: str) -> None:
        with pytest.raises(pydantic.ValidationError, match="bare host name"):
            AgentConfig(host=raw)

    @pytest.mark.parametrize("raw", ["localhost:8080", "::1", "https://api.example.com:8443"])
    def test_port_in_host_rejected(self, raw: str) -> None:
        with pytest.raises(pydantic.ValidationError, match="--port"):
            AgentConfig(host=raw)


class TestPort:
    def test_int_port_coerced(self) -> None:
        assert AgentConfig(host="h", port=8080).port == "8080"

    @pytest.mark.parametrize("raw", ["0", "65536", "https", "-1", "", "\u0664\u0664\u0663", "\u00b9"])
    def test_bad_port_rejected(self, raw: str) -> None:
        with pytest.raises(pydantic.ValidationError, match="port"):
            AgentConfig(host="h", port=raw)


class TestApiKey:
    def test_not_provided_vs_empty(self) -> None:
        missing = AgentConfig(host="h")
        empty = AgentConfig(host="h", api_key="")
        assert missing.api_key is None
        assert empty.api_key == ""
        assert not missing.has_api_key
        assert not empty.has_api_key

    def test_has_api_key(self) -> None:
        assert AgentConfig(host="h", api_key="sk-1").has_api_key

    @pytest.mark.parametrize("raw", ["cl\u00e9", "sk-\u2603", "sk-1\nX-Injected: yes"])
    def test_header_unsafe_key_rejected(self, raw: str) -> None:
        with pytest.raises(pydantic.ValidationError, match="printable ASCII"):
            AgentConfig(host="h", api_key=raw)


class TestOtherFields:
    def test_endpoint_gets_leading_slash(self) -> None:
        assert AgentConfig(host="h", endpoint="v1/completions").endpoint == "/v1/completions"

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            AgentConfig(host="h", timeout=0)

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            AgentConfig(host="h", hostname="typo")


class TestPrompt:
    def test_valid(self) -> None:
        assert Prompt(prompt="Hello").prompt == "Hello"

    def test_surrounding_whitespace_kept(self) -> None:
        assert Prompt(prompt="  Hello\n").prompt == "  Hello\n"

    @pytest.mark.parametrize("raw", ["", "  ", "\n\t"])
    def test_blank_rejected(self, raw: str) -> None:
        with pytest.raises(pydantic.ValidationError, match="prompt must not be empty"):
            Prompt(prompt=raw)


def test_text_output_dump() -> None:
    assert TextOutput(text="hi").model_dump() == {"text": "hi"}
