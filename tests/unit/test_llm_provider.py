from __future__ import annotations

from types import SimpleNamespace

from conftest import FakeChatClient

from bidforge.llm.providers import ChatOptions, LLMProvider, ProviderConfig


def _provider(client: FakeChatClient) -> LLMProvider:
    provider = LLMProvider(
        ProviderConfig(name="openai", base_url="http://localhost:9999/v1", api_key="dummy", timeout_sec=5)
    )
    provider.client = client
    return provider


def test_token_param_is_configurable() -> None:
    client = FakeChatClient()
    client.queue("ok")

    result = _provider(client).complete_chat(
        system="sys",
        prompt="ping",
        options=ChatOptions(model="m", temperature=0.1, max_tokens=42, token_param="max_completion_tokens"),
    )

    assert result.content == "ok"
    assert result.raw["model"] == "m"
    assert client.calls[0]["max_completion_tokens"] == 42
    assert "max_tokens" not in client.calls[0]
    assert "response_format" not in client.calls[0]


def test_json_mode_sets_response_format() -> None:
    client = FakeChatClient()
    client.queue("{}")

    _provider(client).complete_chat(
        system="sys", prompt="ping", options=ChatOptions(model="m", temperature=0, max_tokens=5, json_mode=True)
    )

    assert client.calls[0]["response_format"] == {"type": "json_object"}


def test_extract_chat_text_handles_empty_payloads() -> None:
    assert LLMProvider._extract_chat_text(SimpleNamespace(choices=[])) == ""
    assert LLMProvider._extract_chat_text(SimpleNamespace(choices=[SimpleNamespace(message=None)])) == ""
    empty = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))])
    assert LLMProvider._extract_chat_text(empty) == ""
