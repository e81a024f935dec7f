#!/usr/bin/env python3
"""
Tests for the provider chat clients themselves. The SDK clients are real;
only the request method of each is replaced, so no request leaves the process.
"""

from types import SimpleNamespace

import anthropic
import httpx
import openai
import pytest
from google import genai
from google.genai import errors as genai_errors
from google.genai import models as genai_models

from celltype_llm import ProviderCallError, ProviderConfig, identify_celltype, llm_client, query_llm
from celltype_llm.config import LLMProvider
from celltype_llm.llm_client import ClaudeChat, GeminiChat, OpenAIChat, _text_from_blocks

MARKERS = ["CD3D", "CD3E", "CD8A"]
CONFIG = ProviderConfig(api_keys={"claude": "k", "gemini": "k", "chatgpt": "k"}, max_tokens=512)


def _claude_message(*blocks):
    return SimpleNamespace(content=list(blocks), usage=SimpleNamespace(input_tokens=12, output_tokens=5))


def _gemini_response(text):
    return SimpleNamespace(text=text, usage_metadata=SimpleNamespace(prompt_token_count=12, total_token_count=30))


def _openai_completion(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(total_tokens=17),
    )


@pytest.fixture
def sdk_calls(clean_env):
    """Records keyword arguments of patched SDK calls."""
    return []


def _patch(monkeypatch, cls, name, calls, result):
    def fake(self, **kwargs):
        calls.append(kwargs)
        if isinstance(result, BaseException):
            raise result
        return result
    monkeypatch.setattr(cls, name, fake)


def test_text_from_blocks_keeps_text_blocks_in_order():
    blocks = [
        SimpleNamespace(type="text", text="CD8+ T cell"),
        SimpleNamespace(type="thinking", thinking="..."),
        SimpleNamespace(type="text", text="NK cell"),
    ]
    assert _text_from_blocks(blocks) == "CD8+ T cell\nNK cell"
    assert _text_from_blocks([SimpleNamespace(type="tool_use")]) is None
    assert _text_from_blocks([]) is None


def test_claude_sends_single_user_message(sdk_calls, clean_env):
    _patch(clean_env, anthropic.resources.Messages, "create", sdk_calls,
           _claude_message(SimpleNamespace(type="text", text="Cytotoxic T cell")))

    reply = query_llm("claude", "claude-3-haiku-20240307", "Which cell type?", config=CONFIG)

    assert reply == "Cytotoxic T cell"
    assert sdk_calls == [{
        "model": "claude-3-haiku-20240307",
        "max_tokens": 512,
        "messages": [{"role": "user", "content": "Which cell type?"}],
    }]


def test_gemini_sends_prompt_as_contents(sdk_calls, clean_env):
    _patch(clean_env, genai_models.Models, "generate_content", sdk_calls, _gemini_response("B cell"))

    reply = query_llm("gemini", "gemini-1.5-pro", "Which cell type?", config=CONFIG)

    assert reply == "B cell"
    assert sdk_calls == [{"model": "gemini-1.5-pro", "contents": "Which cell type?"}]


def test_openai_sends_single_user_message(sdk_calls, clean_env):
    _patch(clean_env, openai.resources.chat.Completions, "create", sdk_calls, _openai_completion("Monocyte"))

    reply = query_llm("chatgpt", "gpt-4o", "Which cell type?", config=CONFIG)

    assert reply == "Monocyte"
    assert sdk_calls == [{"model": "gpt-4o", "messages": [{"role": "user", "content": "Which cell type?"}]}]


@pytest.mark.parametrize("provider, cls, name, error", [
    ("claude", anthropic.resources.Messages, "create",
     anthropic.APIConnectionError(request=httpx.Request("POST", "http://x"))),
    ("chatgpt", openai.resources.chat.Completions, "create",
     openai.APIConnectionError(request=httpx.Request("POST", "http://x"))),
    ("gemini", genai_models.Models, "generate_content",
     genai_errors.ClientError(404, {"error": {"code": 404, "message": "model not found", "status": "NOT_FOUND"}})),
    ("gemini", genai_models.Models, "generate_content",
     httpx.ConnectError("Connection refused")),
])
def test_sdk_errors_become_provider_call_errors(sdk_calls, clean_env, provider, cls, name, error):
    _patch(clean_env, cls, name, sdk_calls, error)

    with pytest.raises(ProviderCallError) as excinfo:
        query_llm(provider, "some-model", "prompt", config=CONFIG)

    assert excinfo.value.provider == provider
    assert excinfo.value.model == "some-model"
    assert excinfo.value.phase == "chat"
    assert excinfo.value.__cause__ is error


def test_unreachable_gemini_endpoint_is_wrapped(clean_env):
    class UnreachableGeminiChat(GeminiChat):
        def __init__(self, model, api_key, max_tokens=512):
            super().__init__(model, api_key, max_tokens)
            self.client = genai.Client(api_key=api_key, http_options={"base_url": "http://127.0.0.1:9"})

    clean_env.setitem(llm_client.CHAT_CLIENTS, LLMProvider.GEMINI, UnreachableGeminiChat)

    with pytest.raises(ProviderCallError) as excinfo:
        identify_celltype(["CD3D"], llm="gemini", model="gemini-1.5-pro", config=CONFIG)

    assert "gemini" in str(excinfo.value)
    assert "gemini-1.5-pro" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, httpx.HTTPError)


@pytest.mark.parametrize("provider, cls, name, reply", [
    ("claude", anthropic.resources.Messages, "create", _claude_message(SimpleNamespace(type="tool_use"))),
    ("gemini", genai_models.Models, "generate_content", _gemini_response(None)),
    ("chatgpt", openai.resources.chat.Completions, "create", _openai_completion(None)),
])
def test_reply_without_text_is_an_error(sdk_calls, clean_env, tmp_path, provider, cls, name, reply):
    _patch(clean_env, cls, name, sdk_calls, reply)
    output_file = tmp_path / "result.json"

    with pytest.raises(ProviderCallError, match="empty response") as excinfo:
        identify_celltype(MARKERS, llm=provider, model="m", save_results=True,
                          output_file=str(output_file), config=CONFIG)

    assert excinfo.value.phase == "chat"
    assert not output_file.exists()


def test_adapters_build_real_sdk_clients():
    assert isinstance(ClaudeChat("m", "k").client, anthropic.Anthropic)
    assert isinstance(GeminiChat("m", "k").client, genai.Client)
    assert isinstance(OpenAIChat("m", "k").client, openai.OpenAI)
