#!/usr/bin/env python3
"""
Shared fixtures: provider stubs so no test touches the network.
"""

import pytest

from celltype_llm import llm_client
from celltype_llm.config import API_KEY_ENV_VARS, LLMProvider, MOCK_ENV_VAR
from celltype_llm.llm_client import ChatClient


class StubProviderError(Exception):
    """Stands in for an SDK's own error type."""


@pytest.fixture
def clean_env(monkeypatch):
    """Removes provider keys and mock mode; restored after the test."""
    for env_var in list(API_KEY_ENV_VARS.values()) + [MOCK_ENV_VAR]:
        # set first so monkeypatch records the variable and restores it
        monkeypatch.setenv(env_var, "placeholder")
        monkeypatch.delenv(env_var)
    return monkeypatch


@pytest.fixture
def stub_chat(clean_env):
    """
    Replaces every provider's chat client with a stub that records prompts
    and returns `reply`, or raises `error` from send() when it is set.
    """

    class StubChat(ChatClient):
        errors = (StubProviderError,)
        reply = "Cytotoxic T cell"
        error = None
        prompts = []
        instances = []

        def __init__(self, model, api_key, max_tokens=1024):
            super().__init__(model, api_key, max_tokens)
            self.api_key = api_key
            StubChat.instances.append(self)

        def send(self, prompt):
            StubChat.prompts.append(prompt)
            if StubChat.error is not None:
                raise StubChat.error
            return StubChat.reply

    for provider in LLMProvider:
        clean_env.setitem(llm_client.CHAT_CLIENTS, provider, StubChat)
        clean_env.setenv(API_KEY_ENV_VARS[provider], f"test-{provider.value}-key")
    return StubChat
