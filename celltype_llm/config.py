#!/usr/bin/env python3
"""
Provider and species settings for cell type identification.

API keys are resolved through ProviderConfig: an explicitly supplied key wins,
otherwise the provider's environment variable is read at call time.
"""

import os
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Species(str, Enum):
    HUMAN = "human"
    MOUSE = "mouse"
    RAT = "rat"
    ZEBRAFISH = "zebrafish"
    DROSOPHILA = "drosophila"


class LLMProvider(str, Enum):
    CLAUDE = "claude"
    GEMINI = "gemini"
    CHATGPT = "chatgpt"


VALID_SPECIES = tuple(s.value for s in Species)
VALID_LLMS = tuple(p.value for p in LLMProvider)

API_KEY_ENV_VARS: Dict[LLMProvider, str] = {
    LLMProvider.CLAUDE: "ANTHROPIC_API_KEY",
    LLMProvider.GEMINI: "GEMINI_API_KEY",
    LLMProvider.CHATGPT: "OPENAI_API_KEY",
}

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_SPECIES = Species.HUMAN.value
DEFAULT_LLM = LLMProvider.CLAUDE.value

# Anthropic's Messages API requires an explicit output budget
DEFAULT_MAX_TOKENS = 4096

# Examples only; model identifiers are passed through to the provider unchecked
SUGGESTED_MODELS: Dict[LLMProvider, tuple] = {
    LLMProvider.CLAUDE: ("claude-3-5-sonnet-20241022", "claude-3-opus-20240229", "claude-3-haiku-20240307"),
    LLMProvider.GEMINI: ("gemini-1.5-pro", "gemini-1.5-flash", "gemini-1.0-pro"),
    LLMProvider.CHATGPT: ("gpt-4o", "gpt-4-turbo", "gpt-4", "gpt-3.5-turbo"),
}

MOCK_ENV_VAR = "MOCK_LLM"


def _is_mock_mode() -> bool:
    """Check if mock LLM mode is enabled via environment variable."""
    return os.environ.get(MOCK_ENV_VAR, '').lower() in ('1', 'true', 'yes')


class ProviderConfig(BaseModel):
    """
    Settings handed to the provider chat clients.

    Attributes:
        api_keys: Explicit API keys per provider. Providers missing here fall
            back to their environment variable (see API_KEY_ENV_VARS).
        max_tokens: Output token budget for providers that require one.
        mock: Return a canned response instead of calling a provider.
    """
    model_config = ConfigDict(frozen=True)

    api_keys: Dict[LLMProvider, str] = Field(default_factory=dict)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    mock: bool = False

    @classmethod
    def from_env(cls) -> "ProviderConfig":
        """Build a config that reads keys from the environment at call time."""
        return cls(mock=_is_mock_mode())

    def resolve_api_key(self, provider: LLMProvider) -> Optional[str]:
        """Return the API key for a provider, or None if none is configured."""
        provider = LLMProvider(provider)
        key = self.api_keys.get(provider)
        if key:
            return key
        return os.environ.get(API_KEY_ENV_VARS[provider]) or None
