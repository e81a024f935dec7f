#!/usr/bin/env python3
"""
LLM client wrappers for cell type identification.

One chat class per provider (Claude, Gemini, ChatGPT), all with the same
shape: construct with a model identifier and API key, then send() a single
prompt and get text back. Supports mock mode for testing without API calls.
"""

from typing import Any, Dict, Optional, Tuple, Type

import anthropic
import httpx
import openai
from google import genai
from google.genai import errors as genai_errors

from .config import (
    API_KEY_ENV_VARS,
    DEFAULT_MAX_TOKENS,
    LLMProvider,
    ProviderConfig,
)
from .errors import MissingCredentialsError, ProviderCallError
from .logger import PipelineLogger

logger = PipelineLogger.get_logger(__name__)


class ChatClient:
    """
    Base class for a single-turn chat session with one provider.

    Subclasses set `errors` to the exception types their SDK raises; only
    those are converted to ProviderCallError by query_llm().
    """

    provider: LLMProvider
    errors: Tuple[Type[BaseException], ...] = ()

    def __init__(self, model: str, api_key: str, max_tokens: int = DEFAULT_MAX_TOKENS):
        self.model = model
        self.max_tokens = max_tokens

    def send(self, prompt: str) -> Any:
        raise NotImplementedError


def _text_from_blocks(blocks) -> Optional[str]:
    """Flatten Anthropic message content (a list of blocks) to text; None if there is no text block."""
    texts = []
    for block in blocks or []:
        if getattr(block, "type", None) == "text":
            texts.append(block.text)
    if not texts:
        return None
    return "\n".join(texts)


class ClaudeChat(ChatClient):
    provider = LLMProvider.CLAUDE
    errors = (anthropic.AnthropicError,)

    def __init__(self, model: str, api_key: str, max_tokens: int = DEFAULT_MAX_TOKENS):
        super().__init__(model, api_key, max_tokens)
        self.client = anthropic.Anthropic(api_key=api_key)

    def send(self, prompt: str) -> Optional[str]:
        message = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        usage = getattr(message, "usage", None)
        if usage is not None:
            logger.info(f"[claude] Input tokens: {usage.input_tokens}, output tokens: {usage.output_tokens}")
        return _text_from_blocks(message.content)


class GeminiChat(ChatClient):
    provider = LLMProvider.GEMINI
    # google-genai does not wrap transport failures in its own error type
    errors = (genai_errors.APIError, httpx.HTTPError)

    def __init__(self, model: str, api_key: str, max_tokens: int = DEFAULT_MAX_TOKENS):
        super().__init__(model, api_key, max_tokens)
        self.client = genai.Client(api_key=api_key)

    def send(self, prompt: str) -> Optional[str]:
        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
        )
        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            logger.info(f"[gemini] Input tokens: {usage.prompt_token_count}")
            logger.info(f"[gemini] Tokens used: {usage.total_token_count}")
        return response.text


class OpenAIChat(ChatClient):
    provider = LLMProvider.CHATGPT
    errors = (openai.OpenAIError,)

    def __init__(self, model: str, api_key: str, max_tokens: int = DEFAULT_MAX_TOKENS):
        super().__init__(model, api_key, max_tokens)
        self.client = openai.OpenAI(api_key=api_key)

    def send(self, prompt: str) -> Optional[str]:
        completion = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
        usage = getattr(completion, "usage", None)
        if usage is not None:
            logger.info(f"[chatgpt] Tokens used: {usage.total_tokens}")
        return completion.choices[0].message.content


CHAT_CLIENTS: Dict[LLMProvider, Type[ChatClient]] = {
    LLMProvider.CLAUDE: ClaudeChat,
    LLMProvider.GEMINI: GeminiChat,
    LLMProvider.CHATGPT: OpenAIChat,
}
if set(CHAT_CLIENTS) != set(LLMProvider):
    raise RuntimeError("every provider needs a chat client")


def normalize_response(response: Any) -> str:
    """Returns the response unchanged if it is text, else its string form. None is rejected earlier by query_llm()."""
    if isinstance(response, str):
        return response
    return str(response)


def _generate_mock_response(provider: LLMProvider, model: str, prompt: str) -> str:
    """Generate a canned response for testing."""
    logger.info("🎭 MOCK MODE: Generating fake identification response")
    return (
        f"Mock response from {provider.value} model '{model}'.\n"
        "1. Most likely cell type: Unknown (confidence: low)\n"
        "2. Key supporting genes: none\n"
        "3. Alternative possibilities: none\n"
        "4. Rationale: mock mode is enabled; no model was queried."
    )


def query_llm(
    provider: LLMProvider,
    model: str,
    prompt: str,
    config: Optional[ProviderConfig] = None
) -> str:
    """
    Sends one prompt to one provider and returns the reply text.

    Args:
        provider: Which LLM service to use.
        model: Model identifier, passed through to the provider unchecked.
        prompt: The prompt text, sent as a single user message.
        config: Provider settings. Defaults to ProviderConfig.from_env().

    Returns:
        The reply as text.

    Raises:
        MissingCredentialsError: If no API key is configured for the provider.
        ProviderCallError: If the provider SDK raised while constructing the
            client or sending the prompt, or replied with no text. Other
            exceptions propagate unchanged.
    """
    provider = LLMProvider(provider)
    if config is None:
        config = ProviderConfig.from_env()

    if config.mock:
        return _generate_mock_response(provider, model, prompt)

    api_key = config.resolve_api_key(provider)
    if api_key is None:
        raise MissingCredentialsError(provider.value, model, API_KEY_ENV_VARS[provider])

    chat_cls = CHAT_CLIENTS[provider]
    logger.info(f"Requesting cell type identification from {provider.value} using `{model}`")

    try:
        chat = chat_cls(model=model, api_key=api_key, max_tokens=config.max_tokens)
    except chat_cls.errors as e:
        logger.error(f"Could not create {provider.value} client: {e}")
        raise ProviderCallError(provider.value, model, phase="client", cause=e) from e

    try:
        response = chat.send(prompt)
    except chat_cls.errors as e:
        logger.error(f"Error querying {provider.value} model '{model}': {e}")
        raise ProviderCallError(provider.value, model, phase="chat", cause=e) from e

    if response is None:
        logger.error(f"{provider.value} model '{model}' returned no text")
        raise ProviderCallError(provider.value, model, phase="chat", detail="empty response")

    logger.info(f"Response received from {provider.value}")
    return normalize_response(response)
