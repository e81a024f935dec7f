#!/usr/bin/env python3
"""
Credential helpers that store provider API keys in process environment
variables for the lifetime of the process.
"""

import os
from typing import Optional

from .config import API_KEY_ENV_VARS, VALID_LLMS, LLMProvider
from .errors import (
    EmptyValueError,
    InvalidChoiceError,
    InvalidParameterTypeError,
    MissingParameterError,
)
from .logger import PipelineLogger

logger = PipelineLogger.get_logger(__name__)


def _check_service(service) -> LLMProvider:
    if not isinstance(service, str):
        raise InvalidParameterTypeError("service", "service must be a single character string")
    if service not in VALID_LLMS:
        raise InvalidChoiceError("service", service, VALID_LLMS)
    return LLMProvider(service)


def set_api_key(service: Optional[str] = None, api_key: Optional[str] = None) -> bool:
    """
    Sets the API key for an LLM service.

    The key is written, untrimmed, to the service's environment variable
    (claude: ANTHROPIC_API_KEY, gemini: GEMINI_API_KEY, chatgpt: OPENAI_API_KEY),
    replacing any previous value. The key is not checked against the provider.

    Args:
        service: One of "claude", "gemini", "chatgpt".
        api_key: The API key. Must not be empty or whitespace only.

    Returns:
        True once the variable is set.

    Raises:
        MissingParameterError: If service or api_key is not given.
        InvalidParameterTypeError: If service or api_key is not a string.
        InvalidChoiceError: If service is not a supported LLM service.
        EmptyValueError: If api_key is blank.
    """
    if service is None:
        raise MissingParameterError("service")
    if api_key is None:
        raise MissingParameterError("api_key")

    if not isinstance(service, str):
        raise InvalidParameterTypeError("service", "service must be a single character string")
    if not isinstance(api_key, str):
        raise InvalidParameterTypeError("api_key", "api_key must be a single character string")
    provider = _check_service(service)

    if not api_key.strip():
        raise EmptyValueError("api_key")

    env_var = API_KEY_ENV_VARS[provider]
    os.environ[env_var] = api_key

    logger.info(f"API key set successfully for {provider.value} service")
    logger.info(f"Environment variable: {env_var}")
    return True


def get_api_key(service: str) -> Optional[str]:
    """Returns the API key currently set for a service, or None."""
    provider = _check_service(service)
    return os.environ.get(API_KEY_ENV_VARS[provider])


def unset_api_key(service: str) -> bool:
    """
    Removes a service's API key from the environment.

    Returns:
        True if a key was removed, False if none was set.
    """
    provider = _check_service(service)
    env_var = API_KEY_ENV_VARS[provider]
    if env_var not in os.environ:
        return False
    del os.environ[env_var]
    logger.info(f"API key removed for {provider.value} service ({env_var})")
    return True
