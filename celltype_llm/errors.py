#!/usr/bin/env python3
"""
Exception types raised by cell type identification.

Each class also derives from the builtin exception a caller would expect
(ValueError, TypeError, RuntimeError, OSError), so code can catch either the
specific class or the builtin.
"""

from typing import Optional, Sequence


class CellTypeIdentificationError(Exception):
    """Base class for all errors raised by this package."""


class MissingParameterError(CellTypeIdentificationError, ValueError):
    """A required argument was not supplied."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"{parameter} parameter is required")


class InvalidParameterTypeError(CellTypeIdentificationError, TypeError):
    """An argument does not have the expected type or shape."""

    def __init__(self, parameter: str, message: str):
        self.parameter = parameter
        super().__init__(message)


class InvalidChoiceError(CellTypeIdentificationError, ValueError):
    """An argument's value is outside its closed set of choices."""

    def __init__(self, parameter: str, value, choices: Sequence[str]):
        self.parameter = parameter
        self.value = value
        self.choices = tuple(choices)
        super().__init__(f"{parameter} must be one of: {', '.join(self.choices)}")


class EmptyGeneListError(CellTypeIdentificationError, ValueError):
    """The gene list has zero length."""

    def __init__(self, message: str = "No genes provided"):
        super().__init__(message)


class NoValidGenesError(EmptyGeneListError):
    """Every gene entry was missing or an empty string."""

    def __init__(self):
        super().__init__("No valid genes after removing missing and empty values")


class ProviderCallError(CellTypeIdentificationError, RuntimeError):
    """
    The request to an LLM provider failed.

    Attributes:
        provider: Provider name (claude, gemini, chatgpt).
        model: Model identifier that was requested.
        phase: "client" if the failure happened while constructing the client,
            "chat" if it happened while sending the prompt.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        provider: str,
        model: str,
        phase: str,
        cause: Optional[BaseException] = None,
        detail: Optional[str] = None
    ):
        self.provider = provider
        self.model = model
        self.phase = phase
        self.cause = cause
        if detail is None:
            detail = str(cause) if cause is not None else "unknown error"
        super().__init__(f"Error querying {provider} model '{model}': {detail}")


class MissingCredentialsError(ProviderCallError):
    """No API key could be resolved for the requested provider."""

    def __init__(self, provider: str, model: str, env_var: str):
        self.env_var = env_var
        super().__init__(
            provider,
            model,
            phase="client",
            detail=f"no API key found; set {env_var} or call set_api_key('{provider}', ...)"
        )


class PersistenceError(CellTypeIdentificationError, OSError):
    """Saving an annotation result to disk failed."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        # OSError formats multi-argument instances as errno tuples
        return self.args[0]


class OutputDirectoryNotFoundError(PersistenceError, FileNotFoundError):
    """The directory of the requested output file does not exist."""

    def __init__(self, path: str, directory: str):
        self.directory = directory
        super().__init__(path, f"Output directory does not exist: {directory}")


class EmptyValueError(CellTypeIdentificationError, ValueError):
    """A string argument is empty or whitespace only."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"{parameter} cannot be empty")
