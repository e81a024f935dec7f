#!/usr/bin/env python3
"""
Cell type identification from marker genes using hosted LLMs
(Claude, Gemini, ChatGPT).
"""

from .logger import PipelineLogger
from .config import (
    API_KEY_ENV_VARS,
    DEFAULT_MODEL,
    SUGGESTED_MODELS,
    LLMProvider,
    ProviderConfig,
    Species,
)
from .errors import (
    CellTypeIdentificationError,
    EmptyGeneListError,
    EmptyValueError,
    InvalidChoiceError,
    InvalidParameterTypeError,
    MissingCredentialsError,
    MissingParameterError,
    NoValidGenesError,
    OutputDirectoryNotFoundError,
    PersistenceError,
    ProviderCallError,
)
from .credentials import set_api_key, get_api_key, unset_api_key
from .schemas import AnnotationRequest, AnnotationResult
from .validation import clean_genes, validate_request
from .prompts import CELLTYPE_PROMPT, build_prompt
from .llm_client import CHAT_CLIENTS, ChatClient, query_llm
from .annotator import identify_celltype, save_result, load_result, format_summary
from .marker_genes import get_top_marker_genes, get_marker_genes_by_cluster

__version__ = "0.1.0"

__all__ = [
    'PipelineLogger',
    'API_KEY_ENV_VARS',
    'DEFAULT_MODEL',
    'SUGGESTED_MODELS',
    'LLMProvider',
    'ProviderConfig',
    'Species',
    'CellTypeIdentificationError',
    'EmptyGeneListError',
    'EmptyValueError',
    'InvalidChoiceError',
    'InvalidParameterTypeError',
    'MissingCredentialsError',
    'MissingParameterError',
    'NoValidGenesError',
    'OutputDirectoryNotFoundError',
    'PersistenceError',
    'ProviderCallError',
    'set_api_key',
    'get_api_key',
    'unset_api_key',
    'AnnotationRequest',
    'AnnotationResult',
    'clean_genes',
    'validate_request',
    'CELLTYPE_PROMPT',
    'build_prompt',
    'CHAT_CLIENTS',
    'ChatClient',
    'query_llm',
    'identify_celltype',
    'save_result',
    'load_result',
    'format_summary',
    'get_top_marker_genes',
    'get_marker_genes_by_cluster',
]
