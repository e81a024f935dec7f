#!/usr/bin/env python3
"""
Data models for identification requests and results.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import LLMProvider, Species


class AnnotationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    genes: List[str] = Field(min_length=1, description="Cleaned gene symbols, in input order.")
    model: str = Field(description="Model identifier passed through to the provider.")
    tissue_context: Optional[str] = Field(default=None, description="Optional tissue hint, e.g. 'peripheral blood'.")
    species: Species
    llm: LLMProvider
    save_results: bool = False
    output_file: Optional[str] = None


class AnnotationResult(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True, protected_namespaces=())

    genes_queried: List[str] = Field(description="Genes that were sent to the model.")
    model_used: str = Field(description="Model identifier used for the query.")
    llm_used: LLMProvider = Field(description="LLM service used: claude, gemini, chatgpt.")
    tissue_context: Optional[str] = Field(default=None, description="Tissue context, if one was given.")
    species: Species
    response: str = Field(description="Raw text returned by the model.")
    timestamp: datetime = Field(description="When the response was received.")
