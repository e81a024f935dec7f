#!/usr/bin/env python3
"""
Input validation for cell type identification.

validate_request() runs every check in a fixed order and returns either a
validated AnnotationRequest or the first error found, without raising.
"""

import os
from typing import Any, Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from .config import VALID_LLMS, VALID_SPECIES, LLMProvider, Species
from .errors import (
    CellTypeIdentificationError,
    EmptyGeneListError,
    InvalidChoiceError,
    InvalidParameterTypeError,
    MissingParameterError,
    NoValidGenesError,
)
from .schemas import AnnotationRequest


def _is_missing(value: Any) -> bool:
    """True for None and pandas/numpy missing markers (NaN, NA, NaT)."""
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _as_gene_entries(genes: Any) -> Optional[List[Any]]:
    """
    Returns the entries of a list-like gene container, or None if genes is not
    a list-like of strings. A bare string counts as a single gene.
    """
    if isinstance(genes, str):
        return [genes]
    if isinstance(genes, (dict, bytes)) or not isinstance(genes, (list, tuple, pd.Series, pd.Index, np.ndarray)):
        return None
    if isinstance(genes, np.ndarray) and genes.ndim != 1:
        return None
    entries = list(genes)
    for entry in entries:
        if not isinstance(entry, str) and not _is_missing(entry):
            return None
    return entries


def clean_genes(genes: Iterable[Any]) -> List[str]:
    """
    Drops missing and empty-string entries, keeping the original order.

    Args:
        genes: Gene symbols, possibly containing None/NaN or "".

    Returns:
        List of the remaining gene symbols.
    """
    return [g for g in genes if not _is_missing(g) and g != ""]


def _is_single_string(value: Any) -> bool:
    return isinstance(value, str)


def validate_request(
    genes: Any = None,
    model: Any = None,
    tissue_context: Any = None,
    species: Any = Species.HUMAN.value,
    save_results: Any = False,
    output_file: Any = None,
    llm: Any = LLMProvider.CLAUDE.value
) -> Union[AnnotationRequest, CellTypeIdentificationError]:
    """
    Validates the arguments of an identification request.

    Checks run in this order and the first failure is returned:
    genes given, genes non-empty, genes are strings, genes non-empty after
    cleaning, model, tissue_context, species, save_results, output_file, llm.

    Returns:
        An AnnotationRequest holding the cleaned genes, or the error
        describing the first violated constraint.
    """
    if genes is None:
        return MissingParameterError("genes")

    if hasattr(genes, "__len__") and len(genes) == 0:
        return EmptyGeneListError()

    entries = _as_gene_entries(genes)
    if entries is None:
        return InvalidParameterTypeError("genes", "genes must be a sequence of strings")

    cleaned = clean_genes(entries)
    if not cleaned:
        return NoValidGenesError()

    if not _is_single_string(model):
        return InvalidParameterTypeError("model", "model must be a single character string")

    if tissue_context is not None and not _is_single_string(tissue_context):
        return InvalidParameterTypeError("tissue_context", "tissue_context must be None or a single character string")

    if not _is_single_string(species) or species not in VALID_SPECIES:
        return InvalidChoiceError("species", species, VALID_SPECIES)

    if not isinstance(save_results, (bool, np.bool_)):
        return InvalidParameterTypeError("save_results", "save_results must be True or False")

    if output_file is not None:
        if isinstance(output_file, os.PathLike):
            output_file = os.fspath(output_file)
        if not _is_single_string(output_file):
            return InvalidParameterTypeError("output_file", "output_file must be None or a single character string")

    if not _is_single_string(llm) or llm not in VALID_LLMS:
        return InvalidChoiceError("llm", llm, VALID_LLMS)

    return AnnotationRequest(
        genes=cleaned,
        model=model,
        tissue_context=tissue_context,
        species=Species(species),
        llm=LLMProvider(llm),
        save_results=bool(save_results),
        output_file=output_file,
    )
