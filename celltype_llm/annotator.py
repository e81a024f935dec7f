#!/usr/bin/env python3
"""
Cell type identification from marker genes.

identify_celltype() validates its arguments, builds the prompt, queries one
LLM provider, and returns an AnnotationResult. The result can also be saved
as JSON and read back with load_result().
"""

import os
from datetime import datetime
from typing import Optional, Sequence, Union

from pydantic import ValidationError

from .config import DEFAULT_LLM, DEFAULT_MODEL, DEFAULT_SPECIES, ProviderConfig
from .errors import CellTypeIdentificationError, OutputDirectoryNotFoundError, PersistenceError
from .llm_client import query_llm
from .logger import PipelineLogger
from .prompts import build_prompt
from .schemas import AnnotationResult
from .validation import validate_request

logger = PipelineLogger.get_logger(__name__)

OUTPUT_FILE_PREFIX = "celltype_identification_"
OUTPUT_FILE_EXTENSION = ".json"


def default_output_filename(timestamp: Optional[datetime] = None) -> str:
    """Returns celltype_identification_<YYYYMMDD_HHMMSS>.json for a timestamp (default: now)."""
    timestamp = timestamp or datetime.now()
    return f"{OUTPUT_FILE_PREFIX}{timestamp.strftime('%Y%m%d_%H%M%S')}{OUTPUT_FILE_EXTENSION}"


def save_result(result: AnnotationResult, output_file: Union[str, os.PathLike]) -> str:
    """
    Writes an annotation result to a JSON file.

    The directory of output_file must already exist; it is never created.

    Args:
        result: The result to save.
        output_file: Destination path.

    Returns:
        The path written to.

    Raises:
        OutputDirectoryNotFoundError: If the output directory does not exist.
        PersistenceError: If the file could not be written.
    """
    output_file = os.fspath(output_file)
    output_dir = os.path.dirname(output_file) or "."
    if not os.path.isdir(output_dir):
        raise OutputDirectoryNotFoundError(output_file, output_dir)

    try:
        with open(output_file, 'w') as f:
            f.write(result.model_dump_json(indent=2))
    except (OSError, ValueError) as e:
        raise PersistenceError(output_file, f"Error saving results to {output_file}: {e}") from e

    logger.info(f"Results saved to: {output_file}")
    return output_file


def load_result(path: Union[str, os.PathLike]) -> AnnotationResult:
    """
    Reads an annotation result saved by save_result().

    Raises:
        PersistenceError: If the file cannot be read or is not a saved result.
    """
    path = os.fspath(path)
    try:
        with open(path, 'r') as f:
            return AnnotationResult.model_validate_json(f.read())
    except (OSError, ValidationError) as e:
        raise PersistenceError(path, f"Error loading results from {path}: {e}") from e


def format_summary(result: AnnotationResult) -> str:
    """Formats a result as the human-readable console summary."""
    lines = [
        "=== CELL TYPE IDENTIFICATION ===",
        f"Genes analyzed: {len(result.genes_queried)}",
        f"Model: {result.model_used}",
        f"LLM: {result.llm_used}",
    ]
    if result.tissue_context is not None:
        lines.append(f"Tissue context: {result.tissue_context}")
    lines.append(f"Species: {result.species}")
    lines.append("")
    lines.append("RESPONSE:")
    lines.append(result.response)
    return "\n".join(lines)


def identify_celltype(
    genes: Optional[Sequence[str]] = None,
    model: str = DEFAULT_MODEL,
    tissue_context: Optional[str] = None,
    species: str = DEFAULT_SPECIES,
    save_results: bool = False,
    output_file: Optional[str] = None,
    llm: str = DEFAULT_LLM,
    *,
    config: Optional[ProviderConfig] = None
) -> AnnotationResult:
    """
    Identifies likely cell types for a list of marker genes using an LLM.

    The prompt asks the model for the most likely cell type(s) with
    confidence, the key supporting genes, alternative possibilities, and a
    brief biological rationale. The reply is kept as raw text.

    Args:
        genes: Gene symbols, e.g. ["CD3D", "CD3E", "CD8A"]. Missing (None/NaN)
            and empty entries are dropped.
        model: Model identifier for the chosen provider.
        tissue_context: Optional tissue hint such as "peripheral blood".
        species: One of "human", "mouse", "rat", "zebrafish", "drosophila".
        save_results: If True, save the result as JSON.
        output_file: Path for the saved result. Defaults to
            celltype_identification_<YYYYMMDD_HHMMSS>.json in the working directory.
        llm: One of "claude", "gemini", "chatgpt".
        config: Provider settings (API keys, token budget, mock mode).
            Defaults to ProviderConfig.from_env().

    Returns:
        AnnotationResult with the genes queried, model, provider, tissue
        context, species, response text and timestamp.

    Raises:
        CellTypeIdentificationError: For invalid arguments (see errors module).
        ProviderCallError: If the provider request failed.
        PersistenceError: If saving was requested and failed. The call fails
            even though the model answered.
    """
    request = validate_request(
        genes=genes,
        model=model,
        tissue_context=tissue_context,
        species=species,
        save_results=save_results,
        output_file=output_file,
        llm=llm,
    )
    if isinstance(request, CellTypeIdentificationError):
        raise request

    logger.info(f"Identifying cell types for {len(request.genes)} genes ({request.species.value}, {request.llm.value})")

    prompt = build_prompt(request.genes, request.species.value, request.tissue_context)
    logger.debug(f"Prompt:\n{prompt}")

    response_text = query_llm(request.llm, request.model, prompt, config=config)

    result = AnnotationResult(
        genes_queried=request.genes,
        model_used=request.model,
        llm_used=request.llm,
        tissue_context=request.tissue_context,
        species=request.species,
        response=response_text,
        timestamp=datetime.now(),
    )

    if request.save_results:
        filename = request.output_file or default_output_filename()
        save_result(result, filename)

    print(format_summary(result))
    return result
