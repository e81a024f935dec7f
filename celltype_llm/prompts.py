#!/usr/bin/env python3
"""
Prompt template for LLM-based cell type identification.
"""

from typing import Optional, Sequence

CELLTYPE_PROMPT = """Based on these marker genes: {gene_list}

What cell type(s) do these genes most likely represent {species_text} {tissue_text}?

Please provide:
1. Most likely cell type(s) with confidence level
2. Key supporting genes from the list
3. Any alternative possibilities
4. Brief biological rationale

Format your response clearly and concisely."""


def build_prompt(
    genes: Sequence[str],
    species: str,
    tissue_context: Optional[str] = None
) -> str:
    """
    Fills the identification template for a list of cleaned genes.

    Args:
        genes: Gene symbols, already cleaned.
        species: Species name, e.g. "human".
        tissue_context: Optional tissue hint, rendered as "in <tissue> tissue".

    Returns:
        The prompt text.
    """
    tissue_text = f"in {tissue_context} tissue" if tissue_context is not None else ""
    return CELLTYPE_PROMPT.format(
        gene_list=", ".join(genes),
        species_text=f"in {getattr(species, 'value', species)}",
        tissue_text=tissue_text,
    )
