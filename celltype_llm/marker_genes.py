#!/usr/bin/env python3
"""
Marker gene extraction from scanpy differential expression results.
"""

from typing import Dict, List, Optional

import pandas as pd
import scanpy as sc

from .logger import PipelineLogger

logger = PipelineLogger.get_logger(__name__)


def _ranked_genes_df(adata: sc.AnnData, key: str, group: Optional[str] = None) -> pd.DataFrame:
    if key not in adata.uns:
        raise KeyError(
            f"adata.uns['{key}'] not found. Run sc.tl.rank_genes_groups(adata, groupby=...) first."
        )
    return sc.get.rank_genes_groups_df(adata, group=group, key=key)


def _top_names(
    df: pd.DataFrame,
    n_genes: int,
    min_logfoldchange: Optional[float],
    max_pval_adj: Optional[float]
) -> List[str]:
    if min_logfoldchange is not None:
        df = df[df["logfoldchanges"] > min_logfoldchange]
    if max_pval_adj is not None:
        df = df[df["pvals_adj"] < max_pval_adj]
    return [str(name) for name in df["names"].head(n_genes)]


def get_top_marker_genes(
    adata: sc.AnnData,
    group: str,
    n_genes: int = 10,
    key: str = "rank_genes_groups",
    min_logfoldchange: Optional[float] = None,
    max_pval_adj: Optional[float] = None
) -> List[str]:
    """
    Returns the top N marker genes of one cluster, in rank order.

    Args:
        adata: AnnData with rank_genes_groups results.
        group: Cluster label as used in rank_genes_groups.
        n_genes: Number of genes to return.
        key: Key of the results in adata.uns.
        min_logfoldchange: Keep only genes with a larger log fold change.
        max_pval_adj: Keep only genes with a smaller adjusted p-value.

    Returns:
        Gene symbols ready to pass to identify_celltype().
    """
    df = _ranked_genes_df(adata, key, group=str(group))
    genes = _top_names(df, n_genes, min_logfoldchange, max_pval_adj)
    logger.info(f"Extracted {len(genes)} marker genes for cluster {group}")
    return genes


def get_marker_genes_by_cluster(
    adata: sc.AnnData,
    n_genes: int = 10,
    key: str = "rank_genes_groups",
    min_logfoldchange: Optional[float] = None,
    max_pval_adj: Optional[float] = None
) -> Dict[str, List[str]]:
    """
    Returns the top N marker genes for every cluster.

    Returns:
        Dictionary mapping cluster label to its gene symbols.
    """
    df = _ranked_genes_df(adata, key)
    if "group" not in df.columns:
        # single-group results come back without a group column
        group = adata.uns[key]["names"].dtype.names[0]
        df = df.assign(group=group)

    markers = {}
    for cluster, group_df in df.groupby("group", observed=True, sort=False):
        markers[str(cluster)] = _top_names(group_df, n_genes, min_logfoldchange, max_pval_adj)

    logger.info(f"Extracted markers for {len(markers)} clusters")
    return markers
