"""Assembly of simulated blocks into the count matrix and its annotations."""

from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from .generators.cells import GROUPS, Bucket
from .generators.counts import SimulationTask
from .generators.genes import CATEGORIES, Category, ClusterAllocation

CATEGORY_LEVELS = [cat.value for cat in CATEGORIES]


def make_cellnames(ncells: int) -> list[str]:
    return [f"cell{i}" for i in range(1, ncells + 1)]


def bucket_columns(buckets: Sequence[Bucket]) -> dict[tuple[str, str], slice]:
    """Column span of each bucket in the count matrix."""
    spans = {}
    start = 0
    for b in buckets:
        stop = start + len(b.cells)
        spans[(b.cluster_id, b.sample_id)] = slice(start, stop)
        start = stop
    return spans


def assemble_counts(
    genenames: Sequence[str],
    buckets: Sequence[Bucket],
    blocks: Iterable[tuple[SimulationTask, np.ndarray]],
) -> pd.DataFrame:
    """Write every task's block into a genes x cells count matrix.

    Args:
        genenames: Synthetic gene row names.
        buckets: Buckets in column order.
        blocks: Pairs of task and its genes x cells count block.

    Returns:
        DataFrame of integer counts with synthetic genes as rows and
        simulated cells as columns.
    """
    spans = bucket_columns(buckets)
    ncells = sum(len(b.cells) for b in buckets)
    rows = {g: i for i, g in enumerate(genenames)}
    counts = np.zeros((len(genenames), ncells), dtype=np.int64)
    for task, block in blocks:
        span = spans[(task.bucket.cluster_id, task.bucket.sample_id)]
        idx = [rows[g] for g in task.genes]
        counts[idx, span] = block
    return pd.DataFrame(counts, index=list(genenames), columns=make_cellnames(ncells))


def _gene_number(genes: pd.Series) -> pd.Series:
    return genes.str.extract(r"(\d+)$", expand=False).astype(int)


def assemble_gene_info(
    allocations: Sequence[ClusterAllocation],
    fold_changes: dict[tuple[str, Category], np.ndarray],
    sim_genes: pd.DataFrame,
) -> pd.DataFrame:
    """Build the ground-truth table of every (cluster, gene) pair.

    Rows of each cluster are stacked category by category, skipping empty
    categories, then ordered by the numeric index of the synthetic gene.

    Returns:
        DataFrame with columns ``gene``, ``cluster_id``, ``category``,
        ``logFC`` (signed log2 fold-change, NaN for EE genes) and ``sim_gene``.
    """
    frames = []
    for alloc in allocations:
        c = alloc.cluster_id
        for cat, genes in alloc.genes.items():
            frames.append(
                pd.DataFrame(
                    {
                        "gene": genes,
                        "cluster_id": c,
                        "category": cat.value,
                        "logFC": fold_changes.get((c, cat), np.nan),
                        "sim_gene": sim_genes.loc[genes, c].to_numpy(),
                    }
                )
            )
    gene_info = pd.concat(frames, ignore_index=True)
    order = np.argsort(_gene_number(gene_info["gene"]).to_numpy(), kind="stable")
    gene_info = gene_info.iloc[order].reset_index(drop=True)
    gene_info["category"] = pd.Categorical(
        gene_info["category"], categories=CATEGORY_LEVELS
    )
    return gene_info


def assemble_cell_info(buckets: Sequence[Bucket]) -> pd.DataFrame:
    """Build the per-cell annotation table in count-matrix column order.

    Returns:
        DataFrame indexed by simulated cell name with columns
        ``cluster_id``, ``sample_id`` (group and original sample joined by a
        dot), ``group`` and ``source_cell``.
    """
    frames = []
    for b in buckets:
        sizes = b.group_sizes
        frames.append(
            pd.DataFrame(
                {
                    "cluster_id": b.cluster_id,
                    "sample_id": [
                        f"{g}.{b.sample_id}"
                        for g, n in zip(GROUPS, sizes)
                        for _ in range(n)
                    ],
                    "source_cell": b.cells,
                },
            )
        )
    cell_info = pd.concat(frames, ignore_index=True)
    cell_info.index = make_cellnames(len(cell_info))
    cell_info["group"] = cell_info["sample_id"].str.replace(
        r"^(A|B)\..*$", r"\1", regex=True
    )
    cell_info["sample_id"] = pd.Categorical(cell_info["sample_id"])
    cell_info["group"] = pd.Categorical(cell_info["group"], categories=list(GROUPS))
    return cell_info[["cluster_id", "sample_id", "group", "source_cell"]]


def assemble_experiment_info(cell_info: pd.DataFrame) -> pd.DataFrame:
    """One row per combined sample label with its experimental group."""
    sample_id = list(cell_info["sample_id"].cat.categories)
    group = [s.split(".", 1)[0] for s in sample_id]
    return pd.DataFrame({"sample_id": sample_id, "group": group})


def count_cells_per_sample(cell_info: pd.DataFrame) -> pd.Series:
    """Number of simulated cells per combined sample label."""
    return cell_info["sample_id"].value_counts(sort=False).sort_index()
