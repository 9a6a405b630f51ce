"""Category allocation and source-gene sampling for synthetic genes."""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np
import pandas as pd
from numpy.random import Generator

from .pools import Pool


class Category(str, Enum):
    """Expression-change categories, in ``p_dd`` order."""

    EE = "ee"
    EP = "ep"
    DE = "de"
    DP = "dp"
    DM = "dm"
    DB = "db"


CATEGORIES = list(Category)


@dataclass(frozen=True)
class ClusterAllocation:
    """Synthetic gene rows assigned to each category within one cluster.

    Attributes:
        cluster_id: Cluster label.
        counts: Number of genes per category.
        genes: Gene row names per category; absent for empty categories.
    """

    cluster_id: str
    counts: dict[Category, int]
    genes: dict[Category, list[str]]


def make_genenames(n_genes: int) -> list[str]:
    return [f"gene{i}" for i in range(1, n_genes + 1)]


def allocate_categories(
    rng: Generator,
    cluster_id: str,
    genenames: Sequence[str],
    p_dd: Sequence[float],
) -> ClusterAllocation:
    """Assign each synthetic gene of a cluster to one category.

    One categorical draw per gene fixes the category counts; gene rows are
    then drawn category by category from a pool of all rows, so the
    categories partition the rows.

    Args:
        rng: NumPy random generator.
        cluster_id: Cluster label, used for naming only.
        genenames: Synthetic gene row names.
        p_dd: Category probabilities in EE, EP, DE, DP, DM, DB order.

    Returns:
        ClusterAllocation for the cluster.
    """
    n_genes = len(genenames)
    p = np.asarray(p_dd, dtype=float)
    p = p / p.sum()
    draws = rng.choice(len(CATEGORIES), size=n_genes, p=p)
    tally = np.bincount(draws, minlength=len(CATEGORIES))
    counts = {cat: int(n) for cat, n in zip(CATEGORIES, tally)}

    pool = Pool(genenames, rng, name=f"genes of cluster {cluster_id!r}")
    genes = {}
    for cat in CATEGORIES:
        if counts[cat] == 0:
            continue
        genes[cat] = pool.draw(counts[cat])

    return ClusterAllocation(cluster_id=cluster_id, counts=counts, genes=genes)


def sample_source_genes(
    rng: Generator,
    refgenes: Sequence[str],
    genenames: Sequence[str],
    cluster_ids: Sequence[str],
) -> pd.DataFrame:
    """Pick, per cluster, the reference gene backing each synthetic gene.

    Reference genes are sampled with replacement, independently of the
    category allocation.

    Returns:
        DataFrame with synthetic genes as rows and clusters as columns.
    """
    refgenes = np.asarray(refgenes, dtype=object)
    sim_genes = {
        c: refgenes[rng.integers(0, len(refgenes), size=len(genenames))]
        for c in cluster_ids
    }
    return pd.DataFrame(sim_genes, index=list(genenames), columns=list(cluster_ids))
