"""Generator modules for ground-truth scRNA-seq simulation."""

from .cells import GROUPS, Bucket, sample_group_sizes, split_cells
from .counts import (
    MIXTURE_RULES,
    Mixture,
    SimulationTask,
    bimodal,
    get_cell_gene_means,
    mixture_means,
    sample_nbinom,
    simulate_counts,
    unimodal,
)
from .de import MODE_SPREAD, effect_factor, effect_spread, sample_fold_changes
from .genes import (
    CATEGORIES,
    Category,
    ClusterAllocation,
    allocate_categories,
    make_genenames,
    sample_source_genes,
)
from .pools import Pool

__all__ = [
    "CATEGORIES",
    "GROUPS",
    "MIXTURE_RULES",
    "MODE_SPREAD",
    "Bucket",
    "Category",
    "ClusterAllocation",
    "Mixture",
    "Pool",
    "SimulationTask",
    "allocate_categories",
    "bimodal",
    "effect_factor",
    "effect_spread",
    "get_cell_gene_means",
    "make_genenames",
    "mixture_means",
    "sample_fold_changes",
    "sample_group_sizes",
    "sample_nbinom",
    "sample_source_genes",
    "simulate_counts",
    "split_cells",
    "unimodal",
]
