"""Ground-truth scRNA-seq simulator for differential-distribution benchmarks."""

import logging
from typing import TYPE_CHECKING, Optional, Self, Sequence

import numpy as np
import pandas as pd
from numpy.random import Generator

from .assembly import (
    assemble_cell_info,
    assemble_counts,
    assemble_experiment_info,
    assemble_gene_info,
    count_cells_per_sample,
)
from .config import CellCount, SimulationConfig
from .exporters import to_anndata
from .generators import (
    Bucket,
    Category,
    ClusterAllocation,
    SimulationTask,
    allocate_categories,
    make_genenames,
    sample_fold_changes,
    sample_source_genes,
    simulate_counts,
    split_cells,
)
from .reference import ReferenceDataset

if TYPE_CHECKING:
    import anndata

# Configure module logger
logger = logging.getLogger(__name__)


class DDSim:
    """Simulator of clustered, multi-sample, two-group scRNA-seq counts.

    Every synthetic gene is assigned, per cluster, one of six categories
    (EE, EP, DE, DP, DM, DB) with a known fold-change, so the output comes
    with a complete answer key for differential analysis methods.

    Example:
        >>> config = SimulationConfig(n_genes=10, n_cells=10, seed=1)
        >>> sim = DDSim(reference, config).simulate()
        >>> counts = sim.counts  # genes x cells DataFrame
        >>> truth = sim.gene_info
    """

    def __init__(self, reference: ReferenceDataset, config: SimulationConfig) -> None:
        """Initialize the simulator.

        Args:
            reference: Reference population supplying gene and cell parameters.
            config: SimulationConfig object with all parameters.
        """
        self.reference = reference
        self.config = config

        self._rng: Generator = np.random.default_rng(config.seed)
        self._genenames = make_genenames(config.n_genes)

        # Will be populated during simulation
        self.buckets: list[Bucket]
        self.allocations: list[ClusterAllocation]
        self.sim_genes: pd.DataFrame
        self.fold_changes: dict[tuple[str, Category], np.ndarray]
        self.tasks: list[SimulationTask]
        self.counts: Optional[pd.DataFrame] = None
        self.gene_info: pd.DataFrame
        self.cell_info: pd.DataFrame
        self.experiment_info: pd.DataFrame
        self.n_cells: pd.Series

    def simulate(self) -> Self:
        """Run the full simulation pipeline.

        This method executes all simulation steps in order:
        1. Split reference cells into (cluster, sample) buckets and A/B groups
        2. Allocate synthetic genes to categories per cluster
        3. Pick the reference gene behind each synthetic gene
        4. Sample fold-changes for genes with a group effect
        5. Generate counts for every (cluster, sample, category) task
        6. Assemble the count matrix and annotation tables

        Returns:
            Self for method chaining.
        """
        cfg = self.config
        ref = self.reference
        cluster_ids = ref.cluster_ids

        logger.info("Sampling cells")
        self.buckets = split_cells(self._rng, ref, cfg.cell_range)

        logger.info("Allocating gene categories")
        self.allocations = [
            allocate_categories(self._rng, c, self._genenames, cfg.p_dd)
            for c in cluster_ids
        ]

        logger.info("Sampling source genes")
        self.sim_genes = sample_source_genes(
            self._rng, ref.genenames, self._genenames, cluster_ids
        )

        logger.info("Sampling fold-changes")
        self.fold_changes = self._sample_fold_changes()

        self.tasks = self._build_tasks()
        logger.info(f"Simulating counts for {len(self.tasks)} tasks")
        blocks = [
            (task, simulate_counts(self._rng, task, ref.genes, ref.cells))
            for task in self.tasks
        ]

        logger.info("Assembling count matrix")
        self.counts = assemble_counts(self._genenames, self.buckets, blocks)
        self.gene_info = assemble_gene_info(
            self.allocations, self.fold_changes, self.sim_genes
        )
        self.cell_info = assemble_cell_info(self.buckets)
        self.experiment_info = assemble_experiment_info(self.cell_info)
        self.n_cells = count_cells_per_sample(self.cell_info)

        return self

    def _sample_fold_changes(self) -> dict[tuple[str, Category], np.ndarray]:
        """Draw signed log2 fold-changes for every non-EE category of every cluster."""
        fold_changes = {}
        for alloc in self.allocations:
            for cat, genes in alloc.genes.items():
                if cat is Category.EE:
                    continue
                fold_changes[(alloc.cluster_id, cat)] = sample_fold_changes(
                    self._rng, len(genes), self.config.fc
                )
        return fold_changes

    def _build_tasks(self) -> list[SimulationTask]:
        """List the (cluster, sample, category) work in execution order."""
        allocations = {a.cluster_id: a for a in self.allocations}
        tasks = []
        for bucket in self.buckets:
            c = bucket.cluster_id
            for cat, genes in allocations[c].genes.items():
                logfc = self.fold_changes.get((c, cat))
                if logfc is None:
                    logfc = np.full(len(genes), np.nan)
                tasks.append(
                    SimulationTask(
                        bucket=bucket,
                        category=cat,
                        genes=genes,
                        source_genes=list(self.sim_genes.loc[genes, c]),
                        logfc=logfc,
                    )
                )
        return tasks

    def to_anndata(self) -> "anndata.AnnData":
        """Export simulation results to an AnnData object.

        Requires the `anndata` package to be installed.
        Install with: `pip install ddsim[anndata]`

        Returns:
            AnnData object with:
            - X: count matrix (cells x genes)
            - obs: cell annotations
            - uns["experiment_info"], uns["n_cells"], uns["gene_info"],
              uns["sim_genes"]: simulation metadata
            - uns["ddsim_config"]: simulation config as dict

        Raises:
            ImportError: If anndata is not installed.
            ValueError: If simulate() hasn't been called.
        """
        if self.counts is None:
            raise ValueError("Must call simulate() first before exporting")
        return to_anndata(
            counts=self.counts,
            cell_info=self.cell_info,
            gene_info=self.gene_info,
            experiment_info=self.experiment_info,
            n_cells=self.n_cells,
            sim_genes=self.sim_genes,
            config=self.config,
        )


def simulate_data(
    reference: ReferenceDataset,
    n_genes: int,
    n_cells: CellCount,
    p_dd: Sequence[float],
    fc: float = 2.0,
    seed: int = 1,
) -> DDSim:
    """Simulate a ground-truth labeled dataset from a reference.

    Args:
        reference: Reference population supplying gene and cell parameters.
        n_genes: Number of synthetic genes per cluster.
        n_cells: Cells per group and bucket, or a ``(low, high)`` range.
        p_dd: Probabilities of EE, EP, DE, DP, DM and DB genes.
        fc: Target mean fold-change magnitude.
        seed: Random seed.

    Returns:
        A simulated DDSim; see its ``counts``, ``gene_info``, ``cell_info``,
        ``experiment_info``, ``n_cells`` and ``sim_genes`` attributes.

    Raises:
        InvalidArgumentError: If any argument is malformed.
        InsufficientPopulationError: If a bucket requests more cells than
            the reference provides.
        InvalidParameterError: If a reference gene cannot parameterize a
            negative-binomial draw.
    """
    config = SimulationConfig(
        n_genes=n_genes, n_cells=n_cells, p_dd=p_dd, fc=fc, seed=seed
    )
    return DDSim(reference, config).simulate()
