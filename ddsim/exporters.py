"""Export functionality for simulation results."""

from dataclasses import asdict
from typing import TYPE_CHECKING

import pandas as pd

from .config import SimulationConfig

if TYPE_CHECKING:
    import anndata


def to_anndata(
    counts: pd.DataFrame,
    cell_info: pd.DataFrame,
    gene_info: pd.DataFrame,
    experiment_info: pd.DataFrame,
    n_cells: pd.Series,
    sim_genes: pd.DataFrame,
    config: SimulationConfig,
) -> "anndata.AnnData":
    """Export simulation results to an AnnData object.

    Requires the `anndata` package to be installed.
    Install with: `pip install ddsim[anndata]`

    Args:
        counts: Genes x cells count matrix.
        cell_info: Per-cell annotations, in count-matrix column order.
        gene_info: Ground-truth table of every (cluster, gene) pair.
        experiment_info: Combined sample labels and their groups.
        n_cells: Cells per combined sample label.
        sim_genes: Reference gene behind each synthetic gene, per cluster.
        config: Simulation configuration.

    Returns:
        AnnData object with:
        - X: count matrix (cells x genes)
        - obs: cell annotations
        - var: synthetic gene names
        - uns: ground truth and simulation metadata

    Raises:
        ImportError: If anndata is not installed.
    """
    try:
        import anndata
    except ImportError as e:
        raise ImportError(
            "anndata is required for to_anndata(). "
            "Install with: pip install ddsim[anndata]"
        ) from e

    adata = anndata.AnnData(
        X=counts.T.to_numpy(),
        obs=cell_info.copy(),
        var=pd.DataFrame(index=counts.index.copy()),
    )
    adata.uns["experiment_info"] = experiment_info.copy()
    adata.uns["n_cells"] = {str(k): int(v) for k, v in n_cells.items()}
    adata.uns["gene_info"] = gene_info.copy()
    adata.uns["sim_genes"] = sim_genes.copy()
    adata.uns["ddsim_config"] = asdict(config)
    return adata
