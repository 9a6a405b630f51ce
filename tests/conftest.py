import numpy as np
import pandas as pd
import pytest

from ddsim import ReferenceDataset


def make_reference(
    n_genes=50,
    cluster_ids=("c1",),
    sample_ids=("s1",),
    cells_per_bucket=40,
    mean_loc=1.5,
    dispersion=None,
    seed=0,
):
    """Build a small synthetic reference with fitted-looking parameters."""
    rng = np.random.default_rng(seed)
    if dispersion is None:
        dispersion = rng.uniform(0.05, 0.3, size=n_genes)
    genes = pd.DataFrame(
        {
            "mean": rng.normal(mean_loc, 0.3, size=n_genes),
            "dispersion": np.broadcast_to(dispersion, (n_genes,)).astype(float),
        },
        index=[f"ref_gene{i}" for i in range(n_genes)],
    )
    n_buckets = len(cluster_ids) * len(sample_ids)
    ncells = n_buckets * cells_per_bucket
    clusters = np.repeat(cluster_ids, len(sample_ids) * cells_per_bucket)
    samples = np.tile(np.repeat(sample_ids, cells_per_bucket), len(cluster_ids))
    cells = pd.DataFrame(
        {
            "offset": rng.normal(0.0, 0.1, size=ncells),
            "cluster_id": pd.Categorical(clusters, categories=list(cluster_ids)),
            "sample_id": pd.Categorical(samples, categories=list(sample_ids)),
        },
        index=[f"ref_cell{i}" for i in range(ncells)],
    )
    return ReferenceDataset(genes=genes, cells=cells)


@pytest.fixture
def reference():
    return make_reference()


@pytest.fixture
def multi_reference():
    return make_reference(
        cluster_ids=("c1", "c2"), sample_ids=("s1", "s2"), cells_per_bucket=20
    )


@pytest.fixture
def rng():
    return np.random.default_rng(42)
