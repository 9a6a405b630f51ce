"""Reference population supplying gene and cell parameters."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from .errors import InvalidArgumentError

if TYPE_CHECKING:
    import anndata

GENE_COLUMNS = ("mean", "dispersion")
CELL_COLUMNS = ("offset", "cluster_id", "sample_id")


def _levels(labels: pd.Series) -> list[str]:
    if isinstance(labels.dtype, pd.CategoricalDtype):
        return [str(x) for x in labels.cat.categories]
    return sorted(str(x) for x in labels.unique())


@dataclass(frozen=True)
class ReferenceDataset:
    """Fitted reference data to simulate from.

    Attributes:
        genes: DataFrame indexed by gene name with columns ``mean``
            (log-scale expression) and ``dispersion`` (negative-binomial
            overdispersion).
        cells: DataFrame indexed by cell name with columns ``offset``
            (log-scale size factor), ``cluster_id`` and ``sample_id``.
    """

    genes: pd.DataFrame
    cells: pd.DataFrame

    def __post_init__(self) -> None:
        for name, frame, columns in (
            ("genes", self.genes, GENE_COLUMNS),
            ("cells", self.cells, CELL_COLUMNS),
        ):
            missing = [c for c in columns if c not in frame.columns]
            if missing:
                raise InvalidArgumentError(
                    f"reference {name} table is missing columns {missing}"
                )
            if frame.index.has_duplicates:
                raise InvalidArgumentError(f"reference {name} names must be unique")
        if len(self.genes) == 0:
            raise InvalidArgumentError("reference has no genes")
        if len(self.cells) == 0:
            raise InvalidArgumentError("reference has no cells")

    @property
    def cluster_ids(self) -> list[str]:
        return _levels(self.cells["cluster_id"])

    @property
    def sample_ids(self) -> list[str]:
        return _levels(self.cells["sample_id"])

    @property
    def genenames(self) -> list:
        return list(self.genes.index)

    def bucket_cells(self) -> dict[tuple[str, str], list[str]]:
        """Group reference cell names by (cluster, sample).

        Every combination of cluster and sample levels is present, empty
        where the reference holds no such cells.
        """
        clusters = self.cells["cluster_id"].astype(str).to_numpy()
        samples = self.cells["sample_id"].astype(str).to_numpy()
        names = np.asarray(list(self.cells.index), dtype=object)
        buckets = {}
        for c in self.cluster_ids:
            for s in self.sample_ids:
                mask = (clusters == c) & (samples == s)
                buckets[(c, s)] = list(names[mask])
        return buckets

    @classmethod
    def from_anndata(
        cls,
        adata: "anndata.AnnData",
        mean_key: str = "mean",
        dispersion_key: str = "dispersion",
        offset_key: str = "offset",
        cluster_key: str = "cluster_id",
        sample_key: str = "sample_id",
    ) -> "ReferenceDataset":
        """Build a reference from an AnnData carrying fitted parameters.

        Gene parameters are read from ``adata.var`` and cell parameters from
        ``adata.obs``.
        """
        for key, frame in (
            (mean_key, adata.var),
            (dispersion_key, adata.var),
            (offset_key, adata.obs),
            (cluster_key, adata.obs),
            (sample_key, adata.obs),
        ):
            if key not in frame.columns:
                raise InvalidArgumentError(f"AnnData is missing column {key!r}")

        genes = pd.DataFrame(
            {
                "mean": adata.var[mean_key].to_numpy(dtype=float),
                "dispersion": adata.var[dispersion_key].to_numpy(dtype=float),
            },
            index=adata.var_names.astype(str),
        )
        cells = pd.DataFrame(
            {
                "offset": adata.obs[offset_key].to_numpy(dtype=float),
                "cluster_id": adata.obs[cluster_key].values,
                "sample_id": adata.obs[sample_key].values,
            },
            index=adata.obs_names.astype(str),
        )
        return cls(genes=genes, cells=cells)
