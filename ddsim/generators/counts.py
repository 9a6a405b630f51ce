"""Negative-binomial count generation for each category of gene."""

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np
import pandas as pd
from numpy.random import Generator

from ..errors import InvalidParameterError
from .cells import Bucket
from .de import MODE_SPREAD, effect_factor, effect_spread
from .genes import Category

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Mixture:
    """Per-gene mixture of mean scales applied to the base cell-gene mean.

    Attributes:
        weights: Component weights, genes x components; rows sum to 1.
        scales: Multiplicative mean scale of each component, genes x components.
    """

    weights: np.ndarray
    scales: np.ndarray

    @property
    def ncomponents(self) -> int:
        return self.scales.shape[1]


def unimodal(scale: np.ndarray) -> Mixture:
    scale = np.asarray(scale, dtype=float)
    return Mixture(np.ones((len(scale), 1)), scale[:, np.newaxis])


def bimodal(low: np.ndarray, high: np.ndarray, w_high) -> Mixture:
    w_high = np.broadcast_to(np.asarray(w_high, dtype=float), np.shape(low))
    weights = np.column_stack([1.0 - w_high, w_high])
    scales = np.column_stack([low, high])
    return Mixture(weights, scales)


# Each rule maps per-gene effect factors to the (group A, group B) mixtures.
MixtureRule = Callable[[np.ndarray], tuple[Mixture, Mixture]]


def _equivalent_expression(factor: np.ndarray) -> tuple[Mixture, Mixture]:
    base = unimodal(np.ones_like(factor))
    return base, base


def _modes(factor: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    half = np.full_like(factor, np.sqrt(MODE_SPREAD))
    return 1.0 / half, half


def _equivalent_proportion(factor: np.ndarray) -> tuple[Mixture, Mixture]:
    low, high = _modes(factor)
    mix = bimodal(low, high, 0.5)
    return mix, mix


def _differential_expression(factor: np.ndarray) -> tuple[Mixture, Mixture]:
    return unimodal(np.ones_like(factor)), unimodal(factor)


def _differential_proportion(factor: np.ndarray) -> tuple[Mixture, Mixture]:
    low, high = _modes(factor)
    # Mixture weights shift by the effect size, modes stay in place
    spread = effect_spread(factor)
    w_minor = 1.0 / (1.0 + spread)
    w_major = spread / (1.0 + spread)
    # Up-regulated genes move group B towards the high mode
    up = factor > 1
    w_a = np.where(up, w_minor, w_major)
    w_b = np.where(up, w_major, w_minor)
    return bimodal(low, high, w_a), bimodal(low, high, w_b)


def _differential_modality(factor: np.ndarray) -> tuple[Mixture, Mixture]:
    ones = np.ones_like(factor)
    return unimodal(ones), bimodal(ones, factor, 0.5)


def _differential_both(factor: np.ndarray) -> tuple[Mixture, Mixture]:
    low, high = _modes(factor)
    return bimodal(low, high, 0.5), bimodal(low * factor, high * factor, 0.5)


MIXTURE_RULES: dict[Category, MixtureRule] = {
    Category.EE: _equivalent_expression,
    Category.EP: _equivalent_proportion,
    Category.DE: _differential_expression,
    Category.DP: _differential_proportion,
    Category.DM: _differential_modality,
    Category.DB: _differential_both,
}


@dataclass(frozen=True)
class SimulationTask:
    """Counts to generate for one category of genes in one bucket.

    Attributes:
        bucket: Cluster, sample and the reference cells of both groups.
        category: Expression-change category of the genes.
        genes: Synthetic gene rows to fill.
        source_genes: Reference gene backing each synthetic gene.
        logfc: Signed log2 fold-change per gene; NaN for EE genes.
    """

    bucket: Bucket
    category: Category
    genes: list[str]
    source_genes: list[str]
    logfc: np.ndarray

    def describe(self) -> str:
        return (
            f"cluster {self.bucket.cluster_id!r}, sample {self.bucket.sample_id!r}, "
            f"category {self.category.name}"
        )


def get_cell_gene_means(mean: np.ndarray, offset: np.ndarray) -> np.ndarray:
    """Scale log-scale gene means by log-scale cell offsets.

    Returns:
        Array of genes x cells holding ``exp(mean) * exp(offset)``.
    """
    with np.errstate(over="ignore"):
        return np.outer(np.exp(mean), np.exp(offset))


def mixture_means(rng: Generator, mu: np.ndarray, mixture: Mixture) -> np.ndarray:
    """Select a mixture component for every gene and cell and scale ``mu``.

    Components are chosen independently per cell, so a bimodal gene spreads
    its cells over both modes according to the mixture weights.
    """
    if mixture.ncomponents == 1:
        return mu * mixture.scales
    ngenes, ncells = mu.shape
    u = rng.random((ngenes, ncells))
    cumweights = np.cumsum(mixture.weights, axis=1)
    comp = (u[:, :, np.newaxis] >= cumweights[:, np.newaxis, :]).sum(axis=2)
    comp = np.minimum(comp, mixture.ncomponents - 1)
    return mu * np.take_along_axis(mixture.scales, comp, axis=1)


def sample_nbinom(
    rng: Generator,
    mean: np.ndarray,
    dispersion: np.ndarray,
) -> np.ndarray:
    """Sample negative-binomial counts with variance ``mean + d * mean**2``.

    Args:
        rng: NumPy random generator.
        mean: Expected counts, genes x cells.
        dispersion: Per-gene dispersion.

    Returns:
        Integer array with the shape of ``mean``.
    """
    size = 1.0 / np.asarray(dispersion, dtype=float)[:, np.newaxis]
    prob = size / (size + mean)
    return rng.negative_binomial(size, prob)


def _check_params(
    task: SimulationTask,
    mean: np.ndarray,
    dispersion: np.ndarray,
    mu: np.ndarray,
) -> None:
    bad = ~np.isfinite(mean) | ~np.isfinite(dispersion) | (dispersion <= 0)
    bad |= ~np.isfinite(mu).all(axis=1)
    if bad.any():
        i = int(np.flatnonzero(bad)[0])
        raise InvalidParameterError(
            f"Unusable parameters for gene {task.genes[i]!r} "
            f"(reference gene {task.source_genes[i]!r}, mean={mean[i]}, "
            f"dispersion={dispersion[i]}) in {task.describe()}"
        )


def simulate_counts(
    rng: Generator,
    task: SimulationTask,
    genes: pd.DataFrame,
    cells: pd.DataFrame,
) -> np.ndarray:
    """Generate the count block of one task.

    Args:
        rng: NumPy random generator.
        task: Genes, category and bucket to simulate.
        genes: Reference gene parameters (``mean``, ``dispersion``).
        cells: Reference cell parameters (``offset``).

    Returns:
        Integer array of genes x cells, group A columns first.

    Raises:
        InvalidParameterError: If a gene's parameters cannot be used for a
            negative-binomial draw.
    """
    mean = genes.loc[task.source_genes, "mean"].to_numpy(dtype=float)
    dispersion = genes.loc[task.source_genes, "dispersion"].to_numpy(dtype=float)
    offset = cells.loc[task.bucket.cells, "offset"].to_numpy(dtype=float)

    mu = get_cell_gene_means(mean, offset)
    _check_params(task, mean, dispersion, mu)

    n1, _ = task.bucket.group_sizes
    factor = effect_factor(task.logfc)
    mix_a, mix_b = MIXTURE_RULES[task.category](factor)

    logger.debug(f"Simulating {len(task.genes)} genes for {task.describe()}")
    cellgenemean = np.hstack(
        [
            mixture_means(rng, mu[:, :n1], mix_a),
            mixture_means(rng, mu[:, n1:], mix_b),
        ]
    )
    try:
        return sample_nbinom(rng, cellgenemean, dispersion)
    except ValueError as e:
        raise InvalidParameterError(
            f"Negative-binomial draw failed in {task.describe()}: {e}"
        ) from e
