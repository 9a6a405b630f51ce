"""Fold-change sampling for genes with a group effect."""

import numpy as np
from numpy.random import Generator

#: Shape of the gamma distribution of fold-change magnitudes.
FC_SHAPE = 4.0

#: Fold separation between the two modes of a bimodal gene.
MODE_SPREAD = 4.0


def sample_fold_changes(rng: Generator, n: int, fc: float) -> np.ndarray:
    """Draw signed log2 fold-changes for ``n`` genes.

    The sign is uniform on {-1, +1} and the magnitude is gamma distributed
    with shape 4 and rate ``4 / fc``, so magnitudes average ``fc``.

    Args:
        rng: NumPy random generator.
        n: Number of genes.
        fc: Target mean fold-change magnitude.

    Returns:
        Array of signed log2 fold-changes.
    """
    sign = rng.choice([-1.0, 1.0], size=n)
    magnitude = rng.gamma(shape=FC_SHAPE, scale=fc / FC_SHAPE, size=n)
    return sign * magnitude


def effect_factor(logfc: np.ndarray) -> np.ndarray:
    """Convert log2 fold-changes into multiplicative mean factors.

    Positive values always raise the mean and negative values lower it.
    NaN (no effect) maps to 1.
    """
    logfc = np.asarray(logfc, dtype=float)
    return np.where(np.isfinite(logfc), np.exp2(np.nan_to_num(logfc)), 1.0)


def effect_spread(factor: np.ndarray) -> np.ndarray:
    """Fold size (>= 1) of an effect, regardless of its direction."""
    factor = np.asarray(factor, dtype=float)
    return np.maximum(factor, 1.0 / factor)
