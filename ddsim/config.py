"""Configuration classes for ground-truth scRNA-seq simulation."""

from dataclasses import dataclass, field
from numbers import Integral
from typing import Sequence, Union

import numpy as np

from .errors import InvalidArgumentError
from .generators.genes import CATEGORIES

CellCount = Union[int, Sequence[int]]


def _is_int(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


@dataclass
class SimulationConfig:
    """Configuration parameters for a differential-distribution simulation.

    Attributes:
        n_genes: Number of synthetic genes to simulate per cluster.
        n_cells: Cells per group and bucket. Either a single positive integer
            or a two-element ascending ``(low, high)`` range to sample group
            sizes from, independently for each group of each bucket.
        p_dd: Probabilities of a gene being EE, EP, DE, DP, DM or DB,
            respectively. Must be non-negative and sum to 1.
        fc: Target mean fold-change magnitude of non-EE genes; must exceed 1.
        seed: Random seed for reproducibility.
    """

    n_genes: int = 500
    n_cells: CellCount = 100
    p_dd: Sequence[float] = field(default_factory=lambda: [1, 0, 0, 0, 0, 0])
    fc: float = 2.0
    seed: int = 1

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        self._validate()

    @property
    def cell_range(self) -> tuple[int, int]:
        """Closed ``(low, high)`` range of group sizes."""
        if _is_int(self.n_cells):
            return int(self.n_cells), int(self.n_cells)
        low, high = self.n_cells
        return int(low), int(high)

    def _validate(self) -> None:
        """Validate that all parameters are within acceptable ranges."""
        if not _is_int(self.n_genes) or self.n_genes <= 0:
            raise InvalidArgumentError(
                f"n_genes must be a positive integer, got {self.n_genes!r}"
            )

        if _is_int(self.n_cells):
            if self.n_cells <= 0:
                raise InvalidArgumentError("n_cells must be positive")
        else:
            try:
                bounds = list(self.n_cells)
            except TypeError as e:
                raise InvalidArgumentError(
                    "n_cells must be an integer or a (low, high) range"
                ) from e
            if len(bounds) != 2 or not all(_is_int(b) for b in bounds):
                raise InvalidArgumentError(
                    f"n_cells range must hold exactly two integers, got {bounds!r}"
                )
            low, high = bounds
            if low <= 0:
                raise InvalidArgumentError("n_cells range must be positive")
            if low > high:
                raise InvalidArgumentError(
                    f"n_cells range must be ascending, got {bounds!r}"
                )

        try:
            p_dd = np.asarray(self.p_dd, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError("p_dd must be numeric") from e
        if p_dd.shape != (len(CATEGORIES),):
            raise InvalidArgumentError(
                f"p_dd length ({p_dd.size}) must be {len(CATEGORIES)}"
            )
        if not np.all(np.isfinite(p_dd)):
            raise InvalidArgumentError("p_dd values must be finite")
        if np.any(p_dd < 0):
            raise InvalidArgumentError("p_dd values must be non-negative")
        if abs(p_dd.sum() - 1.0) > 1e-6:
            raise InvalidArgumentError("p_dd must sum to 1")

        if not self.fc > 1:
            raise InvalidArgumentError(f"fc must be greater than 1, got {self.fc}")
