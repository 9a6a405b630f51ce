"""Cell partitioning into (cluster, sample) buckets and A/B groups."""

import logging
from dataclasses import dataclass

from numpy.random import Generator

from ..reference import ReferenceDataset
from .pools import Pool

logger = logging.getLogger(__name__)

GROUPS = ("A", "B")


@dataclass(frozen=True)
class Bucket:
    """Reference cells drawn for one (cluster, sample) combination.

    Attributes:
        cluster_id: Cluster label.
        sample_id: Original sample label.
        group_a: Reference cell names simulating group A.
        group_b: Reference cell names simulating group B.
    """

    cluster_id: str
    sample_id: str
    group_a: list[str]
    group_b: list[str]

    @property
    def cells(self) -> list[str]:
        """Reference cells in column order: group A, then group B."""
        return self.group_a + self.group_b

    @property
    def group_sizes(self) -> tuple[int, int]:
        return len(self.group_a), len(self.group_b)


def sample_group_sizes(
    rng: Generator,
    cell_range: tuple[int, int],
) -> tuple[int, int]:
    """Sample group A and B sizes for a single bucket.

    A fixed size is used for both groups when ``low == high``; otherwise
    each group size is drawn independently and uniformly from the closed
    range.
    """
    low, high = cell_range
    if low == high:
        return low, high
    n1, n2 = rng.integers(low, high + 1, size=2)
    return int(n1), int(n2)


def split_cells(
    rng: Generator,
    reference: ReferenceDataset,
    cell_range: tuple[int, int],
) -> list[Bucket]:
    """Split reference cells into A/B groups for every (cluster, sample).

    Buckets are visited cluster-major, then by sample, in level order.
    Each bucket owns a pool of its reference cells, so groups are disjoint
    within a bucket and buckets never share cells.

    Args:
        rng: NumPy random generator.
        reference: Reference population.
        cell_range: Closed ``(low, high)`` range of cells per group.

    Returns:
        List of buckets in column order.

    Raises:
        InsufficientPopulationError: If a bucket requests more cells than the
            reference holds for that cluster and sample.
    """
    buckets = []
    for (c, s), names in reference.bucket_cells().items():
        n1, n2 = sample_group_sizes(rng, cell_range)
        pool = Pool(names, rng, name=f"cells of cluster {c!r}, sample {s!r}")
        logger.debug(
            f"Bucket ({c}, {s}): {n1} + {n2} cells from {len(pool)} available"
        )
        group_a = pool.draw(n1)
        group_b = pool.draw(n2)
        buckets.append(Bucket(c, s, group_a, group_b))
    return buckets
