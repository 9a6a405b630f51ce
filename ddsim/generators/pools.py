"""Shrinking sampling pools for drawing disjoint subsets."""

from typing import Generic, Hashable, Iterable, TypeVar

import numpy as np
from numpy.random import Generator

from ..errors import InsufficientPopulationError

T = TypeVar("T", bound=Hashable)


class Pool(Generic[T]):
    """A population that is consumed by sampling without replacement.

    Each call to :meth:`draw` removes the drawn elements, so successive
    draws from the same pool are disjoint and together never exceed the
    initial population.

    Example:
        >>> pool = Pool(["gene1", "gene2", "gene3"], rng, name="cluster a")
        >>> first = pool.draw(2)
        >>> rest = pool.draw(1)  # the remaining gene
    """

    def __init__(self, items: Iterable[T], rng: Generator, name: str = "pool") -> None:
        self._items: list[T] = list(items)
        self._rng = rng
        self.name = name

    def __len__(self) -> int:
        return len(self._items)

    def draw(self, k: int) -> list[T]:
        """Remove and return ``k`` distinct elements chosen uniformly at random.

        Raises:
            InsufficientPopulationError: If fewer than ``k`` elements remain.
        """
        if k < 0:
            raise ValueError("k must be non-negative")
        if k > len(self._items):
            raise InsufficientPopulationError(
                f"cannot draw {k} from {self.name}: "
                f"only {len(self._items)} remaining"
            )
        if k == 0:
            return []

        idx = self._rng.choice(len(self._items), size=k, replace=False)
        drawn = [self._items[i] for i in idx]
        taken = np.zeros(len(self._items), dtype=bool)
        taken[idx] = True
        self._items = [x for x, t in zip(self._items, taken) if not t]
        return drawn
