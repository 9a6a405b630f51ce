import numpy as np
import pytest

from ddsim import InsufficientPopulationError
from ddsim.generators import Pool


def test_draws_are_disjoint_and_exhaust_pool(rng):
    pool = Pool(range(20), rng)
    drawn = [pool.draw(k) for k in (5, 7, 8)]
    flat = [x for d in drawn for x in d]
    assert sorted(flat) == list(range(20))
    assert len(pool) == 0


def test_draw_more_than_remaining_raises(rng):
    pool = Pool(["a", "b", "c"], rng, name="tiny")
    pool.draw(2)
    with pytest.raises(InsufficientPopulationError, match="tiny"):
        pool.draw(2)
    # The failed draw leaves the pool untouched
    assert len(pool) == 1


def test_draw_zero(rng):
    pool = Pool(["a", "b"], rng)
    assert pool.draw(0) == []
    assert len(pool) == 2


def test_negative_draw_rejected(rng):
    with pytest.raises(ValueError):
        Pool(["a"], rng).draw(-1)


def test_same_seed_same_draws():
    first = Pool(range(100), np.random.default_rng(3)).draw(10)
    second = Pool(range(100), np.random.default_rng(3)).draw(10)
    assert first == second
