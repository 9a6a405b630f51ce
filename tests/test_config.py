import pytest

from ddsim import InvalidArgumentError, SimulationConfig


def test_defaults_are_valid():
    cfg = SimulationConfig()
    assert cfg.cell_range == (100, 100)


def test_cell_range():
    assert SimulationConfig(n_cells=(5, 9)).cell_range == (5, 9)
    assert SimulationConfig(n_cells=[3, 3]).cell_range == (3, 3)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"n_genes": 0},
        {"n_genes": -5},
        {"n_genes": 2.5},
        {"n_cells": 0},
        {"n_cells": (10, 5)},
        {"n_cells": (0, 5)},
        {"n_cells": (1, 2, 3)},
        {"n_cells": (1.5, 3)},
        {"n_cells": "many"},
        {"p_dd": [1, 0, 0, 0, 0]},
        {"p_dd": [0.5, 0.5, 0.5, 0, 0, 0]},
        {"p_dd": [1.5, -0.5, 0, 0, 0, 0]},
        {"p_dd": [float("nan"), 0, 0, 0, 0, 1]},
        {"p_dd": [float("inf"), 0, 0, 0, 0, 1]},
        {"p_dd": ["a", 0, 0, 0, 0, 1]},
        {"fc": float("nan")},
        {"fc": 1},
        {"fc": 0.5},
    ],
)
def test_invalid_arguments(kwargs):
    with pytest.raises(InvalidArgumentError):
        SimulationConfig(**kwargs)


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        SimulationConfig(fc=1)
