"""Ground-truth scRNA-seq simulation for differential-distribution benchmarks."""

from .config import SimulationConfig
from .errors import (
    InsufficientPopulationError,
    InvalidArgumentError,
    InvalidParameterError,
    SimulationError,
)
from .generators import Category
from .reference import ReferenceDataset
from .simulator import DDSim, simulate_data

__all__ = [
    "Category",
    "DDSim",
    "InsufficientPopulationError",
    "InvalidArgumentError",
    "InvalidParameterError",
    "ReferenceDataset",
    "SimulationConfig",
    "SimulationError",
    "simulate_data",
]
