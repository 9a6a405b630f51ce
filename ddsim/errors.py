"""Exceptions raised by the simulation engine."""


class SimulationError(Exception):
    """Base class for all simulation failures."""


class InvalidArgumentError(SimulationError, ValueError):
    """A simulation argument or reference table is malformed."""


class InsufficientPopulationError(SimulationError, ValueError):
    """More elements were requested than remain in a sampling pool."""


class InvalidParameterError(SimulationError, ValueError):
    """A reference gene's mean or dispersion cannot parameterize a count draw."""
