# creature_evolution_library/errors.py


class SimulationError(Exception):
    """Base class for every error raised by the simulation library."""


class ConstructionError(SimulationError, ValueError):
    """
    Raised when an object is built from an invalid configuration:
    non-positive sizes, a malformed topology or a genome of the wrong length.
    """


class InvariantViolation(SimulationError, RuntimeError):
    """
    Raised when a caller breaks an operation's contract, e.g. propagating an
    input of the wrong length or crossing over genomes of different lengths.
    """
