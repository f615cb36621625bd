"""Pure stat computations for Anima Nexus.

This package contains deterministic, testable computations that operate on
in-memory inputs and return DTOs. It must not import Django or perform any
database I/O.
"""

from .effective_stats import effective_stats
from .genetics import roll_genetic_bonus
from .stat_roller import InvalidTierError, roll

__all__ = ["InvalidTierError", "effective_stats", "roll", "roll_genetic_bonus"]
