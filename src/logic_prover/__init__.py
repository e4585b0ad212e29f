"""
logic_prover - propositional logic proof search
"""

from .core import solve, SolverConfig, SearchBudget

__version__ = "1.0.0"

__all__ = [
    "solve",
    "SolverConfig",
    "SearchBudget"
]
