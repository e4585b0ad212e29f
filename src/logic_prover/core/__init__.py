"""
Propositional proof engine
"""

from .expression import Expression, Kind
from .parser import FormulaParser, parse_formula, split_premises
from .rules import RuleTag, ReplacementLaw, Candidate
from .goals import GoalSet
from .search import DerivationPath, ProofSearch, ProofStep, SearchBudget
from .config import SolverConfig
from .prover import solve
from .checker import StepChecker
from .certificate import ProofCertificateGenerator

__all__ = [
    "Expression",
    "Kind",
    "FormulaParser",
    "parse_formula",
    "split_premises",
    "RuleTag",
    "ReplacementLaw",
    "Candidate",
    "GoalSet",
    "DerivationPath",
    "ProofSearch",
    "ProofStep",
    "SearchBudget",
    "SolverConfig",
    "solve",
    "StepChecker",
    "ProofCertificateGenerator"
]
