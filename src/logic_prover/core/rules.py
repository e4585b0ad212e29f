"""
Inference and replacement rules
Each rule maps one or two known formulas to candidate new formulas
"""

from typing import Iterator, List, Optional
from dataclasses import dataclass
from enum import Enum

from .expression import Expression, Kind
from .goals import GoalSet


class RuleTag(Enum):
    """Justification tags shown next to each proof step"""
    PREMISE = "Premise"
    REPLACEMENT = "Repl"
    SIMPLIFICATION = "Simp"
    ADDITION = "Add"
    CONJUNCTION = "Conj"
    MODUS_PONENS = "MP"
    MODUS_TOLLENS = "MT"
    DISJUNCTIVE_SYLLOGISM = "DS"
    HYPOTHETICAL_SYLLOGISM = "HS"
    CONSTRUCTIVE_DILEMMA = "CD"


class ReplacementLaw(Enum):
    """Equivalences applied under the Repl tag"""
    DOUBLE_NEGATION = "DN"
    COMMUTATION = "Comm"
    MATERIAL_IMPLICATION = "Impl"
    DE_MORGAN = "DM"


@dataclass(frozen=True)
class Candidate:
    """A formula some rule can derive, with the rule that derives it"""
    expression: Expression
    rule: RuleTag
    law: Optional[ReplacementLaw] = None


# Equivalences (Repl)

def replacements(p: Expression) -> List[Candidate]:
    """
    Apply every replacement law to the top of p

    Order: DN elimination, DN introduction, Comm, Impl, Impl reversed, DM.
    De Morgan only rewrites ~(P . Q) into ~P v ~Q.
    """
    results = []

    def add(expression, law):
        results.append(Candidate(expression, RuleTag.REPLACEMENT, law))

    if p.is_negation and p.left.is_negation:
        add(p.left.left, ReplacementLaw.DOUBLE_NEGATION)
    add(Expression.negate(Expression.negate(p)), ReplacementLaw.DOUBLE_NEGATION)

    if p.kind in (Kind.AND, Kind.OR):
        add(Expression(p.kind, left=p.right, right=p.left), ReplacementLaw.COMMUTATION)

    if p.is_implication:
        add(Expression.disjoin(Expression.negate(p.left), p.right),
            ReplacementLaw.MATERIAL_IMPLICATION)
    if p.is_disjunction and p.left.is_negation:
        add(Expression.implies(p.left.left, p.right), ReplacementLaw.MATERIAL_IMPLICATION)

    if p.is_negation and p.left.is_conjunction:
        add(Expression.disjoin(Expression.negate(p.left.left), Expression.negate(p.left.right)),
            ReplacementLaw.DE_MORGAN)

    return results


# Single premise inferences

def simplification(p: Expression) -> List[Candidate]:
    """P . Q yields P and Q"""
    if not p.is_conjunction:
        return []
    return [
        Candidate(p.left, RuleTag.SIMPLIFICATION),
        Candidate(p.right, RuleTag.SIMPLIFICATION),
    ]


def addition(p: Expression, goals: GoalSet) -> List[Candidate]:
    """P yields any goal disjunction with P as one side"""
    return [Candidate(goal, RuleTag.ADDITION) for goal in goals.disjunctions_with(p)]


# Two premise inferences

def modus_ponens(p1: Expression, p2: Expression) -> List[Candidate]:
    if p1.is_implication and p1.left == p2:
        return [Candidate(p1.right, RuleTag.MODUS_PONENS)]
    return []


def modus_tollens(p1: Expression, p2: Expression) -> List[Candidate]:
    if p1.is_implication and p2.is_negation and p1.right == p2.left:
        return [Candidate(Expression.negate(p1.left), RuleTag.MODUS_TOLLENS)]
    return []


def disjunctive_syllogism(p1: Expression, p2: Expression) -> List[Candidate]:
    """P v Q with ~P yields Q, with ~Q yields P"""
    if not (p1.is_disjunction and p2.is_negation):
        return []
    results = []
    if p2.left == p1.left:
        results.append(Candidate(p1.right, RuleTag.DISJUNCTIVE_SYLLOGISM))
    if p2.left == p1.right:
        results.append(Candidate(p1.left, RuleTag.DISJUNCTIVE_SYLLOGISM))
    return results


def hypothetical_syllogism(p1: Expression, p2: Expression) -> List[Candidate]:
    if p1.is_implication and p2.is_implication and p1.right == p2.left:
        return [Candidate(Expression.implies(p1.left, p2.right), RuleTag.HYPOTHETICAL_SYLLOGISM)]
    return []


def constructive_dilemma(p1: Expression, p2: Expression) -> List[Candidate]:
    """(P > Q) . (R > S) with P v R (either order) yields Q v S"""
    if not (p1.is_conjunction and p1.left.is_implication
            and p1.right.is_implication and p2.is_disjunction):
        return []
    first, second = p1.left, p1.right
    if ((p2.left == first.left and p2.right == second.left)
            or (p2.left == second.left and p2.right == first.left)):
        return [Candidate(Expression.disjoin(first.right, second.right),
                          RuleTag.CONSTRUCTIVE_DILEMMA)]
    return []


def conjunction(p1: Expression, p2: Expression, goals: GoalSet) -> List[Candidate]:
    """P and Q yield the goal conjunction made of exactly those two sides"""
    return [Candidate(goal, RuleTag.CONJUNCTION) for goal in goals.conjunctions_of(p1, p2)]


def single_premise_candidates(p1: Expression, goals: GoalSet) -> Iterator[Candidate]:
    """Every candidate derivable from one formula, in search order"""
    yield from replacements(p1)
    yield from simplification(p1)
    yield from addition(p1, goals)


def two_premise_candidates(p1: Expression, p2: Expression, goals: GoalSet) -> Iterator[Candidate]:
    """Every candidate derivable from an ordered pair of formulas, in search order"""
    yield from modus_ponens(p1, p2)
    yield from modus_tollens(p1, p2)
    yield from disjunctive_syllogism(p1, p2)
    yield from hypothetical_syllogism(p1, p2)
    yield from constructive_dilemma(p1, p2)
    yield from conjunction(p1, p2, goals)
