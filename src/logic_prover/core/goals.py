"""
Goal set: the sub-formulas of a problem's premises and conclusion
Bounds Addition and Conjunction to formulas the problem mentions
"""

from typing import Dict, FrozenSet, Iterable, Iterator, List, Tuple

from .expression import Expression


class GoalSet:
    """
    Immutable set of every sub-formula of the conclusion and premises

    Built once per solve call and handed to the search explicitly.
    Members keep first-seen order: conclusion first, then premises.
    """

    def __init__(self, members: Iterable[Expression]):
        self._members: Tuple[Expression, ...] = tuple(dict.fromkeys(members))
        self._lookup: FrozenSet[Expression] = frozenset(self._members)
        self._disjunctions: Dict[Expression, List[Expression]] = {}
        self._conjunctions: Dict[FrozenSet[Expression], List[Expression]] = {}

        for goal in self._members:
            if goal.is_disjunction:
                for side in dict.fromkeys((goal.left, goal.right)):
                    self._disjunctions.setdefault(side, []).append(goal)
            elif goal.is_conjunction:
                key = frozenset((goal.left, goal.right))
                self._conjunctions.setdefault(key, []).append(goal)

    @classmethod
    def build(cls, premises: Iterable[Expression], conclusion: Expression) -> "GoalSet":
        """Collect the conclusion's and premises' sub-formulas"""
        def collect():
            yield from conclusion.subexpressions()
            for premise in premises:
                yield from premise.subexpressions()
        return cls(collect())

    def disjunctions_with(self, side: Expression) -> List[Expression]:
        """Goal disjunctions having side as their left or right disjunct"""
        return list(self._disjunctions.get(side, ()))

    def conjunctions_of(self, first: Expression, second: Expression) -> List[Expression]:
        """Goal conjunctions made of first and second, in either order"""
        if first == second:
            return []
        return list(self._conjunctions.get(frozenset((first, second)), ()))

    def __contains__(self, expression) -> bool:
        return expression in self._lookup

    def __iter__(self) -> Iterator[Expression]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"GoalSet({[str(goal) for goal in self._members]})"
