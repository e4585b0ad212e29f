"""
Iterative deepening proof search
Grows a derivation path from the premises until the conclusion appears
"""

import time
import threading
from typing import Iterable, Iterator, List, Optional, Tuple
from dataclasses import dataclass
import logging

from .expression import Expression
from .goals import GoalSet
from .rules import RuleTag, ReplacementLaw, single_premise_candidates, two_premise_candidates

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 12


@dataclass(frozen=True)
class ProofStep:
    """One line of a derivation"""
    expression: Expression
    rule: RuleTag
    refs: Tuple[int, ...] = ()  # zero-based indices of cited steps
    law: Optional[ReplacementLaw] = None

    @classmethod
    def premise(cls, expression: Expression) -> "ProofStep":
        return cls(expression, RuleTag.PREMISE)


class DerivationPath:
    """
    Ordered proof steps with set-backed membership

    push refuses an expression the path already holds, so a path
    never contains two equal formulas. pop undoes the last push.
    """

    def __init__(self, steps: Iterable[ProofStep] = ()):
        self._steps: List[ProofStep] = []
        self._known = set()
        for step in steps:
            self.push(step)

    def push(self, step: ProofStep) -> bool:
        if step.expression in self._known:
            return False
        self._steps.append(step)
        self._known.add(step.expression)
        return True

    def pop(self) -> ProofStep:
        step = self._steps.pop()
        self._known.discard(step.expression)
        return step

    def copy(self) -> "DerivationPath":
        return DerivationPath(self._steps)

    @property
    def steps(self) -> Tuple[ProofStep, ...]:
        return tuple(self._steps)

    def __contains__(self, expression) -> bool:
        return expression in self._known

    def __getitem__(self, index: int) -> ProofStep:
        return self._steps[index]

    def __iter__(self) -> Iterator[ProofStep]:
        return iter(self._steps)

    def __len__(self) -> int:
        return len(self._steps)


class SearchBudgetExhausted(Exception):
    """Raised inside the search when its budget runs out"""
    pass


class SearchBudget:
    """
    Optional limits on a single search

    Args:
        max_expansions: Maximum number of expand calls
        timeout_ms: Wall clock limit, measured from start()
        cancel_event: Event another thread can set to stop the search
    """

    def __init__(self,
                 max_expansions: Optional[int] = None,
                 timeout_ms: Optional[float] = None,
                 cancel_event: Optional[threading.Event] = None):
        self.max_expansions = max_expansions
        self.timeout_ms = timeout_ms
        self.cancel_event = cancel_event
        self.expansions = 0
        self._deadline = None

    def start(self):
        self.expansions = 0
        if self.timeout_ms is not None:
            self._deadline = time.monotonic() + self.timeout_ms / 1000.0

    def charge(self):
        """Count one expansion, raising SearchBudgetExhausted past a limit"""
        self.expansions += 1
        if self.max_expansions is not None and self.expansions > self.max_expansions:
            raise SearchBudgetExhausted(f"expansion limit {self.max_expansions} reached")
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SearchBudgetExhausted(f"timeout of {self.timeout_ms}ms reached")
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise SearchBudgetExhausted("search cancelled")


class ProofSearch:
    """
    Depth-bounded backtracking search, rerun with growing depth limits

    The goal set belongs to this search alone; nothing is shared
    between instances.
    """

    def __init__(self, goals: GoalSet, max_depth: int = DEFAULT_MAX_DEPTH,
                 budget: Optional[SearchBudget] = None):
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.goals = goals
        self.max_depth = max_depth
        self.budget = budget or SearchBudget()
        self.depth_reached = 0

    def run(self, premises: Iterable[ProofStep], target: Expression) -> Optional[DerivationPath]:
        """
        Search for a derivation of target

        Args:
            premises: Initial steps, copied afresh for every depth limit
            target: Formula to derive

        Returns:
            The successful path, or None when every depth limit fails
            or the budget runs out
        """
        initial = DerivationPath(premises)
        self.budget.start()

        try:
            for depth_limit in range(1, self.max_depth + 1):
                self.depth_reached = depth_limit
                path = initial.copy()
                if self.expand(path, target, 0, depth_limit):
                    logger.debug(f"Proof of {target} found at depth limit {depth_limit}")
                    return path
                logger.debug(f"No proof of {target} within depth {depth_limit}")
        except SearchBudgetExhausted as e:
            logger.warning(f"Search for {target} stopped: {e}")
            return None

        return None

    def expand(self, path: DerivationPath, target: Expression,
               cur_depth: int, max_depth: int) -> bool:
        """
        Try to extend path until it contains target

        Leaves path as it found it when returning False.
        """
        if target in path:
            return True
        if cur_depth >= max_depth:
            return False
        self.budget.charge()

        n = len(path)
        for i in range(n):
            p1 = path[i].expression

            for candidate in single_premise_candidates(p1, self.goals):
                step = ProofStep(candidate.expression, candidate.rule, (i,), candidate.law)
                if self._try(path, step, target, cur_depth, max_depth):
                    return True

            for j in range(n):
                if i == j:
                    continue
                p2 = path[j].expression
                for candidate in two_premise_candidates(p1, p2, self.goals):
                    step = ProofStep(candidate.expression, candidate.rule, (i, j))
                    if self._try(path, step, target, cur_depth, max_depth):
                        return True

        return False

    def _try(self, path: DerivationPath, step: ProofStep, target: Expression,
             cur_depth: int, max_depth: int) -> bool:
        if not path.push(step):
            return False
        if self.expand(path, target, cur_depth + 1, max_depth):
            return True
        path.pop()
        return False
