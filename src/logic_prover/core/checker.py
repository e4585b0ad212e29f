"""
Step checker using Z3
Confirms every step of a proof follows from the steps it cites
"""

import re
import time
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union
import z3
import logging
from dataclasses import dataclass

from .expression import Expression, Kind
from .parser import FormulaParser
from .rules import RuleTag
from .search import ProofStep

logger = logging.getLogger(__name__)

_REF_PATTERN = re.compile(r'\d+')


@dataclass
class StepViolation:
    """A proof step the solver could not confirm"""
    index: int
    rule: str
    expression: str
    status: str
    detail: str

    def to_dict(self) -> Dict:
        return {
            'step': self.index,
            'rule': self.rule,
            'expression': self.expression,
            'status': self.status,
            'detail': self.detail
        }


class StepChecker:
    """
    Re-checks proofs semantically

    Each derived step must be entailed by the steps it references;
    replacement steps must be equivalent to their single reference.
    Accepts either ProofStep objects or the step dicts solve() returns.
    """

    def __init__(self, timeout_ms: int = 1000):
        self.timeout_ms = timeout_ms
        self.parser = FormulaParser()
        self.z3_solver = z3.Solver()
        self.z3_solver.set("timeout", timeout_ms)

    def to_z3(self, expression: Expression, variables: Optional[Dict[str, z3.BoolRef]] = None) -> z3.BoolRef:
        """Translate an expression into a Z3 boolean formula"""
        variables = {} if variables is None else variables

        if expression.kind == Kind.ATOM:
            if expression.symbol not in variables:
                variables[expression.symbol] = z3.Bool(expression.symbol)
            return variables[expression.symbol]
        if expression.kind == Kind.NOT:
            return z3.Not(self.to_z3(expression.left, variables))

        left = self.to_z3(expression.left, variables)
        right = self.to_z3(expression.right, variables)
        if expression.kind == Kind.AND:
            return z3.And(left, right)
        elif expression.kind == Kind.OR:
            return z3.Or(left, right)
        return z3.Implies(left, right)

    def is_entailed(self, premises: Sequence[Expression], formula: Expression) -> bool:
        """True if the premises jointly entail formula"""
        return self._entailment_status(premises, formula) == z3.unsat

    def _entailment_status(self, premises: Sequence[Expression], formula: Expression,
                           equivalent: bool = False):
        variables = {}
        antecedents = [self.to_z3(p, variables) for p in premises]
        consequent = self.to_z3(formula, variables)

        if equivalent:
            claim = antecedents[0] == consequent
        elif not antecedents:
            claim = consequent
        elif len(antecedents) == 1:
            claim = z3.Implies(antecedents[0], consequent)
        else:
            claim = z3.Implies(z3.And(*antecedents), consequent)

        # Entailment holds when its negation is unsatisfiable
        self.z3_solver.push()
        try:
            self.z3_solver.add(z3.Not(claim))
            return self.z3_solver.check()
        finally:
            self.z3_solver.pop()

    def check(self, steps: Iterable[Union[ProofStep, Dict[str, Any]]]) -> Dict[str, Any]:
        """
        Check every step of a proof

        Args:
            steps: ProofStep objects, or formatted step dicts

        Returns:
            Report with validity, violations and timing
        """
        start_time = time.time()
        self.z3_solver.reset()
        self.z3_solver.set("timeout", self.timeout_ms)

        normalized = [self._normalize(step) for step in steps]
        violations: List[StepViolation] = []

        for index, (expression, rule, refs) in enumerate(normalized):
            violation = self._check_step(index, expression, rule, refs, normalized)
            if violation is not None:
                logger.warning(f"Step {violation.index} ({violation.rule}) failed check: {violation.detail}")
                violations.append(violation)

        execution_time = (time.time() - start_time) * 1000

        return {
            'valid': len(violations) == 0,
            'violations': [v.to_dict() for v in violations],
            'steps_checked': len(normalized),
            'execution_time_ms': execution_time
        }

    def _check_step(self, index: int, expression: Optional[Expression], rule: str,
                    refs: Tuple[int, ...], steps: List) -> Optional[StepViolation]:
        def violation(status, detail):
            return StepViolation(index + 1, rule, str(expression), status, detail)

        if expression is None:
            return violation('unparseable', "Step expression could not be parsed")
        if rule == RuleTag.PREMISE.value:
            return None
        if not refs:
            return violation('invalid_reference', "Derived step cites no earlier step")
        if any(ref < 0 or ref >= index for ref in refs):
            return violation('invalid_reference', f"References {[r + 1 for r in refs]} are not all earlier steps")

        cited = [steps[ref][0] for ref in refs]
        if any(c is None for c in cited):
            return violation('invalid_reference', "Cites an unparseable step")

        equivalent = rule == RuleTag.REPLACEMENT.value
        if equivalent and len(cited) != 1:
            return violation('invalid_reference', "Replacement must cite exactly one step")

        status = self._entailment_status(cited, expression, equivalent=equivalent)
        if status == z3.unsat:
            return None
        if status == z3.unknown:
            return violation('unknown', "Solver could not decide the step")
        return violation('not_entailed', "Cited steps do not entail this step")

    def _normalize(self, step) -> Tuple[Optional[Expression], str, Tuple[int, ...]]:
        """Reduce a step to (expression, rule tag, zero-based refs)"""
        if isinstance(step, ProofStep):
            return step.expression, step.rule.value, step.refs

        expression = self.parser.parse(step.get('expression', ''))
        refs = tuple(int(ref) - 1 for ref in _REF_PATTERN.findall(step.get('ref', '') or ''))
        return expression, step.get('rule', ''), refs
