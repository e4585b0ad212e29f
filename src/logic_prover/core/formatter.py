"""
Result formatting for solve()
"""

from typing import Any, Dict, Iterable

from .rules import RuleTag
from .search import ProofStep

INVALID_INPUT_MESSAGE = "Error: Invalid Input."
NOT_FOUND_MESSAGE = "Proof not found within search limits."


def format_reference(step: ProofStep) -> str:
    """Render cited steps 1-based, e.g. "(1, 2)"; premises cite nothing"""
    if step.rule == RuleTag.PREMISE or not step.refs:
        return ""
    return "(" + ", ".join(str(ref + 1) for ref in step.refs) + ")"


def format_step(index: int, step: ProofStep) -> Dict[str, Any]:
    return {
        'index': index + 1,
        'expression': str(step.expression),
        'rule': step.rule.value,
        'ref': format_reference(step)
    }


def format_success(steps: Iterable[ProofStep]) -> Dict[str, Any]:
    return {
        'success': True,
        'steps': [format_step(i, step) for i, step in enumerate(steps)]
    }


def format_failure(message: str) -> Dict[str, Any]:
    return {
        'success': False,
        'message': message
    }
