"""
solve(): the proof engine's entry point
Parses the problem, builds its goal set and runs the search
"""

import time
from typing import Any, Dict, Optional, Sequence, Union
import logging

from .config import SolverConfig
from .formatter import INVALID_INPUT_MESSAGE, NOT_FOUND_MESSAGE, format_failure, format_success
from .goals import GoalSet
from .parser import FormulaParser, split_premises
from .search import ProofSearch, ProofStep, SearchBudget

logger = logging.getLogger(__name__)


def solve(premises: Union[str, Sequence[str]],
          conclusion: str,
          config: Optional[SolverConfig] = None,
          budget: Optional[SearchBudget] = None) -> Dict[str, Any]:
    """
    Search for a proof of conclusion from premises

    Args:
        premises: Premise formulas, or one comma separated string
        conclusion: Formula to derive
        config: Solver limits, defaults to SolverConfig()
        budget: Search budget, defaults to one built from config

    Returns:
        {'success': True, 'steps': [...]} or {'success': False, 'message': ...}
    """
    config = config or SolverConfig()
    parser = FormulaParser(max_nesting=config.max_nesting)

    if isinstance(premises, str):
        premises = split_premises(premises)

    premise_steps = []
    seen = set()
    for segment in premises or ():
        expression = parser.parse(segment)
        if expression is None:
            logger.debug(f"Dropping unparseable premise {segment!r}")
            continue
        # A path never holds the same formula twice
        if expression in seen:
            continue
        seen.add(expression)
        premise_steps.append(ProofStep.premise(expression))

    target = parser.parse(conclusion)
    if not premise_steps or target is None:
        logger.info("Rejecting problem with no usable premises or conclusion")
        return format_failure(INVALID_INPUT_MESSAGE)

    goals = GoalSet.build((step.expression for step in premise_steps), target)
    search = ProofSearch(goals, max_depth=config.max_depth, budget=budget or config.budget())

    start_time = time.time()
    path = search.run(premise_steps, target)
    execution_time = (time.time() - start_time) * 1000

    if path is None:
        logger.info(f"No proof of {target} from {len(premise_steps)} premises "
                    f"({search.budget.expansions} expansions, {execution_time:.1f}ms)")
        return format_failure(NOT_FOUND_MESSAGE)

    logger.info(f"Proved {target} in {len(path) - len(premise_steps)} steps "
                f"at depth {search.depth_reached} ({execution_time:.1f}ms)")
    return format_success(path)
