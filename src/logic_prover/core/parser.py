"""
Formula parser for infix propositional logic
Converts strings such as "(P > Q) . ~R" into expression trees
"""

import re
from typing import List, Optional
import logging

from .expression import Expression

logger = logging.getLogger(__name__)

DEFAULT_MAX_NESTING = 256

IMPLIES_OPERATORS = ('>',)
JUNCTION_OPERATORS = ('v', '.')


class FormulaParser:
    """
    Parses infix formulas into Expression trees

    Precedence, lowest first: '>' then '.' and 'v' on one shared level,
    then '~', then atoms. Within a level the rightmost operator outside
    parentheses splits the formula. The parser never raises; anything it
    cannot build a complete tree for parses to None.
    """

    def __init__(self, max_nesting: int = DEFAULT_MAX_NESTING):
        self.max_nesting = max_nesting
        self._whitespace = re.compile(r'\s+')

    def parse(self, text: Optional[str]) -> Optional[Expression]:
        """
        Parse a single formula

        Args:
            text: Formula string, whitespace anywhere is ignored

        Returns:
            Expression tree, or None for empty or malformed input
        """
        if not text:
            return None
        buffer = self._whitespace.sub('', text)
        return self._parse(buffer, 0, len(buffer), 0)

    def _parse(self, text: str, start: int, end: int, depth: int) -> Optional[Expression]:
        if start >= end:
            return None
        if depth > self.max_nesting:
            logger.warning(f"Formula nesting exceeds {self.max_nesting} levels, discarding")
            return None

        if text[start] == '(' and text[end - 1] == ')' and self._is_wrapped(text, start, end):
            return self._parse(text, start + 1, end - 1, depth + 1)

        split = self._find_split(text, start, end, IMPLIES_OPERATORS)
        if split < 0:
            split = self._find_split(text, start, end, JUNCTION_OPERATORS)

        if split >= 0:
            left = self._parse(text, start, split, depth + 1)
            right = self._parse(text, split + 1, end, depth + 1)
            if left is None or right is None:
                return None
            return Expression.binary(text[split], left, right)

        if text[start] == '~':
            operand = self._parse(text, start + 1, end, depth + 1)
            if operand is None:
                return None
            return Expression.negate(operand)

        return Expression.atom(text[start:end])

    @staticmethod
    def _is_wrapped(text: str, start: int, end: int) -> bool:
        """True if the opening paren at start closes only at end - 1"""
        balance = 0
        for i in range(start, end - 1):
            if text[i] == '(':
                balance += 1
            elif text[i] == ')':
                balance -= 1
            if balance == 0:
                return False
        return True

    @staticmethod
    def _find_split(text: str, start: int, end: int, operators) -> int:
        """Index of the rightmost operator at paren depth zero, or -1"""
        balance = 0
        for i in range(end - 1, start - 1, -1):
            char = text[i]
            if char == ')':
                balance += 1
            elif char == '(':
                balance -= 1
            if balance == 0 and char in operators:
                return i
        return -1


def split_premises(text: str) -> List[str]:
    """Split a comma separated premise list into formula segments"""
    if not text:
        return []
    return [segment.strip() for segment in text.split(',')]


_default_parser = FormulaParser()


def parse_formula(text: Optional[str]) -> Optional[Expression]:
    """Parse with the default nesting limit"""
    return _default_parser.parse(text)
