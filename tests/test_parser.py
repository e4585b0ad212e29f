"""
Tests for the formula parser
"""

import pytest
from logic_prover.core.expression import Expression, Kind
from logic_prover.core.parser import FormulaParser, parse_formula, split_premises

P = Expression.atom("P")
Q = Expression.atom("Q")
R = Expression.atom("R")


class TestFormulaParser:
    """Test cases for FormulaParser"""

    def setup_method(self):
        """Set up test fixtures"""
        self.parser = FormulaParser()

    @pytest.mark.parametrize("symbol", ["P", "Q", "Rain", "p1", "X_2"])
    def test_atom_round_trip(self, symbol):
        """Printing a parsed atom gives back the same string"""
        assert str(self.parser.parse(symbol)) == symbol

    def test_whitespace_is_ignored(self):
        assert self.parser.parse("  P   >\tQ ") == Expression.implies(P, Q)

    def test_empty_input(self):
        assert self.parser.parse("") is None
        assert self.parser.parse("   ") is None
        assert self.parser.parse(None) is None

    def test_negation(self):
        assert self.parser.parse("~P") == Expression.negate(P)
        assert self.parser.parse("~~P") == Expression.negate(Expression.negate(P))

    def test_outer_parentheses_stripped(self):
        assert self.parser.parse("((P))") == P
        assert self.parser.parse("(P . Q)") == Expression.conjoin(P, Q)

    def test_parentheses_that_do_not_wrap(self):
        """(P > Q) . (R > Q) is a conjunction, not a wrapped formula"""
        result = self.parser.parse("(P > Q) . (R > Q)")
        assert result == Expression.conjoin(Expression.implies(P, Q), Expression.implies(R, Q))

    def test_implication_binds_loosest(self):
        assert self.parser.parse("P > Q . R") == Expression.implies(P, Expression.conjoin(Q, R))
        assert self.parser.parse("P v Q > R") == Expression.implies(Expression.disjoin(P, Q), R)

    def test_rightmost_implication_splits(self):
        assert self.parser.parse("P > Q > R") == Expression.implies(Expression.implies(P, Q), R)

    def test_and_or_share_one_level(self):
        """Whichever of . and v is rightmost splits the formula"""
        assert self.parser.parse("P . Q v R") == Expression.disjoin(Expression.conjoin(P, Q), R)
        assert self.parser.parse("P v Q . R") == Expression.conjoin(Expression.disjoin(P, Q), R)

    def test_negation_binds_tighter_than_binary(self):
        assert self.parser.parse("~P . Q") == Expression.conjoin(Expression.negate(P), Q)

    def test_negated_group(self):
        assert self.parser.parse("~(P v Q)") == Expression.negate(Expression.disjoin(P, Q))

    def test_lowercase_v_is_always_or(self):
        """Atoms cannot contain a 'v'; it is read as disjunction"""
        result = self.parser.parse("Above")
        assert result == Expression.disjoin(Expression.atom("Abo"), Expression.atom("e"))

    def test_missing_operand(self):
        assert self.parser.parse("P >") is None
        assert self.parser.parse("> Q") is None
        assert self.parser.parse("~") is None
        assert self.parser.parse("P . ~") is None

    def test_empty_parentheses(self):
        assert self.parser.parse("()") is None

    def test_residual_garbage_becomes_atom(self):
        result = self.parser.parse("(P")
        assert result.kind == Kind.ATOM
        assert result.symbol == "(P"

    def test_nesting_limit(self):
        parser = FormulaParser(max_nesting=3)
        assert parser.parse("~~~P") == Expression.negate(Expression.negate(Expression.negate(P)))
        assert parser.parse("~~~~P") is None

    def test_long_flat_formula_within_default_limit(self):
        text = " . ".join(f"A{i}" for i in range(100))
        result = parse_formula(text)
        assert result is not None
        assert len(result.atoms()) == 100


class TestSplitPremises:

    def test_split(self):
        assert split_premises("P > Q, P") == ["P > Q", "P"]

    def test_empty_segments_kept_for_caller(self):
        assert split_premises("P,,Q") == ["P", "", "Q"]

    def test_empty(self):
        assert split_premises("") == []
