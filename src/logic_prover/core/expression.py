"""
Expression trees for propositional formulas
Immutable, hashable values with canonical printing
"""

from typing import Iterator, Optional
from dataclasses import dataclass, field
from enum import Enum


class Kind(Enum):
    """Node kinds, valued by their printed operator"""
    ATOM = "atom"
    NOT = "~"
    AND = "."
    OR = "v"
    IMPLIES = ">"


BINARY_KINDS = (Kind.AND, Kind.OR, Kind.IMPLIES)

_OPERATOR_KINDS = {kind.value: kind for kind in BINARY_KINDS}


@dataclass(frozen=True)
class Expression:
    """
    A propositional formula node

    Equality is structural. The hash is computed once when the node is
    built so derivation paths can keep expressions in a set.
    """
    kind: Kind
    symbol: Optional[str] = None
    left: Optional["Expression"] = None
    right: Optional["Expression"] = None
    _hash: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.kind == Kind.ATOM:
            valid = self.symbol is not None and self.left is None and self.right is None
        elif self.kind == Kind.NOT:
            valid = self.symbol is None and self.left is not None and self.right is None
        else:
            valid = self.symbol is None and self.left is not None and self.right is not None
        if not valid:
            raise ValueError(f"Malformed {self.kind.name} node")

        object.__setattr__(self, '_hash', hash((self.kind, self.symbol, self.left, self.right)))

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, Expression) or self._hash != other._hash:
            return False
        return (self.kind == other.kind and self.symbol == other.symbol
                and self.left == other.left and self.right == other.right)

    # Constructors

    @classmethod
    def atom(cls, symbol: str) -> "Expression":
        return cls(Kind.ATOM, symbol=symbol)

    @classmethod
    def negate(cls, operand: "Expression") -> "Expression":
        return cls(Kind.NOT, left=operand)

    @classmethod
    def conjoin(cls, left: "Expression", right: "Expression") -> "Expression":
        return cls(Kind.AND, left=left, right=right)

    @classmethod
    def disjoin(cls, left: "Expression", right: "Expression") -> "Expression":
        return cls(Kind.OR, left=left, right=right)

    @classmethod
    def implies(cls, left: "Expression", right: "Expression") -> "Expression":
        return cls(Kind.IMPLIES, left=left, right=right)

    @classmethod
    def binary(cls, operator: str, left: "Expression", right: "Expression") -> "Expression":
        """Build a binary node from its operator character"""
        kind = _OPERATOR_KINDS.get(operator)
        if kind is None:
            raise ValueError(f"Unknown operator: {operator!r}")
        return cls(kind, left=left, right=right)

    # Shape predicates

    @property
    def is_atom(self) -> bool:
        return self.kind == Kind.ATOM

    @property
    def is_negation(self) -> bool:
        return self.kind == Kind.NOT

    @property
    def is_conjunction(self) -> bool:
        return self.kind == Kind.AND

    @property
    def is_disjunction(self) -> bool:
        return self.kind == Kind.OR

    @property
    def is_implication(self) -> bool:
        return self.kind == Kind.IMPLIES

    def subexpressions(self) -> Iterator["Expression"]:
        """Yield this node and every descendant, pre-order"""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def atoms(self) -> set:
        """Symbols of every atom in the formula"""
        return {node.symbol for node in self.subexpressions() if node.is_atom}

    def _operand(self) -> str:
        # Atoms and negations print bare, everything else is wrapped
        if self.kind in (Kind.ATOM, Kind.NOT):
            return str(self)
        return f"({self})"

    def __str__(self) -> str:
        if self.kind == Kind.ATOM:
            return self.symbol
        if self.kind == Kind.NOT:
            return "~" + self.left._operand()
        return f"{self.left._operand()} {self.kind.value} {self.right._operand()}"

    def __repr__(self) -> str:
        return f"Expression({str(self)!r})"
