"""
Constraint Tree for feature models

Cross-tree constraints of a feature model are represented as Abstract
Syntax Trees, never as strings.

The node set is closed:
    - LiteralConstraint       a feature reference
    - NotConstraint           negation
    - ParenthesisConstraint   source grouping, logically transparent
    - AndConstraint / OrConstraint / ImplicationConstraint /
      EquivalenceConstraint   binary connectives
    - ExpressionConstraint    arithmetic comparison over attributes

ARCHITECTURAL RULE:
    Nodes are immutable and compare by value.
    Printing belongs in fmlogic.grammar, classification in
    fmlogic.literals / fmlogic.relations.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class Constraint(ABC):
    """
    Base class for all constraint nodes.

    Every node answers two structural questions:
        sub_parts(): its immediate child constraints, in order
        as_binary(): (left, right) for binary connectives, else None
    """

    def sub_parts(self) -> Tuple["Constraint", ...]:
        return ()

    def as_binary(self) -> Optional[Tuple["Constraint", "Constraint"]]:
        return None


@dataclass(frozen=True)
class LiteralConstraint(Constraint):
    """
    References a feature by name.

    Example:
        Camera

    IMPORTANT:
        This object does NOT check that the feature exists.
        It is just a name reference.
    """

    name: str


@dataclass(frozen=True)
class NotConstraint(Constraint):
    """
    Negation of a sub-constraint.

    Example:
        !Camera   ->  NotConstraint(LiteralConstraint("Camera"))
    """

    content: Constraint

    def sub_parts(self) -> Tuple[Constraint, ...]:
        return (self.content,)


@dataclass(frozen=True)
class ParenthesisConstraint(Constraint):
    """
    Preserves the grouping written in the source text.

    It carries no logical meaning of its own; the translator unwraps it.
    """

    content: Constraint

    def sub_parts(self) -> Tuple[Constraint, ...]:
        return (self.content,)


@dataclass(frozen=True)
class BinaryConstraint(Constraint):
    """
    Base for the four binary connectives.

    Properties:
        left: Left operand
        right: Right operand
    """

    left: Constraint
    right: Constraint

    def sub_parts(self) -> Tuple[Constraint, ...]:
        return (self.left, self.right)

    def as_binary(self) -> Optional[Tuple[Constraint, Constraint]]:
        return (self.left, self.right)


@dataclass(frozen=True)
class AndConstraint(BinaryConstraint):
    """left & right"""


@dataclass(frozen=True)
class OrConstraint(BinaryConstraint):
    """left | right"""


@dataclass(frozen=True)
class ImplicationConstraint(BinaryConstraint):
    """left => right"""


@dataclass(frozen=True)
class EquivalenceConstraint(BinaryConstraint):
    """left <=> right"""


class ComparisonOperator(Enum):
    """Comparison operators allowed in arithmetic constraints."""

    EQUALS = "=="
    NOT_EQUALS = "!="
    GREATER_THAN = ">"
    GREATER_EQUAL = ">="
    LESS_THAN = "<"
    LESS_EQUAL = "<="


@dataclass(frozen=True)
class NumberTerm:
    """A numeric constant inside an arithmetic constraint."""

    value: Union[int, float]


@dataclass(frozen=True)
class AttributeTerm:
    """
    Reads an attribute of a feature, written Feature.attribute.

    Example:
        Battery.capacity
    """

    feature: str
    attribute: str


Term = Union[NumberTerm, AttributeTerm]


@dataclass(frozen=True)
class ExpressionConstraint(Constraint):
    """
    Arithmetic comparison over feature attributes.

    Example:
        Battery.capacity >= 3000

    Propositional engines cannot represent this; translating it raises
    UnsupportedConstructError. It has no child constraints.
    """

    operator: ComparisonOperator
    left: Term
    right: Term
