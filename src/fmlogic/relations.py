"""
Requires / excludes recognition on constraint trees.

The standard encodings are:
    A requires B   ->   !A | B
    A excludes B   ->   !A | !B

Only that exact two-operand shape at the top of the constraint is
recognized. Logically equivalent constraints with more literals, nested
literals or extra parentheses are reported as NONE; callers then emit the
constraint generically.

The single-feature variants additionally accept implication syntax:
    A => B    (requires)
    A => !B   (excludes)

Nothing in this module raises.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from fmlogic.constraints import Constraint, ImplicationConstraint, OrConstraint
from fmlogic.literals import is_negative_literal, is_positive_literal

LOG = logging.getLogger(__name__)


class RelationKind(Enum):
    REQUIRES = "requires"
    EXCLUDES = "excludes"
    SINGLE_FEATURE_REQUIRES = "single_feature_requires"
    SINGLE_FEATURE_EXCLUDES = "single_feature_excludes"
    NONE = "none"


def literal_name(constraint: Any) -> Optional[str]:
    """Feature name of a positive or negative literal, else None."""
    if is_positive_literal(constraint):
        return constraint.name
    if is_negative_literal(constraint):
        return constraint.content.name
    return None


@dataclass(frozen=True)
class RelationMatch:
    """
    Result of classify_relation().

    Properties:
        kind:
            The recognized RelationKind

        first / second:
            The literal operands that justify the kind, in the order
            "first requires/excludes second". For !A | B that is
            (!A, B); for A => !B it is (A, !B). None for NONE.
    """

    kind: RelationKind
    first: Optional[Constraint] = None
    second: Optional[Constraint] = None

    @property
    def source(self) -> Optional[str]:
        """Name of the requiring / excluding feature."""
        return literal_name(self.first)

    @property
    def target(self) -> Optional[str]:
        """Name of the required / excluded feature."""
        return literal_name(self.second)


NO_RELATION = RelationMatch(RelationKind.NONE)


def is_requires(constraint: Any) -> bool:
    """!A | B or B | !A."""
    if not isinstance(constraint, OrConstraint):
        return False
    left, right = constraint.left, constraint.right
    return (is_negative_literal(left) and is_positive_literal(right)) or \
        (is_positive_literal(left) and is_negative_literal(right))


def is_excludes(constraint: Any) -> bool:
    """!A | !B."""
    if not isinstance(constraint, OrConstraint):
        return False
    return is_negative_literal(constraint.left) and is_negative_literal(constraint.right)


def is_single_feature_requires(constraint: Any) -> bool:
    """Requires in disjunctive form, or A => B."""
    if isinstance(constraint, ImplicationConstraint):
        return is_positive_literal(constraint.left) and is_positive_literal(constraint.right)
    return is_requires(constraint)


def is_single_feature_excludes(constraint: Any) -> bool:
    """Excludes in disjunctive form, or A => !B."""
    if isinstance(constraint, ImplicationConstraint):
        return is_positive_literal(constraint.left) and is_negative_literal(constraint.right)
    return is_excludes(constraint)


def get_first_positive_literal(constraint: Any) -> Optional[Constraint]:
    """
    The node itself if it is a positive literal, else its first immediate
    child that is one, else None.
    """
    if not isinstance(constraint, Constraint):
        return None
    if is_positive_literal(constraint):
        return constraint
    for child in constraint.sub_parts():
        if is_positive_literal(child):
            return child
    return None


def get_first_negative_literal(constraint: Any) -> Optional[Constraint]:
    """Like get_first_positive_literal(), for negative literals."""
    if not isinstance(constraint, Constraint):
        return None
    if is_negative_literal(constraint):
        return constraint
    for child in constraint.sub_parts():
        if is_negative_literal(child):
            return child
    return None


def classify_relation(constraint: Any) -> RelationMatch:
    """
    Tag a top-level constraint with the relation its shape encodes.

    Checked in order: REQUIRES, EXCLUDES, then the implication shapes
    (SINGLE_FEATURE_REQUIRES, SINGLE_FEATURE_EXCLUDES). Disjunctive shapes
    always report the strict kinds.
    """
    if is_requires(constraint):
        match = RelationMatch(
            RelationKind.REQUIRES,
            get_first_negative_literal(constraint),
            get_first_positive_literal(constraint),
        )
    elif is_excludes(constraint):
        match = RelationMatch(RelationKind.EXCLUDES, constraint.left, constraint.right)
    elif is_single_feature_requires(constraint):
        match = RelationMatch(RelationKind.SINGLE_FEATURE_REQUIRES, constraint.left, constraint.right)
    elif is_single_feature_excludes(constraint):
        match = RelationMatch(RelationKind.SINGLE_FEATURE_EXCLUDES, constraint.left, constraint.right)
    else:
        match = NO_RELATION

    LOG.debug("Classified %r as %s", constraint, match.kind.name)
    return match
