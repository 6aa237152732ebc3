"""
Literal classification for constraint trees.

Classification is by shape only:
    positive literal   A
    negative literal   !A
    neither            anything else, including !!A and !(A & B)

Relation matching (fmlogic.relations) relies on this narrow distinction.

The is_* predicates never raise. The collectors and counters walk the
whole tree and stop with MalformedTreeError past the configured depth.
"""

from typing import Any, Set

from fmlogic.constraints import Constraint, LiteralConstraint, NotConstraint
from fmlogic.settings import check_depth


def is_positive_literal(constraint: Any) -> bool:
    return isinstance(constraint, LiteralConstraint)


def is_negative_literal(constraint: Any) -> bool:
    """True for a negation whose content is a bare literal."""
    return isinstance(constraint, NotConstraint) and isinstance(constraint.content, LiteralConstraint)


def is_literal(constraint: Any) -> bool:
    return is_positive_literal(constraint) or is_negative_literal(constraint)


def _sub_parts(constraint: Any):
    if isinstance(constraint, Constraint):
        return constraint.sub_parts()
    return ()


def get_literals(constraint: Constraint) -> Set[LiteralConstraint]:
    """
    Collect every bare literal in the tree.

    A literal yields itself; negated literals contribute their content.
    """
    literals: Set[LiteralConstraint] = set()
    _collect(constraint, is_positive_literal, literals, 1, stop_at_negation=False)
    return literals


def get_positive_literals(constraint: Constraint) -> Set[LiteralConstraint]:
    """Collect bare literals that are not the direct content of a negation."""
    literals: Set[LiteralConstraint] = set()
    _collect(constraint, is_positive_literal, literals, 1, stop_at_negation=True)
    return literals


def get_negative_literals(constraint: Constraint) -> Set[NotConstraint]:
    """Collect the negated literals (!A nodes) of the tree."""
    literals: Set[NotConstraint] = set()
    _collect(constraint, is_negative_literal, literals, 1, stop_at_negation=True)
    return literals


def _collect(constraint, matches, found: set, depth: int, stop_at_negation: bool) -> None:
    check_depth(depth)
    if matches(constraint):
        found.add(constraint)
        return
    if stop_at_negation and is_negative_literal(constraint):
        return
    for child in _sub_parts(constraint):
        _collect(child, matches, found, depth + 1, stop_at_negation)


def count_literals(constraint: Constraint) -> int:
    """Number of literal occurrences, negated or not."""
    return _count(constraint, is_positive_literal, 1, stop_at_negation=False)


def count_positive_literals(constraint: Constraint) -> int:
    return _count(constraint, is_positive_literal, 1, stop_at_negation=True)


def count_negative_literals(constraint: Constraint) -> int:
    return _count(constraint, is_negative_literal, 1, stop_at_negation=True)


def _count(constraint, matches, depth: int, stop_at_negation: bool) -> int:
    check_depth(depth)
    if matches(constraint):
        return 1
    if stop_at_negation and is_negative_literal(constraint):
        return 0
    total = 0
    for child in _sub_parts(constraint):
        total += _count(child, matches, depth + 1, stop_at_negation)
    return total


def has_positive_literal(constraint: Constraint) -> bool:
    return count_positive_literals(constraint) > 0


def has_negative_literal(constraint: Constraint) -> bool:
    return count_negative_literals(constraint) > 0


def get_max_depth(constraint: Constraint) -> int:
    """
    Length of the longest root-to-leaf path, counted in nodes.

    Examples:
        A              -> 1
        A & (B | C)    -> 3
    """
    return _depth(constraint, 1)


def _depth(constraint, depth: int) -> int:
    check_depth(depth)
    deepest = 0
    for child in _sub_parts(constraint):
        deepest = max(deepest, _depth(child, depth + 1))
    return 1 + deepest


def is_complex_constraint(constraint: Any) -> bool:
    """
    One-level complexity probe.

    True when the node is not a bare literal and at least one immediate
    child is not a bare literal. A negated literal child counts as
    non-literal here, so !A | B is complex while A | B is not.
    """
    if not isinstance(constraint, Constraint) or is_positive_literal(constraint):
        return False
    return any(not is_positive_literal(child) for child in constraint.sub_parts())
