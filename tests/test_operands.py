"""
Tests for binary operand access.
"""

import pytest
from fmlogic.constraints import (
    AndConstraint,
    AttributeTerm,
    ComparisonOperator,
    EquivalenceConstraint,
    ExpressionConstraint,
    ImplicationConstraint,
    LiteralConstraint,
    NotConstraint,
    NumberTerm,
    OrConstraint,
    ParenthesisConstraint,
)
from fmlogic.operands import get_left, get_operands, get_right

A, B = LiteralConstraint("A"), LiteralConstraint("B")


@pytest.mark.parametrize("cls", [
    AndConstraint, OrConstraint, ImplicationConstraint, EquivalenceConstraint,
])
def test_binary_kinds(cls):
    """Left and right come back without naming the kind."""
    node = cls(A, B)
    assert get_left(node) == A
    assert get_right(node) == B
    assert get_operands(node) == (A, B)


@pytest.mark.parametrize("node", [
    A,
    NotConstraint(A),
    ParenthesisConstraint(AndConstraint(A, B)),
    ExpressionConstraint(ComparisonOperator.EQUALS, AttributeTerm("A", "x"), NumberTerm(1)),
])
def test_non_binary_kinds(node):
    """Non-binary nodes have no sides."""
    assert get_left(node) is None
    assert get_right(node) is None
    assert get_operands(node) is None


def test_new_binary_kind_is_supported():
    """A subclass of a binary node works without changes here."""

    class XorLikeConstraint(OrConstraint):
        pass

    node = XorLikeConstraint(A, B)
    assert get_left(node) == A
    assert get_right(node) == B


@pytest.mark.parametrize("junk", [None, "A | B", 1])
def test_non_constraint_raises(junk):
    """Bad input is an error, distinct from 'not binary'."""
    with pytest.raises(TypeError):
        get_left(junk)
    with pytest.raises(TypeError):
        get_right(junk)
