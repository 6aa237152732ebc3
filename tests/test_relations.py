"""
Tests for requires / excludes recognition.
"""

import pytest
from fmlogic.constraints import (
    AndConstraint,
    ImplicationConstraint,
    LiteralConstraint,
    NotConstraint,
    OrConstraint,
    ParenthesisConstraint,
)
from fmlogic.grammar import parse_constraint
from fmlogic.relations import (
    RelationKind,
    classify_relation,
    get_first_negative_literal,
    get_first_positive_literal,
    is_excludes,
    is_requires,
    is_single_feature_excludes,
    is_single_feature_requires,
)

A, B, C = LiteralConstraint("A"), LiteralConstraint("B"), LiteralConstraint("C")
NOT_A, NOT_B = NotConstraint(A), NotConstraint(B)


class TestRequires:
    """!A | B means A requires B."""

    def test_negative_then_positive(self):
        assert is_requires(OrConstraint(NOT_A, B))

    def test_positive_then_negative(self):
        assert is_requires(OrConstraint(B, NOT_A))

    def test_two_positive_literals(self):
        assert not is_requires(OrConstraint(A, B))

    def test_two_negative_literals(self):
        assert not is_requires(OrConstraint(NOT_A, NOT_B))

    def test_conjunction_is_not_requires(self):
        assert not is_requires(AndConstraint(NOT_A, B))

    def test_more_than_two_literals(self):
        """Only the exact two-operand shape counts."""
        assert not is_requires(parse_constraint("!A | B | C"))

    def test_parentheses_hide_the_shape(self):
        assert not is_requires(ParenthesisConstraint(OrConstraint(NOT_A, B)))
        assert not is_requires(OrConstraint(ParenthesisConstraint(NOT_A), B))

    def test_implication_is_not_strict_requires(self):
        assert not is_requires(ImplicationConstraint(A, B))


class TestExcludes:
    """!A | !B means A excludes B."""

    def test_two_negative_literals(self):
        assert is_excludes(OrConstraint(NOT_A, NOT_B))

    def test_mixed_literals(self):
        assert not is_excludes(OrConstraint(NOT_A, B))

    def test_negated_conjunction(self):
        """!(A & B) is equivalent but has the wrong shape."""
        assert not is_excludes(parse_constraint("!(A & B)"))

    def test_double_negation_operand(self):
        assert not is_excludes(OrConstraint(NotConstraint(NOT_A), NOT_B))


class TestSingleFeatureVariants:
    """Implication syntax is accepted in addition to disjunctions."""

    def test_implication_requires(self):
        assert is_single_feature_requires(ImplicationConstraint(A, B))

    def test_disjunction_requires(self):
        assert is_single_feature_requires(OrConstraint(NOT_A, B))
        assert is_single_feature_requires(OrConstraint(B, NOT_A))

    def test_implication_with_negated_premise(self):
        assert not is_single_feature_requires(ImplicationConstraint(NOT_A, B))

    def test_implication_excludes(self):
        assert is_single_feature_excludes(ImplicationConstraint(A, NOT_B))

    def test_disjunction_excludes(self):
        assert is_single_feature_excludes(OrConstraint(NOT_A, NOT_B))

    def test_implication_requires_is_not_excludes(self):
        assert not is_single_feature_excludes(ImplicationConstraint(A, B))
        assert not is_single_feature_requires(ImplicationConstraint(A, NOT_B))

    def test_complex_implication(self):
        assert not is_single_feature_requires(parse_constraint("(A & B) => C"))


class TestFirstLiteral:
    """get_first_positive_literal / get_first_negative_literal."""

    def test_node_itself(self):
        assert get_first_positive_literal(A) is A
        assert get_first_negative_literal(NOT_A) is NOT_A

    def test_first_child(self):
        node = OrConstraint(NOT_A, B)
        assert get_first_positive_literal(node) is B
        assert get_first_negative_literal(node) is NOT_A

    def test_left_child_wins(self):
        node = OrConstraint(A, B)
        assert get_first_positive_literal(node) is A

    def test_none_found(self):
        """Only immediate children are inspected."""
        node = AndConstraint(OrConstraint(A, B), OrConstraint(A, C))
        assert get_first_positive_literal(node) is None
        assert get_first_negative_literal(node) is None

    def test_negative_literal_has_no_positive_child_match(self):
        """The A inside !A is an immediate child and a positive literal."""
        assert get_first_positive_literal(NOT_A) is A

    @pytest.mark.parametrize("junk", [None, "A", 3])
    def test_non_constraints(self, junk):
        assert get_first_positive_literal(junk) is None
        assert get_first_negative_literal(junk) is None


class TestClassifyRelation:
    """classify_relation() tags and justifies each shape."""

    def test_requires(self):
        match = classify_relation(OrConstraint(B, NOT_A))
        assert match.kind == RelationKind.REQUIRES
        assert match.first == NOT_A
        assert match.second == B
        assert (match.source, match.target) == ("A", "B")

    def test_excludes(self):
        match = classify_relation(OrConstraint(NOT_A, NOT_B))
        assert match.kind == RelationKind.EXCLUDES
        assert (match.source, match.target) == ("A", "B")

    def test_single_feature_requires(self):
        match = classify_relation(ImplicationConstraint(A, B))
        assert match.kind == RelationKind.SINGLE_FEATURE_REQUIRES
        assert (match.source, match.target) == ("A", "B")

    def test_single_feature_excludes(self):
        match = classify_relation(ImplicationConstraint(A, NOT_B))
        assert match.kind == RelationKind.SINGLE_FEATURE_EXCLUDES
        assert match.first == A
        assert match.second == NOT_B
        assert (match.source, match.target) == ("A", "B")

    @pytest.mark.parametrize("text", ["A", "!A", "A | B", "A & !B", "A <=> B", "!A | B | C"])
    def test_none(self, text):
        match = classify_relation(parse_constraint(text))
        assert match.kind == RelationKind.NONE
        assert match.first is None
        assert match.source is None

    def test_never_raises(self):
        assert classify_relation(None).kind == RelationKind.NONE
        assert classify_relation("!A | B").kind == RelationKind.NONE
