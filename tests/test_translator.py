"""
Tests for constraint <-> sympy formula translation.

Round trips are checked for logical equivalence (truth tables and a
satisfiability check), never for structural equality.
"""

import itertools

import pytest
from sympy import And, Equivalent, Implies, Not, Or, Symbol, Xor, false, true
from sympy.logic.inference import satisfiable

from fmlogic.constraints import (
    AndConstraint,
    AttributeTerm,
    ComparisonOperator,
    Constraint,
    EquivalenceConstraint,
    ExpressionConstraint,
    ImplicationConstraint,
    LiteralConstraint,
    NotConstraint,
    NumberTerm,
    OrConstraint,
    ParenthesisConstraint,
)
from fmlogic.errors import MalformedTreeError, UnsupportedConstructError
from fmlogic.grammar import parse_constraint
from fmlogic.literals import get_literals
from fmlogic.relations import is_requires
from fmlogic.settings import reset_settings
from fmlogic.translator import (
    constraints_to_formula,
    from_formula,
    literal,
    to_formula,
)

A, B = LiteralConstraint("A"), LiteralConstraint("B")
a, b, c = Symbol("A"), Symbol("B"), Symbol("C")

BATTERY_CHECK = ExpressionConstraint(
    ComparisonOperator.GREATER_EQUAL, AttributeTerm("Battery", "capacity"), NumberTerm(3000)
)


def evaluate(constraint: Constraint, assignment) -> bool:
    """Reference semantics of a propositional constraint tree."""
    if isinstance(constraint, LiteralConstraint):
        return assignment[constraint.name]
    if isinstance(constraint, NotConstraint):
        return not evaluate(constraint.content, assignment)
    if isinstance(constraint, ParenthesisConstraint):
        return evaluate(constraint.content, assignment)
    left = evaluate(constraint.left, assignment)
    right = evaluate(constraint.right, assignment)
    if isinstance(constraint, AndConstraint):
        return left and right
    if isinstance(constraint, OrConstraint):
        return left or right
    if isinstance(constraint, ImplicationConstraint):
        return (not left) or right
    if isinstance(constraint, EquivalenceConstraint):
        return left == right
    raise TypeError(type(constraint))


def equivalent_by_truth_table(first: Constraint, second: Constraint) -> bool:
    names = sorted({lit.name for lit in get_literals(first) | get_literals(second)})
    for values in itertools.product([False, True], repeat=len(names)):
        assignment = dict(zip(names, values))
        if evaluate(first, assignment) != evaluate(second, assignment):
            return False
    return True


class TestToFormula:
    """Constraint tree -> sympy."""

    def test_literal(self):
        assert to_formula(A) == a

    def test_negation(self):
        assert to_formula(NotConstraint(A)) == Not(a)

    def test_connectives(self):
        assert to_formula(AndConstraint(A, B)) == And(a, b)
        assert to_formula(OrConstraint(A, B)) == Or(a, b)
        assert to_formula(ImplicationConstraint(A, B)) == Implies(a, b)
        assert to_formula(EquivalenceConstraint(A, B)) == Equivalent(a, b)

    def test_parentheses_are_elided(self):
        tree = ParenthesisConstraint(OrConstraint(NotConstraint(A), ParenthesisConstraint(B)))
        assert to_formula(tree) == Or(Not(a), b)

    def test_nested(self):
        tree = parse_constraint("(A & B) => !C")
        assert to_formula(tree) == Implies(And(a, b), Not(c))

    def test_literal_builder(self):
        assert literal("A") == a
        assert literal("A", polarity=False) == Not(a)

    def test_tautology_folds_to_constant(self):
        """sympy simplifies trivial formulas on construction."""
        assert to_formula(parse_constraint("A | !A")) == true


class TestUnsupportedConstructs:
    """Arithmetic constraints cannot go to the engine."""

    def test_expression_constraint(self):
        with pytest.raises(UnsupportedConstructError) as excinfo:
            to_formula(BATTERY_CHECK)
        assert excinfo.value.constraint == BATTERY_CHECK
        assert excinfo.value.text == "Battery.capacity >= 3000"

    def test_nested_expression_aborts_whole_translation(self):
        tree = ImplicationConstraint(A, AndConstraint(B, BATTERY_CHECK))
        with pytest.raises(UnsupportedConstructError):
            to_formula(tree)

    def test_foreign_node(self):
        with pytest.raises(UnsupportedConstructError) as excinfo:
            to_formula("A & B")
        assert excinfo.value.text is None


class TestFromFormula:
    """sympy -> constraint tree."""

    def test_symbol(self):
        assert from_formula(a) == A

    def test_negation_glyph_is_rewritten(self):
        assert from_formula(Not(a)) == NotConstraint(A)

    def test_requires_shape_survives(self):
        """!A | B comes back as a requires constraint (operand order may change)."""
        result = from_formula(Or(Not(a), b))
        assert is_requires(result)

    def test_implication(self):
        assert from_formula(Implies(a, b)) == ImplicationConstraint(A, B)

    def test_equivalence(self):
        result = from_formula(Equivalent(a, b))
        assert isinstance(result, EquivalenceConstraint)
        assert {result.left, result.right} == {A, B}

    def test_negated_group(self):
        result = from_formula(Not(And(a, b)))
        assert isinstance(result, NotConstraint)
        assert equivalent_by_truth_table(result, parse_constraint("!A | !B"))

    @pytest.mark.parametrize("constant", [true, false])
    def test_constants_are_rejected(self, constant):
        with pytest.raises(UnsupportedConstructError):
            from_formula(constant)

    def test_unreadable_engine_output(self):
        """Connectives outside the grammar are reported, not mis-parsed."""
        with pytest.raises(UnsupportedConstructError):
            from_formula(Xor(a, b))


class TestRoundTrip:
    """from_formula(to_formula(t)) is logically equivalent to t."""

    @pytest.mark.parametrize("text", [
        "A",
        "!A",
        "!A | B",
        "!A | !B",
        "A & (B | C)",
        "(A => B) <=> C",
        "A => (B => C)",
        "!(A & B) | (C => !A)",
        "(A <=> B) & !C",
        "!(A => B)",
        "((A | B)) & ((C))",
    ])
    def test_round_trip(self, text):
        original = parse_constraint(text)
        restored = from_formula(to_formula(original))

        assert {lit.name for lit in get_literals(restored)} == {lit.name for lit in get_literals(original)}
        assert equivalent_by_truth_table(original, restored)
        assert satisfiable(Xor(to_formula(original), to_formula(restored))) is False

    @pytest.mark.parametrize("name", ["Wi-Fi", "4G", "My Feature", "a|b", "x & y", "Say \"hi\"", "Not~Tilde"])
    def test_names_that_are_not_identifiers(self, name):
        """Names survive the trip through engine text by being quoted."""
        tree = OrConstraint(NotConstraint(LiteralConstraint(name)), B)
        restored = from_formula(to_formula(tree))

        assert is_requires(restored)
        assert {lit.name for lit in get_literals(restored)} == {name, "B"}
        assert equivalent_by_truth_table(tree, restored)

    def test_quoted_names_in_nested_formula(self):
        original = parse_constraint('"Wi-Fi" => ("4G" <=> !"My Feature")')
        restored = from_formula(to_formula(original))
        assert equivalent_by_truth_table(original, restored)


class TestModelFormula:
    """constraints_to_formula()."""

    def test_conjunction(self):
        constraints = [parse_constraint("!A | B"), parse_constraint("B => C")]
        assert constraints_to_formula(constraints) == And(Or(Not(a), b), Implies(b, c))

    def test_empty(self):
        assert constraints_to_formula([]) == true

    def test_unsupported_member(self):
        with pytest.raises(UnsupportedConstructError):
            constraints_to_formula([A, BATTERY_CHECK])


class TestDepthBound:

    def test_deep_tree(self, monkeypatch):
        monkeypatch.setenv("FMLOGIC_MAX_TREE_DEPTH", "5")
        reset_settings()
        tree = A
        for _ in range(10):
            tree = ParenthesisConstraint(tree)
        with pytest.raises(MalformedTreeError):
            to_formula(tree)

    def test_deep_tree_at_default_bound(self):
        tree = A
        for _ in range(600):
            tree = AndConstraint(B, tree)
        with pytest.raises(MalformedTreeError):
            to_formula(tree)
