"""
Constraint tree <-> sympy formula translation.

to_formula() mirrors a constraint tree into sympy's boolean algebra so
that the engine can check, simplify or sample it. from_formula() brings
an engine formula back as a constraint tree.

The reverse direction goes through text: sympy's string printer renders
the formula, with feature names quoted and negation spelled the way the
constraint grammar expects, and the grammar parses the result. The
grammar's precedence rules therefore decide the shape of the tree, and
the original parenthesization is not restored. A round trip keeps
logical meaning and literal names only.

sympy folds trivial formulas while building them (A | !A becomes true).
Such constants have no constraint-tree form and are rejected by
from_formula().
"""

import logging
from typing import Iterable

from sympy import And, Equivalent, Implies, Not, Or, Symbol
from sympy.logic.boolalg import Boolean, BooleanAtom
from sympy.printing.precedence import PRECEDENCE
from sympy.printing.str import StrPrinter

from fmlogic.constraints import (
    AndConstraint,
    Constraint,
    EquivalenceConstraint,
    ImplicationConstraint,
    LiteralConstraint,
    NotConstraint,
    OrConstraint,
    ParenthesisConstraint,
)
from fmlogic.errors import ConstraintParseError, UnsupportedConstructError
from fmlogic.grammar import constraint_to_text, parse_constraint, quote_name
from fmlogic.settings import check_depth

LOG = logging.getLogger(__name__)


class _ConstraintTextPrinter(StrPrinter):
    """sympy's str printer, writing names and negation in constraint syntax."""

    def _print_Symbol(self, expr):
        return quote_name(expr.name)

    def _print_Not(self, expr):
        return "!" + self.parenthesize(expr.args[0], PRECEDENCE["Not"])


def literal(name: str, polarity: bool = True) -> Boolean:
    """Engine literal for a feature name; negated when polarity is False."""
    symbol = Symbol(name)
    return symbol if polarity else Not(symbol)


def to_formula(constraint: Constraint) -> Boolean:
    """
    Translate a constraint tree into a sympy formula.

    Parentheses are dropped; the formula's tree encodes precedence.

    Raises:
        UnsupportedConstructError: If the tree holds an arithmetic
            comparison or any other node outside the propositional set
        MalformedTreeError: If the tree exceeds the depth bound
    """
    formula = _to_formula(constraint, 1)
    LOG.debug("Translated %r to %s", constraint, formula)
    return formula


def _to_formula(constraint: Constraint, depth: int) -> Boolean:
    check_depth(depth)

    if isinstance(constraint, ImplicationConstraint):
        return Implies(_to_formula(constraint.left, depth + 1), _to_formula(constraint.right, depth + 1))
    if isinstance(constraint, EquivalenceConstraint):
        return Equivalent(_to_formula(constraint.left, depth + 1), _to_formula(constraint.right, depth + 1))
    if isinstance(constraint, AndConstraint):
        return And(_to_formula(constraint.left, depth + 1), _to_formula(constraint.right, depth + 1))
    if isinstance(constraint, OrConstraint):
        return Or(_to_formula(constraint.left, depth + 1), _to_formula(constraint.right, depth + 1))
    if isinstance(constraint, NotConstraint):
        return Not(_to_formula(constraint.content, depth + 1))
    if isinstance(constraint, ParenthesisConstraint):
        return _to_formula(constraint.content, depth + 1)
    if isinstance(constraint, LiteralConstraint):
        return literal(constraint.name, True)

    raise _unsupported(constraint)


def _unsupported(constraint) -> UnsupportedConstructError:
    try:
        text = constraint_to_text(constraint)
    except TypeError:
        text = None
    return UnsupportedConstructError(
        f"Cannot translate {type(constraint).__name__} "
        f"'{text if text is not None else constraint!r}' to a propositional formula",
        constraint=constraint,
        text=text,
    )


def constraints_to_formula(constraints: Iterable[Constraint]) -> Boolean:
    """Conjunction of several constraints, e.g. all constraints of a model."""
    return And(*[to_formula(c) for c in constraints])


def from_formula(formula: Boolean) -> Constraint:
    """
    Translate a sympy formula back into a constraint tree.

    Raises:
        UnsupportedConstructError: If the formula is a boolean constant or
            prints to text the constraint grammar cannot read
        MalformedTreeError: If the result would exceed the depth bound
    """
    if isinstance(formula, BooleanAtom):
        raise UnsupportedConstructError(
            f"Constant formula '{formula}' has no constraint representation",
            constraint=formula,
            text=str(formula),
        )

    text = _ConstraintTextPrinter().doprint(formula)
    try:
        constraint = parse_constraint(text)
    except ConstraintParseError as e:
        raise UnsupportedConstructError(
            f"Cannot read engine formula '{text}' as a constraint: {e}",
            constraint=formula,
            text=text,
        ) from e

    LOG.debug("Translated %s back to %s", formula, text)
    return constraint
