"""
Operand access for binary constraint nodes.

Callers get the left or right side of any binary connective without
switching on its kind. Each binary node reports its operands through
Constraint.as_binary(); other nodes report None.
"""

from typing import Optional, Tuple

from fmlogic.constraints import Constraint


def get_operands(constraint: Constraint) -> Optional[Tuple[Constraint, Constraint]]:
    """
    (left, right) of a binary node, None for literals, negations,
    parentheses and arithmetic comparisons.

    Raises:
        TypeError: If the argument is not a constraint node at all
    """
    if not isinstance(constraint, Constraint):
        raise TypeError(f"Expected a Constraint, got {type(constraint).__name__}")
    return constraint.as_binary()


def get_left(constraint: Constraint) -> Optional[Constraint]:
    operands = get_operands(constraint)
    return operands[0] if operands is not None else None


def get_right(constraint: Constraint) -> Optional[Constraint]:
    operands = get_operands(constraint)
    return operands[1] if operands is not None else None
