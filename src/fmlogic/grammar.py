"""
Constraint grammar: text <-> constraint tree.

Syntax (weakest binding first):
    a <=> b         equivalence
    a => b          implication
    a | b           disjunction
    a & b           conjunction
    x.attr > 3      comparison (== != < > <= >=) over attribute/number terms
    !a  ~a          negation
    (a)             grouping, kept as ParenthesisConstraint

Binary operators are left-associative. Feature names are identifiers or
double-quoted strings.

The function forms Implies(a, b) and Equivalent(a, b, ...) are accepted
too, because that is how the logic engine prints those connectives.
"""

import re
from typing import List, NamedTuple, Tuple

from fmlogic.constraints import (
    AndConstraint,
    AttributeTerm,
    BinaryConstraint,
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
    Term,
)
from fmlogic.errors import ConstraintParseError
from fmlogic.settings import check_depth

_TOKEN_RE = re.compile(
    r'\s*(?:'
    r'(?P<string>"(?:[^"\\]|\\.)*")'
    r'|(?P<number>\d+(?:\.\d+)?)'
    r'|(?P<ident>[A-Za-z_][A-Za-z0-9_]*)'
    r'|(?P<op><=>|=>|==|!=|<=|>=|<|>|&|\||!|~|\(|\)|,|\.)'
    r')'
)
_IDENT_RE = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')

_COMPARISONS = {op.value: op for op in ComparisonOperator}
_NEGATIONS = ('!', '~')

Token = Tuple[str, str]


def _tokenize(text: str) -> List[Token]:
    """Split constraint text into (kind, text) tokens."""
    tokens: List[Token] = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None or m.end() == pos:
            raise ConstraintParseError(f"Unexpected character {text[pos]!r} at position {pos}")
        kind = m.lastgroup
        tokens.append((kind, m.group(kind)))
        pos = m.end()
    if not tokens:
        raise ConstraintParseError("Empty constraint")
    return tokens


_BINARY = {
    '<=>': (1, EquivalenceConstraint),
    '=>': (2, ImplicationConstraint),
    '|': (3, OrConstraint),
    '&': (4, AndConstraint),
}

# A parsed node together with the depth of its subtree
Operand = Tuple[Constraint, int]


class _Pending(NamedTuple):
    """An operator or opening bracket waiting for its operands."""

    kind: str           # 'unary', 'binary', 'group' or 'call'
    text: str
    first_argument: int = 0


def _build(cls, *children: Operand) -> Operand:
    depth = 1 + max(d for _, d in children)
    check_depth(depth)
    return cls(*(node for node, _ in children)), depth


class _Parser:
    """
    Operator-precedence parser over a token list.

    Operands and pending operators live on two explicit stacks, so deep
    nesting does not consume interpreter stack. Every node is checked
    against the depth bound as it is built.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        self.operands: List[Operand] = []
        self.operators: List[_Pending] = []

    def peek(self, offset: int = 0) -> Token:
        i = self.pos + offset
        if i < len(self.tokens):
            return self.tokens[i]
        return ('eof', '')

    def parse(self) -> Constraint:
        expect_operand = True
        while self.pos < len(self.tokens):
            if expect_operand:
                expect_operand = self.read_operand()
            else:
                expect_operand = self.read_operator()

        if expect_operand:
            raise ConstraintParseError("Unexpected end of constraint")
        self.reduce()
        if self.operators:
            raise ConstraintParseError("Expected ')', got 'end of input'")
        node, _ = self.operands.pop()
        return node

    def read_operand(self) -> bool:
        """Consume a prefix or an atom; True while an operand is still expected."""
        kind, text = self.peek()

        if kind == 'op' and text in _NEGATIONS:
            self.pos += 1
            self.operators.append(_Pending('unary', text))
            return True

        if kind == 'op' and text == '(':
            self.pos += 1
            self.operators.append(_Pending('group', text))
            return True

        # Numbers and Feature.attr only make sense as comparison operands
        if kind == 'number' or (self.peek(1) == ('op', '.') and kind in ('ident', 'string')):
            self.operands.append((self.parse_comparison(), 1))
            return False

        if kind == 'ident' and self.peek(1) == ('op', '('):
            self.pos += 2
            self.operators.append(_Pending('call', text, len(self.operands)))
            return True

        if kind == 'ident':
            self.pos += 1
            self.operands.append((LiteralConstraint(text), 1))
            return False

        if kind == 'string':
            self.pos += 1
            self.operands.append((LiteralConstraint(_unquote(text)), 1))
            return False

        raise ConstraintParseError(f"Unexpected token: {text}")

    def read_operator(self) -> bool:
        """Consume an infix operator, ',' or ')'; True if an operand must follow."""
        kind, text = self.peek()

        if kind == 'op' and text in _BINARY:
            self.reduce(_BINARY[text][0])
            self.pos += 1
            self.operators.append(_Pending('binary', text))
            return True

        if kind == 'op' and text == ')':
            self.pos += 1
            self.close_group()
            return False

        if kind == 'op' and text == ',':
            self.reduce()
            if not self.operators or self.operators[-1].kind != 'call':
                raise ConstraintParseError("Unexpected ',' outside a function call")
            self.pos += 1
            return True

        rest = ' '.join(t for _, t in self.tokens[self.pos:])
        raise ConstraintParseError(f"Unexpected tokens after parsing: {rest}")

    def reduce(self, min_precedence: int = 0) -> None:
        """Apply pending operators down to the nearest bracket.

        Binary operators binding weaker than min_precedence stay pending;
        this makes equal-precedence chains left-associative.
        """
        while self.operators and self.operators[-1].kind in ('unary', 'binary'):
            pending = self.operators[-1]
            if pending.kind == 'binary' and _BINARY[pending.text][0] < min_precedence:
                return
            self.operators.pop()
            if pending.kind == 'unary':
                self.operands.append(_build(NotConstraint, self.operands.pop()))
            else:
                right = self.operands.pop()
                left = self.operands.pop()
                self.operands.append(_build(_BINARY[pending.text][1], left, right))

    def close_group(self) -> None:
        self.reduce()
        if not self.operators:
            raise ConstraintParseError("Unmatched ')'")
        pending = self.operators.pop()
        if pending.kind == 'group':
            self.operands.append(_build(ParenthesisConstraint, self.operands.pop()))
            return
        arguments = self.operands[pending.first_argument:]
        del self.operands[pending.first_argument:]
        self.operands.append(self.apply_function(pending.text, arguments))

    def parse_term(self) -> Term:
        kind, text = self.peek()
        if kind == 'number':
            self.pos += 1
            return NumberTerm(float(text) if '.' in text else int(text))
        if kind in ('ident', 'string') and self.peek(1) == ('op', '.'):
            feature = text if kind == 'ident' else _unquote(text)
            self.pos += 2
            attr_kind, attr = self.peek()
            if attr_kind != 'ident':
                raise ConstraintParseError(f"Expected attribute name after '{feature}.'")
            self.pos += 1
            return AttributeTerm(feature, attr)
        raise ConstraintParseError(f"Expected a number or Feature.attribute, got '{text}'")

    def parse_comparison(self) -> Constraint:
        left = self.parse_term()
        kind, text = self.peek()
        if kind != 'op' or text not in _COMPARISONS:
            raise ConstraintParseError(f"Expected a comparison operator after {left}, got '{text}'")
        self.pos += 1
        right = self.parse_term()
        return ExpressionConstraint(_COMPARISONS[text], left, right)

    @staticmethod
    def apply_function(name: str, arguments: List[Operand]) -> Operand:
        if name == 'Implies':
            if len(arguments) != 2:
                raise ConstraintParseError(f"Implies takes 2 arguments, got {len(arguments)}")
            return _build(ImplicationConstraint, arguments[0], arguments[1])

        if name == 'Equivalent':
            if len(arguments) < 2:
                raise ConstraintParseError("Equivalent takes at least 2 arguments")
            # Equivalent(a, b, c) means all equal: (a <=> b) & (b <=> c)
            result = _build(EquivalenceConstraint, arguments[0], arguments[1])
            for prev, arg in zip(arguments[1:], arguments[2:]):
                result = _build(AndConstraint, result, _build(EquivalenceConstraint, prev, arg))
            return result

        raise ConstraintParseError(f"Unsupported function: {name}")


def _unquote(text: str) -> str:
    return re.sub(r'\\(.)', r'\1', text[1:-1])


def quote_name(name: str) -> str:
    """Feature name as it must be written in constraint text."""
    if _IDENT_RE.match(name):
        return name
    escaped = name.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def parse_constraint(text: str) -> Constraint:
    """
    Parse constraint text into a constraint tree.

    Args:
        text: Constraint in the grammar described above

    Returns:
        Constraint AST

    Raises:
        ConstraintParseError: If the text is empty or malformed
        MalformedTreeError: If the tree would exceed the depth bound
    """
    if text is None or not text.strip():
        raise ConstraintParseError("Empty constraint")
    return _Parser(_tokenize(text)).parse()


# Binding strength used by the printer; higher binds tighter.
_PRECEDENCE = {
    EquivalenceConstraint: 1,
    ImplicationConstraint: 2,
    OrConstraint: 3,
    AndConstraint: 4,
    ExpressionConstraint: 5,
    NotConstraint: 6,
}
_ATOM = 7

_SYMBOLS = {
    EquivalenceConstraint: '<=>',
    ImplicationConstraint: '=>',
    OrConstraint: '|',
    AndConstraint: '&',
}


def _term_to_text(term: Term) -> str:
    if isinstance(term, NumberTerm):
        return str(term.value)
    if isinstance(term, AttributeTerm):
        return f"{quote_name(term.feature)}.{term.attribute}"
    raise TypeError(f"Unsupported term type: {type(term)}")


def _to_text(constraint: Constraint, required: int, depth: int) -> str:
    check_depth(depth)
    precedence = _PRECEDENCE.get(type(constraint), _ATOM)

    if isinstance(constraint, LiteralConstraint):
        text = quote_name(constraint.name)
    elif isinstance(constraint, ParenthesisConstraint):
        text = f"({_to_text(constraint.content, 0, depth + 1)})"
    elif isinstance(constraint, NotConstraint):
        text = f"!{_to_text(constraint.content, precedence, depth + 1)}"
    elif isinstance(constraint, BinaryConstraint) and type(constraint) in _SYMBOLS:
        left = _to_text(constraint.left, precedence, depth + 1)
        right = _to_text(constraint.right, precedence + 1, depth + 1)
        text = f"{left} {_SYMBOLS[type(constraint)]} {right}"
    elif isinstance(constraint, ExpressionConstraint):
        left = _term_to_text(constraint.left)
        right = _term_to_text(constraint.right)
        text = f"{left} {constraint.operator.value} {right}"
    else:
        raise TypeError(f"Unsupported constraint type: {type(constraint)}")

    if precedence < required:
        return f"({text})"
    return text


def constraint_to_text(constraint: Constraint) -> str:
    """
    Render a constraint tree in the grammar parse_constraint() reads.

    Parentheses are added where operator precedence requires them, in
    addition to those recorded by ParenthesisConstraint nodes.

    Raises:
        MalformedTreeError: If the tree exceeds the depth bound
    """
    return _to_text(constraint, 0, 1)


__all__ = [
    "parse_constraint",
    "constraint_to_text",
    "quote_name",
    "ConstraintParseError",
]
