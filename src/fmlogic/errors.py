"""
Error types raised by fmlogic.

Only the structural transformations raise: formula translation, root
derivation, constraint parsing and settings loading. Classifier and
matcher predicates answer False / None instead.
"""

from typing import Any, Optional


class FMLogicError(Exception):
    """Base class for every error raised by this package."""
    pass


class UnsupportedConstructError(FMLogicError):
    """
    A constraint node kind outside the translatable set was met.

    Exporters report this as "the model uses a constraint shape this
    exporter cannot represent", quoting `text`.

    Properties:
        constraint: The offending node (or engine formula)
        text: Its textual form, when one could be rendered
    """

    def __init__(self, message: str, constraint: Any = None, text: Optional[str] = None):
        super().__init__(message)
        self.constraint = constraint
        self.text = text


class ModelHasNoRootError(FMLogicError):
    """Raised when a feature map contains no feature without a parent."""
    pass


class MalformedTreeError(FMLogicError):
    """Raised when a tree walk exceeds the configured depth bound."""

    def __init__(self, depth: int, limit: int):
        super().__init__(
            f"Tree depth {depth} exceeds the configured bound of {limit}; "
            f"the tree is too deep or cyclic"
        )
        self.depth = depth
        self.limit = limit


class ConstraintParseError(FMLogicError):
    """Raised when constraint text cannot be parsed."""
    pass


class SettingsError(FMLogicError):
    """Raised when a configuration value is missing or invalid."""
    pass
