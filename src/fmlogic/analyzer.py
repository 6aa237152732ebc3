"""
Feature Model Analyzer: inventory of a model's tree and constraints.

This module provides lightweight analysis of FeatureModel objects:
    - Feature, group and root counts
    - Relation kind of every top-level constraint
    - Constraint complexity metrics
    - References to undeclared features
    - Constraints the logic engine cannot take

IMPORTANT: It does NOT modify the model.
It only produces read-only reports.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from fmlogic.constraints import AttributeTerm, Constraint, ExpressionConstraint
from fmlogic.errors import UnsupportedConstructError
from fmlogic.feature_tree import find_roots, is_abstract
from fmlogic.grammar import constraint_to_text
from fmlogic.literals import get_literals, get_max_depth, is_complex_constraint
from fmlogic.model import FeatureModel
from fmlogic.relations import RelationKind, classify_relation
from fmlogic.translator import to_formula

LOG = logging.getLogger(__name__)

COMPLEX_DEPTH_THRESHOLD = 5


@dataclass
class ConstraintReport:
    """Per-constraint findings."""
    text: str
    kind: RelationKind
    depth: int
    is_complex: bool
    translatable: bool


@dataclass
class ModelReport:
    """Analysis report for a feature model."""

    model_name: str
    total_features: int = 0
    total_groups: int = 0
    total_constraints: int = 0
    abstract_features: int = 0
    root_names: List[str] = field(default_factory=list)

    # Constraint classification
    constraints: List[ConstraintReport] = field(default_factory=list)
    relation_counts: Dict[RelationKind, int] = field(default_factory=dict)
    requires_pairs: List[Tuple[str, str]] = field(default_factory=list)
    excludes_pairs: List[Tuple[str, str]] = field(default_factory=list)

    # Complexity
    complex_constraints: int = 0
    max_constraint_depth: int = 0
    avg_constraint_depth: float = 0.0

    # Consistency
    undefined_features: Set[str] = field(default_factory=set)
    untranslatable_constraints: List[str] = field(default_factory=list)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def _referenced_features(constraint: Constraint) -> Set[str]:
    names = {lit.name for lit in get_literals(constraint)}
    stack = [constraint]
    while stack:
        node = stack.pop()
        if isinstance(node, ExpressionConstraint):
            for term in (node.left, node.right):
                if isinstance(term, AttributeTerm):
                    names.add(term.feature)
        stack.extend(node.sub_parts())
    return names


def _is_translatable(constraint: Constraint) -> bool:
    try:
        to_formula(constraint)
    except UnsupportedConstructError as e:
        LOG.debug("Constraint not translatable: %s", e)
        return False
    return True


def analyze_feature_model(model: FeatureModel) -> ModelReport:
    """
    Analyze a FeatureModel.

    Checks for:
    - Tree shape (roots, groups, abstract features)
    - Relation kind of each top-level constraint
    - Constraint complexity
    - Undeclared feature references and untranslatable constraints

    Returns a ModelReport with metrics and warnings.
    """
    report = ModelReport(model_name=model.name)

    # =========================================================================
    # 1. TREE
    # =========================================================================

    report.total_features = len(model.features)
    report.total_groups = sum(len(f.groups) for f in model.features.values())
    report.abstract_features = sum(1 for f in model.features.values() if is_abstract(f))
    report.root_names = [f.name for f in find_roots(model.features)]
    report.total_constraints = len(model.constraints)

    # =========================================================================
    # 2. CONSTRAINTS
    # =========================================================================

    kinds: Counter = Counter()
    depths: List[int] = []
    referenced: Set[str] = set()

    for constraint in model.constraints:
        match = classify_relation(constraint)
        depth = get_max_depth(constraint)
        is_complex = is_complex_constraint(constraint)
        translatable = _is_translatable(constraint)
        text = constraint_to_text(constraint)

        report.constraints.append(ConstraintReport(
            text=text,
            kind=match.kind,
            depth=depth,
            is_complex=is_complex,
            translatable=translatable,
        ))
        kinds[match.kind] += 1
        depths.append(depth)
        referenced.update(_referenced_features(constraint))

        if match.kind in (RelationKind.REQUIRES, RelationKind.SINGLE_FEATURE_REQUIRES):
            report.requires_pairs.append((match.source, match.target))
        elif match.kind in (RelationKind.EXCLUDES, RelationKind.SINGLE_FEATURE_EXCLUDES):
            report.excludes_pairs.append((match.source, match.target))

        if is_complex:
            report.complex_constraints += 1
        if not translatable:
            report.untranslatable_constraints.append(text)

    report.relation_counts = dict(kinds)
    if depths:
        report.max_constraint_depth = max(depths)
        report.avg_constraint_depth = sum(depths) / len(depths)

    report.undefined_features = referenced - set(model.features)

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    if not report.root_names and report.total_features:
        report.add_warning("No root feature: every feature has a parent")
    elif len(report.root_names) > 1:
        report.add_warning(f"Multiple roots: {', '.join(report.root_names)}")

    if report.undefined_features:
        report.add_warning(
            f"Undefined feature references: {', '.join(sorted(report.undefined_features))}"
        )

    if report.untranslatable_constraints:
        report.add_warning(
            f"Constraints outside propositional logic: {len(report.untranslatable_constraints)}"
        )

    if report.max_constraint_depth > COMPLEX_DEPTH_THRESHOLD:
        report.add_warning(
            f"High constraint complexity: max depth {report.max_constraint_depth}"
        )

    return report
