"""
Serialization helpers for feature models and constraint trees.

Provides lossless JSON/YAML round-trip via intermediate dict representation.
Features are stored as a flat list; groups refer to their member features
by name, so maps with several roots serialize like any other.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List

import yaml

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
    Term,
)
from fmlogic.model import Feature, FeatureModel, Group, GroupType

_BINARY_TYPES = {
    "and": AndConstraint,
    "or": OrConstraint,
    "implies": ImplicationConstraint,
    "equivalent": EquivalenceConstraint,
}
_BINARY_NAMES = {cls: name for name, cls in _BINARY_TYPES.items()}


def term_to_dict(term: Term) -> Dict[str, Any]:
    if isinstance(term, NumberTerm):
        return {"type": "number", "value": term.value}
    if isinstance(term, AttributeTerm):
        return {"type": "attribute", "feature": term.feature, "attribute": term.attribute}
    raise TypeError(f"Unsupported term type: {type(term)}")


def term_from_dict(d: Dict[str, Any]) -> Term:
    t = d.get("type")
    if t == "number":
        return NumberTerm(d["value"])
    if t == "attribute":
        return AttributeTerm(d["feature"], d["attribute"])
    raise TypeError(f"Unsupported term dict type: {t}")


def constraint_to_dict(c: Constraint | None) -> Any:
    if c is None:
        return None
    if isinstance(c, LiteralConstraint):
        return {"type": "literal", "name": c.name}
    if isinstance(c, NotConstraint):
        return {"type": "not", "content": constraint_to_dict(c.content)}
    if isinstance(c, ParenthesisConstraint):
        return {"type": "parenthesis", "content": constraint_to_dict(c.content)}
    if type(c) in _BINARY_NAMES:
        return {
            "type": _BINARY_NAMES[type(c)],
            "left": constraint_to_dict(c.left),
            "right": constraint_to_dict(c.right),
        }
    if isinstance(c, ExpressionConstraint):
        return {
            "type": "expression",
            "operator": c.operator.value,
            "left": term_to_dict(c.left),
            "right": term_to_dict(c.right),
        }
    raise TypeError(f"Unsupported Constraint type: {type(c)}")


def constraint_from_dict(d: Any) -> Constraint | None:
    if d is None:
        return None
    t = d.get("type")
    if t == "literal":
        return LiteralConstraint(d["name"])
    if t == "not":
        return NotConstraint(constraint_from_dict(d["content"]))
    if t == "parenthesis":
        return ParenthesisConstraint(constraint_from_dict(d["content"]))
    if t in _BINARY_TYPES:
        left = constraint_from_dict(d["left"])
        right = constraint_from_dict(d["right"])
        return _BINARY_TYPES[t](left, right)
    if t == "expression":
        op = ComparisonOperator(d["operator"])
        return ExpressionConstraint(op, term_from_dict(d["left"]), term_from_dict(d["right"]))
    raise TypeError(f"Unsupported constraint dict type: {t}")


def group_to_dict(g: Group) -> Dict[str, Any]:
    return {
        "type": g.group_type.value,
        "lower": g.lower,
        "upper": g.upper,
        "features": [f.name for f in g.features],
    }


def feature_to_dict(f: Feature) -> Dict[str, Any]:
    return {
        "name": f.name,
        "attributes": {name: attr.value for name, attr in f.attributes.items()},
        "groups": [group_to_dict(g) for g in f.groups],
    }


def feature_model_to_dict(m: FeatureModel) -> Dict[str, Any]:
    return {
        "name": m.name,
        "root": m.root,
        "features": [feature_to_dict(f) for f in m.features.values()],
        "constraints": [constraint_to_dict(c) for c in m.constraints],
        "metadata": m.metadata,
    }


def _wire_groups(features: Dict[str, Feature], feature_dicts: List[Dict[str, Any]]) -> None:
    for fd in feature_dicts:
        owner = features[fd["name"]]
        for gd in fd.get("groups", []):
            group = owner.add_group(Group(
                group_type=GroupType(gd["type"]),
                lower=gd.get("lower"),
                upper=gd.get("upper"),
            ))
            for member in gd.get("features", []):
                if member not in features:
                    raise ValueError(f"Group of '{owner.name}' references unknown feature '{member}'")
                group.add_feature(features[member])


def feature_model_from_dict(d: Dict[str, Any]) -> FeatureModel:
    m = FeatureModel(name=d.get("name", ""), root=d.get("root"))
    feature_dicts = d.get("features", [])
    for fd in feature_dicts:
        feature = Feature(name=fd["name"])
        for name, value in (fd.get("attributes") or {}).items():
            feature.set_attribute(name, value)
        m.add_feature(feature)
    _wire_groups(m.features, feature_dicts)
    m.constraints = [constraint_from_dict(c) for c in d.get("constraints", [])]
    m.metadata = d.get("metadata", {})
    return m


def feature_model_to_json(m: FeatureModel) -> str:
    return json.dumps(feature_model_to_dict(m), sort_keys=True)


def feature_model_from_json(s: str) -> FeatureModel:
    d = json.loads(s)
    return feature_model_from_dict(d)


def feature_model_to_yaml(m: FeatureModel) -> str:
    return yaml.safe_dump(feature_model_to_dict(m))


def feature_model_from_yaml(s: str) -> FeatureModel:
    d = yaml.safe_load(s)
    return feature_model_from_dict(d)
