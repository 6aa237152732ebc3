"""
Navigation helpers for feature trees.

These read the parent/child links of Feature and Group objects; none of
them modify the tree. Upward walks are bounded by the configured depth so
that a cyclic parent chain fails instead of looping.
"""

from typing import Any, Dict, List, Optional

from fmlogic.model import ABSTRACT_ATTRIBUTE, Feature, GroupType
from fmlogic.settings import check_depth


def get_children(feature: Feature) -> List[Feature]:
    """All direct child features, across every child group."""
    children: List[Feature] = []
    for group in feature.groups:
        children.extend(group.features)
    return children


def get_parent(feature: Feature) -> Optional[Feature]:
    return feature.parent_feature


def find_roots(feature_map: Dict[str, Feature]) -> List[Feature]:
    """Features without a parent group, in map order."""
    return [f for f in feature_map.values() if f.parent_group is None]


def is_parent_feature_of(child: Optional[Feature], parent: Optional[Feature]) -> bool:
    """
    True if `parent` is an ancestor of `child`, at any distance.

    Ancestors are matched by name.
    """
    if child is None or parent is None:
        return False

    depth = 1
    current = child.parent_feature
    while current is not None:
        check_depth(depth)
        if current.name == parent.name:
            return True
        current = current.parent_feature
        depth += 1
    return False


def get_attribute_value(feature: Feature, attribute_name: str) -> Any:
    attribute = feature.attributes.get(attribute_name)
    return None if attribute is None else attribute.value


def is_abstract(feature: Feature) -> bool:
    """
    True when the "abstract" attribute is set to a truthy value.

    String values are read the way model files write them ("true").
    """
    value = get_attribute_value(feature, ABSTRACT_ATTRIBUTE)
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def check_group_type(feature: Feature, group_type: GroupType) -> bool:
    """True if the feature sits in a group of the given kind."""
    if feature.parent_group is None:
        return False
    return feature.parent_group.group_type == group_type


def is_enumeration_type(feature: Feature) -> bool:
    """True if the feature owns an ALTERNATIVE or OR group."""
    return any(
        group.group_type in (GroupType.ALTERNATIVE, GroupType.OR)
        for group in feature.groups
    )
