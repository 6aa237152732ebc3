"""
Core Feature Model Objects

Defines the data structures of a variability model:
    - Attributes (typed key/value annotations)
    - Features (named, configurable units)
    - Groups (sibling features under one parent, with a selection kind)
    - FeatureModels (root container: feature map plus constraints)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about logic engines or export formats
        - Represent structure, not behavior
        - Are linked both ways (feature -> groups -> features, and
          feature -> parent group -> parent feature)

Because of the back-links, Feature and Group compare by identity.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .constraints import Constraint

ABSTRACT_ATTRIBUTE = "abstract"
HIDDEN_ATTRIBUTE = "hidden"
ARTIFICIAL_MODEL_ATTRIBUTE = "ARTIFICIAL_MODEL_NAME"


class GroupType(Enum):
    """
    Selection kind of a group.

    MANDATORY:          every child is selected with the parent
    OPTIONAL:           any subset of children
    ALTERNATIVE:        exactly one child
    OR:                 at least one child
    GROUP_CARDINALITY:  between `lower` and `upper` children
    """

    MANDATORY = "mandatory"
    OPTIONAL = "optional"
    ALTERNATIVE = "alternative"
    OR = "or"
    GROUP_CARDINALITY = "cardinality"


@dataclass
class Attribute:
    """
    A typed attribute value attached to a feature.

    Examples:
        Attribute("abstract", True)
        Attribute("capacity", 3000)
    """

    name: str
    value: Any = None


@dataclass(eq=False)
class Group:
    """
    Sibling features under one parent feature.

    Properties:
        group_type:
            Selection kind (GroupType)

        features:
            Member features, in declaration order

        parent_feature:
            Owning feature, set by Feature.add_group()

        lower / upper:
            Bounds for GROUP_CARDINALITY groups (None otherwise)

    INVARIANT:
        Every feature in `features` has this group as its parent_group,
        as long as members are added through add_feature().
    """

    group_type: GroupType
    features: List["Feature"] = field(default_factory=list)
    parent_feature: Optional["Feature"] = field(default=None, repr=False)
    lower: Optional[int] = None
    upper: Optional[int] = None

    def add_feature(self, feature: "Feature") -> "Feature":
        """Append a feature and point its parent_group at this group."""
        self.features.append(feature)
        feature.parent_group = self
        return feature


@dataclass(eq=False)
class Feature:
    """
    A named node in the feature tree.

    Properties:
        name:
            Unique within a model

        groups:
            Child groups; together they partition the direct children

        parent_group:
            The group containing this feature, None for a root

        attributes:
            Attribute name -> Attribute. Used for "abstract", "hidden"
            and provenance markers among others.
    """

    name: str
    groups: List[Group] = field(default_factory=list)
    parent_group: Optional[Group] = field(default=None, repr=False)
    attributes: Dict[str, Attribute] = field(default_factory=dict)

    @property
    def parent_feature(self) -> Optional["Feature"]:
        if self.parent_group is None:
            return None
        return self.parent_group.parent_feature

    def add_group(self, group: Group) -> Group:
        """Append a child group and point its parent_feature here."""
        self.groups.append(group)
        group.parent_feature = self
        return group

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = Attribute(name, value)


@dataclass
class FeatureModel:
    """
    Root container of a variability model.

    Properties:
        name:
            Model identifier

        features:
            Feature name -> Feature, covering the whole model

        constraints:
            Top-level cross-tree constraints

        root:
            Name of the root feature, once known

        metadata:
            Arbitrary key-value pairs (use sparingly)

    INVARIANTS:
        - Feature names are unique (they are the map keys)
        - After root unification exactly one feature has no parent group
    """

    name: str
    features: Dict[str, Feature] = field(default_factory=dict)
    constraints: List[Constraint] = field(default_factory=list)
    root: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_feature(self, feature: Feature) -> Feature:
        self.features[feature.name] = feature
        return feature

    def get_feature(self, name: str) -> Optional[Feature]:
        """
        Retrieve a feature by name.

        Returns:
            Feature object or None if not found
        """
        return self.features.get(name)

    @property
    def root_feature(self) -> Optional[Feature]:
        if self.root is None:
            return None
        return self.features.get(self.root)
