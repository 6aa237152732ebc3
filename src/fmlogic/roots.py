"""
Root unification for feature maps.

A model imported from some formats may hold several disconnected trees.
derive_root() guarantees a single addressable root: when there are
several, they are placed in one MANDATORY group under a synthetic,
abstract and hidden root feature.

The caller's map is never mutated. When a root has to be synthesized the
map is deep-copied first and the copy is returned; callers continue with
the returned map.
"""

import copy
import logging
from dataclasses import replace
from typing import Dict, NamedTuple, Optional

from fmlogic.errors import ModelHasNoRootError
from fmlogic.feature_tree import find_roots
from fmlogic.model import (
    ABSTRACT_ATTRIBUTE,
    ARTIFICIAL_MODEL_ATTRIBUTE,
    HIDDEN_ATTRIBUTE,
    Feature,
    FeatureModel,
    Group,
    GroupType,
)
from fmlogic.settings import get_settings

LOG = logging.getLogger(__name__)


class RootDerivation(NamedTuple):
    """Name of the single root, and the feature map it lives in."""

    root_name: str
    features: Dict[str, Feature]


def derive_root(feature_map: Dict[str, Feature], root_name: Optional[str] = None) -> RootDerivation:
    """
    Find or synthesize the single root of a feature map.

    Args:
        feature_map: Feature name -> Feature, for a whole model
        root_name: Name for a synthetic root; defaults to the
            virtual_root_name setting. It must not name an existing
            feature; this is not checked.

    Returns:
        RootDerivation. With one root the input map is returned as is.

    Raises:
        ModelHasNoRootError: If no feature lacks a parent group
    """
    roots = find_roots(feature_map)
    if not roots:
        raise ModelHasNoRootError(
            f"Feature map with {len(feature_map)} feature(s) has no root"
        )

    if len(roots) == 1:
        return RootDerivation(roots[0].name, feature_map)

    settings = get_settings()
    if root_name is None:
        root_name = settings.virtual_root_name

    features = copy.deepcopy(feature_map)
    former_roots = find_roots(features)

    artificial_root = Feature(root_name)
    artificial_root.set_attribute(ABSTRACT_ATTRIBUTE, True)
    artificial_root.set_attribute(HIDDEN_ATTRIBUTE, True)
    artificial_root.set_attribute(ARTIFICIAL_MODEL_ATTRIBUTE, settings.artificial_model_name)

    group = artificial_root.add_group(Group(GroupType.MANDATORY))
    for feature in former_roots:
        group.add_feature(feature)
    features[root_name] = artificial_root

    LOG.info(
        "Unified %d roots (%s) under synthetic root '%s'",
        len(former_roots), ", ".join(f.name for f in former_roots), root_name,
    )
    return RootDerivation(root_name, features)


def unify_model_roots(model: FeatureModel, root_name: Optional[str] = None) -> FeatureModel:
    """
    Apply derive_root() to a model.

    Returns a model whose `root` is set and whose feature map holds the
    synthetic root if one was needed. The given model is left unchanged.
    """
    derivation = derive_root(model.features, root_name)
    return replace(
        model,
        features=derivation.features,
        constraints=list(model.constraints),
        metadata=dict(model.metadata),
        root=derivation.root_name,
    )
