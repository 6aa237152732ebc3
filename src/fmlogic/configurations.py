"""
Name-set views of configuration samples.

A sample maps each configurable element (a Feature or a plain feature
name) to whether it is selected. These helpers only aggregate samples
produced elsewhere; they do not sample or solve anything.
"""

from typing import FrozenSet, Iterable, Mapping, Set, Union

from fmlogic.model import Feature

Configurable = Union[Feature, str]
Sample = Mapping[Configurable, bool]


def _name_of(element: Configurable) -> str:
    return element.name if isinstance(element, Feature) else str(element)


def create_configuration_name_set(samples: Iterable[Sample]) -> Set[FrozenSet[str]]:
    """
    Selected names of each sample.

    Returns:
        One frozenset of selected names per distinct configuration
    """
    configurations: Set[FrozenSet[str]] = set()
    for sample in samples:
        configurations.add(frozenset(_name_of(e) for e, selected in sample.items() if selected))
    return configurations


def get_common_configuration_name_set(samples: Iterable[Sample]) -> Set[str]:
    """Names selected in every sample; empty when there are no samples."""
    configurations = create_configuration_name_set(samples)
    if not configurations:
        return set()
    return set(frozenset.intersection(*configurations))
