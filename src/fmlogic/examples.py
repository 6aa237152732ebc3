"""
Example feature model for demos and tests.

Builds a small phone product line as an importer would deliver it: two
disconnected trees ("Phone" and "Accessories") and one constraint of each
relation kind, plus a complex and an arithmetic constraint.
"""
from fmlogic.constraints import (
    AndConstraint,
    AttributeTerm,
    ComparisonOperator,
    ExpressionConstraint,
    ImplicationConstraint,
    LiteralConstraint,
    NotConstraint,
    NumberTerm,
    OrConstraint,
    ParenthesisConstraint,
)
from fmlogic.model import Feature, FeatureModel, Group, GroupType


def _lit(name: str) -> LiteralConstraint:
    return LiteralConstraint(name)


def build_example_feature_model(battery_capacity: int = 4000) -> FeatureModel:
    model = FeatureModel(name="Phone Product Line")

    phone = model.add_feature(Feature("Phone"))
    mandatory = phone.add_group(Group(GroupType.MANDATORY))
    screen = model.add_feature(mandatory.add_feature(Feature("Screen")))
    battery = model.add_feature(mandatory.add_feature(Feature("Battery")))
    battery.set_attribute("capacity", battery_capacity)

    optional = phone.add_group(Group(GroupType.OPTIONAL))
    for name in ("Camera", "GPS"):
        model.add_feature(optional.add_feature(Feature(name)))

    screen.set_attribute("abstract", True)
    screens = screen.add_group(Group(GroupType.ALTERNATIVE))
    for name in ("Basic", "Color", "HighResolution"):
        model.add_feature(screens.add_feature(Feature(name)))

    # Second, disconnected tree
    accessories = model.add_feature(Feature("Accessories"))
    extras = accessories.add_group(Group(GroupType.OPTIONAL))
    for name in ("Case", "Charger"):
        model.add_feature(extras.add_feature(Feature(name)))

    model.constraints = [
        # Camera requires HighResolution
        OrConstraint(NotConstraint(_lit("Camera")), _lit("HighResolution")),
        # GPS excludes Basic
        OrConstraint(NotConstraint(_lit("GPS")), NotConstraint(_lit("Basic"))),
        # Camera => Charger
        ImplicationConstraint(_lit("Camera"), _lit("Charger")),
        # Case => !GPS
        ImplicationConstraint(_lit("Case"), NotConstraint(_lit("GPS"))),
        # (Camera & GPS) => Battery
        ImplicationConstraint(
            ParenthesisConstraint(AndConstraint(_lit("Camera"), _lit("GPS"))),
            _lit("Battery"),
        ),
        # Battery.capacity >= 3000
        ExpressionConstraint(
            ComparisonOperator.GREATER_EQUAL,
            AttributeTerm("Battery", "capacity"),
            NumberTerm(3000),
        ),
    ]
    model.metadata = {"source": "example"}

    return model
