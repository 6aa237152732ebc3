"""
Demo: Run the analyzer on the example phone model and output the report.
"""

from fmlogic.examples import build_example_feature_model
from fmlogic.analyzer import analyze_feature_model
from fmlogic.roots import unify_model_roots
from fmlogic.serialization import feature_model_to_yaml
from fmlogic.translator import from_formula, to_formula
from fmlogic.grammar import constraint_to_text


def print_report(report):
    """Pretty-print a ModelReport."""
    print()
    print("=" * 70)
    print(f"FEATURE MODEL ANALYSIS REPORT: {report.model_name}")
    print("=" * 70)
    print()

    print("📊 BASIC METRICS")
    print(f"  Total Features:        {report.total_features}")
    print(f"  Total Groups:          {report.total_groups}")
    print(f"  Abstract Features:     {report.abstract_features}")
    print(f"  Roots:                 {report.root_names}")
    print(f"  Total Constraints:     {report.total_constraints}")
    print()

    print("🔗 CONSTRAINTS")
    for c in report.constraints:
        flag = "" if c.translatable else "  [not translatable]"
        print(f"  {c.kind.name:<24} depth {c.depth}  {c.text}{flag}")
    print()
    print(f"  Requires pairs:        {report.requires_pairs}")
    print(f"  Excludes pairs:        {report.excludes_pairs}")
    print(f"  Complex Constraints:   {report.complex_constraints}")
    print(f"  Max Constraint Depth:  {report.max_constraint_depth}")
    print(f"  Avg Constraint Depth:  {report.avg_constraint_depth:.2f}")
    print()

    if report.warnings:
        print("⚠️  WARNINGS")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    else:
        print("✨ NO WARNINGS - Model looks clean!")
    print()


if __name__ == "__main__":
    model = build_example_feature_model()

    print_report(analyze_feature_model(model))

    unified = unify_model_roots(model)
    print(f"Root after unification: {unified.root}")
    print()

    print("🔁 ENGINE ROUND TRIP")
    for constraint in unified.constraints[:5]:
        formula = to_formula(constraint)
        back = from_formula(formula)
        print(f"  {constraint_to_text(constraint):<30} -> {formula!s:<30} -> {constraint_to_text(back)}")
    print()

    yaml_str = feature_model_to_yaml(unified)
    with open("example_model_output.yaml", "w") as f:
        f.write(yaml_str)
    print(f"✅ Model exported to example_model_output.yaml")
