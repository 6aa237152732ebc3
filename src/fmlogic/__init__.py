"""
Feature Model Logic (fmlogic) Package

Analysis and translation of the constraint layer of variability
("feature") models.

This package:
    - Translates constraint trees to sympy formulas and back
    - Recognizes requires / excludes relations by constraint shape
    - Derives a single root for feature trees with several roots

It does NOT solve, count or simplify formulas; that is the logic
engine's job. Nothing here configures logging handlers.
"""

__version__ = "0.1.0"
