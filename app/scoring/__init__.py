"""
scoring/ - score normalization and vote aggregation

Modules:
    utils.py        - clamping, midpoint defaulting, percent conversion
    aggregation.py  - running-average vote folding
"""
