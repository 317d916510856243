"""
Process-wide plumbing shared by the feature packages: pool construction and
SQL helpers, the JSON error body, logging setup. Person SQL and merge rules
live in `persons/`.
"""
