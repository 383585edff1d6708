"""
scramble_core package: models, balanced team scrambling, quality scoring, CSV IO, and export.
"""
__all__ = [
    "models",
    "constants",
    "config",
    "fairness",
    "metrics",
    "scramble",
    "quality",
    "csv_io",
    "roster",
    "teams",
    "export_pdf",
]
