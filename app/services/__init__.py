# app/services/__init__.py
"""Service layer: page extraction, summarization, enrichment and report rendering"""

# Services are imported directly by the pipeline to keep this package free of
# import-time side effects.

__all__ = []
