# app/api/endpoints/__init__.py
"""API endpoints"""

from . import analyze, health

__all__ = ["analyze", "health"]
