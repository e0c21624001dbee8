"""Annotation and hover text built from reconciliation results.

Python 3.13+.
"""

from .builder import HoverInfo, build, hover

__all__ = ["HoverInfo", "build", "hover"]
