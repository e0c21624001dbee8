"""Cross-locale reconciliation of translation families.

Python 3.13+.
"""

from .engine import MissingParentFinding, ReconciliationResult, reconcile

__all__ = ["MissingParentFinding", "ReconciliationResult", "reconcile"]
