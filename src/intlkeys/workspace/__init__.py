"""Pass orchestration, document cache and host hooks.

Exports:
    TranslationChecker: Host-facing checker of open translation documents
    DiagnosticSink: Protocol of annotation receivers
    InMemoryDiagnosticSink: Dict-backed sink (CLI and tests)
    FileChange: File-system change notification
    DocumentCache: Last completed pass per document
    CheckResult, run_pass: One side-effect free pass

Python 3.13+.
"""

from .cache import DocumentCache
from .checker import DiagnosticSink, FileChange, InMemoryDiagnosticSink, TranslationChecker
from .pipeline import CheckResult, run_pass

__all__ = [
    "CheckResult",
    "DiagnosticSink",
    "DocumentCache",
    "FileChange",
    "InMemoryDiagnosticSink",
    "TranslationChecker",
    "run_pass",
]
