"""Translation set model, loading and mode resolution.

Exports:
    LocaleTranslation: Flattened messages of one locale
    TranslationFamily: Locales compared together in one pass
    TranslationFileLoader: Disk loader for a translations root
    ResourceLoadResult, LoadSummary: Outcome of the load attempts of a pass
    load_family: Build the family compared against one document
    ModeResolution, DocumentLocation: Layout of a root and place of a document
    resolve_mode, locate_document: Layout detection and document placement

Python 3.13+.
"""

from .loading import LoadSummary, ResourceLoadResult, TranslationFileLoader, load_family
from .mode import DocumentLocation, ModeResolution, locate_document, resolve_mode
from .model import LocaleTranslation, TranslationFamily
from .types import DocumentPath, JSONSource, KeyPath, LocaleCode, MessageTree

__all__ = [
    "DocumentLocation",
    "DocumentPath",
    "JSONSource",
    "KeyPath",
    "LoadSummary",
    "LocaleCode",
    "LocaleTranslation",
    "MessageTree",
    "ModeResolution",
    "ResourceLoadResult",
    "TranslationFamily",
    "TranslationFileLoader",
    "load_family",
    "locate_document",
    "resolve_mode",
]
