"""Enumerations for intlkeys type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so configuration values read from
pyproject.toml or the command line compare directly against members.

Python 3.13+.
"""

from enum import StrEnum


class TranslationsMode(StrEnum):
    """Layout of the translations folder.

    StrEnum provides automatic string conversion: str(TranslationsMode.AUTO) == "auto"
    """

    AUTO = "auto"
    """Detect from folder contents (subfolders win over loose files)"""

    SINGLE_FILE = "single-file"
    """One JSON document per locale: messages/en.json"""

    FOLDER = "folder"
    """One subfolder per locale: messages/en/common.json"""


class ComparisonPolicy(StrEnum):
    """Which keys are compared when reconciling a locale against the others."""

    SYMMETRIC = "symmetric"
    """Keys of the current locale AND keys only present in other locales"""

    CURRENT_ONLY = "current-only"
    """Only keys present in the current locale"""


class FileChangeKind(StrEnum):
    """Kind of file-system change reported by the host."""

    CREATED = "created"
    CHANGED = "changed"
    DELETED = "deleted"


class LoadStatus(StrEnum):
    """Outcome of loading one locale's translation file."""

    SUCCESS = "success"
    """File read and parsed"""

    NOT_FOUND = "not_found"
    """No equivalent file for this locale (contributes no keys)"""

    ERROR = "error"
    """File unreadable or malformed (locale excluded from the pass)"""


__all__ = [
    "ComparisonPolicy",
    "FileChangeKind",
    "LoadStatus",
    "TranslationsMode",
]
