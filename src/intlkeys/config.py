"""Checker configuration.

Configuration lives in the project's ``pyproject.toml``:

    [tool.intlkeys]
    translations-folder = "messages"
    mode = "auto"                 # auto | single-file | folder
    empty-values-missing = true   # blank strings count as missing
    comparison = "symmetric"      # symmetric | current-only
    locales = ["en", "de"]        # optional order/subset, default: every locale found
    source = "intlkeys"           # annotation source tag

Every key is optional. A missing file or table yields the defaults.

Python 3.13+.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from intlkeys.constants import DEFAULT_TRANSLATIONS_FOLDER, PYPROJECT_TABLE, SOURCE_TAG
from intlkeys.diagnostics import ConfigurationError
from intlkeys.enums import ComparisonPolicy, TranslationsMode

__all__ = [
    "CheckerConfig",
    "load_config",
]

logger = logging.getLogger(__name__)

_KNOWN_KEYS = frozenset(
    {
        "translations-folder",
        "mode",
        "empty-values-missing",
        "comparison",
        "locales",
        "source",
    }
)


@dataclass(frozen=True, slots=True)
class CheckerConfig:
    """Settings of a translation checker.

    String values for ``mode`` and ``comparison`` are converted to their
    enum members on construction.

    Attributes:
        translations_folder: Translations root, relative to the project root
        mode: Layout of the translations root
        empty_values_missing: Treat blank strings as missing keys
        comparison: Which keys are compared across locales
        locales: Declared locale order/subset (empty: every locale found)
        source: Tag attached to every annotation
    """

    translations_folder: str = DEFAULT_TRANSLATIONS_FOLDER
    mode: TranslationsMode = TranslationsMode.AUTO
    empty_values_missing: bool = True
    comparison: ComparisonPolicy = ComparisonPolicy.SYMMETRIC
    locales: tuple[str, ...] = ()
    source: str = SOURCE_TAG

    def __post_init__(self) -> None:
        """Validate and normalize settings.

        Raises:
            ConfigurationError: If a setting has an invalid value
        """
        if not isinstance(self.translations_folder, str) or not self.translations_folder.strip():
            msg = (
                "translations-folder must be a non-empty string, "
                f"got {self.translations_folder!r}"
            )
            raise ConfigurationError(msg)

        try:
            object.__setattr__(self, "mode", TranslationsMode(self.mode))
        except ValueError as e:
            choices = ", ".join(m.value for m in TranslationsMode)
            msg = f"mode must be one of {choices}; got {self.mode!r}"
            raise ConfigurationError(msg) from e

        try:
            object.__setattr__(self, "comparison", ComparisonPolicy(self.comparison))
        except ValueError as e:
            choices = ", ".join(p.value for p in ComparisonPolicy)
            msg = f"comparison must be one of {choices}; got {self.comparison!r}"
            raise ConfigurationError(msg) from e

        if not isinstance(self.empty_values_missing, bool):
            msg = f"empty-values-missing must be a boolean, got {self.empty_values_missing!r}"
            raise ConfigurationError(msg)

        if not isinstance(self.locales, (tuple, list)) or not all(
            isinstance(locale, str) and locale for locale in self.locales
        ):
            msg = f"locales must be a list of non-empty strings, got {self.locales!r}"
            raise ConfigurationError(msg)
        object.__setattr__(self, "locales", tuple(self.locales))

        if not isinstance(self.source, str) or not self.source:
            msg = f"source must be a non-empty string, got {self.source!r}"
            raise ConfigurationError(msg)

    @classmethod
    def from_mapping(cls, table: Mapping[str, Any]) -> CheckerConfig:
        """Build a configuration from a ``[tool.intlkeys]`` table.

        Unknown keys are ignored with a warning.

        Raises:
            ConfigurationError: If a value is invalid
        """
        unknown = sorted(set(table) - _KNOWN_KEYS)
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))

        defaults = cls()
        return cls(
            translations_folder=table.get("translations-folder", defaults.translations_folder),
            mode=table.get("mode", defaults.mode),
            empty_values_missing=table.get("empty-values-missing", defaults.empty_values_missing),
            comparison=table.get("comparison", defaults.comparison),
            locales=table.get("locales", defaults.locales),
            source=table.get("source", defaults.source),
        )

    def translations_root(self, project_root: Path) -> Path | None:
        """Resolve the translations root of a project.

        Returns:
            The root directory, or None when it does not exist
        """
        root = project_root / self.translations_folder
        if not root.is_dir():
            logger.info("Translations folder %s not found", root)
            return None
        return root


def load_config(project_root: Path) -> CheckerConfig:
    """Read ``[tool.intlkeys]`` from a project's pyproject.toml.

    Args:
        project_root: Directory holding pyproject.toml

    Returns:
        The configured settings, or the defaults when the file or the table
        is absent

    Raises:
        ConfigurationError: If the file cannot be parsed or holds invalid values
    """
    pyproject = project_root / "pyproject.toml"
    if not pyproject.is_file():
        return CheckerConfig()

    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        msg = f"Cannot read {pyproject}: {e}"
        raise ConfigurationError(msg) from e

    table = data.get("tool", {}).get(PYPROJECT_TABLE)
    if table is None:
        return CheckerConfig()
    if not isinstance(table, dict):
        msg = f"[tool.{PYPROJECT_TABLE}] in {pyproject} must be a table"
        raise ConfigurationError(msg)
    return CheckerConfig.from_mapping(table)
