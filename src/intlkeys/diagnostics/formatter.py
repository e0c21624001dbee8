"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Compiler-style multi-line output (default)
    SIMPLE = "simple"  # Single-line format, grep friendly
    JSON = "json"  # JSON lines for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Line and column numbers are printed 1-indexed, like editors display them,
    although Range positions are stored 0-indexed.

    Attributes:
        output_format: Output style (rust, simple, json)
        color: Enable ANSI color codes (for terminal output)

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> print(formatter.format(diagnostic, document="messages/en.json"))
        warning[MISSING_TRANSLATION]: Missing translations for key "nav.home" in:
        de
          --> messages/en.json:3:6
          = help: Add the key to every listed locale, or remove it everywhere

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic, document="messages/en.json"))
        messages/en.json:3:6: MISSING_TRANSLATION: Missing translations for key "nav.home" in: de
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False

    def format(self, diagnostic: Diagnostic, *, document: str | None = None) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format
            document: Path of the annotated document (optional)

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic, document)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic, document)
            case OutputFormat.JSON:
                return self._format_json(diagnostic, document)

    def format_all(
        self, diagnostics: Iterable[Diagnostic], *, document: str | None = None
    ) -> str:
        """Format multiple diagnostics of one document.

        Args:
            diagnostics: Iterable of diagnostics to format
            document: Path of the annotated document (optional)

        Returns:
            Formatted string; blank-line separated except for JSON lines
        """
        separator = "\n" if self.output_format == OutputFormat.JSON else "\n\n"
        return separator.join(self.format(d, document=document) for d in diagnostics)

    @staticmethod
    def _location(diagnostic: Diagnostic, document: str | None) -> str | None:
        if diagnostic.range is None:
            return document
        start = diagnostic.range.start
        position = f"{start.line + 1}:{start.character + 1}"
        return f"{document}:{position}" if document else f"line {position}"

    def _format_rust(self, diagnostic: Diagnostic, document: str | None) -> str:
        """Format diagnostic in compiler style.

        Example output:
            warning[MISSING_PARENT_KEY]: Missing parent translation "a" for key "a.b"
              --> messages/en.json:2:4
              = help: Nest the key under an object instead of using dots in its name
        """
        severity = diagnostic.severity
        if self.color:
            if severity == "error":
                severity = f"\033[1;31m{severity}\033[0m"  # Bold red
            else:
                severity = f"\033[1;33m{severity}\033[0m"  # Bold yellow

        parts = [f"{severity}[{diagnostic.code.name}]: {diagnostic.message}"]

        location = self._location(diagnostic, document)
        if location:
            parts.append(f"  --> {location}")

        if diagnostic.hint:
            parts.append(f"  = help: {diagnostic.hint}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic, document: str | None) -> str:
        """Format diagnostic on a single line.

        Example output:
            messages/en.json:3:6: MISSING_TRANSLATION: Missing translations for key "a" in: de
        """
        message = diagnostic.message.replace(":\n", ": ").replace("\n", "; ")
        location = self._location(diagnostic, document)
        prefix = f"{location}: " if location else ""
        return f"{prefix}{diagnostic.code.name}: {message}"

    def _format_json(self, diagnostic: Diagnostic, document: str | None) -> str:
        """Format diagnostic as one JSON object.

        Example output:
            {"code": "MISSING_TRANSLATION", "message": "...", "severity": "warning"}
        """
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
            "source": diagnostic.source,
        }

        if document:
            data["document"] = document

        if diagnostic.key is not None:
            data["key"] = diagnostic.key

        if diagnostic.range is not None:
            data["line"] = diagnostic.range.start.line
            data["character"] = diagnostic.range.start.character
            data["end_line"] = diagnostic.range.end.line
            data["end_character"] = diagnostic.range.end.character

        if diagnostic.hint:
            data["hint"] = diagnostic.hint

        return json.dumps(data, ensure_ascii=False)
