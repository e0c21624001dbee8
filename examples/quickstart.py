"""Quickstart example for intlkeys.

This example demonstrates checking JSON translation files for missing keys,
both as an editor integration would (open documents, file changes, hover)
and as a one-shot pass.

Note: Examples build their translations folder in a temporary directory so
they can run from anywhere.
"""

import json
import tempfile
from pathlib import Path

from intlkeys import CheckerConfig, TranslationChecker, TranslationsMode
from intlkeys.diagnostics import DiagnosticFormatter, OutputFormat
from intlkeys.enums import FileChangeKind
from intlkeys.workspace import FileChange, InMemoryDiagnosticSink

with tempfile.TemporaryDirectory() as tmp:
    project = Path(tmp)
    messages = project / "messages"
    messages.mkdir()

    en_text = json.dumps({"greeting": "Hello", "nested": {"message": "Hi"}}, indent=2)
    (messages / "en.json").write_text(en_text, encoding="utf-8")
    (messages / "de.json").write_text(json.dumps({"greeting": "Hallo"}), encoding="utf-8")

    # Example 1: Open a document and read its annotations
    print("=" * 50)
    print("Example 1: Annotations of an open document")
    print("=" * 50)

    sink = InMemoryDiagnosticSink()
    checker = TranslationChecker(project, sink=sink)
    checker.open_document(messages / "en.json", en_text, version=1)

    formatter = DiagnosticFormatter()
    for diagnostic in sink.get(str(messages / "en.json")):
        print(formatter.format(diagnostic, document="messages/en.json"))
    # Output:
    # warning[MISSING_TRANSLATION]: Missing translations for key "nested.message" in:
    # de
    #   --> messages/en.json:4:6
    #   = help: Add the key to every listed locale, or remove it everywhere

    # Example 2: Hover on the flagged key
    print("\n" + "=" * 50)
    print("Example 2: Hover")
    print("=" * 50)

    anchor = sink.get(str(messages / "en.json"))[0].range
    if anchor is not None:
        info = checker.hover(messages / "en.json", anchor.start)
        if info is not None:
            print(info.markdown)
    # Output:
    # **Missing Translations**
    #
    # Key: `nested.message`
    # Missing languages: de (German)

    # Example 3: Another locale file is fixed on disk
    print("\n" + "=" * 50)
    print("Example 3: File changes")
    print("=" * 50)

    (messages / "de.json").write_text(
        json.dumps({"greeting": "Hallo", "nested": {"message": "Hallo du"}}), encoding="utf-8"
    )
    checker.on_files_changed([FileChange(str(messages / "de.json"), FileChangeKind.CHANGED)])
    print(f"Annotations after fix: {len(sink.get(str(messages / 'en.json')))}")
    # Output: Annotations after fix: 0

    # Example 4: One-shot pass with settings, nothing cached or published
    print("\n" + "=" * 50)
    print("Example 4: One-shot pass")
    print("=" * 50)

    config = CheckerConfig(mode=TranslationsMode.SINGLE_FILE)
    checker.on_config_changed(config)
    result = checker.check_document(messages / "de.json", '{"greeting": "Hallo"}')
    if result is not None:
        simple = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        print(f"Family: {', '.join(result.family.locales)}")
        print(f"Flagged keys: {dict(result.result.missing_translations_by_key)}")
        print(f"Annotations: {len(result.diagnostics)}")
        for diagnostic in result.diagnostics:
            print(simple.format(diagnostic, document="messages/de.json"))
    # Output:
    # Family: de, en
    # Flagged keys: {'nested.message': ('en',)}
    # Annotations: 0

    checker.close_document(messages / "en.json")
    print(f"\nOpen documents after close: {checker.open_documents}")
    # Output: Open documents after close: ()
