"""
Tests for module.info parsing.

This test suite covers:
1. Defaults for missing and empty files
2. Description continuation lines
3. Dependency list parsing
4. Malformed and stray lines
"""

import tempfile
from pathlib import Path

import pytest

from modkit.module.metadata import (
    DEFAULT_VERSION,
    ModuleMetadata,
    lcfirst,
    parse_depends,
    parse_metadata,
)


def parse_text(text: str, name: str = "example") -> ModuleMetadata:
    with tempfile.TemporaryDirectory() as tmpdir:
        metadata_file = Path(tmpdir) / "module.info"
        metadata_file.write_text(text, encoding="utf-8")
        return parse_metadata(metadata_file, name)


class TestDefaults:
    """Test metadata defaults."""

    def test_missing_file(self):
        """A missing file should yield default metadata."""
        metadata = parse_metadata(Path("/nonexistent/module.info"), "example")

        assert metadata.name == "example"
        assert metadata.version == DEFAULT_VERSION
        assert metadata.short_description == ""
        assert metadata.description == ""
        assert metadata.depends == {}
        assert metadata.extra == {}

    def test_empty_file(self):
        """An empty file should yield default metadata."""
        metadata = parse_text("")

        assert metadata == ModuleMetadata(name="example")

    def test_metadata_is_frozen(self):
        """Metadata should not be mutable after parsing."""
        metadata = parse_text("Version: 1.0.0\n")

        with pytest.raises(AttributeError):
            metadata.version = "2.0.0"

    def test_mappings_are_read_only(self):
        metadata = parse_text("Depends: foo\nAuthor: Jane Doe\n")

        with pytest.raises(TypeError):
            metadata.depends["bar"] = "1.0"
        with pytest.raises(TypeError):
            metadata.extra["license"] = "GPL-2.0"
        assert metadata.depends == {"foo": True}
        assert metadata.extra == {"author": "Jane Doe"}


class TestFields:
    """Test field parsing."""

    def test_full_descriptor(self):
        """Should parse all known keys."""
        metadata = parse_text(
            "Name: monitoring\n"
            "Version: 2.1.0\n"
            "Depends: base (>=1.0), graphs (1.2)\n"
            "Description: Monitoring module\n"
            "  Shows hosts and services.\n"
            "  Second continuation line.\n"
        )

        assert metadata.name == "monitoring"
        assert metadata.version == "2.1.0"
        assert metadata.depends == {"base": ">=1.0", "graphs": "1.2"}
        assert metadata.short_description == "Monitoring module"
        assert metadata.description == (
            "Monitoring module\nShows hosts and services.\nSecond continuation line."
        )

    def test_name_defaults_to_module_name(self):
        metadata = parse_text("Version: 1.0.0\n", name="graphs")
        assert metadata.name == "graphs"

    def test_no_trailing_newline(self):
        """The last line should be parsed without a final newline."""
        metadata = parse_text("Version: 1.0.0\nDescription: Last line")

        assert metadata.version == "1.0.0"
        assert metadata.description == "Last line"

    def test_tab_continuation(self):
        metadata = parse_text("Description: First\n\tSecond\n")
        assert metadata.description == "First\nSecond"
        assert metadata.short_description == "First"

    def test_key_first_character_lowered(self):
        """Keys should only have their first character lowered."""
        metadata = parse_text("ShortDescription: Short\nHomePage: https://example.org\n")

        assert metadata.short_description == "Short"
        assert metadata.extra == {"homePage": "https://example.org"}

    def test_unknown_keys_kept_verbatim(self):
        metadata = parse_text("Author: Jane Doe\nLicense: GPL-2.0\n")
        assert metadata.extra == {"author": "Jane Doe", "license": "GPL-2.0"}

    def test_empty_value(self):
        metadata = parse_text("Description:\n  Only continuation\n")
        assert metadata.short_description == ""
        assert metadata.description == "\nOnly continuation"


class TestDepends:
    """Test dependency parsing."""

    def test_no_depends_line(self):
        assert parse_text("Version: 1.0.0\n").depends == {}

    def test_single_dependency(self):
        """A bare name should mean any version."""
        assert parse_text("Depends: foo\n").depends == {"foo": True}

    def test_constraint_list(self):
        metadata = parse_text("Depends: foo (>=1.0), bar (1.2)\n")
        assert metadata.depends == {"foo": ">=1.0", "bar": "1.2"}

    def test_invalid_entries_skipped(self):
        """Entries which are neither form should be ignored."""
        metadata = parse_text("Depends: foo, bar (1.2), baz (\n")
        assert metadata.depends == {"bar": "1.2"}

    def test_multiple_depends_lines_merge(self):
        metadata = parse_text("Depends: foo\nDepends: bar (>=2), baz (3)\n")
        assert metadata.depends == {"foo": True, "bar": ">=2", "baz": "3"}

    def test_parse_depends_empty_value(self):
        depends: dict = {}
        parse_depends("", depends)
        assert depends == {}


class TestMalformedLines:
    """Test graceful handling of malformed input."""

    def test_stray_continuation_before_key(self):
        """Continuation-like lines before any key should be ignored."""
        metadata = parse_text("  stray line\nVersion: 1.0.0\n")

        assert metadata.version == "1.0.0"
        assert metadata.description == ""
        assert metadata.extra == {}

    def test_continuation_only_for_description(self):
        metadata = parse_text("Version: 1.0.0\n  not a continuation\n")
        assert metadata.version == "1.0.0"

    def test_blank_line_ends_description(self):
        metadata = parse_text("Description: First\n\n  Detached\n")
        assert metadata.description == "First"

    def test_line_without_separator_ignored(self):
        metadata = parse_text("Version 1.0.0\nDescription: Text\nnonsense\n  more\n")

        assert metadata.version == DEFAULT_VERSION
        assert metadata.description == "Text"

    def test_key_may_contain_colon(self):
        """Only a colon followed by whitespace should end the key."""
        metadata = parse_text("Foo:bar: baz\nUrl: https://example.org\n")

        assert metadata.extra == {"foo:bar": "baz", "url": "https://example.org"}

    def test_colon_without_whitespace_ignored(self):
        assert parse_text("Version:1.0.0\n").version == DEFAULT_VERSION

    def test_lcfirst(self):
        assert lcfirst("Depends") == "depends"
        assert lcfirst("") == ""
