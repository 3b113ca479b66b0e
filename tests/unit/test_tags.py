"""
Unit tests for tag helpers in filetagger.matching.tags.

Tests cover:
- normalize_tags trimming, lowercasing, de-duplication
- parse_tags splitting of free-text input
- tags_from_filename segment extraction and date reduction
"""

import pytest

from filetagger.matching import normalize_tags, parse_tags, tags_from_filename


@pytest.mark.unit
class TestNormalizeTags:
    """Tests for normalize_tags."""

    def test_trims_and_lowercases(self):
        assert normalize_tags(["  Taxes ", "2023"]) == ["taxes", "2023"]

    def test_drops_blank_tags(self):
        assert normalize_tags(["", "   ", "acme"]) == ["acme"]

    def test_collapses_duplicates_keeping_first(self):
        assert normalize_tags(["ACME", "invoice", "acme"]) == ["acme", "invoice"]

    def test_ignores_non_string_entries(self):
        assert normalize_tags(["acme", None, 42]) == ["acme"]

    def test_empty_input(self):
        assert normalize_tags([]) == []


@pytest.mark.unit
class TestParseTags:
    """Tests for parse_tags."""

    def test_comma_separated(self):
        assert parse_tags("Taxes, 2023,receipts") == ["taxes", "2023", "receipts"]

    def test_newline_separated(self):
        assert parse_tags("taxes\n2023\n\nreceipts") == ["taxes", "2023", "receipts"]

    def test_only_separators(self):
        assert parse_tags(" , ,\n") == []

    def test_none(self):
        assert parse_tags(None) == []


@pytest.mark.unit
class TestTagsFromFilename:
    """Tests for tags_from_filename."""

    def test_splits_on_underscores(self):
        assert tags_from_filename("Invoice_ACME_March.pdf") == ["invoice", "acme", "march"]

    def test_splits_on_whitespace(self):
        assert tags_from_filename("Dentist receipt.pdf") == ["dentist", "receipt"]

    def test_compact_date_reduced_to_year(self):
        assert tags_from_filename("Invoice_ACME_20230415.pdf") == ["invoice", "acme", "2023"]

    def test_other_numbers_kept(self):
        assert tags_from_filename("Report_2023_0415.pdf") == ["report", "2023", "0415"]

    def test_only_last_extension_removed(self):
        assert tags_from_filename("backup_db.tar.gz") == ["backup", "db.tar"]

    def test_name_without_extension(self):
        assert tags_from_filename("README") == ["readme"]

    def test_hyphens_are_not_separators(self):
        assert tags_from_filename("acme-invoice.pdf") == ["acme-invoice"]

    def test_empty_name(self):
        assert tags_from_filename("") == []
