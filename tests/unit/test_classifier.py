"""Unit tests for Public Suffix List parsing."""
import logging

import pytest

from fasttld.errors import SourceUnavailableError
from fasttld.psl.classifier import PRIVATE_SECTION_MARKER, load_suffix_collections, parse_suffix_lines


class TestParseSuffixLines:
    """Test classification of PSL lines."""

    def test_splits_public_and_private(self, suffix_collections):
        assert "com" in suffix_collections.public
        assert "co.uk" in suffix_collections.public
        assert "blogspot.com" in suffix_collections.private
        assert "blogspot.com" not in suffix_collections.public
        assert "com" not in suffix_collections.private

    def test_all_keeps_file_order(self, suffix_collections):
        assert suffix_collections.all == suffix_collections.public + suffix_collections.private

    def test_skips_comments_and_blank_lines(self, suffix_collections):
        assert not any(s.startswith("//") for s in suffix_collections.all)
        assert "" not in suffix_collections.all

    def test_marker_line_is_not_a_suffix(self, suffix_collections):
        assert PRIVATE_SECTION_MARKER not in suffix_collections.all

    def test_wildcards_and_exceptions_kept_verbatim(self, suffix_collections):
        assert "*.ck" in suffix_collections.public
        assert "!www.ck" in suffix_collections.public

    def test_unicode_entry_followed_by_original(self, suffix_collections):
        index = suffix_collections.public.index("xn--55qx5d.cn")
        assert suffix_collections.public[index + 1] == "公司.cn"

    def test_strips_whitespace(self):
        collections = parse_suffix_lines(["  com  \n", "\tco.uk\r\n"])
        assert collections.public == ("com", "co.uk")

    def test_private_flag_without_icann_marker(self):
        collections = parse_suffix_lines(["com", PRIVATE_SECTION_MARKER, "github.io"])
        assert collections.public == ("com",)
        assert collections.private == ("github.io",)

    def test_invalid_line_is_skipped(self, caplog):
        caplog.set_level(logging.WARNING)
        collections = parse_suffix_lines(["com", "\u0301bad.com", "net"])

        assert collections.all == ("com", "net")
        assert "Skipping suffix" in caplog.text

    def test_select(self, suffix_collections):
        assert suffix_collections.select(include_private=False) == suffix_collections.public
        assert suffix_collections.select(include_private=True) == suffix_collections.all


class TestLoadSuffixCollections:
    """Test loading suffix lists from files."""

    def test_loads_file(self, psl_file):
        collections = load_suffix_collections(psl_file)
        assert "com.ua" in collections.public
        assert "github.io" in collections.private

    def test_accepts_str_path(self, psl_file):
        assert load_suffix_collections(str(psl_file)).all

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(SourceUnavailableError, match="Cannot read suffix list"):
            load_suffix_collections(tmp_path / "nonexistent.dat")

    def test_directory_raises(self, tmp_path):
        with pytest.raises(SourceUnavailableError):
            load_suffix_collections(tmp_path)
