"""Integration tests for the FastTLD extractor."""
import logging
import os

import pytest

from fasttld.config import settings
from fasttld.errors import RefreshFailedError, RefreshNotSupportedError, SourceUnavailableError
from fasttld.extractor import FastTLD, extract
from fasttld.models import ExtractRequest, ExtractResult
from fasttld.psl import fetcher


@pytest.fixture
def managed_cache(tmp_path, monkeypatch):
    """Point the managed cache at a temporary directory."""
    monkeypatch.setattr(settings, "cache_dir", str(tmp_path / "cache"))
    return tmp_path / "cache" / "public_suffix_list.dat"


@pytest.fixture
def offline(monkeypatch):
    """Make every suffix list download fail."""
    def fail(*args, **kwargs):
        raise RefreshFailedError("Failed to fetch any Public Suffix List from all mirrors")
    monkeypatch.setattr(fetcher, "download_suffix_list", fail)


class TestCustomSource:
    """Test extractors built from a caller-supplied list."""

    def test_extract(self, psl_file):
        extractor = FastTLD(suffix_source_path=str(psl_file))
        result = extractor.extract("https://maps.google.com.ua/a/long/path?query=42")

        assert result == ExtractResult(
            subdomain="maps", domain="google", suffix="com.ua", registered_domain="google.com.ua"
        )

    def test_extract_flags(self, psl_file):
        extractor = FastTLD(suffix_source_path=str(psl_file))
        result = extractor.extract("WWW.Bücher.DE", convert_to_punycode=True, ignore_subdomains=True)

        assert result == ExtractResult(
            domain="xn--bcher-kva", suffix="de", registered_domain="xn--bcher-kva.de"
        )

    def test_extract_request(self, psl_file):
        extractor = FastTLD(suffix_source_path=str(psl_file))
        result = extractor.extract_request(ExtractRequest(url="a.b.com"))
        assert result.registered_domain == "b.com"

    def test_private_suffixes_toggle(self, psl_file):
        public_only = FastTLD(suffix_source_path=str(psl_file), include_private_suffixes=False)
        with_private = FastTLD(suffix_source_path=str(psl_file), include_private_suffixes=True)

        assert public_only.extract("me.github.io").suffix == ""
        assert with_private.extract("me.github.io").registered_domain == "me.github.io"

    def test_missing_source_raises(self, tmp_path):
        with pytest.raises(SourceUnavailableError):
            FastTLD(suffix_source_path=str(tmp_path / "missing.dat"))

    def test_custom_source_is_never_downloaded(self, psl_file, monkeypatch):
        def unexpected(*args, **kwargs):
            raise AssertionError("custom lists must not be downloaded")
        monkeypatch.setattr(fetcher, "download_suffix_list", unexpected)

        extractor = FastTLD(suffix_source_path=str(psl_file), auto_update=True)
        assert extractor.is_managed is False

    def test_refresh_not_supported(self, psl_file):
        extractor = FastTLD(suffix_source_path=str(psl_file))
        with pytest.raises(RefreshNotSupportedError, match="custom"):
            extractor.refresh()


class TestBundledSnapshot:
    """Test the suffix list shipped with the package."""

    @pytest.fixture
    def extractor(self):
        return FastTLD(suffix_source_path=str(fetcher.bundled_snapshot_path()))

    def test_country_second_level(self, extractor):
        assert extractor.extract("http://forums.bbc.co.uk/").registered_domain == "bbc.co.uk"

    def test_nested_government_suffix(self, extractor):
        result = extractor.extract("www.customs.us.gov.pl")
        assert result.suffix == "us.gov.pl"
        assert result.domain == "customs"

    def test_wildcard_with_exception(self, extractor):
        assert extractor.extract("www.ck").registered_domain == "www.ck"
        assert extractor.extract("a.b.ck").registered_domain == "a.b.ck"

    def test_unicode_tld(self, extractor):
        assert extractor.extract("例子.中国").suffix == "中国"
        assert extractor.extract("例子.中国", convert_to_punycode=True).suffix == "xn--fiqs8s"

    def test_private_excluded_by_default(self, extractor):
        assert extractor.extract("waiterrant.blogspot.com").registered_domain == "blogspot.com"


class TestManagedSource:
    """Test extractors using the managed cache."""

    def test_seeds_cache_from_snapshot_when_offline(self, managed_cache, offline, caplog):
        caplog.set_level(logging.WARNING)
        extractor = FastTLD(auto_update=True)

        assert extractor.is_managed is True
        assert managed_cache.exists()
        assert extractor.extract("maps.google.com.ua").suffix == "com.ua"
        assert "Could not update suffix list cache" in caplog.text

    def test_unwritable_cache_uses_snapshot_read_only(self, tmp_path, monkeypatch, offline, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        monkeypatch.setattr(settings, "cache_dir", str(blocker / "cache"))
        caplog.set_level(logging.WARNING)

        extractor = FastTLD(auto_update=True)

        assert extractor.is_managed is True
        assert extractor.source_path == fetcher.bundled_snapshot_path()
        assert extractor.extract("maps.google.com.ua").registered_domain == "google.com.ua"
        assert "using bundled snapshot read-only" in caplog.text

    def test_downloads_when_cache_missing(self, managed_cache, monkeypatch, psl_text):
        monkeypatch.setattr(fetcher, "download_suffix_list", lambda *args, **kwargs: psl_text)

        extractor = FastTLD(auto_update=True)

        assert managed_cache.read_text(encoding="utf-8") == psl_text
        assert extractor.extract("x.ck").suffix == "x.ck"

    def test_fresh_cache_is_not_downloaded(self, managed_cache, monkeypatch, psl_text):
        managed_cache.parent.mkdir(parents=True)
        managed_cache.write_text(psl_text, encoding="utf-8")

        def unexpected(*args, **kwargs):
            raise AssertionError("fresh cache must not be downloaded")
        monkeypatch.setattr(fetcher, "download_suffix_list", unexpected)

        extractor = FastTLD(auto_update=True)
        assert extractor.extract("a.b.com").domain == "b"

    def test_stale_cache_kept_when_offline(self, managed_cache, offline):
        managed_cache.parent.mkdir(parents=True)
        managed_cache.write_text("com\n", encoding="utf-8")
        os.utime(managed_cache, (0, 0))

        extractor = FastTLD(auto_update=True)

        assert extractor.extract("a.b.com").domain == "b"
        assert extractor.extract("maps.google.com.ua").suffix == ""

    def test_refresh_swaps_trie(self, managed_cache, offline, monkeypatch):
        extractor = FastTLD(auto_update=False)
        old_trie = extractor.trie
        assert extractor.extract("a.b.example").suffix == ""

        monkeypatch.setattr(fetcher, "download_suffix_list", lambda *args, **kwargs: "example\n")
        extractor.refresh()

        assert extractor.trie is not old_trie
        assert extractor.extract("a.b.example").registered_domain == "b.example"
        # Callers holding the previous trie keep their view
        assert extract(ExtractRequest(url="a.b.example"), old_trie).suffix == ""

    def test_failed_refresh_keeps_trie(self, managed_cache, offline):
        extractor = FastTLD(auto_update=False)
        old_trie = extractor.trie

        with pytest.raises(RefreshFailedError):
            extractor.refresh()

        assert extractor.trie is old_trie
        assert extractor.extract("bbc.co.uk").registered_domain == "bbc.co.uk"

    def test_include_private_from_settings(self, managed_cache, monkeypatch):
        monkeypatch.setattr(settings, "include_private_suffixes", True)
        extractor = FastTLD(auto_update=False)

        assert extractor.include_private_suffixes is True
        assert extractor.extract("waiterrant.blogspot.com").domain == "waiterrant"
