"""
Subdomain, domain and suffix extraction against a compiled suffix trie.

    >>> extractor = FastTLD()
    >>> extractor.extract("https://maps.google.com.ua/a/long/path?query=42")
    ExtractResult(subdomain='maps', domain='google', suffix='com.ua', registered_domain='google.com.ua', port='')
"""
import logging
import threading
from datetime import timedelta
from pathlib import Path
from typing import Optional, Sequence

from fasttld.config import settings
from fasttld.errors import RefreshFailedError, RefreshNotSupportedError
from fasttld.models import END, EXCEPTION_PREFIX, WILDCARD, ExtractRequest, ExtractResult, TrieNode
from fasttld.psl import fetcher
from fasttld.psl.classifier import load_suffix_collections
from fasttld.psl.trie import compile_trie
from fasttld.utils.domain import format_as_punycode, is_ipv4_address
from fasttld.utils.host import split_host

logger = logging.getLogger(__name__)


def match_suffix(labels: Sequence[str], trie: TrieNode) -> int:
    """
    Count how many trailing labels form the longest matching suffix.

    Labels are walked from the rightmost one. A wildcard level consumes one
    more label unless that label is listed as an exception, in which case the
    label is left over to become the domain.
    """
    node = trie
    suffix_len = 0

    for label in reversed(labels):
        label = label.lower()

        # node is a suffix itself, check for a longer one (cn -> gov.cn)
        if END in node:
            child = node.get(label)
            if child is not None:
                suffix_len += 1
                if child.is_leaf:
                    break
                node = child
                continue

        if WILDCARD in node:
            if EXCEPTION_PREFIX + label not in node:
                suffix_len += 1
            break

        child = node.get(label)
        if child is None:
            break
        suffix_len += 1
        if child.is_leaf:
            break
        node = child

    return suffix_len


def extract(request: ExtractRequest, trie: TrieNode) -> ExtractResult:
    """Split ``request.url`` into subdomain, domain, suffix and registered domain."""
    parts = split_host(request.url)
    host = parts.host

    if request.convert_to_punycode:
        host = format_as_punycode(host)
        if not host:
            return ExtractResult(port=parts.port)

    if is_ipv4_address(host):
        return ExtractResult(domain=host, registered_domain=host, port=parts.port)

    labels = host.split(".")
    num_labels = len(labels)
    suffix_len = match_suffix(labels, trie)

    suffix = ".".join(labels[num_labels - suffix_len:]) if suffix_len else ""
    domain = ""
    subdomain = ""

    if 0 < suffix_len < num_labels and labels[num_labels - suffix_len - 1]:
        domain = labels[num_labels - suffix_len - 1]
        if not request.ignore_subdomains and num_labels - suffix_len >= 2:
            subdomain = host[:len(host) - len(domain) - len(suffix) - 2]

    registered_domain = f"{domain}.{suffix}" if domain and suffix else ""

    return ExtractResult(
        subdomain=subdomain,
        domain=domain,
        suffix=suffix,
        registered_domain=registered_domain,
        port=parts.port
    )


class FastTLD:
    """
    Extractor holding a compiled suffix trie.

    The trie is built once and only read afterwards. ``refresh()`` builds a
    new trie and swaps the reference, so concurrent ``extract()`` calls keep
    using the trie they started with.
    """

    def __init__(
        self,
        suffix_source_path: Optional[str] = None,
        include_private_suffixes: Optional[bool] = None,
        auto_update: Optional[bool] = None
    ):
        """
        Build the extractor.

        Args:
            suffix_source_path: Custom PSL file; the managed cache is used when omitted
            include_private_suffixes: Add PRIVATE section entries to the trie
            auto_update: Download the list when the managed cache is missing or stale

        Raises:
            SourceUnavailableError: If the suffix list cannot be read
        """
        source = suffix_source_path if suffix_source_path is not None else settings.suffix_source_path
        self.include_private_suffixes = (
            settings.include_private_suffixes if include_private_suffixes is None else include_private_suffixes
        )
        self.is_managed = source is None
        self.cache_path = settings.cache_file_path if self.is_managed else None
        self.source_path = self.cache_path if self.is_managed else Path(source)
        self._swap_lock = threading.Lock()

        if self.is_managed:
            self._prepare_managed_cache(settings.auto_update if auto_update is None else auto_update)

        self._trie = self._build_trie()

    def _prepare_managed_cache(self, auto_update: bool) -> None:
        """Download a fresh list if the cache is stale, falling back to the bundled snapshot."""
        max_age = timedelta(days=settings.cache_max_age_days)
        if auto_update and fetcher.is_cache_stale(self.cache_path, max_age):
            try:
                self._download()
            except RefreshFailedError as e:
                logger.warning(f"Could not update suffix list cache: {e}")

        if self.cache_path.exists():
            return
        try:
            fetcher.seed_cache_from_snapshot(self.cache_path)
        except OSError as e:
            logger.warning(f"Cannot write suffix list cache, using bundled snapshot read-only: {e}")
            self.source_path = fetcher.bundled_snapshot_path()

    def _download(self) -> None:
        fetcher.update_cache(
            self.cache_path,
            settings.psl_mirrors,
            timeout=settings.fetch_timeout_seconds
        )
        self.source_path = self.cache_path

    def _build_trie(self) -> TrieNode:
        collections = load_suffix_collections(self.source_path)
        return compile_trie(collections.select(self.include_private_suffixes))

    @property
    def trie(self) -> TrieNode:
        """Currently published trie."""
        return self._trie

    def extract(
        self,
        url: str,
        convert_to_punycode: bool = False,
        ignore_subdomains: bool = False
    ) -> ExtractResult:
        """
        Extract subdomain, domain, suffix and registered domain from ``url``.

        Examples:
            - https://maps.google.com.ua/a/long/path -> maps, google, com.ua
            - 192.168.1.1 -> domain and registered domain 192.168.1.1
            - example.notavalidsuffix -> empty result
        """
        return extract(
            ExtractRequest(
                url=url,
                convert_to_punycode=convert_to_punycode,
                ignore_subdomains=ignore_subdomains
            ),
            self._trie
        )

    def extract_request(self, request: ExtractRequest) -> ExtractResult:
        return extract(request, self._trie)

    def refresh(self) -> None:
        """
        Re-download the Public Suffix List and rebuild the trie.

        Raises:
            RefreshNotSupportedError: If a custom suffix list is in use
            RefreshFailedError: If every mirror fails; the current trie stays active
        """
        if not self.is_managed:
            raise RefreshNotSupportedError(
                "refresh() only applies to the default Public Suffix List, "
                f"not custom list {self.source_path}"
            )

        with self._swap_lock:
            self._download()
            trie = self._build_trie()
            self._trie = trie
        logger.info("Suffix trie rebuilt after refresh")
